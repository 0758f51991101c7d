"""
Settings and defaults for the Google Chat connector.
"""

PROVIDER_NAME = "Google_Chat"

API_BASE_URL = "https://chat.googleapis.com"

OAUTH_TOKEN_URL = "https://oauth2.googleapis.com/token"

DEFAULT_SETTINGS = {
    "PROVIDER_NAME": PROVIDER_NAME,
    "API_BASE_URL": API_BASE_URL,
    "OAUTH_TOKEN_URL": OAUTH_TOKEN_URL,
    "REQUEST_TIMEOUT": 60,
    "CONTINUE_ON_FAIL": False,
    "OUTPUT_DIR": "./output",
    "OUTPUT_RETENTION_DAYS": 30,
    "SAVE_JSON": True,
    "DEBUG": False,
}

# Values used when a job file does not set a parameter. Names not listed
# here (and not set by the job) cannot be resolved.
PARAMETER_DEFAULTS = {
    "resourceName": "",
    "spaceName": "",
    "memberName": "",
    "messageName": "",
    "attachmentName": "",
    "threadKey": "",
    "returnAll": False,
    "additionalFields": {},
    "jsonParameterMessage": False,
    "messageJson": "",
    "messageUi": {},
    "updateMask": [],
    "jsonParameterUpdateOptions": False,
    "updateOptionsJson": "",
    "textUi": "",
}

PROXY_ENV_VARS = [
    "HTTP_PROXY", "HTTPS_PROXY", "http_proxy", "https_proxy",
    "NO_PROXY", "no_proxy",
]
