"""
google-chat-connector - Runs Google Chat API operations over a list of items.

  json_validator.py     Strict JSON parsing with an INVALID sentinel.
  message_payload.py    Message bodies, update masks, raw-JSON vs structured input.
  request_builder.py    (resource, operation) -> RequestSpec routing table.
  pagination.py         Fetch-all and single-page strategies for list calls.
  executor.py           Per-item loop with continue-on-fail handling.
  output_aggregator.py  Flattens results into one ordered output collection.
  chat_client.py        requests-based transport for the Chat REST API.
  oauth.py              Google OAuth access token acquisition.
  orchestrator.py       .env configuration, job runs and saved output.

Install with: pip install -e .
"""

from .exceptions import ChatConnectorError, InvalidInput, TransportError
from .json_validator import INVALID, validate_json
from .request_builder import RequestSpec, ResolvedParams, build
from .executor import ChatExecutor
from .output_aggregator import OutputAggregator
from .chat_client import GoogleChatClient
from .oauth import GoogleOAuthClient
from .parameters import JobParameters, load_job
