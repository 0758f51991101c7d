"""
Google Chat API Client - Handles all REST endpoint interactions.

Every call goes through request(), which:
  - refreshes the Bearer token via the OAuth client when needed
  - drops an empty body / empty query string
  - decodes JSON responses (an empty body becomes {})
  - returns non-JSON bodies (media downloads) as {"mimeType", "data"} with
    base64-encoded content
  - raises TransportError for HTTP errors, timeouts, connection failures and
    JSON bodies that do not parse

Retries and rate limiting are not handled here.
"""

import base64
import requests
from typing import Any, Dict, List, Optional

from .config.settings import API_BASE_URL
from .exceptions import TransportError
from .oauth import GoogleOAuthClient
from .pagination import fetch_all_pages
from .request_builder import RequestSpec


class GoogleChatClient:
    """Client for the Google Chat REST API."""

    def __init__(
        self,
        auth_client: GoogleOAuthClient,
        api_base_url: str = API_BASE_URL,
        timeout: int = 60,
        debug: bool = False,
    ):
        self.api_base_url = api_base_url.rstrip("/")
        self._auth = auth_client
        self.timeout = timeout
        self.debug = debug
        self._token = None
        self._session = requests.Session()

    def authenticate(self) -> str:
        """Acquire an access token and set the Bearer header on the session."""
        self._token = self._auth.get_token()
        self._session.headers.update({"Authorization": f"Bearer {self._token}"})

        if self.debug:
            print(f"  Google Chat session authenticated")

        return self._token

    def request(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        query: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Perform one API call and return the decoded response.

        Raises:
            TransportError: If the call fails for any reason.
        """
        self._ensure_auth()
        url = f"{self.api_base_url}{path}"

        kwargs = {"timeout": self.timeout}
        if body:
            kwargs["json"] = body
        if query:
            kwargs["params"] = query

        if self.debug:
            print(f"  {method} {path}" + (f" {query}" if query else ""))

        try:
            response = self._session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise TransportError(f"Google Chat request failed: {e}") from e

        if not response.ok:
            raise TransportError(_error_message(response), status_code=response.status_code)

        return _decode(response)

    def request_all_pages(
        self,
        list_key: str,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        query: Optional[Dict[str, Any]] = None,
    ) -> List[Any]:
        """Follow nextPageToken and return every item under list_key."""
        spec = RequestSpec(method, path, body=body, query=query, list_key=list_key)
        return fetch_all_pages(self, spec, self.debug)

    def _ensure_auth(self):
        """Ensure we have a valid token, refreshing if needed."""
        token = self._auth.get_token()
        if token != self._token:
            self._token = token
            self._session.headers.update({"Authorization": f"Bearer {self._token}"})

    @property
    def token(self) -> Optional[str]:
        return self._token


def _error_message(response) -> str:
    """Use the API's error.message when the body carries one."""
    detail = response.reason or ""
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and isinstance(data.get("error"), dict):
        detail = data["error"].get("message") or detail
    return f"Google Chat API error {response.status_code}: {detail}"


def _decode(response) -> Any:
    if not response.content:
        return {}
    content_type = response.headers.get("Content-Type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"Google Chat API returned invalid JSON: {e}",
                status_code=response.status_code,
            ) from e
    return {
        "mimeType": content_type.split(";")[0].strip() or "application/octet-stream",
        "data": base64.b64encode(response.content).decode("ascii"),
    }
