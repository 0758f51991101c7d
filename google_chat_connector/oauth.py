"""
Google OAuth Client - Access token acquisition for the Google Chat API.

Uses the OAuth 2.0 refresh_token grant. A pre-issued access token can be
supplied instead, in which case no token request is ever made.
"""

import time
import requests
from typing import Optional

from .config.settings import OAUTH_TOKEN_URL
from .exceptions import TransportError


class GoogleOAuthClient:
    """Acquires Google OAuth access tokens for Chat API calls."""

    def __init__(
        self,
        client_id: str = "",
        client_secret: str = "",
        refresh_token: str = "",
        access_token: str = "",
        token_url: str = OAUTH_TOKEN_URL,
        timeout: int = 60,
        debug: bool = False,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.refresh_token = refresh_token
        self.token_url = token_url
        self.timeout = timeout
        self.debug = debug
        self._static = bool(access_token)
        self._token = access_token or None
        self._expires_at = 0

    def get_token(self) -> str:
        """Acquire or return cached access token."""
        if self._static:
            return self._token
        if self._token and time.time() < self._expires_at - 60:
            return self._token

        if self.debug:
            print(f"  Refreshing Google OAuth token")

        payload = {
            "grant_type": "refresh_token",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "refresh_token": self.refresh_token,
        }

        try:
            response = requests.post(self.token_url, data=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            raise TransportError(
                f"Google OAuth token request failed: {e}",
                status_code=e.response.status_code if e.response is not None else None,
            ) from e
        except requests.RequestException as e:
            raise TransportError(f"Google OAuth token request failed: {e}") from e

        try:
            data = response.json()
            token = data["access_token"]
            expires_in = int(data.get("expires_in", 3600))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise TransportError(f"Google OAuth token response is malformed: {e!r}") from e

        self._token = token
        self._expires_at = time.time() + expires_in

        if self.debug:
            print(f"  OAuth token acquired, expires in {expires_in}s")

        return self._token

    @property
    def token(self) -> Optional[str]:
        return self._token
