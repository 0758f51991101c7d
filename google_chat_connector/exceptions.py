"""
Exceptions raised by the Google Chat connector.

  InvalidInput    A user-supplied parameter failed a precondition before any
                  request was made (empty update mask, empty text, bad JSON).
  TransportError  The remote call failed (network, HTTP status, auth).

Both are caught per item by the executor and either recorded as
{"error": message} or re-raised, depending on continue-on-fail.
"""

from typing import Optional


class ChatConnectorError(Exception):
    """Base class for connector errors."""


class InvalidInput(ChatConnectorError):
    """Raised when item parameters are invalid. Never retried."""


class TransportError(ChatConnectorError):
    """Raised when a Google Chat API call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
