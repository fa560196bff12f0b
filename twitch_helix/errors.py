"""
Twitch Helix Client Error Classes

Exceptions raised by the sync and async clients. Non-fatal HTTP failures are
also reported to "error" listeners as ApiError records before they are raised.
"""

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from .types import ApiError


class TwitchError(Exception):
    """Base error class for the Twitch Helix client."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 0,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "name": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "status_code": self.status_code,
            "details": self.details,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ConstructionError(TwitchError):
    """Conflicting or missing credentials, or a user-only call in app mode."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, 0, details)


class AuthFatalError(TwitchError):
    """Unrecoverable authentication failure; the session cannot continue."""

    def __init__(
        self,
        message: str,
        status_code: int = 401,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__("AUTH_FATAL", message, status_code, details)


class HttpError(TwitchError):
    """HTTP status >= 400 returned by the API after the retry rules ran."""

    def __init__(self, api_error: "ApiError"):
        super().__init__(
            "HTTP_ERROR",
            api_error.message or f"HTTP {api_error.code}",
            api_error.code,
            api_error.to_dict(),
        )
        self.api_error = api_error


class ValidationError(TwitchError):
    """Invalid input (malformed request options, bad ids, unknown events)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, 0, details)


class NetworkError(TwitchError):
    """Network error (connection issues, timeouts)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__("NETWORK_ERROR", message, 0, details)


def is_twitch_error(error: Any) -> bool:
    """Check if error is a TwitchError."""
    return isinstance(error, TwitchError)


def is_fatal_error(error: Any) -> bool:
    """Check if error ends the session (no refresh or retry can recover it)."""
    return isinstance(error, (ConstructionError, AuthFatalError))
