"""
Twitch Helix Client Type Definitions

Configuration, credential snapshot and the records returned by the API.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol, Union, runtime_checkable


DEFAULT_BASE_URL = "https://api.twitch.tv/helix"
DEFAULT_AUTH_URL = "https://id.twitch.tv/oauth2"

ENV_CLIENT_ID = "TWITCH_CLIENT_ID"
ENV_CLIENT_SECRET = "TWITCH_CLIENT_SECRET"
ENV_ACCESS_TOKEN = "TWITCH_ACCESS_TOKEN"
ENV_REFRESH_TOKEN = "TWITCH_REFRESH_TOKEN"
ENV_IS_APP = "TWITCH_IS_APP"


@runtime_checkable
class TokenStorage(Protocol):
    """Token storage interface for custom implementations."""

    def get_access_token(self) -> Optional[str]:
        """Get the stored access token."""
        ...

    def get_refresh_token(self) -> Optional[str]:
        """Get the stored refresh token."""
        ...

    def set_tokens(
        self,
        access_token: str,
        refresh_token: Optional[str] = None,
        expires_in: Optional[int] = None,
    ) -> None:
        """Store tokens. A missing refresh token keeps the current one."""
        ...

    def clear_tokens(self) -> None:
        """Clear all stored tokens."""
        ...


class ClientState(str, Enum):
    """Lifecycle of a client instance."""
    UNINITIALIZED = "uninitialized"
    AWAITING_TOKEN = "awaiting_token"
    AWAITING_USER = "awaiting_user"
    READY = "ready"


@dataclass
class TwitchConfig:
    """Client configuration."""

    # Application client id (required)
    client_id: str = ""
    # Application client secret (required in app mode and for refreshes)
    client_secret: Optional[str] = None
    # User access token; must not be set in app mode
    access_token: Optional[str] = None
    # User refresh token
    refresh_token: Optional[str] = None
    # Fetch an app access token instead of using a user token
    is_app: bool = False
    # Helix API base URL
    base_url: str = DEFAULT_BASE_URL
    # OAuth host used for token and validation requests
    auth_url: str = DEFAULT_AUTH_URL
    # Request timeout in seconds
    timeout: float = 30.0
    # Consecutive refreshes allowed before the session is treated as dead
    max_refresh_attempts: int = 2
    # Custom storage for tokens (default: None, uses MemoryStorage)
    storage: Optional[TokenStorage] = None
    # Enable debug logging
    debug: bool = False
    # Extra headers sent with every API request
    headers: Optional[Dict[str, str]] = None

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None, **overrides: Any) -> "TwitchConfig":
        """
        Build a config from TWITCH_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            **overrides: Field values that take precedence over the environment
        """
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {
            "client_id": env.get(ENV_CLIENT_ID, ""),
            "client_secret": env.get(ENV_CLIENT_SECRET) or None,
            "access_token": env.get(ENV_ACCESS_TOKEN) or None,
            "refresh_token": env.get(ENV_REFRESH_TOKEN) or None,
            "is_app": env.get(ENV_IS_APP, "").strip().lower() in ("1", "true", "yes"),
        }
        values.update(overrides)
        return cls(**values)


@dataclass
class Credentials:
    """Snapshot of the credentials a client is currently using."""

    client_id: str
    client_secret: Optional[str]
    access_token: Optional[str]
    refresh_token: Optional[str]
    is_app: bool


@dataclass
class ApiError:
    """Failed API call as reported to "error" listeners."""

    code: int
    status_message: str
    message: str
    type: str = "http"

    @classmethod
    def from_response(
        cls, status_code: int, status_message: str, body: Dict[str, Any]
    ) -> "ApiError":
        """Create from a failed response and its parsed body."""
        message = body.get("message") or body.get("error") or status_message
        return cls(
            code=status_code,
            status_message=status_message,
            message=str(message),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "code": self.code,
            "status_message": self.status_message,
            "message": self.message,
        }


@dataclass
class TokenResult:
    """Token issued by the OAuth token endpoint."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    scope: List[str] = field(default_factory=list)
    token_type: str = "bearer"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenResult":
        """Create from dictionary."""
        scope: Union[str, List[str], None] = data.get("scope")
        if isinstance(scope, str):
            scope = scope.split()
        return cls(
            access_token=data.get("access_token", ""),
            refresh_token=data.get("refresh_token"),
            expires_in=data.get("expires_in"),
            scope=list(scope or []),
            token_type=data.get("token_type", "bearer"),
        )


@dataclass
class User:
    """Helix user profile."""

    id: str
    login: str
    display_name: str = ""
    type: str = ""
    broadcaster_type: str = ""
    description: str = ""
    profile_image_url: str = ""
    offline_image_url: str = ""
    view_count: int = 0
    email: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Create from one entry of a /users response."""
        return cls(
            id=str(data["id"]),
            login=data.get("login", ""),
            display_name=data.get("display_name", ""),
            type=data.get("type", ""),
            broadcaster_type=data.get("broadcaster_type", ""),
            description=data.get("description", ""),
            profile_image_url=data.get("profile_image_url", ""),
            offline_image_url=data.get("offline_image_url", ""),
            view_count=data.get("view_count", 0),
            email=data.get("email"),
            created_at=data.get("created_at"),
        )
