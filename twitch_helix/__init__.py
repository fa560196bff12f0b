"""
Twitch Helix Python Client

A client for the Twitch Helix API with sync and async support, app and user
token flows, token validation and automatic refresh-and-retry on auth
failures.
"""

from .client import (
    TwitchClient,
    TwitchAsyncClient,
    create_twitch_client,
    create_async_twitch_client,
)
from .types import (
    TwitchConfig,
    TokenStorage,
    Credentials,
    ClientState,
    ApiError,
    TokenResult,
    User,
)
from .errors import (
    TwitchError,
    ConstructionError,
    AuthFatalError,
    HttpError,
    ValidationError,
    NetworkError,
    is_twitch_error,
    is_fatal_error,
)
from .events import ClientEvent, EventEmitter
from .storage import MemoryStorage

__version__ = "0.1.0"
__all__ = [
    # Clients
    "TwitchClient",
    "TwitchAsyncClient",
    "create_twitch_client",
    "create_async_twitch_client",
    # Types
    "TwitchConfig",
    "TokenStorage",
    "Credentials",
    "ClientState",
    "ApiError",
    "TokenResult",
    "User",
    # Errors
    "TwitchError",
    "ConstructionError",
    "AuthFatalError",
    "HttpError",
    "ValidationError",
    "NetworkError",
    "is_twitch_error",
    "is_fatal_error",
    # Events
    "ClientEvent",
    "EventEmitter",
    # Storage
    "MemoryStorage",
]
