"""
Twitch Helix Client Token Storage

In-memory token holder used by the clients. Tokens live only as long as the
client instance.
"""

import threading
import time
from typing import Optional


class MemoryStorage:
    """In-memory token storage (default, non-persistent)."""

    def __init__(
        self,
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
    ) -> None:
        self._access_token = access_token
        self._refresh_token = refresh_token
        self._expires_at: float = 0
        self._lock = threading.Lock()

    def get_access_token(self) -> Optional[str]:
        """Get the stored access token, or None once it has expired."""
        with self._lock:
            if self._expires_at > 0 and time.time() >= self._expires_at:
                return None
            return self._access_token

    def get_refresh_token(self) -> Optional[str]:
        """Get the stored refresh token."""
        with self._lock:
            return self._refresh_token

    def set_tokens(
        self,
        access_token: str,
        refresh_token: Optional[str] = None,
        expires_in: Optional[int] = None,
    ) -> None:
        """Store tokens. A missing refresh token keeps the current one."""
        with self._lock:
            self._access_token = access_token
            if refresh_token:
                self._refresh_token = refresh_token
            self._expires_at = time.time() + expires_in if expires_in else 0

    def clear_tokens(self) -> None:
        """Clear all stored tokens."""
        with self._lock:
            self._access_token = None
            self._refresh_token = None
            self._expires_at = 0

    def get_expires_at(self) -> float:
        """Get token expiration timestamp (0 when unknown)."""
        with self._lock:
            return self._expires_at
