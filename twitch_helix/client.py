"""
Twitch Helix Client

Synchronous and asynchronous clients for the Twitch Helix API. Both manage
the OAuth token lifecycle (app access tokens through the client-credentials
grant, user tokens renewed through the refresh-token grant) and retry a
failed request once after refreshing an invalid token.
"""

import logging
import re
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple, Union

import httpx

from .errors import (
    AuthFatalError,
    ConstructionError,
    HttpError,
    NetworkError,
    ValidationError,
)
from .events import ClientEvent, EventEmitter, EventName, Listener
from .query import (
    Identifier,
    QueryPairs,
    build_query,
    encode_options,
    identity_pairs,
)
from .storage import MemoryStorage
from .types import (
    ApiError,
    ClientState,
    Credentials,
    TokenResult,
    TwitchConfig,
    User,
)


logger = logging.getLogger("twitch_helix")

# Error messages that mean the token lacks a scope; refreshing cannot fix that
TOKEN_SCOPE_REGEX = re.compile(r"\bValid OAuth token with", re.IGNORECASE)
MISSING_TOKEN_MESSAGE = "missing authorization token"

# A failed request is sent again at most this many times
MAX_REQUEST_RETRIES = 1

CUSTOM_REQUEST_OPTIONS = frozenset(
    {"method", "params", "json", "data", "content", "headers", "cookies", "timeout"}
)

ResponseCallback = Callable[[Any, httpx.Response], Any]
Options = Optional[Mapping[str, Any]]


class _BaseClient:
    """State, validation and request building shared by both clients."""

    def __init__(self, config: TwitchConfig) -> None:
        self._validate_config(config)

        self._client_id = config.client_id
        self._client_secret = config.client_secret
        self._is_app = config.is_app
        self._base_url = config.base_url.rstrip("/")
        self._auth_url = config.auth_url.rstrip("/")
        self._timeout = config.timeout
        self._max_refresh_attempts = config.max_refresh_attempts
        self._storage = config.storage if config.storage else MemoryStorage()
        self._debug = config.debug
        self._custom_headers = config.headers or {}

        if config.access_token:
            self._storage.set_tokens(config.access_token, config.refresh_token)

        # State
        self._state = ClientState.UNINITIALIZED
        self._ready_emitted = False
        self._refresh_attempts = 0
        self._user: Optional[User] = None
        self._events = EventEmitter()

    def _validate_config(self, config: TwitchConfig) -> None:
        """Validate configuration."""
        if not config.client_id:
            raise ConstructionError("client_id is required")
        if config.is_app and config.access_token:
            raise ConstructionError(
                "Option is_app is set while an access_token is provided. "
                "Choose one method of authentication, do not use both."
            )
        if config.is_app and not config.client_secret:
            raise ConstructionError("client_secret is required to fetch an app access token")
        if not config.is_app and not config.access_token:
            stored = config.storage.get_access_token() if config.storage else None
            if not stored:
                raise ConstructionError("access_token is required unless is_app is set")
        if config.max_refresh_attempts < 0:
            raise ConstructionError("max_refresh_attempts must not be negative")

    def _log(self, message: str, *args: Any) -> None:
        """Log debug message."""
        if self._debug:
            logger.debug(f"[Twitch] {message}", *args)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def is_app(self) -> bool:
        return self._is_app

    @property
    def access_token(self) -> Optional[str]:
        return self._storage.get_access_token()

    @property
    def refresh_token(self) -> Optional[str]:
        return self._storage.get_refresh_token()

    @property
    def credentials(self) -> Credentials:
        """Snapshot of the credentials currently in use."""
        return Credentials(
            client_id=self._client_id,
            client_secret=self._client_secret,
            access_token=self.access_token,
            refresh_token=self.refresh_token,
            is_app=self._is_app,
        )

    @property
    def state(self) -> ClientState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is ClientState.READY

    @property
    def user(self) -> Optional[User]:
        """Authenticated user, once get_current_user() has succeeded."""
        return self._user

    @property
    def refresh_attempts(self) -> int:
        return self._refresh_attempts

    # =========================================================================
    # Events
    # =========================================================================

    def on(self, event: EventName, listener: Optional[Listener] = None) -> Any:
        """Register a listener for "ready", "refresh" or "error" (or use as a decorator)."""
        return self._events.on(event, listener)

    def once(self, event: EventName, listener: Listener) -> Listener:
        return self._events.once(event, listener)

    def off(self, event: EventName, listener: Listener) -> None:
        self._events.off(event, listener)

    def _mark_ready(self) -> None:
        self._state = ClientState.READY
        if self._ready_emitted:
            return
        self._ready_emitted = True
        self._log("Client ready (app=%s)", self._is_app)
        self._events.emit(ClientEvent.READY)

    # =========================================================================
    # Request building
    # =========================================================================

    def _api_url(self, endpoint: str) -> str:
        if not endpoint.startswith("/"):
            endpoint = "/" + endpoint
        return f"{self._base_url}{endpoint}"

    def _api_headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {
            "Client-ID": self._client_id,
            **self._custom_headers,
        }
        access_token = self._storage.get_access_token()
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    def _validate_headers(self, access_token: str) -> Dict[str, str]:
        return {"Authorization": f"OAuth {access_token}"}

    def _token_request_data(self) -> Dict[str, str]:
        """Form body for a new app token or a refreshed user token."""
        if self._is_app:
            return {
                "client_id": self._client_id,
                "client_secret": self._client_secret or "",
                "grant_type": "client_credentials",
            }

        refresh_token = self._storage.get_refresh_token()
        if not refresh_token:
            logger.error("Cannot refresh the user token: no refresh token available")
            raise AuthFatalError("No refresh token available")
        if not self._client_secret:
            logger.error("Cannot refresh the user token: no client secret configured")
            raise AuthFatalError("client_secret is required to refresh a user token")
        return {
            "client_id": self._client_id,
            "client_secret": self._client_secret,
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
        }

    def _prepare_custom_request(
        self, endpoint: Any, options: Any
    ) -> Tuple[str, str, Dict[str, Any]]:
        if not isinstance(endpoint, str) or not endpoint:
            raise ValidationError("No endpoint was provided, cannot perform custom request.")
        if options is None:
            options = {}
        if not isinstance(options, Mapping):
            raise ValidationError(
                "custom_request received options that are not a mapping.",
                {"received": type(options).__name__},
            )
        unknown = sorted(set(options) - CUSTOM_REQUEST_OPTIONS)
        if unknown:
            raise ValidationError(
                f"Unsupported custom_request options: {', '.join(map(str, unknown))}",
                {"allowed": sorted(CUSTOM_REQUEST_OPTIONS)},
            )

        kwargs = dict(options)
        method = str(kwargs.pop("method", "GET")).upper()
        kwargs["headers"] = {**self._api_headers(), **(kwargs.get("headers") or {})}
        return self._api_url(endpoint), method, kwargs

    @staticmethod
    def _merge_options(options: Options, params: Dict[str, Any]) -> Dict[str, Any]:
        if options is not None and not isinstance(options, Mapping):
            raise ValidationError(
                "Request options must be a mapping",
                {"received": type(options).__name__},
            )
        merged = dict(options or {})
        merged.update(params)
        return merged

    def _options_endpoint(self, path: str, options: Options, params: Dict[str, Any]) -> str:
        return path + build_query(encode_options(self._merge_options(options, params)))

    def _users_endpoint(self, ids: Union[Identifier, Sequence[Identifier]]) -> str:
        return "/users" + build_query(identity_pairs(ids))

    def _streams_endpoint(self, options: Options, params: Dict[str, Any]) -> str:
        merged = self._merge_options(options, params)
        channels = merged.pop("channels", None)
        pairs = encode_options(merged)
        if channels:
            pairs.extend(identity_pairs(channels, id_key="user_id", login_key="user_login"))
        return "/streams" + build_query(pairs)

    def _subs_endpoint(self, broadcaster_id: Identifier) -> str:
        return "/subscriptions" + build_query([("broadcaster_id", str(broadcaster_id))])

    def _sub_status_endpoint(
        self, broadcaster_id: str, user_ids: Union[Identifier, Sequence[Identifier]]
    ) -> str:
        if isinstance(user_ids, (str, int)):
            user_ids = [user_ids]
        pairs: QueryPairs = [("broadcaster_id", broadcaster_id)]
        pairs.extend(("user_id", str(user_id)) for user_id in user_ids)
        return "/subscriptions" + build_query(pairs)

    def _require_user_mode(self) -> None:
        if self._is_app:
            raise ConstructionError(
                "Cannot get the current user when using an application token. "
                "Use access_token and refresh_token instead."
            )

    # =========================================================================
    # Response handling
    # =========================================================================

    def _parse_body(self, response: httpx.Response) -> Any:
        """Parse a JSON body; anything else parses to an empty dict."""
        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            return {}
        try:
            return response.json()
        except ValueError:
            logger.warning("Invalid JSON body from %s", response.request.url)
            return {}

    def _report_failure(
        self, method: str, url: str, response: httpx.Response, body: Any
    ) -> HttpError:
        """Log and emit a failed call. Returns the error to raise."""
        api_error = ApiError.from_response(
            response.status_code,
            response.reason_phrase,
            body if isinstance(body, dict) else {},
        )
        logger.error(
            "%s request to %s failed: %s %s: %s",
            method.capitalize(),
            url,
            api_error.code,
            api_error.status_message,
            api_error.message,
        )
        self._events.emit(ClientEvent.ERROR, api_error)

        if TOKEN_SCOPE_REGEX.search(api_error.message):
            raise AuthFatalError(api_error.message, api_error.code, api_error.to_dict())

        return HttpError(api_error)

    @staticmethod
    def _should_refresh(method: str, status_code: int) -> bool:
        # POST only retries on 401; GET retries on any failure
        if method == "GET":
            return True
        return status_code == 401

    def _validation_result(self, response: httpx.Response) -> bool:
        body = self._parse_body(response)
        message = body.get("message") if isinstance(body, dict) else None
        if message == MISSING_TOKEN_MESSAGE:
            logger.error("Token validation failed: %s", message)
            raise AuthFatalError(message)

        valid = response.status_code == 200
        self._log("Token validation returned %s (valid=%s)", response.status_code, valid)
        return valid

    def _token_result(self, response: httpx.Response, grant_type: str) -> TokenResult:
        body = self._parse_body(response)
        if not isinstance(body, dict):
            body = {}

        if not response.is_success or not body.get("access_token"):
            message = body.get("message") or f"HTTP {response.status_code}"
            logger.error(
                "Token request (%s) failed: %s %s: %s",
                grant_type,
                response.status_code,
                response.reason_phrase,
                message,
            )
            raise AuthFatalError(
                f"Could not obtain an access token: {message}",
                response.status_code,
                {"grant_type": grant_type},
            )

        return TokenResult.from_dict(body)

    def _check_refresh_budget(self) -> None:
        if self._refresh_attempts >= self._max_refresh_attempts:
            logger.error(
                "Refresh attempts have failed (%s attempts). Giving up on this session.",
                self._refresh_attempts,
            )
            raise AuthFatalError(
                "Refresh attempts have failed. Use the previously logged information as help.",
                details={"refresh_attempts": self._refresh_attempts},
            )

    def _store_refreshed(self, token: TokenResult) -> None:
        self._storage.set_tokens(token.access_token, token.refresh_token, token.expires_in)
        self._refresh_attempts += 1
        self._log("Access token refreshed (attempt %s)", self._refresh_attempts)
        self._events.emit(ClientEvent.REFRESH, token)

    def _cache_user(self, body: Any) -> None:
        data = body.get("data") if isinstance(body, dict) else None
        if data:
            self._user = User.from_dict(data[0])

    @staticmethod
    def _complete(body: Any, response: httpx.Response, callback: Optional[ResponseCallback]) -> Any:
        if callback:
            callback(body, response)
        return body


class TwitchClient(_BaseClient):
    """
    Twitch Helix Client - synchronous entry point.

    Construction does no network I/O; call connect() (or use the client as a
    context manager) to fetch the app token or the current user profile and
    fire the "ready" event.
    """

    def __init__(self, config: TwitchConfig) -> None:
        """Initialize the client."""
        super().__init__(config)

        # HTTP client
        self._http_client = httpx.Client(timeout=self._timeout)

        self._log("TwitchClient initialized (app=%s)", self._is_app)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def connect(self) -> "TwitchClient":
        """
        Run the initial setup and fire "ready".

        In app mode this fetches an app access token; otherwise it loads the
        profile of the user the access token belongs to.
        """
        if self.is_ready:
            return self

        try:
            if self._is_app:
                self._state = ClientState.AWAITING_TOKEN
                token = self._request_token()
                self._storage.set_tokens(token.access_token, token.refresh_token, token.expires_in)
            else:
                self._state = ClientState.AWAITING_USER
                self.get_current_user()
        except Exception:
            self._state = ClientState.UNINITIALIZED
            raise

        self._mark_ready()
        return self

    def validate_token(self) -> bool:
        """Check the current access token against the validation endpoint."""
        access_token = self._storage.get_access_token()
        if not access_token:
            self._log("No access token held, treating it as invalid")
            return False

        response = self._send(
            "GET",
            f"{self._auth_url}/validate",
            headers=self._validate_headers(access_token),
        )
        return self._validation_result(response)

    def refresh(self) -> bool:
        """
        Replace the access token if it is no longer valid.

        Returns:
            True if a new token was stored, False if the current one is valid

        Raises:
            AuthFatalError: If the refresh budget is spent or the token
                endpoint rejects the request
        """
        if self.validate_token():
            self._log("Access token still valid, not refreshing")
            return False

        self._check_refresh_budget()
        token = self._request_token()
        self._store_refreshed(token)
        return True

    def _request_token(self) -> TokenResult:
        data = self._token_request_data()
        response = self._send("POST", f"{self._auth_url}/token", data=data)
        return self._token_result(response, data["grant_type"])

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return self._http_client.request(method, url, **kwargs)
        except httpx.TimeoutException:
            logger.error("%s request to %s timed out", method.capitalize(), url)
            raise NetworkError("Request timeout", {"timeout": self._timeout, "url": url})
        except httpx.RequestError as e:
            logger.error("%s request to %s failed: %s", method.capitalize(), url, e)
            raise NetworkError(str(e), {"url": url})

    def _dispatch(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        callback: Optional[ResponseCallback] = None,
    ) -> Any:
        url = self._api_url(endpoint)
        attempt = 0

        while True:
            response = self._send(method, url, headers=self._api_headers(), json=data)
            body = self._parse_body(response)

            if response.status_code < 400:
                return self._complete(body, response, callback)

            error = self._report_failure(method, url, response, body)
            if attempt >= MAX_REQUEST_RETRIES or not self._should_refresh(method, response.status_code):
                raise error
            if not self.refresh():
                raise error

            attempt += 1
            self._log("Retrying %s %s with a refreshed token", method, url)

    def get(self, endpoint: str, callback: Optional[ResponseCallback] = None) -> Any:
        """
        Send a GET request to an API endpoint (query string included).

        Any failure triggers one validate/refresh/retry cycle.
        """
        return self._dispatch("GET", endpoint, callback=callback)

    def post(
        self,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        callback: Optional[ResponseCallback] = None,
    ) -> Any:
        """Send a JSON POST request. Only a 401 triggers a refresh and retry."""
        return self._dispatch("POST", endpoint, data, callback)

    def custom_request(
        self,
        endpoint: str,
        options: Options = None,
        callback: Optional[ResponseCallback] = None,
    ) -> Any:
        """
        Call an endpoint that has no dedicated method.

        Args:
            endpoint: Path including query parameters, e.g. "/games?id=493057"
            options: httpx request options (method, params, json, data,
                content, headers, cookies, timeout)
            callback: Called with (body, response)

        Failures are logged but neither refreshed nor raised.
        """
        url, method, kwargs = self._prepare_custom_request(endpoint, options)
        response = self._send(method, url, **kwargs)
        body = self._parse_body(response)

        if response.status_code >= 400:
            message = body.get("message") if isinstance(body, dict) else None
            logger.warning(
                "Custom request to %s failed: %s %s: %s",
                url,
                response.status_code,
                response.reason_phrase,
                message,
            )

        return self._complete(body, response, callback)

    # =========================================================================
    # Endpoints
    # =========================================================================

    def get_bits_leaderboard(
        self, options: Options = None, callback: Optional[ResponseCallback] = None, **params: Any
    ) -> Any:
        """Get the bits leaderboard (count, period, started_at, user_id)."""
        return self.get(self._options_endpoint("/bits/leaderboard", options, params), callback)

    def get_users(
        self,
        ids: Union[Identifier, Sequence[Identifier]],
        callback: Optional[ResponseCallback] = None,
    ) -> Any:
        """Get users by id and/or login name. Numeric strings are sent as ids."""
        return self.get(self._users_endpoint(ids), callback)

    def get_current_user(self, callback: Optional[ResponseCallback] = None) -> Any:
        """Get the profile of the user the access token belongs to."""
        self._require_user_mode()
        body = self.get("/users", callback)
        self._cache_user(body)
        return body

    def get_follows(
        self, options: Options = None, callback: Optional[ResponseCallback] = None, **params: Any
    ) -> Any:
        """Get follows from (from_id) or to (to_id) a channel."""
        return self.get(self._options_endpoint("/users/follows", options, params), callback)

    def get_subs_by_id(
        self, broadcaster_id: Identifier, callback: Optional[ResponseCallback] = None
    ) -> Any:
        """Get the subscribers of a broadcaster."""
        return self.get(self._subs_endpoint(broadcaster_id), callback)

    def get_users_sub_status(
        self,
        user_ids: Union[Identifier, Sequence[Identifier]],
        callback: Optional[ResponseCallback] = None,
    ) -> Any:
        """Check whether users are subscribed to the authenticated broadcaster."""
        self._require_user_mode()
        if self._user is None:
            self.get_current_user()
        if self._user is None:
            raise AuthFatalError("Could not resolve the authenticated user", 0)
        return self.get(self._sub_status_endpoint(self._user.id, user_ids), callback)

    def get_streams(
        self, options: Options = None, callback: Optional[ResponseCallback] = None, **params: Any
    ) -> Any:
        """
        Get live streams.

        Besides the Helix parameters (after, before, first, game_id, ...),
        accepts "channels": a user id/login or a list of them.
        """
        return self.get(self._streams_endpoint(options, params), callback)

    def close(self) -> None:
        """Close the HTTP client."""
        self._http_client.close()

    def __enter__(self) -> "TwitchClient":
        try:
            return self.connect()
        except Exception:
            self.close()
            raise

    def __exit__(self, *args: Any) -> None:
        self.close()


# =============================================================================
# Async Client
# =============================================================================

class TwitchAsyncClient(_BaseClient):
    """
    Twitch Helix Async Client - asynchronous entry point.

    Same surface as TwitchClient with coroutine methods. Listeners are still
    called synchronously from inside the awaiting call.
    """

    def __init__(self, config: TwitchConfig) -> None:
        """Initialize the async client."""
        super().__init__(config)

        # HTTP client (created lazily)
        self._http_client: Optional[httpx.AsyncClient] = None

        self._log("TwitchAsyncClient initialized (app=%s)", self._is_app)

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
        return self._http_client

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def connect(self) -> "TwitchAsyncClient":
        """Run the initial setup and fire "ready"."""
        if self.is_ready:
            return self

        try:
            if self._is_app:
                self._state = ClientState.AWAITING_TOKEN
                token = await self._request_token()
                self._storage.set_tokens(token.access_token, token.refresh_token, token.expires_in)
            else:
                self._state = ClientState.AWAITING_USER
                await self.get_current_user()
        except Exception:
            self._state = ClientState.UNINITIALIZED
            raise

        self._mark_ready()
        return self

    async def validate_token(self) -> bool:
        """Check the current access token against the validation endpoint."""
        access_token = self._storage.get_access_token()
        if not access_token:
            self._log("No access token held, treating it as invalid")
            return False

        response = await self._send(
            "GET",
            f"{self._auth_url}/validate",
            headers=self._validate_headers(access_token),
        )
        return self._validation_result(response)

    async def refresh(self) -> bool:
        """Replace the access token if it is no longer valid."""
        if await self.validate_token():
            self._log("Access token still valid, not refreshing")
            return False

        self._check_refresh_budget()
        token = await self._request_token()
        self._store_refreshed(token)
        return True

    async def _request_token(self) -> TokenResult:
        data = self._token_request_data()
        response = await self._send("POST", f"{self._auth_url}/token", data=data)
        return self._token_result(response, data["grant_type"])

    # =========================================================================
    # Dispatch
    # =========================================================================

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            client = self._get_client()
            return await client.request(method, url, **kwargs)
        except httpx.TimeoutException:
            logger.error("%s request to %s timed out", method.capitalize(), url)
            raise NetworkError("Request timeout", {"timeout": self._timeout, "url": url})
        except httpx.RequestError as e:
            logger.error("%s request to %s failed: %s", method.capitalize(), url, e)
            raise NetworkError(str(e), {"url": url})

    async def _dispatch(
        self,
        method: str,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        callback: Optional[ResponseCallback] = None,
    ) -> Any:
        url = self._api_url(endpoint)
        attempt = 0

        while True:
            response = await self._send(method, url, headers=self._api_headers(), json=data)
            body = self._parse_body(response)

            if response.status_code < 400:
                return self._complete(body, response, callback)

            error = self._report_failure(method, url, response, body)
            if attempt >= MAX_REQUEST_RETRIES or not self._should_refresh(method, response.status_code):
                raise error
            if not await self.refresh():
                raise error

            attempt += 1
            self._log("Retrying %s %s with a refreshed token", method, url)

    async def get(self, endpoint: str, callback: Optional[ResponseCallback] = None) -> Any:
        """Send a GET request to an API endpoint (query string included)."""
        return await self._dispatch("GET", endpoint, callback=callback)

    async def post(
        self,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        callback: Optional[ResponseCallback] = None,
    ) -> Any:
        """Send a JSON POST request. Only a 401 triggers a refresh and retry."""
        return await self._dispatch("POST", endpoint, data, callback)

    async def custom_request(
        self,
        endpoint: str,
        options: Options = None,
        callback: Optional[ResponseCallback] = None,
    ) -> Any:
        """Call an endpoint that has no dedicated method. Failures are only logged."""
        url, method, kwargs = self._prepare_custom_request(endpoint, options)
        response = await self._send(method, url, **kwargs)
        body = self._parse_body(response)

        if response.status_code >= 400:
            message = body.get("message") if isinstance(body, dict) else None
            logger.warning(
                "Custom request to %s failed: %s %s: %s",
                url,
                response.status_code,
                response.reason_phrase,
                message,
            )

        return self._complete(body, response, callback)

    # =========================================================================
    # Endpoints
    # =========================================================================

    async def get_bits_leaderboard(
        self, options: Options = None, callback: Optional[ResponseCallback] = None, **params: Any
    ) -> Any:
        """Get the bits leaderboard."""
        return await self.get(self._options_endpoint("/bits/leaderboard", options, params), callback)

    async def get_users(
        self,
        ids: Union[Identifier, Sequence[Identifier]],
        callback: Optional[ResponseCallback] = None,
    ) -> Any:
        """Get users by id and/or login name."""
        return await self.get(self._users_endpoint(ids), callback)

    async def get_current_user(self, callback: Optional[ResponseCallback] = None) -> Any:
        """Get the profile of the user the access token belongs to."""
        self._require_user_mode()
        body = await self.get("/users", callback)
        self._cache_user(body)
        return body

    async def get_follows(
        self, options: Options = None, callback: Optional[ResponseCallback] = None, **params: Any
    ) -> Any:
        return await self.get(self._options_endpoint("/users/follows", options, params), callback)

    async def get_subs_by_id(
        self, broadcaster_id: Identifier, callback: Optional[ResponseCallback] = None
    ) -> Any:
        return await self.get(self._subs_endpoint(broadcaster_id), callback)

    async def get_users_sub_status(
        self,
        user_ids: Union[Identifier, Sequence[Identifier]],
        callback: Optional[ResponseCallback] = None,
    ) -> Any:
        """Check whether users are subscribed to the authenticated broadcaster."""
        self._require_user_mode()
        if self._user is None:
            await self.get_current_user()
        if self._user is None:
            raise AuthFatalError("Could not resolve the authenticated user", 0)
        return await self.get(self._sub_status_endpoint(self._user.id, user_ids), callback)

    async def get_streams(
        self, options: Options = None, callback: Optional[ResponseCallback] = None, **params: Any
    ) -> Any:
        """Get live streams; "channels" takes user ids and/or logins."""
        return await self.get(self._streams_endpoint(options, params), callback)

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "TwitchAsyncClient":
        try:
            return await self.connect()
        except Exception:
            await self.close()
            raise

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


# =============================================================================
# Factory Functions
# =============================================================================

def create_twitch_client(config: TwitchConfig) -> TwitchClient:
    """Create a new synchronous Twitch client."""
    return TwitchClient(config)


def create_async_twitch_client(config: TwitchConfig) -> TwitchAsyncClient:
    """Create a new asynchronous Twitch client."""
    return TwitchAsyncClient(config)
