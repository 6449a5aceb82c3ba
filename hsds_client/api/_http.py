"""
HTTP transports for the HSDS API.

Two transports share one response-handling core:

- HTTPClient: synchronous, on a pooled requests.Session
- AsyncHTTPClient: asynchronous, on a pooled httpx.AsyncClient

Both make exactly one attempt per call and map failures onto the
exceptions in hsds_client.exceptions.
"""

import json
import logging
import threading
from typing import Optional, Dict, Any, Callable, Union

import httpx
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .. import __version__
from ..auth import Authentication, auth_from_config
from ..config import HsdsConfig, get_config
from ..exceptions import (
    HsdsError,
    APIError,
    AuthenticationError,
    ConflictError,
    DecodeError,
    InvalidParameterError,
    ObjectNotFoundError,
    PermissionDeniedError,
    ServerError,
    TransportError,
)

logger = logging.getLogger(__name__)

# Turns the decoded JSON body into a model
Parser = Callable[[Any], Any]


class BaseHTTPClient:
    """
    State and response handling shared by the sync and async transports.

    Holds only read-only configuration (endpoint, auth, timeouts), so one
    instance can serve concurrent requests.
    """

    def __init__(
        self,
        config: Optional[HsdsConfig] = None,
        auth: Optional[Authentication] = None,
    ):
        self.config = config or get_config()
        if not self.config.endpoint:
            raise InvalidParameterError("HSDS endpoint is not configured")
        self.auth = auth if auth is not None else auth_from_config(self.config)

    @property
    def base_url(self) -> str:
        """Get the server base URL, always with a trailing slash."""
        return self.config.endpoint.rstrip("/") + "/"

    @property
    def user_agent(self) -> str:
        return f"hsds-client/{__version__}"

    def _build_url(self, path: str) -> str:
        # plain concatenation: urljoin would resolve dot segments
        return self.base_url + path.lstrip("/")

    def _get_headers(self, extra_headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Get request headers including authentication."""
        headers: Dict[str, str] = {}
        self.auth.apply(headers)
        if extra_headers:
            headers.update(extra_headers)
        return headers

    @staticmethod
    def _clean_params(params: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if not params:
            return None
        return {k: v for k, v in params.items() if v is not None}

    def _handle_response(
        self,
        method: str,
        url: str,
        status_code: int,
        content: bytes,
        parse: Optional[Parser] = None,
        raw: bool = False,
    ) -> Any:
        """Decode a successful response or raise the mapped error."""
        logger.debug("Response: %s %s -> %d", method, url, status_code)

        if not 200 <= status_code < 300:
            raise self._error_for_status(method, url, status_code, content)

        if raw:
            return content

        if status_code == 204 or not content:
            data: Any = {}
        else:
            try:
                data = json.loads(content)
            except ValueError as e:
                raise DecodeError(
                    f"Invalid JSON in response to {method} {url}: {e}",
                    status_code=status_code,
                    details=content[:200].decode("utf-8", errors="replace"),
                )

        if parse is None:
            return data

        try:
            return parse(data)
        except (KeyError, TypeError, ValueError) as e:
            raise DecodeError(
                f"Unexpected response format for {method} {url}: {e!r}",
                status_code=status_code,
                response_data=data if isinstance(data, dict) else None,
            )

    def _error_for_status(
        self,
        method: str,
        url: str,
        status_code: int,
        content: bytes,
    ) -> HsdsError:
        """Map a non-2xx response onto an exception."""
        error_data: Dict[str, Any] = {}
        try:
            decoded = json.loads(content) if content else None
        except ValueError:
            decoded = None

        if isinstance(decoded, dict):
            error_data = decoded
            error_msg = self._extract_error_message(decoded)
        else:
            error_msg = content.decode("utf-8", errors="replace").strip()
        if not error_msg:
            error_msg = f"HTTP {status_code}"

        logger.warning("API error [%s %s] status=%d: %s", method, url, status_code, error_msg)

        if status_code == 401:
            return AuthenticationError(
                f"Authentication failed: {error_msg}",
                status_code=status_code,
                response_data=error_data,
            )
        if status_code == 403:
            return PermissionDeniedError(
                f"Permission denied: {error_msg}",
                status_code=status_code,
                response_data=error_data,
            )
        if status_code in (404, 410):
            return ObjectNotFoundError(
                f"Object not found: {error_msg}",
                status_code=status_code,
                response_data=error_data,
            )
        if status_code == 409:
            return ConflictError(
                f"Conflict: {error_msg}",
                status_code=status_code,
                response_data=error_data,
            )
        if status_code == 400:
            return InvalidParameterError(
                f"Invalid request: {error_msg}",
                status_code=status_code,
                response_data=error_data,
            )
        if status_code >= 500:
            return ServerError(
                f"Server error: {error_msg}",
                status_code=status_code,
                response_data=error_data,
            )
        return APIError(
            f"API request failed: {error_msg}",
            status_code=status_code,
            response_data=error_data,
        )

    @staticmethod
    def _extract_error_message(error_data: Dict[str, Any]) -> str:
        for key in ("message", "error"):
            value = error_data.get(key)
            if value:
                return str(value)
        return ""


class HTTPClient(BaseHTTPClient):
    """
    Synchronous transport on a requests.Session.

    The session keeps a connection pool sized by ``config.pool_maxsize`` and
    is mounted with ``Retry(total=0)``: every call is a single attempt.
    """

    def __init__(
        self,
        config: Optional[HsdsConfig] = None,
        auth: Optional[Authentication] = None,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(config, auth)
        self._session = session
        self._session_lock = threading.Lock()

    @property
    def session(self) -> requests.Session:
        """Get or create the pooled HTTP session."""
        if self._session is None:
            with self._session_lock:
                if self._session is None:
                    self._session = self._create_session()
        return self._session

    def _create_session(self) -> requests.Session:
        session = requests.Session()

        adapter = HTTPAdapter(
            pool_connections=self.config.pool_maxsize,
            pool_maxsize=self.config.pool_maxsize,
            max_retries=Retry(total=0, raise_on_status=False),
        )
        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        })
        return session

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        parse: Optional[Parser] = None,
        raw: bool = False,
    ) -> Any:
        """
        Make an API request.

        Args:
            method: HTTP method
            path: Endpoint path (relative to the server URL)
            params: Query parameters; None values are dropped
            json_data: JSON body
            headers: Extra headers for this call
            parse: Callable turning the decoded JSON body into a model
            raw: Return the undecoded response bytes

        Returns:
            The parsed model, the decoded JSON, or raw bytes
        """
        url = self._build_url(path)
        logger.debug("Request: %s %s params=%s", method, url, params)

        try:
            response = self.session.request(
                method=method,
                url=url,
                params=self._clean_params(params),
                json=json_data,
                headers=self._get_headers(headers),
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection failed: {e}")
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timed out: {e}")
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {e}")

        return self._handle_response(
            method, url, response.status_code, response.content, parse=parse, raw=raw
        )

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class AsyncHTTPClient(BaseHTTPClient):
    """
    Asynchronous transport on a pooled httpx.AsyncClient.

    Each ``request`` is an independent coroutine; concurrent calls share
    only the connection pool.
    """

    def __init__(
        self,
        config: Optional[HsdsConfig] = None,
        auth: Optional[Authentication] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(config, auth)
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get or create the pooled async HTTP client."""
        if self._client is None:
            limits = httpx.Limits(
                max_connections=self.config.pool_maxsize,
                max_keepalive_connections=self.config.pool_maxsize,
            )
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout),
                verify=self.config.verify_ssl,
                limits=limits,
                transport=self._transport,
                headers={
                    "User-Agent": self.user_agent,
                    "Accept": "application/json",
                },
            )
        return self._client

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        parse: Optional[Parser] = None,
        raw: bool = False,
    ) -> Any:
        """Make an API request. Same arguments as HTTPClient.request."""
        url = self._build_url(path)
        logger.debug("Request: %s %s params=%s", method, url, params)

        try:
            response = await self.client.request(
                method,
                url,
                params=self._clean_params(params),
                json=json_data,
                headers=self._get_headers(headers),
            )
        except httpx.TimeoutException as e:
            raise TransportError(f"Request timed out: {e}")
        except httpx.ConnectError as e:
            raise TransportError(f"Connection failed: {e}")
        except httpx.HTTPError as e:
            raise TransportError(f"Request failed: {e}")

        return self._handle_response(
            method, url, response.status_code, response.content, parse=parse, raw=raw
        )

    async def aclose(self) -> None:
        """Close the connection pool."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


Transport = Union[HTTPClient, AsyncHTTPClient]
