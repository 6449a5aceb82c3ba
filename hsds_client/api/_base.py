"""
Shared plumbing for the resource APIs.
"""

import functools
from typing import Any, Dict
from urllib.parse import quote

from ..exceptions import InvalidParameterError
from ._http import Transport


class ResourceAPI:
    """
    Base class for resource APIs.

    Resource methods hand their result straight back from the transport, so
    the same API class serves HTTPClient (returns the model) and
    AsyncHTTPClient (returns an awaitable resolving to the model).
    """

    def __init__(self, http: Transport):
        """
        Initialize the API.

        Args:
            http: HTTP transport instance
        """
        self._http = http

    @staticmethod
    def _require(value: str, name: str) -> str:
        if not value:
            raise InvalidParameterError(f"{name} is required")
        return value

    def _domain_params(self, domain: str, **extra: Any) -> Dict[str, Any]:
        """Query parameters addressing ``domain``."""
        params: Dict[str, Any] = {"domain": self._require(domain, "domain")}
        params.update(extra)
        return params

    @classmethod
    def _segment(cls, value: str, name: str) -> str:
        """
        Percent-encode an id or name for use as a single path segment.

        Names made only of dots are refused: HTTP clients collapse "." and ".."
        as dot segments, which would address a different resource.
        """
        cls._require(value, name)
        if value.strip(".") == "":
            raise InvalidParameterError(f"{name} cannot be {value!r}")
        return quote(value, safe="")


class AsyncResource:
    """
    Wraps a ResourceAPI on an async transport.

    Every public method becomes a coroutine function, so argument errors
    (InvalidParameterError) are raised when the call is awaited, like
    any other failure.
    """

    def __init__(self, api: ResourceAPI):
        self._api = api

    def __getattr__(self, name: str) -> Any:
        attr = getattr(self._api, name)
        if name.startswith("_") or not callable(attr):
            return attr

        @functools.wraps(attr)
        async def call(*args: Any, **kwargs: Any) -> Any:
            return await attr(*args, **kwargs)

        return call

    def __repr__(self) -> str:
        return f"AsyncResource({type(self._api).__name__})"
