"""
Authentication strategies for the HSDS client.

Each strategy produces the headers to attach to a request. Strategies do no
network I/O and hold nothing beyond their credential, so one instance can be
shared by concurrent requests.
"""

import base64
import logging
from abc import ABC, abstractmethod
from typing import Dict

from .config import HsdsConfig
from .exceptions import InvalidParameterError

logger = logging.getLogger(__name__)


class Authentication(ABC):
    """Base class for request authentication."""

    kind: str = ""

    @abstractmethod
    def headers(self) -> Dict[str, str]:
        """Return the headers to add to a request."""

    def apply(self, headers: Dict[str, str]) -> Dict[str, str]:
        """Add this strategy's headers to ``headers`` in place and return it."""
        headers.update(self.headers())
        return headers


class NoAuth(Authentication):
    """Anonymous access."""

    kind = "none"

    def headers(self) -> Dict[str, str]:
        return {}

    def __repr__(self) -> str:
        return "NoAuth()"


class BasicAuth(Authentication):
    """HTTP basic authentication with username and password."""

    kind = "basic"

    def __init__(self, username: str, password: str):
        if not username:
            raise InvalidParameterError("Basic authentication requires a username")
        self.username = username
        self._password = password

    def headers(self) -> Dict[str, str]:
        credentials = f"{self.username}:{self._password}".encode("utf-8")
        encoded = base64.b64encode(credentials).decode("ascii")
        return {"Authorization": f"Basic {encoded}"}

    def __repr__(self) -> str:
        return f"BasicAuth(username={self.username!r})"


class BearerAuth(Authentication):
    """Bearer token authentication."""

    kind = "bearer"

    def __init__(self, token: str):
        if not token:
            raise InvalidParameterError("Bearer authentication requires a token")
        self._token = token

    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self._token}"}

    def __repr__(self) -> str:
        return "BearerAuth(token=***)"


def auth_from_config(config: HsdsConfig) -> Authentication:
    """
    Pick an authentication strategy from configuration.

    A token wins over username/password; with neither, requests are anonymous.
    """
    if config.token:
        logger.debug("Using bearer token authentication")
        return BearerAuth(config.token)
    if config.username and config.password:
        logger.debug("Using basic authentication for user %s", config.username)
        return BasicAuth(config.username, config.password)
    logger.debug("No credentials configured, using anonymous access")
    return NoAuth()
