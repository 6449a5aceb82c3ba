"""
HSDS API Client - main facade for all API operations.

This module ties the transport, authentication and resource APIs together.
"""

from dataclasses import replace
from typing import Optional

import httpx
import requests

from ..auth import Authentication
from ..config import HsdsConfig, get_config
from ._base import AsyncResource
from ._http import HTTPClient, AsyncHTTPClient, Transport
from .domains import DomainsAPI
from .groups import GroupsAPI
from .links import LinksAPI
from .datasets import DatasetsAPI
from .datatypes import DatatypesAPI
from .attributes import AttributesAPI


def _resolve_config(endpoint: Optional[str], config: Optional[HsdsConfig]) -> HsdsConfig:
    if endpoint is None:
        return config or get_config()
    return replace(config, endpoint=endpoint) if config else HsdsConfig(endpoint=endpoint)


class _ClientBase:
    """Wires the resource APIs onto a transport."""

    def __init__(self, http: Transport):
        self._http = http

        # Resource APIs
        self.domains = DomainsAPI(http)
        self.groups = GroupsAPI(http)
        self.links = LinksAPI(http)
        self.datasets = DatasetsAPI(http)
        self.datatypes = DatatypesAPI(http)
        self.attributes = AttributesAPI(http)

    @property
    def config(self) -> HsdsConfig:
        """Get the configuration."""
        return self._http.config

    @property
    def auth(self) -> Authentication:
        return self._http.auth

    @property
    def base_url(self) -> str:
        """Get the server base URL."""
        return self._http.base_url


class HsdsClient(_ClientBase):
    """
    Synchronous client for the HDF Scalable Data Service.

    Usage:
        with HsdsClient("http://localhost:5101", BasicAuth("admin", "admin")) as client:
            domain = client.domains.create("/home/admin/test.h5")
            group = client.groups.get("/home/admin/test.h5", domain.root)

    With no endpoint or config, settings come from the stored configuration
    and the HS_* environment variables.
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        auth: Optional[Authentication] = None,
        config: Optional[HsdsConfig] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            endpoint: Server URL; overrides the configured endpoint
            auth: Authentication strategy; derived from config if not provided
            config: Optional configuration. Uses global config if not provided.
            session: Pre-built requests session to send requests through
        """
        super().__init__(HTTPClient(_resolve_config(endpoint, config), auth, session=session))

    def close(self) -> None:
        """Close the HTTP session."""
        self._http.close()

    def __enter__(self) -> "HsdsClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class AsyncHsdsClient(_ClientBase):
    """
    Asynchronous client for the HDF Scalable Data Service.

    Resource methods have the same signatures as on HsdsClient and are
    coroutine functions; invalid arguments raise when awaited. Independent
    calls can run concurrently on one client:

        async with AsyncHsdsClient(endpoint, auth) as client:
            a, b = await asyncio.gather(
                client.groups.get(domain, id_a),
                client.groups.get(domain, id_b),
            )
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        auth: Optional[Authentication] = None,
        config: Optional[HsdsConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            endpoint: Server URL; overrides the configured endpoint
            auth: Authentication strategy; derived from config if not provided
            config: Optional configuration. Uses global config if not provided.
            transport: Custom httpx transport (e.g. httpx.MockTransport)
        """
        super().__init__(AsyncHTTPClient(_resolve_config(endpoint, config), auth, transport=transport))
        self.domains = AsyncResource(self.domains)
        self.groups = AsyncResource(self.groups)
        self.links = AsyncResource(self.links)
        self.datasets = AsyncResource(self.datasets)
        self.datatypes = AsyncResource(self.datatypes)
        self.attributes = AsyncResource(self.attributes)

    async def aclose(self) -> None:
        """Close the connection pool."""
        await self._http.aclose()

    async def __aenter__(self) -> "AsyncHsdsClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


def get_client(
    config: Optional[HsdsConfig] = None,
    auth: Optional[Authentication] = None,
) -> HsdsClient:
    """
    Get a synchronous API client instance.

    Args:
        config: Optional configuration
        auth: Optional authentication strategy

    Returns:
        HsdsClient instance
    """
    return HsdsClient(config=config, auth=auth)
