"""
HSDS Client - Python client for the HDF Scalable Data Service REST API.

Provides typed access to domains, groups, datasets, datatypes, links and
attributes, with pluggable authentication.
"""

__version__ = "0.1.0"
__prog_name__ = "hsds"

from .api import HsdsClient, AsyncHsdsClient, get_client
from .auth import Authentication, NoAuth, BasicAuth, BearerAuth
from .config import HsdsConfig
from .exceptions import (
    HsdsError,
    ErrorKind,
    TransportError,
    AuthenticationError,
    PermissionDeniedError,
    ObjectNotFoundError,
    ConflictError,
    ServerError,
    DecodeError,
    InvalidParameterError,
    APIError,
)

__all__ = [
    "__version__",
    "HsdsClient",
    "AsyncHsdsClient",
    "get_client",
    "Authentication",
    "NoAuth",
    "BasicAuth",
    "BearerAuth",
    "HsdsConfig",
    "HsdsError",
    "ErrorKind",
    "TransportError",
    "AuthenticationError",
    "PermissionDeniedError",
    "ObjectNotFoundError",
    "ConflictError",
    "ServerError",
    "DecodeError",
    "InvalidParameterError",
    "APIError",
]
