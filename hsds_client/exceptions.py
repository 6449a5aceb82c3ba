"""
Exceptions for the HSDS client.

Every failure surfaced by the client is an HsdsError whose ``kind`` names one
of a closed set of error categories.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorKind(str, Enum):
    """Categories of client failures."""
    TRANSPORT = "transport"
    AUTH = "auth"
    OBJECT_NOT_FOUND = "object_not_found"
    PERMISSION_DENIED = "permission_denied"
    CONFLICT = "conflict"
    SERVER = "server"
    DECODE = "decode"
    INVALID_PARAMETER = "invalid_parameter"
    API = "api"


class HsdsError(Exception):
    """Base exception for all HSDS client errors."""

    kind: ErrorKind = ErrorKind.API

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[Dict[str, Any]] = None,
        details: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_data = response_data or {}
        self.details = details

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class TransportError(HsdsError):
    """Connection refused, timeout, TLS failure or other network error."""
    kind = ErrorKind.TRANSPORT


class AuthenticationError(HsdsError):
    """Credentials missing or rejected (HTTP 401)."""
    kind = ErrorKind.AUTH


class PermissionDeniedError(HsdsError):
    """Authenticated but not allowed (HTTP 403)."""
    kind = ErrorKind.PERMISSION_DENIED


class ObjectNotFoundError(HsdsError):
    """Domain or object does not exist (HTTP 404/410)."""
    kind = ErrorKind.OBJECT_NOT_FOUND


class ConflictError(HsdsError):
    """Object already exists (HTTP 409)."""
    kind = ErrorKind.CONFLICT


class ServerError(HsdsError):
    """Server-side failure (HTTP 5xx)."""
    kind = ErrorKind.SERVER


class DecodeError(HsdsError):
    """Response body could not be decoded into the expected model."""
    kind = ErrorKind.DECODE


class InvalidParameterError(HsdsError):
    """Request rejected as malformed (HTTP 400) or invalid client argument."""
    kind = ErrorKind.INVALID_PARAMETER


class APIError(HsdsError):
    """Any other unexpected HTTP status."""
    kind = ErrorKind.API
