"""
Mirror Node Error Model

This module provides the error handling framework for the mirror node client:
request failures (terminal and retry-exhausted), transport failures, payload
decode failures and key structure decode failures.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Mirror node client error codes."""

    UNKNOWN = 1
    CONFIGURATION = 2
    NOT_FOUND = 4

    # Request errors
    REQUEST_FAILED = 200
    CLIENT_ERROR = 201
    MAX_RETRIES_EXCEEDED = 202
    TRANSPORT_ERROR = 203

    # Decode errors
    DECODE_ERROR = 300
    KEY_DECODE_ERROR = 301
    KEY_DEPTH_EXCEEDED = 302
    INVALID_PUBLIC_KEY = 303


class MirrorNodeError(Exception):
    """
    Base class for all mirror node client errors.

    Carries a code, optional structured details and the underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class ConfigurationError(MirrorNodeError):
    """Invalid client or retry configuration."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.CONFIGURATION, details)


class NotFoundError(MirrorNodeError):
    """A resource the caller required does not exist."""

    def __init__(self, message: str = "Resource not found",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.NOT_FOUND, details, cause)


class TransportError(MirrorNodeError):
    """Network-level failure: connection refused, DNS, timeout, reset."""

    def __init__(self, message: str, url: Optional[str] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.TRANSPORT_ERROR, {"url": url} if url else None, cause)
        self.url = url


class RequestError(MirrorNodeError):
    """
    A logical request to the mirror node failed.

    Attributes:
        url: The absolute URL that was requested
        status: HTTP status of the failing attempt, None for network failures
        reason: Server status text, when known
    """

    def __init__(self, message: str, url: Optional[str] = None, status: Optional[int] = None,
                 reason: Optional[str] = None, code: ErrorCode = ErrorCode.REQUEST_FAILED,
                 cause: Optional[Exception] = None):
        details = {}
        if url:
            details["url"] = url
        if status is not None:
            details["status"] = status
        super().__init__(message, code, details, cause)
        self.url = url
        self.status = status
        self.reason = reason

    @property
    def is_not_found(self) -> bool:
        return self.status == 404

    @classmethod
    def from_status(cls, url: str, status: int, reason: Optional[str] = None) -> RequestError:
        """Build the error raised for a non-2xx response."""
        return cls(
            f"Request failed with status {status}: {reason or ''} for URL: {url}",
            url=url,
            status=status,
            reason=reason,
        )


class ClientRequestError(RequestError):
    """Terminal client error (4xx other than 404 and 429); never retried."""

    def __init__(self, error: RequestError):
        super().__init__(
            error.message,
            url=error.url,
            status=error.status,
            reason=error.reason,
            code=ErrorCode.CLIENT_ERROR,
            cause=error.cause,
        )


class MaxRetriesExceeded(RequestError):
    """Retryable failures continued until the attempt ceiling was reached."""

    def __init__(self, attempts: int, last_error: Exception, url: Optional[str] = None):
        status = getattr(last_error, "status", None)
        reason = getattr(last_error, "reason", None)
        super().__init__(
            f"Max retries ({attempts}) reached for {url}. Last error: {last_error}",
            url=url,
            status=status,
            reason=reason,
            code=ErrorCode.MAX_RETRIES_EXCEEDED,
            cause=last_error,
        )
        self.attempts = attempts
        self.last_error = last_error


class DecodeError(MirrorNodeError):
    """Payload decoding error."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.DECODE_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class KeyDecodeError(DecodeError):
    """A serialized key structure could not be parsed."""

    def __init__(self, message: str = "Invalid key structure",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.KEY_DECODE_ERROR, details, cause)


class KeyDepthExceeded(KeyDecodeError):
    """Key structure nests deeper than the allowed maximum."""

    def __init__(self, max_depth: int):
        super().__init__(f"Key structure nesting exceeds maximum depth of {max_depth}",
                         {"max_depth": max_depth})
        self.code = ErrorCode.KEY_DEPTH_EXCEEDED
        self.max_depth = max_depth


class PublicKeyError(MirrorNodeError):
    """A value is not a supported public key encoding."""

    def __init__(self, message: str = "Invalid public key", cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_PUBLIC_KEY, None, cause)


__all__ = [
    "ErrorCode",
    "MirrorNodeError",
    "ConfigurationError",
    "NotFoundError",
    "TransportError",
    "RequestError",
    "ClientRequestError",
    "MaxRetriesExceeded",
    "DecodeError",
    "KeyDecodeError",
    "KeyDepthExceeded",
    "PublicKeyError",
]
