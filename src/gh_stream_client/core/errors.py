"""Error types and HTTP status mapping."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import RateLimit, RequestDescriptor, ResponseMetadata


class ErrorCategory(str, Enum):
    MALFORMED_REQUEST = "malformed_request"
    TRANSIENT = "transient"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    MALFORMED_RESPONSE = "malformed_response"
    REJECTED = "rejected"
    CLIENT_CLOSED = "client_closed"


_RETRYABLE = frozenset({ErrorCategory.TRANSIENT, ErrorCategory.RATE_LIMITED})


class StreamError(Exception):
    """Base exception for this package.

    Terminal for the stream it is raised in. Items delivered before the
    error stay delivered.
    """

    category: ErrorCategory = ErrorCategory.TRANSIENT

    def __init__(
        self,
        message: str,
        *,
        descriptor: "RequestDescriptor | None" = None,
        http_status: int | None = None,
        rate_limit: "RateLimit | None" = None,
        documentation_url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.descriptor = descriptor
        self.http_status = http_status
        self.rate_limit = rate_limit
        self.documentation_url = documentation_url

    @property
    def retryable(self) -> bool:
        return self.category in _RETRYABLE


class MalformedRequestError(StreamError):
    """Descriptor could not be turned into a request."""

    category = ErrorCategory.MALFORMED_REQUEST


class TransportError(StreamError):
    """Network/transport-level failure, including timeouts and 5xx."""

    category = ErrorCategory.TRANSIENT


class AuthorizationError(StreamError):
    """401/403 without rate-limit exhaustion."""

    category = ErrorCategory.AUTHORIZATION


class NotFoundError(StreamError):
    category = ErrorCategory.NOT_FOUND


class RateLimitExceededError(StreamError):
    category = ErrorCategory.RATE_LIMITED


class MalformedResponseError(StreamError):
    """Response body could not be decoded."""

    category = ErrorCategory.MALFORMED_RESPONSE


class RequestRejectedError(StreamError):
    """Other 4xx responses (validation failures and the like)."""

    category = ErrorCategory.REJECTED


class ClientClosedError(StreamError):
    """Raised when client is used after close."""

    category = ErrorCategory.CLIENT_CLOSED


def extract_message(payload: object) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    value = payload.get("message")
    return str(value) if value is not None else None


def extract_documentation_url(payload: object) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    value = payload.get("documentation_url")
    return str(value) if value is not None else None


def classify_http_error(
    metadata: "ResponseMetadata",
    *,
    payload: object = None,
    descriptor: "RequestDescriptor | None" = None,
) -> StreamError | None:
    """Map a response status to a domain exception, or None on 2xx."""

    status = metadata.status_code
    if 200 <= status < 300:
        return None

    message = extract_message(payload) or f"GitHub API request failed with HTTP {status}"
    kwargs = {
        "descriptor": descriptor,
        "http_status": status,
        "rate_limit": metadata.rate_limit,
        "documentation_url": extract_documentation_url(payload),
    }

    # Exhausted quota and secondary limits (Retry-After) are reported as 403; they win over authorization.
    if status == 429 or (
        status == 403 and (metadata.rate_limit_exhausted or metadata.retry_after_seconds is not None)
    ):
        return RateLimitExceededError(message, **kwargs)
    if status in (401, 403):
        return AuthorizationError(message, **kwargs)
    if status == 404:
        return NotFoundError(message, **kwargs)
    if 400 <= status < 500:
        return RequestRejectedError(message, **kwargs)
    if status >= 500:
        return TransportError(message, **kwargs)
    return MalformedResponseError(f"unexpected HTTP status {status}", **kwargs)


__all__ = [
    "ErrorCategory",
    "StreamError",
    "MalformedRequestError",
    "TransportError",
    "AuthorizationError",
    "NotFoundError",
    "RateLimitExceededError",
    "MalformedResponseError",
    "RequestRejectedError",
    "ClientClosedError",
    "extract_message",
    "extract_documentation_url",
    "classify_http_error",
]
