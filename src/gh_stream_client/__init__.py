"""Public package exports for the GitHub streaming client."""

from .async_client import AsyncGitHubClient
from .config import GitHubClientConfig, TransportConfig
from .core.errors import (
    AuthorizationError,
    ClientClosedError,
    ErrorCategory,
    MalformedRequestError,
    MalformedResponseError,
    NotFoundError,
    RateLimitExceededError,
    RequestRejectedError,
    StreamError,
    TransportError,
)
from .core.models import PageResult, RequestDescriptor
from .core.page_fetcher import PageFetcher
from .core.pagination import PaginationOptions
from .core.sequencer import PaginatedSequencer
from .core.single_result import SingleResultAdapter
from .core.stream import Stream, StreamHandle, StreamState, Subscription

__all__ = [
    "AsyncGitHubClient",
    "GitHubClientConfig",
    "TransportConfig",
    "RequestDescriptor",
    "PageResult",
    "PaginationOptions",
    "PageFetcher",
    "PaginatedSequencer",
    "SingleResultAdapter",
    "Stream",
    "StreamHandle",
    "StreamState",
    "Subscription",
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
]
