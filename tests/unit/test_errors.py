from __future__ import annotations

import pytest

from gh_stream_client.core.errors import (
    AuthorizationError,
    ClientClosedError,
    ErrorCategory,
    MalformedResponseError,
    NotFoundError,
    RateLimitExceededError,
    RequestRejectedError,
    TransportError,
    classify_http_error,
)
from gh_stream_client.core.models import RateLimit, RequestDescriptor, ResponseMetadata


@pytest.mark.parametrize(
    ("status", "remaining", "expected"),
    [
        (401, None, AuthorizationError),
        (403, 10, AuthorizationError),
        (403, 0, RateLimitExceededError),
        (404, None, NotFoundError),
        (422, None, RequestRejectedError),
        (429, None, RateLimitExceededError),
        (500, None, TransportError),
        (503, None, TransportError),
        (304, None, MalformedResponseError),
    ],
)
def test_classify_http_error_maps_status(status, remaining, expected):
    rate_limit = None
    if remaining is not None:
        rate_limit = RateLimit(limit=5000, remaining=remaining, reset_at=1700000000)
    metadata = ResponseMetadata(status_code=status, rate_limit=rate_limit)
    err = classify_http_error(metadata)
    assert type(err) is expected
    assert err.http_status == status


def test_classify_http_error_returns_none_for_success():
    assert classify_http_error(ResponseMetadata(status_code=200)) is None
    assert classify_http_error(ResponseMetadata(status_code=205)) is None


def test_classify_http_error_keeps_body_message_and_descriptor():
    descriptor = RequestDescriptor("notifications")
    payload = {"message": "Bad credentials", "documentation_url": "https://docs.github.com/rest"}
    err = classify_http_error(ResponseMetadata(status_code=401), payload=payload, descriptor=descriptor)
    assert str(err) == "Bad credentials"
    assert err.documentation_url == "https://docs.github.com/rest"
    assert err.descriptor is descriptor
    assert err.category is ErrorCategory.AUTHORIZATION


def test_retryable_categories():
    assert TransportError("x").retryable is True
    assert RateLimitExceededError("x").retryable is True
    assert AuthorizationError("x").retryable is False
    assert NotFoundError("x").retryable is False
    assert ClientClosedError("x").retryable is False


def test_classify_http_error_treats_403_with_retry_after_as_rate_limit():
    metadata = ResponseMetadata(status_code=403, retry_after_seconds=60)
    payload = {"message": "You have exceeded a secondary rate limit"}
    err = classify_http_error(metadata, payload=payload)
    assert type(err) is RateLimitExceededError
    assert err.category is ErrorCategory.RATE_LIMITED
    assert err.retryable is True
