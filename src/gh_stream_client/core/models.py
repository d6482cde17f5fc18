"""Core request/response models."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Generic, TypeVar
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

from .errors import MalformedRequestError

T = TypeVar("T")

QueryValue = str | int | bool
_PLACEHOLDER = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def _to_query_text(value: QueryValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _normalize_pairs(
    values: Mapping[str, QueryValue | None] | tuple[tuple[str, str], ...],
) -> tuple[tuple[str, str], ...]:
    items = values.items() if isinstance(values, Mapping) else values
    normalized: dict[str, str] = {}
    for key, value in items:
        if not isinstance(key, str):
            raise TypeError("parameter names must be str")
        if value is None:
            continue
        normalized[key] = _to_query_text(value)
    return tuple(sorted(normalized.items()))


def _to_int(value: object) -> int | None:
    if value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.isdigit():
            return int(text)
    return None


@dataclass(slots=True, frozen=True)
class RequestDescriptor:
    """Immutable description of one HTTP request.

    ``path`` is either base-relative (``notifications``) or absolute, and may
    contain ``{name}`` placeholders filled from ``path_params``. Query and
    path parameters are stored as sorted pairs so that two descriptors built
    with different insertion orders compare equal.
    """

    path: str
    path_params: Mapping[str, QueryValue] | tuple[tuple[str, str], ...] = ()
    query: Mapping[str, QueryValue | None] | tuple[tuple[str, str], ...] = ()
    method: str = "GET"
    accept: str | None = None
    json_body: object = field(default=None, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "path_params", _normalize_pairs(self.path_params))
        object.__setattr__(self, "query", _normalize_pairs(self.query))
        object.__setattr__(self, "method", str(self.method).upper())

    @property
    def query_params(self) -> dict[str, str]:
        return dict(self.query)

    def with_query(self, updates: Mapping[str, QueryValue | None]) -> "RequestDescriptor":
        merged: dict[str, QueryValue | None] = dict(self.query)
        merged.update(updates)
        return replace(self, query=merged)

    def follow(self, url: str) -> "RequestDescriptor":
        """Descriptor for a continuation URL, keeping method and accept token."""

        parts = urlsplit(url)
        bare = urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
        query = tuple(parse_qsl(parts.query, keep_blank_values=True))
        return replace(self, path=bare, path_params=(), query=query)

    def resolve_url(self) -> str:
        """Substitute path parameters and check the result is a usable URL."""

        path = self.path
        if not isinstance(path, str) or path.strip() == "":
            raise MalformedRequestError("request path must not be empty", descriptor=self)
        if any(ch.isspace() for ch in path):
            raise MalformedRequestError("request path must not contain whitespace", descriptor=self)

        params = dict(self.path_params)

        def _substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            if name not in params:
                raise MalformedRequestError(f"missing path parameter {name!r}", descriptor=self)
            value = params[name]
            if value == "":
                raise MalformedRequestError(f"path parameter {name!r} must not be empty", descriptor=self)
            return quote(value, safe="")

        resolved = _PLACEHOLDER.sub(_substitute, path)
        if "{" in resolved or "}" in resolved:
            raise MalformedRequestError("request path has an unresolved placeholder", descriptor=self)

        if "://" in resolved:
            parts = urlsplit(resolved)
            if parts.scheme not in ("http", "https") or not parts.netloc:
                raise MalformedRequestError("absolute request URL must be http(s)", descriptor=self)
            return resolved
        return resolved.lstrip("/")

    def describe(self) -> str:
        return f"{self.method} {self.path}"


@dataclass(slots=True, frozen=True)
class RateLimit:
    limit: int | None
    remaining: int | None
    reset_at: int | None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimit | None":
        limit = _to_int(headers.get("x-ratelimit-limit"))
        remaining = _to_int(headers.get("x-ratelimit-remaining"))
        reset_at = _to_int(headers.get("x-ratelimit-reset"))
        if limit is None and remaining is None and reset_at is None:
            return None
        return cls(limit=limit, remaining=remaining, reset_at=reset_at)


@dataclass(slots=True, frozen=True)
class ResponseMetadata:
    status_code: int
    rate_limit: RateLimit | None = None
    retry_after_seconds: int | None = None
    link: str | None = None

    @classmethod
    def from_response(cls, status_code: int, headers: Mapping[str, str]) -> "ResponseMetadata":
        return cls(
            status_code=status_code,
            rate_limit=RateLimit.from_headers(headers),
            retry_after_seconds=_to_int(headers.get("retry-after")),
            link=headers.get("link"),
        )

    @property
    def rate_limit_exhausted(self) -> bool:
        return self.rate_limit is not None and self.rate_limit.remaining == 0


@dataclass(slots=True, frozen=True)
class PageResult(Generic[T]):
    items: tuple[T, ...] | list[T]
    next_descriptor: RequestDescriptor | None
    metadata: ResponseMetadata

    def __post_init__(self) -> None:
        if isinstance(self.items, tuple):
            return
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def is_last(self) -> bool:
        return self.next_descriptor is None


__all__ = [
    "QueryValue",
    "RequestDescriptor",
    "RateLimit",
    "ResponseMetadata",
    "PageResult",
]
