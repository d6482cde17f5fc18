"""Pagination options and Link-header continuation helpers."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .models import RequestDescriptor

_LINK_PART = re.compile(r'<(?P<url>[^>]*)>(?P<params>[^,]*)')
_REL_PARAM = re.compile(r'rel\s*=\s*"?(?P<rel>[^";]+)"?')


@dataclass(slots=True, frozen=True)
class PaginationOptions:
    """Which slice of a paginated listing to fetch.

    ``page_size`` None keeps the server default and ``max_pages`` None means
    no limit. ``max_pages=0`` yields an empty stream without fetching.
    """

    start_page: int = 1
    page_size: int | None = None
    max_pages: int | None = None

    def __post_init__(self) -> None:
        if isinstance(self.start_page, bool) or not isinstance(self.start_page, int):
            raise TypeError("start_page must be int")
        if self.start_page < 1:
            raise ValueError("start_page must be >= 1")
        if self.page_size is not None:
            if isinstance(self.page_size, bool) or not isinstance(self.page_size, int):
                raise TypeError("page_size must be int")
            if self.page_size < 1:
                raise ValueError("page_size must be > 0")
        if self.max_pages is not None:
            if isinstance(self.max_pages, bool) or not isinstance(self.max_pages, int):
                raise TypeError("max_pages must be int")
            if self.max_pages < 0:
                raise ValueError("max_pages must be >= 0")

    def to_query(self) -> dict[str, int]:
        query: dict[str, int] = {}
        if self.start_page != 1:
            query["page"] = self.start_page
        if self.page_size is not None:
            query["per_page"] = self.page_size
        return query

    def apply(self, descriptor: RequestDescriptor) -> RequestDescriptor:
        query = self.to_query()
        if not query:
            return descriptor
        return descriptor.with_query(query)

    def allows_more(self, pages_fetched: int) -> bool:
        return self.max_pages is None or pages_fetched < self.max_pages


def parse_link_header(value: str | None) -> dict[str, str]:
    """Parse an RFC 8288 Link header into a ``rel -> url`` mapping."""

    if not value:
        return {}
    links: dict[str, str] = {}
    for match in _LINK_PART.finditer(value):
        url = match.group("url").strip()
        rel_match = _REL_PARAM.search(match.group("params"))
        if url == "" or rel_match is None:
            continue
        for rel in rel_match.group("rel").split():
            links.setdefault(rel.lower(), url)
    return links


def next_page_descriptor(
    descriptor: RequestDescriptor,
    link_header: str | None,
) -> RequestDescriptor | None:
    next_url = parse_link_header(link_header).get("next")
    if next_url is None:
        return None
    return descriptor.follow(next_url)


__all__ = [
    "PaginationOptions",
    "parse_link_header",
    "next_page_descriptor",
]
