"""Flattening a chain of page fetches into one item stream."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Generic, TypeVar

from .errors import MalformedResponseError
from .models import RequestDescriptor
from .page_fetcher import PageFetcher
from .pagination import PaginationOptions
from .stream import Stream, StreamHandle

T = TypeVar("T")

logger = logging.getLogger("gh_stream_client")


class PaginatedSequencer(Generic[T]):
    """Opens lazy streams over every item of a paginated listing.

    Pages are fetched one at a time: page n+1 is requested only after every
    item of page n has been handed to the subscriber. Each subscription runs
    its own fetch sequence; nothing is cached or shared between them.
    """

    def __init__(self, fetcher: PageFetcher[T]) -> None:
        self._fetcher = fetcher

    def open(
        self,
        initial: RequestDescriptor,
        options: PaginationOptions | None = None,
    ) -> Stream[T]:
        resolved_options = options or PaginationOptions()

        def _source(handle: StreamHandle) -> AsyncIterator[T]:
            return self._iter_items(handle, initial, resolved_options)

        return Stream(_source, name=initial.describe())

    async def _iter_items(
        self,
        handle: StreamHandle,
        initial: RequestDescriptor,
        options: PaginationOptions,
    ) -> AsyncIterator[T]:
        if options.max_pages == 0:
            logger.debug("max_pages is 0; nothing to fetch request=%s", initial.describe())
            return

        descriptor: RequestDescriptor | None = options.apply(initial)
        page_index = options.start_page
        seen: set[RequestDescriptor] = set()

        while descriptor is not None:
            if handle.cancelled:
                return
            if descriptor in seen:
                raise MalformedResponseError(
                    "pagination loop detected",
                    descriptor=descriptor,
                )
            seen.add(descriptor)

            handle.begin_fetch(page_index)
            logger.debug("fetching page=%s request=%s", page_index, descriptor.describe())
            page = await self._fetcher.fetch(descriptor)
            if handle.cancelled:
                logger.warning(
                    "discarding page fetched after cancellation page=%s request=%s",
                    page_index,
                    descriptor.describe(),
                )
                return

            handle.begin_emit()
            for item in page.items:
                yield item
                if handle.cancelled:
                    return

            if not options.allows_more(handle.pages_fetched):
                logger.debug("max_pages reached pages_fetched=%s", handle.pages_fetched)
                return
            descriptor = page.next_descriptor
            page_index += 1


__all__ = [
    "PaginatedSequencer",
]
