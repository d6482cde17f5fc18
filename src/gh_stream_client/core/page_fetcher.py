"""Single page fetch: one round trip, decoded items plus continuation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

from .async_transport import AsyncTransport
from .errors import MalformedRequestError, StreamError
from .models import PageResult, RequestDescriptor
from .pagination import next_page_descriptor
from .response_parsing import decode_items, parse_json_payload, raise_for_api_status, read_metadata

T = TypeVar("T")

logger = logging.getLogger("gh_stream_client")


class PageFetcher(Generic[T]):
    """Fetches and decodes one page of a list endpoint.

    Holds no state between calls, so one instance can serve any number of
    concurrent streams.
    """

    def __init__(self, transport: AsyncTransport, decode_item: Callable[[object], T]) -> None:
        self._transport = transport
        self._decode_item = decode_item

    async def fetch(self, descriptor: RequestDescriptor) -> PageResult[T]:
        if descriptor.method != "GET":
            raise MalformedRequestError(
                f"page requests must use GET, not {descriptor.method}",
                descriptor=descriptor,
            )

        response = await self._transport.send(descriptor)
        metadata = read_metadata(response)
        try:
            raise_for_api_status(response, metadata, descriptor=descriptor)
        except StreamError as exc:
            logger.error(
                "page fetch failed request=%s http_status=%s error=%s",
                descriptor.describe(),
                metadata.status_code,
                exc.__class__.__name__,
            )
            raise

        payload = parse_json_payload(response, descriptor=descriptor)
        items = decode_items(
            payload,
            self._decode_item,
            descriptor=descriptor,
            http_status=metadata.status_code,
        )
        next_descriptor = next_page_descriptor(descriptor, metadata.link)
        logger.debug(
            "page fetched request=%s items=%s has_next=%s",
            descriptor.describe(),
            len(items),
            next_descriptor is not None,
        )
        return PageResult(items=items, next_descriptor=next_descriptor, metadata=metadata)


__all__ = [
    "PageFetcher",
]
