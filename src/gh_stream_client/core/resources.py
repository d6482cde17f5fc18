"""Single-resource requests used behind single-result streams."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from .async_transport import AsyncTransport
from .models import RequestDescriptor
from .response_parsing import decode_one, parse_json_payload, raise_for_api_status, read_metadata

T = TypeVar("T")

logger = logging.getLogger("gh_stream_client")


class ResourceFetcher:
    """Executes one non-paginated request and maps its outcome."""

    def __init__(self, transport: AsyncTransport) -> None:
        self._transport = transport

    async def fetch_object(
        self,
        descriptor: RequestDescriptor,
        decode: Callable[[object], T],
    ) -> T:
        response = await self._transport.send(descriptor)
        metadata = read_metadata(response)
        raise_for_api_status(response, metadata, descriptor=descriptor)
        payload = parse_json_payload(response, descriptor=descriptor)
        logger.info("request success request=%s", descriptor.describe())
        return decode_one(
            payload,
            decode,
            descriptor=descriptor,
            http_status=metadata.status_code,
        )

    async def execute(self, descriptor: RequestDescriptor) -> None:
        """Run a request whose success carries no body (202/204/205)."""

        response = await self._transport.send(descriptor)
        metadata = read_metadata(response)
        raise_for_api_status(response, metadata, descriptor=descriptor)
        logger.info(
            "request success request=%s http_status=%s",
            descriptor.describe(),
            metadata.status_code,
        )


__all__ = [
    "ResourceFetcher",
]
