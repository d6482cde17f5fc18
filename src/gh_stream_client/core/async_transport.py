"""Async HTTP transport: one round trip per descriptor, no retry."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol
from urllib.parse import urlsplit

import httpx

from ..config import GitHubClientConfig
from .errors import ClientClosedError, MalformedRequestError, TransportError
from .models import RequestDescriptor
from .transport_shared import build_async_http_client, build_request_headers

logger = logging.getLogger("gh_stream_client")


class AsyncTransportClient(Protocol):
    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        json: Any = None,
    ) -> httpx.Response: ...

    async def aclose(self) -> None: ...


class AsyncTransport:
    """Asynchronous transport for the GitHub REST API."""

    def __init__(
        self,
        config: GitHubClientConfig,
        *,
        client: AsyncTransportClient | None = None,
    ) -> None:
        self._config = config
        self._closed = False
        self._owns_client = client is None
        self._client = client or build_async_http_client(config)

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client and hasattr(self._client, "aclose"):
            await self._client.aclose()

    def _check_origin(self, url: str, descriptor: RequestDescriptor) -> None:
        # Default headers carry the token; absolute URLs must stay on the API origin.
        if "://" not in url:
            return
        target = urlsplit(url)
        base = urlsplit(self._config.base_url)
        if (target.scheme, target.netloc.lower()) != (base.scheme, base.netloc.lower()):
            raise MalformedRequestError(
                f"request URL host {target.netloc!r} does not match the API base URL",
                descriptor=descriptor,
            )

    async def send(self, descriptor: RequestDescriptor) -> httpx.Response:
        """Perform one request; only transport failures raise here.

        HTTP error statuses are returned as-is for the caller to classify.
        """

        if self._closed:
            raise ClientClosedError("transport is already closed", descriptor=descriptor)

        url = descriptor.resolve_url()
        self._check_origin(url, descriptor)
        logger.debug("request start method=%s url=%s", descriptor.method, url)
        try:
            response = await self._client.request(
                descriptor.method,
                url,
                params=descriptor.query_params or None,
                headers=build_request_headers(descriptor) or None,
                json=descriptor.json_body,
            )
        except Exception as exc:
            logger.error(
                "request network error method=%s url=%s error=%s",
                descriptor.method,
                url,
                exc.__class__.__name__,
            )
            raise TransportError(
                "network/transport error",
                descriptor=descriptor,
            ) from exc

        logger.debug(
            "response received method=%s url=%s http_status=%s",
            descriptor.method,
            url,
            response.status_code,
        )
        return response


__all__ = [
    "AsyncTransportClient",
    "AsyncTransport",
]
