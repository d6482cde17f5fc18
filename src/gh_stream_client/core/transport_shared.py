"""Shared helpers for transport implementations."""

from __future__ import annotations

from collections.abc import Mapping

import httpx

from ..config import GitHubClientConfig
from .models import RequestDescriptor


def build_default_headers(config: GitHubClientConfig) -> Mapping[str, str]:
    headers = {
        "Accept": config.accept,
        "Accept-Encoding": "gzip",
        "User-Agent": config.user_agent,
    }
    if config.api_version:
        headers["X-GitHub-Api-Version"] = config.api_version
    if config.token:
        headers["Authorization"] = f"Bearer {config.token}"
    return headers


def build_default_timeout(config: GitHubClientConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


def build_async_http_client(
    config: GitHubClientConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    # Renamed and transferred repositories answer with 301/307.
    return httpx.AsyncClient(
        base_url=config.base_url.rstrip("/") + "/",
        headers=build_default_headers(config),
        timeout=build_default_timeout(config),
        follow_redirects=True,
        transport=transport,
    )


def build_request_headers(descriptor: RequestDescriptor) -> dict[str, str]:
    if descriptor.accept is None:
        return {}
    return {"Accept": descriptor.accept}


__all__ = [
    "build_default_headers",
    "build_default_timeout",
    "build_async_http_client",
    "build_request_headers",
]
