"""Bridging one awaitable operation into a single-item stream."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import TypeVar

from .stream import Stream, StreamHandle

T = TypeVar("T")

logger = logging.getLogger("gh_stream_client")


class SingleResultAdapter:
    """Opens streams that run ``operation`` once per subscription.

    The stream emits the operation's result and completes, or ends with the
    exception the operation raised. Results are never shared between
    subscriptions.
    """

    @staticmethod
    def open(operation: Callable[[], Awaitable[T]], *, name: str = "single") -> Stream[T]:
        async def _source(handle: StreamHandle) -> AsyncIterator[T]:
            handle.begin_fetch()
            value = await operation()
            if handle.cancelled:
                logger.warning("discarding result received after cancellation name=%s", name)
                return
            handle.begin_emit()
            yield value

        return Stream(_source, name=name)


__all__ = [
    "SingleResultAdapter",
]
