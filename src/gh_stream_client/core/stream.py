"""Lazy, cancellable item streams.

A :class:`Stream` does nothing until it is consumed. Every consumption, be it
``async for`` or :meth:`Stream.subscribe`, gets its own :class:`StreamHandle`
and therefore its own run of the underlying source.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import AsyncIterator, Callable
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger("gh_stream_client")

_MISSING = object()


class StreamState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    EMITTING = "emitting"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


_TERMINAL = frozenset({StreamState.COMPLETED, StreamState.FAILED, StreamState.CANCELLED})


class StreamHandle:
    """Live state of one subscription."""

    __slots__ = ("state", "page_index", "pages_fetched", "items_emitted", "error")

    def __init__(self) -> None:
        self.state = StreamState.IDLE
        self.page_index: int | None = None
        self.pages_fetched = 0
        self.items_emitted = 0
        self.error: BaseException | None = None

    @property
    def terminal(self) -> bool:
        return self.state in _TERMINAL

    @property
    def cancelled(self) -> bool:
        return self.state is StreamState.CANCELLED

    def begin_fetch(self, page_index: int | None = None) -> None:
        if self.terminal:
            return
        self.state = StreamState.FETCHING
        self.page_index = page_index
        self.pages_fetched += 1

    def begin_emit(self) -> None:
        if self.terminal:
            return
        self.state = StreamState.EMITTING

    def complete(self) -> None:
        if self.terminal:
            return
        self.state = StreamState.COMPLETED

    def fail(self, error: BaseException) -> None:
        if self.terminal:
            return
        self.state = StreamState.FAILED
        self.error = error

    def cancel(self) -> None:
        if self.terminal:
            return
        self.state = StreamState.CANCELLED

    def __repr__(self) -> str:
        return (
            f"StreamHandle(state={self.state.value}, page_index={self.page_index}, "
            f"pages_fetched={self.pages_fetched}, items_emitted={self.items_emitted})"
        )


StreamSource = Callable[[StreamHandle], AsyncIterator[T]]


async def _invoke(callback: Callable[..., Any], *args: Any) -> None:
    result = callback(*args)
    if inspect.isawaitable(result):
        await result


class Subscription:
    """Push-style subscription created by :meth:`Stream.subscribe`."""

    def __init__(self, handle: StreamHandle) -> None:
        self._handle = handle
        self._task: asyncio.Task[None] | None = None

    @property
    def handle(self) -> StreamHandle:
        return self._handle

    @property
    def closed(self) -> bool:
        return self._handle.terminal

    def unsubscribe(self) -> None:
        """Detach the subscriber; safe to call from inside a callback."""

        if self._handle.terminal:
            return
        self._handle.cancel()
        logger.debug("stream unsubscribed handle=%r", self._handle)
        task = self._task
        if task is None or task.done():
            return
        # From inside a callback the delivery loop sees the flag and stops by itself.
        if task is not asyncio.current_task():
            task.cancel()

    async def join(self) -> None:
        """Wait for the subscription to end.

        Re-raises the terminal error when no ``on_error`` callback consumed
        it, as well as any exception raised by a callback.
        """

        task = self._task
        if task is None:
            return
        await asyncio.wait([task])
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            raise error


class Stream(Generic[T]):
    """Lazily started sequence of items ending in completion or an error."""

    def __init__(self, source: StreamSource[T], *, name: str = "stream") -> None:
        self._source = source
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Stream(name={self._name!r})"

    def __aiter__(self) -> AsyncIterator[T]:
        return self.iterate()

    def iterate(self, handle: StreamHandle | None = None) -> AsyncIterator[T]:
        """Start a new subscription in pull mode.

        Pass a fresh ``handle`` to observe its state; calling
        ``handle.cancel()`` stops the stream before its next fetch or item.
        A handle belongs to one subscription and cannot be reused.
        """

        if handle is None:
            handle = StreamHandle()
        elif handle.state is not StreamState.IDLE:
            raise ValueError(f"stream handle already used (state={handle.state.value})")
        return self._run(handle)

    async def _run(self, handle: StreamHandle) -> AsyncIterator[T]:
        source = self._source(handle)
        try:
            async for item in source:
                if handle.cancelled:
                    return
                handle.items_emitted += 1
                yield item
                if handle.cancelled:
                    return
        except Exception as exc:
            if not handle.cancelled:
                handle.fail(exc)
                logger.error(
                    "stream failed name=%s items_emitted=%s error=%s",
                    self._name,
                    handle.items_emitted,
                    exc.__class__.__name__,
                )
            raise
        else:
            if not handle.cancelled:
                handle.complete()
                logger.info(
                    "stream completed name=%s items_emitted=%s pages_fetched=%s",
                    self._name,
                    handle.items_emitted,
                    handle.pages_fetched,
                )
        finally:
            # Early exit (break, aclose, task cancellation) lands here without a terminal state.
            handle.cancel()
            await source.aclose()

    def subscribe(
        self,
        on_next: Callable[[T], Any],
        on_error: Callable[[BaseException], Any] | None = None,
        on_completed: Callable[[], Any] | None = None,
    ) -> Subscription:
        """Start a new subscription in push mode.

        Must be called with a running event loop. Callbacks may be coroutine
        functions; the next item is not produced before they return.
        """

        handle = StreamHandle()
        subscription = Subscription(handle)
        loop = asyncio.get_running_loop()
        subscription._task = loop.create_task(
            self._deliver(handle, on_next, on_error, on_completed),
            name=f"{self._name}-subscription",
        )
        return subscription

    async def _deliver(
        self,
        handle: StreamHandle,
        on_next: Callable[[T], Any],
        on_error: Callable[[BaseException], Any] | None,
        on_completed: Callable[[], Any] | None,
    ) -> None:
        iterator = self._run(handle)
        try:
            while True:
                try:
                    item = await anext(iterator)
                except StopAsyncIteration:
                    break
                except Exception as exc:
                    if on_error is None:
                        raise
                    await _invoke(on_error, exc)
                    return
                await _invoke(on_next, item)
                if handle.cancelled:
                    return
        finally:
            await iterator.aclose()

        if handle.cancelled:
            return
        if on_completed is not None:
            await _invoke(on_completed)

    async def to_list(self) -> list[T]:
        return [item async for item in self]

    async def first(self) -> T:
        """First item of a fresh subscription; the rest is not consumed."""

        iterator = self.iterate()
        try:
            item = await anext(iterator, _MISSING)
        finally:
            await iterator.aclose()
        if item is _MISSING:
            raise ValueError(f"stream {self._name!r} completed without items")
        return item


__all__ = [
    "StreamState",
    "StreamHandle",
    "StreamSource",
    "Subscription",
    "Stream",
]
