from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import pytest

from gh_stream_client.core.errors import NotFoundError
from gh_stream_client.core.stream import Stream, StreamHandle, StreamState


def _numbers(count: int, *, fail_with: Exception | None = None) -> Stream[int]:
    async def _source(handle: StreamHandle) -> AsyncIterator[int]:
        handle.begin_fetch(1)
        await asyncio.sleep(0)
        handle.begin_emit()
        for value in range(count):
            yield value
        if fail_with is not None:
            raise fail_with

    return Stream(_source, name="numbers")


def test_new_handle_is_idle():
    handle = StreamHandle()
    assert handle.state is StreamState.IDLE
    assert handle.terminal is False
    assert "idle" in repr(handle)


def test_handle_terminal_states_are_final():
    handle = StreamHandle()
    handle.complete()
    handle.cancel()
    handle.fail(RuntimeError("late"))
    assert handle.state is StreamState.COMPLETED
    assert handle.error is None


@pytest.mark.asyncio
async def test_to_list_and_first():
    stream = _numbers(3)
    assert await stream.to_list() == [0, 1, 2]
    assert await stream.first() == 0


@pytest.mark.asyncio
async def test_first_on_empty_stream_raises_value_error():
    with pytest.raises(ValueError, match="numbers"):
        await _numbers(0).first()


@pytest.mark.asyncio
async def test_first_stops_consuming_after_first_item():
    handle = StreamHandle()
    produced: list[int] = []

    async def _source(h: StreamHandle) -> AsyncIterator[int]:
        for value in range(5):
            produced.append(value)
            yield value

    iterator = Stream(_source).iterate(handle)
    assert await anext(iterator) == 0
    await iterator.aclose()
    assert produced == [0]
    assert handle.state is StreamState.CANCELLED


@pytest.mark.asyncio
async def test_failed_stream_records_error_on_handle():
    error = NotFoundError("gone")
    handle = StreamHandle()
    received: list[int] = []

    with pytest.raises(NotFoundError):
        async for value in _numbers(2, fail_with=error).iterate(handle):
            received.append(value)

    assert received == [0, 1]
    assert handle.state is StreamState.FAILED
    assert handle.error is error
    assert handle.items_emitted == 2


@pytest.mark.asyncio
async def test_subscribe_delivers_items_then_completion():
    events: list[object] = []
    subscription = _numbers(2).subscribe(
        events.append,
        on_error=lambda exc: events.append(("error", exc)),
        on_completed=lambda: events.append("done"),
    )
    await subscription.join()
    assert events == [0, 1, "done"]
    assert subscription.handle.state is StreamState.COMPLETED


@pytest.mark.asyncio
async def test_subscribe_awaits_coroutine_callbacks():
    events: list[object] = []

    async def on_next(value: int) -> None:
        await asyncio.sleep(0)
        events.append(value)

    async def on_completed() -> None:
        events.append("done")

    subscription = _numbers(3).subscribe(on_next, on_completed=on_completed)
    await subscription.join()
    assert events == [0, 1, 2, "done"]


@pytest.mark.asyncio
async def test_join_reraises_error_without_on_error_callback():
    received: list[int] = []
    subscription = _numbers(1, fail_with=NotFoundError("gone")).subscribe(received.append)
    with pytest.raises(NotFoundError):
        await subscription.join()
    assert received == [0]


@pytest.mark.asyncio
async def test_error_is_delivered_exactly_once_instead_of_completion():
    events: list[object] = []
    subscription = _numbers(1, fail_with=NotFoundError("gone")).subscribe(
        events.append,
        on_error=lambda exc: events.append(type(exc).__name__),
        on_completed=lambda: events.append("done"),
    )
    await subscription.join()
    assert events == [0, "NotFoundError"]


@pytest.mark.asyncio
async def test_callback_exception_surfaces_from_join():
    def on_next(value: int) -> None:
        raise RuntimeError("subscriber bug")

    subscription = _numbers(2).subscribe(on_next, on_error=lambda exc: None)
    with pytest.raises(RuntimeError, match="subscriber bug"):
        await subscription.join()


@pytest.mark.asyncio
async def test_unsubscribe_before_start_runs_nothing():
    started: list[bool] = []

    async def _source(handle: StreamHandle) -> AsyncIterator[int]:
        started.append(True)
        yield 1

    subscription = Stream(_source).subscribe(lambda value: None)
    subscription.unsubscribe()
    subscription.unsubscribe()
    await subscription.join()

    assert started == []
    assert subscription.handle.state is StreamState.CANCELLED


def test_subscribe_requires_running_loop():
    with pytest.raises(RuntimeError):
        _numbers(1).subscribe(lambda value: None)


@pytest.mark.asyncio
async def test_iterate_rejects_a_used_handle():
    handle = StreamHandle()
    stream = _numbers(2)
    assert [value async for value in stream.iterate(handle)] == [0, 1]
    assert handle.state is StreamState.COMPLETED

    with pytest.raises(ValueError, match="already used"):
        stream.iterate(handle)
