import asyncio

import pytest

from src.streaming.channel import DONE_SENTINEL, StreamableValue, StreamClosedError
from src.streaming.ui import BufferedUISurface


def test_done_with_payload_sets_final_value():
    stream = StreamableValue()
    assert stream.value is None
    assert stream.final is None

    stream.update('{"partial": true}')
    stream.done('{"final": true}')

    assert stream.closed
    assert stream.has_payload
    assert stream.value == '{"final": true}'
    assert stream.final == '{"final": true}'


def test_done_without_payload_carries_sentinel():
    stream = StreamableValue()
    stream.done()
    assert stream.final == DONE_SENTINEL
    assert not stream.has_payload
    assert stream.value is None


def test_writes_after_close_are_rejected():
    stream = StreamableValue()
    stream.done("x")
    with pytest.raises(StreamClosedError):
        stream.update("y")
    with pytest.raises(StreamClosedError):
        stream.done("z")
    assert stream.final == "x"


@pytest.mark.asyncio
async def test_consumer_sees_every_value_in_order():
    stream = StreamableValue()
    seen: list[str] = []

    async def consume() -> None:
        async for value in stream.updates():
            seen.append(value)

    consumer = asyncio.create_task(consume())
    await asyncio.sleep(0)
    stream.update("a")
    await asyncio.sleep(0)
    stream.update("b")
    stream.done("c")
    await asyncio.wait_for(consumer, timeout=1)

    assert seen == ["a", "b", "c"]


@pytest.mark.asyncio
async def test_late_consumer_replays_history_of_closed_stream():
    stream = StreamableValue(initial="start")
    stream.done("end")
    assert [v async for v in stream.updates()] == ["start", "end"]


def test_buffered_surface_tracks_current_node():
    ui = BufferedUISurface()
    assert ui.current is None
    ui.update("section")
    ui.update(None)
    assert ui.nodes == ["section", None]
    assert ui.current is None
