import sys

import pytest
from unittest.mock import Mock

from pausestream.core.errors import ProducerThrew
from pausestream.core.models.events import End, is_end
from pausestream.core.models.state import StreamLifecycle
from pausestream.core.producers.callback import CallbackProducer
from pausestream.core.producers.iterator import IteratorProducer
from pausestream.core.stream.gate import PauseGate
from pausestream.core.stream.pump import Pump
from tests.helpers import Recorder, counter_callback, generate, spin


def make_pump(producer, spawner, paused=False):
    gate = PauseGate(paused)
    return Pump(producer, gate, spawner=spawner), gate


@pytest.mark.ut
@pytest.mark.asyncio
async def test_nothing_is_pulled_before_attach(spawner):
    producer = Mock()
    pump, _ = make_pump(producer, spawner)

    await spin()

    producer.pull.assert_not_called()
    assert pump.state is StreamLifecycle.unstarted


@pytest.mark.ut
@pytest.mark.asyncio
async def test_pump_delivers_everything_then_stops(spawner):
    pump, _ = make_pump(IteratorProducer(generate([1, 2, 3])), spawner)
    recorder = Recorder()

    pump.attach(recorder)
    await spawner.join()

    assert recorder.events == [1, 2, 3, End()]
    assert pump.state is StreamLifecycle.ended
    assert pump.pulls == 4


@pytest.mark.ut
@pytest.mark.asyncio
async def test_synthetic_end_after_last_value(spawner):
    pump, _ = make_pump(IteratorProducer(iter(["a"])), spawner)
    recorder = Recorder()

    pump.attach(recorder)
    await spawner.join()

    assert recorder.events == ["a", None, End()]


@pytest.mark.ut
@pytest.mark.asyncio
async def test_initially_paused_pump_never_pulls(spawner):
    producer = Mock()
    pump, gate = make_pump(producer, spawner, paused=True)

    pump.attach(Recorder())
    await spin()

    producer.pull.assert_not_called()
    assert pump.state is StreamLifecycle.paused
    assert pump.task is None


@pytest.mark.ut
@pytest.mark.asyncio
async def test_pause_from_sink_withholds_next_event(spawner):
    pump, gate = make_pump(CallbackProducer(counter_callback(list(range(10)))), spawner)
    received = []

    def sink(value):
        received.append(value)
        if value == 2:
            gate.pause()

    pump.attach(sink)
    await spawner.join()
    await spin()

    assert received == [0, 1, 2]
    assert pump.pulls == 3
    assert pump.state is StreamLifecycle.paused


@pytest.mark.ut
@pytest.mark.asyncio
async def test_toggling_between_pulls_keeps_a_single_loop(spawner):
    pump, gate = make_pump(CallbackProducer(counter_callback(list(range(50)))), spawner)
    recorder = Recorder()

    pump.attach(recorder)
    await spin(3)
    task = pump.task

    # The loop is suspended between two pulls
    gate.pause()
    gate.resume()
    gate.resume()

    assert pump.task is task
    assert spawner.remaining_tasks == 1

    await spawner.join()
    assert recorder.values == list(range(50))
    assert recorder.ends == 1


@pytest.mark.ut
@pytest.mark.asyncio
async def test_resume_after_pause_restarts_loop(spawner):
    pump, gate = make_pump(CallbackProducer(counter_callback([1, 2, 3])), spawner)
    recorder = Recorder()

    def sink(value):
        recorder(value)
        if value == 1:
            gate.pause()

    pump.attach(sink)
    await spawner.join()
    first = pump.task
    assert first.done()

    gate.resume()
    assert pump.task is not first

    await spawner.join()
    assert recorder.events == [1, 2, 3, End()]


@pytest.mark.ut
@pytest.mark.asyncio
async def test_no_pull_after_end(spawner):
    producer = Mock()
    producer.pull.side_effect = CallbackProducer(counter_callback([1])).pull
    pump, gate = make_pump(producer, spawner)

    pump.attach(Recorder())
    await spawner.join()

    gate.pause()
    gate.resume()
    await spin()

    assert producer.pull.call_count == 2
    assert pump.task.done()


@pytest.mark.ut
@pytest.mark.asyncio
async def test_producer_failure_is_fatal(spawner, caplog):
    calls = []

    def produce():
        calls.append(1)
        if len(calls) == 2:
            raise ValueError("boom")
        return len(calls)

    pump, gate = make_pump(CallbackProducer(produce), spawner)
    recorder = Recorder()

    pump.attach(recorder)
    await spawner.join()

    gate.pause()
    gate.resume()
    await spin()

    assert recorder.values == [1]
    assert recorder.ends == 0
    assert len(recorder.errors) == 1

    error = recorder.errors[0]
    assert isinstance(error, ProducerThrew)
    assert isinstance(error.original, ValueError)
    assert error.__cause__ is error.original

    assert len(calls) == 2
    assert pump.state is StreamLifecycle.ended
    assert "producer failed" in caplog.text


@pytest.mark.ut
@pytest.mark.asyncio
async def test_detach_stops_pulling(spawner):
    pump, gate = make_pump(CallbackProducer(counter_callback(list(range(100)))), spawner)
    recorder = Recorder()

    pump.attach(recorder)
    await spin(5)
    pump.detach()
    await spawner.join()

    delivered = list(recorder.values)
    assert pump.state is StreamLifecycle.unstarted
    assert delivered == list(range(len(delivered)))

    # Production continues where it stopped
    pump.attach(recorder)
    await spawner.join()
    assert recorder.values == list(range(100))


@pytest.mark.ut
@pytest.mark.asyncio
async def test_stack_depth_does_not_grow(spawner):
    depths = []

    def depth():
        frame, n = sys._getframe(), 0
        while frame is not None:
            frame, n = frame.f_back, n + 1
        return n

    items = iter(range(5000))

    def produce():
        depths.append(depth())
        return next(items, End())

    pump, _ = make_pump(CallbackProducer(produce), spawner)
    recorder = Recorder()

    pump.attach(recorder)
    await spawner.join()

    assert len(recorder.values) == 5000
    assert is_end(recorder.events[-1])
    assert max(depths) == min(depths)
