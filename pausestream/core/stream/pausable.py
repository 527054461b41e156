import logging
from typing import Any, Callable

from pausestream.core.helpers.spawn import TaskSpawner
from pausestream.core.models.events import Sink, Unsubscribe, is_end
from pausestream.core.models.state import StreamLifecycle
from pausestream.core.producers.factory import as_producer
from pausestream.core.stream.gate import PauseGate
from pausestream.core.stream.pump import Pump
from pausestream.core.stream.stream import EventStream


class SinkAdapter:
    """
    Sink placed between the pump and the stream dispatcher.

    It latches the end of the stream before an End marker is delivered,
    so a subscriber calling resume() while handling End cannot trigger
    another pull.
    """

    def __init__(self, sink: Sink, on_end: Callable[[], None]) -> None:
        self._sink = sink
        self._on_end = on_end

    def __call__(self, value: Any) -> None:
        if is_end(value):
            self._on_end()
        self._sink(value)


class PausableStream(EventStream):
    """
    Event stream whose production can be paused and resumed.

    While paused the producer is not invoked at all, so nothing is buffered.
    pause() and resume() are idempotent and become no-ops once the stream
    has ended. Streams derived with map() or filter() are plain EventStreams:
    keep a reference to this handle to control the source.

    Production starts when the first subscriber attaches.
    """

    def __init__(
        self,
        producer: Any,
        initially_paused: bool = False,
        spawner: TaskSpawner | None = None,
        name: str = "pausable-stream",
    ) -> None:
        self._gate = PauseGate(initially_paused)
        self._pump = Pump(as_producer(producer), self._gate, spawner=spawner, name=name)
        self._name = name
        self._logger = logging.getLogger("core.stream.pausable")
        super().__init__(self._bind)

    @property
    def paused(self) -> bool:
        return self._gate.paused

    @property
    def state(self) -> StreamLifecycle:
        return self._pump.state

    @property
    def pump(self) -> Pump:
        return self._pump

    def pause(self) -> None:
        if self._pump.ended:
            return

        if not self._gate.paused:
            self._logger.debug(f"{self._name}: pause requested")
        self._gate.pause()

    def resume(self) -> None:
        if self._pump.ended:
            return

        if self._gate.paused:
            self._logger.debug(f"{self._name}: resume requested")
            self._gate.resume()
        else:
            self._pump.recover()

    def _bind(self, sink: Sink) -> Unsubscribe:
        self._pump.attach(SinkAdapter(sink, self._pump.mark_ended))
        return self._pump.detach


def create_pausable_stream(
    producer: Any,
    initially_paused: bool = False,
    spawner: TaskSpawner | None = None,
) -> PausableStream:
    """
    Create a pausable stream from an iterator or a zero-argument callable.

    Raises InvalidProducerKind synchronously for any other kind of object,
    before anything is pulled.
    """
    return PausableStream(producer, initially_paused=initially_paused, spawner=spawner)
