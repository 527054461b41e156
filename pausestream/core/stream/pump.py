import asyncio
import logging
from typing import Any

from pausestream.core.errors import ProducerThrew
from pausestream.core.helpers.spawn import TaskSpawner
from pausestream.core.helpers.utils import short_repr
from pausestream.core.models.events import End, Error, Sink, Unsubscribe
from pausestream.core.models.pull import PullKind
from pausestream.core.models.state import StreamLifecycle
from pausestream.core.ports.producer import Producer
from pausestream.core.stream.gate import PauseGate


class Pump:
    """
    Pulls events from a producer one at a time while the gate is open.

    The pump runs as a single background task. Each iteration performs one
    pull, forwards the result to the sink, then yields to the event loop
    with `asyncio.sleep(0)` before the next pull. The stack therefore does
    not grow with the length of the stream, and pause() calls issued while
    an event is being delivered take effect before the next pull.

    The loop is started on every effective transition of the gate to
    "running" unless a loop is already alive: a task that is suspended
    between two pulls simply observes the state again when it wakes up.
    Nothing is pulled once the stream has ended.
    """

    def __init__(
        self,
        producer: Producer,
        gate: PauseGate,
        spawner: TaskSpawner | None = None,
        name: str = "pump",
    ) -> None:
        self._producer = producer
        self._gate = gate
        self._spawner = spawner or TaskSpawner()
        self._name = name

        self._sink: Sink | None = None
        self._detach_gate: Unsubscribe | None = None
        self._task: asyncio.Task[Any] | None = None
        self._state = StreamLifecycle.unstarted
        self._pulls = 0
        self._logger = logging.getLogger("core.stream.pump")

    @property
    def state(self) -> StreamLifecycle:
        return self._state

    @property
    def ended(self) -> bool:
        return self._state is StreamLifecycle.ended

    @property
    def pulls(self) -> int:
        """Number of successful pulls performed so far."""
        return self._pulls

    @property
    def task(self) -> asyncio.Task[Any] | None:
        return self._task

    def attach(self, sink: Sink) -> None:
        """
        Connect the pump to its sink and start following the gate.
        """
        if self.ended or self._detach_gate is not None:
            return

        self._sink = sink
        try:
            self._detach_gate = self._gate.subscribe(self._on_gate)
        except Exception:
            self._sink = None
            raise

    def detach(self) -> None:
        """
        Stop following the gate. A loop suspended between two pulls
        exits when it wakes up, an in-progress step is never interrupted.
        """
        if self._detach_gate is not None:
            self._detach_gate()
            self._detach_gate = None

        self._sink = None
        if not self.ended:
            self._state = StreamLifecycle.unstarted
            self._logger.debug(f"{self._name}: detached after {self._pulls} pulls")

    def mark_ended(self) -> None:
        if self._state is not StreamLifecycle.ended:
            self._state = StreamLifecycle.ended
            self._logger.debug(f"{self._name}: ended after {self._pulls} pulls")

    def step(self) -> None:
        """
        Perform exactly one pull and forward its outcome.
        """
        sink = self._sink
        if sink is None:
            return

        try:
            result = self._producer.pull()
        except Exception as ex:
            self._fail(sink, ex)
            return

        self._pulls += 1
        self._logger.debug(
            f"{self._name}: pulled {result.kind} {short_repr(result.value)}"
        )

        sink(result.value)

        if result.kind is PullKind.last:
            sink(End())

        if result.terminal:
            self.mark_ended()

    async def run(self) -> None:
        self._logger.debug(f"{self._name}: pumping")

        while self._state is StreamLifecycle.running:
            try:
                self.step()
            except Exception:
                # A failing subscriber stops the loop, resume() restarts it
                if self._state is StreamLifecycle.running:
                    self._state = StreamLifecycle.paused
                raise

            if self._state is not StreamLifecycle.running:
                break

            await asyncio.sleep(0)

        self._logger.debug(f"{self._name}: pump stopped, state={self._state}")

    def _on_gate(self, paused: bool) -> None:
        if self.ended:
            return

        if paused:
            self._state = StreamLifecycle.paused
            return

        if self._task is None or self._task.done():
            self._task = self._spawner.spawn(self.run(), name=self._name)
        self._state = StreamLifecycle.running

    def recover(self) -> None:
        """
        Restart the loop when the gate is open but nothing is pumping,
        which happens after a subscriber raised during delivery.
        """
        if (
            self._detach_gate is not None
            and not self._gate.paused
            and self._state is StreamLifecycle.paused
        ):
            self._on_gate(False)

    def _fail(self, sink: Sink, ex: Exception) -> None:
        error = ProducerThrew(ex)
        error.__cause__ = ex

        self._logger.error(
            f"{self._name}: producer failed after {self._pulls} pulls, stopping",
            exc_info=ex
        )
        self._state = StreamLifecycle.ended
        sink(Error(error))
