from collections.abc import Callable

from pausestream.core.helpers.stateful import StatefulSignal
from pausestream.core.models.events import Unsubscribe


class PauseGate:
    """
    Binary stop/go control of a single stream.

    The gate holds the paused flag in a StatefulSignal, so repeated
    pause() or resume() calls do not notify anybody: only effective
    transitions reach the observer, which is how the pump avoids being
    started twice.
    """

    def __init__(self, initially_paused: bool = False) -> None:
        self._signal = StatefulSignal(bool(initially_paused))

    @property
    def paused(self) -> bool:
        return self._signal.get()

    def pause(self) -> None:
        self._signal.set(True)

    def resume(self) -> None:
        self._signal.set(False)

    def subscribe(self, observer: Callable[[bool], None]) -> Unsubscribe:
        """
        Observe the paused flag. The observer is called at once with
        the current value, then on every change.
        """
        return self._signal.subscribe(observer)
