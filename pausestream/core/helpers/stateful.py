from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class StatefulSignal(Generic[T]):
    """
    Single-slot value with change notification.

    The signal always holds a current value. Observers are notified
    synchronously, in subscription order:
    - once with the current value when they subscribe
    - on every effective change afterwards

    Setting the value it already holds is a no-op: nobody is notified.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._observers: list[Callable[[T], None]] = []

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> bool:
        """
        Store a new value and notify observers.

        Returns True if the value changed, False if it was already held.
        """
        if value == self._value:
            return False

        self._value = value
        for observer in list(self._observers):
            observer(value)

        return True

    def subscribe(self, observer: Callable[[T], None]) -> Callable[[], None]:
        self._observers.append(observer)
        try:
            observer(self._value)
        except Exception:
            self._observers.remove(observer)
            raise

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    @property
    def observers(self) -> int:
        return len(self._observers)
