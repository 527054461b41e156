import inspect
from collections.abc import Callable
from typing import Any

from pausestream.core.errors import InvalidProducerKind
from pausestream.core.models.events import is_end
from pausestream.core.models.pull import PullResult
from pausestream.core.ports.producer import Producer


class CallbackProducer(Producer):
    """
    Producer backed by a zero-argument callable.

    Every call returns the next event. Returning an End instance terminates
    the stream; any other return value, None included, is an ordinary event.
    """

    def __init__(self, func: Callable[[], Any]) -> None:
        self._check(func)
        self._func = func

    def pull(self) -> PullResult:
        value = self._func()
        if is_end(value):
            return PullResult.end(value)
        return PullResult.of(value)

    @staticmethod
    def _check(func: Any) -> None:
        if not callable(func) or hasattr(type(func), "__next__"):
            raise InvalidProducerKind(
                f"Expected a zero-argument callable, got {type(func).__name__}"
            )

        # Calling a generator function only creates a generator, it never
        # produces events by itself.
        if (
            inspect.isgeneratorfunction(func)
            or inspect.isasyncgenfunction(func)
            or inspect.iscoroutinefunction(func)
        ):
            raise InvalidProducerKind(
                f"{func.__qualname__} must be invoked before being used as a producer"
            )

        try:
            signature = inspect.signature(func)
        except (TypeError, ValueError):
            # Some builtins do not expose a signature
            return

        try:
            signature.bind()
        except TypeError as ex:
            raise InvalidProducerKind(
                f"Producer callable must accept no arguments: {ex}"
            ) from ex
