from collections.abc import Iterator
from typing import Any

from pausestream.core.errors import InvalidProducerKind
from pausestream.core.models.events import is_end
from pausestream.core.models.pull import PullResult
from pausestream.core.ports.producer import Producer


class IteratorProducer(Producer):
    """
    Producer backed by an iterator, typically a generator object.

    A yielded End terminates the stream right away. When the iterator is
    exhausted, the value carried by StopIteration (the generator's return
    value, None if it returns nothing) is delivered as the final event,
    followed by a synthetic End unless it already is one.
    """

    def __init__(self, iterator: Iterator[Any]) -> None:
        if not hasattr(type(iterator), "__next__"):
            raise InvalidProducerKind(
                f"Expected an iterator, got {type(iterator).__name__}"
            )
        self._iterator = iterator

    def pull(self) -> PullResult:
        try:
            value = next(self._iterator)
        except StopIteration as stop:
            if is_end(stop.value):
                return PullResult.end(stop.value)
            return PullResult.last(stop.value)

        if is_end(value):
            return PullResult.end(value)
        return PullResult.of(value)
