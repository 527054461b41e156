from typing import Any

from pausestream.core.errors import InvalidProducerKind
from pausestream.core.ports.producer import Producer
from pausestream.core.producers.callback import CallbackProducer
from pausestream.core.producers.iterator import IteratorProducer


def as_producer(source: Any) -> Producer:
    """
    Wrap a user supplied event source into a Producer.

    Iterators are checked first: an object that is both an iterator and
    callable is pulled with next(), not called.
    """
    if isinstance(source, (CallbackProducer, IteratorProducer)):
        return source

    if hasattr(type(source), "__next__"):
        return IteratorProducer(source)

    if callable(source):
        return CallbackProducer(source)

    raise InvalidProducerKind(
        f"Expected an iterator or a zero-argument callable, got {type(source).__name__}"
    )
