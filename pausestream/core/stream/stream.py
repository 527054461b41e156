import asyncio
from collections.abc import AsyncIterator, Callable
from typing import Any

from pausestream.core.models.events import End, Error, Sink, Unsubscribe, is_end, is_error

Binder = Callable[[Sink], Unsubscribe | None]
"""
Function connecting an event source to a stream. It receives the sink
through which the source pushes events and may return a callable that
disconnects the source again.
"""


def _noop() -> None:
    pass


class EventStream:
    """
    Push-based stream of events shared by any number of subscribers.

    The source is connected lazily: the binder runs when the first
    subscriber arrives and its unbind callable runs when the last one
    leaves or when the stream ends. Events are pushed to the sink given to
    the binder and dispatched synchronously to every subscriber:
    - plain values go to value observers
    - Error markers go to error observers
    - an End marker goes to end observers and terminates the stream

    Once ended, the stream releases its subscribers and answers any late
    subscriber with an immediate End.
    """

    def __init__(self, binder: Binder) -> None:
        self._binder = binder
        self._observers: list[Sink] = []
        self._unbind: Unsubscribe | None = None
        self._ended = False

    @property
    def ended(self) -> bool:
        return self._ended

    @property
    def subscribers(self) -> int:
        return len(self._observers)

    def subscribe(self, observer: Sink) -> Unsubscribe:
        """
        Register an observer receiving every event, markers included.
        """
        if self._ended:
            observer(End())
            return _noop

        self._observers.append(observer)

        if len(self._observers) == 1:
            try:
                unbind = self._binder(self._dispatch) or _noop
            except Exception:
                self._observers.remove(observer)
                raise

            if self._ended:
                unbind()
            else:
                self._unbind = unbind

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)
                if not self._observers:
                    self._release()

        return unsubscribe

    def on_value(self, func: Callable[[Any], None]) -> Unsubscribe:
        def observer(value: Any) -> None:
            if not is_end(value) and not is_error(value):
                func(value)

        return self.subscribe(observer)

    def on_error(self, func: Callable[[BaseException], None]) -> Unsubscribe:
        def observer(value: Any) -> None:
            if is_error(value):
                func(value.exception)

        return self.subscribe(observer)

    def on_end(self, func: Callable[[], None]) -> Unsubscribe:
        def observer(value: Any) -> None:
            if is_end(value):
                func()

        return self.subscribe(observer)

    def map(self, func: Callable[[Any], Any]) -> "EventStream":
        def binder(sink: Sink) -> Unsubscribe:
            def observer(value: Any) -> None:
                if is_end(value) or is_error(value):
                    sink(value)
                    return

                try:
                    mapped = func(value)
                except Exception as ex:
                    sink(Error(ex))
                    return

                sink(mapped)

            return self.subscribe(observer)

        return EventStream(binder)

    def filter(self, predicate: Callable[[Any], bool]) -> "EventStream":
        def binder(sink: Sink) -> Unsubscribe:
            def observer(value: Any) -> None:
                if is_end(value) or is_error(value):
                    sink(value)
                    return

                try:
                    keep = predicate(value)
                except Exception as ex:
                    sink(Error(ex))
                    return

                if keep:
                    sink(value)

            return self.subscribe(observer)

        return EventStream(binder)

    async def __aiter__(self) -> AsyncIterator[Any]:
        """
        Iterate over the values of the stream until it ends.

        An Error marker is raised out of the loop. Values that arrive while
        the consumer is suspended are queued for this iterator only.
        """
        queue: asyncio.Queue[Any] = asyncio.Queue()
        unsubscribe = self.subscribe(queue.put_nowait)

        try:
            while True:
                value = await queue.get()
                if is_end(value):
                    return
                if is_error(value):
                    raise value.exception
                yield value
        finally:
            unsubscribe()

    def _dispatch(self, value: Any) -> None:
        if self._ended:
            return

        if is_end(value):
            self._ended = True

        for observer in list(self._observers):
            observer(value)

        if self._ended:
            self._observers.clear()
            self._release()

    def _release(self) -> None:
        unbind, self._unbind = self._unbind, None
        if unbind is not None:
            unbind()
