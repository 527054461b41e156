import asyncio
import logging
from collections.abc import Callable, Iterator
from typing import Any

from pausestream.bootstrap.config.settings import DemoSettings, ProducerVariant
from pausestream.core.models.events import End
from pausestream.core.stream.pausable import PausableStream, create_pausable_stream


class NumberDemo:
    """
    Streams the numbers 1..count through a pausable stream, maps them to
    squares and pauses the source once, the first time a square exceeds
    the threshold. The source is resumed after `pause_seconds`.

    Every generated number is logged by the producer itself, which shows
    that numbers stop being generated while the stream is paused, not
    merely being held back.
    """

    def __init__(self, settings: DemoSettings) -> None:
        self._settings = settings
        self._logger = logging.getLogger("bootstrap.demo")
        self.generated: list[int] = []
        self.squares: list[int] = []
        self.pauses = 0

    def make_producer(self) -> Iterator[int] | Callable[[], Any]:
        if self._settings.producer is ProducerVariant.callback:
            return self._number_callback()
        return self._number_generator()

    async def run(self) -> list[int]:
        loop = asyncio.get_running_loop()
        done: asyncio.Future[None] = loop.create_future()

        source = create_pausable_stream(
            self.make_producer(),
            initially_paused=self._settings.initially_paused
        )
        squares = source.map(lambda number: number * number)

        def on_square(square: int) -> None:
            self._logger.info(f"Square: {square}")
            self.squares.append(square)

            # Derived streams cannot be paused, the source handle is used instead
            if square > self._settings.pause_threshold and self.pauses == 0:
                self._pause_for_a_while(loop, source)

        def on_error(ex: BaseException) -> None:
            if not done.done():
                done.set_exception(ex)

        def on_end() -> None:
            if not done.done():
                done.set_result(None)

        squares.on_value(on_square)
        squares.on_error(on_error)
        squares.on_end(on_end)

        if source.paused:
            self._logger.info("Stream created paused, resuming it")
            source.resume()

        await done
        self._logger.info(
            f"Stream ended: {len(self.squares)} squares, {self.pauses} pause(s)"
        )
        return self.squares

    def _pause_for_a_while(self, loop: asyncio.AbstractEventLoop, source: PausableStream) -> None:
        self.pauses += 1
        source.pause()
        self._logger.info(f"Source paused, resuming in {self._settings.pause_seconds}s")
        loop.call_later(self._settings.pause_seconds, source.resume)

    def _number_generator(self) -> Iterator[int]:
        for number in range(1, self._settings.count + 1):
            self._generated(number)
            yield number

        return End()

    def _number_callback(self) -> Callable[[], Any]:
        numbers = iter(range(1, self._settings.count + 1))

        def produce() -> Any:
            number = next(numbers, None)
            if number is None:
                self._logger.info("Event generated: <end>")
                return End()

            self._generated(number)
            return number

        return produce

    def _generated(self, number: int) -> None:
        self._logger.info(f"Event generated: {number}")
        self.generated.append(number)
