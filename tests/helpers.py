import asyncio
from typing import Any

from pausestream.core.models.events import End, is_end, is_error
from pausestream.core.stream.stream import EventStream


class Recorder:
    """
    Observer collecting everything a stream delivers.
    """
    def __init__(self, stream: EventStream | None = None) -> None:
        self.events: list[Any] = []
        self.values: list[Any] = []
        self.errors: list[BaseException] = []
        self.ends = 0
        self.ended = asyncio.Event()
        self.unsubscribe = stream.subscribe(self) if stream is not None else None

    def __call__(self, value: Any) -> None:
        self.events.append(value)

        if is_end(value):
            self.ends += 1
            self.ended.set()
        elif is_error(value):
            self.errors.append(value.exception)
        else:
            self.values.append(value)

    async def wait_ended(self, timeout: float = 2.0) -> None:
        await asyncio.wait_for(self.ended.wait(), timeout)


def generate(data: list[Any]):
    for item in data:
        yield item

    return End()


def counter_callback(data: list[Any]):
    items = iter(data)

    def produce() -> Any:
        return next(items, End())

    return produce


async def spin(turns: int = 10) -> None:
    for _ in range(turns):
        await asyncio.sleep(0)
