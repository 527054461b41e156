import asyncio
import logging
from typing import Any, Coroutine


class TaskSpawner:
    """
    Spawns background asyncio tasks and keeps track of them until completion.

    Tasks that fail are logged with their traceback, cancelled tasks are
    silently dropped. Callers can wait until every tracked task is finished
    with `join()`.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._tasks: set[asyncio.Task[Any]] = set()
        self._logger = logging.getLogger("core.helpers.spawn")

    @property
    def remaining_tasks(self) -> int:
        return len(self._tasks)

    def spawn(self, coro: Coroutine[Any, Any, None], name: str | None = None) -> asyncio.Task[Any]:
        """
        Schedule a coroutine on the spawner's loop, or on the running loop
        if the spawner was created without one.
        """
        try:
            loop = self._loop or asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            raise

        task = loop.create_task(coro, name=name)
        task.add_done_callback(self._on_done)
        self._tasks.add(task)
        return task

    async def join(self) -> None:
        while self._tasks:
            await asyncio.wait(set(self._tasks))

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)

        if task.cancelled():
            return

        if ex := task.exception():
            self._logger.error(
                f"Error occurred in task {task.get_name()}: {ex}",
                exc_info=ex
            )
