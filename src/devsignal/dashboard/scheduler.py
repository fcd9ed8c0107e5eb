import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from logging import Logger
from types import TracebackType
from typing import Any, Self

from fastmcp.utilities.logging import get_logger

from devsignal.settings import REFRESH_INTERVAL_SECONDS

logger: Logger = get_logger(name=__name__)


class RefreshScheduler:
    """Runs a refresh callback now and then every `interval` seconds until stopped.

    The scheduler owns its task. Once `stop` returns, the callback never fires again.
    """

    callback: Callable[[], Awaitable[Any]]
    interval: float

    def __init__(self, callback: Callable[[], Awaitable[Any]], interval: float = REFRESH_INTERVAL_SECONDS):
        if interval <= 0:
            msg = "The refresh interval must be positive."
            raise ValueError(msg)

        self.callback = callback
        self.interval = interval
        self.runs: int = 0
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return

        self._task = asyncio.create_task(self._run(), name=f"refresh-every-{self.interval}s")

    async def stop(self) -> None:
        if self._task is None:
            return

        task, self._task = self._task, None

        _ = task.cancel()

        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run(self) -> None:
        while True:
            try:
                await self.callback()
            except Exception:
                logger.exception("Scheduled refresh failed")

            self.runs += 1

            await asyncio.sleep(self.interval)

    async def __aenter__(self) -> Self:
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.stop()
