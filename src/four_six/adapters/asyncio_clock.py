"""Wall-clock tick source running on the asyncio event loop."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

_logger = logging.getLogger(__name__)


@dataclass
class AsyncioClock:
    """Delivers one tick per interval from a task on the running loop."""

    interval_seconds: float = 1.0
    _task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, on_tick: Callable[[], None]) -> None:
        """Schedule ticks; must be called from inside a running loop."""
        if self.running:
            return
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._run(on_tick))

    def stop(self) -> None:
        """Cancel the tick task if there is one."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()

    async def _run(self, on_tick: Callable[[], None]) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time()
        while True:
            deadline += self.interval_seconds
            await asyncio.sleep(max(deadline - loop.time(), 0))
            try:
                on_tick()
            except Exception:
                _logger.exception("Timer tick failed, stopping clock")
                self._task = None
                return
