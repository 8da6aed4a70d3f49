"""
BlockNotes — Trailing-Edge Debouncer
======================================

What:  Runs an async callback once `delay` seconds after the last trigger.
How:   Each trigger cancels the pending loop timer and schedules a new one;
       when a timer fires, the callback runs as a task on the same loop.

The loop is injectable: anything with call_later() and create_task() works,
which lets tests drive time by hand.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Set

logger = logging.getLogger(__name__)


class Debouncer:

    def __init__(
        self,
        delay: float,
        callback: Callable[[], Awaitable[None]],
        loop: Optional[Any] = None,
    ):
        self.delay = delay
        self.callback = callback
        self._loop = loop
        self._handle: Optional[Any] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def loop(self) -> Any:
        return self._loop or asyncio.get_running_loop()

    @property
    def pending(self) -> bool:
        """A timer is scheduled and has not fired yet."""
        return self._handle is not None

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    def trigger(self) -> None:
        self.cancel()
        self._handle = self.loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> asyncio.Task:
        self._handle = None
        task = self.loop.create_task(self.callback())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def flush(self) -> None:
        """Run a pending callback now instead of waiting for the timer."""
        if self._handle is None:
            return
        self._handle.cancel()
        # Tracked like a timer-fired run so wait() and aclose() see it
        await self._fire()

    async def wait(self) -> None:
        """Wait for callbacks that have already started."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def aclose(self) -> None:
        self.cancel()
        await self.wait()
