"""Image generation gate.

Image requests are started one at a time with at least ``min_delay`` seconds
between starts, but are not awaited by the gate: once started they run
concurrently and finish in any order. This keeps bursts (a page of nine new
recipes) under the provider's rate limit without serialising the requests.

Design:
  * A FIFO of task factories drained by a single dispatcher coroutine.
  * The dispatcher exits when the queue is empty and is restarted by add().
  * A failing task is logged; nothing is retried here.
"""
from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from typing import Awaitable, Callable, Deque, Optional, Set

from chefgenie.utilities.config import IMAGE_MIN_DELAY_MS

logger = logging.getLogger(__name__)

TaskFactory = Callable[[], Awaitable[None]]


class ImageRequestQueue:
    def __init__(self, min_delay: float = IMAGE_MIN_DELAY_MS / 1000, clock: Callable[[], float] = time.monotonic):
        self.min_delay = min_delay
        self._clock = clock
        self._queue: Deque[TaskFactory] = deque()
        self._processing = False
        self._last_start: Optional[float] = None
        self._running: Set[asyncio.Task] = set()
        self._dispatcher: Optional[asyncio.Task] = None

    def add(self, task: TaskFactory) -> None:
        """Queue a task; must be called from inside the running event loop."""
        self._queue.append(task)
        if not self._processing:
            self._processing = True
            self._dispatcher = asyncio.get_running_loop().create_task(self._process())

    async def _process(self) -> None:
        try:
            while self._queue:
                if self._last_start is not None:
                    wait = self.min_delay - (self._clock() - self._last_start)
                    if wait > 0:
                        await asyncio.sleep(wait)
                factory = self._queue.popleft()
                self._last_start = self._clock()
                running = asyncio.get_running_loop().create_task(self._run(factory))
                self._running.add(running)
                running.add_done_callback(self._running.discard)
        finally:
            self._processing = False

    @staticmethod
    async def _run(factory: TaskFactory) -> None:
        try:
            await factory()
        except Exception:
            logger.exception("Image queue task failed")

    async def submit(self, task: Callable[[], Awaitable[Optional[str]]]) -> Optional[str]:
        """Run ``task`` through the gate and wait for its result (None on failure)."""
        future: asyncio.Future = asyncio.get_running_loop().create_future()

        async def wrapped() -> None:
            try:
                result = await task()
            except Exception:
                logger.exception("Image request failed")
                result = None
            if not future.done():
                future.set_result(result)

        self.add(wrapped)
        return await future

    async def drain(self) -> None:
        """Wait until nothing is queued or running (used on shutdown and in tests)."""
        while self._queue or self._processing or self._running:
            if self._dispatcher is not None and not self._dispatcher.done():
                await self._dispatcher
            if self._running:
                await asyncio.gather(*list(self._running), return_exceptions=True)
