"""
Frame Clock
===========

Repeating tick scheduler on the asyncio event loop.

    clock = FrameClock(fps=30)
    handle = clock.schedule(app.tick)
    ...
    handle.cancel()      # no further ticks
    await handle.wait()  # loop has exited

Design Rules:
    - At most one tick in flight; the next tick is scheduled only after
      the previous one returns
    - Ticks are synchronous callables and are never preempted
    - cancel() is cooperative: a tick already running completes
    - An exception in one tick is logged and counted, the loop continues
"""

import asyncio
import logging
import time
from typing import Callable, Optional


logger = logging.getLogger(__name__)


TickCallback = Callable[[], None]


class TickHandle:
    """
    Cancel handle for a scheduled tick loop.

    Attributes:
        ticks: Number of ticks completed
        errors: Number of ticks that raised
    """

    def __init__(self) -> None:
        self._cancelled = asyncio.Event()
        self._task: Optional[asyncio.Task] = None
        self.ticks: int = 0
        self.errors: int = 0

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def cancel(self) -> None:
        """Deregister future ticks."""
        self._cancelled.set()

    async def wait(self) -> None:
        """Wait for the tick loop to exit."""
        if self._task is not None:
            await self._task

    def metrics(self) -> dict:
        return {
            "ticks": self.ticks,
            "tick_errors": self.errors,
            "running": self.running,
        }


class FrameClock:
    """
    Fixed-rate frame clock.

    Example:
        clock = FrameClock(fps=30)
        handle = clock.schedule(lambda: print("tick"))
        await asyncio.sleep(1.0)
        handle.cancel()
        await handle.wait()
    """

    def __init__(self, fps: float = 30.0, log_every_n_ticks: int = 300) -> None:
        """
        Initialize frame clock.

        Args:
            fps: Target ticks per second. Must be > 0.
            log_every_n_ticks: Log a summary every N ticks
        """
        if fps <= 0:
            raise ValueError("fps must be > 0")

        self.fps = fps
        self.interval = 1.0 / fps
        self.log_every_n_ticks = log_every_n_ticks

    def schedule(self, callback: TickCallback) -> TickHandle:
        """
        Start calling `callback` once per frame interval.

        Must be called from within a running event loop.

        Args:
            callback: Synchronous tick function

        Returns:
            TickHandle for cancellation and metrics
        """
        handle = TickHandle()
        handle._task = asyncio.get_running_loop().create_task(
            self._run(callback, handle),
            name="frame_clock",
        )
        logger.info(f"FrameClock started at {self.fps:g} fps")
        return handle

    async def _run(self, callback: TickCallback, handle: TickHandle) -> None:
        next_deadline = time.perf_counter()

        while not handle.cancelled:
            try:
                callback()
            except Exception as e:
                handle.errors += 1
                logger.error(f"Tick error: {e}", exc_info=True)
            handle.ticks += 1

            if handle.ticks % self.log_every_n_ticks == 0:
                logger.info(
                    f"FrameClock [tick {handle.ticks}]: errors={handle.errors}"
                )

            # Skip missed frames instead of bursting to catch up
            next_deadline += self.interval
            now = time.perf_counter()
            if next_deadline < now:
                next_deadline = now

            try:
                await asyncio.wait_for(
                    handle._cancelled.wait(),
                    timeout=next_deadline - now,
                )
            except asyncio.TimeoutError:
                pass

        logger.info(f"FrameClock stopped after {handle.ticks} ticks")
