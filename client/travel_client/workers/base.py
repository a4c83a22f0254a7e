"""Periodic client-side tasks driven by the application's event loop."""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)


class BaseWorker(ABC):
    """
    A task that runs ``process`` on a fixed tick inside the client process.

    Workers share the event loop with the hook actions they drive, so a
    tick never overlaps the previous one. A tick that raises is counted in
    ``consecutive_failures`` and the loop carries on; the next successful
    tick resets the count.
    """

    def __init__(self, name: str, interval_seconds: float = 60):
        """
        Args:
            name: Worker name used in log records
            interval_seconds: Time between the starts of two ticks
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.name = name
        self.interval_seconds = interval_seconds
        self.ticks = 0
        self.consecutive_failures = 0
        self.last_error: Optional[str] = None
        self._running = False
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._running

    @abstractmethod
    async def process(self) -> None:
        """Run one tick."""

    async def start(self) -> None:
        if self._running:
            logger.warning("Worker already running", extra={"worker": self.name})
            return

        self._running = True
        self._task = asyncio.create_task(self._run(), name=f"worker:{self.name}")
        logger.info("Worker started", extra={"worker": self.name, "interval_seconds": self.interval_seconds})

    async def stop(self) -> None:
        """Cancel the loop and wait for the current tick to unwind."""
        if not self._running:
            logger.warning("Worker not running", extra={"worker": self.name})
            return

        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        logger.info("Worker stopped", extra={"worker": self.name, "ticks": self.ticks})

    async def _run(self) -> None:
        while self._running:
            started = time.monotonic()
            try:
                await self.process()
            except asyncio.CancelledError:
                break
            except Exception as e:
                self.consecutive_failures += 1
                self.last_error = str(e) or type(e).__name__
                logger.error(
                    "Worker tick failed",
                    exc_info=True,
                    extra={"worker": self.name, "consecutive_failures": self.consecutive_failures},
                )
            else:
                self.consecutive_failures = 0
                self.last_error = None
                logger.debug(
                    "Worker tick completed",
                    extra={"worker": self.name, "duration_seconds": time.monotonic() - started},
                )
            finally:
                self.ticks += 1

            try:
                # Always yield to the loop, even when a tick overran the interval
                await asyncio.sleep(max(0, self.interval_seconds - (time.monotonic() - started)))
            except asyncio.CancelledError:
                break
