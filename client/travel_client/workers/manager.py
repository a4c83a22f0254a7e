"""Worker manager for coordinating background tasks."""

import asyncio
import logging
from typing import Dict

from .base import BaseWorker

logger = logging.getLogger(__name__)


class WorkerManager:
    """
    Manages the background workers of one application context.

    Coordinates starting, stopping, and monitoring of registered workers.
    """

    def __init__(self):
        """Initialize the worker manager."""
        self.workers: Dict[str, BaseWorker] = {}

    def register(self, key: str, worker: BaseWorker) -> None:
        if key in self.workers:
            raise ValueError(f"Worker already registered: {key}")
        self.workers[key] = worker

    async def start_all(self) -> None:
        """Start all workers."""
        logger.info("Starting workers", extra={"workers": sorted(self.workers)})

        for name, worker in self.workers.items():
            try:
                await worker.start()
                logger.info("Worker registered and started", extra={"worker_key": name})
            except Exception as e:
                logger.error("Worker failed to start", exc_info=True, extra={"worker_key": name, "error": str(e)})

        logger.info("Workers started", extra={"count": len(self.workers)})

    async def stop_all(self) -> None:
        """Stop all running workers gracefully."""
        running = {name: worker for name, worker in self.workers.items() if worker.running}
        if not running:
            return

        logger.info("Stopping workers", extra={"workers": sorted(running)})
        results = await asyncio.gather(
            *(worker.stop() for worker in running.values()),
            return_exceptions=True,
        )

        for name, result in zip(running, results):
            if isinstance(result, Exception):
                logger.error("Worker failed to stop", extra={"worker_key": name, "error": str(result)})
            else:
                logger.info("Worker stopped", extra={"worker_key": name})

        logger.info("All workers stopped")

    def get_worker(self, name: str) -> BaseWorker:
        """
        Get a specific worker by name.

        Raises:
            KeyError: If worker not found
        """
        return self.workers[name]

    def get_worker_status(self) -> Dict[str, bool]:
        """Map worker names to their running status."""
        return {name: worker.running for name, worker in self.workers.items()}
