"""Background worker that keeps cached entity lists warm."""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List

from ..hooks.base import ActionResult
from ..stores.entity_store import EntityStore
from .base import BaseWorker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RefreshTarget:
    """A store list and the hook action that reloads it."""

    store: EntityStore
    reload: Callable[[], Awaitable[ActionResult]]


class CacheRefreshWorker(BaseWorker):
    """
    Refreshes lists that are about to go stale.

    A list is refreshed when it would expire before the next tick, but only
    if it was loaded at some point; the worker never fetches a domain the
    application has not asked for.
    """

    def __init__(self, targets: Dict[str, RefreshTarget], interval_seconds: float = 240):
        """
        Initialize the refresh worker.

        Args:
            targets: Refresh targets keyed by store name
            interval_seconds: How often to check for stale lists (default: 240s)
        """
        super().__init__(name="CacheRefresh", interval_seconds=interval_seconds)
        self.targets = targets

    def due(self) -> List[str]:
        """Names of the stores whose list should be refreshed now."""
        due = []
        interval_ms = int(self.interval_seconds * 1000)
        for name, target in self.targets.items():
            store = target.store
            if not store.items and store.name not in store.timestamps:
                continue
            horizon = store.max_age_ms - interval_ms
            if horizon <= 0 or not store.is_cache_valid(store.name, max_age_ms=horizon):
                due.append(name)
        return due

    async def process(self) -> None:
        """Reload every due list."""
        for name in self.due():
            result = await self.targets[name].reload()
            if result.success:
                logger.info("Refreshed cached list", extra={"store": name, "worker": self.name})
            else:
                logger.warning(
                    "Cached list refresh failed",
                    extra={"store": name, "error": result.error, "worker": self.name},
                )
