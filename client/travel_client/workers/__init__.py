"""Background workers for the travel client."""

from .base import BaseWorker
from .manager import WorkerManager
from .refresh_worker import CacheRefreshWorker, RefreshTarget

__all__ = ["BaseWorker", "CacheRefreshWorker", "RefreshTarget", "WorkerManager"]
