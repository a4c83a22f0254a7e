"""Session-scoped key/value storage for persisted store snapshots."""

import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from .config import Settings, settings

logger = logging.getLogger(__name__)


class SessionStorage(ABC):
    """Key/value storage holding one JSON document per store."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the raw value stored under ``key`` or ``None``."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete ``key``; missing keys are ignored."""

    @abstractmethod
    def keys(self) -> Iterator[str]:
        """Iterate over stored keys."""

    def load_json(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Load and decode a JSON document.

        Corrupt documents are logged and treated as absent so that a bad
        snapshot never prevents a store from starting.
        """
        raw = self.get_item(key)
        if raw is None:
            return None
        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(
                "Discarding corrupt session document",
                extra={"storage_key": key, "error": str(e)},
            )
            self.remove_item(key)
            return None
        if not isinstance(document, dict):
            logger.warning("Discarding non-object session document", extra={"storage_key": key})
            self.remove_item(key)
            return None
        return document

    def save_json(self, key: str, document: Dict[str, Any]) -> None:
        self.set_item(key, json.dumps(document, separators=(",", ":"), default=str))

    def clear(self) -> None:
        for key in list(self.keys()):
            self.remove_item(key)


class MemorySessionStorage(SessionStorage):
    """In-process storage; lives as long as the owning context."""

    def __init__(self):
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self) -> Iterator[str]:
        with self._lock:
            return iter(list(self._data))


class FileSessionStorage(SessionStorage):
    """
    Directory-backed storage: one ``<key>.json`` file per entry.

    Writes go to a temporary file first and are moved into place, so a
    reader never observes a half-written snapshot.
    """

    SUFFIX = ".json"

    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}{self.SUFFIX}"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        with self._lock:
            try:
                return path.read_text(encoding="utf-8")
            except FileNotFoundError:
                return None

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        with self._lock:
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        with self._lock:
            try:
                path.unlink()
            except FileNotFoundError:
                pass

    def keys(self) -> Iterator[str]:
        with self._lock:
            names = sorted(p.name for p in self.directory.glob(f"*{self.SUFFIX}"))
        return iter(name[: -len(self.SUFFIX)] for name in names)


def create_session_storage(config: Optional[Settings] = None) -> SessionStorage:
    """Build the storage configured by ``session_storage_dir``."""
    config = config or settings
    if config.session_storage_dir:
        logger.info(
            "Using file session storage",
            extra={"directory": str(config.session_storage_dir)},
        )
        return FileSessionStorage(Path(config.session_storage_dir))
    return MemorySessionStorage()
