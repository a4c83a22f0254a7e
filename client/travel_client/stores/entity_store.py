"""Generic cached entity store shared by every domain."""

import logging
import threading
import time
from dataclasses import dataclass, field
from operator import attrgetter
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Mapping,
    Optional,
    Sequence,
    Type,
    TypeVar,
    Union,
)

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from ..core.storage import MemorySessionStorage, SessionStorage
from ..schemas.common import FilterSpec
from .filters import Predicate, SearchField, apply_filters

logger = logging.getLogger(__name__)

T = TypeVar("T")
F = TypeVar("F", bound=FilterSpec)

DEFAULT_MAX_AGE_MS = 5 * 60 * 1000
SNAPSHOT_VERSION = 1

Clock = Callable[[], int]
Listener = Callable[["EntityStore"], None]


def system_clock() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class StoreConfig(Generic[T, F]):
    """
    Per-domain description of an entity store.

    Attributes:
        name: Primary cache category and metrics label, e.g. ``bookings``
        storage_name: Session storage key, e.g. ``booking-storage``
        entity_type: Pydantic model of the list entries
        filter_type: ``FilterSpec`` subclass for structured filters
        search_fields: Text extractors the search query is matched against
        predicates: One predicate per ``filter_type`` field
        extras: Auxiliary payloads (stats, popular, lookups) by name and type
        mirrored_extras: Extras holding entity lists that follow
            ``update``/``remove`` on the main list
        id_of: Identifier accessor
    """

    name: str
    storage_name: str
    entity_type: Type[T]
    filter_type: Type[F]
    search_fields: Sequence[SearchField]
    predicates: Mapping[str, Predicate]
    extras: Mapping[str, Any] = field(default_factory=dict)
    mirrored_extras: Sequence[str] = ()
    id_of: Callable[[Any], Any] = attrgetter("id")

    def __post_init__(self):
        missing = set(self.filter_type.model_fields) - set(self.predicates)
        if missing:
            raise ValueError(f"Store '{self.name}' has no predicate for filter fields: {sorted(missing)}")
        unknown = set(self.mirrored_extras) - set(self.extras)
        if unknown:
            raise ValueError(f"Store '{self.name}' mirrors undeclared extras: {sorted(unknown)}")


@dataclass
class CategoryState:
    """Loading/error bookkeeping for one cache category."""

    in_flight: int = 0
    error: Optional[str] = None
    sequence: int = 0

    @property
    def loading(self) -> bool:
        return self.in_flight > 0


class EntityStore(Generic[T, F]):
    """
    In-memory store of one domain's entities.

    Holds the authoritative list, the selected entity, the filtered view
    derived from the list plus the search query and filter spec, loading and
    error state per cache category, cache timestamps and domain extras.

    Every mutation is applied atomically under a re-entrant lock, the
    filtered view is recomputed before the lock is released, and
    subscribers are notified afterwards. The list, extras and timestamps are
    written to session storage whenever they change; loading flags, errors,
    the selection, the query and the filters are never persisted.
    """

    def __init__(
        self,
        config: StoreConfig[T, F],
        storage: Optional[SessionStorage] = None,
        clock: Optional[Clock] = None,
        max_age_ms: int = DEFAULT_MAX_AGE_MS,
    ):
        if max_age_ms <= 0:
            raise ValueError("max_age_ms must be positive")

        self.config = config
        self.storage = storage or MemorySessionStorage()
        self.clock = clock or system_clock
        self.max_age_ms = max_age_ms

        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._list_adapter = TypeAdapter(List[config.entity_type])
        self._extra_adapters = {name: TypeAdapter(tp) for name, tp in config.extras.items()}

        self._items: List[T] = []
        self._filtered: List[T] = []
        self._selected: Optional[T] = None
        self._search_query = ""
        self._filters: F = config.filter_type()
        self._extras: Dict[str, Any] = {}
        self._timestamps: Dict[str, int] = {}
        self._categories: Dict[str, CategoryState] = {}

        self._rehydrate()

    def __repr__(self) -> str:
        return f"<EntityStore {self.config.name} items={len(self._items)}>"

    @property
    def name(self) -> str:
        return self.config.name

    # Read access

    @property
    def items(self) -> List[T]:
        with self._lock:
            return list(self._items)

    @property
    def filtered_items(self) -> List[T]:
        with self._lock:
            return list(self._filtered)

    @property
    def selected(self) -> Optional[T]:
        return self._selected

    @property
    def search_query(self) -> str:
        return self._search_query

    @property
    def filters(self) -> F:
        return self._filters

    @property
    def timestamps(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._timestamps)

    @property
    def loading(self) -> bool:
        return self.is_loading(self.config.name)

    @property
    def error(self) -> Optional[str]:
        return self.get_error(self.config.name)

    def get(self, entity_id: Any) -> Optional[T]:
        with self._lock:
            for item in self._items:
                if self.config.id_of(item) == entity_id:
                    return item
        return None

    def get_extra(self, name: str, default: Any = None) -> Any:
        self._check_extra(name)
        with self._lock:
            return self._extras.get(name, default)

    def is_loading(self, category: str) -> bool:
        with self._lock:
            state = self._categories.get(category)
            return state.loading if state else False

    def get_error(self, category: str) -> Optional[str]:
        with self._lock:
            state = self._categories.get(category)
            return state.error if state else None

    # List mutators

    def set_items(self, items: Sequence[T]) -> None:
        """Replace the whole list (a successful "get all")."""
        with self._lock:
            self._items = list(items)
            self._recompute()
        self._changed(persist=True)

    def add(self, entity: T) -> None:
        with self._lock:
            self._items.append(entity)
            self._recompute()
        self._changed(persist=True)

    def update(self, entity: T) -> bool:
        """
        Replace the entity with the same id, keeping its position.

        The selection and mirrored extras follow the update. Returns whether
        the main list contained the entity.
        """
        with self._lock:
            found = self._replace(entity)
            self._recompute()
        self._changed(persist=True)
        return found

    def merge(self, entities: Sequence[T]) -> None:
        """
        Upsert a batch: known ids are replaced in place, new ones appended.

        Partial server results (filter and by-status lookups) go through
        here so entities the batch does not mention stay in the list.
        """
        with self._lock:
            for entity in entities:
                if not self._replace(entity):
                    self._items.append(entity)
            self._recompute()
        self._changed(persist=True)

    def _replace(self, entity: T) -> bool:
        entity_id = self.config.id_of(entity)
        found = False
        for index, item in enumerate(self._items):
            if self.config.id_of(item) == entity_id:
                self._items[index] = entity
                found = True
                break
        if self._selected is not None and self.config.id_of(self._selected) == entity_id:
            self._selected = entity
        for name in self.config.mirrored_extras:
            entries = self._extras.get(name)
            if entries:
                self._extras[name] = [
                    entity if self.config.id_of(e) == entity_id else e for e in entries
                ]
        return found

    def remove(self, entity_id: Any) -> bool:
        """Drop the entity with ``entity_id``; clears the selection if it pointed there."""
        with self._lock:
            before = len(self._items)
            self._items = [item for item in self._items if self.config.id_of(item) != entity_id]
            removed = len(self._items) != before
            if self._selected is not None and self.config.id_of(self._selected) == entity_id:
                self._selected = None
            for name in self.config.mirrored_extras:
                entries = self._extras.get(name)
                if entries:
                    self._extras[name] = [e for e in entries if self.config.id_of(e) != entity_id]
            self._recompute()
        self._changed(persist=True)
        return removed

    def select(self, entity: Optional[T]) -> None:
        with self._lock:
            self._selected = entity
        self._changed()

    def set_search_query(self, query: str) -> None:
        with self._lock:
            self._search_query = query or ""
            self._recompute()
        self._changed()

    def set_filters(self, filters: Union[F, Mapping[str, Any], None]) -> None:
        """Replace the filter spec; ``None`` clears every filter."""
        if filters is None:
            spec = self.config.filter_type()
        elif isinstance(filters, self.config.filter_type):
            spec = filters
        else:
            spec = self.config.filter_type.model_validate(filters)
        with self._lock:
            self._filters = spec
            self._recompute()
        self._changed()

    def update_filtered_view(self) -> List[T]:
        with self._lock:
            self._recompute()
            view = list(self._filtered)
        self._changed()
        return view

    def set_extra(self, name: str, value: Any) -> None:
        self._check_extra(name)
        with self._lock:
            self._extras[name] = value
        self._changed(persist=True)

    # Cache policy

    def is_cache_valid(self, category: str, max_age_ms: Optional[int] = None) -> bool:
        """True iff ``category`` was stamped less than ``max_age_ms`` ago."""
        max_age = self.max_age_ms if max_age_ms is None else max_age_ms
        with self._lock:
            stamped_at = self._timestamps.get(category)
        if stamped_at is None:
            return False
        return self.clock() - stamped_at < max_age

    def update_cache_timestamp(self, category: str) -> None:
        with self._lock:
            self._timestamps[category] = self.clock()
        self._changed(persist=True)

    def invalidate(self, category: Optional[str] = None) -> None:
        """Forget the timestamp of one category, or of all of them."""
        with self._lock:
            if category is None:
                self._timestamps.clear()
            else:
                self._timestamps.pop(category, None)
        self._changed(persist=True)

    # Request bookkeeping

    def begin_request(self, category: str, sequenced: bool = True) -> int:
        """
        Mark a request on ``category`` as started.

        Loading turns on and the category error is cleared. Sequenced
        requests (list reads) take a new token, which supersedes every
        earlier token for the category; unsequenced requests (mutations)
        only track loading.

        Returns:
            The request's sequence token
        """
        with self._lock:
            state = self._state(category)
            if sequenced:
                state.sequence += 1
            state.in_flight += 1
            state.error = None
            token = state.sequence
        self._changed()
        return token

    def is_current(self, category: str, token: int) -> bool:
        """False once a newer sequenced request has started on ``category``."""
        with self._lock:
            return self._state(category).sequence == token

    def end_request(self, category: str) -> None:
        with self._lock:
            state = self._state(category)
            state.in_flight = max(0, state.in_flight - 1)
        self._changed()

    def set_error(self, category: str, message: Optional[str]) -> None:
        with self._lock:
            self._state(category).error = message
        self._changed()

    def clear_errors(self) -> None:
        with self._lock:
            for state in self._categories.values():
                state.error = None
        self._changed()

    def clear_all_data(self) -> None:
        """Reset data, selection, query, filters and timestamps."""
        with self._lock:
            self._items = []
            self._filtered = []
            self._selected = None
            self._search_query = ""
            self._filters = self.config.filter_type()
            self._extras = {}
            self._timestamps = {}
        self._changed(persist=True)

    # Subscription

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener(store)`` after every state change."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # Persistence

    def snapshot(self) -> Dict[str, Any]:
        """Return the persisted subset of the state as JSON-compatible data."""
        with self._lock:
            return {
                "version": SNAPSHOT_VERSION,
                "items": self._list_adapter.dump_python(self._items, mode="json", by_alias=True),
                "extras": {
                    name: self._extra_adapters[name].dump_python(value, mode="json", by_alias=True)
                    for name, value in self._extras.items()
                },
                "timestamps": dict(self._timestamps),
            }

    def _rehydrate(self) -> None:
        document = self.storage.load_json(self.config.storage_name)
        if not document:
            return
        if document.get("version") != SNAPSHOT_VERSION:
            logger.info(
                "Ignoring snapshot with unknown version",
                extra={"store": self.config.name, "version": document.get("version")},
            )
            return

        try:
            items = self._list_adapter.validate_python(document.get("items") or [])
            extras = {
                name: self._extra_adapters[name].validate_python(value)
                for name, value in (document.get("extras") or {}).items()
                if name in self._extra_adapters
            }
        except SchemaValidationError as e:
            logger.warning(
                "Discarding snapshot that no longer matches the schema",
                extra={"store": self.config.name, "error_count": e.error_count()},
            )
            self.storage.remove_item(self.config.storage_name)
            return

        # Timestamps past the max age are dropped before anyone can read them
        now = self.clock()
        timestamps = {}
        expired = []
        for category, stamped_at in (document.get("timestamps") or {}).items():
            if isinstance(stamped_at, (int, float)) and now - stamped_at < self.max_age_ms:
                timestamps[category] = int(stamped_at)
            else:
                expired.append(category)

        self._items = items
        self._extras = extras
        self._timestamps = timestamps
        self._recompute()

        logger.debug(
            "Store rehydrated",
            extra={
                "store": self.config.name,
                "item_count": len(items),
                "expired_categories": expired,
            },
        )
        if expired:
            self._persist()

    def _persist(self) -> None:
        self.storage.save_json(self.config.storage_name, self.snapshot())

    # Internals

    def _state(self, category: str) -> CategoryState:
        state = self._categories.get(category)
        if state is None:
            state = self._categories[category] = CategoryState()
        return state

    def _check_extra(self, name: str) -> None:
        if name not in self.config.extras:
            raise KeyError(f"Store '{self.config.name}' has no extra named '{name}'")

    def _recompute(self) -> None:
        self._filtered = apply_filters(
            self._items,
            self._search_query,
            self._filters,
            self.config.search_fields,
            self.config.predicates,
        )

    def _changed(self, persist: bool = False) -> None:
        if persist:
            self._persist()
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(self)
