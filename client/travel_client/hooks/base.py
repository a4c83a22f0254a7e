"""
Orchestration shared by the per-domain hooks.

A hook action calls a service, applies the outcome to its store and returns
an ``ActionResult``. Hook actions never raise for API failures: transport
errors, error statuses and ``success: false`` envelopes are all normalized
into ``ActionResult(success=False, error=<message>)`` and recorded as the
error of the cache category involved.

Reads (lists, lookups, stats, search) are sequenced per category: when two
reads on the same category overlap, only the newest one may write to the
store. Older responses are still returned to their caller, flagged
``stale=True``. Reads never notify the user; mutations notify on both
success and failure.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

from pydantic import ValidationError as SchemaValidationError

from ..core.exceptions import DEFAULT_ERROR_MESSAGE, ApplicationError, extract_error_message
from ..core.notifications import Notifier
from ..core.observability import get_logger, metrics_collector
from ..schemas.common import ApiResponse, FilterSpec, Page, SearchRequest
from ..stores.entity_store import EntityStore

logger = get_logger(__name__)

ServiceCall = Callable[[], Awaitable[ApiResponse]]

DETAIL = "detail"
SEARCH = "search"
FILTER = "filter"


@dataclass
class ActionResult:
    """Uniform outcome of a hook action."""

    success: bool
    data: Any = None
    error: Optional[str] = None
    message: Optional[str] = None
    stale: bool = False

    @classmethod
    def ok(cls, data: Any = None, message: Optional[str] = None, stale: bool = False) -> "ActionResult":
        return cls(success=True, data=data, message=message, stale=stale)

    @classmethod
    def failed(cls, error: str, stale: bool = False) -> "ActionResult":
        return cls(success=False, error=error, stale=stale)


def page_data(items: list, total: Optional[int] = None, page: int = 1, limit: Optional[int] = None, pages: int = 1) -> Dict[str, Any]:
    """List payload handed back to callers: ``{items, total, page, limit, pages}``."""
    return {
        "items": items,
        "total": len(items) if total is None else total,
        "page": page,
        "limit": len(items) if limit is None else limit,
        "pages": pages,
    }


def _unwrap(response: ApiResponse) -> Any:
    if not response.success:
        raise ApplicationError(
            response.message or DEFAULT_ERROR_MESSAGE,
            status_code=response.status_code,
            errors=response.errors,
        )
    return response.data


class DomainHooks:
    """
    Base class binding one store, one service and the notifier.

    Subclasses implement the domain actions with ``_load_list``,
    ``_read``, ``_load_extra`` and ``_mutate``.
    """

    entity_label = "Item"

    def __init__(self, store: EntityStore, service: Any, notifier: Notifier):
        self.store = store
        self.service = service
        self.notifier = notifier
        self.logger = logger.with_context(store=store.name)

    # Reads

    async def _load_list(
        self,
        fetch: ServiceCall,
        filters: Optional[FilterSpec] = None,
        force_refresh: bool = False,
    ) -> ActionResult:
        """
        The "get all" archetype.

        Served from the store without a network call when the list category
        is fresh, no explicit filters were given and no refresh is forced.
        An empty list fetched within the window counts as fresh. Only
        unfiltered fetches stamp the cache timestamp.
        """
        category = self.store.name
        if not force_refresh and filters is None and self.store.is_cache_valid(category):
            metrics_collector.record_cache_hit(self.store.name, category)
            return ActionResult.ok(page_data(self.store.items))

        metrics_collector.record_cache_miss(self.store.name, category)

        def apply(page: Page) -> Dict[str, Any]:
            self.store.set_items(page.items)
            if filters is None:
                self.store.update_cache_timestamp(category)
            else:
                # A server-filtered list must not satisfy a later unfiltered read
                self.store.invalidate(category)
            self._derive_extras()
            return page_data(page.items, page.total, page.page, page.limit or len(page.items), page.pages)

        return await self._read(category, fetch, apply)

    async def _load_extra(
        self,
        name: str,
        fetch: ServiceCall,
        force_refresh: bool = False,
        transform: Optional[Callable[[Any], Any]] = None,
        variant: Optional[str] = None,
    ) -> ActionResult:
        """
        Load an auxiliary payload (stats, popular, lookups) into ``extras[name]``.

        ``extras[name]`` holds one payload at a time. Requests that shape the
        payload (``limit=5``) pass a ``variant``; it becomes part of the cache
        category, so only the variant that produced the stored payload can
        be served from cache.
        """
        category = name if variant is None else f"{name}:{variant}"
        if not force_refresh and self.store.is_cache_valid(category):
            cached = self.store.get_extra(name)
            if cached is not None:
                metrics_collector.record_cache_hit(self.store.name, category)
                return ActionResult.ok(cached)

        metrics_collector.record_cache_miss(self.store.name, category)

        def apply(data: Any) -> Any:
            value = transform(data) if transform else data
            for stamped in self.store.timestamps:
                if stamped != category and (stamped == name or stamped.startswith(f"{name}:")):
                    self.store.invalidate(stamped)
            self.store.set_extra(name, value)
            self.store.update_cache_timestamp(category)
            return value

        return await self._read(category, fetch, apply)

    async def _load_limited_extra(
        self, name: str, limit: Optional[int], fetch: ServiceCall, force_refresh: bool = False
    ) -> ActionResult:
        """``_load_extra`` for the ``?limit=`` collections (popular, featured)."""
        variant = None if limit is None else f"limit={limit}"
        return await self._load_extra(name, fetch, force_refresh, variant=variant)

    async def _load_keyed_extra(
        self,
        name: str,
        key: str,
        fetch: ServiceCall,
        force_refresh: bool = False,
    ) -> ActionResult:
        """Load one entry of a keyed extra, e.g. the payments of one booking."""
        category = f"{name}:{key}"
        if not force_refresh and self.store.is_cache_valid(category):
            cached = (self.store.get_extra(name) or {}).get(key)
            if cached is not None:
                metrics_collector.record_cache_hit(self.store.name, category)
                return ActionResult.ok(cached)

        metrics_collector.record_cache_miss(self.store.name, category)

        def apply(data: Any) -> Any:
            self._put_keyed_extra(name, key, data)
            self.store.update_cache_timestamp(category)
            return data

        return await self._read(category, fetch, apply)

    async def _load_detail(self, fetch: ServiceCall) -> ActionResult:
        """Fetch one entity and make it the selection."""
        def apply(entity: Any) -> Any:
            self.store.select(entity)
            # Keep the list copy in step with the fresher detail payload
            self.store.update(entity)
            self._derive_extras()
            return entity

        return await self._read(DETAIL, fetch, apply)

    async def _search(self, request: SearchRequest, fetch: ServiceCall) -> ActionResult:
        """
        Server-side search.

        The results go back to the caller; the store records the query and
        the filters it models so its local view narrows the same way. Filter
        keys the local spec does not declare are sent but not applied
        locally; malformed values for declared keys fail before any request.
        """
        filters = None
        if request.filters is not None:
            try:
                filters = self.store.config.filter_type.from_known(request.filters)
            except SchemaValidationError as e:
                message = extract_error_message(e)
                self.store.set_error(SEARCH, message)
                self.logger.warning("Rejected search filters", category=SEARCH, error=message)
                return ActionResult.failed(message)

        def apply(page: Page) -> Dict[str, Any]:
            self.store.set_search_query(request.query)
            if filters is not None:
                self.store.set_filters(filters)
            return page_data(page.items, page.total, page.page, page.limit or len(page.items), page.pages)

        return await self._read(SEARCH, fetch, apply)

    async def _filter(self, filters: Optional[FilterSpec], fetch: ServiceCall) -> ActionResult:
        """
        Server-side filtering into the filtered view.

        The matches are merged into the list and ``filters`` becomes the
        store's filter spec, so the filtered view shows them while staying
        derived from the list. The list timestamp is left alone: a partial
        result says nothing about the rest of the list. ``filters=None``
        fetches without narrowing the local view.
        """
        def apply(entities: List[Any]) -> List[Any]:
            self.store.merge(entities)
            if filters is not None:
                self.store.set_filters(filters)
            self._derive_extras()
            return entities

        return await self._read(FILTER, fetch, apply)

    def _filter_locally(self, filters: Optional[FilterSpec]) -> ActionResult:
        """Apply ``filters`` to the loaded list without a request."""
        self.store.set_filters(filters)
        return ActionResult.ok(self.store.filtered_items)

    async def _read(self, category: str, fetch: ServiceCall, apply: Callable[[Any], Any]) -> ActionResult:
        token = self.store.begin_request(category)
        try:
            response = await fetch()
            data = _unwrap(response)
            if not self.store.is_current(category, token):
                metrics_collector.record_stale_response(self.store.name, category)
                self.logger.info("Discarding superseded response", category=category, token=token)
                return ActionResult.ok(data, message=response.message, stale=True)
            return ActionResult.ok(apply(data), message=response.message)
        except Exception as e:
            message = extract_error_message(e)
            if not self.store.is_current(category, token):
                metrics_collector.record_stale_response(self.store.name, category)
                return ActionResult.failed(message, stale=True)
            self.store.set_error(category, message)
            self.logger.warning("Read failed", category=category, error=message, error_type=type(e).__name__)
            return ActionResult.failed(message)
        finally:
            self.store.end_request(category)

    # Mutations

    async def _mutate(
        self,
        fetch: ServiceCall,
        apply: Optional[Callable[[Any], Any]],
        success_message: str,
        category: Optional[str] = None,
    ) -> ActionResult:
        """
        Create/update/delete/status-change archetype.

        Loading and errors are tracked on the store's primary category. The
        user is notified of the outcome either way.
        """
        category = category or self.store.name
        self.store.begin_request(category, sequenced=False)
        try:
            response = await fetch()
            data = _unwrap(response)
            result = apply(data) if apply else data
            self._derive_extras()
            self.notifier.success(success_message)
            return ActionResult.ok(result, message=response.message or success_message)
        except Exception as e:
            message = extract_error_message(e)
            self.store.set_error(category, message)
            self.notifier.error(message)
            self.logger.warning("Mutation failed", category=category, error=message, error_type=type(e).__name__)
            return ActionResult.failed(message)
        finally:
            self.store.end_request(category)

    async def _create(self, fetch: ServiceCall) -> ActionResult:
        def apply(entity: Any) -> Any:
            self.store.add(entity)
            return entity

        return await self._mutate(fetch, apply, f"{self.entity_label} created successfully")

    async def _update(self, fetch: ServiceCall) -> ActionResult:
        def apply(entity: Any) -> Any:
            self.store.update(entity)
            return entity

        return await self._mutate(fetch, apply, f"{self.entity_label} updated successfully")

    async def _delete(self, entity_id: str, fetch: ServiceCall) -> ActionResult:
        def apply(_: Any) -> str:
            self.store.remove(entity_id)
            return entity_id

        return await self._mutate(fetch, apply, f"{self.entity_label} deleted successfully")

    # Warm-up

    async def _initialize(self, **actions: Awaitable[ActionResult]) -> Dict[str, ActionResult]:
        """
        Run independent reads concurrently and collect their results by name.

        Hook actions do not raise, so one failing read never cancels the
        others; each outcome is reported in the returned mapping.
        """
        results = await asyncio.gather(*actions.values())
        outcome = dict(zip(actions, results))
        failed = sorted(name for name, result in outcome.items() if not result.success)
        if failed:
            self.logger.warning("Initialization incomplete", failed=failed)
        else:
            self.logger.info("Initialized", loaded=sorted(outcome))
        return outcome

    def _derive_extras(self) -> None:
        """Recompute extras derived from the loaded list; none by default."""

    # Store passthroughs

    def _put_keyed_extra(self, name: str, key: str, value: Any) -> None:
        entries = dict(self.store.get_extra(name) or {})
        entries[key] = value
        self.store.set_extra(name, entries)

    def set_search_query(self, query: str) -> None:
        self.store.set_search_query(query)

    def set_filters(self, filters: Any) -> None:
        self.store.set_filters(filters)

    def clear_filters(self) -> None:
        self.store.set_search_query("")
        self.store.set_filters(None)

    def clear_errors(self) -> None:
        self.store.clear_errors()

    def refresh_all(self) -> None:
        """Expire every cache category so the next reads hit the network."""
        self.store.invalidate()
