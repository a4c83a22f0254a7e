"""Application context: wires configuration, transport, stores, services and hooks."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

import httpx

from .core.api_client import ApiClient
from .core.config import Settings, settings as default_settings
from .core.notifications import Notifier
from .core.observability import setup_structured_logging
from .core.storage import SessionStorage, create_session_storage
from .hooks import (
    ActivityHooks,
    BookingHooks,
    DestinationHooks,
    InfoHooks,
    ItineraryHooks,
    PaymentHooks,
    ServiceHooks,
    TourHooks,
)
from .services import (
    ActivityService,
    BookingService,
    DestinationService,
    InfoService,
    ItineraryService,
    PaymentService,
    ServiceCatalogService,
    TourService,
)
from .stores import (
    EntityStore,
    create_activity_store,
    create_booking_store,
    create_destination_store,
    create_info_store,
    create_itinerary_store,
    create_payment_store,
    create_service_store,
    create_tour_store,
)
from .workers import CacheRefreshWorker, RefreshTarget, WorkerManager

logger = logging.getLogger(__name__)


@dataclass
class Domain:
    """The store, service and hooks of one resource type."""

    store: EntityStore
    service: Any
    hooks: Any


# (store factory, service class, hooks class, name of the hook that reloads the list)
DOMAIN_REGISTRY = {
    "bookings": (create_booking_store, BookingService, BookingHooks, "get_all_bookings"),
    "destinations": (create_destination_store, DestinationService, DestinationHooks, "get_all_destinations"),
    "payments": (create_payment_store, PaymentService, PaymentHooks, "get_all_payments"),
    "services": (create_service_store, ServiceCatalogService, ServiceHooks, "get_all_services"),
    "tours": (create_tour_store, TourService, TourHooks, "get_all_tours"),
    "activities": (create_activity_store, ActivityService, ActivityHooks, "get_all_activities"),
    "itineraries": (create_itinerary_store, ItineraryService, ItineraryHooks, "get_all_itineraries"),
    "info": (create_info_store, InfoService, InfoHooks, "get_all_faqs"),
}


@dataclass
class AppContext:
    """Everything a front end needs to talk to the travel API."""

    settings: Settings
    api_client: ApiClient
    storage: SessionStorage
    notifier: Notifier
    domains: Dict[str, Domain]
    workers: WorkerManager = field(default_factory=WorkerManager)

    def __getattr__(self, name: str) -> Domain:
        # Only reached for names that are not regular attributes
        domains = self.__dict__.get("domains") or {}
        if name in domains:
            return domains[name]
        raise AttributeError(name)

    def clear_all_data(self) -> None:
        """Reset every store, e.g. on logout."""
        for domain in self.domains.values():
            domain.store.clear_all_data()

    async def aclose(self) -> None:
        await self.workers.stop_all()
        await self.api_client.aclose()


def _reloader(hooks: Any, method: str) -> Callable:
    action = getattr(hooks, method)

    async def reload():
        return await action(force_refresh=True)

    return reload


def create_context(
    config: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    storage: Optional[SessionStorage] = None,
    clock: Optional[Callable[[], int]] = None,
    notifier: Optional[Notifier] = None,
) -> AppContext:
    """
    Build a fully wired application context.

    Args:
        config: Settings (defaults to the environment-derived settings)
        transport: Optional httpx transport, e.g. an ASGI app under test
        storage: Session storage (defaults to the configured one)
        clock: Millisecond clock for cache ages
        notifier: Notification sink shared by all hooks

    Returns:
        AppContext: The wired context; workers are registered but not started
    """
    config = config or default_settings
    setup_structured_logging(config)

    api_client = ApiClient(config, transport=transport)
    storage = storage if storage is not None else create_session_storage(config)
    notifier = notifier or Notifier()

    domains = {}
    for name, (create_store, service_cls, hooks_cls, _) in DOMAIN_REGISTRY.items():
        store = create_store(storage=storage, clock=clock, max_age_ms=config.cache_max_age_ms)
        service = service_cls(api_client)
        domains[name] = Domain(store=store, service=service, hooks=hooks_cls(store, service, notifier))

    context = AppContext(
        settings=config,
        api_client=api_client,
        storage=storage,
        notifier=notifier,
        domains=domains,
    )

    if config.enable_background_refresh:
        targets = {
            name: RefreshTarget(store=domains[name].store, reload=_reloader(domains[name].hooks, method))
            for name, (_, _, _, method) in DOMAIN_REGISTRY.items()
        }
        context.workers.register(
            "cache_refresh",
            CacheRefreshWorker(targets, interval_seconds=config.background_refresh_interval_seconds),
        )

    logger.info(
        "Travel client context created",
        extra={"api_url": config.api_url, "environment": config.environment},
    )
    return context


@asynccontextmanager
async def lifespan(config: Optional[Settings] = None, **kwargs: Any) -> AsyncGenerator[AppContext, None]:
    """
    Context lifespan manager.

    Starts the background workers on entry and stops them, along with the
    HTTP client, on exit.
    """
    context = create_context(config, **kwargs)
    logger.info("Starting travel client")
    await context.workers.start_all()

    try:
        yield context
    finally:
        logger.info("Shutting down travel client")
        await context.aclose()
        logger.info("Travel client shutdown complete")
