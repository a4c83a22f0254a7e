"""Cached entity stores."""

from .activity_store import ACTIVITY_STORE_CONFIG, create_activity_store
from .booking_store import BOOKING_STORE_CONFIG, create_booking_store
from .destination_store import DESTINATION_STORE_CONFIG, create_destination_store
from .entity_store import DEFAULT_MAX_AGE_MS, CategoryState, EntityStore, StoreConfig, system_clock
from .filters import apply_filters
from .info_store import INFO_STORE_CONFIG, create_info_store
from .itinerary_store import ITINERARY_STORE_CONFIG, create_itinerary_store
from .payment_store import PAYMENT_STORE_CONFIG, create_payment_store
from .service_store import SERVICE_STORE_CONFIG, create_service_store
from .tour_store import TOUR_STORE_CONFIG, create_tour_store

__all__ = [
    "ACTIVITY_STORE_CONFIG",
    "BOOKING_STORE_CONFIG",
    "DEFAULT_MAX_AGE_MS",
    "DESTINATION_STORE_CONFIG",
    "INFO_STORE_CONFIG",
    "ITINERARY_STORE_CONFIG",
    "PAYMENT_STORE_CONFIG",
    "SERVICE_STORE_CONFIG",
    "TOUR_STORE_CONFIG",
    "CategoryState",
    "EntityStore",
    "StoreConfig",
    "apply_filters",
    "create_activity_store",
    "create_booking_store",
    "create_destination_store",
    "create_info_store",
    "create_itinerary_store",
    "create_payment_store",
    "create_service_store",
    "create_tour_store",
    "system_clock",
]
