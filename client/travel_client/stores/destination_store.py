"""Destination store configuration."""

from typing import List

from ..schemas.destination import Destination, DestinationFilters
from .entity_store import DEFAULT_MAX_AGE_MS, EntityStore, StoreConfig
from .filters import equals, one_of

DESTINATIONS = "destinations"
POPULAR = "popular"
FEATURED = "featured"
COUNTRIES = "countries"


DESTINATION_STORE_CONFIG = StoreConfig(
    name=DESTINATIONS,
    storage_name="destination-storage",
    entity_type=Destination,
    filter_type=DestinationFilters,
    search_fields=(
        lambda d: d.name,
        lambda d: d.country,
        lambda d: d.state,
        lambda d: d.region,
        lambda d: d.description,
    ),
    predicates={
        "countries": one_of(lambda d: d.country),
        "climates": one_of(lambda d: d.climate),
        "safety_levels": one_of(lambda d: d.safety_level),
        "visa_required": equals(lambda d: d.visa_required),
        "featured": equals(lambda d: d.featured),
        "has_active_tours": equals(lambda d: d.has_active_tours),
    },
    extras={
        POPULAR: List[Destination],
        FEATURED: List[Destination],
        COUNTRIES: List[str],
    },
    mirrored_extras=(POPULAR, FEATURED),
)


def create_destination_store(storage=None, clock=None, max_age_ms: int = DEFAULT_MAX_AGE_MS) -> EntityStore:
    return EntityStore(DESTINATION_STORE_CONFIG, storage=storage, clock=clock, max_age_ms=max_age_ms)
