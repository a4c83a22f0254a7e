"""Travel service store configuration."""

from typing import List

from ..schemas.service import Service, ServiceCategory, ServiceFilters
from .entity_store import DEFAULT_MAX_AGE_MS, EntityStore, StoreConfig
from .filters import at_least, equals, in_range, one_of

SERVICES = "services"
CATEGORIES = "categories"
POPULAR = "popular"
FEATURED = "featured"


SERVICE_STORE_CONFIG = StoreConfig(
    name=SERVICES,
    storage_name="services-storage",
    entity_type=Service,
    filter_type=ServiceFilters,
    search_fields=(
        lambda s: s.name,
        lambda s: s.description,
        lambda s: s.category.name,
        lambda s: s.provider.name,
        lambda s: s.location.name if s.location else None,
    ),
    predicates={
        "categories": one_of(lambda s: s.category.id),
        "types": one_of(lambda s: s.type),
        "providers": one_of(lambda s: s.provider.id),
        "locations": one_of(lambda s: s.location.name if s.location else None),
        "price_range": in_range(lambda s: s.pricing.base_price),
        "rating": at_least(lambda s: s.rating.average),
        "featured": equals(lambda s: s.featured),
        "available": equals(lambda s: s.available),
    },
    extras={
        CATEGORIES: List[ServiceCategory],
        POPULAR: List[Service],
        FEATURED: List[Service],
    },
    mirrored_extras=(POPULAR, FEATURED),
)


def create_service_store(storage=None, clock=None, max_age_ms: int = DEFAULT_MAX_AGE_MS) -> EntityStore:
    return EntityStore(SERVICE_STORE_CONFIG, storage=storage, clock=clock, max_age_ms=max_age_ms)
