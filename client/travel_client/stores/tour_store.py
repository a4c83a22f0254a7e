"""Tour store configuration."""

from typing import List

from ..schemas.common import DateRange
from ..schemas.tour import Tour, TourCategory, TourFilters
from .entity_store import DEFAULT_MAX_AGE_MS, EntityStore, StoreConfig
from .filters import at_least, date_in_range, in_range, one_of

TOURS = "tours"
CATEGORIES = "categories"
POPULAR = "popular"
FEATURED = "featured"


def _has_duration(tour: Tour, durations: List[str]) -> bool:
    days = str(tour.duration.days)
    return any(d in days for d in durations)


def _has_open_departure(tour: Tour, dates: DateRange) -> bool:
    return any(
        slot.status == "available" and date_in_range(slot.start_date, dates)
        for slot in tour.availability
    )


TOUR_STORE_CONFIG = StoreConfig(
    name=TOURS,
    storage_name="tour-storage",
    entity_type=Tour,
    filter_type=TourFilters,
    search_fields=(
        lambda t: t.title,
        lambda t: t.description,
        lambda t: t.destination.name,
        lambda t: t.destination.country,
        lambda t: t.category.name,
        lambda t: t.guide.name if t.guide else None,
    ),
    predicates={
        "categories": one_of(lambda t: t.category.id),
        "destinations": one_of(lambda t: t.destination.id),
        "difficulty": one_of(lambda t: t.difficulty),
        "duration": _has_duration,
        "price_range": in_range(lambda t: t.price.amount),
        "rating": at_least(lambda t: t.rating.average),
        "dates": _has_open_departure,
    },
    extras={
        CATEGORIES: List[TourCategory],
        POPULAR: List[Tour],
        FEATURED: List[Tour],
    },
    mirrored_extras=(POPULAR, FEATURED),
)


def create_tour_store(storage=None, clock=None, max_age_ms: int = DEFAULT_MAX_AGE_MS) -> EntityStore:
    return EntityStore(TOUR_STORE_CONFIG, storage=storage, clock=clock, max_age_ms=max_age_ms)
