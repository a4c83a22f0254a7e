"""Itinerary store configuration."""

from typing import Any, Dict, List

from ..schemas.common import DateRange
from ..schemas.itinerary import Itinerary, ItineraryFilters
from .entity_store import DEFAULT_MAX_AGE_MS, EntityStore, StoreConfig
from .filters import as_utc, contains_any_text, in_range, one_of

ITINERARIES = "itineraries"
STATS = "stats"
BY_TOUR = "by-tour"


def _day_texts(itinerary: Itinerary) -> List[str]:
    texts = []
    for day in itinerary.days:
        texts.extend([day.title, day.city])
        for activity in day.activities:
            texts.extend([activity.name, activity.description])
    return texts


def _within_dates(itinerary: Itinerary, dates: DateRange) -> bool:
    """The whole trip falls inside the range; undated itineraries always pass."""
    if itinerary.start_date is None or itinerary.end_date is None:
        return True
    if dates.start is not None and as_utc(itinerary.start_date) < as_utc(dates.start):
        return False
    if dates.end is not None and as_utc(itinerary.end_date) > as_utc(dates.end):
        return False
    return True


ITINERARY_STORE_CONFIG = StoreConfig(
    name=ITINERARIES,
    storage_name="itinerary-storage",
    entity_type=Itinerary,
    filter_type=ItineraryFilters,
    search_fields=(
        lambda i: i.title,
        lambda i: i.description,
        _day_texts,
        lambda i: [p.full_name for p in i.participants],
    ),
    predicates={
        "status": one_of(lambda i: i.status),
        "date_range": _within_dates,
        "duration": in_range(lambda i: i.total_days),
        "cities": contains_any_text(lambda i: [day.city for day in i.days]),
        "price_range": in_range(lambda i: i.total_cost),
    },
    extras={
        STATS: Dict[str, Any],
        # Keyed by tour id
        BY_TOUR: Dict[str, List[Itinerary]],
    },
)


def create_itinerary_store(storage=None, clock=None, max_age_ms: int = DEFAULT_MAX_AGE_MS) -> EntityStore:
    return EntityStore(ITINERARY_STORE_CONFIG, storage=storage, clock=clock, max_age_ms=max_age_ms)
