"""Activity store configuration."""

from typing import List

from ..schemas.activity import Activity, ActivityFilters
from .entity_store import DEFAULT_MAX_AGE_MS, EntityStore, StoreConfig
from .filters import at_least, contains_text, equals, in_range

ACTIVITIES = "activities"
CATEGORIES = "categories"
POPULAR = "popular"
FEATURED = "featured"


def _indoor_only(activity: Activity, indoor_only: bool) -> bool:
    # False means "no restriction", not "outdoor only"
    return activity.location.indoor if indoor_only else True


ACTIVITY_STORE_CONFIG = StoreConfig(
    name=ACTIVITIES,
    storage_name="activities-storage",
    entity_type=Activity,
    filter_type=ActivityFilters,
    search_fields=(
        lambda a: a.name,
        lambda a: a.description,
        lambda a: a.category,
        lambda a: a.location.name,
    ),
    predicates={
        "category": equals(lambda a: a.category),
        "type": equals(lambda a: a.type),
        "difficulty": equals(lambda a: a.difficulty),
        "physical_requirement": equals(lambda a: a.physical_requirement),
        "location": contains_text(lambda a: a.location.name),
        "price_range": in_range(lambda a: a.pricing.base_price),
        "weather_dependent": equals(lambda a: a.weather_dependent),
        "safety_level": equals(lambda a: a.safety_level),
        "status": equals(lambda a: a.status),
        "indoor_only": _indoor_only,
        "rating": at_least(lambda a: a.rating.average),
    },
    extras={
        CATEGORIES: List[str],
        POPULAR: List[Activity],
        FEATURED: List[Activity],
    },
    mirrored_extras=(POPULAR, FEATURED),
)


def create_activity_store(storage=None, clock=None, max_age_ms: int = DEFAULT_MAX_AGE_MS) -> EntityStore:
    return EntityStore(ACTIVITY_STORE_CONFIG, storage=storage, clock=clock, max_age_ms=max_age_ms)
