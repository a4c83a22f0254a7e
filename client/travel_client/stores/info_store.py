"""FAQ and policy store configuration."""

from typing import Dict, List

from ..schemas.info import FAQFilters, FAQItem, PolicyDocument
from .entity_store import DEFAULT_MAX_AGE_MS, EntityStore, StoreConfig
from .filters import equals

FAQS = "faqs"
CATEGORIES = "categories"
POLICIES = "policies"


def policy_category(policy_type: str) -> str:
    """Cache category of a single policy document."""
    return f"policy:{policy_type}"


INFO_STORE_CONFIG = StoreConfig(
    name=FAQS,
    storage_name="info-storage",
    entity_type=FAQItem,
    filter_type=FAQFilters,
    search_fields=(
        lambda f: f.question,
        lambda f: f.answer,
        lambda f: f.category,
    ),
    predicates={
        "category": equals(lambda f: f.category),
    },
    extras={
        CATEGORIES: List[str],
        # Keyed by policy type, e.g. "privacy-policy"
        POLICIES: Dict[str, PolicyDocument],
    },
)


def create_info_store(storage=None, clock=None, max_age_ms: int = DEFAULT_MAX_AGE_MS) -> EntityStore:
    return EntityStore(INFO_STORE_CONFIG, storage=storage, clock=clock, max_age_ms=max_age_ms)
