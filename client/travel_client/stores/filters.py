"""
Filter engine for entity stores.

``apply_filters`` derives a store's filtered view from its full list, the
free-text search query and the structured filter spec. It is a pure
function: it never mutates its inputs and never fails, an unmatched filter
simply yields ``[]``.

Each domain describes itself with two tables:

* search fields: extractors returning the text (or list of texts) that the
  query is matched against, case-insensitively, as a substring;
* predicates: one callable per filter-spec field, ``(item, value) -> bool``.
  Populated fields are combined with logical AND; empty fields are skipped.

The builders below cover the predicate kinds the domains share.
"""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, TypeVar

from ..schemas.common import DateRange, FilterSpec, NumberRange

T = TypeVar("T")

SearchField = Callable[[Any], Any]
Predicate = Callable[[Any, Any], bool]


def _normalize(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


def as_utc(value: Any) -> Optional[datetime]:
    """Coerce dates and datetimes to aware UTC datetimes; naive means UTC."""
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    elif isinstance(value, date) and not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def number_in_range(value: Any, bounds: NumberRange) -> bool:
    """Inclusive range check; a missing value never matches."""
    if value is None:
        return False
    if bounds.min is not None and value < bounds.min:
        return False
    if bounds.max is not None and value > bounds.max:
        return False
    return True


def date_in_range(value: Any, bounds: DateRange) -> bool:
    """Inclusive date range check; a missing value never matches."""
    moment = as_utc(value)
    if moment is None:
        return False
    if bounds.start is not None and moment < as_utc(bounds.start):
        return False
    if bounds.end is not None and moment > as_utc(bounds.end):
        return False
    return True


def one_of(getter: Callable[[Any], Any]) -> Predicate:
    """Set membership: the entity's categorical value is in the given list."""
    def predicate(item: Any, allowed: Iterable[Any]) -> bool:
        return _normalize(getter(item)) in {_normalize(v) for v in allowed}
    return predicate


def any_of(getter: Callable[[Any], Iterable[Any]]) -> Predicate:
    """Set intersection: any of the entity's values is in the given list."""
    def predicate(item: Any, allowed: Iterable[Any]) -> bool:
        wanted = {_normalize(v) for v in allowed}
        return any(_normalize(v) in wanted for v in (getter(item) or ()))
    return predicate


def equals(getter: Callable[[Any], Any]) -> Predicate:
    """Exact match (ids, single-valued selectors and boolean flags)."""
    def predicate(item: Any, expected: Any) -> bool:
        return _normalize(getter(item)) == _normalize(expected)
    return predicate


def in_range(getter: Callable[[Any], Any]) -> Predicate:
    def predicate(item: Any, bounds: NumberRange) -> bool:
        return number_in_range(getter(item), bounds)
    return predicate


def in_date_range(getter: Callable[[Any], Any]) -> Predicate:
    def predicate(item: Any, bounds: DateRange) -> bool:
        return date_in_range(getter(item), bounds)
    return predicate


def at_least(getter: Callable[[Any], Any]) -> Predicate:
    """Minimum threshold, e.g. ``rating >= 4``."""
    def predicate(item: Any, minimum: float) -> bool:
        value = getter(item)
        return value is not None and value >= minimum
    return predicate


def contains_text(getter: Callable[[Any], Any]) -> Predicate:
    """Case-insensitive substring match on a single text field."""
    def predicate(item: Any, fragment: str) -> bool:
        value = getter(item)
        return value is not None and fragment.lower() in str(value).lower()
    return predicate


def contains_any_text(getter: Callable[[Any], Iterable[Any]]) -> Predicate:
    """Any of the fragments occurs in any of the entity's texts."""
    def predicate(item: Any, fragments: Iterable[str]) -> bool:
        texts = [str(t).lower() for t in (getter(item) or ()) if t is not None]
        return any(f.lower() in text for f in fragments for text in texts)
    return predicate


def _field_texts(value: Any) -> Iterable[str]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple, set)):
        return [str(_normalize(v)) for v in value if v is not None]
    return (str(_normalize(value)),)


def matches_query(item: Any, query: str, search_fields: Sequence[SearchField]) -> bool:
    """
    True when any search field contains ``query``.

    ``query`` must already be trimmed and lowercased.
    """
    for extract in search_fields:
        for text in _field_texts(extract(item)):
            if query in text.lower():
                return True
    return False


def apply_filters(
    items: Sequence[T],
    query: str,
    filters: Optional[FilterSpec],
    search_fields: Sequence[SearchField],
    predicates: Mapping[str, Predicate],
) -> List[T]:
    """
    Recompute a filtered view.

    Args:
        items: Full entity list (not modified)
        query: Free-text search; blank means no text constraint
        filters: Structured filter spec; ``None`` or empty means no constraint
        search_fields: Text extractors the query is matched against
        predicates: Predicate per filter-spec field name

    Returns:
        New list with the matching entities in their original order
    """
    result = list(items)

    needle = (query or "").strip().lower()
    if needle:
        result = [item for item in result if matches_query(item, needle, search_fields)]

    if filters is not None:
        for name, value in filters.active_fields().items():
            predicate = predicates[name]
            result = [item for item in result if predicate(item, value)]

    return result
