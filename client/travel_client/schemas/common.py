"""Common Pydantic schemas shared by every domain."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base model for API payloads (camelCase on the wire, snake_case in Python)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_payload(self) -> Dict[str, Any]:
        """Serialize for a request body, dropping unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Entity(ApiModel):
    """An API resource with a unique identifier."""

    id: str = Field(..., description="Unique identifier")


class Rating(ApiModel):
    """Aggregate review rating."""

    average: float = Field(0.0, ge=0, description="Average rating")
    count: int = Field(0, ge=0, description="Number of reviews")


class Coordinates(ApiModel):
    """Geographic coordinates."""

    lat: float
    lng: float


class Image(ApiModel):
    """Media attachment."""

    id: str
    url: str
    alt: str = ""
    caption: Optional[str] = None
    is_primary: bool = False


class NumberRange(ApiModel):
    """Inclusive numeric range; either bound may be omitted."""

    min: Optional[float] = None
    max: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def parse_pair(cls, value: Any) -> Any:
        """Accept ``[min, max]`` pairs as well as objects."""
        if isinstance(value, (list, tuple)):
            if len(value) != 2:
                raise ValueError("Range pairs must have exactly two values")
            return {"min": value[0], "max": value[1]}
        return value

    def is_empty(self) -> bool:
        return self.min is None and self.max is None


class DateRange(ApiModel):
    """Inclusive date range; either bound may be omitted."""

    start: Optional[datetime] = Field(None, alias="from")
    end: Optional[datetime] = Field(None, alias="to")

    @model_validator(mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        """Treat empty strings from form inputs as absent bounds."""
        if isinstance(value, dict):
            return {k: (None if v == "" else v) for k, v in value.items()}
        return value

    def is_empty(self) -> bool:
        return self.start is None and self.end is None


class FilterSpec(ApiModel):
    """
    Base class for per-domain filter specifications.

    Every field is optional. A field that is ``None`` or empty imposes no
    constraint; populated fields combine with logical AND.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    @classmethod
    def from_known(cls, data: Mapping[str, Any]):
        """
        Validate ``data`` after dropping keys that name no declared field.

        Server-side search accepts filter keys the local spec does not model;
        those still go over the wire but cannot narrow the local view.
        """
        known = set()
        for name, info in cls.model_fields.items():
            known.update((name, info.alias or to_camel(name)))
        return cls.model_validate({key: value for key, value in data.items() if key in known})

    def active_fields(self) -> Dict[str, Any]:
        """Return the populated filter fields keyed by Python field name."""
        active = {}
        for name in type(self).model_fields:
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, (list, tuple, set, str)) and len(value) == 0:
                continue
            if isinstance(value, (NumberRange, DateRange)) and value.is_empty():
                continue
            active[name] = value
        return active

    def is_empty(self) -> bool:
        return not self.active_fields()

    def to_query_params(self) -> Dict[str, str]:
        """
        Serialize populated fields into query parameters.

        Lists are comma-joined, numeric ranges become ``<key>Min``/``<key>Max``,
        date ranges ``<key>From``/``<key>To`` and booleans ``true``/``false``.
        """
        params: Dict[str, str] = {}
        for name, value in self.active_fields().items():
            key = to_camel(name)
            if isinstance(value, NumberRange):
                if value.min is not None:
                    params[f"{key}Min"] = _format_number(value.min)
                if value.max is not None:
                    params[f"{key}Max"] = _format_number(value.max)
            elif isinstance(value, DateRange):
                if value.start is not None:
                    params[f"{key}From"] = value.start.isoformat()
                if value.end is not None:
                    params[f"{key}To"] = value.end.isoformat()
            elif isinstance(value, bool):
                params[key] = "true" if value else "false"
            elif isinstance(value, (list, tuple, set)):
                params[key] = ",".join(_format_value(v) for v in value)
            else:
                params[key] = _format_value(value)
        return params


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def _format_value(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, float):
        return _format_number(value)
    return str(value)


class SearchRequest(ApiModel):
    """Server-side search request shared by every domain."""

    query: str = ""
    filters: Optional[Dict[str, Any]] = None
    sort_by: Optional[str] = None
    sort_order: Optional[str] = Field(None, pattern=r"^(asc|desc)$")
    page: Optional[int] = Field(None, ge=1)
    limit: Optional[int] = Field(None, ge=1, le=500)


class ApiResponse(ApiModel, Generic[T]):
    """Envelope every endpoint responds with."""

    success: bool
    status_code: Optional[int] = None
    message: str = ""
    data: Optional[T] = None
    errors: List[str] = Field(default_factory=list)


class Page(ApiModel, Generic[T]):
    """
    Paginated list payload.

    The backend names the list after the resource (``bookings``,
    ``destinations``, ...); any such key is accepted as ``items``.
    """

    items: List[T] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 0
    pages: int = 1

    @model_validator(mode="before")
    @classmethod
    def resolve_items_key(cls, value: Any) -> Any:
        if isinstance(value, list):
            return {"items": value, "total": len(value)}
        if isinstance(value, dict) and "items" not in value:
            for key, candidate in value.items():
                if isinstance(candidate, list):
                    value = {**value, "items": candidate}
                    value.pop(key)
                    break
        if isinstance(value, dict) and "total" not in value:
            value = {**value, "total": len(value.get("items") or [])}
        return value

