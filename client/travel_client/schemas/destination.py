"""Destination-related Pydantic schemas."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .common import ApiModel, Coordinates, Entity, FilterSpec, Image


class Climate(str, Enum):
    TROPICAL = "tropical"
    TEMPERATE = "temperate"
    ARID = "arid"
    CONTINENTAL = "continental"
    POLAR = "polar"


class SafetyLevel(str, Enum):
    VERY_SAFE = "very-safe"
    SAFE = "safe"
    MODERATE = "moderate"
    CAUTION = "caution"
    HIGH_RISK = "high-risk"


class DestinationStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    COMING_SOON = "coming-soon"


class DestinationCurrency(ApiModel):
    code: str = "USD"
    name: str = ""
    symbol: str = ""


class Destination(Entity):
    """Destination resource."""

    name: str
    slug: str = ""
    country: str = ""
    state: Optional[str] = None
    region: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    timezone: str = "UTC"
    description: str = ""
    short_description: str = ""
    highlights: List[str] = Field(default_factory=list)
    images: List[Image] = Field(default_factory=list)
    cover_image: str = ""
    best_time_to_visit: List[str] = Field(default_factory=list)
    climate: Optional[Climate] = None
    language: str = ""
    currency: Optional[DestinationCurrency] = None
    visa_required: bool = False
    safety_level: Optional[SafetyLevel] = None
    featured: bool = False
    popular: bool = False
    tour_count: int = 0
    status: DestinationStatus = DestinationStatus.ACTIVE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def has_active_tours(self) -> bool:
        return self.tour_count > 0 and self.status == DestinationStatus.ACTIVE


class DestinationFilters(FilterSpec):
    """Filter specification for destinations."""

    countries: List[str] = Field(default_factory=list)
    climates: List[Climate] = Field(default_factory=list)
    safety_levels: List[SafetyLevel] = Field(default_factory=list)
    visa_required: Optional[bool] = None
    featured: Optional[bool] = None
    has_active_tours: Optional[bool] = None


class CreateDestinationRequest(ApiModel):
    """Request schema for creating a destination."""

    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255, pattern=r"^[a-z0-9-]+$")
    country: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1, max_length=5000)
    short_description: str = Field("", max_length=500)
    region: Optional[str] = None
    climate: Optional[Climate] = None
    safety_level: Optional[SafetyLevel] = None
    visa_required: bool = False
    featured: bool = False


class UpdateDestinationRequest(ApiModel):
    """Partial update; only populated fields are sent."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    country: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, max_length=5000)
    short_description: Optional[str] = Field(None, max_length=500)
    region: Optional[str] = None
    climate: Optional[Climate] = None
    safety_level: Optional[SafetyLevel] = None
    visa_required: Optional[bool] = None
    featured: Optional[bool] = None
    status: Optional[DestinationStatus] = None
