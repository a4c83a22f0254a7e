"""Activity-related Pydantic schemas."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .common import ApiModel, Coordinates, Entity, FilterSpec, Image, NumberRange, Rating


class ActivityType(str, Enum):
    ADVENTURE = "adventure"
    CULTURAL = "cultural"
    EDUCATIONAL = "educational"
    RECREATIONAL = "recreational"
    WELLNESS = "wellness"


class ActivityLocation(ApiModel):
    name: str
    coordinates: Optional[Coordinates] = None
    indoor: bool = False


class ActivityPricing(ApiModel):
    base_price: float = Field(0.0, ge=0)
    currency: str = "USD"
    included: bool = False


class Activity(Entity):
    """Activity resource."""

    name: str
    description: str = ""
    category: str = ""
    type: ActivityType = ActivityType.RECREATIONAL
    images: List[Image] = Field(default_factory=list)
    difficulty: str = Field("beginner", pattern=r"^(beginner|intermediate|advanced|expert)$")
    physical_requirement: str = Field("low", pattern=r"^(low|moderate|high|extreme)$")
    location: ActivityLocation
    weather_dependent: bool = False
    safety_level: str = Field("moderate", pattern=r"^(low|moderate|high)$")
    pricing: ActivityPricing = Field(default_factory=ActivityPricing)
    booking_required: bool = False
    status: str = Field("active", pattern=r"^(active|inactive|seasonal)$")
    rating: Rating = Field(default_factory=Rating)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ActivityFilters(FilterSpec):
    """Filter specification for activities (single-valued selectors)."""

    category: Optional[str] = None
    type: Optional[ActivityType] = None
    difficulty: Optional[str] = None
    physical_requirement: Optional[str] = None
    location: Optional[str] = Field(None, description="Case-insensitive location name fragment")
    price_range: Optional[NumberRange] = None
    weather_dependent: Optional[bool] = None
    safety_level: Optional[str] = None
    status: Optional[str] = None
    indoor_only: Optional[bool] = None
    rating: Optional[float] = Field(None, ge=0, le=5, description="Minimum average rating")


class CreateActivityRequest(ApiModel):
    """Request schema for creating an activity."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=5000)
    category: str = Field(..., min_length=1)
    type: ActivityType
    location: ActivityLocation
    pricing: ActivityPricing
    difficulty: str = Field("beginner", pattern=r"^(beginner|intermediate|advanced|expert)$")
    weather_dependent: bool = False


class UpdateActivityRequest(ApiModel):
    """Partial update; only populated fields are sent."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    category: Optional[str] = None
    location: Optional[ActivityLocation] = None
    pricing: Optional[ActivityPricing] = None
    status: Optional[str] = Field(None, pattern=r"^(active|inactive|seasonal)$")
