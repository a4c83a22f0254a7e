"""Tour-related Pydantic schemas."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .common import ApiModel, Coordinates, DateRange, Entity, FilterSpec, Image, NumberRange, Rating


class Difficulty(str, Enum):
    EASY = "easy"
    MODERATE = "moderate"
    CHALLENGING = "challenging"
    EXTREME = "extreme"


class TourCategory(ApiModel):
    id: str
    name: str
    slug: str = ""
    icon: Optional[str] = None


class TourDestination(ApiModel):
    id: str
    name: str
    country: str = ""
    coordinates: Optional[Coordinates] = None
    image: Optional[str] = None


class Guide(ApiModel):
    id: str
    name: str
    experience: int = 0
    languages: List[str] = Field(default_factory=list)
    rating: float = 0.0
    bio: str = ""


class TourPrice(ApiModel):
    amount: float = Field(0.0, ge=0)
    currency: str = "USD"
    discounted_price: Optional[float] = None


class TourDuration(ApiModel):
    days: int = Field(1, ge=0)
    nights: int = Field(0, ge=0)


class TourAvailability(ApiModel):
    id: str
    start_date: datetime
    end_date: Optional[datetime] = None
    available_slots: int = 0
    booked_slots: int = 0
    price: Optional[float] = None
    status: str = Field("available", pattern=r"^(available|limited|sold-out|cancelled)$")


class Tour(Entity):
    """Tour resource."""

    title: str
    slug: str = ""
    description: str = ""
    short_description: str = ""
    images: List[Image] = Field(default_factory=list)
    price: TourPrice = Field(default_factory=TourPrice)
    duration: TourDuration = Field(default_factory=TourDuration)
    category: TourCategory
    destination: TourDestination
    difficulty: Difficulty = Difficulty.MODERATE
    highlights: List[str] = Field(default_factory=list)
    guide: Optional[Guide] = None
    availability: List[TourAvailability] = Field(default_factory=list)
    rating: Rating = Field(default_factory=Rating)
    status: str = Field("active", pattern=r"^(active|inactive|draft)$")
    featured: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TourFilters(FilterSpec):
    """Filter specification for tours."""

    categories: List[str] = Field(default_factory=list, description="Category ids")
    destinations: List[str] = Field(default_factory=list, description="Destination ids")
    difficulty: List[Difficulty] = Field(default_factory=list)
    duration: List[str] = Field(default_factory=list, description="Day counts, e.g. ['3', '7']")
    price_range: Optional[NumberRange] = None
    rating: Optional[float] = Field(None, ge=0, le=5, description="Minimum average rating")
    dates: Optional[DateRange] = None


class CreateTourRequest(ApiModel):
    """Request schema for creating a tour."""

    title: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255, pattern=r"^[a-z0-9-]+$")
    description: str = Field(..., min_length=1, max_length=5000)
    category_id: str = Field(..., min_length=1)
    destination_id: str = Field(..., min_length=1)
    price: TourPrice
    duration: TourDuration
    difficulty: Difficulty = Difficulty.MODERATE
    featured: bool = False


class UpdateTourRequest(ApiModel):
    """Partial update; only populated fields are sent."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    price: Optional[TourPrice] = None
    duration: Optional[TourDuration] = None
    difficulty: Optional[Difficulty] = None
    status: Optional[str] = Field(None, pattern=r"^(active|inactive|draft)$")
    featured: Optional[bool] = None
