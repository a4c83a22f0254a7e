"""Itinerary-related Pydantic schemas."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .common import ApiModel, DateRange, Entity, FilterSpec, NumberRange


class ItineraryStatus(str, Enum):
    DRAFT = "draft"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Participant(ApiModel):
    full_name: str
    age: Optional[int] = Field(None, ge=0)
    email: Optional[str] = None
    phone: Optional[str] = None
    nationality: Optional[str] = None


class ItineraryActivity(ApiModel):
    id: Optional[str] = None
    name: str
    description: str = ""
    type: str = "sightseeing"
    status: str = "planned"
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    cost: Optional[float] = None


class ItineraryDay(ApiModel):
    day: int = Field(..., ge=1)
    date: Optional[datetime] = None
    title: str = ""
    description: Optional[str] = None
    city: str = ""
    activities: List[ItineraryActivity] = Field(default_factory=list)


class Itinerary(Entity):
    """Itinerary resource."""

    title: str
    description: str = ""
    total_days: int = Field(0, ge=0)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    tour_id: Optional[str] = None
    booking_id: Optional[str] = None
    destination_id: Optional[str] = None
    total_participants: int = 0
    participants: List[Participant] = Field(default_factory=list)
    days: List[ItineraryDay] = Field(default_factory=list)
    total_cost: float = Field(0.0, ge=0)
    currency: str = "INR"
    cost_per_person: Optional[float] = None
    status: ItineraryStatus = ItineraryStatus.DRAFT
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ItineraryFilters(FilterSpec):
    """Filter specification for itineraries."""

    status: List[ItineraryStatus] = Field(default_factory=list)
    date_range: Optional[DateRange] = None
    duration: Optional[NumberRange] = Field(None, description="Total days range")
    cities: List[str] = Field(default_factory=list)
    price_range: Optional[NumberRange] = None


class CreateItineraryRequest(ApiModel):
    """Request schema for creating an itinerary."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field("", max_length=5000)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    tour_id: Optional[str] = None
    booking_id: Optional[str] = None
    days: List[ItineraryDay] = Field(default_factory=list)
    participants: List[Participant] = Field(default_factory=list)
    currency: str = Field("INR", min_length=3, max_length=3)


class UpdateItineraryRequest(ApiModel):
    """Partial update; only populated fields are sent."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    days: Optional[List[ItineraryDay]] = None
    participants: Optional[List[Participant]] = None
    status: Optional[ItineraryStatus] = None
