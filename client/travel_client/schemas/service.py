"""Travel service (accommodation, transport, guide, ...) Pydantic schemas."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .common import ApiModel, Entity, FilterSpec, Image, NumberRange, Rating


class ServiceType(str, Enum):
    ACCOMMODATION = "accommodation"
    TRANSPORT = "transport"
    ACTIVITY = "activity"
    GUIDE = "guide"
    EQUIPMENT = "equipment"
    INSURANCE = "insurance"
    VISA = "visa"


class ServiceCategory(ApiModel):
    id: str
    name: str
    slug: str = ""
    description: Optional[str] = None


class ServiceProvider(ApiModel):
    id: str
    name: str
    type: str = "partner"


class ServiceLocation(ApiModel):
    name: str
    address: Optional[str] = None


class ServicePricing(ApiModel):
    base_price: float = Field(0.0, ge=0)
    currency: str = "USD"
    pricing_model: str = "per-person"
    minimum_charge: Optional[float] = None


class Service(Entity):
    """Service resource."""

    name: str
    slug: str = ""
    description: str = ""
    short_description: str = ""
    category: ServiceCategory
    type: ServiceType = ServiceType.ACTIVITY
    images: List[Image] = Field(default_factory=list)
    pricing: ServicePricing = Field(default_factory=ServicePricing)
    available: bool = True
    location: Optional[ServiceLocation] = None
    features: List[str] = Field(default_factory=list)
    provider: ServiceProvider
    rating: Rating = Field(default_factory=Rating)
    featured: bool = False
    popular: bool = False
    status: str = "active"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ServiceFilters(FilterSpec):
    """Filter specification for services."""

    categories: List[str] = Field(default_factory=list, description="Category ids")
    types: List[ServiceType] = Field(default_factory=list)
    providers: List[str] = Field(default_factory=list, description="Provider ids")
    locations: List[str] = Field(default_factory=list, description="Location names")
    price_range: Optional[NumberRange] = None
    rating: Optional[float] = Field(None, ge=0, le=5, description="Minimum average rating")
    featured: Optional[bool] = None
    available: Optional[bool] = None


class CreateServiceRequest(ApiModel):
    """Request schema for creating a service."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=5000)
    category_id: str = Field(..., min_length=1)
    provider_id: str = Field(..., min_length=1)
    type: ServiceType
    pricing: ServicePricing
    location: Optional[ServiceLocation] = None
    available: bool = True
    featured: bool = False


class UpdateServiceRequest(ApiModel):
    """Partial update; only populated fields are sent."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    pricing: Optional[ServicePricing] = None
    location: Optional[ServiceLocation] = None
    available: Optional[bool] = None
    featured: Optional[bool] = None
    status: Optional[str] = None
