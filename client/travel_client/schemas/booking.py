"""Booking-related Pydantic schemas."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .common import ApiModel, DateRange, Entity, FilterSpec


class BookingStatus(str, Enum):
    """Booking status enumeration."""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no-show"


class BookingPaymentStatus(str, Enum):
    """Payment state of a booking as a whole."""
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"
    REFUNDED = "refunded"


class BookingSource(str, Enum):
    """Channel the booking came in through."""
    WEBSITE = "website"
    PHONE = "phone"
    EMAIL = "email"
    AGENT = "agent"
    WALK_IN = "walk-in"


class EmergencyContact(ApiModel):
    name: str = ""
    phone: str = ""
    relationship: str = ""


class BookingParticipant(ApiModel):
    """A traveller on a booking."""

    id: Optional[str] = None
    type: str = Field("adult", pattern=r"^(adult|child|infant)$")
    first_name: str
    last_name: str
    email: str = ""
    phone: str = ""
    date_of_birth: Optional[str] = None
    emergency_contact: Optional[EmergencyContact] = None
    dietary_requirements: List[str] = Field(default_factory=list)
    price: float = 0.0
    discounts: float = 0.0
    status: str = "confirmed"
    waiver_signed: bool = False


class BookingPayment(ApiModel):
    """A payment recorded against a booking."""

    id: str
    amount: float = Field(..., ge=0)
    currency: str = "USD"
    method: str = "credit-card"
    status: str = "pending"
    type: str = "full-payment"
    transaction_id: Optional[str] = None
    paid_at: Optional[datetime] = None
    refunded_at: Optional[datetime] = None


class BookingPricing(ApiModel):
    subtotal: float = 0.0
    taxes: float = 0.0
    fees: float = 0.0
    discounts: float = 0.0
    total: float = 0.0
    currency: str = "USD"


class Booking(Entity):
    """Booking resource."""

    booking_number: str = Field(..., description="Human-facing booking reference")
    tour_id: str = ""
    tour_title: str = ""
    availability_id: Optional[str] = None
    tour_start_date: Optional[datetime] = None
    tour_end_date: Optional[datetime] = None
    customer_id: str = ""
    participants: List[BookingParticipant] = Field(default_factory=list)
    total_participants: int = 0
    pricing: BookingPricing = Field(default_factory=BookingPricing)
    payments: List[BookingPayment] = Field(default_factory=list)
    payment_status: BookingPaymentStatus = BookingPaymentStatus.PENDING
    status: BookingStatus = BookingStatus.PENDING
    special_requests: Optional[str] = None
    confirmation_sent: bool = False
    reminders_sent: int = 0
    booking_date: Optional[datetime] = None
    source: BookingSource = BookingSource.WEBSITE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BookingFilters(FilterSpec):
    """Filter specification for bookings."""

    status: List[BookingStatus] = Field(default_factory=list)
    payment_status: List[BookingPaymentStatus] = Field(default_factory=list)
    source: List[BookingSource] = Field(default_factory=list)
    date_range: Optional[DateRange] = None
    tour_id: Optional[str] = None
    customer_id: Optional[str] = None


class CreateBookingRequest(ApiModel):
    """Request schema for creating a booking."""

    tour_id: str = Field(..., min_length=1)
    availability_id: str = Field(..., min_length=1)
    participants: List[BookingParticipant] = Field(..., min_length=1)
    special_requests: Optional[str] = Field(None, max_length=2000)
    dietary_requirements: List[str] = Field(default_factory=list)
    source: BookingSource = BookingSource.WEBSITE


class UpdateBookingRequest(ApiModel):
    """Partial update; only populated fields are sent."""

    availability_id: Optional[str] = None
    participants: Optional[List[BookingParticipant]] = None
    special_requests: Optional[str] = Field(None, max_length=2000)
    dietary_requirements: Optional[List[str]] = None
    source: Optional[BookingSource] = None


class UpdateBookingStatusRequest(ApiModel):
    """Request schema for changing a booking's status."""

    status: BookingStatus
    reason: Optional[str] = Field(None, max_length=500)


class AddBookingPaymentRequest(ApiModel):
    """Request schema for recording a payment against a booking."""

    amount: float = Field(..., gt=0)
    currency: str = Field("USD", min_length=3, max_length=3)
    method: str = "credit-card"
    type: str = Field("full-payment", pattern=r"^(deposit|balance|full-payment)$")
    transaction_id: Optional[str] = None


class BookingStats(ApiModel):
    """Aggregate booking statistics."""

    total_bookings: int = 0
    confirmed_bookings: int = 0
    cancelled_bookings: int = 0
    pending_bookings: int = 0
    total_revenue: float = 0.0
    average_booking_value: float = 0.0
