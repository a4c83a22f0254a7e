"""Payment-related Pydantic schemas."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from .common import ApiModel, DateRange, Entity, FilterSpec, NumberRange


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    PARTIALLY_REFUNDED = "partially-refunded"


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit-card"
    DEBIT_CARD = "debit-card"
    NET_BANKING = "net-banking"
    UPI = "upi"
    WALLET = "wallet"
    EMI = "emi"
    CASH = "cash"


class PaymentType(str, Enum):
    BOOKING = "booking"
    DEPOSIT = "deposit"
    BALANCE = "balance"
    FULL_PAYMENT = "full-payment"
    REFUND = "refund"
    CANCELLATION = "cancellation"


class PaymentCustomerDetails(ApiModel):
    id: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""


class Refund(ApiModel):
    """Refund issued against a payment."""

    id: str
    amount: float = Field(..., ge=0)
    status: str = "pending"
    type: str = "full"
    reason: str = ""
    created_at: Optional[datetime] = None


class Payment(Entity):
    """Payment resource."""

    payment_number: str
    booking_id: str = ""
    booking_number: str = ""
    customer_id: str = ""
    amount: float = Field(0.0, ge=0)
    currency: str = "INR"
    status: PaymentStatus = PaymentStatus.PENDING
    method: PaymentMethod = PaymentMethod.CREDIT_CARD
    type: PaymentType = PaymentType.BOOKING
    description: str = ""
    customer_details: PaymentCustomerDetails = Field(default_factory=PaymentCustomerDetails)
    razorpay_payment_id: Optional[str] = None
    razorpay_order_id: Optional[str] = None
    refunds: List[Refund] = Field(default_factory=list)
    refunded_amount: float = 0.0
    reference: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None


class PaymentFilters(FilterSpec):
    """Filter specification for payments."""

    status: List[PaymentStatus] = Field(default_factory=list)
    method: List[PaymentMethod] = Field(default_factory=list)
    type: List[PaymentType] = Field(default_factory=list)
    date_range: Optional[DateRange] = None
    amount_range: Optional[NumberRange] = None
    booking_id: Optional[str] = None
    customer_id: Optional[str] = None
    booking_number: Optional[str] = None
    payment_number: Optional[str] = None


class CreatePaymentRequest(ApiModel):
    """Request schema for creating a payment."""

    booking_id: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    currency: str = Field("INR", min_length=3, max_length=3)
    method: PaymentMethod = PaymentMethod.CREDIT_CARD
    type: PaymentType = PaymentType.BOOKING
    description: str = Field("", max_length=500)
    customer_details: Optional[PaymentCustomerDetails] = None


class UpdatePaymentRequest(ApiModel):
    """Partial update; only populated fields are sent."""

    status: Optional[PaymentStatus] = None
    description: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = None
    reference: Optional[str] = None


class CreateRefundRequest(ApiModel):
    """Request schema for refunding a payment."""

    amount: float = Field(..., gt=0)
    reason: str = Field(..., min_length=1, max_length=500)
    type: str = Field("full", pattern=r"^(full|partial|cancellation|goodwill)$")


class ProcessPaymentRequest(ApiModel):
    """Gateway confirmation of a pending payment (Razorpay checkout callback)."""

    payment_id: str = Field(..., min_length=1)
    razorpay_payment_id: str = Field(..., min_length=1)
    razorpay_order_id: str = Field(..., min_length=1)
    razorpay_signature: str = Field(..., min_length=1)


class PaymentStats(ApiModel):
    """Aggregate payment statistics."""

    total_payments: int = 0
    total_amount: float = 0.0
    successful_payments: int = 0
    failed_payments: int = 0
    refunded_amount: float = 0.0
