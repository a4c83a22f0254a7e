"""FAQ and policy document schemas."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field

from .common import ApiModel, Entity, FilterSpec


class PolicyType(str, Enum):
    """Policy and information documents served under ``/info``."""
    PRIVACY_POLICY = "privacy-policy"
    TERMS_CONDITIONS = "terms-conditions"
    REFUND_POLICY = "refund-policy"
    SHIPPING_POLICY = "shipping-policy"
    PAYMENT_SECURITY = "payment-security"
    COOKIE_POLICY = "cookie-policy"
    TRAVEL_GUIDELINES = "travel-guidelines"
    DISCLAIMER = "disclaimer"
    CUSTOMER_RIGHTS = "customer-rights"
    INSURANCE_LIABILITY = "insurance-liability"
    LEGAL_CONTACT = "legal-contact"
    SUPPORT = "support"


class FAQItem(Entity):
    """Frequently asked question."""

    question: str
    answer: str = ""
    category: Optional[str] = None
    last_updated: Optional[datetime] = None


class FAQFilters(FilterSpec):
    category: Optional[str] = None


class CreateFAQRequest(ApiModel):
    """Request schema for creating an FAQ entry."""

    question: str = Field(..., min_length=1, max_length=1000)
    answer: str = Field(..., min_length=1, max_length=10000)
    category: Optional[str] = Field(None, max_length=100)


class UpdateFAQRequest(ApiModel):
    """Partial update; only populated fields are sent."""

    question: Optional[str] = Field(None, min_length=1, max_length=1000)
    answer: Optional[str] = Field(None, min_length=1, max_length=10000)
    category: Optional[str] = Field(None, max_length=100)


class PolicyDocument(ApiModel):
    """
    A policy document.

    Each policy type has its own section layout, so sections are kept as
    free-form extra fields; only the common dates are typed.
    """

    effective_date: Optional[datetime] = None
    last_updated: Optional[datetime] = None
