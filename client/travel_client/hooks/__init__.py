"""Hook layer: orchestration between services, stores and notifications."""

from .activity_hooks import ActivityHooks
from .base import ActionResult, DomainHooks
from .booking_hooks import BookingHooks
from .destination_hooks import DestinationHooks
from .info_hooks import InfoHooks
from .itinerary_hooks import ItineraryHooks
from .payment_hooks import PaymentHooks
from .service_hooks import ServiceHooks
from .tour_hooks import TourHooks

__all__ = [
    "ActionResult",
    "ActivityHooks",
    "BookingHooks",
    "DestinationHooks",
    "DomainHooks",
    "InfoHooks",
    "ItineraryHooks",
    "PaymentHooks",
    "ServiceHooks",
    "TourHooks",
]
