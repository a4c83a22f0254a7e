"""Service layer package."""

from .activity_service import ActivityService
from .booking_service import BookingService
from .destination_service import DestinationService
from .info_service import InfoService
from .itinerary_service import ItineraryService
from .payment_service import PaymentService
from .service_service import ServiceCatalogService
from .tour_service import TourService

__all__ = [
    "ActivityService",
    "BookingService",
    "DestinationService",
    "InfoService",
    "ItineraryService",
    "PaymentService",
    "ServiceCatalogService",
    "TourService",
]
