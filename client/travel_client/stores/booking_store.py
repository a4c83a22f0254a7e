"""Booking store configuration."""

from typing import Dict, List

from ..schemas.booking import Booking, BookingFilters, BookingPayment, BookingStats
from .entity_store import DEFAULT_MAX_AGE_MS, EntityStore, StoreConfig
from .filters import equals, in_date_range, one_of

BOOKINGS = "bookings"
USER_BOOKINGS = "user-bookings"
STATS = "stats"
PAYMENTS = "payments"


def _participant_texts(booking: Booking) -> List[str]:
    texts = []
    for participant in booking.participants:
        texts.extend([participant.first_name, participant.last_name, participant.email])
    return texts


BOOKING_STORE_CONFIG = StoreConfig(
    name=BOOKINGS,
    storage_name="booking-storage",
    entity_type=Booking,
    filter_type=BookingFilters,
    search_fields=(
        lambda b: b.booking_number,
        lambda b: b.tour_title,
        _participant_texts,
    ),
    predicates={
        "status": one_of(lambda b: b.status),
        "payment_status": one_of(lambda b: b.payment_status),
        "source": one_of(lambda b: b.source),
        "date_range": in_date_range(lambda b: b.booking_date),
        "tour_id": equals(lambda b: b.tour_id),
        "customer_id": equals(lambda b: b.customer_id),
    },
    extras={
        USER_BOOKINGS: List[Booking],
        STATS: BookingStats,
        # Payments sub-resource, keyed by booking id
        PAYMENTS: Dict[str, List[BookingPayment]],
    },
    mirrored_extras=(USER_BOOKINGS,),
)


def create_booking_store(storage=None, clock=None, max_age_ms: int = DEFAULT_MAX_AGE_MS) -> EntityStore:
    return EntityStore(BOOKING_STORE_CONFIG, storage=storage, clock=clock, max_age_ms=max_age_ms)
