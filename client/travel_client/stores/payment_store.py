"""Payment store configuration."""

from typing import Dict, List

from ..schemas.payment import Payment, PaymentFilters, PaymentStats, Refund
from .entity_store import DEFAULT_MAX_AGE_MS, EntityStore, StoreConfig
from .filters import contains_text, equals, in_date_range, in_range, one_of

PAYMENTS = "payments"
STATS = "stats"
REFUNDS = "refunds"
BOOKING_PAYMENTS = "booking-payments"


PAYMENT_STORE_CONFIG = StoreConfig(
    name=PAYMENTS,
    storage_name="payment-storage",
    entity_type=Payment,
    filter_type=PaymentFilters,
    search_fields=(
        lambda p: p.payment_number,
        lambda p: p.customer_details.first_name,
        lambda p: p.customer_details.last_name,
        lambda p: p.customer_details.email,
        lambda p: p.description,
        lambda p: p.booking_number,
        lambda p: p.razorpay_payment_id,
        lambda p: p.reference,
    ),
    predicates={
        "status": one_of(lambda p: p.status),
        "method": one_of(lambda p: p.method),
        "type": one_of(lambda p: p.type),
        "date_range": in_date_range(lambda p: p.created_at),
        "amount_range": in_range(lambda p: p.amount),
        "booking_id": equals(lambda p: p.booking_id),
        "customer_id": equals(lambda p: p.customer_id),
        "booking_number": contains_text(lambda p: p.booking_number),
        "payment_number": contains_text(lambda p: p.payment_number),
    },
    extras={
        STATS: PaymentStats,
        # Keyed by payment id
        REFUNDS: Dict[str, List[Refund]],
        # Keyed by booking id
        BOOKING_PAYMENTS: Dict[str, List[Payment]],
    },
)


def create_payment_store(storage=None, clock=None, max_age_ms: int = DEFAULT_MAX_AGE_MS) -> EntityStore:
    return EntityStore(PAYMENT_STORE_CONFIG, storage=storage, clock=clock, max_age_ms=max_age_ms)
