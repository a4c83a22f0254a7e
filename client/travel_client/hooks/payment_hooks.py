"""Payment actions."""

from typing import Dict, Optional

from ..schemas.common import SearchRequest
from ..schemas.payment import (
    CreatePaymentRequest,
    CreateRefundRequest,
    PaymentFilters,
    ProcessPaymentRequest,
    UpdatePaymentRequest,
)
from ..services.payment_service import PaymentService
from ..stores.payment_store import BOOKING_PAYMENTS, REFUNDS, STATS
from .base import ActionResult, DomainHooks


class PaymentHooks(DomainHooks):
    """Payment orchestration over a payment store."""

    entity_label = "Payment"
    service: PaymentService

    async def get_all_payments(
        self, filters: Optional[PaymentFilters] = None, force_refresh: bool = False
    ) -> ActionResult:
        return await self._load_list(lambda: self.service.get_all_payments(filters), filters, force_refresh)

    async def get_payment_by_id(self, payment_id: str) -> ActionResult:
        return await self._load_detail(lambda: self.service.get_payment_by_id(payment_id))

    async def create_payment(self, payload: CreatePaymentRequest) -> ActionResult:
        result = await self._create(lambda: self.service.create_payment(payload))
        if result.success:
            self.store.invalidate(STATS)
            self.store.invalidate(f"{BOOKING_PAYMENTS}:{payload.booking_id}")
        return result

    async def update_payment(self, payment_id: str, payload: UpdatePaymentRequest) -> ActionResult:
        return await self._update(lambda: self.service.update_payment(payment_id, payload))

    async def cancel_payment(self, payment_id: str, reason: Optional[str] = None) -> ActionResult:
        def apply(payment):
            self.store.update(payment)
            self.store.invalidate(STATS)
            return payment

        return await self._mutate(
            lambda: self.service.cancel_payment(payment_id, reason),
            apply,
            "Payment cancelled successfully",
        )

    async def search_payments(self, request: SearchRequest) -> ActionResult:
        return await self._search(request, lambda: self.service.search_payments(request))

    async def get_booking_payments(self, booking_id: str, force_refresh: bool = False) -> ActionResult:
        return await self._load_keyed_extra(
            BOOKING_PAYMENTS,
            booking_id,
            lambda: self.service.get_booking_payments(booking_id),
            force_refresh,
        )

    async def get_payment_refunds(self, payment_id: str, force_refresh: bool = False) -> ActionResult:
        return await self._load_keyed_extra(
            REFUNDS,
            payment_id,
            lambda: self.service.get_payment_refunds(payment_id),
            force_refresh,
        )

    async def create_refund(self, payment_id: str, request: CreateRefundRequest) -> ActionResult:
        def apply(refund):
            refunds = (self.store.get_extra(REFUNDS) or {}).get(payment_id, [])
            self._put_keyed_extra(REFUNDS, payment_id, [*refunds, refund])
            # The payment's status and refunded amount changed server-side
            self.store.invalidate(self.store.name)
            self.store.invalidate(STATS)
            return refund

        return await self._mutate(
            lambda: self.service.create_refund(payment_id, request),
            apply,
            "Refund processed successfully",
            category=REFUNDS,
        )

    async def get_payment_stats(self, force_refresh: bool = False) -> ActionResult:
        return await self._load_extra(STATS, lambda: self.service.get_payment_stats(), force_refresh)

    async def process_payment(self, request: ProcessPaymentRequest) -> ActionResult:
        """Settle a gateway payment; the returned record replaces (or joins) the list copy."""
        def apply(payment):
            self.store.merge([payment])
            self.store.invalidate(STATS)
            self.store.invalidate(f"{BOOKING_PAYMENTS}:{payment.booking_id}")
            return payment

        return await self._mutate(
            lambda: self.service.process_payment(request),
            apply,
            "Payment processed successfully",
        )

    def filter_payments(self, filters: Optional[PaymentFilters]) -> ActionResult:
        """Narrow the loaded payments locally; no request is made."""
        return self._filter_locally(filters)

    async def initialize_payment_data(self) -> Dict[str, ActionResult]:
        return await self._initialize(payments=self.get_all_payments(), stats=self.get_payment_stats())
