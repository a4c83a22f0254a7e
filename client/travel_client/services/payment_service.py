"""Payment service wrapping the ``/payments`` endpoints."""

import logging
from typing import List, Optional

from ..schemas.common import ApiResponse, SearchRequest
from ..schemas.payment import (
    CreatePaymentRequest,
    CreateRefundRequest,
    Payment,
    PaymentFilters,
    PaymentStats,
    ProcessPaymentRequest,
    Refund,
    UpdatePaymentRequest,
)
from .base import ResourceService

logger = logging.getLogger(__name__)


class PaymentService(ResourceService):
    """
    Service for payment-related API operations.

    Payments are financial records and cannot be deleted; ``cancel_payment``
    and refunds take that role.
    """

    base_path = "/payments"
    entity_type = Payment

    async def get_all_payments(self, filters: Optional[PaymentFilters] = None) -> ApiResponse:
        return await self._list(filters)

    async def get_payment_by_id(self, payment_id: str) -> ApiResponse:
        return await self._get(payment_id)

    async def create_payment(self, payload: CreatePaymentRequest) -> ApiResponse:
        logger.info(
            "Creating payment",
            extra={"booking_id": payload.booking_id, "amount": payload.amount, "currency": payload.currency},
        )
        return await self._create(payload)

    async def update_payment(self, payment_id: str, payload: UpdatePaymentRequest) -> ApiResponse:
        return await self._update(payment_id, payload)

    async def search_payments(self, request: SearchRequest) -> ApiResponse:
        return await self._search(request)

    async def get_booking_payments(self, booking_id: str) -> ApiResponse:
        return await self.client.get(
            "/bookings/{booking_id}/payments",
            List[Payment],
            path_params={"booking_id": booking_id},
        )

    async def cancel_payment(self, payment_id: str, reason: Optional[str] = None) -> ApiResponse:
        return await self.client.post(
            "/payments/{id}/cancel",
            Payment,
            path_params={"id": payment_id},
            json={"reason": reason} if reason else None,
        )

    async def get_payment_refunds(self, payment_id: str) -> ApiResponse:
        return await self.client.get("/payments/{id}/refunds", List[Refund], path_params={"id": payment_id})

    async def create_refund(self, payment_id: str, request: CreateRefundRequest) -> ApiResponse:
        logger.info("Requesting refund", extra={"payment_id": payment_id, "amount": request.amount})
        return await self.client.post(
            "/payments/{id}/refunds",
            Refund,
            path_params={"id": payment_id},
            json=request.to_payload(),
        )

    async def get_payment_stats(self) -> ApiResponse:
        return await self.client.get("/payments/stats", PaymentStats)

    async def process_payment(self, request: ProcessPaymentRequest) -> ApiResponse:
        """Confirm a gateway payment; the API verifies the signature and returns the settled payment."""
        logger.info(
            "Processing payment",
            extra={"payment_id": request.payment_id, "gateway_order_id": request.razorpay_order_id},
        )
        return await self.client.post("/payments/process", Payment, json=request.to_payload())
