"""Booking service wrapping the ``/bookings`` endpoints."""

import logging
from typing import Any, List, Mapping, Optional

from ..schemas.booking import (
    AddBookingPaymentRequest,
    Booking,
    BookingFilters,
    BookingPayment,
    BookingStats,
    BookingStatus,
    CreateBookingRequest,
    UpdateBookingRequest,
    UpdateBookingStatusRequest,
)
from ..schemas.common import ApiResponse, SearchRequest
from .base import ResourceService

logger = logging.getLogger(__name__)


class BookingService(ResourceService):
    """Service for booking-related API operations."""

    base_path = "/bookings"
    entity_type = Booking

    async def get_all_bookings(self, filters: Optional[BookingFilters] = None) -> ApiResponse:
        return await self._list(filters)

    async def get_booking_by_id(self, booking_id: str) -> ApiResponse:
        return await self._get(booking_id)

    async def get_booking_by_number(self, booking_number: str) -> ApiResponse:
        return await self.client.get(
            "/bookings/number/{booking_number}",
            Booking,
            path_params={"booking_number": booking_number},
        )

    async def create_booking(self, payload: CreateBookingRequest) -> ApiResponse:
        logger.info(
            "Creating booking",
            extra={"tour_id": payload.tour_id, "participants": len(payload.participants)},
        )
        return await self._create(payload)

    async def update_booking(self, booking_id: str, payload: UpdateBookingRequest) -> ApiResponse:
        return await self._update(booking_id, payload)

    async def delete_booking(self, booking_id: str) -> ApiResponse:
        return await self._delete(booking_id)

    async def search_bookings(self, request: SearchRequest) -> ApiResponse:
        return await self._search(request)

    async def get_user_bookings(self, filters: Optional[BookingFilters] = None) -> ApiResponse:
        """Bookings belonging to the authenticated customer."""
        return await self._list(filters, endpoint="/bookings/user")

    async def get_booking_stats(self, date_from: Optional[str] = None, date_to: Optional[str] = None) -> ApiResponse:
        return await self.client.get(
            "/bookings/stats",
            BookingStats,
            params={k: v for k, v in {"dateFrom": date_from, "dateTo": date_to}.items() if v} or None,
        )

    async def update_booking_status(self, booking_id: str, request: UpdateBookingStatusRequest) -> ApiResponse:
        return await self.client.put(
            "/bookings/{id}/status",
            Booking,
            path_params={"id": booking_id},
            json=request.to_payload(),
        )

    async def confirm_booking(self, booking_id: str) -> ApiResponse:
        return await self.client.put("/bookings/{id}/confirm", Booking, path_params={"id": booking_id})

    async def cancel_booking(self, booking_id: str, reason: Optional[str] = None) -> ApiResponse:
        logger.info("Cancelling booking", extra={"booking_id": booking_id})
        return await self.client.put(
            "/bookings/{id}/cancel",
            Booking,
            path_params={"id": booking_id},
            json={"reason": reason} if reason else None,
        )

    async def get_booking_payments(self, booking_id: str) -> ApiResponse:
        return await self.client.get(
            "/bookings/{id}/payments",
            List[BookingPayment],
            path_params={"id": booking_id},
        )

    async def add_booking_payment(self, booking_id: str, request: AddBookingPaymentRequest) -> ApiResponse:
        return await self.client.post(
            "/bookings/{id}/payments",
            BookingPayment,
            path_params={"id": booking_id},
            json=request.to_payload(),
        )

    async def filter_bookings(self, filters: BookingFilters) -> ApiResponse:
        return await self._filter(filters)

    async def get_bookings_by_status(self, status: BookingStatus) -> ApiResponse:
        return await self._list_by("status", status)

    async def complete_booking(self, booking_id: str) -> ApiResponse:
        return await self.client.put("/bookings/{id}/complete", Booking, path_params={"id": booking_id})

    async def duplicate_booking(
        self, booking_id: str, modifications: Optional[Mapping[str, Any]] = None
    ) -> ApiResponse:
        """Copy a booking; ``modifications`` (camelCase keys) override fields of the copy."""
        return await self._duplicate(booking_id, modifications)
