"""Booking actions: list/detail/CRUD plus status, stats and payments."""

from typing import Any, Dict, Mapping, Optional

from ..schemas.booking import (
    AddBookingPaymentRequest,
    BookingFilters,
    BookingStatus,
    CreateBookingRequest,
    UpdateBookingRequest,
    UpdateBookingStatusRequest,
)
from ..schemas.common import SearchRequest
from ..services.booking_service import BookingService
from ..stores.booking_store import PAYMENTS, STATS, USER_BOOKINGS
from .base import ActionResult, DomainHooks


class BookingHooks(DomainHooks):
    """Booking orchestration over a booking store."""

    entity_label = "Booking"
    service: BookingService

    async def get_all_bookings(
        self, filters: Optional[BookingFilters] = None, force_refresh: bool = False
    ) -> ActionResult:
        return await self._load_list(lambda: self.service.get_all_bookings(filters), filters, force_refresh)

    async def get_booking_by_id(self, booking_id: str) -> ActionResult:
        return await self._load_detail(lambda: self.service.get_booking_by_id(booking_id))

    async def get_booking_by_number(self, booking_number: str) -> ActionResult:
        return await self._load_detail(lambda: self.service.get_booking_by_number(booking_number))

    async def create_booking(self, payload: CreateBookingRequest) -> ActionResult:
        return await self._create(lambda: self.service.create_booking(payload))

    async def update_booking(self, booking_id: str, payload: UpdateBookingRequest) -> ActionResult:
        return await self._update(lambda: self.service.update_booking(booking_id, payload))

    async def delete_booking(self, booking_id: str) -> ActionResult:
        return await self._delete(booking_id, lambda: self.service.delete_booking(booking_id))

    async def search_bookings(self, request: SearchRequest) -> ActionResult:
        return await self._search(request, lambda: self.service.search_bookings(request))

    async def get_user_bookings(self, force_refresh: bool = False) -> ActionResult:
        return await self._load_extra(
            USER_BOOKINGS,
            lambda: self.service.get_user_bookings(),
            force_refresh,
            transform=lambda page: page.items,
        )

    async def get_booking_stats(self, force_refresh: bool = False) -> ActionResult:
        return await self._load_extra(STATS, lambda: self.service.get_booking_stats(), force_refresh)

    async def update_booking_status(
        self, booking_id: str, status: BookingStatus, reason: Optional[str] = None
    ) -> ActionResult:
        request = UpdateBookingStatusRequest(status=status, reason=reason)
        return await self._mutate(
            lambda: self.service.update_booking_status(booking_id, request),
            self._apply_update,
            f"Booking status updated to {request.status.value}",
        )

    async def confirm_booking(self, booking_id: str) -> ActionResult:
        return await self._mutate(
            lambda: self.service.confirm_booking(booking_id),
            self._apply_update,
            "Booking confirmed successfully",
        )

    async def cancel_booking(self, booking_id: str, reason: Optional[str] = None) -> ActionResult:
        return await self._mutate(
            lambda: self.service.cancel_booking(booking_id, reason),
            self._apply_update,
            "Booking cancelled successfully",
        )

    async def get_booking_payments(self, booking_id: str, force_refresh: bool = False) -> ActionResult:
        return await self._load_keyed_extra(
            PAYMENTS,
            booking_id,
            lambda: self.service.get_booking_payments(booking_id),
            force_refresh,
        )

    async def add_booking_payment(self, booking_id: str, request: AddBookingPaymentRequest) -> ActionResult:
        def apply(payment):
            payments = (self.store.get_extra(PAYMENTS) or {}).get(booking_id, [])
            self._put_keyed_extra(PAYMENTS, booking_id, [*payments, payment])
            # Totals and payment status changed server-side
            self.store.invalidate(STATS)
            return payment

        return await self._mutate(
            lambda: self.service.add_booking_payment(booking_id, request),
            apply,
            "Payment added successfully",
            category=PAYMENTS,
        )

    async def filter_bookings(self, filters: BookingFilters) -> ActionResult:
        """Server-side filter; matches merge into the list and ``filters`` narrows the view."""
        return await self._filter(filters, lambda: self.service.filter_bookings(filters))

    async def get_bookings_by_status(self, status: BookingStatus) -> ActionResult:
        status = BookingStatus(status)
        return await self._filter(
            BookingFilters(status=[status]),
            lambda: self.service.get_bookings_by_status(status),
        )

    async def complete_booking(self, booking_id: str) -> ActionResult:
        return await self._mutate(
            lambda: self.service.complete_booking(booking_id),
            self._apply_update,
            "Booking completed successfully",
        )

    async def duplicate_booking(
        self, booking_id: str, modifications: Optional[Mapping[str, Any]] = None
    ) -> ActionResult:
        def apply(booking):
            self.store.add(booking)
            self.store.invalidate(STATS)
            return booking

        return await self._mutate(
            lambda: self.service.duplicate_booking(booking_id, modifications),
            apply,
            "Booking duplicated successfully",
        )

    async def initialize_booking_data(self) -> Dict[str, ActionResult]:
        """Warm the list and the stats concurrently."""
        return await self._initialize(bookings=self.get_all_bookings(), stats=self.get_booking_stats())

    def _apply_update(self, booking):
        self.store.update(booking)
        self.store.invalidate(STATS)
        return booking
