"""Unit tests for booking hook actions against the fake API."""

import httpx
import pytest

from travel_client.core.api_client import ApiClient
from travel_client.core.notifications import NotificationLevel
from travel_client.hooks import BookingHooks
from travel_client.schemas.booking import (
    AddBookingPaymentRequest,
    BookingFilters,
    BookingStatus,
    CreateBookingRequest,
    UpdateBookingRequest,
)
from travel_client.schemas.common import SearchRequest
from travel_client.services import BookingService
from travel_client.stores.booking_store import BOOKINGS, PAYMENTS, STATS, USER_BOOKINGS


def create_request(**overrides):
    data = {
        "tour_id": "tour_1",
        "availability_id": "avail_1",
        "participants": [{"first_name": "Alan", "last_name": "Turing", "email": "alan@example.com"}],
    }
    data.update(overrides)
    return CreateBookingRequest(**data)


@pytest.mark.asyncio
async def test_get_all_bookings_populates_store(booking_hooks, booking_store):
    """Test that an unfiltered list read fills the store and stamps the cache."""
    result = await booking_hooks.get_all_bookings()

    assert result.success
    assert [b.id for b in result.data["items"]] == ["bk_1", "bk_2", "bk_3"]
    assert result.data["total"] == 3
    assert [b.id for b in booking_store.items] == ["bk_1", "bk_2", "bk_3"]
    assert booking_store.is_cache_valid(BOOKINGS)
    assert booking_store.loading is False
    assert booking_store.error is None


@pytest.mark.asyncio
async def test_second_read_within_window_is_served_from_cache(booking_hooks, backend):
    """Test that a fresh cache avoids the network entirely."""
    await booking_hooks.get_all_bookings()
    result = await booking_hooks.get_all_bookings()

    assert result.success
    assert len(result.data["items"]) == 3
    assert backend.count("GET", "/bookings") == 1


@pytest.mark.asyncio
async def test_expired_cache_refetches(booking_hooks, backend, clock):
    await booking_hooks.get_all_bookings()
    clock.advance(5 * 60 * 1000)

    await booking_hooks.get_all_bookings()

    assert backend.count("GET", "/bookings") == 2


@pytest.mark.asyncio
async def test_force_refresh_bypasses_cache(booking_hooks, backend):
    await booking_hooks.get_all_bookings()
    await booking_hooks.get_all_bookings(force_refresh=True)

    assert backend.count("GET", "/bookings") == 2


@pytest.mark.asyncio
async def test_filters_always_hit_the_service(booking_hooks, booking_store, backend):
    """Test that filtered reads bypass a valid cache and do not stamp it."""
    await booking_hooks.get_all_bookings()

    result = await booking_hooks.get_all_bookings(BookingFilters(status=[BookingStatus.CONFIRMED]))

    assert backend.count("GET", "/bookings") == 2
    assert [b.id for b in result.data["items"]] == ["bk_2"]
    assert [b.id for b in booking_store.items] == ["bk_2"]
    # The narrowed list must not satisfy the next unfiltered read
    assert booking_store.is_cache_valid(BOOKINGS) is False

    await booking_hooks.get_all_bookings()
    assert backend.count("GET", "/bookings") == 3
    assert len(booking_store.items) == 3


@pytest.mark.asyncio
async def test_empty_list_is_a_valid_cache(booking_hooks, booking_store, backend):
    backend.seed("bookings", [])

    await booking_hooks.get_all_bookings()
    result = await booking_hooks.get_all_bookings()

    assert result.success
    assert result.data["items"] == []
    assert backend.count("GET", "/bookings") == 1


@pytest.mark.asyncio
async def test_read_failure_sets_error_without_notification(booking_hooks, booking_store, backend, notifier):
    backend.fail("GET", "/bookings", 500)

    result = await booking_hooks.get_all_bookings()

    assert result.success is False
    assert result.error == "Internal server error"
    assert booking_store.error == "Internal server error"
    assert booking_store.loading is False
    assert notifier.history == []


@pytest.mark.asyncio
async def test_retry_after_failure_clears_error(booking_hooks, booking_store, backend):
    backend.fail("GET", "/bookings", 500)
    await booking_hooks.get_all_bookings()
    backend.recover()

    result = await booking_hooks.get_all_bookings()

    assert result.success
    assert booking_store.error is None


@pytest.mark.asyncio
async def test_create_booking_appends_and_notifies(booking_hooks, booking_store, notifier):
    await booking_hooks.get_all_bookings()

    result = await booking_hooks.create_booking(create_request())

    assert result.success
    assert result.data.tour_id == "tour_1"
    assert booking_store.items[-1].id == result.data.id
    assert len(booking_store.items) == 4
    assert notifier.last().level == NotificationLevel.SUCCESS
    assert notifier.last().message == "Booking created successfully"


@pytest.mark.asyncio
async def test_create_booking_network_error(test_settings, booking_store, notifier):
    """Test that a transport failure leaves the list intact and reports the error."""
    def handler(request):
        raise httpx.ConnectError("Connection refused", request=request)

    client = ApiClient(test_settings, transport=httpx.MockTransport(handler))
    hooks = BookingHooks(booking_store, BookingService(client), notifier)
    booking_store.set_items([])

    result = await hooks.create_booking(create_request())
    await client.aclose()

    assert result.success is False
    assert result.error == "Connection refused"
    assert booking_store.error == "Connection refused"
    assert booking_store.loading is False
    assert booking_store.items == []
    assert notifier.last().level == NotificationLevel.ERROR


@pytest.mark.asyncio
async def test_application_failure_envelope(booking_hooks, booking_store, backend, notifier):
    backend.fail(
        "POST",
        "/bookings",
        200,
        {"success": False, "statusCode": 200, "message": "Tour is sold out", "data": None},
    )

    result = await booking_hooks.create_booking(create_request())

    assert result.success is False
    assert result.error == "Tour is sold out"
    assert booking_store.error == "Tour is sold out"
    assert notifier.last().message == "Tour is sold out"


@pytest.mark.asyncio
async def test_get_booking_by_id_selects_and_refreshes_list(booking_hooks, booking_store, backend):
    await booking_hooks.get_all_bookings()
    backend.find("bookings", "bk_1")["status"] = "confirmed"

    result = await booking_hooks.get_booking_by_id("bk_1")

    assert result.success
    assert booking_store.selected.id == "bk_1"
    assert booking_store.get("bk_1").status == BookingStatus.CONFIRMED


@pytest.mark.asyncio
async def test_get_booking_by_number(booking_hooks, booking_store):
    result = await booking_hooks.get_booking_by_number("BK-1003")

    assert result.success
    assert booking_store.selected.id == "bk_3"


@pytest.mark.asyncio
async def test_get_unknown_booking_does_not_touch_list_error(booking_hooks, booking_store):
    result = await booking_hooks.get_booking_by_id("nope")

    assert result.success is False
    assert booking_store.error is None
    assert booking_store.get_error("detail") == "bookings nope not found"


@pytest.mark.asyncio
async def test_update_booking_replaces_in_place(booking_hooks, booking_store):
    await booking_hooks.get_all_bookings()

    result = await booking_hooks.update_booking("bk_2", UpdateBookingRequest(special_requests="Window seat"))

    assert result.success
    assert [b.id for b in booking_store.items] == ["bk_1", "bk_2", "bk_3"]
    assert booking_store.get("bk_2").special_requests == "Window seat"


@pytest.mark.asyncio
async def test_delete_selected_booking(booking_hooks, booking_store, notifier):
    await booking_hooks.get_all_bookings()
    await booking_hooks.get_booking_by_id("bk_1")

    result = await booking_hooks.delete_booking("bk_1")

    assert result.success
    assert result.data == "bk_1"
    assert booking_store.get("bk_1") is None
    assert booking_store.selected is None
    assert notifier.last().message == "Booking deleted successfully"


@pytest.mark.asyncio
async def test_status_changes_update_store_and_expire_stats(booking_hooks, booking_store, notifier):
    await booking_hooks.get_all_bookings()
    await booking_hooks.get_booking_stats()
    assert booking_store.is_cache_valid(STATS)

    result = await booking_hooks.update_booking_status("bk_1", BookingStatus.COMPLETED, reason="Trip finished")

    assert result.success
    assert booking_store.get("bk_1").status == BookingStatus.COMPLETED
    assert booking_store.is_cache_valid(STATS) is False
    assert notifier.last().message == "Booking status updated to completed"

    await booking_hooks.cancel_booking("bk_2", reason="Illness")
    assert booking_store.get("bk_2").status == BookingStatus.CANCELLED

    await booking_hooks.confirm_booking("bk_2")
    assert booking_store.get("bk_2").status == BookingStatus.CONFIRMED


@pytest.mark.asyncio
async def test_booking_stats_cached(booking_hooks, booking_store, backend):
    first = await booking_hooks.get_booking_stats()
    second = await booking_hooks.get_booking_stats()

    assert first.data.total_bookings == 3
    assert second.data.confirmed_bookings == 1
    assert booking_store.get_extra(STATS).pending_bookings == 1
    assert backend.count("GET", "/bookings/stats") == 1


@pytest.mark.asyncio
async def test_user_bookings_mirror_updates(booking_hooks, booking_store):
    await booking_hooks.get_all_bookings()
    result = await booking_hooks.get_user_bookings()

    assert [b.id for b in result.data] == ["bk_1", "bk_3"]

    await booking_hooks.confirm_booking("bk_1")

    mirrored = {b.id: b.status for b in booking_store.get_extra(USER_BOOKINGS)}
    assert mirrored["bk_1"] == BookingStatus.CONFIRMED


@pytest.mark.asyncio
async def test_booking_payments_keyed_by_booking(booking_hooks, booking_store, backend):
    empty = await booking_hooks.get_booking_payments("bk_1")
    assert empty.data == []

    added = await booking_hooks.add_booking_payment("bk_1", AddBookingPaymentRequest(amount=250.0))

    assert added.success
    assert added.data.amount == 250.0
    assert [p.amount for p in booking_store.get_extra(PAYMENTS)["bk_1"]] == [250.0]

    cached = await booking_hooks.get_booking_payments("bk_1")
    assert [p.id for p in cached.data] == [added.data.id]
    assert backend.count("GET", "/bookings/bk_1/payments") == 1


@pytest.mark.asyncio
async def test_search_returns_results_and_narrows_local_view(booking_hooks, booking_store):
    await booking_hooks.get_all_bookings()

    result = await booking_hooks.search_bookings(SearchRequest(query="sahara"))

    assert [b.id for b in result.data["items"]] == ["bk_2"]
    assert booking_store.search_query == "sahara"
    assert [b.id for b in booking_store.filtered_items] == ["bk_2"]
    assert len(booking_store.items) == 3


@pytest.mark.asyncio
async def test_clear_filters_and_refresh_all(booking_hooks, booking_store, backend):
    await booking_hooks.get_all_bookings()
    booking_hooks.set_filters({"status": ["pending"]})
    booking_hooks.set_search_query("northern")
    assert [b.id for b in booking_store.filtered_items] == ["bk_1"]

    booking_hooks.clear_filters()
    assert len(booking_store.filtered_items) == 3

    booking_hooks.refresh_all()
    await booking_hooks.get_all_bookings()
    assert backend.count("GET", "/bookings") == 2


@pytest.mark.asyncio
async def test_mutations_return_results_on_both_paths(booking_hooks, booking_store, backend, notifier):
    """Test that notifying never turns a mutation into a raised exception."""
    await booking_hooks.get_all_bookings()

    confirmed = await booking_hooks.confirm_booking("bk_1")
    backend.fail("PUT", "/bookings/bk_2/cancel", 409, {"success": False, "message": "Already cancelled"})
    refused = await booking_hooks.cancel_booking("bk_2")

    assert confirmed.success
    assert refused.success is False
    assert refused.error == "Already cancelled"
    assert [n.level for n in notifier.history] == [NotificationLevel.SUCCESS, NotificationLevel.ERROR]


@pytest.mark.asyncio
async def test_search_ignores_unmodelled_filter_keys(booking_hooks, booking_store, backend):
    await booking_hooks.get_all_bookings()

    result = await booking_hooks.search_bookings(
        SearchRequest(query="", filters={"minParticipants": 2, "status": ["confirmed"]})
    )

    assert result.success
    assert backend.count("POST", "/bookings/search") == 1
    assert booking_store.filters.status == [BookingStatus.CONFIRMED]
    assert [b.id for b in booking_store.filtered_items] == ["bk_2"]


@pytest.mark.asyncio
async def test_search_with_malformed_filter_fails_before_request(booking_hooks, booking_store, backend):
    result = await booking_hooks.search_bookings(SearchRequest(query="", filters={"status": ["bogus"]}))

    assert result.success is False
    assert result.error.startswith("Invalid BookingFilters: status.0:")
    assert backend.count("POST", "/bookings/search") == 0
    assert booking_store.get_error("search") == result.error


@pytest.mark.asyncio
async def test_filter_bookings_merges_matches_and_narrows_view(booking_hooks, booking_store, backend):
    await booking_hooks.get_all_bookings()
    backend.find("bookings", "bk_1")["status"] = "confirmed"

    result = await booking_hooks.filter_bookings(BookingFilters(status=[BookingStatus.CONFIRMED]))

    assert [b.id for b in result.data] == ["bk_1", "bk_2"]
    assert backend.count("POST", "/bookings/filter") == 1
    assert [b.id for b in booking_store.items] == ["bk_1", "bk_2", "bk_3"]
    assert [b.id for b in booking_store.filtered_items] == ["bk_1", "bk_2"]
    assert booking_store.get("bk_1").status == BookingStatus.CONFIRMED


@pytest.mark.asyncio
async def test_bookings_by_status(booking_hooks, booking_store, backend):
    result = await booking_hooks.get_bookings_by_status("cancelled")

    assert [b.id for b in result.data] == ["bk_3"]
    assert backend.count("GET", "/bookings/status/cancelled") == 1
    assert booking_store.filters.status == [BookingStatus.CANCELLED]
    assert [b.id for b in booking_store.filtered_items] == ["bk_3"]
    # A partial result must not satisfy the next full read
    assert booking_store.is_cache_valid(BOOKINGS) is False


@pytest.mark.asyncio
async def test_complete_booking(booking_hooks, booking_store, notifier):
    await booking_hooks.get_all_bookings()
    await booking_hooks.get_booking_stats()

    result = await booking_hooks.complete_booking("bk_2")

    assert result.success
    assert booking_store.get("bk_2").status == BookingStatus.COMPLETED
    assert booking_store.is_cache_valid(STATS) is False
    assert notifier.last().message == "Booking completed successfully"


@pytest.mark.asyncio
async def test_duplicate_booking_adds_copy(booking_hooks, booking_store, notifier):
    await booking_hooks.get_all_bookings()

    result = await booking_hooks.duplicate_booking("bk_2", {"specialRequests": "Same again"})

    assert result.success
    assert result.data.id not in {"bk_1", "bk_2", "bk_3"}
    assert result.data.tour_id == "tour_2"
    assert result.data.special_requests == "Same again"
    assert booking_store.items[-1].id == result.data.id
    assert notifier.last().message == "Booking duplicated successfully"


@pytest.mark.asyncio
async def test_initialize_booking_data(booking_hooks, booking_store, backend):
    outcome = await booking_hooks.initialize_booking_data()

    assert set(outcome) == {"bookings", "stats"}
    assert all(result.success for result in outcome.values())
    assert len(booking_store.items) == 3
    assert booking_store.is_cache_valid(STATS)

    backend.fail("GET", "/bookings/stats", 500)
    again = await booking_hooks.initialize_booking_data()

    # Fresh caches serve both reads; nothing is refetched
    assert all(result.success for result in again.values())
    assert backend.count("GET", "/bookings/stats") == 1
