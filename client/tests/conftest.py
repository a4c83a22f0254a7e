"""Test configuration and fixtures."""

import copy
import itertools
from collections import Counter
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio
from fastapi import APIRouter, Body, FastAPI, Request
from fastapi.responses import JSONResponse

from travel_client.core.api_client import ApiClient
from travel_client.core.config import Settings
from travel_client.core.notifications import Notifier
from travel_client.core.storage import MemorySessionStorage
from travel_client.hooks import BookingHooks, DestinationHooks, InfoHooks
from travel_client.services import BookingService, DestinationService, InfoService
from travel_client.stores import create_booking_store, create_destination_store, create_info_store

API_PREFIX = "/api/v1"
TEST_BASE_URL = "http://testserver/api"


def envelope(data: Any = None, message: str = "", status_code: int = 200, success: bool = True) -> Dict[str, Any]:
    """Wrap a payload the way the travel API does."""
    return {"success": success, "statusCode": status_code, "message": message, "data": data}


def page(name: str, items: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {name: items, "total": len(items), "page": 1, "limit": max(len(items), 10), "pages": 1}


class FakeBackend:
    """
    In-memory stand-in for the travel REST API.

    Collections hold camelCase documents exactly as the server would send
    them. Every request is counted by ``(method, path)`` and individual
    routes can be made to fail.
    """

    def __init__(self):
        self.collections: Dict[str, List[Dict[str, Any]]] = {}
        self.extras: Dict[str, Any] = {}
        self.calls: Counter = Counter()
        self.failures: Dict[Tuple[str, str], Tuple[int, Dict[str, Any]]] = {}
        self._ids = itertools.count(1000)

    def seed(self, name: str, items: List[Dict[str, Any]]) -> None:
        self.collections[name] = copy.deepcopy(items)

    def next_id(self, prefix: str) -> str:
        return f"{prefix}_{next(self._ids)}"

    def count(self, method: str, path: str) -> int:
        return self.calls[(method, path)]

    def fail(self, method: str, path: str, status_code: int = 500, body: Optional[Dict[str, Any]] = None) -> None:
        """Make ``method path`` answer with an error until ``recover`` is called."""
        self.failures[(method, path)] = (
            status_code,
            body if body is not None else envelope(message="Internal server error", status_code=status_code, success=False),
        )

    def recover(self) -> None:
        self.failures.clear()

    def find(self, name: str, item_id: str) -> Optional[Dict[str, Any]]:
        for item in self.collections.get(name, []):
            if item["id"] == item_id:
                return item
        return None


def _not_found(message: str) -> JSONResponse:
    return JSONResponse(status_code=404, content=envelope(message=message, status_code=404, success=False))


def crud_router(
    backend: FakeBackend,
    name: str,
    id_prefix: str,
    filter_params: Optional[Dict[str, str]] = None,
    defaults: Optional[Callable[[str], Dict[str, Any]]] = None,
) -> APIRouter:
    """Generic list/search/get/create/update/delete routes for one collection."""
    router = APIRouter(prefix=f"/{name}")

    @router.get("")
    async def list_items(request: Request):
        items = backend.collections.get(name, [])
        # Query parameter name -> document field
        for param, field in (filter_params or {}).items():
            raw = request.query_params.get(param)
            if raw:
                allowed = raw.split(",")
                items = [item for item in items if str(item.get(field)) in allowed]
        return envelope(page(name, items))

    @router.post("/search")
    async def search_items(payload: Dict[str, Any] = Body(...)):
        query = (payload.get("query") or "").lower()
        items = [
            item for item in backend.collections.get(name, [])
            if any(query in str(value).lower() for value in item.values())
        ]
        return envelope(page(name, items))

    @router.get("/{item_id}")
    async def get_item(item_id: str):
        item = backend.find(name, item_id)
        if item is None:
            return _not_found(f"{name} {item_id} not found")
        return envelope(item)

    @router.post("", status_code=201)
    async def create_item(payload: Dict[str, Any] = Body(...)):
        item_id = backend.next_id(id_prefix)
        item = {"id": item_id, **(defaults(item_id) if defaults else {}), **payload}
        backend.collections.setdefault(name, []).append(item)
        return JSONResponse(status_code=201, content=envelope(item, message="Created", status_code=201))

    @router.put("/{item_id}")
    async def update_item(item_id: str, payload: Dict[str, Any] = Body(...)):
        item = backend.find(name, item_id)
        if item is None:
            return _not_found(f"{name} {item_id} not found")
        item.update(payload)
        return envelope(item, message="Updated")

    @router.delete("/{item_id}")
    async def delete_item(item_id: str):
        if backend.find(name, item_id) is None:
            return _not_found(f"{name} {item_id} not found")
        backend.collections[name] = [i for i in backend.collections[name] if i["id"] != item_id]
        return envelope(message="Deleted")

    return router


def booking_router(backend: FakeBackend) -> APIRouter:
    """Booking sub-resources; registered ahead of the generic routes."""
    router = APIRouter(prefix="/bookings")

    @router.get("/stats")
    async def booking_stats():
        bookings = backend.collections.get("bookings", [])
        return envelope({
            "totalBookings": len(bookings),
            "confirmedBookings": sum(1 for b in bookings if b.get("status") == "confirmed"),
            "pendingBookings": sum(1 for b in bookings if b.get("status") == "pending"),
        })

    @router.post("/filter")
    async def filter_bookings(payload: Dict[str, Any] = Body(...)):
        statuses = payload.get("status") or []
        bookings = [b for b in backend.collections.get("bookings", []) if not statuses or b.get("status") in statuses]
        return envelope(bookings)

    @router.get("/status/{status}")
    async def by_status(status: str):
        return envelope([b for b in backend.collections.get("bookings", []) if b.get("status") == status])

    @router.get("/user")
    async def user_bookings():
        bookings = [b for b in backend.collections.get("bookings", []) if b.get("customerId") == "cust_1"]
        return envelope(page("bookings", bookings))

    @router.get("/number/{booking_number}")
    async def by_number(booking_number: str):
        for booking in backend.collections.get("bookings", []):
            if booking["bookingNumber"] == booking_number:
                return envelope(booking)
        return _not_found(f"Booking {booking_number} not found")

    async def _set_status(booking_id: str, status: str):
        booking = backend.find("bookings", booking_id)
        if booking is None:
            return _not_found(f"Booking {booking_id} not found")
        booking["status"] = status
        return envelope(booking)

    @router.put("/{booking_id}/status")
    async def update_status(booking_id: str, payload: Dict[str, Any] = Body(...)):
        return await _set_status(booking_id, payload["status"])

    @router.put("/{booking_id}/confirm")
    async def confirm(booking_id: str):
        return await _set_status(booking_id, "confirmed")

    @router.put("/{booking_id}/cancel")
    async def cancel(booking_id: str):
        return await _set_status(booking_id, "cancelled")

    @router.put("/{booking_id}/complete")
    async def complete(booking_id: str):
        return await _set_status(booking_id, "completed")

    @router.post("/{booking_id}/duplicate")
    async def duplicate(booking_id: str, payload: Optional[Dict[str, Any]] = Body(None)):
        booking = backend.find("bookings", booking_id)
        if booking is None:
            return _not_found(f"Booking {booking_id} not found")
        copy_id = backend.next_id("bk")
        copied = {**booking, "id": copy_id, "bookingNumber": f"BK-{copy_id}", "status": "pending", **(payload or {})}
        backend.collections["bookings"].append(copied)
        return JSONResponse(status_code=201, content=envelope(copied, status_code=201))

    @router.get("/{booking_id}/payments")
    async def list_payments(booking_id: str):
        return envelope(backend.extras.get(("payments", booking_id), []))

    @router.post("/{booking_id}/payments")
    async def add_payment(booking_id: str, payload: Dict[str, Any] = Body(...)):
        payment = {"id": backend.next_id("pay"), "status": "completed", **payload}
        backend.extras.setdefault(("payments", booking_id), []).append(payment)
        return JSONResponse(status_code=201, content=envelope(payment, status_code=201))

    return router


def destination_router(backend: FakeBackend) -> APIRouter:
    router = APIRouter(prefix="/destinations")

    @router.get("/popular")
    async def popular(limit: Optional[int] = None):
        items = [d for d in backend.collections.get("destinations", []) if d.get("popular")]
        return envelope(items[:limit] if limit else items)

    @router.get("/featured")
    async def featured(limit: Optional[int] = None):
        items = [d for d in backend.collections.get("destinations", []) if d.get("featured")]
        return envelope(items[:limit] if limit else items)

    @router.post("/filter")
    async def filter_destinations(payload: Dict[str, Any] = Body(...)):
        countries = payload.get("countries") or []
        return envelope([
            d for d in backend.collections.get("destinations", []) if not countries or d.get("country") in countries
        ])

    @router.get("/slug/{slug}")
    async def by_slug(slug: str):
        for destination in backend.collections.get("destinations", []):
            if destination.get("slug") == slug:
                return envelope(destination)
        return _not_found(f"Destination {slug} not found")

    return router


def info_router(backend: FakeBackend) -> APIRouter:
    router = APIRouter(prefix="/info")

    @router.get("/faq")
    async def all_faqs():
        return envelope(backend.collections.get("faq", []))

    @router.get("/faq/search")
    async def search_faqs(q: str = "", category: Optional[str] = None):
        faqs = [
            f for f in backend.collections.get("faq", [])
            if q.lower() in f["question"].lower() and (category is None or f.get("category") == category)
        ]
        return envelope(faqs)

    @router.get("/faq/category/{category}")
    async def faqs_by_category(category: str):
        return envelope([f for f in backend.collections.get("faq", []) if f.get("category") == category])

    @router.get("/{policy_type}")
    async def policy(policy_type: str):
        document = backend.extras.get(("policy", policy_type))
        if document is None:
            return _not_found(f"Policy {policy_type} not found")
        return envelope(document)

    return router


def create_fake_api(backend: FakeBackend) -> FastAPI:
    """Create the fake travel API application."""
    app = FastAPI(title="Travel API (Test)", version="1.0.0-test")

    @app.middleware("http")
    async def record_calls(request: Request, call_next):
        path = request.url.path[len(API_PREFIX):] if request.url.path.startswith(API_PREFIX) else request.url.path
        backend.calls[(request.method, path)] += 1
        failure = backend.failures.get((request.method, path))
        if failure is not None:
            status_code, body = failure
            return JSONResponse(status_code=status_code, content=body)
        return await call_next(request)

    api = APIRouter(prefix=API_PREFIX)
    api.include_router(booking_router(backend))
    api.include_router(destination_router(backend))
    api.include_router(info_router(backend))
    api.include_router(crud_router(
        backend,
        "bookings",
        "bk",
        filter_params={"status": "status"},
        defaults=lambda item_id: {"bookingNumber": f"BK-{item_id}", "status": "pending", "customerId": "cust_1"},
    ))
    api.include_router(crud_router(backend, "destinations", "dest", filter_params={"countries": "country"}))
    api.include_router(crud_router(backend, "faq", "faq"), prefix="/info")
    app.include_router(api)
    return app


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def test_settings():
    """Settings pointing at the fake API."""
    return Settings(api_base_url=TEST_BASE_URL, environment="development", log_level="DEBUG")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage():
    return MemorySessionStorage()


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def sample_bookings():
    """Sample booking documents as served by the API."""
    return [
        {
            "id": "bk_1",
            "bookingNumber": "BK-1001",
            "tourId": "tour_1",
            "tourTitle": "Northern Lights Adventure",
            "customerId": "cust_1",
            "status": "pending",
            "paymentStatus": "pending",
            "source": "website",
            "bookingDate": "2024-03-01T10:00:00Z",
            "participants": [{"firstName": "Ada", "lastName": "Lovelace", "email": "ada@example.com"}],
        },
        {
            "id": "bk_2",
            "bookingNumber": "BK-1002",
            "tourId": "tour_2",
            "tourTitle": "Sahara Desert Trek",
            "customerId": "cust_2",
            "status": "confirmed",
            "paymentStatus": "paid",
            "source": "phone",
            "bookingDate": "2024-04-15T08:30:00Z",
            "participants": [{"firstName": "Grace", "lastName": "Hopper", "email": "grace@example.com"}],
        },
        {
            "id": "bk_3",
            "bookingNumber": "BK-1003",
            "tourId": "tour_1",
            "tourTitle": "Northern Lights Adventure",
            "customerId": "cust_1",
            "status": "cancelled",
            "paymentStatus": "refunded",
            "source": "agent",
            "bookingDate": "2024-05-20T12:00:00Z",
            "participants": [],
        },
    ]


@pytest.fixture
def sample_destinations():
    return [
        {
            "id": "dest_1",
            "name": "Reykjavik",
            "slug": "reykjavik",
            "country": "Iceland",
            "climate": "polar",
            "safetyLevel": "very-safe",
            "visaRequired": False,
            "featured": True,
            "popular": True,
            "tourCount": 4,
            "status": "active",
        },
        {
            "id": "dest_2",
            "name": "Marrakesh",
            "slug": "marrakesh",
            "country": "Morocco",
            "climate": "arid",
            "safetyLevel": "moderate",
            "visaRequired": True,
            "featured": False,
            "popular": True,
            "tourCount": 0,
            "status": "active",
        },
        {
            "id": "dest_3",
            "name": "Akureyri",
            "slug": "akureyri",
            "country": "Iceland",
            "climate": "polar",
            "safetyLevel": "very-safe",
            "visaRequired": False,
            "featured": False,
            "popular": False,
            "tourCount": 1,
            "status": "inactive",
        },
    ]


@pytest.fixture
def sample_faqs():
    return [
        {"id": "faq_1", "question": "How do I cancel a booking?", "answer": "From your account page.", "category": "bookings"},
        {"id": "faq_2", "question": "Which cards do you accept?", "answer": "All major cards.", "category": "payments"},
        {"id": "faq_3", "question": "Can I change my booking date?", "answer": "Up to 7 days before.", "category": "bookings"},
    ]


@pytest.fixture
def backend(sample_bookings, sample_destinations, sample_faqs):
    fake = FakeBackend()
    fake.seed("bookings", sample_bookings)
    fake.seed("destinations", sample_destinations)
    fake.seed("faq", sample_faqs)
    fake.extras[("policy", "privacy-policy")] = {
        "effectiveDate": "2024-01-01T00:00:00Z",
        "sections": [{"title": "Data we collect", "body": "Only what we need."}],
    }
    return fake


@pytest.fixture
def fake_api(backend):
    """Create the fake travel API application."""
    return create_fake_api(backend)


@pytest_asyncio.fixture
async def api_client(test_settings, fake_api):
    """Create an API client talking to the fake API in-process."""
    transport = httpx.ASGITransport(app=fake_api)
    async with ApiClient(test_settings, transport=transport) as client:
        yield client


@pytest.fixture
def booking_store(storage, clock):
    return create_booking_store(storage=storage, clock=clock)


@pytest.fixture
def booking_hooks(booking_store, api_client, notifier):
    return BookingHooks(booking_store, BookingService(api_client), notifier)


@pytest.fixture
def destination_hooks(storage, clock, api_client, notifier):
    store = create_destination_store(storage=storage, clock=clock)
    return DestinationHooks(store, DestinationService(api_client), notifier)


@pytest.fixture
def info_hooks(storage, clock, api_client, notifier):
    store = create_info_store(storage=storage, clock=clock)
    return InfoHooks(store, InfoService(api_client), notifier)
