"""Unit tests for tour, service and activity hook actions over a routed mock transport."""

import json
from collections import Counter

import httpx
import pytest
import pytest_asyncio

from travel_client.core.api_client import ApiClient
from travel_client.hooks import ActivityHooks, ServiceHooks, TourHooks
from travel_client.schemas.activity import ActivityFilters
from travel_client.schemas.tour import TourFilters
from travel_client.services import ActivityService, ServiceCatalogService, TourService
from travel_client.stores import create_activity_store, create_service_store, create_tour_store
from travel_client.stores.tour_store import CATEGORIES, FEATURED, POPULAR, TOURS


def envelope(data, message="", status_code=200, success=True):
    return {"success": success, "statusCode": status_code, "message": message, "data": data}


def page(name, items):
    return {name: items, "total": len(items), "page": 1, "limit": 10, "pages": 1}


TREK = {"id": "trek", "name": "Trekking"}
CRUISE = {"id": "cruise", "name": "Cruises"}

TOURS_DATA = [
    {
        "id": "tour_1",
        "title": "Annapurna Circuit",
        "category": TREK,
        "destination": {"id": "dest_9", "name": "Pokhara", "country": "Nepal"},
        "featured": True,
    },
    {
        "id": "tour_2",
        "title": "Fjord Cruise",
        "category": CRUISE,
        "destination": {"id": "dest_8", "name": "Bergen", "country": "Norway"},
    },
    {
        "id": "tour_3",
        "title": "Everest Base Camp",
        "category": TREK,
        "destination": {"id": "dest_9", "name": "Pokhara", "country": "Nepal"},
    },
]

SERVICES_DATA = [
    {
        "id": "svc_1",
        "name": "Airport Transfer",
        "category": {"id": "transport", "name": "Transport"},
        "provider": {"id": "prov_1", "name": "City Cabs"},
    },
    {
        "id": "svc_2",
        "name": "Travel Insurance",
        "category": {"id": "insurance", "name": "Insurance"},
        "provider": {"id": "prov_2", "name": "SafeTrip"},
    },
]

ACTIVITIES_DATA = [
    {"id": "act_1", "name": "Kayaking", "category": "water", "location": {"name": "Lake Bled"}},
    {"id": "act_2", "name": "Via Ferrata", "category": "climbing", "location": {"name": "Dolomites"}},
    {"id": "act_3", "name": "Snorkelling", "category": "water", "location": {"name": "Red Sea"}},
]


class Router:
    """Method+path router for ``httpx.MockTransport``; bodies may be callables of the request."""

    def __init__(self):
        self.routes = {}
        self.calls = Counter()
        self.requests = []

    def add(self, method, path, body, status_code=200):
        self.routes[(method, path)] = (status_code, body)

    def __call__(self, request):
        path = request.url.path.removeprefix("/api/v1")
        key = (request.method, path)
        self.calls[key] += 1
        self.requests.append(request)
        if key not in self.routes:
            return httpx.Response(404, json=envelope(None, "Not found", 404, False))
        status_code, body = self.routes[key]
        if callable(body):
            body = body(request)
        return httpx.Response(status_code, json=body)

    def last_json(self, method, path):
        for request in reversed(self.requests):
            if request.method == method and request.url.path.endswith(path):
                return json.loads(request.content) if request.content else None
        raise AssertionError(f"No {method} {path} request was made")


def limited(items):
    def respond(request):
        limit = request.url.params.get("limit")
        return envelope(items[: int(limit)] if limit else items)
    return respond


@pytest.fixture
def router():
    router = Router()
    router.add("GET", "/tours", envelope(page("tours", TOURS_DATA)))
    router.add("GET", "/tours/categories", envelope([TREK, CRUISE]))
    router.add("GET", "/tours/popular", limited(TOURS_DATA))
    router.add("GET", "/tours/featured", envelope([TOURS_DATA[0]]))
    router.add("GET", "/tours/category/trek", envelope([TOURS_DATA[0], TOURS_DATA[2]]))
    router.add("POST", "/tours/filter", envelope([TOURS_DATA[1]]))
    router.add("POST", "/tours/tour_1/duplicate", envelope(
        {**TOURS_DATA[0], "id": "tour_4", "title": "Annapurna Circuit (Autumn)", "featured": False}
    ))
    router.add("GET", "/services", envelope(page("services", SERVICES_DATA)))
    router.add("GET", "/services/categories", envelope([{"id": "transport", "name": "Transport"}]))
    router.add("GET", "/services/popular", envelope(SERVICES_DATA))
    router.add("GET", "/services/featured", envelope(None, "Featured list unavailable", 503, False), 503)
    router.add("GET", "/services/category/insurance", envelope([SERVICES_DATA[1]]))
    router.add("GET", "/activities", envelope(page("activities", ACTIVITIES_DATA)))
    router.add("GET", "/activities/featured", limited(ACTIVITIES_DATA))
    router.add("GET", "/activities/category/water", envelope([ACTIVITIES_DATA[0], ACTIVITIES_DATA[2]]))
    router.add("POST", "/activities/filter", envelope([ACTIVITIES_DATA[1]]))
    return router


@pytest_asyncio.fixture
async def client(test_settings, router):
    client = ApiClient(test_settings, transport=httpx.MockTransport(router))
    yield client
    await client.aclose()


@pytest.fixture
def tour_hooks(client, storage, clock, notifier):
    return TourHooks(create_tour_store(storage=storage, clock=clock), TourService(client), notifier)


@pytest.fixture
def service_hooks(client, storage, clock, notifier):
    return ServiceHooks(create_service_store(storage=storage, clock=clock), ServiceCatalogService(client), notifier)


@pytest.fixture
def activity_hooks(client, storage, clock, notifier):
    return ActivityHooks(create_activity_store(storage=storage, clock=clock), ActivityService(client), notifier)


@pytest.mark.asyncio
async def test_popular_tours_cached_per_limit(tour_hooks, router):
    one = await tour_hooks.get_popular_tours(limit=1)
    two = await tour_hooks.get_popular_tours(limit=2)
    await tour_hooks.get_popular_tours(limit=2)

    assert [t.id for t in one.data] == ["tour_1"]
    assert [t.id for t in two.data] == ["tour_1", "tour_2"]
    assert [t.id for t in tour_hooks.store.get_extra(POPULAR)] == ["tour_1", "tour_2"]
    assert router.calls[("GET", "/tours/popular")] == 2


@pytest.mark.asyncio
async def test_unlimited_popular_tours_is_its_own_variant(tour_hooks, router):
    limited_result = await tour_hooks.get_popular_tours(limit=1)
    everything = await tour_hooks.get_popular_tours()

    assert len(limited_result.data) == 1
    assert len(everything.data) == 3
    assert router.calls[("GET", "/tours/popular")] == 2


@pytest.mark.asyncio
async def test_tours_by_category(tour_hooks, router):
    await tour_hooks.get_all_tours()

    result = await tour_hooks.get_tours_by_category("trek")

    assert [t.id for t in result.data] == ["tour_1", "tour_3"]
    assert [t.id for t in tour_hooks.store.filtered_items] == ["tour_1", "tour_3"]
    assert len(tour_hooks.store.items) == 3
    assert tour_hooks.store.is_cache_valid(TOURS)


@pytest.mark.asyncio
async def test_filter_tours_posts_the_spec(tour_hooks, router):
    result = await tour_hooks.filter_tours(TourFilters(categories=["cruise"]))

    assert [t.id for t in result.data] == ["tour_2"]
    assert router.last_json("POST", "/tours/filter")["categories"] == ["cruise"]
    assert [t.id for t in tour_hooks.store.filtered_items] == ["tour_2"]


@pytest.mark.asyncio
async def test_duplicate_tour(tour_hooks, router, notifier):
    await tour_hooks.get_all_tours()

    result = await tour_hooks.duplicate_tour("tour_1", new_title="Annapurna Circuit (Autumn)")

    assert result.success
    assert router.last_json("POST", "/tours/tour_1/duplicate") == {"newTitle": "Annapurna Circuit (Autumn)"}
    assert tour_hooks.store.items[-1].id == "tour_4"
    assert notifier.last().message == "Tour duplicated successfully"


@pytest.mark.asyncio
async def test_duplicate_unknown_tour_notifies_error(tour_hooks, notifier):
    result = await tour_hooks.duplicate_tour("tour_404")

    assert result.success is False
    assert result.error == "Not found"
    assert notifier.last().message == "Not found"


@pytest.mark.asyncio
async def test_initialize_tour_data(tour_hooks, router):
    outcome = await tour_hooks.initialize_tour_data()

    assert set(outcome) == {"tours", "categories", "popular", "featured"}
    assert all(result.success for result in outcome.values())
    assert [c.id for c in tour_hooks.store.get_extra(CATEGORIES)] == ["trek", "cruise"]
    assert [t.id for t in tour_hooks.store.get_extra(FEATURED)] == ["tour_1"]
    assert tour_hooks.store.loading is False


@pytest.mark.asyncio
async def test_services_by_category(service_hooks):
    result = await service_hooks.get_services_by_category("insurance")

    assert [s.id for s in result.data] == ["svc_2"]
    assert [s.id for s in service_hooks.store.filtered_items] == ["svc_2"]


@pytest.mark.asyncio
async def test_initialize_services_reports_partial_failure(service_hooks):
    outcome = await service_hooks.initialize_services_data()

    assert outcome["services"].success
    assert outcome["categories"].success
    assert outcome["popular"].success
    assert outcome["featured"].success is False
    assert outcome["featured"].error == "Featured list unavailable"
    assert len(service_hooks.store.items) == 2


@pytest.mark.asyncio
async def test_activities_by_category_and_filter(activity_hooks, router):
    await activity_hooks.get_all_activities()

    water = await activity_hooks.get_activities_by_category("water")
    assert [a.id for a in water.data] == ["act_1", "act_3"]
    assert [a.id for a in activity_hooks.store.filtered_items] == ["act_1", "act_3"]

    climbing = await activity_hooks.filter_activities(ActivityFilters(category="climbing"))
    assert [a.id for a in climbing.data] == ["act_2"]
    assert [a.id for a in activity_hooks.store.filtered_items] == ["act_2"]
    assert router.last_json("POST", "/activities/filter") == {"category": "climbing"}


@pytest.mark.asyncio
async def test_featured_activities_cached_per_limit(activity_hooks, router):
    await activity_hooks.get_featured_activities(limit=2)
    await activity_hooks.get_featured_activities(limit=2)
    three = await activity_hooks.get_featured_activities(limit=3)

    assert len(three.data) == 3
    assert router.calls[("GET", "/activities/featured")] == 2
