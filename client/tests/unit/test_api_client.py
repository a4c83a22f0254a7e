"""Unit tests for the API client, its envelope parsing and error mapping."""

from typing import List

import httpx
import pytest

from travel_client.core.api_client import ApiClient, query_params
from travel_client.core.exceptions import (
    DEFAULT_ERROR_MESSAGE,
    ApiError,
    ConflictError,
    NotFoundError,
    RateLimitError,
    ServerError,
    TransportError,
    ValidationError,
    error_from_response,
    extract_error_message,
)
from travel_client.schemas.booking import Booking
from travel_client.schemas.common import Page


def mock_client(test_settings, handler):
    return ApiClient(test_settings, transport=httpx.MockTransport(handler), enable_logging=False)


@pytest.mark.asyncio
async def test_list_endpoint_parses_page(api_client):
    """Test that a list response is parsed into a typed page."""
    response = await api_client.get("/bookings", Page[Booking])

    assert response.success
    assert response.status_code == 200
    assert [b.id for b in response.data.items] == ["bk_1", "bk_2", "bk_3"]
    assert response.data.total == 3


@pytest.mark.asyncio
async def test_path_params_are_encoded(api_client, backend):
    response = await api_client.get(
        "/bookings/number/{booking_number}",
        Booking,
        path_params={"booking_number": "BK-1002"},
    )

    assert response.data.id == "bk_2"
    assert backend.count("GET", "/bookings/number/BK-1002") == 1


def test_build_path_quotes_reserved_characters():
    assert ApiClient.build_path("/info/faq/category/{category}", {"category": "a/b c"}) == (
        "/info/faq/category/a%2Fb%20c"
    )


@pytest.mark.asyncio
async def test_not_found_maps_to_exception(api_client):
    with pytest.raises(NotFoundError) as exc_info:
        await api_client.get("/bookings/{id}", Booking, path_params={"id": "missing"})

    assert exc_info.value.status_code == 404
    assert extract_error_message(exc_info.value) == "bookings missing not found"


@pytest.mark.asyncio
async def test_server_error_maps_to_exception(api_client, backend):
    backend.fail("GET", "/bookings", 503)

    with pytest.raises(ServerError) as exc_info:
        await api_client.get("/bookings", Page[Booking])

    assert exc_info.value.status_code == 503
    assert exc_info.value.message == "Internal server error"


@pytest.mark.asyncio
async def test_transport_failure_raises_transport_error(test_settings):
    def handler(request):
        raise httpx.ConnectError("Connection refused", request=request)

    async with mock_client(test_settings, handler) as client:
        with pytest.raises(TransportError) as exc_info:
            await client.get("/bookings")

    assert exc_info.value.status_code is None
    assert exc_info.value.title == "Network Error"
    assert extract_error_message(exc_info.value) == "Connection refused"


@pytest.mark.asyncio
async def test_bare_payload_is_wrapped_in_envelope(test_settings):
    def handler(request):
        return httpx.Response(200, json=[{"id": "faq_1", "question": "Q?"}])

    async with mock_client(test_settings, handler) as client:
        response = await client.get("/info/faq")

    assert response.success
    assert response.data == [{"id": "faq_1", "question": "Q?"}]


@pytest.mark.asyncio
async def test_empty_body_is_success(test_settings):
    async with mock_client(test_settings, lambda request: httpx.Response(204)) as client:
        response = await client.delete("/bookings/{id}", path_params={"id": "bk_1"})

    assert response.success
    assert response.data is None


@pytest.mark.asyncio
async def test_invalid_json_raises_api_error(test_settings):
    def handler(request):
        return httpx.Response(200, content=b"<html>oops</html>")

    async with mock_client(test_settings, handler) as client:
        with pytest.raises(ApiError) as exc_info:
            await client.get("/bookings")

    assert exc_info.value.title == "Invalid Response"


@pytest.mark.asyncio
async def test_schema_mismatch_raises_api_error(test_settings):
    def handler(request):
        return httpx.Response(200, json={"success": True, "data": [{"id": "bk_1"}]})

    async with mock_client(test_settings, handler) as client:
        with pytest.raises(ApiError) as exc_info:
            await client.get("/bookings", List[Booking])

    assert exc_info.value.title == "Invalid Response"


@pytest.mark.asyncio
async def test_default_headers(test_settings):
    seen = {}

    def handler(request):
        seen.update(request.headers)
        seen["url"] = str(request.url)
        return httpx.Response(200, json={"success": True, "data": None})

    settings = test_settings.model_copy(update={"api_token": "secret-token"})
    async with mock_client(settings, handler) as client:
        await client.get("/tours", params=query_params({"limit": 5}))

    assert seen["authorization"] == "Bearer secret-token"
    assert seen["accept"] == "application/json"
    assert "x-request-id" in seen
    assert seen["url"] == "http://testserver/api/v1/tours?limit=5"


def test_query_params_drop_empty_values():
    assert query_params({"q": "", "category": None, "featured": True, "limit": 3}) == {
        "featured": "true",
        "limit": "3",
    }


def _response(status_code, json=None, headers=None):
    return httpx.Response(
        status_code,
        json=json,
        headers=headers,
        request=httpx.Request("GET", "http://testserver/api/v1/bookings"),
    )


class TestErrorMapping:
    """Tests for mapping error responses to exceptions."""

    def test_envelope_message_wins(self):
        error = error_from_response(_response(409, {"success": False, "message": "Seat already taken"}))

        assert isinstance(error, ConflictError)
        assert extract_error_message(error) == "Seat already taken"

    def test_problem_details_violations(self):
        error = error_from_response(_response(422, {
            "title": "Validation Error",
            "detail": "Request validation failed",
            "violations": [{"field": "participants", "message": "At least one participant is required"}],
        }))

        assert isinstance(error, ValidationError)
        assert error.title == "Validation Error"
        assert error.errors == ["At least one participant is required"]
        assert extract_error_message(error) == "Request validation failed"

    def test_rate_limit_retry_after(self):
        error = error_from_response(_response(429, {}, headers={"Retry-After": "30"}))

        assert isinstance(error, RateLimitError)
        assert error.retry_after == 30
        assert extract_error_message(error) == "Rate Limit Exceeded"

    def test_unknown_client_error(self):
        error = error_from_response(_response(418))

        assert type(error) is ApiError
        assert error.title == "API Request Failed"

    def test_generic_exception_message(self):
        assert extract_error_message(RuntimeError("boom")) == "boom"
        assert extract_error_message(RuntimeError()) == DEFAULT_ERROR_MESSAGE
