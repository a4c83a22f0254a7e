"""Async HTTP client for the travel booking REST API."""

import logging
import time
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type
from urllib.parse import quote

import httpx
from opentelemetry.trace import SpanKind, Status, StatusCode
from pydantic import ValidationError as SchemaValidationError

from ..schemas.common import ApiResponse
from .config import Settings, settings as default_settings
from .exceptions import ApiError, TransportError, error_from_response
from .middleware import build_event_hooks
from .observability import metrics_collector, setup_tracing

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Thin async wrapper around ``httpx.AsyncClient``.

    Endpoints are passed as templates (``/bookings/{id}``) with separate
    path parameters so that metrics and spans are labelled by route rather
    than by concrete URL. Every successful call returns the parsed
    ``ApiResponse`` envelope; transport failures and non-2xx responses raise
    ``ApiError`` subclasses.
    """

    def __init__(
        self,
        config: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        enable_logging: bool = True,
    ):
        self.config = config or default_settings

        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self.config.api_token:
            headers["Authorization"] = f"Bearer {self.config.api_token}"

        self._client = httpx.AsyncClient(
            base_url=self.config.api_url,
            headers=headers,
            timeout=self.config.request_timeout_seconds,
            transport=transport,
            event_hooks=build_event_hooks(self.config, enable_logging=enable_logging),
        )
        self._tracer = setup_tracing(self.config)

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @staticmethod
    def build_path(endpoint: str, path_params: Optional[Mapping[str, Any]] = None) -> str:
        """Fill an endpoint template, percent-encoding each parameter."""
        if not path_params:
            return endpoint
        encoded = {
            key: quote(str(value.value if isinstance(value, Enum) else value), safe="")
            for key, value in path_params.items()
        }
        return endpoint.format(**encoded)

    async def request(
        self,
        method: str,
        endpoint: str,
        data_type: Type[Any] = Any,
        *,
        path_params: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, str]] = None,
        json: Any = None,
    ) -> ApiResponse:
        """
        Issue a request and parse the response envelope.

        Args:
            method: HTTP method
            endpoint: Endpoint template relative to the API root
            data_type: Type of the envelope's ``data`` field
            path_params: Values for the template placeholders
            params: Query parameters
            json: JSON request body

        Returns:
            ApiResponse: Parsed envelope (``success`` may still be false)

        Raises:
            TransportError: If no response was received
            ApiError: If the response status is not 2xx or the body is malformed
        """
        path = self.build_path(endpoint, path_params)
        start_time = time.perf_counter()

        with self._tracer.start_as_current_span(f"{method} {endpoint}", kind=SpanKind.CLIENT) as span:
            span.set_attribute("http.request.method", method)
            span.set_attribute("http.route", endpoint)

            try:
                response = await self._client.request(method, path, params=params, json=json)
            except httpx.HTTPError as e:
                duration = time.perf_counter() - start_time
                metrics_collector.record_request(method, endpoint, 0, duration)
                span.set_status(Status(StatusCode.ERROR, str(e)))
                logger.warning(
                    "API request failed before a response was received",
                    extra={"method": method, "path": path, "error": str(e)},
                )
                raise TransportError(str(e) or type(e).__name__, cause=e) from e

            duration = time.perf_counter() - start_time
            metrics_collector.record_request(method, endpoint, response.status_code, duration)
            span.set_attribute("http.response.status_code", response.status_code)

            if response.is_error:
                span.set_status(Status(StatusCode.ERROR))
                raise error_from_response(response)

            return self._parse(response, data_type, endpoint)

    def _parse(self, response: httpx.Response, data_type: Type[Any], endpoint: str) -> ApiResponse:
        if not response.content:
            body: Any = {"success": True, "statusCode": response.status_code}
        else:
            try:
                body = response.json()
            except ValueError as e:
                raise ApiError(
                    title="Invalid Response",
                    detail=f"Response from {endpoint} is not valid JSON",
                    status_code=response.status_code,
                ) from e

        # Some endpoints answer with the bare payload instead of an envelope
        if not isinstance(body, dict) or "success" not in body:
            body = {"success": True, "statusCode": response.status_code, "data": body}

        try:
            return ApiResponse[data_type].model_validate(body)
        except SchemaValidationError as e:
            logger.error(
                "API response did not match the expected schema",
                extra={"endpoint": endpoint, "error_count": e.error_count()},
            )
            raise ApiError(
                title="Invalid Response",
                detail=f"Unexpected response payload from {endpoint}",
                status_code=response.status_code,
                body=body,
            ) from e

    async def get(self, endpoint: str, data_type: Type[Any] = Any, **kwargs: Any) -> ApiResponse:
        return await self.request("GET", endpoint, data_type, **kwargs)

    async def post(self, endpoint: str, data_type: Type[Any] = Any, **kwargs: Any) -> ApiResponse:
        return await self.request("POST", endpoint, data_type, **kwargs)

    async def put(self, endpoint: str, data_type: Type[Any] = Any, **kwargs: Any) -> ApiResponse:
        return await self.request("PUT", endpoint, data_type, **kwargs)

    async def patch(self, endpoint: str, data_type: Type[Any] = Any, **kwargs: Any) -> ApiResponse:
        return await self.request("PATCH", endpoint, data_type, **kwargs)

    async def delete(self, endpoint: str, data_type: Type[Any] = Any, **kwargs: Any) -> ApiResponse:
        return await self.request("DELETE", endpoint, data_type, **kwargs)


def query_params(values: Dict[str, Any]) -> Dict[str, str]:
    """Drop empty values and stringify the rest for a query string."""
    params = {}
    for key, value in values.items():
        if value is None or value == "":
            continue
        if isinstance(value, bool):
            params[key] = "true" if value else "false"
        elif isinstance(value, Enum):
            params[key] = str(value.value)
        else:
            params[key] = str(value)
    return params
