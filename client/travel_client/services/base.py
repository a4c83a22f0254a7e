"""Shared CRUD plumbing for the per-domain services."""

import logging
from typing import Any, List, Mapping, Optional, Type

from ..core.api_client import ApiClient, query_params
from ..schemas.common import ApiModel, ApiResponse, FilterSpec, Page, SearchRequest

logger = logging.getLogger(__name__)


class ResourceService:
    """
    Stateless wrapper around one REST collection.

    Subclasses set ``base_path`` and ``entity_type`` and expose the
    domain-named operations (``get_all_bookings``, ...) on top of the
    protected helpers here. Every call returns the parsed ``ApiResponse``
    and lets ``ApiError`` propagate.
    """

    base_path: str = ""
    entity_type: Type[Any] = Any

    def __init__(self, client: ApiClient):
        self.client = client

    @property
    def item_path(self) -> str:
        return f"{self.base_path}/{{id}}"

    async def _list(
        self,
        filters: Optional[FilterSpec] = None,
        endpoint: Optional[str] = None,
    ) -> ApiResponse:
        params = filters.to_query_params() if filters is not None else {}
        return await self.client.get(
            endpoint or self.base_path,
            Page[self.entity_type],
            params=params or None,
        )

    async def _get(self, entity_id: str) -> ApiResponse:
        return await self.client.get(self.item_path, self.entity_type, path_params={"id": entity_id})

    async def _create(self, payload: ApiModel) -> ApiResponse:
        response = await self.client.post(self.base_path, self.entity_type, json=payload.to_payload())
        logger.info(
            "Resource created",
            extra={"resource": self.base_path, "success": response.success},
        )
        return response

    async def _update(self, entity_id: str, payload: ApiModel) -> ApiResponse:
        return await self.client.put(
            self.item_path,
            self.entity_type,
            path_params={"id": entity_id},
            json=payload.to_payload(),
        )

    async def _delete(self, entity_id: str) -> ApiResponse:
        response = await self.client.delete(self.item_path, path_params={"id": entity_id})
        logger.info(
            "Resource deleted",
            extra={"resource": self.base_path, "entity_id": entity_id, "success": response.success},
        )
        return response

    async def _search(self, request: SearchRequest) -> ApiResponse:
        return await self.client.post(
            f"{self.base_path}/search",
            Page[self.entity_type],
            json=request.to_payload(),
        )

    async def _collection(self, suffix: str, item_type: Type[Any], **params: Any) -> ApiResponse:
        """GET a list-valued sub-endpoint such as ``/popular``."""
        return await self.client.get(
            f"{self.base_path}/{suffix}",
            item_type,
            params=query_params(params) or None,
        )

    async def _filter(self, filters: FilterSpec) -> ApiResponse:
        """POST a filter spec to ``/filter``; the API answers with the bare list of matches."""
        return await self.client.post(
            f"{self.base_path}/filter",
            List[self.entity_type],
            json=filters.to_payload(),
        )

    async def _list_by(self, segment: str, value: Any) -> ApiResponse:
        """GET a lookup such as ``/bookings/status/pending`` or ``/tours/category/trek``."""
        return await self.client.get(
            f"{self.base_path}/{segment}/{{value}}",
            List[self.entity_type],
            path_params={"value": value},
        )

    async def _duplicate(self, entity_id: str, payload: Optional[Mapping[str, Any]] = None) -> ApiResponse:
        response = await self.client.post(
            f"{self.item_path}/duplicate",
            self.entity_type,
            path_params={"id": entity_id},
            json=dict(payload) if payload else None,
        )
        logger.info(
            "Resource duplicated",
            extra={"resource": self.base_path, "entity_id": entity_id, "success": response.success},
        )
        return response
