"""Destination service wrapping the ``/destinations`` endpoints."""

from typing import List, Optional

from ..schemas.common import ApiResponse, SearchRequest
from ..schemas.destination import (
    CreateDestinationRequest,
    Destination,
    DestinationFilters,
    UpdateDestinationRequest,
)
from .base import ResourceService


class DestinationService(ResourceService):
    """Service for destination-related API operations."""

    base_path = "/destinations"
    entity_type = Destination

    async def get_all_destinations(self, filters: Optional[DestinationFilters] = None) -> ApiResponse:
        return await self._list(filters)

    async def get_destination_by_id(self, destination_id: str) -> ApiResponse:
        return await self._get(destination_id)

    async def get_destination_by_slug(self, slug: str) -> ApiResponse:
        return await self.client.get("/destinations/slug/{slug}", Destination, path_params={"slug": slug})

    async def create_destination(self, payload: CreateDestinationRequest) -> ApiResponse:
        return await self._create(payload)

    async def update_destination(self, destination_id: str, payload: UpdateDestinationRequest) -> ApiResponse:
        return await self._update(destination_id, payload)

    async def delete_destination(self, destination_id: str) -> ApiResponse:
        return await self._delete(destination_id)

    async def search_destinations(self, request: SearchRequest) -> ApiResponse:
        return await self._search(request)

    async def get_destinations_by_country(self, country: str) -> ApiResponse:
        return await self.client.get(
            "/destinations/country/{country}",
            List[Destination],
            path_params={"country": country},
        )

    async def get_popular_destinations(self, limit: Optional[int] = None) -> ApiResponse:
        return await self._collection("popular", List[Destination], limit=limit)

    async def get_featured_destinations(self, limit: Optional[int] = None) -> ApiResponse:
        return await self._collection("featured", List[Destination], limit=limit)

    async def filter_destinations(self, filters: DestinationFilters) -> ApiResponse:
        return await self._filter(filters)
