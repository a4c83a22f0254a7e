"""Itinerary service wrapping the ``/itineraries`` endpoints."""

from typing import Any, Dict, List, Optional

from ..schemas.common import ApiResponse, SearchRequest
from ..schemas.itinerary import (
    CreateItineraryRequest,
    Itinerary,
    ItineraryFilters,
    ItineraryStatus,
    UpdateItineraryRequest,
)
from .base import ResourceService


class ItineraryService(ResourceService):
    """Service for itinerary-related API operations."""

    base_path = "/itineraries"
    entity_type = Itinerary

    async def get_all_itineraries(self, filters: Optional[ItineraryFilters] = None) -> ApiResponse:
        return await self._list(filters)

    async def get_itinerary_by_id(self, itinerary_id: str) -> ApiResponse:
        return await self._get(itinerary_id)

    async def create_itinerary(self, payload: CreateItineraryRequest) -> ApiResponse:
        return await self._create(payload)

    async def update_itinerary(self, itinerary_id: str, payload: UpdateItineraryRequest) -> ApiResponse:
        return await self._update(itinerary_id, payload)

    async def delete_itinerary(self, itinerary_id: str) -> ApiResponse:
        return await self._delete(itinerary_id)

    async def search_itineraries(self, request: SearchRequest) -> ApiResponse:
        return await self._search(request)

    async def duplicate_itinerary(self, itinerary_id: str, title: Optional[str] = None) -> ApiResponse:
        return await self.client.post(
            "/itineraries/{id}/duplicate",
            Itinerary,
            path_params={"id": itinerary_id},
            json={"title": title} if title else None,
        )

    async def get_itineraries_by_tour(self, tour_id: str) -> ApiResponse:
        return await self.client.get(
            "/itineraries/tour/{tour_id}",
            List[Itinerary],
            path_params={"tour_id": tour_id},
        )

    async def get_itinerary_stats(self) -> ApiResponse:
        return await self.client.get("/itineraries/stats", Dict[str, Any])

    async def filter_itineraries(self, filters: ItineraryFilters) -> ApiResponse:
        return await self._filter(filters)

    async def get_itineraries_by_status(self, status: ItineraryStatus) -> ApiResponse:
        return await self._list_by("status", status)
