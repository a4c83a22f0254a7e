"""Tour service wrapping the ``/tours`` endpoints."""

from typing import List, Optional

from ..schemas.common import ApiResponse, SearchRequest
from ..schemas.tour import CreateTourRequest, Tour, TourCategory, TourFilters, UpdateTourRequest
from .base import ResourceService


class TourService(ResourceService):
    """Service for tour-related API operations."""

    base_path = "/tours"
    entity_type = Tour

    async def get_all_tours(self, filters: Optional[TourFilters] = None) -> ApiResponse:
        return await self._list(filters)

    async def get_tour_by_id(self, tour_id: str) -> ApiResponse:
        return await self._get(tour_id)

    async def get_tour_by_slug(self, slug: str) -> ApiResponse:
        return await self.client.get("/tours/slug/{slug}", Tour, path_params={"slug": slug})

    async def create_tour(self, payload: CreateTourRequest) -> ApiResponse:
        return await self._create(payload)

    async def update_tour(self, tour_id: str, payload: UpdateTourRequest) -> ApiResponse:
        return await self._update(tour_id, payload)

    async def delete_tour(self, tour_id: str) -> ApiResponse:
        return await self._delete(tour_id)

    async def search_tours(self, request: SearchRequest) -> ApiResponse:
        return await self._search(request)

    async def get_tour_categories(self) -> ApiResponse:
        return await self._collection("categories", List[TourCategory])

    async def get_popular_tours(self, limit: Optional[int] = None) -> ApiResponse:
        return await self._collection("popular", List[Tour], limit=limit)

    async def get_featured_tours(self, limit: Optional[int] = None) -> ApiResponse:
        return await self._collection("featured", List[Tour], limit=limit)

    async def filter_tours(self, filters: TourFilters) -> ApiResponse:
        return await self._filter(filters)

    async def get_tours_by_category(self, category_id: str) -> ApiResponse:
        return await self._list_by("category", category_id)

    async def duplicate_tour(self, tour_id: str, new_title: Optional[str] = None) -> ApiResponse:
        return await self._duplicate(tour_id, {"newTitle": new_title} if new_title else None)
