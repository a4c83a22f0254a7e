"""Activity service wrapping the ``/activities`` endpoints."""

from typing import List, Optional

from ..schemas.activity import Activity, ActivityFilters, CreateActivityRequest, UpdateActivityRequest
from ..schemas.common import ApiResponse, SearchRequest
from .base import ResourceService


class ActivityService(ResourceService):
    """Service for activity-related API operations."""

    base_path = "/activities"
    entity_type = Activity

    async def get_all_activities(self, filters: Optional[ActivityFilters] = None) -> ApiResponse:
        return await self._list(filters)

    async def get_activity_by_id(self, activity_id: str) -> ApiResponse:
        return await self._get(activity_id)

    async def create_activity(self, payload: CreateActivityRequest) -> ApiResponse:
        return await self._create(payload)

    async def update_activity(self, activity_id: str, payload: UpdateActivityRequest) -> ApiResponse:
        return await self._update(activity_id, payload)

    async def delete_activity(self, activity_id: str) -> ApiResponse:
        return await self._delete(activity_id)

    async def search_activities(self, request: SearchRequest) -> ApiResponse:
        return await self._search(request)

    async def get_activity_categories(self) -> ApiResponse:
        return await self._collection("categories", List[str])

    async def get_popular_activities(self, limit: Optional[int] = None) -> ApiResponse:
        return await self._collection("popular", List[Activity], limit=limit)

    async def get_featured_activities(self, limit: Optional[int] = None) -> ApiResponse:
        return await self._collection("featured", List[Activity], limit=limit)

    async def filter_activities(self, filters: ActivityFilters) -> ApiResponse:
        return await self._filter(filters)

    async def get_activities_by_category(self, category: str) -> ApiResponse:
        return await self._list_by("category", category)
