"""Activity actions."""

from typing import Dict, Optional

from ..schemas.activity import ActivityFilters, CreateActivityRequest, UpdateActivityRequest
from ..schemas.common import SearchRequest
from ..services.activity_service import ActivityService
from ..stores.activity_store import CATEGORIES, FEATURED, POPULAR
from .base import ActionResult, DomainHooks


class ActivityHooks(DomainHooks):
    """Activity orchestration over an activity store."""

    entity_label = "Activity"
    service: ActivityService

    async def get_all_activities(
        self, filters: Optional[ActivityFilters] = None, force_refresh: bool = False
    ) -> ActionResult:
        return await self._load_list(lambda: self.service.get_all_activities(filters), filters, force_refresh)

    async def get_activity_by_id(self, activity_id: str) -> ActionResult:
        return await self._load_detail(lambda: self.service.get_activity_by_id(activity_id))

    async def create_activity(self, payload: CreateActivityRequest) -> ActionResult:
        return await self._create(lambda: self.service.create_activity(payload))

    async def update_activity(self, activity_id: str, payload: UpdateActivityRequest) -> ActionResult:
        return await self._update(lambda: self.service.update_activity(activity_id, payload))

    async def delete_activity(self, activity_id: str) -> ActionResult:
        return await self._delete(activity_id, lambda: self.service.delete_activity(activity_id))

    async def search_activities(self, request: SearchRequest) -> ActionResult:
        return await self._search(request, lambda: self.service.search_activities(request))

    async def get_activity_categories(self, force_refresh: bool = False) -> ActionResult:
        return await self._load_extra(CATEGORIES, lambda: self.service.get_activity_categories(), force_refresh)

    async def get_popular_activities(self, limit: Optional[int] = None, force_refresh: bool = False) -> ActionResult:
        return await self._load_limited_extra(
            POPULAR, limit, lambda: self.service.get_popular_activities(limit), force_refresh
        )

    async def get_featured_activities(self, limit: Optional[int] = None, force_refresh: bool = False) -> ActionResult:
        return await self._load_limited_extra(
            FEATURED, limit, lambda: self.service.get_featured_activities(limit), force_refresh
        )

    async def filter_activities(self, filters: ActivityFilters) -> ActionResult:
        return await self._filter(filters, lambda: self.service.filter_activities(filters))

    async def get_activities_by_category(self, category: str) -> ActionResult:
        return await self._filter(
            ActivityFilters(category=category),
            lambda: self.service.get_activities_by_category(category),
        )

    async def initialize_activities_data(self) -> Dict[str, ActionResult]:
        return await self._initialize(
            activities=self.get_all_activities(),
            categories=self.get_activity_categories(),
            popular=self.get_popular_activities(),
            featured=self.get_featured_activities(),
        )
