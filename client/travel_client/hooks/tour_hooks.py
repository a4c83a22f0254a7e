"""Tour actions."""

from typing import Dict, Optional

from ..schemas.common import SearchRequest
from ..schemas.tour import CreateTourRequest, TourFilters, UpdateTourRequest
from ..services.tour_service import TourService
from ..stores.tour_store import CATEGORIES, FEATURED, POPULAR
from .base import ActionResult, DomainHooks


class TourHooks(DomainHooks):
    """Tour orchestration over a tour store."""

    entity_label = "Tour"
    service: TourService

    async def get_all_tours(self, filters: Optional[TourFilters] = None, force_refresh: bool = False) -> ActionResult:
        return await self._load_list(lambda: self.service.get_all_tours(filters), filters, force_refresh)

    async def get_tour_by_id(self, tour_id: str) -> ActionResult:
        return await self._load_detail(lambda: self.service.get_tour_by_id(tour_id))

    async def get_tour_by_slug(self, slug: str) -> ActionResult:
        return await self._load_detail(lambda: self.service.get_tour_by_slug(slug))

    async def create_tour(self, payload: CreateTourRequest) -> ActionResult:
        return await self._create(lambda: self.service.create_tour(payload))

    async def update_tour(self, tour_id: str, payload: UpdateTourRequest) -> ActionResult:
        return await self._update(lambda: self.service.update_tour(tour_id, payload))

    async def delete_tour(self, tour_id: str) -> ActionResult:
        return await self._delete(tour_id, lambda: self.service.delete_tour(tour_id))

    async def search_tours(self, request: SearchRequest) -> ActionResult:
        return await self._search(request, lambda: self.service.search_tours(request))

    async def get_tour_categories(self, force_refresh: bool = False) -> ActionResult:
        return await self._load_extra(CATEGORIES, lambda: self.service.get_tour_categories(), force_refresh)

    async def get_popular_tours(self, limit: Optional[int] = None, force_refresh: bool = False) -> ActionResult:
        return await self._load_limited_extra(
            POPULAR, limit, lambda: self.service.get_popular_tours(limit), force_refresh
        )

    async def get_featured_tours(self, limit: Optional[int] = None, force_refresh: bool = False) -> ActionResult:
        return await self._load_limited_extra(
            FEATURED, limit, lambda: self.service.get_featured_tours(limit), force_refresh
        )

    async def filter_tours(self, filters: TourFilters) -> ActionResult:
        return await self._filter(filters, lambda: self.service.filter_tours(filters))

    async def get_tours_by_category(self, category_id: str) -> ActionResult:
        return await self._filter(
            TourFilters(categories=[category_id]),
            lambda: self.service.get_tours_by_category(category_id),
        )

    async def duplicate_tour(self, tour_id: str, new_title: Optional[str] = None) -> ActionResult:
        def apply(copy):
            self.store.add(copy)
            return copy

        return await self._mutate(
            lambda: self.service.duplicate_tour(tour_id, new_title),
            apply,
            "Tour duplicated successfully",
        )

    async def initialize_tour_data(self) -> Dict[str, ActionResult]:
        return await self._initialize(
            tours=self.get_all_tours(),
            categories=self.get_tour_categories(),
            popular=self.get_popular_tours(),
            featured=self.get_featured_tours(),
        )
