"""Itinerary actions."""

from typing import Dict, Optional

from ..schemas.common import SearchRequest
from ..schemas.itinerary import CreateItineraryRequest, ItineraryFilters, ItineraryStatus, UpdateItineraryRequest
from ..services.itinerary_service import ItineraryService
from ..stores.itinerary_store import BY_TOUR, STATS
from .base import ActionResult, DomainHooks


class ItineraryHooks(DomainHooks):
    """Itinerary orchestration over an itinerary store."""

    entity_label = "Itinerary"
    service: ItineraryService

    async def get_all_itineraries(
        self, filters: Optional[ItineraryFilters] = None, force_refresh: bool = False
    ) -> ActionResult:
        return await self._load_list(lambda: self.service.get_all_itineraries(filters), filters, force_refresh)

    async def get_itinerary_by_id(self, itinerary_id: str) -> ActionResult:
        return await self._load_detail(lambda: self.service.get_itinerary_by_id(itinerary_id))

    async def create_itinerary(self, payload: CreateItineraryRequest) -> ActionResult:
        return await self._create(lambda: self.service.create_itinerary(payload))

    async def update_itinerary(self, itinerary_id: str, payload: UpdateItineraryRequest) -> ActionResult:
        return await self._update(lambda: self.service.update_itinerary(itinerary_id, payload))

    async def delete_itinerary(self, itinerary_id: str) -> ActionResult:
        return await self._delete(itinerary_id, lambda: self.service.delete_itinerary(itinerary_id))

    async def search_itineraries(self, request: SearchRequest) -> ActionResult:
        return await self._search(request, lambda: self.service.search_itineraries(request))

    async def duplicate_itinerary(self, itinerary_id: str, title: Optional[str] = None) -> ActionResult:
        def apply(copy):
            self.store.add(copy)
            return copy

        return await self._mutate(
            lambda: self.service.duplicate_itinerary(itinerary_id, title),
            apply,
            "Itinerary duplicated successfully",
        )

    async def get_itineraries_by_tour(self, tour_id: str, force_refresh: bool = False) -> ActionResult:
        return await self._load_keyed_extra(
            BY_TOUR,
            tour_id,
            lambda: self.service.get_itineraries_by_tour(tour_id),
            force_refresh,
        )

    async def get_itinerary_stats(self, force_refresh: bool = False) -> ActionResult:
        return await self._load_extra(STATS, lambda: self.service.get_itinerary_stats(), force_refresh)

    async def filter_itineraries(self, filters: ItineraryFilters) -> ActionResult:
        return await self._filter(filters, lambda: self.service.filter_itineraries(filters))

    async def get_itineraries_by_status(self, status: ItineraryStatus) -> ActionResult:
        status = ItineraryStatus(status)
        return await self._filter(
            ItineraryFilters(status=[status]),
            lambda: self.service.get_itineraries_by_status(status),
        )

    async def initialize_itinerary_data(self) -> Dict[str, ActionResult]:
        return await self._initialize(itineraries=self.get_all_itineraries(), stats=self.get_itinerary_stats())
