"""Destination actions."""

from typing import Dict, Optional

from ..schemas.common import SearchRequest
from ..schemas.destination import CreateDestinationRequest, DestinationFilters, UpdateDestinationRequest
from ..services.destination_service import DestinationService
from ..stores.destination_store import COUNTRIES, FEATURED, POPULAR
from .base import ActionResult, DomainHooks


class DestinationHooks(DomainHooks):
    """Destination orchestration over a destination store."""

    entity_label = "Destination"
    service: DestinationService

    async def get_all_destinations(
        self, filters: Optional[DestinationFilters] = None, force_refresh: bool = False
    ) -> ActionResult:
        return await self._load_list(
            lambda: self.service.get_all_destinations(filters), filters, force_refresh
        )

    async def get_destination_by_id(self, destination_id: str) -> ActionResult:
        return await self._load_detail(lambda: self.service.get_destination_by_id(destination_id))

    async def get_destination_by_slug(self, slug: str) -> ActionResult:
        return await self._load_detail(lambda: self.service.get_destination_by_slug(slug))

    async def create_destination(self, payload: CreateDestinationRequest) -> ActionResult:
        return await self._create(lambda: self.service.create_destination(payload))

    async def update_destination(self, destination_id: str, payload: UpdateDestinationRequest) -> ActionResult:
        return await self._update(lambda: self.service.update_destination(destination_id, payload))

    async def delete_destination(self, destination_id: str) -> ActionResult:
        return await self._delete(destination_id, lambda: self.service.delete_destination(destination_id))

    async def search_destinations(self, request: SearchRequest) -> ActionResult:
        return await self._search(request, lambda: self.service.search_destinations(request))

    async def filter_destinations(self, filters: DestinationFilters) -> ActionResult:
        return await self._filter(filters, lambda: self.service.filter_destinations(filters))

    async def get_popular_destinations(self, limit: Optional[int] = None, force_refresh: bool = False) -> ActionResult:
        return await self._load_limited_extra(
            POPULAR, limit, lambda: self.service.get_popular_destinations(limit), force_refresh
        )

    async def get_featured_destinations(self, limit: Optional[int] = None, force_refresh: bool = False) -> ActionResult:
        return await self._load_limited_extra(
            FEATURED, limit, lambda: self.service.get_featured_destinations(limit), force_refresh
        )

    async def initialize_destination_data(self) -> Dict[str, ActionResult]:
        return await self._initialize(
            destinations=self.get_all_destinations(),
            popular=self.get_popular_destinations(),
            featured=self.get_featured_destinations(),
        )

    def get_countries(self):
        """Distinct countries of the loaded destinations, sorted."""
        return self._refresh_countries()

    def _derive_extras(self) -> None:
        self._refresh_countries()

    def _refresh_countries(self):
        countries = sorted({d.country for d in self.store.items if d.country})
        if self.store.get_extra(COUNTRIES) != countries:
            self.store.set_extra(COUNTRIES, countries)
        return countries
