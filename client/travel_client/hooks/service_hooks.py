"""Travel service catalogue actions."""

from typing import Dict, Optional

from ..schemas.common import SearchRequest
from ..schemas.service import CreateServiceRequest, ServiceFilters, UpdateServiceRequest
from ..services.service_service import ServiceCatalogService
from ..stores.service_store import CATEGORIES, FEATURED, POPULAR
from .base import ActionResult, DomainHooks


class ServiceHooks(DomainHooks):
    """Travel service orchestration over a service store."""

    entity_label = "Service"
    service: ServiceCatalogService

    async def get_all_services(
        self, filters: Optional[ServiceFilters] = None, force_refresh: bool = False
    ) -> ActionResult:
        return await self._load_list(lambda: self.service.get_all_services(filters), filters, force_refresh)

    async def get_service_by_id(self, service_id: str) -> ActionResult:
        return await self._load_detail(lambda: self.service.get_service_by_id(service_id))

    async def get_service_by_slug(self, slug: str) -> ActionResult:
        return await self._load_detail(lambda: self.service.get_service_by_slug(slug))

    async def create_service(self, payload: CreateServiceRequest) -> ActionResult:
        return await self._create(lambda: self.service.create_service(payload))

    async def update_service(self, service_id: str, payload: UpdateServiceRequest) -> ActionResult:
        return await self._update(lambda: self.service.update_service(service_id, payload))

    async def delete_service(self, service_id: str) -> ActionResult:
        return await self._delete(service_id, lambda: self.service.delete_service(service_id))

    async def search_services(self, request: SearchRequest) -> ActionResult:
        return await self._search(request, lambda: self.service.search_services(request))

    async def get_service_categories(self, force_refresh: bool = False) -> ActionResult:
        return await self._load_extra(CATEGORIES, lambda: self.service.get_service_categories(), force_refresh)

    async def get_popular_services(self, limit: Optional[int] = None, force_refresh: bool = False) -> ActionResult:
        return await self._load_limited_extra(
            POPULAR, limit, lambda: self.service.get_popular_services(limit), force_refresh
        )

    async def get_featured_services(self, limit: Optional[int] = None, force_refresh: bool = False) -> ActionResult:
        return await self._load_limited_extra(
            FEATURED, limit, lambda: self.service.get_featured_services(limit), force_refresh
        )

    async def filter_services(self, filters: ServiceFilters) -> ActionResult:
        return await self._filter(filters, lambda: self.service.filter_services(filters))

    async def get_services_by_category(self, category_id: str) -> ActionResult:
        return await self._filter(
            ServiceFilters(categories=[category_id]),
            lambda: self.service.get_services_by_category(category_id),
        )

    async def initialize_services_data(self) -> Dict[str, ActionResult]:
        return await self._initialize(
            services=self.get_all_services(),
            categories=self.get_service_categories(),
            popular=self.get_popular_services(),
            featured=self.get_featured_services(),
        )
