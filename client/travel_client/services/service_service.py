"""Travel service catalogue wrapping the ``/services`` endpoints."""

from typing import List, Optional

from ..schemas.common import ApiResponse, SearchRequest
from ..schemas.service import (
    CreateServiceRequest,
    Service,
    ServiceCategory,
    ServiceFilters,
    UpdateServiceRequest,
)
from .base import ResourceService


class ServiceCatalogService(ResourceService):
    """Service for travel service (accommodation, transport, ...) API operations."""

    base_path = "/services"
    entity_type = Service

    async def get_all_services(self, filters: Optional[ServiceFilters] = None) -> ApiResponse:
        return await self._list(filters)

    async def get_service_by_id(self, service_id: str) -> ApiResponse:
        return await self._get(service_id)

    async def get_service_by_slug(self, slug: str) -> ApiResponse:
        return await self.client.get("/services/slug/{slug}", Service, path_params={"slug": slug})

    async def create_service(self, payload: CreateServiceRequest) -> ApiResponse:
        return await self._create(payload)

    async def update_service(self, service_id: str, payload: UpdateServiceRequest) -> ApiResponse:
        return await self._update(service_id, payload)

    async def delete_service(self, service_id: str) -> ApiResponse:
        return await self._delete(service_id)

    async def search_services(self, request: SearchRequest) -> ApiResponse:
        return await self._search(request)

    async def get_service_categories(self) -> ApiResponse:
        return await self._collection("categories", List[ServiceCategory])

    async def get_popular_services(self, limit: Optional[int] = None) -> ApiResponse:
        return await self._collection("popular", List[Service], limit=limit)

    async def get_featured_services(self, limit: Optional[int] = None) -> ApiResponse:
        return await self._collection("featured", List[Service], limit=limit)

    async def filter_services(self, filters: ServiceFilters) -> ApiResponse:
        return await self._filter(filters)

    async def get_services_by_category(self, category_id: str) -> ApiResponse:
        return await self._list_by("category", category_id)
