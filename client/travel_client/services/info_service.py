"""FAQ and policy service wrapping the ``/info`` endpoints."""

from typing import List, Optional

from ..core.api_client import query_params
from ..schemas.common import ApiResponse
from ..schemas.info import CreateFAQRequest, FAQItem, PolicyDocument, PolicyType, UpdateFAQRequest
from .base import ResourceService


class InfoService(ResourceService):
    """Service for FAQ management and policy documents."""

    base_path = "/info/faq"
    entity_type = FAQItem

    async def get_all_faqs(self, category: Optional[str] = None) -> ApiResponse:
        if category:
            return await self.get_faqs_by_category(category)
        return await self.client.get(self.base_path, List[FAQItem])

    async def get_faq_by_id(self, faq_id: str) -> ApiResponse:
        return await self._get(faq_id)

    async def get_faqs_by_category(self, category: str) -> ApiResponse:
        return await self.client.get(
            "/info/faq/category/{category}",
            List[FAQItem],
            path_params={"category": category},
        )

    async def search_faqs(self, query: str, category: Optional[str] = None) -> ApiResponse:
        return await self.client.get(
            "/info/faq/search",
            List[FAQItem],
            params=query_params({"q": query, "category": category}),
        )

    async def create_faq(self, payload: CreateFAQRequest) -> ApiResponse:
        return await self._create(payload)

    async def update_faq(self, faq_id: str, payload: UpdateFAQRequest) -> ApiResponse:
        return await self._update(faq_id, payload)

    async def delete_faq(self, faq_id: str) -> ApiResponse:
        return await self._delete(faq_id)

    async def get_policy(self, policy_type: PolicyType) -> ApiResponse:
        """Fetch one policy document, e.g. ``PolicyType.PRIVACY_POLICY``."""
        policy_type = PolicyType(policy_type)
        return await self.client.get(f"/info/{policy_type.value}", PolicyDocument)
