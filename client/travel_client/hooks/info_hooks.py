"""FAQ and policy actions."""

from typing import Dict, Optional

from ..schemas.common import Page
from ..schemas.info import CreateFAQRequest, FAQFilters, PolicyType, UpdateFAQRequest
from ..services.info_service import InfoService
from ..stores.info_store import CATEGORIES, POLICIES, policy_category
from .base import SEARCH, ActionResult, DomainHooks, page_data


class InfoHooks(DomainHooks):
    """FAQ and policy orchestration over the info store."""

    entity_label = "FAQ"
    service: InfoService

    async def get_all_faqs(self, category: Optional[str] = None, force_refresh: bool = False) -> ActionResult:
        filters = FAQFilters(category=category) if category else None

        async def fetch():
            response = await self.service.get_all_faqs(category)
            # FAQ endpoints answer with a bare list rather than a page
            if response.success and response.data is not None:
                response.data = Page(items=response.data)
            return response

        return await self._load_list(fetch, filters, force_refresh)

    async def get_faq_by_id(self, faq_id: str) -> ActionResult:
        return await self._load_detail(lambda: self.service.get_faq_by_id(faq_id))

    async def search_faqs(self, query: str, category: Optional[str] = None) -> ActionResult:
        def apply(faqs):
            self.store.set_search_query(query)
            self.store.set_filters(FAQFilters(category=category))
            return page_data(faqs)

        return await self._read(SEARCH, lambda: self.service.search_faqs(query, category), apply)

    def filter_faqs(self, query: str, category: Optional[str] = None) -> ActionResult:
        """
        Narrow the loaded FAQs locally by text and, when given, category.

        ``category=None`` keeps the current category selection; an empty
        string clears it.
        """
        self.store.set_search_query(query)
        if category is not None:
            return self._filter_locally(FAQFilters(category=category or None))
        return ActionResult.ok(self.store.filtered_items)

    async def create_faq(self, payload: CreateFAQRequest) -> ActionResult:
        return await self._create(lambda: self.service.create_faq(payload))

    async def update_faq(self, faq_id: str, payload: UpdateFAQRequest) -> ActionResult:
        return await self._update(lambda: self.service.update_faq(faq_id, payload))

    async def delete_faq(self, faq_id: str) -> ActionResult:
        return await self._delete(faq_id, lambda: self.service.delete_faq(faq_id))

    def get_faq_categories(self):
        """Distinct categories of the loaded FAQs, sorted."""
        return self._refresh_categories()

    async def get_policy(self, policy_type: PolicyType, force_refresh: bool = False) -> ActionResult:
        """Load one policy document, cached per policy type."""
        policy_type = PolicyType(policy_type)
        category = policy_category(policy_type.value)
        if not force_refresh and self.store.is_cache_valid(category):
            cached = (self.store.get_extra(POLICIES) or {}).get(policy_type.value)
            if cached is not None:
                return ActionResult.ok(cached)

        def apply(document):
            self._put_keyed_extra(POLICIES, policy_type.value, document)
            self.store.update_cache_timestamp(category)
            return document

        return await self._read(category, lambda: self.service.get_policy(policy_type), apply)

    async def initialize_info_data(self) -> Dict[str, ActionResult]:
        """Load the FAQs and every policy document concurrently."""
        policies = {policy.name.lower(): self.get_policy(policy) for policy in PolicyType}
        return await self._initialize(faqs=self.get_all_faqs(), **policies)

    def _derive_extras(self) -> None:
        self._refresh_categories()

    def _refresh_categories(self):
        categories = sorted({f.category for f in self.store.items if f.category})
        if self.store.get_extra(CATEGORIES) != categories:
            self.store.set_extra(CATEGORIES, categories)
        return categories
