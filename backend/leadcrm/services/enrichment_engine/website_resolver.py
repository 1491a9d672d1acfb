# backend/leadcrm/services/enrichment_engine/website_resolver.py
"""
Website Resolver - finds a company homepage via the serper.dev search API
"""

import logging
from typing import List, Optional

import httpx

from leadcrm.config import settings
from leadcrm.services.enrichment_engine.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class WebsiteResolver:
    """Resolve a lead's website from ``"<name> <city> website"`` search results."""

    def __init__(
        self,
        rate_limiter: RateLimiter,
        api_key: Optional[str] = None,
        search_url: str = None,
        registry_domain: str = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.rate_limiter = rate_limiter
        self.api_key = api_key if api_key is not None else settings.SERPER_API_KEY
        self.search_url = search_url or settings.SERPER_URL
        self.registry_domain = registry_domain or settings.REGISTRY_DOMAIN
        self._transport = transport

    @staticmethod
    def build_query(company_name: str, city: Optional[str]) -> str:
        if city and city.strip():
            return f"{company_name} {city.strip()} website"
        # No city: still worth a (weaker) query
        return f"{company_name} website"

    async def resolve(self, company_name: str, city: Optional[str]) -> Optional[str]:
        """
        Returns the first organic link outside the registry domain, the first
        link if all of them are registry links, or None if nothing was found
        or the search failed.
        """
        if not self.api_key:
            logger.warning("SERPER_API_KEY not configured, skipping website search")
            return None

        query = self.build_query(company_name, city)

        await self.rate_limiter.acquire()

        try:
            links = await self._search(query)
        except Exception as e:
            logger.error(f"Website search failed for '{company_name}': {e}")
            return None

        return self.pick_link(links)

    def pick_link(self, links: List[str]) -> Optional[str]:
        if not links:
            return None

        for link in links:
            if self.registry_domain not in link:
                return link

        return links[0]

    async def _search(self, query: str) -> List[str]:
        logger.info(f"🔍 Searching website: '{query}'")

        async with httpx.AsyncClient(timeout=15.0, transport=self._transport) as client:
            response = await client.post(
                self.search_url,
                headers={
                    "X-API-KEY": self.api_key,
                    "Content-Type": "application/json"
                },
                json={
                    "q": query,
                    "gl": settings.SEARCH_COUNTRY,
                    "hl": settings.SEARCH_LANGUAGE,
                    "num": settings.SEARCH_RESULT_COUNT
                }
            )

        if not response.is_success:
            logger.warning(f"Search API error {response.status_code} for '{query}'")
            return []

        organic = response.json().get("organic") or []
        return [r["link"] for r in organic if isinstance(r.get("link"), str) and r["link"]]
