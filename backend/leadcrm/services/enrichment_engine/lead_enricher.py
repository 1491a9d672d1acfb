# backend/leadcrm/services/enrichment_engine/lead_enricher.py
"""
Per-lead enrichment pipeline

resolve website (if missing) -> fetch -> analyze -> score -> persist
"""

from dataclasses import dataclass
from datetime import datetime, timezone
import logging

from leadcrm.schemas.enrichment import EnrichmentData, WebsiteStatus
from leadcrm.services.enrichment_engine.content_analyzer import ContentAnalyzer
from leadcrm.services.enrichment_engine.content_fetcher import ContentFetcher
from leadcrm.services.enrichment_engine.lead_repository import LeadRecord, LeadRepository
from leadcrm.services.enrichment_engine.scoring import ScoringEngine
from leadcrm.services.enrichment_engine.website_resolver import WebsiteResolver

logger = logging.getLogger(__name__)


@dataclass
class LeadEnrichmentOutcome:
    lead_id: int
    score: int
    website_status: WebsiteStatus
    website: str = None


class LeadEnricher:
    """Runs the full enrichment for one lead and writes the result."""

    def __init__(
        self,
        repository: LeadRepository,
        resolver: WebsiteResolver,
        fetcher: ContentFetcher,
        analyzer: ContentAnalyzer = None,
        scoring: ScoringEngine = None
    ):
        self.repository = repository
        self.resolver = resolver
        self.fetcher = fetcher
        self.analyzer = analyzer or ContentAnalyzer()
        self.scoring = scoring or ScoringEngine()

    async def enrich(self, lead: LeadRecord) -> LeadEnrichmentOutcome:
        """
        Enrich a single lead.

        Search and fetch problems end up as ``website_status``; anything else
        (analysis bug, database error) is raised to the caller.
        """
        website = (lead.website or "").strip() or None
        status = WebsiteStatus.NONE

        if not website:
            website = await self.resolver.resolve(lead.name, lead.city)
            if website:
                logger.info(f"  ✅ Found website: {website}")
                # Persist now so discovery survives a later failure
                await self.repository.save_website(lead.id, website)
            else:
                logger.info("  ❌ No website found")

        html = None
        if website:
            html = await self.fetcher.fetch(website)
            if html is not None:
                status = WebsiteStatus.ONLINE
            else:
                logger.info(f"  ❌ Website not reachable: {website}")
                status = WebsiteStatus.UNREACHABLE

        analysis = self.analyzer.analyze(html, lead)
        suitability = self.scoring.score(analysis, lead)

        enrichment = EnrichmentData(
            enriched_at=datetime.now(timezone.utc),
            website_status=status,
            services=analysis.services,
            products=analysis.products,
            clients=analysis.clients,
            focus=analysis.focus,
            technologies=analysis.technologies,
            team_info=analysis.team_info,
            recent_events=analysis.recent_events,
            summary=analysis.summary,
            suitability_score=suitability.score,
            suitability_reasons=suitability.reasons,
        )

        await self.repository.save_enrichment(lead.id, enrichment.model_dump(mode="json"))

        logger.info(f"  🎯 Score: {suitability.score}/5 ({status.value})")

        return LeadEnrichmentOutcome(
            lead_id=lead.id,
            score=suitability.score,
            website_status=status,
            website=website,
        )
