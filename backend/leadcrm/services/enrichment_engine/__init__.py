"""
Lead enrichment engine.

Background batch enrichment of CRM leads: website discovery via search,
page fetching, keyword analysis, suitability scoring and persistence.

Usage:
    from leadcrm.services.enrichment_engine import create_enrichment_engine

    manager, reporter = create_enrichment_engine(AsyncSessionLocal)
    result = await manager.start(import_source="upload_2024_03.csv", limit=50)
"""

from leadcrm.config import settings
from leadcrm.services.enrichment_engine.content_analyzer import ContentAnalyzer
from leadcrm.services.enrichment_engine.content_fetcher import ContentFetcher
from leadcrm.services.enrichment_engine.job_manager import (
    EnrichmentJobManager,
    JobSnapshot,
    JobStatus,
    StartResult,
    StartStatus,
)
from leadcrm.services.enrichment_engine.lead_enricher import LeadEnricher
from leadcrm.services.enrichment_engine.lead_repository import LeadRecord, LeadRepository
from leadcrm.services.enrichment_engine.rate_limiter import RateLimiter
from leadcrm.services.enrichment_engine.scoring import ScoringEngine
from leadcrm.services.enrichment_engine.status_reporter import StatusReporter
from leadcrm.services.enrichment_engine.website_resolver import WebsiteResolver

__all__ = [
    "ContentAnalyzer",
    "ContentFetcher",
    "EnrichmentJobManager",
    "JobSnapshot",
    "JobStatus",
    "LeadEnricher",
    "LeadRecord",
    "LeadRepository",
    "RateLimiter",
    "ScoringEngine",
    "StartResult",
    "StartStatus",
    "StatusReporter",
    "WebsiteResolver",
    "create_enrichment_engine",
]


def create_enrichment_engine(session_factory):
    """Factory function to wire the engine from settings"""
    repository = LeadRepository(session_factory)
    rate_limiter = RateLimiter(
        max_calls=settings.SEARCH_QUOTA_PER_WINDOW,
        window_seconds=settings.SEARCH_WINDOW_SECONDS,
    )
    enricher = LeadEnricher(
        repository=repository,
        resolver=WebsiteResolver(rate_limiter),
        fetcher=ContentFetcher(),
    )
    manager = EnrichmentJobManager(repository, enricher)
    return manager, StatusReporter(repository, manager)
