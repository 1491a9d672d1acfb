# backend/leadcrm/services/enrichment_engine/status_reporter.py
"""Read-only enrichment status for polling clients."""

import logging
from typing import Optional

from leadcrm.schemas.enrichment import EnrichmentStatusResponse, LastRunSummary
from leadcrm.services.enrichment_engine.job_manager import EnrichmentJobManager
from leadcrm.services.enrichment_engine.lead_repository import LeadRepository

logger = logging.getLogger(__name__)


class StatusReporter:
    """Database counts + live job snapshot. Never mutates anything."""

    def __init__(self, repository: LeadRepository, job_manager: EnrichmentJobManager):
        self.repository = repository
        self.job_manager = job_manager

    async def report(self, import_source: Optional[str] = None) -> EnrichmentStatusResponse:
        pending, enriched, total = await self.repository.count_enrichment(import_source)
        job = self.job_manager.snapshot()
        last_run = self.job_manager.last_run

        return EnrichmentStatusResponse(
            pending=pending,
            enriched=enriched,
            total=total,
            is_running=job.is_running,
            batch=job.total,
            processed=job.processed,
            progress=job.progress,
            errors=job.errors,
            current_import_source=job.current_source,
            last_run=LastRunSummary(**last_run.to_dict()) if last_run else None,
        )
