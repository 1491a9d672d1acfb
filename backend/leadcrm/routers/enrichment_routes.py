# backend/leadcrm/routers/enrichment_routes.py
"""
API routes for lead enrichment

Endpoints:
- POST /api/v1/enrichment/batch - Start a background batch run
- POST /api/v1/enrichment/stop - Stop the running batch
- GET /api/v1/enrichment/status - Counts + live batch progress
- POST /api/v1/enrichment/lead/{lead_id} - Enrich one lead now
"""

from typing import Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from leadcrm.schemas.enrichment import (
    BatchEnrichRequest,
    BatchEnrichResponse,
    EnrichmentStatusResponse,
    LeadEnrichResponse,
    StopResponse,
)
from leadcrm.services.enrichment_engine import EnrichmentJobManager, StartStatus, StatusReporter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/enrichment", tags=["enrichment"])


def get_enrichment_manager(request: Request) -> EnrichmentJobManager:
    return request.app.state.enrichment_manager


def get_status_reporter(request: Request) -> StatusReporter:
    return request.app.state.status_reporter


@router.post("/batch", response_model=BatchEnrichResponse)
async def start_batch_enrichment(
    payload: BatchEnrichRequest,
    manager: EnrichmentJobManager = Depends(get_enrichment_manager)
):
    """
    Start enriching leads that have no enrichment data yet

    Args:
        import_source: Only leads from this import (optional)
        limit: Batch size, at most 100 (default 50)
    """
    result = await manager.start(import_source=payload.import_source, limit=payload.limit)

    if result.status == StartStatus.ALREADY_RUNNING:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="already_running"
        )

    if result.status == StartStatus.NO_LEADS:
        return BatchEnrichResponse(
            message="No leads to enrich",
            leads_to_enrich=0,
            status="no_leads"
        )

    return BatchEnrichResponse(
        message=f"Enrichment started for {result.leads_claimed} leads",
        leads_to_enrich=result.leads_claimed,
        status="processing"
    )


@router.post("/stop", response_model=StopResponse)
async def stop_batch_enrichment(
    manager: EnrichmentJobManager = Depends(get_enrichment_manager)
):
    """Stop the running batch after the lead currently in flight"""
    stopping = manager.request_stop()

    return StopResponse(
        message="Enrichment stopping" if stopping else "No enrichment running",
        stopping=stopping
    )


@router.get("/status", response_model=EnrichmentStatusResponse)
async def get_enrichment_status(
    import_source: Optional[str] = None,
    reporter: StatusReporter = Depends(get_status_reporter)
):
    """Pending/enriched counts plus progress of the running batch"""
    return await reporter.report(import_source)


@router.post("/lead/{lead_id}", response_model=LeadEnrichResponse)
async def enrich_single_lead(
    lead_id: int,
    manager: EnrichmentJobManager = Depends(get_enrichment_manager)
):
    """Enrich (or re-enrich) one lead synchronously"""
    try:
        outcome = await manager.enrich_one(lead_id)
    except Exception as e:
        logger.error(f"Enrich lead {lead_id} failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to enrich lead"
        )

    if outcome is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Lead not found"
        )

    return LeadEnrichResponse(
        lead_id=outcome.lead_id,
        score=outcome.score,
        website_status=outcome.website_status
    )
