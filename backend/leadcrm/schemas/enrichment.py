"""
Pydantic schemas for lead enrichment
"""

from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional, List, Dict
from datetime import datetime


class WebsiteStatus(str, Enum):
    """Outcome of looking at a lead's website."""
    NONE = "none"
    ONLINE = "online"
    UNREACHABLE = "unreachable"


class EnrichmentData(BaseModel):
    """
    Canonical ``leads.enrichment_data`` record.

    Always persisted via ``model_dump(mode="json")`` so every row carries the
    same keys in the same shape.
    """
    enriched_at: datetime
    website_status: WebsiteStatus
    services: List[str] = []
    products: List[str] = []
    clients: List[str] = []
    focus: str
    technologies: List[str] = []
    team_info: Optional[str] = None
    recent_events: List[str] = []
    summary: str
    suitability_score: int = Field(..., ge=1, le=5)
    suitability_reasons: List[str] = []


class BatchEnrichRequest(BaseModel):
    """Start a batch run, optionally scoped to one import source"""
    import_source: Optional[str] = None
    limit: Optional[int] = Field(None, ge=1, le=100)

    class Config:
        json_schema_extra = {
            "example": {
                "import_source": "northdata_export_2024_03.csv",
                "limit": 50
            }
        }


class BatchEnrichResponse(BaseModel):
    message: str
    leads_to_enrich: int
    status: str  # processing | no_leads


class StopResponse(BaseModel):
    message: str
    stopping: bool


class LastRunSummary(BaseModel):
    started_at: datetime
    finished_at: datetime
    import_source: Optional[str] = None
    total: int
    processed: int
    errors: int
    cancelled: bool
    score_distribution: Dict[int, int]


class EnrichmentStatusResponse(BaseModel):
    """Polling payload: database counts plus the live batch job"""
    pending: int
    enriched: int
    total: int
    is_running: bool = Field(..., alias="isRunning")
    batch: int
    processed: int
    progress: int
    errors: int
    current_import_source: Optional[str] = Field(None, alias="currentImportSource")
    last_run: Optional[LastRunSummary] = Field(None, alias="lastRun")

    class Config:
        populate_by_name = True


class LeadEnrichResponse(BaseModel):
    lead_id: int
    score: int
    website_status: WebsiteStatus
