# backend/leadcrm/services/enrichment_engine/job_manager.py
"""
Enrichment Job Manager

Owns the one batch enrichment job of the process:
- Idle -> Running -> Idle, no queueing (a second start is rejected)
- One worker task enriches claimed leads sequentially, ascending by id
- Cooperative stop, checked between leads
- Per-lead failures are counted and logged, never abort the batch
- Callers read immutable snapshots; the worker swaps in a new one per change
"""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Awaitable, Callable, Dict, List, Optional

from leadcrm.config import settings
from leadcrm.schemas.enrichment import WebsiteStatus
from leadcrm.services.enrichment_engine.lead_enricher import LeadEnricher, LeadEnrichmentOutcome
from leadcrm.services.enrichment_engine.lead_repository import LeadRepository
from leadcrm.services.enrichment_engine.scoring import round_half_up

logger = logging.getLogger(__name__)


class JobStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


class StartStatus(str, Enum):
    STARTED = "started"
    ALREADY_RUNNING = "already_running"
    NO_LEADS = "no_leads"


@dataclass(frozen=True)
class JobSnapshot:
    """Point-in-time view of the batch job."""
    status: JobStatus = JobStatus.IDLE
    import_source: Optional[str] = None
    limit: int = 0
    total: int = 0
    processed: int = 0
    errors: int = 0
    cancel_requested: bool = False
    started_at: Optional[datetime] = None

    @property
    def is_running(self) -> bool:
        return self.status == JobStatus.RUNNING

    @property
    def current_source(self) -> Optional[str]:
        return self.import_source if self.is_running else None

    @property
    def progress(self) -> int:
        if not self.total:
            return 0
        return round_half_up(self.processed / self.total * 100)


@dataclass(frozen=True)
class RunSummary:
    started_at: datetime
    finished_at: datetime
    import_source: Optional[str]
    total: int
    processed: int
    errors: int
    cancelled: bool
    score_distribution: Dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "import_source": self.import_source,
            "total": self.total,
            "processed": self.processed,
            "errors": self.errors,
            "cancelled": self.cancelled,
            "score_distribution": dict(self.score_distribution),
        }


@dataclass(frozen=True)
class StartResult:
    status: StartStatus
    leads_claimed: int = 0

    @property
    def started(self) -> bool:
        return self.status == StartStatus.STARTED


class EnrichmentJobManager:
    """Single-flight batch enrichment"""

    def __init__(
        self,
        repository: LeadRepository,
        enricher: LeadEnricher,
        lead_delay_seconds: float = None,
        default_limit: int = None,
        max_limit: int = None,
        sleep: Optional[Callable[[float], Awaitable[None]]] = None
    ):
        self.repository = repository
        self.enricher = enricher
        self.lead_delay_seconds = (
            settings.ENRICHMENT_LEAD_DELAY_SECONDS if lead_delay_seconds is None else lead_delay_seconds
        )
        self.default_limit = default_limit or settings.ENRICHMENT_DEFAULT_LIMIT
        self.max_limit = max_limit or settings.ENRICHMENT_MAX_LIMIT
        self._sleep = sleep or asyncio.sleep

        self._snapshot = JobSnapshot()
        self._start_lock = asyncio.Lock()
        self._task: Optional[asyncio.Task] = None
        self.last_run: Optional[RunSummary] = None

    # ------------------------------------------------------------------
    # Caller side
    # ------------------------------------------------------------------

    def snapshot(self) -> JobSnapshot:
        return self._snapshot

    @property
    def is_running(self) -> bool:
        return self._snapshot.is_running

    def effective_limit(self, limit: Optional[int]) -> int:
        if not limit or limit < 1:
            limit = self.default_limit
        return min(limit, self.max_limit)

    async def start(self, import_source: Optional[str] = None, limit: Optional[int] = None) -> StartResult:
        """
        Claim up to ``limit`` un-enriched leads and launch the worker.

        Returns immediately; the batch itself runs in the background.
        """
        limit = self.effective_limit(limit)

        async with self._start_lock:
            if self._snapshot.is_running:
                logger.info("Enrichment start rejected: a batch is already running")
                return StartResult(status=StartStatus.ALREADY_RUNNING)

            lead_ids = await self.repository.claim_pending(import_source, limit)

            if not lead_ids:
                logger.info(f"No leads to enrich (import_source={import_source})")
                return StartResult(status=StartStatus.NO_LEADS)

            self._snapshot = JobSnapshot(
                status=JobStatus.RUNNING,
                import_source=import_source,
                limit=limit,
                total=len(lead_ids),
                started_at=datetime.now(timezone.utc),
            )
            self._task = asyncio.create_task(
                self._run(lead_ids), name="lead-enrichment-batch"
            )

        logger.info(
            f"🚀 Enrichment started for {len(lead_ids)} leads "
            f"(import_source={import_source}, limit={limit})"
        )
        return StartResult(status=StartStatus.STARTED, leads_claimed=len(lead_ids))

    def request_stop(self) -> bool:
        """Ask the running batch to stop after the lead in flight. False if idle."""
        if not self._snapshot.is_running:
            return False

        self._snapshot = replace(self._snapshot, cancel_requested=True)
        logger.info(
            f"🛑 Stop requested ({self._snapshot.processed}/{self._snapshot.total} processed)"
        )
        return True

    async def wait(self):
        """Wait for the current batch (if any) to finish."""
        task = self._task
        if task is not None:
            await task

    async def shutdown(self):
        self.request_stop()
        await self.wait()

    async def enrich_one(self, lead_id: int) -> Optional[LeadEnrichmentOutcome]:
        """Enrich one lead right away, outside the batch job. None if unknown."""
        lead = await self.repository.get_lead(lead_id)
        if lead is None:
            return None

        logger.info(f"📊 Enriching single lead {lead_id}: {lead.name}")
        return await self.enricher.enrich(lead)

    # ------------------------------------------------------------------
    # Worker side
    # ------------------------------------------------------------------

    async def _run(self, lead_ids: List[int]):
        total = len(lead_ids)
        distribution = {score: 0 for score in range(1, 6)}
        cancelled = False

        try:
            for index, lead_id in enumerate(lead_ids, start=1):
                if self._snapshot.cancel_requested:
                    cancelled = True
                    logger.info(f"Batch stopped before lead {lead_id} ({index - 1}/{total} processed)")
                    break

                logger.info(f"[{index}/{total}] Enriching lead {lead_id}")
                failed = await self._process_lead(lead_id, distribution)

                self._snapshot = replace(
                    self._snapshot,
                    processed=self._snapshot.processed + 1,
                    errors=self._snapshot.errors + (1 if failed else 0),
                )

                if (
                    index < total
                    and self.lead_delay_seconds > 0
                    and not self._snapshot.cancel_requested
                ):
                    await self._sleep(self.lead_delay_seconds)

        except asyncio.CancelledError:
            cancelled = True
            raise
        finally:
            self._finish(cancelled, distribution)

    async def _process_lead(self, lead_id: int, distribution: Dict[int, int]) -> bool:
        """Returns True if the lead counts as an error."""
        try:
            lead = await self.repository.get_lead(lead_id)

            if lead is None:
                logger.warning(f"  ⚠️ Lead {lead_id} no longer exists, skipping")
                return False

            if lead.is_enriched:
                logger.info(f"  ⏭️ Lead {lead_id} already enriched, skipping")
                return False

            outcome = await self.enricher.enrich(lead)
            distribution[outcome.score] += 1
            return outcome.website_status == WebsiteStatus.UNREACHABLE

        except Exception as e:
            logger.error(f"  ❌ Failed to enrich lead {lead_id}: {e}", exc_info=True)
            return True

    def _finish(self, cancelled: bool, distribution: Dict[int, int]):
        snapshot = self._snapshot

        self.last_run = RunSummary(
            started_at=snapshot.started_at or datetime.now(timezone.utc),
            finished_at=datetime.now(timezone.utc),
            import_source=snapshot.import_source,
            total=snapshot.total,
            processed=snapshot.processed,
            errors=snapshot.errors,
            cancelled=cancelled,
            score_distribution=distribution,
        )

        logger.info("=" * 60)
        logger.info(
            f"{'🛑 Enrichment stopped' if cancelled else '✅ Enrichment complete'}: "
            f"{snapshot.processed}/{snapshot.total} processed, {snapshot.errors} errors"
        )
        for score in range(5, 0, -1):
            logger.info(f"  {score} stars: {distribution[score]}")
        logger.info("=" * 60)

        self._snapshot = JobSnapshot()
        self._task = None
