# backend/leadcrm/services/enrichment_engine/lead_repository.py
"""
Lead persistence for the enrichment engine.

Reads lead attributes, writes ``website`` and ``enrichment_data``. Every call
uses its own short session so the batch worker never holds a connection
across network I/O.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import logging

from sqlalchemy import select, update, func, case
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from leadcrm.models import Lead

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeadRecord:
    """Detached snapshot of the lead columns enrichment needs."""
    id: int
    name: str
    city: Optional[str] = None
    website: Optional[str] = None
    employee_count: Optional[int] = None
    legal_form: Optional[str] = None
    nace_code: Optional[str] = None
    import_source: Optional[str] = None
    is_enriched: bool = False

    @classmethod
    def from_model(cls, lead: Lead) -> "LeadRecord":
        return cls(
            id=lead.id,
            name=lead.name,
            city=lead.city,
            website=lead.website,
            employee_count=lead.employee_count,
            legal_form=lead.legal_form,
            nace_code=lead.nace_code,
            import_source=lead.import_source,
            is_enriched=lead.enrichment_data is not None,
        )


class LeadRepository:
    """Async data access for ``leads`` rows"""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def claim_pending(self, import_source: Optional[str], limit: int) -> List[int]:
        """IDs of up to ``limit`` un-enriched leads, ascending."""
        query = select(Lead.id).where(Lead.enrichment_data.is_(None))

        if import_source:
            query = query.where(Lead.import_source == import_source)

        query = query.order_by(Lead.id.asc()).limit(limit)

        async with self.session_factory() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def get_lead(self, lead_id: int) -> Optional[LeadRecord]:
        async with self.session_factory() as session:
            lead = await session.get(Lead, lead_id)
            return LeadRecord.from_model(lead) if lead else None

    async def save_website(self, lead_id: int, website: str):
        async with self.session_factory() as session:
            await session.execute(
                update(Lead).where(Lead.id == lead_id).values(website=website)
            )
            await session.commit()

    async def save_enrichment(self, lead_id: int, enrichment_data: Dict):
        async with self.session_factory() as session:
            await session.execute(
                update(Lead)
                .where(Lead.id == lead_id)
                .values(enrichment_data=enrichment_data, updated_at=func.now())
            )
            await session.commit()

    async def count_enrichment(self, import_source: Optional[str] = None) -> Tuple[int, int, int]:
        """(pending, enriched, total), optionally for one import source"""
        pending_expr = func.coalesce(
            func.sum(case((Lead.enrichment_data.is_(None), 1), else_=0)), 0
        )
        query = select(pending_expr, func.count(Lead.id))

        if import_source:
            query = query.where(Lead.import_source == import_source)

        async with self.session_factory() as session:
            result = await session.execute(query)
            pending, total = result.one()

        pending, total = int(pending), int(total)
        return pending, total - pending, total
