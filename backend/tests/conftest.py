# tests/conftest.py
"""Shared fixtures: in-memory lead store and stub network collaborators."""

import asyncio
from typing import Dict, List, Optional

import pytest

from leadcrm.services.enrichment_engine import (
    EnrichmentJobManager,
    LeadEnricher,
    LeadRecord,
    StatusReporter,
)


class FakeLeadRepository:
    """In-memory stand-in for LeadRepository with the same async interface"""

    def __init__(self, leads: List[Dict] = None):
        self.leads: Dict[int, Dict] = {}
        self.website_writes: List[tuple] = []
        self.enrichment_writes: List[tuple] = []
        self.fail_on_get: set = set()
        for lead in leads or []:
            self.add(**lead)

    def add(self, id: int, name: str, **fields):
        row = {
            "id": id,
            "name": name,
            "city": None,
            "website": None,
            "employee_count": None,
            "legal_form": None,
            "nace_code": None,
            "import_source": None,
            "enrichment_data": None,
        }
        row.update(fields)
        self.leads[id] = row

    async def claim_pending(self, import_source: Optional[str], limit: int) -> List[int]:
        ids = sorted(
            lead_id for lead_id, row in self.leads.items()
            if row["enrichment_data"] is None
            and (not import_source or row["import_source"] == import_source)
        )
        return ids[:limit]

    async def get_lead(self, lead_id: int) -> Optional[LeadRecord]:
        if lead_id in self.fail_on_get:
            raise RuntimeError(f"database unavailable for lead {lead_id}")
        row = self.leads.get(lead_id)
        if row is None:
            return None
        return LeadRecord(
            id=row["id"],
            name=row["name"],
            city=row["city"],
            website=row["website"],
            employee_count=row["employee_count"],
            legal_form=row["legal_form"],
            nace_code=row["nace_code"],
            import_source=row["import_source"],
            is_enriched=row["enrichment_data"] is not None,
        )

    async def save_website(self, lead_id: int, website: str):
        self.website_writes.append((lead_id, website))
        self.leads[lead_id]["website"] = website

    async def save_enrichment(self, lead_id: int, enrichment_data: Dict):
        self.enrichment_writes.append((lead_id, enrichment_data))
        self.leads[lead_id]["enrichment_data"] = enrichment_data

    async def count_enrichment(self, import_source: Optional[str] = None):
        rows = [
            row for row in self.leads.values()
            if not import_source or row["import_source"] == import_source
        ]
        pending = len([r for r in rows if r["enrichment_data"] is None])
        return pending, len(rows) - pending, len(rows)


class StubResolver:
    """WebsiteResolver replacement returning canned URLs per company name"""

    def __init__(self, websites: Dict[str, str] = None):
        self.websites = websites or {}
        self.calls: List[tuple] = []

    async def resolve(self, company_name, city):
        self.calls.append((company_name, city))
        return self.websites.get(company_name)


class StubFetcher:
    """ContentFetcher replacement; URLs missing from ``pages`` are unreachable"""

    def __init__(self, pages: Dict[str, str] = None):
        self.pages = pages or {}
        self.calls: List[str] = []
        self.gate: Optional[asyncio.Event] = None
        self.started = asyncio.Event()

    async def fetch(self, url):
        self.calls.append(url)
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        return self.pages.get(url)


@pytest.fixture
def fake_repository():
    return FakeLeadRepository()


@pytest.fixture
def stub_resolver():
    return StubResolver()


@pytest.fixture
def stub_fetcher():
    return StubFetcher()


@pytest.fixture
def enricher(fake_repository, stub_resolver, stub_fetcher):
    return LeadEnricher(
        repository=fake_repository,
        resolver=stub_resolver,
        fetcher=stub_fetcher,
    )


@pytest.fixture
def job_manager(fake_repository, enricher):
    """Manager without politeness delay"""
    return EnrichmentJobManager(
        repository=fake_repository,
        enricher=enricher,
        lead_delay_seconds=0,
        default_limit=50,
        max_limit=100,
    )


@pytest.fixture
def status_reporter(fake_repository, job_manager):
    return StatusReporter(fake_repository, job_manager)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: unit tests")
    config.addinivalue_line("markers", "integration: integration tests")
    config.addinivalue_line("markers", "slow: slow running tests")
