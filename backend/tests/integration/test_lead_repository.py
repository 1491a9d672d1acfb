# tests/integration/test_lead_repository.py
"""
Integration tests: LeadRepository and a full batch against a real database

Run with: pytest tests/integration/ -v
"""

import pytest

from leadcrm.models import Lead
from leadcrm.services.enrichment_engine import EnrichmentJobManager, LeadEnricher


@pytest.mark.integration
class TestLeadRepository:

    @pytest.mark.asyncio
    async def test_claim_pending_order_scope_and_limit(self, repository, add_leads):
        await add_leads(
            Lead(id=4, name="D", import_source="march.csv"),
            Lead(id=1, name="A", import_source="march.csv"),
            Lead(id=3, name="C", import_source="march.csv", enrichment_data={"suitability_score": 3}),
            Lead(id=2, name="B", import_source="april.csv"),
            Lead(id=5, name="E", import_source="march.csv"),
        )

        assert await repository.claim_pending("march.csv", 2) == [1, 4]
        assert await repository.claim_pending(None, 10) == [1, 2, 4, 5]

    @pytest.mark.asyncio
    async def test_get_lead(self, repository, add_leads):
        await add_leads(Lead(
            id=1, name="Acme GmbH", city="Berlin", employee_count=15,
            legal_form="GmbH", nace_code="62.01", import_source="march.csv",
        ))

        lead = await repository.get_lead(1)

        assert lead.name == "Acme GmbH"
        assert lead.city == "Berlin"
        assert lead.employee_count == 15
        assert lead.is_enriched is False
        assert await repository.get_lead(2) is None

    @pytest.mark.asyncio
    async def test_save_website_and_enrichment(self, repository, add_leads):
        await add_leads(Lead(id=1, name="Acme GmbH"))

        await repository.save_website(1, "https://acme.de")
        await repository.save_enrichment(1, {"suitability_score": 4, "services": ["IT-Beratung"]})

        lead = await repository.get_lead(1)
        assert lead.website == "https://acme.de"
        assert lead.is_enriched is True
        assert await repository.claim_pending(None, 10) == []

    @pytest.mark.asyncio
    async def test_count_enrichment(self, repository, add_leads):
        await add_leads(
            Lead(id=1, name="A", import_source="march.csv"),
            Lead(id=2, name="B", import_source="march.csv", enrichment_data={"suitability_score": 2}),
            Lead(id=3, name="C", import_source="april.csv"),
        )

        assert await repository.count_enrichment() == (2, 1, 3)
        assert await repository.count_enrichment("march.csv") == (1, 1, 2)
        assert await repository.count_enrichment("unknown.csv") == (0, 0, 0)


@pytest.mark.integration
class TestBatchAgainstDatabase:

    @pytest.mark.asyncio
    async def test_full_batch(self, repository, add_leads, stub_resolver, stub_fetcher):
        await add_leads(
            Lead(id=1, name="Acme GmbH", city="Hamburg", employee_count=15, legal_form="GmbH"),
            Lead(id=2, name="Down GmbH", website="https://down.example"),
            Lead(id=3, name="Tiny UG", employee_count=2, legal_form="UG"),
        )
        stub_resolver.websites["Acme GmbH"] = "https://acme.de"
        stub_fetcher.pages["https://acme.de"] = (
            "<html><body>Softwareentwicklung und Webdesign in Hamburg</body></html>"
        )

        manager = EnrichmentJobManager(
            repository=repository,
            enricher=LeadEnricher(repository, stub_resolver, stub_fetcher),
            lead_delay_seconds=0,
            default_limit=50,
            max_limit=100,
        )

        await manager.start()
        await manager.wait()

        assert manager.last_run.processed == 3
        assert manager.last_run.errors == 1
        assert manager.last_run.score_distribution[5] == 1
        assert await repository.count_enrichment() == (0, 3, 3)

        acme = await repository.get_lead(1)
        assert acme.website == "https://acme.de"
