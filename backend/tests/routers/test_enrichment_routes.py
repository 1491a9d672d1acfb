# tests/routers/test_enrichment_routes.py
"""
Tests for the enrichment API routes

Services are replaced with mocks via dependency overrides, so no database
or network is touched.

Run with: pytest tests/routers/test_enrichment_routes.py -v
"""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from leadcrm.routers import enrichment_routes
from leadcrm.schemas.enrichment import EnrichmentStatusResponse, WebsiteStatus
from leadcrm.services.enrichment_engine import StartResult, StartStatus
from leadcrm.services.enrichment_engine.lead_enricher import LeadEnrichmentOutcome


@pytest.fixture
def manager():
    manager = Mock()
    manager.start = AsyncMock(return_value=StartResult(status=StartStatus.STARTED, leads_claimed=12))
    manager.request_stop = Mock(return_value=True)
    manager.enrich_one = AsyncMock(return_value=None)
    return manager


@pytest.fixture
def reporter():
    reporter = Mock()
    reporter.report = AsyncMock(return_value=EnrichmentStatusResponse(
        pending=40,
        enriched=10,
        total=50,
        is_running=True,
        batch=3,
        processed=1,
        progress=33,
        errors=0,
        current_import_source="march.csv",
    ))
    return reporter


@pytest.fixture
def client(manager, reporter):
    app = FastAPI()
    app.include_router(enrichment_routes.router)
    app.dependency_overrides[enrichment_routes.get_enrichment_manager] = lambda: manager
    app.dependency_overrides[enrichment_routes.get_status_reporter] = lambda: reporter
    return TestClient(app)


# ============================================================================
# TEST: POST /batch
# ============================================================================

@pytest.mark.unit
class TestBatchEndpoint:

    def test_start_batch(self, client, manager):
        response = client.post(
            "/api/v1/enrichment/batch",
            json={"import_source": "march.csv", "limit": 20},
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "Enrichment started for 12 leads",
            "leads_to_enrich": 12,
            "status": "processing",
        }
        manager.start.assert_awaited_once_with(import_source="march.csv", limit=20)

    def test_empty_body_uses_defaults(self, client, manager):
        response = client.post("/api/v1/enrichment/batch", json={})

        assert response.status_code == 200
        manager.start.assert_awaited_once_with(import_source=None, limit=None)

    def test_already_running_is_conflict(self, client, manager):
        manager.start.return_value = StartResult(status=StartStatus.ALREADY_RUNNING)

        response = client.post("/api/v1/enrichment/batch", json={})

        assert response.status_code == 409
        assert response.json()["detail"] == "already_running"

    def test_no_leads(self, client, manager):
        manager.start.return_value = StartResult(status=StartStatus.NO_LEADS)

        response = client.post("/api/v1/enrichment/batch", json={})

        assert response.status_code == 200
        assert response.json() == {
            "message": "No leads to enrich",
            "leads_to_enrich": 0,
            "status": "no_leads",
        }

    @pytest.mark.parametrize("limit", [0, 101, 500])
    def test_limit_out_of_range_is_rejected(self, client, manager, limit):
        response = client.post("/api/v1/enrichment/batch", json={"limit": limit})

        assert response.status_code == 422
        manager.start.assert_not_awaited()


# ============================================================================
# TEST: POST /stop
# ============================================================================

@pytest.mark.unit
class TestStopEndpoint:

    def test_stop_running_batch(self, client):
        response = client.post("/api/v1/enrichment/stop")

        assert response.status_code == 200
        assert response.json() == {"message": "Enrichment stopping", "stopping": True}

    def test_stop_when_idle(self, client, manager):
        manager.request_stop.return_value = False

        response = client.post("/api/v1/enrichment/stop")

        assert response.json() == {"message": "No enrichment running", "stopping": False}


# ============================================================================
# TEST: GET /status
# ============================================================================

@pytest.mark.unit
class TestStatusEndpoint:

    def test_status_payload_uses_camel_case(self, client, reporter):
        response = client.get("/api/v1/enrichment/status", params={"import_source": "march.csv"})

        assert response.status_code == 200
        data = response.json()
        assert data["isRunning"] is True
        assert data["currentImportSource"] == "march.csv"
        assert data["progress"] == 33
        assert data["lastRun"] is None
        assert "is_running" not in data
        reporter.report.assert_awaited_once_with("march.csv")

    def test_status_without_scope(self, client, reporter):
        client.get("/api/v1/enrichment/status")

        reporter.report.assert_awaited_once_with(None)


# ============================================================================
# TEST: POST /lead/{lead_id}
# ============================================================================

@pytest.mark.unit
class TestSingleLeadEndpoint:

    def test_unknown_lead(self, client):
        response = client.post("/api/v1/enrichment/lead/999")

        assert response.status_code == 404
        assert response.json()["detail"] == "Lead not found"

    def test_enrich_lead(self, client, manager):
        manager.enrich_one.return_value = LeadEnrichmentOutcome(
            lead_id=7, score=4, website_status=WebsiteStatus.ONLINE, website="https://acme.de"
        )

        response = client.post("/api/v1/enrichment/lead/7")

        assert response.status_code == 200
        assert response.json() == {"lead_id": 7, "score": 4, "website_status": "online"}
        manager.enrich_one.assert_awaited_once_with(7)

    def test_enrichment_failure(self, client, manager):
        manager.enrich_one.side_effect = RuntimeError("database unavailable")

        response = client.post("/api/v1/enrichment/lead/7")

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to enrich lead"
