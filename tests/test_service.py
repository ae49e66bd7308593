"""Testes de health check, middleware e auditoria agendada"""
from datetime import timedelta

import pytest
from pydantic import ValidationError as PydanticValidationError

from app.core.config import Settings, settings
from app.core.middleware import is_ledger_write
from app.tasks.celery_app import celery_app
from app.tasks.integrity import audit_player_statistics
from app.services.ledger_service import StatisticsLedger


class TestService:
    """Endpoints de serviço"""

    async def test_health_check(self, client):
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_root_endpoint(self, client):
        response = await client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert "message" in data
        assert "endpoints" in data

    async def test_performance_headers(self, client):
        response = await client.get("/health")
        assert "X-Process-Time" in response.headers
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert len(response.headers["X-Request-ID"]) == 32

    async def test_request_id_is_propagated(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"


class TestLedgerWrites:
    """Rotas consideradas escrita no ledger"""

    def test_match_writes(self):
        assert is_ledger_write("POST", "/api/v1/matches/")
        assert is_ledger_write("PUT", "/api/v1/match-players/1/2")
        assert is_ledger_write("DELETE", "/api/v1/matches/3")
        assert is_ledger_write("POST", "/api/v1/data-integrity/repair")

    def test_reads_and_player_routes(self):
        assert not is_ledger_write("GET", "/api/v1/matches/")
        assert not is_ledger_write("POST", "/api/v1/players/")
        assert not is_ledger_write("GET", "/api/v1/data-integrity/check")


class TestAuditSchedule:
    """Agendamento da auditoria no Celery beat"""

    def test_interval_follows_setting(self):
        entry = celery_app.conf.beat_schedule["audit-player-statistics"]
        assert entry["schedule"] == timedelta(minutes=settings.INTEGRITY_CHECK_MINUTES)

    def test_long_intervals_are_kept(self):
        assert Settings(INTEGRITY_CHECK_MINUTES=90).INTEGRITY_CHECK_MINUTES == 90

    def test_interval_must_be_positive(self):
        with pytest.raises(PydanticValidationError):
            Settings(INTEGRITY_CHECK_MINUTES=0)


class TestAuditTask:
    """Task Celery de auditoria (executada de forma síncrona)"""

    async def test_audit_reports_drift(self, db, make_player):
        a = await make_player("Alice")
        b = await make_player("Bob")
        await StatisticsLedger(db).apply({
            "whiteTeamScore": 10,
            "blackTeamScore": 2,
            "players": [
                {"playerId": a.id, "team": True},
                {"playerId": b.id, "team": False},
            ],
        })
        assert audit_player_statistics()["status"] == "ok"

        await make_player("Mallory", player_of_the_match=2)

        report = audit_player_statistics()
        assert report["issues_found"] == 1
        assert report["issues"][0]["field"] == "playerOfTheMatch"
