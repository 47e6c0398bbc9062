"""Health & Readiness — liveness always 200, readiness follows the database."""

from userhub.infrastructure import database
from userhub.infrastructure.database import DatabaseSessionManager


async def test_liveness(client):
    res = await client.get("/api/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_without_database_is_503(client, monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)
    res = await client.get("/api/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_readiness_with_database_is_200(client, monkeypatch, tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'ready.db'}",
    )
    monkeypatch.setattr(database, "db_manager", manager)
    try:
        res = await client.get("/api/health/ready")
    finally:
        await manager.dispose()
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"
