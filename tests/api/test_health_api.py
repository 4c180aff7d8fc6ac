"""
API tests for the health endpoints.

System role: Verification of liveness and database checks
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from ragchat.api.deps import ServiceCache
from ragchat.api.main import create_app
from ragchat.boundary.db.connection import get_async_db


@pytest.fixture
def app():
    return create_app(ServiceCache())


def test_health_check(app):
    response = TestClient(app).get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy"}


def test_health_check_db(app, tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'health.db'}")
    factory = async_sessionmaker(engine)

    async def override_db():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_async_db] = override_db

    response = TestClient(app).get("/api/v1/health/db")

    assert response.status_code == 200
    assert response.json()["message"] == "Database connection OK"


def test_metrics_endpoint_exposes_counters(app):
    response = TestClient(app).get("/metrics/")

    assert response.status_code == 200
    assert "ragchat_generation_failures_total" in response.text
