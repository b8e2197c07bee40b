"""Pytest configuration and fixtures for integration tests."""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from api import dependencies
from api.main import app
from core.application.services import RuleAdminService
from core.infrastructure.database.models import Base


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    yield engine
    
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_factory(test_engine):
    """Create test session factory."""
    yield async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def test_client(harness, now):
    """FastAPI test client wired to the in-memory workflow harness."""
    admin = RuleAdminService(harness.rule_source, harness.repository, harness.history, clock=lambda: now)
    scheduler = harness.scheduler()

    app.dependency_overrides[dependencies.get_case_store] = lambda: harness.case_store
    app.dependency_overrides[dependencies.get_workflow_engine] = lambda: harness.engine
    app.dependency_overrides[dependencies.get_rule_repository] = lambda: harness.repository
    app.dependency_overrides[dependencies.get_escalation_scheduler] = lambda: scheduler
    app.dependency_overrides[dependencies.get_rule_admin_service] = lambda: admin

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()
    dependencies.reset_dependencies()
