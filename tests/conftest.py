import os

import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment variables - use in-memory SQLite for testing
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ALLOW_ANONYMOUS"] = "true"

from dao_service.core.database import Base, get_db, init_db, engine
from dao_service.core.config import settings
from dao_service.core.security import Caller
from dao_service import models  # noqa: F401  registers the tables
from dao_service.api.dependencies import get_clock
from dao_service.api.errors import register_error_handlers
from dao_service.api.v1 import organizations, proposals, comments, health
from dao_service.schemas.organization import OrganizationCreate
from dao_service.schemas.proposal import ProposalCreate
from dao_service.services.organization_service import organization_service
from dao_service.services.proposal_service import proposal_service

ASYNC_TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# 2023-11-14T22:13:20Z in nanoseconds
T0 = 1_700_000_000_000_000_000
WEEK = settings.voting_window_ns

ALICE = "aaaaa-aa"
BOB = "bbbbb-bb"
CAROL = "ccccc-cc"
MALLORY = "mmmmm-mm"


def as_caller(principal: str, now: int = T0) -> Caller:
    """Caller for ``principal`` at ``now`` (defaults to T0)."""
    return Caller(principal=principal, now=now)


class FakeClock:
    """Manually advanced nanosecond clock."""

    def __init__(self, now: int = T0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ns: int) -> None:
        self.now += ns


# =============================================================================
# Database Session Fixtures
# =============================================================================

@pytest_asyncio.fixture(scope="function")
async def async_db_session():
    """Fresh in-memory database and ASYNC session for each test."""
    engine = create_async_engine(
        ASYNC_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        yield session

    await engine.dispose()


# =============================================================================
# App / Client Fixtures
# =============================================================================

@pytest.fixture(scope="session")
def test_app():
    """Test FastAPI app with the v1 routers and error handlers."""
    app = FastAPI()
    register_error_handlers(app)
    app.include_router(organizations.router, prefix="/api/v1")
    app.include_router(proposals.router, prefix="/api/v1")
    app.include_router(comments.router, prefix="/api/v1")
    app.include_router(health.router)
    return app


@pytest.fixture
def clock():
    return FakeClock()


@pytest_asyncio.fixture(scope="function")
async def async_client(test_app, async_db_session, clock):
    """Async test client sharing the test session and fake clock."""
    import httpx

    async def override_get_db():
        try:
            yield async_db_session
            await async_db_session.commit()
        except Exception:
            await async_db_session.rollback()
            raise

    test_app.dependency_overrides[get_db] = override_get_db
    test_app.dependency_overrides[get_clock] = lambda: clock
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    test_app.dependency_overrides.clear()


# =============================================================================
# Sample Data Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def sample_organization(async_db_session):
    """Organization owned by ALICE with BOB as member."""
    org = await organization_service.create_organization(
        async_db_session,
        as_caller(ALICE),
        OrganizationCreate(name="Treasury Guild", description="Funds things", avatar="ipfs://guild"),
    )
    await organization_service.add_member(async_db_session, as_caller(ALICE), org.id, BOB)
    return org


@pytest_asyncio.fixture
async def sample_proposal(async_db_session, sample_organization):
    """Proposal by BOB in the sample organization, created at T0."""
    return await proposal_service.create_proposal(
        async_db_session,
        as_caller(BOB),
        ProposalCreate(
            title="New servers",
            details="Two more validators",
            amount_requested=100,
            organization_id=sample_organization.id,
        ),
    )


# =============================================================================
# Served App Fixtures (real session factory, lock and clock)
# =============================================================================

@pytest_asyncio.fixture
async def store():
    """Tables on the module engine; disposing drops the in-memory database."""
    await init_db()
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def app_client(store):
    """Async client for the served app with no dependency overrides."""
    import httpx
    from dao_service.http_server.ingress import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
