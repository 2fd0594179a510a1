"""Pytest configuration and fixtures for leaddesk-search.

HTTP tests run create_app() through httpx ASGITransport with the DB-bound
dependencies overridden. Repository tests use an in-memory SQLite database
(aiosqlite); tests that need PostgreSQL specifics are marked requires_db.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "")

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import timedelta

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from leaddesk.application.dtos.user import CallerContext
from leaddesk.core.config import get_settings
from leaddesk.core.limiter import limiter
from leaddesk.core.tenant_context import set_rls_bypass, set_tenant_id
from leaddesk.domain.enums import UserRole
from leaddesk.infrastructure.persistence.database import Base
from leaddesk.infrastructure.persistence import models  # noqa: F401  (registers tables)
from leaddesk.infrastructure.security.jwt import create_access_token
from leaddesk.main import create_app

TENANT_ID = "company-1"


@pytest.fixture(autouse=True)
def _reset_tenant_context():
    """Tenant context is a contextvar; keep tests independent."""
    set_tenant_id(None)
    set_rls_bypass(False)
    yield
    set_tenant_id(None)
    set_rls_bypass(False)


@pytest.fixture
def app():
    """Fresh FastAPI app per test (dependency_overrides do not leak)."""
    get_settings.cache_clear()
    application = create_app()
    limiter.enabled = False
    yield application
    limiter.enabled = True
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def _make_caller(
    role: UserRole = UserRole.AGENT,
    caller_id: str = "user-1",
    tenant_id: str = TENANT_ID,
) -> CallerContext:
    return CallerContext(caller_id=caller_id, tenant_id=tenant_id, role=role)


@pytest.fixture
def make_caller():
    """Factory for CallerContext values."""
    return _make_caller


@pytest.fixture
def agent_caller() -> CallerContext:
    return _make_caller(UserRole.AGENT)


@pytest.fixture
def admin_caller() -> CallerContext:
    return _make_caller(UserRole.ADMIN, caller_id="admin-1")


def _bearer(sub: str = "user-1", expires_delta: timedelta | None = None) -> dict[str, str]:
    token = create_access_token(sub, expires_delta=expires_delta)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def bearer():
    """Factory: Authorization header carrying a signed token for sub."""
    return _bearer


@pytest.fixture
async def sqlite_session_factory():
    """session_scope()-compatible factory over a shared in-memory SQLite DB."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    maker = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    @asynccontextmanager
    async def scope(transactional: bool = False) -> AsyncIterator[AsyncSession]:
        async with maker() as session:
            if transactional:
                async with session.begin():
                    yield session
            else:
                yield session

    yield scope
    await engine.dispose()
