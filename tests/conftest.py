"""Pytest configuration and fixtures for arsana.

Uses app.main:app for HTTP tests and app.infrastructure.persistence.database
for DB-dependent fixtures. All imports use app.*.
"""

import os
import tempfile
import uuid

# Settings are validated on first use; give the test process a key and a
# scratch upload root before the app module is imported.
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("UPLOAD_ROOT", tempfile.mkdtemp(prefix="arsana-uploads-"))
os.environ.setdefault("SCHEDULER_ENABLED", "false")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from app.application.dtos.user import UserResult  # noqa: E402
from app.core.limiter import limiter  # noqa: E402
from app.domain.enums import UserRole  # noqa: E402
from app.infrastructure.persistence import database  # noqa: E402
from app.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_rate_limits() -> None:
    """Each test starts with empty rate-limit counters."""
    limiter.reset()


@pytest.fixture(autouse=True)
def _clear_dependency_overrides():
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def staff_user() -> UserResult:
    return UserResult(
        id="user-staff",
        email="staff@arsana.go.id",
        name="Staff Arsip",
        role=UserRole.STAFF,
        is_active=True,
    )


@pytest.fixture
def admin_user() -> UserResult:
    return UserResult(
        id="user-admin",
        email="admin@arsana.go.id",
        name="Administrator",
        role=UserRole.ADMIN,
        is_active=True,
    )


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL (postgresql+asyncpg). Skips (pytest.skip) when it is
    not configured. Use @pytest.mark.requires_db to mark tests that need this
    fixture; run without DB via: pytest -m 'not requires_db'.
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip(
            "Database not configured: set DATABASE_URL, then run: alembic upgrade head"
        )
    async with database.AsyncSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    """Register a fresh STAFF account via the API, log in and return bearer headers.

    Skips when the database is not configured. Accounts persist after the
    test (use a dedicated test database).
    """
    database._ensure_engine()
    if database.AsyncSessionLocal is None:
        pytest.skip("Database not configured: set DATABASE_URL")
    email = f"staff-{uuid.uuid4().hex[:12]}@arsana.go.id"
    password = "StaffPassword123!"
    register_resp = await client.post(
        "/api/v1/auth/register",
        json={"email": email, "name": "Staff Test", "password": password},
    )
    if register_resp.status_code != 201:
        pytest.skip(f"Could not register test user: {register_resp.status_code} {register_resp.text}")
    login_resp = await client.post(
        "/api/v1/auth/login", json={"email": email, "password": password}
    )
    if login_resp.status_code != 200:
        pytest.skip(f"Could not login: {login_resp.status_code} {login_resp.text}")
    token = login_resp.json()["token"]
    return {"Authorization": f"Bearer {token}"}
