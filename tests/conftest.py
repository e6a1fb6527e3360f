"""
Pytest Configuration and Fixtures

Shared test fixtures for unit, API and integration tests. Tests run against
a throwaway SQLite database (aiosqlite) and the in-memory list-view cache.
"""

import os
import tempfile
from datetime import UTC, datetime, timedelta
from pathlib import Path
from uuid import UUID, uuid4

_TEST_DIR = Path(tempfile.mkdtemp(prefix="teachassist-tests-"))

# Settings are read at import time; pin them before importing the app
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR / 'app.db'}"
os.environ["LOCAL_STORAGE_PATH"] = str(_TEST_DIR / "storage")
os.environ["STORAGE_BACKEND"] = "local"
os.environ["REMINDER_POLLING_ENABLED"] = "false"
os.environ["OPENAI_API_KEY"] = "sk-test"
os.environ["AUTH_JWT_SECRET"] = "test-jwt-secret-0123456789abcdef0123456789"
os.environ["AUTH_API_URL"] = "https://identity.test/auth/v1"
os.environ["AUTH_SERVICE_ROLE_KEY"] = "service-role-test"

import pytest  # noqa: E402
from authlib.jose import JsonWebToken  # noqa: E402
from fastapi_cache import FastAPICache  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import configure_mappers  # noqa: E402

from teachassist.config import settings  # noqa: E402
from teachassist.core.cache import init_list_cache  # noqa: E402
from teachassist.core.database import get_db  # noqa: E402
from teachassist.core.models import (  # noqa: E402
    Base,
    CalendarEvent,
    UserProfile,
)

# Ensure all mappers are configured
configure_mappers()
init_list_cache()


def make_token(
    user_id: UUID,
    email: str | None = "teacher@example.com",
    *,
    expires_in: timedelta = timedelta(hours=1),
    secret: str | None = None,
) -> str:
    """Issue an access token the way the identity service does."""
    now = datetime.now(UTC)
    claims = {
        "sub": str(user_id),
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
    }
    jwt = JsonWebToken([settings.AUTH_JWT_ALGORITHM])
    token = jwt.encode({"alg": settings.AUTH_JWT_ALGORITHM}, claims, secret or settings.AUTH_JWT_SECRET)
    return token.decode()


def auth_headers_for(user_id: UUID, email: str | None = "teacher@example.com") -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id, email)}"}


@pytest.fixture
async def async_engine(tmp_path):
    """Create async engine on a fresh SQLite file."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncSession:
    """Create database session for testing."""
    async with session_factory() as session:
        yield session


@pytest.fixture(autouse=True)
async def clear_list_cache():
    """Start every test with an empty list-view cache."""
    await FastAPICache.clear()
    yield
    await FastAPICache.clear()


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncClient:
    """Create test client with database dependency override."""
    from teachassist.main import app

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def teacher(db_session: AsyncSession) -> UserProfile:
    """An onboarded teacher profile."""
    profile = UserProfile(
        id=uuid4(),
        email="teacher@example.com",
        full_name="Asha Rao",
        school_name="Greenfield Public School",
        subjects_taught=["Mathematics", "Science"],
        grade_levels=["Grade 6", "Grade 7"],
        years_of_experience=8,
        teaching_style="Inquiry-based",
        interests=["STEM"],
        onboarding_completed=True,
    )
    db_session.add(profile)
    await db_session.commit()
    await db_session.refresh(profile)
    return profile


@pytest.fixture
async def other_teacher(db_session: AsyncSession) -> UserProfile:
    """A second teacher, for ownership checks."""
    profile = UserProfile(
        id=uuid4(),
        email="other@example.com",
        full_name="Ben Okafor",
        school_name="Riverside Academy",
        onboarding_completed=True,
    )
    db_session.add(profile)
    await db_session.commit()
    await db_session.refresh(profile)
    return profile


@pytest.fixture
def auth_headers(teacher: UserProfile) -> dict[str, str]:
    return auth_headers_for(teacher.id, teacher.email)


@pytest.fixture
def other_auth_headers(other_teacher: UserProfile) -> dict[str, str]:
    return auth_headers_for(other_teacher.id, other_teacher.email)


@pytest.fixture
async def make_event(db_session: AsyncSession):
    """Factory inserting events directly (times are UTC)."""

    async def _make(
        owner: UserProfile,
        *,
        title: str = "Algebra class",
        start_in: timedelta = timedelta(hours=2),
        duration: timedelta | None = timedelta(hours=1),
        completed: bool = False,
        event_type: str = "class",
    ) -> CalendarEvent:
        start = datetime.now(UTC) + start_in
        event = CalendarEvent(
            user_id=owner.id,
            title=title,
            start_time=start,
            end_time=start + duration if duration is not None else None,
            type=event_type,
            completed=completed,
        )
        db_session.add(event)
        await db_session.commit()
        await db_session.refresh(event)
        return event

    return _make


@pytest.fixture
def token_for():
    """Token factory: ``token_for(user_id, email, expires_in=..., secret=...)``."""
    return make_token
