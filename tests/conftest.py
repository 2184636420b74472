from contextlib import contextmanager
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from libs.auth.dependencies import get_current_user
from libs.auth.models import AuthUser
from libs.db.base import Base
from libs.db.session import get_async_db
from services.gateway_service.app.main import app
from tests.factories import make_admin_user

# Import all models so metadata includes every table
from libs.auth import sessions as _auth_sessions  # noqa: F401
from services.attendance_service import models as _attendance_models  # noqa: F401
from services.auth_service import models as _auth_models  # noqa: F401
from services.members_service import models as _member_models  # noqa: F401
from services.worship_service import models as _worship_models  # noqa: F401


@pytest_asyncio.fixture
async def test_engine():
    """
    A fresh in-memory SQLite database per test.
    StaticPool keeps every session on the single connection that holds it.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session) -> AsyncGenerator[AsyncClient, None]:
    """
    Yield an AsyncClient with the app and overridden DB dependency.
    Auth is real unless a test overrides it.
    """

    async def _override_db():
        yield db_session

    app.dependency_overrides[get_async_db] = _override_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def admin_user() -> AuthUser:
    return make_admin_user()


@pytest_asyncio.fixture
async def admin_client(client, admin_user) -> AsyncGenerator[AsyncClient, None]:
    """Client whose every request is made as an admin."""
    app.dependency_overrides[get_current_user] = lambda: admin_user
    yield client
    app.dependency_overrides.pop(get_current_user, None)


@contextmanager
def override_auth(user: AuthUser):
    """Temporarily authenticate every request as ``user``."""
    previous = app.dependency_overrides.get(get_current_user)
    app.dependency_overrides[get_current_user] = lambda: user
    try:
        yield
    finally:
        if previous is None:
            app.dependency_overrides.pop(get_current_user, None)
        else:
            app.dependency_overrides[get_current_user] = previous


@pytest.fixture(name="override_auth")
def override_auth_fixture():
    return override_auth
