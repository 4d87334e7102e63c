"""Shared fixtures: a fresh in-memory database and an ASGI client per test."""
import uuid
from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from users_api.app.core.config import Settings, get_settings
from users_api.app.db.init_db import init_models, seed_admin
from users_api.app.db.session import create_session_factory, get_db
from users_api.app.main import create_app
from users_api.app.repositories.user import SqlAlchemyUserRepository
from users_api.app.security.jwt import UserClaims, create_access_token

from tests.helpers import ADMIN_LOGIN, ADMIN_PASSWORD, TickingClock


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        SECRET_KEY="test-secret-key",
        JWT_ISSUER="test-issuer",
        JWT_AUDIENCE="test-audience",
        ADMIN_LOGIN=ADMIN_LOGIN,
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        ADMIN_NAME="Ivan",
        DATABASE_URL="sqlite+aiosqlite://",
    )


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock(datetime(2026, 1, 1, tzinfo=timezone.utc))


@pytest.fixture
def repository(session, clock) -> SqlAlchemyUserRepository:
    return SqlAlchemyUserRepository(session, clock=clock)


@pytest.fixture
async def app(session_factory, settings):
    await seed_admin(session_factory, settings)

    async def _get_db():
        async with session_factory() as session:
            yield session

    app = create_app()
    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_settings] = lambda: settings
    return app


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def admin_headers(settings) -> dict:
    token = create_access_token(UserClaims(id=uuid.uuid4(), login=ADMIN_LOGIN, is_admin=True), settings)
    return {"Authorization": f"Bearer {token}"}
