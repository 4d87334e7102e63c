from sqlalchemy import func, select

from users_api.app.db import init_db
from users_api.app.db.init_db import seed_admin
from users_api.app.models.user import User
from users_api.app.security import hashing

from tests.helpers import ADMIN_LOGIN, ADMIN_PASSWORD


async def test_seed_admin_is_idempotent(session_factory, settings):
    assert await seed_admin(session_factory, settings) is True
    assert await seed_admin(session_factory, settings) is False

    async with session_factory() as session:
        count = await session.scalar(select(func.count()).select_from(User))
        admin = (await session.execute(select(User).where(User.login == ADMIN_LOGIN))).scalars().one()

    assert count == 1
    assert admin.admin is True
    assert admin.created_by == ADMIN_LOGIN
    assert hashing.verify_password(ADMIN_PASSWORD, admin.hashed_password)


async def test_seed_admin_tolerates_concurrent_seed(session_factory, settings, monkeypatch):
    assert await seed_admin(session_factory, settings) is True

    async def not_yet_seeded(session, login):
        return False

    # existence check passes, as it would for a worker racing the first one
    monkeypatch.setattr(init_db, "_admin_exists", not_yet_seeded)

    assert await seed_admin(session_factory, settings) is False
    async with session_factory() as session:
        assert await session.scalar(select(func.count()).select_from(User)) == 1
