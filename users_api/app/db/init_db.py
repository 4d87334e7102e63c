# users_api/app/db/init_db.py
"""
Startup bootstrap: create tables and seed the bootstrap admin.

Both steps are idempotent and safe to run on every start.
"""
import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from users_api.app.core.config import Settings
from users_api.app.db.base import Base
from users_api.app.models.user import Gender, User
from users_api.app.security import hashing

logger = logging.getLogger(__name__)


async def init_models(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables are in place")


async def _admin_exists(session: AsyncSession, login: str) -> bool:
    result = await session.execute(select(User.id).where(User.login == login))
    return result.first() is not None


async def seed_admin(session_factory: async_sessionmaker[AsyncSession], settings: Settings) -> bool:
    """Create the bootstrap admin if missing. Returns True when a row was added."""
    async with session_factory() as session:
        if await _admin_exists(session, settings.ADMIN_LOGIN):
            return False

        session.add(User(
            id=uuid.uuid4(),
            login=settings.ADMIN_LOGIN,
            hashed_password=hashing.get_password_hash(settings.ADMIN_PASSWORD),
            name=settings.ADMIN_NAME,
            gender=int(Gender.UNKNOWN),
            admin=True,
            created_on=datetime.now(timezone.utc),
            created_by=settings.ADMIN_LOGIN,
        ))
        try:
            await session.commit()
        except IntegrityError:
            # another worker seeded it first
            await session.rollback()
            return False

    logger.info("Seeded bootstrap admin %s", settings.ADMIN_LOGIN)
    return True
