# users_api/app/repositories/user.py
import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from users_api.app.db.types import as_utc
from users_api.app.models.user import User
from users_api.app.repositories.base import StoreError, StoreResult, UserRepository
from users_api.app.schemas.user import RegisterRequest, UpdateUserRequest
from users_api.app.security import hashing

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def years_before(moment: datetime, years: int) -> datetime:
    try:
        return moment.replace(year=moment.year - years)
    except ValueError:
        # Feb 29 in a non-leap target year
        return moment.replace(year=moment.year - years, day=28)


class SqlAlchemyUserRepository(UserRepository):
    """
    User store backed by an async SQLAlchemy session.

    Every mutating method is one unit of work: it commits on success and
    rolls back on an integrity failure. Login uniqueness is checked up front
    and enforced again by the UNIQUE constraint on ``users.login``.
    """

    def __init__(self, session: AsyncSession, clock: Callable[[], datetime] = utcnow):
        self.session = session
        self.clock = clock

    async def _find(self, login: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.login == login))
        return result.scalars().first()

    async def _login_taken(self, login: str) -> bool:
        result = await self.session.execute(select(User.id).where(User.login == login))
        return result.first() is not None

    async def _commit(self) -> bool:
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            return False
        return True

    @staticmethod
    def _self_service_blocked(user: User, login: str, modified_by: str) -> bool:
        # Only the owner acting on their own deactivated account is blocked;
        # an admin acting on someone else's deactivated account passes.
        return user.revoked_on is not None and modified_by == login

    # ─────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────
    async def get_user_by_login(self, login: str) -> Optional[User]:
        return await self._find(login)

    async def get_active_users(self) -> List[User]:
        result = await self.session.execute(
            select(User).where(User.revoked_on.is_(None)).order_by(User.created_on.asc())
        )
        return list(result.scalars().all())

    async def get_users_above_age(self, age: int) -> List[User]:
        cutoff = years_before(self.clock(), age)
        result = await self.session.execute(
            select(User).where(User.birthday < cutoff).order_by(User.created_on.asc())
        )
        return list(result.scalars().all())

    # ─────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────
    async def create_user(self, registration: RegisterRequest, created_by: str) -> StoreResult[User]:
        if await self._login_taken(registration.login):
            return StoreResult.failure(StoreError.LOGIN_ALREADY_EXISTS)

        user = User(
            id=uuid.uuid4(),
            login=registration.login,
            hashed_password=hashing.get_password_hash(registration.password),
            name=registration.name,
            gender=int(registration.gender),
            birthday=as_utc(registration.birthday),
            admin=registration.admin,
            created_on=self.clock(),
            created_by=created_by,
        )
        self.session.add(user)
        if not await self._commit():
            logger.info("Login %s was taken concurrently", registration.login)
            return StoreResult.failure(StoreError.LOGIN_ALREADY_EXISTS)
        return StoreResult.success(user)

    async def update_user(
        self, login: str, profile: UpdateUserRequest, modified_by: str
    ) -> StoreResult[User]:
        user = await self._find(login)
        if user is None:
            return StoreResult.failure(StoreError.NOT_FOUND)
        if self._self_service_blocked(user, login, modified_by):
            return StoreResult.failure(StoreError.ACCOUNT_DEACTIVATED)

        user.name = profile.name
        user.gender = int(profile.gender)
        user.birthday = as_utc(profile.birthday)
        user.modified_on = self.clock()
        user.modified_by = modified_by
        await self.session.commit()
        return StoreResult.success(user)

    async def change_password(self, login: str, new_password: str, modified_by: str) -> StoreResult[User]:
        user = await self._find(login)
        if user is None:
            return StoreResult.failure(StoreError.NOT_FOUND)
        if self._self_service_blocked(user, login, modified_by):
            return StoreResult.failure(StoreError.ACCOUNT_DEACTIVATED)

        user.hashed_password = hashing.get_password_hash(new_password)
        user.modified_on = self.clock()
        user.modified_by = modified_by
        await self.session.commit()
        return StoreResult.success(user)

    async def change_login(self, login: str, new_login: str, modified_by: str) -> StoreResult[User]:
        if await self._login_taken(new_login):
            return StoreResult.failure(StoreError.LOGIN_ALREADY_EXISTS)
        user = await self._find(login)
        if user is None:
            return StoreResult.failure(StoreError.NOT_FOUND)
        if self._self_service_blocked(user, login, modified_by):
            return StoreResult.failure(StoreError.ACCOUNT_DEACTIVATED)

        user.login = new_login
        user.modified_on = self.clock()
        user.modified_by = modified_by
        if not await self._commit():
            return StoreResult.failure(StoreError.LOGIN_ALREADY_EXISTS)
        return StoreResult.success(user)

    async def deactivate_user(self, login: str, revoked_by: str) -> bool:
        user = await self._find(login)
        if user is None:
            return False
        # Unconditional: deactivating again moves revoked_on forward
        user.revoked_on = self.clock()
        user.revoked_by = revoked_by
        await self.session.commit()
        return True

    async def restore_user(self, login: str) -> Optional[User]:
        user = await self._find(login)
        if user is None:
            return None
        user.revoked_on = None
        user.revoked_by = None
        await self.session.commit()
        return user

    async def delete_user(self, login: str) -> bool:
        user = await self._find(login)
        if user is None:
            return False
        await self.session.delete(user)
        await self.session.commit()
        return True
