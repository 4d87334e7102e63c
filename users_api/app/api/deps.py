# users_api/app/api/deps.py
import enum
import logging
import uuid
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from users_api.app.core.config import Settings, get_settings
from users_api.app.core.errors import forbidden, unauthorized
from users_api.app.db.base import get_db
from users_api.app.repositories.base import UserRepository
from users_api.app.repositories.user import SqlAlchemyUserRepository
from users_api.app.security.jwt import InvalidTokenError, decode_access_token
from users_api.app.services.login import LoginService

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is a 401, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


class Role(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"


@dataclass(frozen=True)
class AuthContext:
    """Who is calling, resolved once per request from the bearer token."""
    user_id: uuid.UUID
    login: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def can_act_on(self, login: str) -> bool:
        # Ownership is by login string; a token issued before a rename still
        # matches whoever holds the old login until it expires.
        return self.is_admin or self.login == login

    def ensure_can_act_on(self, login: str) -> None:
        if not self.can_act_on(login):
            logger.warning("%s denied access to %s", self.login, login)
            raise forbidden()


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return SqlAlchemyUserRepository(db)


def get_login_service(repository: UserRepository = Depends(get_user_repository)) -> LoginService:
    return LoginService(repository)


async def get_auth_context(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        settings: Settings = Depends(get_settings),
) -> AuthContext:
    if credentials is None:
        raise unauthorized("Authorize to make requests")
    try:
        payload = decode_access_token(credentials.credentials, settings)
    except InvalidTokenError:
        raise unauthorized()

    role = Role.ADMIN if payload.is_admin == "true" else Role.USER
    return AuthContext(user_id=payload.sub, login=payload.name, role=role)


async def require_admin(auth: AuthContext = Depends(get_auth_context)) -> AuthContext:
    if not auth.is_admin:
        logger.warning("Non-admin %s hit an admin-only route", auth.login)
        raise forbidden()
    return auth
