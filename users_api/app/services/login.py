# users_api/app/services/login.py
import enum
import logging
from dataclasses import dataclass
from typing import Optional

from users_api.app.models.user import User
from users_api.app.repositories.base import UserRepository
from users_api.app.security import hashing
from users_api.app.security.jwt import UserClaims

logger = logging.getLogger(__name__)


class LoginOutcome(str, enum.Enum):
    SUCCESS = "success"
    UNKNOWN_LOGIN = "unknown_login"
    ACCOUNT_DEACTIVATED = "account_deactivated"
    WRONG_PASSWORD = "wrong_password"


@dataclass(frozen=True)
class LoginResult:
    outcome: LoginOutcome
    claims: Optional[UserClaims] = None
    user: Optional[User] = None


class LoginService:
    """Checks credentials and produces the claims a token is built from."""

    def __init__(self, repository: UserRepository):
        self.repository = repository

    async def try_login(self, login: str, password: str) -> LoginResult:
        user = await self.repository.get_user_by_login(login)
        if user is None:
            logger.warning("Login attempt for unknown login %s", login)
            return LoginResult(LoginOutcome.UNKNOWN_LOGIN)

        # Deactivation is reported before the password is looked at
        if not user.is_active:
            logger.warning("Login attempt for deactivated account %s", login)
            return LoginResult(LoginOutcome.ACCOUNT_DEACTIVATED)

        if not hashing.verify_password(password, user.hashed_password):
            logger.warning("Wrong password for %s", login)
            return LoginResult(LoginOutcome.WRONG_PASSWORD)

        return LoginResult(
            LoginOutcome.SUCCESS,
            UserClaims(id=user.id, login=user.login, is_admin=user.admin),
            user,
        )
