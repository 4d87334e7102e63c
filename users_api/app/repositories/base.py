# users_api/app/repositories/base.py
"""
Credential store contract.

Expected failures (missing user, taken login, deactivated account) come back
as a ``StoreResult`` carrying a ``StoreError`` kind; only genuinely unexpected
problems raise.
"""
import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from users_api.app.models.user import User
from users_api.app.schemas.user import RegisterRequest, UpdateUserRequest

T = TypeVar("T")


class StoreError(str, enum.Enum):
    NOT_FOUND = "not_found"
    LOGIN_ALREADY_EXISTS = "login_already_exists"
    ACCOUNT_DEACTIVATED = "account_deactivated"


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[StoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "StoreResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: StoreError) -> "StoreResult[T]":
        return cls(error=error)


class UserRepository(ABC):
    @abstractmethod
    async def create_user(self, registration: RegisterRequest, created_by: str) -> StoreResult[User]: ...

    @abstractmethod
    async def get_user_by_login(self, login: str) -> Optional[User]: ...

    @abstractmethod
    async def get_active_users(self) -> List[User]: ...

    @abstractmethod
    async def get_users_above_age(self, age: int) -> List[User]: ...

    @abstractmethod
    async def update_user(
        self, login: str, profile: UpdateUserRequest, modified_by: str
    ) -> StoreResult[User]: ...

    @abstractmethod
    async def change_password(self, login: str, new_password: str, modified_by: str) -> StoreResult[User]: ...

    @abstractmethod
    async def change_login(self, login: str, new_login: str, modified_by: str) -> StoreResult[User]: ...

    @abstractmethod
    async def deactivate_user(self, login: str, revoked_by: str) -> bool: ...

    @abstractmethod
    async def restore_user(self, login: str) -> Optional[User]: ...

    @abstractmethod
    async def delete_user(self, login: str) -> bool: ...
