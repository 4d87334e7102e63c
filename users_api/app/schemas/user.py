# users_api/app/schemas/user.py
import re
import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from users_api.app.models.user import Gender

LOGIN_PATTERN = re.compile(r"[a-zA-Z0-9]+")
PASSWORD_PATTERN = re.compile(r"[a-zA-Z0-9]+")
# Either all-Latin or all-Cyrillic, never mixed
NAME_PATTERN = re.compile(r"[a-zA-Z]+|[а-яА-Я]+")


def is_login_valid(value: str) -> bool:
    return LOGIN_PATTERN.fullmatch(value) is not None


def is_password_valid(value: str) -> bool:
    return PASSWORD_PATTERN.fullmatch(value) is not None


def is_name_valid(value: str) -> bool:
    return NAME_PATTERN.fullmatch(value) is not None


def _check(value: str, predicate, message: str) -> str:
    if not predicate(value):
        raise ValueError(message)
    return value


# ─────────────────────────────────────────────────────────────
# Requests
# ─────────────────────────────────────────────────────────────
class RegisterRequest(BaseModel):
    login: str
    password: str
    name: str
    gender: Gender
    birthday: Optional[datetime] = None
    admin: bool

    @field_validator("login")
    @classmethod
    def validate_login(cls, v: str) -> str:
        return _check(v, is_login_valid, "only English letters and digits are allowed")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check(v, is_password_valid, "only English letters and digits are allowed")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check(v, is_name_valid, "only English or only Russian letters are allowed")


class UpdateUserRequest(BaseModel):
    """All fields replace the stored ones; omitted birthday clears it."""
    name: str
    gender: Gender
    birthday: Optional[datetime] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check(v, is_name_valid, "only English or only Russian letters are allowed")


class UpdatePasswordRequest(BaseModel):
    new_password: str

    @field_validator("new_password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check(v, is_password_valid, "only English letters and digits are allowed")


class UpdateLoginRequest(BaseModel):
    new_login: str

    @field_validator("new_login")
    @classmethod
    def validate_login(cls, v: str) -> str:
        return _check(v, is_login_valid, "only English letters and digits are allowed")


class LoginRequest(BaseModel):
    login: str
    password: str


class DeleteUserRequest(BaseModel):
    # 0 - deactivate, 1 - remove permanently; anything else is rejected by the endpoint
    delete_mode: int


# ─────────────────────────────────────────────────────────────
# Responses (never expose the password hash)
# ─────────────────────────────────────────────────────────────
class UserResponse(BaseModel):
    name: str
    gender: Gender
    birthday: Optional[datetime]
    admin: bool
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class RegisterResponse(BaseModel):
    id: uuid.UUID
    login: str
    name: str
    gender: Gender
    birthday: Optional[datetime]
    admin: bool
    created_on: datetime
    created_by: str

    model_config = ConfigDict(from_attributes=True)


class UpdateUserResponse(RegisterResponse):
    modified_on: Optional[datetime]
    modified_by: Optional[str]


class UserDetailResponse(UpdateUserResponse):
    revoked_on: Optional[datetime]
    revoked_by: Optional[str]


class MessageResponse(BaseModel):
    message: str


# ─────────────────────────────────────────────────────────────
# Token payload as read back from a verified JWT
# ─────────────────────────────────────────────────────────────
class TokenPayload(BaseModel):
    jti: str
    sub: uuid.UUID
    name: str
    is_admin: str
