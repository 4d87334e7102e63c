# users_api/app/models/user.py
import enum
import uuid

from sqlalchemy import Boolean, Column, Integer, String, Uuid

from users_api.app.db.base import Base
from users_api.app.db.types import UtcDateTime


class Gender(enum.IntEnum):
    FEMALE = 0
    MALE = 1
    UNKNOWN = 2


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    # UNIQUE at the storage layer so concurrent create/rename cannot race
    login = Column(String(64), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)

    name = Column(String(100), nullable=False)
    gender = Column(Integer, nullable=False, default=Gender.UNKNOWN)
    birthday = Column(UtcDateTime, nullable=True)
    admin = Column(Boolean, nullable=False, default=False)

    created_on = Column(UtcDateTime, nullable=False)
    created_by = Column(String(64), nullable=False)
    modified_on = Column(UtcDateTime, nullable=True)
    modified_by = Column(String(64), nullable=True)

    # revoked_on set <=> account is deactivated
    revoked_on = Column(UtcDateTime, nullable=True)
    revoked_by = Column(String(64), nullable=True)

    @property
    def is_active(self) -> bool:
        return self.revoked_on is None
