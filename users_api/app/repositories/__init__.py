from users_api.app.repositories.base import StoreError, StoreResult, UserRepository
from users_api.app.repositories.user import SqlAlchemyUserRepository

__all__ = ["StoreError", "StoreResult", "UserRepository", "SqlAlchemyUserRepository"]
