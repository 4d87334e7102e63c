# users_api/app/db/types.py
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, TypeDecorator


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize to UTC; naive values are taken to already be UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UtcDateTime(TypeDecorator):
    """
    Timezone-aware UTC datetime on every backend.

    SQLite drops the offset on write, so values are stored as UTC and the
    offset is put back on read.
    """
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        return as_utc(value)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        return as_utc(value)


__all__ = ["UtcDateTime", "as_utc"]
