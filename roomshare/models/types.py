# roomshare/models/types.py
"""
Custom SQLAlchemy types that work across different database backends.
"""

from datetime import datetime, timezone
import json
from typing import TYPE_CHECKING, Any, List, Optional

from sqlalchemy import DateTime, String, Text, TypeDecorator
from sqlalchemy.dialects.postgresql import ARRAY

if TYPE_CHECKING:
    from sqlalchemy.sql.type_api import TypeDecorator as _TypeDecorator

    TypeDecoratorProtocol = _TypeDecorator[Any]
else:
    TypeDecoratorProtocol = TypeDecorator


class UTCDateTime(TypeDecoratorProtocol):
    """
    Timezone-aware datetime stored in UTC.

    SQLite drops tzinfo on the way back; values are re-tagged as UTC so the
    service layer only ever compares aware datetimes.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect: Any) -> Optional[datetime]:
        if value is None:
            return value
        if value.tzinfo is None:
            raise ValueError("UTCDateTime requires a timezone-aware datetime")
        value = value.astimezone(timezone.utc)
        if dialect.name == "sqlite":
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value: Optional[datetime], dialect: Any) -> Optional[datetime]:
        if value is None:
            return value
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class StringListType(TypeDecoratorProtocol):
    """
    A list of strings that uses PostgreSQL ARRAY when available,
    but falls back to JSON serialization for other databases (like SQLite).
    """

    impl = Text
    cache_ok = True

    def load_dialect_impl(self, dialect: Any) -> Any:
        if dialect.name == "postgresql":
            return dialect.type_descriptor(ARRAY(String(10)))
        return dialect.type_descriptor(Text())

    def process_bind_param(self, value: Optional[List[str]], dialect: Any) -> Any:
        if value is None:
            return [] if dialect.name == "postgresql" else "[]"
        if dialect.name == "postgresql":
            return list(value)
        return json.dumps(list(value))

    def process_result_value(self, value: Any, dialect: Any) -> List[str]:
        if value is None:
            return []
        if dialect.name == "postgresql":
            return list(value)
        return list(json.loads(value))
