from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.types import TypeDecorator

from tinylink_app.database.connection import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """
    Timestamps stored as UTC and always read back timezone-aware.

    SQLite keeps no offset, so naive values coming out of the database are
    UTC by construction and get the tzinfo re-attached.
    """
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Link(Base):
    """
    One short code mapping to one long URL.

    ``code`` is the primary key, so the store itself rejects duplicate
    codes. ``clicks`` and ``last_clicked`` are only ever written by the
    redirect path, in a single UPDATE statement.
    """
    __tablename__ = "links"

    code = Column(String(8), primary_key=True)
    url = Column(Text, nullable=False)
    clicks = Column(Integer, nullable=False, default=0, server_default="0")
    last_clicked = Column(UTCDateTime, nullable=True)
    # Python-side default keeps sub-second precision for list ordering
    created_at = Column(UTCDateTime, nullable=False, default=utcnow, index=True)

    def __repr__(self) -> str:
        return f"<Link code={self.code!r} clicks={self.clicks}>"
