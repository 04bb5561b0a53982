"""
Refocus Pet - SQLAlchemy Models
A small key/value table holding JSON documents under opaque keys.
"""

from datetime import UTC, datetime

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


def utc_now() -> datetime:
    """Return current UTC time as timezone-aware datetime."""
    return datetime.now(UTC)


class KeyValueModel(Base):
    """
    One stored document.

    The value is raw JSON text so that corrupt or foreign data can be
    detected on read instead of failing inside the ORM.
    """

    __tablename__ = "key_values"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, onupdate=utc_now
    )

    def __repr__(self) -> str:
        return f"<KeyValueModel(key={self.key!r}, updated_at={self.updated_at})>"
