"""SQLAlchemy ORM models for FocusDeck."""

from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class StoredRecord(Base):
    """One named JSON blob.  Each widget owns its own keys."""

    __tablename__ = "stored_records"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.now, onupdate=datetime.now,
    )

    def __repr__(self) -> str:
        return f"<StoredRecord key={self.key} updated_at={self.updated_at}>"
