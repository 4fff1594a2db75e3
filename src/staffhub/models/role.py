from datetime import UTC, datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from staffhub.db import Base


def _utc_now():
    return datetime.now(UTC)


class Role(Base):
    __tablename__ = "roles"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(64), nullable=False, index=True)
    description = Column(String(256), default="")
    is_active = Column(Boolean, default=True, nullable=False)
    is_deleted = Column(Boolean, default=False, nullable=False)
    created_by = Column(String(255), nullable=True, index=True)
    updated_by = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=_utc_now, nullable=False)
    updated_at = Column(DateTime, default=_utc_now, onupdate=_utc_now, nullable=False)
