"""
Role permission model: which menu nodes a role may see.
"""

from datetime import UTC, datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from staffhub.db import Base


def _utc_now():
    return datetime.now(UTC)


class RolePermission(Base):
    """
    One row per (role, menu) grant.

    ``menu_name`` is copied from the menu when the grant is written and is not
    kept in sync with later renames.
    """
    __tablename__ = "role_permissions"

    id = Column(Integer, primary_key=True)
    role_id = Column(Integer, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False, index=True)
    menu_id = Column(Integer, nullable=False, index=True)
    menu_name = Column(String(128), nullable=False)
    created_by = Column(String(255), nullable=False, default="system")
    updated_by = Column(String(255), nullable=True)
    is_deleted = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=_utc_now, nullable=False)
    updated_at = Column(DateTime, default=_utc_now, onupdate=_utc_now, nullable=False)

    __table_args__ = (
        UniqueConstraint("role_id", "menu_id", name="uq_role_menu"),
    )
