"""
Menu node model for the navigation tree.

Each row is one entry of the sidebar navigation: either a page link or a
group heading. Rows form a single-parent tree through ``parent_id``.
"""

import re
import time
from datetime import UTC, datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from staffhub.db import Base


def _utc_now():
    """Helper function for SQLAlchemy default/onupdate."""
    return datetime.now(UTC)


def generate_menu_key(name: str, index: int | None = None) -> str:
    """Build a display key like ``staff-roster-1718000000000`` (``-<index>`` for batches)."""
    slug = re.sub(r"\s+", "-", (name or "").strip().lower())
    key = f"{slug}-{int(time.time() * 1000)}"
    if index is not None:
        key = f"{key}-{index}"
    return key


class Menu(Base):
    __tablename__ = "menus"
    # Hard deletes leave parent_id and grant references behind; ids must never be reused
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    key = Column(String(160), nullable=False, index=True)
    name = Column(String(128), nullable=False, index=True)
    icon = Column(String(64), nullable=False, default="")
    path = Column(String(256), nullable=False, default="")
    # No FK: a parent may be hard-deleted while its grandchildren survive
    parent_id = Column(Integer, nullable=True, index=True)
    order = Column(Integer, nullable=False, default=0)
    level = Column(Integer, nullable=False, default=0)
    group_title = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    is_deleted = Column(Boolean, nullable=False, default=False, index=True)
    created_by = Column(String(255), nullable=True, index=True)
    updated_by = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=_utc_now, nullable=False)
    updated_at = Column(DateTime, default=_utc_now, onupdate=_utc_now, nullable=False)

    def __repr__(self) -> str:
        return f"<Menu id={self.id} name={self.name!r} parent_id={self.parent_id} level={self.level}>"
