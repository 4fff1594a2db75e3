"""
Persistence helpers for menu nodes.

Thin query layer over the ``menus`` table shared by the menu mutation
engine, the permission assignment and the access resolver. It never commits;
callers own the transaction.
"""

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from staffhub.errors import InvalidParentError, NotFoundError
from staffhub.models.menu import Menu

logger = logging.getLogger(__name__)


class MenuStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, menu_id: int, include_deleted: bool = False) -> Menu | None:
        query = self.db.query(Menu).filter(Menu.id == menu_id)
        if not include_deleted:
            query = query.filter(Menu.is_deleted == False)  # noqa: E712
        return query.first()

    def require(self, menu_id: int, message: str | None = None) -> Menu:
        menu = self.get(menu_id)
        if menu is None:
            raise NotFoundError(message or f"Menu with ID {menu_id} not found")
        return menu

    def get_many(self, menu_ids: Iterable[int]) -> list[Menu]:
        ids = set(menu_ids)
        if not ids:
            return []
        return (
            self.db.query(Menu)
            .filter(Menu.id.in_(ids), Menu.is_deleted == False)  # noqa: E712
            .order_by(Menu.id)
            .all()
        )

    def children_of(self, menu_id: int) -> list[Menu]:
        """Direct, non-deleted children in creation order."""
        return (
            self.db.query(Menu)
            .filter(Menu.parent_id == menu_id, Menu.is_deleted == False)  # noqa: E712
            .order_by(Menu.created_at, Menu.id)
            .all()
        )

    def descendant_ids(self, menu_id: int) -> list[int]:
        """Every non-deleted descendant id, walking all levels breadth-first."""
        found: list[int] = []
        seen = {menu_id}
        frontier = [menu_id]
        while frontier:
            rows = (
                self.db.query(Menu.id)
                .filter(Menu.parent_id.in_(frontier), Menu.is_deleted == False)  # noqa: E712
                .all()
            )
            frontier = [row.id for row in rows if row.id not in seen]
            seen.update(frontier)
            found.extend(frontier)
        return found

    def all_nodes(self, active_only: bool = False) -> list[Menu]:
        """All non-deleted menus sorted by ``order``, ties by creation order."""
        query = self.db.query(Menu).filter(Menu.is_deleted == False)  # noqa: E712
        if active_only:
            query = query.filter(Menu.is_active == True)  # noqa: E712
        return query.order_by(Menu.order, Menu.id).all()

    def ensure_acyclic(self, menu_id: int, new_parent_id: int) -> None:
        """
        Reject making ``new_parent_id`` the parent of ``menu_id``.

        Walks upward from the candidate parent; meeting ``menu_id`` on the way
        means the candidate is the node itself or one of its descendants.
        """
        visited: set[int] = set()
        current_id: int | None = new_parent_id
        while current_id is not None and current_id not in visited:
            if current_id == menu_id:
                raise InvalidParentError(f"Menu {menu_id} cannot be placed under itself or one of its descendants")
            visited.add(current_id)
            current = self.get(current_id, include_deleted=True)
            current_id = current.parent_id if current is not None else None

    def refresh_levels(self, root: Menu) -> int:
        """
        Recompute ``level`` for every descendant of ``root``.

        Returns the number of rows whose level changed.
        """
        changed = 0
        frontier = [root]
        seen = {root.id}
        while frontier:
            parent = frontier.pop()
            for child in self.db.query(Menu).filter(Menu.parent_id == parent.id).all():
                if child.id in seen:
                    continue
                seen.add(child.id)
                expected = (parent.level or 0) + 1
                if child.level != expected:
                    child.level = expected
                    changed += 1
                frontier.append(child)
        if changed:
            self.db.flush()
        return changed

    def hard_delete(self, menu_ids: Iterable[int]) -> int:
        """Permanently remove rows, bypassing ``is_deleted``. Returns the row count."""
        ids = set(menu_ids)
        if not ids:
            return 0
        deleted = self.db.query(Menu).filter(Menu.id.in_(ids)).delete(synchronize_session="fetch")
        logger.info("Hard-deleted %s menu row(s): %s", deleted, sorted(ids))
        return deleted
