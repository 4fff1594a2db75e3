"""
Menu mutation engine and menu queries.

Create, update, and delete navigation menus while keeping ``level``
consistent with ``parent_id`` and the tree free of cycles. Every write runs
as one unit of work on the request session: the whole sequence is flushed and
committed once, and any failure rolls everything back.
"""

import logging
import math
from collections import defaultdict
from datetime import datetime

from sqlalchemy.orm import Session

from staffhub.config import Settings, get_settings
from staffhub.errors import InvalidParentError
from staffhub.models.menu import Menu, generate_menu_key
from staffhub.schemas.menu_schemas import (
    DeleteManyMenusResponse,
    DeleteMenuResponse,
    MenuHierarchyResponse,
    MenuInput,
    MenuItemSchema,
    MenuListResponse,
    MenuMutationResponse,
    MenuPatch,
    MenuTreeNode,
    Pagination,
)
from staffhub.services.hierarchy import build_hierarchy
from staffhub.services.menu_store import MenuStore

logger = logging.getLogger(__name__)

# Columns that cannot be cleared through a patch
_NON_NULLABLE_FIELDS = {"name", "icon", "path", "order", "group_title", "is_active"}


def _created_sort_key(menu: Menu) -> tuple[datetime, int]:
    created = menu.created_at or datetime.min
    # SQLite hands back naive datetimes, fresh objects keep their tzinfo
    return created.replace(tzinfo=None), menu.id


def _paginate(total: int, page: int, limit: int) -> Pagination:
    return Pagination(total=total, page=page, limit=limit, total_pages=math.ceil(total / limit) if limit else 0)


class MenuService:
    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.store = MenuStore(db)
        self.settings = settings or get_settings()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_full_hierarchy(self) -> list[MenuTreeNode]:
        """Every non-deleted menu arranged as a tree, sorted at every level."""
        return build_hierarchy(self.store.all_nodes(), deep=True)

    def get_menu_hierarchy(self, page: int = 1, limit: int = 10, search: str | None = None) -> MenuHierarchyResponse:
        """Paginate root menus and attach their direct submenus."""
        query = self.db.query(Menu).filter(Menu.is_deleted == False, Menu.parent_id.is_(None))  # noqa: E712
        if search:
            query = query.filter(Menu.name.ilike(f"%{search}%"))

        total = query.count()
        roots = query.order_by(Menu.order, Menu.id).offset((page - 1) * limit).limit(limit).all()

        children: list[Menu] = []
        root_ids = [root.id for root in roots]
        if root_ids:
            children = (
                self.db.query(Menu)
                .filter(Menu.parent_id.in_(root_ids), Menu.is_deleted == False)  # noqa: E712
                .order_by(Menu.order, Menu.id)
                .all()
            )

        return MenuHierarchyResponse(
            data=build_hierarchy([*roots, *children], deep=False),
            pagination=_paginate(total, page, limit),
        )

    def list_menus(
        self,
        page: int = 1,
        limit: int = 10,
        search: str | None = None,
        created_by: str | None = None,
    ) -> MenuListResponse:
        """Flat, paginated menu list with each row's parent name for display."""
        query = self.db.query(Menu).filter(Menu.is_deleted == False)  # noqa: E712
        if search:
            query = query.filter(Menu.name.ilike(f"%{search}%"))
        if created_by:
            query = query.filter(Menu.created_by == created_by)

        total = query.count()
        rows = query.order_by(Menu.order, Menu.id).offset((page - 1) * limit).limit(limit).all()

        parent_ids = {row.parent_id for row in rows if row.parent_id is not None}
        parent_names: dict[int, str] = {}
        if parent_ids:
            parent_names = {
                pid: name for pid, name in self.db.query(Menu.id, Menu.name).filter(Menu.id.in_(parent_ids)).all()
            }

        items = []
        for row in rows:
            item = MenuItemSchema.model_validate(row)
            item.parent_name = parent_names.get(row.parent_id) if row.parent_id is not None else None
            items.append(item)

        return MenuListResponse(data=items, pagination=_paginate(total, page, limit))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_menu(self, parent: MenuInput, children: list[MenuInput] | None = None, actor: str | None = None) -> MenuMutationResponse:
        """
        Create a menu and, in the same unit of work, its submenus.

        The parent is inserted first so that every submenu can point at it.
        Submenus default their ``order`` to their position in ``children``.

        Raises:
            NotFoundError: ``parent.parent_id`` does not reference a menu.
        """
        children = children or []
        try:
            level = 0
            if parent.parent_id is not None:
                parent_menu = self.store.require(parent.parent_id, "Parent menu not found")
                level = (parent_menu.level or 0) + 1

            created = Menu(
                key=generate_menu_key(parent.name),
                name=parent.name,
                icon=parent.icon or "",
                path=parent.path or "",
                parent_id=parent.parent_id,
                order=parent.order if parent.order is not None else 0,
                level=level,
                group_title=parent.group_title,
                is_deleted=False,
                created_by=actor,
            )
            self.db.add(created)
            self.db.flush()

            for index, child in enumerate(children):
                self.db.add(
                    Menu(
                        key=generate_menu_key(child.name, index),
                        name=child.name,
                        icon=child.icon or "",
                        path=child.path or "",
                        parent_id=created.id,
                        order=child.order if child.order is not None else index,
                        level=created.level + 1,
                        group_title=child.group_title,
                        is_deleted=False,
                        created_by=actor,
                    )
                )
            self.db.flush()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Created menu %s (%r) with %s submenu(s)", created.id, created.name, len(children))
        return MenuMutationResponse(message="Menu created successfully", data=self.get_full_hierarchy())

    def update_menu(
        self,
        menu_id: int,
        parent_patch: MenuPatch | None = None,
        child_patches: list[MenuPatch] | None = None,
        actor: str | None = None,
    ) -> MenuMutationResponse:
        """
        Update a menu and reconcile its existing submenus against ``child_patches``.

        Reconciliation rules, applied to the current non-deleted children:

        - when several children share a name, the oldest of them is removed
          even if the patch list references it;
        - any child whose id is missing from the patch list is removed;
        - patches with an id update that menu in place (moving it under
          ``menu_id`` if needed); patches without an id create new submenus.

        Removed submenus are deleted permanently. Levels are recomputed for
        the updated menu and its whole subtree.

        Raises:
            NotFoundError: the menu, the new parent or a patched submenu does not exist.
            InvalidParentError: the change would put a menu under its own descendant.
        """
        parent_patch = parent_patch or MenuPatch()
        child_patches = child_patches or []
        try:
            menu = self.store.require(menu_id)

            changes = parent_patch.model_dump(exclude_unset=True, exclude={"id"})
            if "parent_id" in changes:
                new_parent_id = changes.pop("parent_id")
                if new_parent_id is not None:
                    parent_menu = self.store.require(new_parent_id, "Parent menu not found")
                    self.store.ensure_acyclic(menu.id, new_parent_id)
                else:
                    parent_menu = None
                menu.parent_id = new_parent_id
            else:
                parent_menu = self.store.get(menu.parent_id, include_deleted=True) if menu.parent_id is not None else None
            menu.level = (parent_menu.level or 0) + 1 if parent_menu is not None else 0

            for field, value in changes.items():
                if value is None and field in _NON_NULLABLE_FIELDS:
                    continue
                setattr(menu, field, value)
            menu.updated_by = actor

            for patch in child_patches:
                if patch.id is None:
                    continue
                if patch.id == menu.id:
                    raise InvalidParentError(f"Menu {menu.id} cannot be its own submenu")
                self.store.require(patch.id, f"Submenu with ID {patch.id} not found")
                self.store.ensure_acyclic(patch.id, menu.id)

            self.db.flush()

            to_delete = self._reconcile_children(menu.id, child_patches)
            if to_delete:
                self._promote_orphans(to_delete)
                self.store.hard_delete(to_delete)

            child_level = menu.level + 1
            for patch in child_patches:
                if patch.id is not None:
                    if patch.id in to_delete:
                        continue
                    child = self.store.require(patch.id, f"Submenu with ID {patch.id} not found")
                    for field, value in patch.model_dump(exclude_unset=True, exclude={"id", "parent_id"}).items():
                        if value is None and field in _NON_NULLABLE_FIELDS:
                            continue
                        setattr(child, field, value)
                    child.parent_id = menu.id
                    child.level = child_level
                    child.updated_by = actor
                else:
                    self.db.add(
                        Menu(
                            key=generate_menu_key(patch.name),
                            name=patch.name,
                            icon=patch.icon or "",
                            path=patch.path or "",
                            parent_id=menu.id,
                            order=patch.order if patch.order is not None else 0,
                            level=child_level,
                            group_title=bool(patch.group_title),
                            is_active=True if patch.is_active is None else patch.is_active,
                            is_deleted=False,
                            created_by=actor,
                        )
                    )

            self.db.flush()
            self.store.refresh_levels(menu)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Updated menu %s; removed %s submenu(s)", menu_id, len(to_delete))
        return MenuMutationResponse(message="Menu updated successfully", data=self.get_full_hierarchy())

    def _reconcile_children(self, menu_id: int, child_patches: list[MenuPatch]) -> set[int]:
        """Ids of existing submenus that the update removes."""
        existing = self.store.children_of(menu_id)
        incoming = {patch.id for patch in child_patches if patch.id is not None}

        by_name: dict[str, list[Menu]] = defaultdict(list)
        for child in existing:
            by_name[child.name].append(child)

        to_delete: set[int] = set()
        for name, duplicates in by_name.items():
            if len(duplicates) > 1:
                oldest = min(duplicates, key=_created_sort_key)
                logger.warning("Menu %s has %s submenus named %r; removing oldest %s", menu_id, len(duplicates), name, oldest.id)
                to_delete.add(oldest.id)

        for child in existing:
            if child.id not in incoming:
                to_delete.add(child.id)
        return to_delete

    def _cascade_ids(self, menu_id: int) -> list[int]:
        if self.settings.menu_deep_cascade:
            return self.store.descendant_ids(menu_id)
        return [child.id for child in self.store.children_of(menu_id)]

    def _promote_orphans(self, deleted_ids: set[int]) -> int:
        """Turn survivors of a shallow cascade into roots and re-level their subtrees."""
        orphans = (
            self.db.query(Menu)
            .filter(Menu.parent_id.in_(deleted_ids), Menu.id.notin_(deleted_ids), Menu.is_deleted == False)  # noqa: E712
            .all()
        )
        for orphan in orphans:
            orphan.parent_id = None
            orphan.level = 0
        if orphans:
            self.db.flush()
            for orphan in orphans:
                self.store.refresh_levels(orphan)
            logger.info("Promoted %s orphaned submenu(s) to root: %s", len(orphans), sorted(o.id for o in orphans))
        return len(orphans)

    def delete_menu(self, menu_id: int) -> DeleteMenuResponse:
        """
        Permanently delete a menu together with its submenus.

        Only direct children are removed unless deep cascade is enabled;
        grandchildren of a shallow delete stay behind and become roots, with
        their subtree levels recomputed.

        Raises:
            NotFoundError: the menu does not exist or is soft-deleted.
        """
        try:
            menu = self.store.require(menu_id)
            child_ids = self._cascade_ids(menu.id)
            deleted_ids = {menu.id, *child_ids}
            self._promote_orphans(deleted_ids)
            self.store.hard_delete(deleted_ids)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        return DeleteMenuResponse(
            message=f"Menu and {len(child_ids)} submenu(s) deleted successfully",
            deleted_children=len(child_ids),
        )

    def delete_many_menus(self, menu_ids: list[int]) -> DeleteManyMenusResponse:
        """Permanently delete several menus and their submenus; unknown ids are ignored."""
        if not menu_ids:
            return DeleteManyMenusResponse(deleted_count=0)

        try:
            menus = self.store.get_many(menu_ids)
            if not menus:
                return DeleteManyMenusResponse(deleted_count=0)

            all_ids: set[int] = set()
            for menu in menus:
                all_ids.add(menu.id)
                all_ids.update(self._cascade_ids(menu.id))

            self._promote_orphans(all_ids)
            deleted = self.store.hard_delete(all_ids)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        return DeleteManyMenusResponse(deleted_count=deleted)
