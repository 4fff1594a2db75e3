"""
Role permission assignment.

A role's grants are always written as a full replacement: the previous rows
are removed and the new set inserted inside the same transaction, so a role
never ends up with duplicate grants nor, on failure, with none at all.
"""

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from staffhub.models.role_permission import RolePermission
from staffhub.schemas.role_permission_schemas import RolePermissionSchema
from staffhub.services.menu_store import MenuStore
from staffhub.services.role_service import require_role

logger = logging.getLogger(__name__)


class RolePermissionService:
    def __init__(self, db: Session):
        self.db = db
        self.menus = MenuStore(db)

    def assign_permissions(self, role_id: int, menu_ids: Iterable[int], actor: str | None = None) -> list[RolePermissionSchema]:
        """
        Replace every grant of ``role_id`` with ``menu_ids``.

        Ids that do not resolve to a live menu are dropped without error; when
        none survive the role is left with no grants and ``[]`` is returned.
        The menu name is copied onto each grant as it is now.

        Raises:
            NotFoundError: the role does not exist.
        """
        requested = list(dict.fromkeys(menu_ids))
        require_role(self.db, role_id)

        try:
            removed = self.db.query(RolePermission).filter(RolePermission.role_id == role_id).delete(synchronize_session="fetch")

            menus = self.menus.get_many(requested)
            resolved = {menu.id for menu in menus}
            dropped = [menu_id for menu_id in requested if menu_id not in resolved]
            if dropped:
                logger.warning("Ignoring unknown or deleted menu ids for role %s: %s", role_id, dropped)

            grants = [
                RolePermission(
                    role_id=role_id,
                    menu_id=menu.id,
                    menu_name=menu.name,
                    created_by=actor or "system",
                    is_deleted=False,
                )
                for menu in menus
            ]
            self.db.add_all(grants)
            self.db.flush()
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Role %s: replaced %s grant(s) with %s", role_id, removed, len(grants))
        return [RolePermissionSchema.model_validate(grant) for grant in grants]

    def get_role_permissions(self, role_id: int) -> list[RolePermissionSchema]:
        """Live grants of a role."""
        require_role(self.db, role_id)
        grants = (
            self.db.query(RolePermission)
            .filter(RolePermission.role_id == role_id, RolePermission.is_deleted == False)  # noqa: E712
            .order_by(RolePermission.id)
            .all()
        )
        return [RolePermissionSchema.model_validate(grant) for grant in grants]

    def permitted_menu_ids(self, role_id: int) -> set[int]:
        rows = (
            self.db.query(RolePermission.menu_id)
            .filter(RolePermission.role_id == role_id, RolePermission.is_deleted == False)  # noqa: E712
            .all()
        )
        return {row.menu_id for row in rows}
