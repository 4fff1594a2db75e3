import logging
import math

from sqlalchemy.orm import Session

from staffhub.errors import ConflictError, NotFoundError
from staffhub.models.role import Role
from staffhub.models.role_permission import RolePermission
from staffhub.schemas.menu_schemas import Pagination
from staffhub.schemas.role_permission_schemas import RolePermissionSchema
from staffhub.schemas.role_schemas import (
    CreateRoleRequest,
    RoleDetailResponse,
    RoleListResponse,
    RoleSchema,
    UpdateRoleRequest,
)

logger = logging.getLogger(__name__)


def require_role(db: Session, role_id: int) -> Role:
    """Fetch a non-deleted role or raise ``NotFoundError``."""
    role = db.query(Role).filter(Role.id == role_id, Role.is_deleted == False).first()  # noqa: E712
    if role is None:
        raise NotFoundError(f"Role with ID {role_id} not found")
    return role


class RoleService:
    def __init__(self, db: Session):
        self.db = db

    def _name_taken(self, name: str, exclude_id: int | None = None) -> bool:
        query = self.db.query(Role).filter(Role.name == name, Role.is_deleted == False)  # noqa: E712
        if exclude_id is not None:
            query = query.filter(Role.id != exclude_id)
        return query.first() is not None

    def create_role(self, data: CreateRoleRequest, actor: str | None = None) -> RoleSchema:
        if self._name_taken(data.name):
            raise ConflictError(f"Role with name {data.name} already exists")

        role = Role(
            name=data.name,
            description=data.description,
            is_active=data.is_active,
            created_by=actor,
        )
        try:
            self.db.add(role)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(role)
        logger.info("Created role %s (%r)", role.id, role.name)
        return RoleSchema.model_validate(role)

    def list_roles(
        self,
        page: int = 1,
        limit: int = 10,
        search: str | None = None,
        created_by: str | None = None,
    ) -> RoleListResponse:
        query = self.db.query(Role).filter(Role.is_deleted == False)  # noqa: E712
        if search:
            query = query.filter(Role.name.ilike(f"%{search}%"))
        if created_by:
            query = query.filter(Role.created_by == created_by)

        total = query.count()
        roles = query.order_by(Role.created_at.desc(), Role.id.desc()).offset((page - 1) * limit).limit(limit).all()
        return RoleListResponse(
            data=[RoleSchema.model_validate(r) for r in roles],
            pagination=Pagination(total=total, page=page, limit=limit, total_pages=math.ceil(total / limit)),
        )

    def get_role(self, role_id: int) -> RoleDetailResponse:
        """Role details including its current menu grants."""
        role = require_role(self.db, role_id)
        grants = (
            self.db.query(RolePermission)
            .filter(RolePermission.role_id == role.id, RolePermission.is_deleted == False)  # noqa: E712
            .order_by(RolePermission.id)
            .all()
        )
        detail = RoleDetailResponse.model_validate(role)
        detail.permissions = [RolePermissionSchema.model_validate(g) for g in grants]
        return detail

    def update_role(self, role_id: int, data: UpdateRoleRequest, actor: str | None = None) -> RoleSchema:
        role = require_role(self.db, role_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in changes and self._name_taken(changes["name"], exclude_id=role.id):
            raise ConflictError(f"Role with name {changes['name']} already exists")

        try:
            for field, value in changes.items():
                setattr(role, field, value)
            role.updated_by = actor
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(role)
        return RoleSchema.model_validate(role)

    def delete_role(self, role_id: int, actor: str | None = None) -> dict:
        """Soft-delete a role. Its grants stay in place but stop resolving."""
        role = require_role(self.db, role_id)
        try:
            role.is_deleted = True
            role.updated_by = actor
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.info("Soft-deleted role %s", role_id)
        return {"message": "Role deleted successfully"}

    def delete_many_roles(self, role_ids: list[int], actor: str | None = None) -> dict:
        if not role_ids:
            return {"deleted_count": 0}
        try:
            updated = (
                self.db.query(Role)
                .filter(Role.id.in_(role_ids), Role.is_deleted == False)  # noqa: E712
                .update({Role.is_deleted: True, Role.updated_by: actor}, synchronize_session="fetch")
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return {"deleted_count": updated}
