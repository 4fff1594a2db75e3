from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from staffhub.schemas.menu_schemas import Pagination
from staffhub.schemas.role_permission_schemas import RolePermissionSchema


class CreateRoleRequest(BaseModel):
    """Request model for creating a role."""

    name: str = Field(..., min_length=1, max_length=64)
    description: str = Field(default="", max_length=256)
    is_active: bool = True


class UpdateRoleRequest(BaseModel):
    """Request model for updating a role."""

    name: str | None = Field(None, min_length=1, max_length=64)
    description: str | None = Field(None, max_length=256)
    is_active: bool | None = None


class DeleteManyRolesRequest(BaseModel):
    ids: list[int] = Field(default_factory=list)


class RoleSchema(BaseModel):
    """Role schema."""

    id: int
    name: str
    description: str | None = ""
    is_active: bool
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class RoleDetailResponse(RoleSchema):
    """Role with the menu grants currently assigned to it."""

    permissions: list[RolePermissionSchema] = Field(default_factory=list)


class RoleListResponse(BaseModel):
    data: list[RoleSchema]
    pagination: Pagination
