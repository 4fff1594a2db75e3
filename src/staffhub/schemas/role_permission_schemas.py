from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class AssignRolePermissionsRequest(BaseModel):
    """Replace every menu grant of a role with ``menu_ids``."""

    role_id: int = Field(..., validation_alias=AliasChoices("role_id", "roleId"))
    menu_ids: list[int] = Field(
        default_factory=list,
        validation_alias=AliasChoices("menu_ids", "menuIds", "permissions"),
        json_schema_extra={"example": [1, 2, 5]},
    )


class RolePermissionSchema(BaseModel):
    """A single (role, menu) grant."""

    id: int
    role_id: int
    menu_id: int
    menu_name: str
    created_by: str
    is_deleted: bool = False
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
