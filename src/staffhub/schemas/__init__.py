from .menu_schemas import (
    CreateMenuRequest,
    MenuInput,
    MenuPatch,
    MenuTreeNode,
    Pagination,
    UpdateMenuRequest,
)
from .role_permission_schemas import AssignRolePermissionsRequest, RolePermissionSchema

__all__ = [
    "AssignRolePermissionsRequest",
    "CreateMenuRequest",
    "MenuInput",
    "MenuPatch",
    "MenuTreeNode",
    "Pagination",
    "RolePermissionSchema",
    "UpdateMenuRequest",
]
