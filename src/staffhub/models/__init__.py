from .menu import Menu
from .role import Role
from .role_permission import RolePermission

__all__ = [
    "Menu",
    "Role",
    "RolePermission",
]
