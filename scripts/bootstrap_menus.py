"""
Seed the default navigation menus and roles for the Staff Hub backend.

Usage (from repository root):

    uv run python scripts/bootstrap_menus.py

Existing menus are left untouched unless ``--reset`` is passed, which removes
every menu and grant before seeding:

    uv run python scripts/bootstrap_menus.py --reset
"""

import argparse

from staffhub.db import SessionLocal, recreate_engine
from staffhub.db.init_db import init_db
from staffhub.models.menu import Menu
from staffhub.models.role import Role
from staffhub.models.role_permission import RolePermission
from staffhub.schemas.menu_schemas import MenuInput
from staffhub.schemas.role_schemas import CreateRoleRequest
from staffhub.services.menu_service import MenuService
from staffhub.services.role_permission_service import RolePermissionService
from staffhub.services.role_service import RoleService

SEED_ACTOR = "bootstrap@system"

# (parent, submenus) in display order
DEFAULT_MENUS: list[tuple[dict, list[dict]]] = [
    ({"name": "Dashboard", "icon": "mdi-view-dashboard", "path": "/dashboard", "order": 0}, []),
    (
        {"name": "Staff", "icon": "mdi-account-group", "group_title": True, "order": 10},
        [
            {"name": "Employees", "icon": "mdi-account", "path": "/employees"},
            {"name": "Rosters", "icon": "mdi-calendar-clock", "path": "/rosters"},
            {"name": "Staff Rosters", "icon": "mdi-calendar-account", "path": "/staff-rosters"},
        ],
    ),
    (
        {"name": "Inventory", "icon": "mdi-lan", "group_title": True, "order": 20},
        [
            {"name": "IP Addresses", "icon": "mdi-ip-network", "path": "/ip-addresses"},
            {"name": "MAC Addresses", "icon": "mdi-ethernet", "path": "/mac-addresses"},
        ],
    ),
    (
        {"name": "Administration", "icon": "mdi-shield-lock", "group_title": True, "order": 30},
        [
            {"name": "Roles", "icon": "mdi-badge-account", "path": "/admin/roles"},
            {"name": "Menus", "icon": "mdi-menu", "path": "/admin/menus"},
            {"name": "Role Permissions", "icon": "mdi-key", "path": "/admin/role-permissions"},
            {"name": "User Logs", "icon": "mdi-history", "path": "/admin/user-logs"},
        ],
    ),
]

# Menu names granted to each seeded role; None grants every menu
DEFAULT_ROLE_ACCESS: dict[str, list[str] | None] = {
    "admin": None,
    "staff": ["Dashboard", "Staff", "Employees", "Rosters", "Staff Rosters"],
}


def seed_menus(session) -> None:
    service = MenuService(session)
    for parent, children in DEFAULT_MENUS:
        service.create_menu(MenuInput(**parent), [MenuInput(**child) for child in children], actor=SEED_ACTOR)


def seed_roles(session) -> None:
    roles = RoleService(session)
    grants = RolePermissionService(session)
    menus_by_name = {menu.name: menu.id for menu in session.query(Menu).filter(Menu.is_deleted == False)}  # noqa: E712

    for role_name, menu_names in DEFAULT_ROLE_ACCESS.items():
        role = session.query(Role).filter(Role.name == role_name, Role.is_deleted == False).one_or_none()  # noqa: E712
        if role is None:
            role_id = roles.create_role(CreateRoleRequest(name=role_name, description=f"Auto-created role: {role_name}"), actor=SEED_ACTOR).id
        else:
            role_id = role.id
        names = menus_by_name.keys() if menu_names is None else menu_names
        grants.assign_permissions(role_id, [menus_by_name[name] for name in names if name in menus_by_name], actor=SEED_ACTOR)


def bootstrap(reset: bool = False) -> None:
    init_db()
    session = SessionLocal()
    try:
        if reset:
            session.query(RolePermission).delete()
            session.query(Menu).delete()
            session.commit()

        if session.query(Menu).count() == 0:
            seed_menus(session)
        seed_roles(session)
    finally:
        session.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bootstrap default menus and roles.")
    parser.add_argument("--reset", action="store_true", help="Delete all menus and grants before seeding.")
    parser.add_argument("--database-url", help="Seed this database instead of DATABASE_URL.")
    return parser


def main():
    args = build_parser().parse_args()
    if args.database_url:
        recreate_engine(args.database_url)
    bootstrap(reset=args.reset)
    print("Bootstrap completed successfully.")


if __name__ == "__main__":
    main()
