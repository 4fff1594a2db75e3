"""
Tests for role permission assignment, role-scoped menu resolution and the
role catalog.
"""

import pytest

from staffhub.errors import ConflictError, NotFoundError
from staffhub.models.role_permission import RolePermission
from staffhub.schemas.role_schemas import CreateRoleRequest, UpdateRoleRequest
from staffhub.services.access_resolver import AccessResolver, per_node_policy
from staffhub.services.role_permission_service import RolePermissionService
from staffhub.services.role_service import RoleService


def _grant_rows(db_session, role_id):
    return db_session.query(RolePermission).filter(RolePermission.role_id == role_id).order_by(RolePermission.menu_id).all()


# ----------------------------------------------------------------------
# assign_permissions
# ----------------------------------------------------------------------


def test_assign_replaces_previous_grants(db_session, make_role, make_menu):
    role = make_role()
    m1, m2, m3 = make_menu("One"), make_menu("Two"), make_menu("Three")
    service = RolePermissionService(db_session)

    service.assign_permissions(role.id, [m1.id, m3.id], actor="admin@test.com")
    result = service.assign_permissions(role.id, [m2.id], actor="admin@test.com")

    assert [g.menu_id for g in result] == [m2.id]
    rows = _grant_rows(db_session, role.id)
    assert [(r.menu_id, r.menu_name) for r in rows] == [(m2.id, "Two")]
    assert rows[0].created_by == "admin@test.com"


def test_assign_deduplicates_and_drops_unknown_menus(db_session, make_role, make_menu):
    role = make_role()
    live = make_menu("Live")
    gone = make_menu("Gone", is_deleted=True)

    result = RolePermissionService(db_session).assign_permissions(role.id, [live.id, live.id, gone.id, 999])

    assert [g.menu_id for g in result] == [live.id]
    assert result[0].created_by == "system"
    assert len(_grant_rows(db_session, role.id)) == 1


def test_assign_with_no_surviving_menus_clears_grants(db_session, make_role, make_menu):
    role = make_role()
    menu = make_menu("Menu")
    service = RolePermissionService(db_session)
    service.assign_permissions(role.id, [menu.id])

    assert service.assign_permissions(role.id, [404, 405]) == []
    assert _grant_rows(db_session, role.id) == []


def test_assign_leaves_other_roles_alone(db_session, make_role, make_menu):
    staff, manager = make_role("staff"), make_role("manager")
    menu = make_menu("Menu")
    service = RolePermissionService(db_session)

    service.assign_permissions(staff.id, [menu.id])
    service.assign_permissions(manager.id, [menu.id])
    service.assign_permissions(staff.id, [])

    assert _grant_rows(db_session, staff.id) == []
    assert len(_grant_rows(db_session, manager.id)) == 1


def test_assign_to_unknown_role_raises(db_session, make_menu):
    menu = make_menu("Menu")

    with pytest.raises(NotFoundError):
        RolePermissionService(db_session).assign_permissions(123, [menu.id])


def test_granted_menu_name_is_a_snapshot(db_session, make_role, make_menu):
    role = make_role()
    menu = make_menu("Old Name")
    service = RolePermissionService(db_session)
    service.assign_permissions(role.id, [menu.id])

    menu.name = "New Name"
    db_session.commit()

    assert [g.menu_name for g in service.get_role_permissions(role.id)] == ["Old Name"]


# ----------------------------------------------------------------------
# resolve_menus_for_role
# ----------------------------------------------------------------------


def test_resolve_is_per_node(db_session, make_role, make_menu):
    role = make_role()
    parent = make_menu("Administration")
    child = make_menu("Roles", parent=parent)
    sibling = make_menu("Menus", parent=parent)
    RolePermissionService(db_session).assign_permissions(role.id, [child.id])

    tree = AccessResolver(db_session).resolve_menus_for_role(role.id)

    # The granted child surfaces as a root; its parent and sibling stay hidden
    assert [(n.id, n.children) for n in tree] == [(child.id, [])]
    assert parent.id not in {n.id for n in tree}
    assert sibling.id not in {n.id for n in tree}


def test_resolve_keeps_tree_shape_when_parent_is_granted(db_session, make_role, make_menu):
    role = make_role()
    parent = make_menu("Staff", order=1)
    first = make_menu("Employees", parent=parent, order=2)
    second = make_menu("Rosters", parent=parent, order=1)
    dashboard = make_menu("Dashboard", order=0)
    RolePermissionService(db_session).assign_permissions(role.id, [parent.id, first.id, second.id, dashboard.id])

    tree = AccessResolver(db_session).resolve_menus_for_role(role.id)

    assert [n.name for n in tree] == ["Dashboard", "Staff"]
    assert [c.name for c in tree[1].children] == ["Rosters", "Employees"]


def test_resolve_excludes_inactive_and_deleted_menus(db_session, make_role, make_menu):
    role = make_role()
    active = make_menu("Active")
    inactive = make_menu("Inactive", is_active=False)
    removed = make_menu("Removed")
    RolePermissionService(db_session).assign_permissions(role.id, [active.id, inactive.id, removed.id])
    removed.is_deleted = True
    db_session.commit()

    tree = AccessResolver(db_session).resolve_menus_for_role(role.id)

    assert [n.id for n in tree] == [active.id]


def test_resolve_without_grants_is_empty(db_session, make_role, make_menu):
    role = make_role()
    make_menu("Menu")

    assert AccessResolver(db_session).resolve_menus_for_role(role.id) == []


def test_resolve_for_unknown_or_deleted_role_raises(db_session, make_role):
    deleted = make_role("retired", is_deleted=True)

    with pytest.raises(NotFoundError):
        AccessResolver(db_session).resolve_menus_for_role(deleted.id)
    with pytest.raises(NotFoundError):
        AccessResolver(db_session).resolve_menus_for_role(9999)


def test_resolve_with_custom_policy(db_session, make_role, make_menu):
    role = make_role()
    parent = make_menu("Parent")
    child = make_menu("Child", parent=parent)
    RolePermissionService(db_session).assign_permissions(role.id, [child.id])

    def with_ancestors(menus, permitted_ids):
        by_id = {m.id: m for m in menus}
        visible = set()
        for menu_id in permitted_ids:
            while menu_id in by_id and menu_id not in visible:
                visible.add(menu_id)
                menu_id = by_id[menu_id].parent_id
        return [m for m in menus if m.id in visible]

    tree = AccessResolver(db_session, policy=with_ancestors).resolve_menus_for_role(role.id)

    assert [n.id for n in tree] == [parent.id]
    assert [c.id for c in tree[0].children] == [child.id]


def test_per_node_policy_filters_by_grant(make_menu):
    a, b = make_menu("A"), make_menu("B")

    assert per_node_policy([a, b], {b.id}) == [b]
    assert per_node_policy([a, b], set()) == []


# ----------------------------------------------------------------------
# role catalog
# ----------------------------------------------------------------------


def test_role_crud(db_session):
    service = RoleService(db_session)

    created = service.create_role(CreateRoleRequest(name="manager", description="Store managers"), actor="admin@test.com")
    assert created.name == "manager"
    assert created.created_by == "admin@test.com"

    updated = service.update_role(created.id, UpdateRoleRequest(description="Shift managers"))
    assert updated.name == "manager"
    assert updated.description == "Shift managers"

    assert service.delete_role(created.id) == {"message": "Role deleted successfully"}
    with pytest.raises(NotFoundError):
        service.get_role(created.id)
    assert service.list_roles().pagination.total == 0


def test_role_name_conflicts(db_session):
    service = RoleService(db_session)
    service.create_role(CreateRoleRequest(name="staff"))
    other = service.create_role(CreateRoleRequest(name="manager"))

    with pytest.raises(ConflictError):
        service.create_role(CreateRoleRequest(name="staff"))
    with pytest.raises(ConflictError):
        service.update_role(other.id, UpdateRoleRequest(name="staff"))


def test_soft_deleted_role_name_can_be_reused(db_session):
    service = RoleService(db_session)
    first = service.create_role(CreateRoleRequest(name="temp"))
    service.delete_role(first.id)

    second = service.create_role(CreateRoleRequest(name="temp"))

    assert second.id != first.id


def test_get_role_includes_grants(db_session, make_role, make_menu):
    role = make_role()
    menu = make_menu("Dashboard")
    RolePermissionService(db_session).assign_permissions(role.id, [menu.id])

    detail = RoleService(db_session).get_role(role.id)

    assert [p.menu_name for p in detail.permissions] == ["Dashboard"]


def test_list_and_delete_many_roles(db_session, make_role):
    a, b, c = make_role("a"), make_role("b"), make_role("c")
    service = RoleService(db_session)

    assert service.list_roles(search="B").pagination.total == 1
    assert service.delete_many_roles([a.id, b.id, 999]) == {"deleted_count": 2}
    assert [r.id for r in service.list_roles().data] == [c.id]
    assert service.delete_many_roles([]) == {"deleted_count": 0}
