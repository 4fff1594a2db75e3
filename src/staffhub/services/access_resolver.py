"""
Resolve the navigation tree a role is allowed to see.

Visibility is decided by an access policy: a function taking the candidate
menus and the role's granted menu ids and returning the menus to show. The
policy runs before the tree is built, so with the default per-node policy a
granted submenu whose parent is not granted is returned as a root.
"""

import logging
from collections.abc import Callable, Sequence

from sqlalchemy.orm import Session

from staffhub.models.menu import Menu
from staffhub.schemas.menu_schemas import MenuTreeNode
from staffhub.services.hierarchy import build_hierarchy, count_nodes
from staffhub.services.menu_store import MenuStore
from staffhub.services.role_permission_service import RolePermissionService
from staffhub.services.role_service import require_role

logger = logging.getLogger(__name__)

AccessPolicy = Callable[[Sequence[Menu], set[int]], list[Menu]]


def per_node_policy(menus: Sequence[Menu], permitted_ids: set[int]) -> list[Menu]:
    """A menu is visible only when it was granted itself; nothing is inherited."""
    return [menu for menu in menus if menu.id in permitted_ids]


class AccessResolver:
    def __init__(self, db: Session, policy: AccessPolicy = per_node_policy):
        self.db = db
        self.policy = policy

    def resolve_menus_for_role(self, role_id: int) -> list[MenuTreeNode]:
        """
        Build the menu tree visible to ``role_id``.

        Raises:
            NotFoundError: the role does not exist.
        """
        require_role(self.db, role_id)
        permitted = RolePermissionService(self.db).permitted_menu_ids(role_id)
        candidates = MenuStore(self.db).all_nodes(active_only=True)
        visible = self.policy(candidates, permitted)

        tree = build_hierarchy(visible, deep=True)
        logger.debug("Role %s resolves to %s menu(s) in %s root(s)", role_id, count_nodes(tree), len(tree))
        return tree
