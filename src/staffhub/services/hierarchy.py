"""
Flat menu list -> ordered menu tree.

The builder works on any sequence of menu-like records (ORM rows, dicts or
``MenuTreeNode`` instances) and never touches the database, so every
hierarchy query is a fresh snapshot computed from whatever rows the caller
loaded.
"""

from collections.abc import Iterable
from typing import Any

from staffhub.schemas.menu_schemas import MenuTreeNode


def _order_key(node: MenuTreeNode) -> int:
    return node.order or 0


def _as_tree_node(node: Any) -> MenuTreeNode:
    if isinstance(node, MenuTreeNode):
        # Never mutate the caller's nodes
        return node.model_copy(update={"children": []})
    return MenuTreeNode.model_validate(node)


def _sort_subtree(node: MenuTreeNode) -> None:
    stack = [node]
    while stack:
        current = stack.pop()
        current.children.sort(key=_order_key)
        stack.extend(current.children)


def build_hierarchy(nodes: Iterable[Any], deep: bool = True) -> list[MenuTreeNode]:
    """
    Arrange menu records into a forest sorted by ``order``.

    Two passes over the input:

    1. index every node by id with an empty ``children`` list;
    2. attach each node to its parent when the parent is part of the input,
       otherwise make it a root.

    A node whose parent is missing from ``nodes`` is returned as a root
    instead of raising, so paginated or permission-filtered subsets still
    produce a usable tree.

    Args:
        nodes: Menu records with unique ids. With duplicate ids the last one
            wins in the lookup and placement is undefined.
        deep: Sort children at every depth. When False only the roots and
            their direct children are sorted (paginated hierarchy path).

    Returns:
        Root nodes sorted by ``order`` ascending; ties keep input order.
    """
    lookup: dict[int, MenuTreeNode] = {}
    ordered: list[MenuTreeNode] = []

    for node in nodes:
        tree_node = _as_tree_node(node)
        lookup[tree_node.id] = tree_node
        ordered.append(tree_node)

    roots: list[MenuTreeNode] = []
    for tree_node in ordered:
        parent = lookup.get(tree_node.parent_id) if tree_node.parent_id is not None else None
        if parent is not None and parent is not tree_node:
            parent.children.append(tree_node)
        else:
            roots.append(tree_node)

    roots.sort(key=_order_key)
    for root in roots:
        if deep:
            _sort_subtree(root)
        else:
            root.children.sort(key=_order_key)

    return roots


def count_nodes(forest: Iterable[MenuTreeNode]) -> int:
    """Total number of nodes in a forest, roots included."""
    total = 0
    stack = list(forest)
    while stack:
        node = stack.pop()
        total += 1
        stack.extend(node.children)
    return total
