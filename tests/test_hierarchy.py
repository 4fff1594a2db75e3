"""
Tests for building the menu tree from flat menu records.
"""

from staffhub.schemas.menu_schemas import MenuTreeNode
from staffhub.services.hierarchy import build_hierarchy, count_nodes


def _node(id, name, parent_id=None, order=0, level=0):
    return MenuTreeNode(id=id, name=name, parent_id=parent_id, order=order, level=level)


def _shape(forest):
    return [(node.id, _shape(node.children)) for node in forest]


def test_roots_and_children_sorted_by_order():
    a = _node(1, "A", order=1)
    b = _node(2, "B", order=0)
    c = _node(3, "C", parent_id=1, order=0, level=1)

    roots = build_hierarchy([a, b, c])

    assert [r.name for r in roots] == ["B", "A"]
    assert [child.name for child in roots[1].children] == ["C"]
    assert roots[0].children == []


def test_missing_parent_becomes_root():
    orphan = _node(5, "Orphan", parent_id=99, level=1)
    root = _node(1, "Root")

    roots = build_hierarchy([orphan, root])

    assert {r.id for r in roots} == {1, 5}
    assert all(r.children == [] for r in roots)


def test_no_node_lost_or_duplicated():
    nodes = [
        _node(1, "Root A", order=2),
        _node(2, "Root B", order=1),
        _node(3, "A1", parent_id=1, order=1, level=1),
        _node(4, "A2", parent_id=1, order=0, level=1),
        _node(5, "A2x", parent_id=4, level=2),
        _node(6, "Dangling", parent_id=42, level=3),
    ]

    roots = build_hierarchy(nodes)

    assert count_nodes(roots) == len(nodes)
    seen = []
    stack = list(roots)
    while stack:
        node = stack.pop()
        seen.append(node.id)
        stack.extend(node.children)
    assert sorted(seen) == [1, 2, 3, 4, 5, 6]


def test_building_twice_gives_same_tree_and_leaves_input_untouched():
    nodes = [
        _node(1, "A", order=1),
        _node(2, "B", order=0),
        _node(3, "C", parent_id=1, level=1),
    ]

    first = build_hierarchy(nodes)
    second = build_hierarchy(nodes)

    assert _shape(first) == _shape(second)
    assert [n.model_dump() for n in first] == [n.model_dump() for n in second]
    assert all(n.children == [] for n in nodes)


def test_equal_order_keeps_input_order():
    nodes = [_node(3, "third"), _node(1, "first"), _node(2, "second")]

    roots = build_hierarchy(nodes)

    assert [r.id for r in roots] == [3, 1, 2]


def test_deep_sort_orders_every_level():
    nodes = [
        _node(1, "Root"),
        _node(2, "Child", parent_id=1, level=1),
        _node(3, "Grandchild z", parent_id=2, order=5, level=2),
        _node(4, "Grandchild a", parent_id=2, order=1, level=2),
    ]

    deep = build_hierarchy(nodes, deep=True)
    shallow = build_hierarchy(nodes, deep=False)

    assert [n.id for n in deep[0].children[0].children] == [4, 3]
    # Paginated path only orders roots and their direct children
    assert [n.id for n in shallow[0].children[0].children] == [3, 4]


def test_accepts_plain_dicts():
    roots = build_hierarchy(
        [
            {"id": 1, "name": "Root", "parent_id": None, "order": 0},
            {"id": 2, "name": "Leaf", "parent_id": 1, "order": 0, "level": 1},
        ]
    )

    assert len(roots) == 1
    assert roots[0].children[0].name == "Leaf"


def test_empty_input():
    assert build_hierarchy([]) == []
