"""Insert, find, height and container behaviour of the binary search tree."""

from __future__ import annotations

import pytest

from bintree.traversal import iter_inorder, level_order_keys
from bintree.tree import (
    BinaryTree,
    delete_node,
    find_node,
    free_tree,
    get_height,
    insert_node,
)

SCENARIO_KEYS = [9, 4, 15, 1, 6, 12, 18]


def test_scenario_inorder_height_and_find() -> None:
    tree = BinaryTree(SCENARIO_KEYS)

    assert tree.keys() == [1, 4, 6, 9, 12, 15, 18]
    assert tree.height() == 3
    found = tree.find(6)
    assert found is not None and found.key == 6
    assert tree.find(99) is None


def test_functional_insert_returns_root_to_rebind() -> None:
    root = None
    for key in SCENARIO_KEYS:
        root = insert_node(root, key, payload=f"value-{key}")

    assert root is not None and root.key == 9
    node = find_node(root, 12)
    assert node is not None and node.payload == "value-12"
    assert get_height(root) == 3
    assert level_order_keys(root) == SCENARIO_KEYS


def test_insert_assigns_array_indices_from_parent() -> None:
    tree = BinaryTree(SCENARIO_KEYS)

    indices = {node.key: node.index for node in iter_inorder(tree.root)}
    assert indices == {9: 0, 4: 1, 15: 2, 1: 3, 6: 4, 12: 5, 18: 6}


def test_insert_returns_node_holding_key() -> None:
    tree = BinaryTree([10])
    node = tree.insert(3, payload="three")

    assert node is tree.find(3)
    assert node.index == 1


def test_duplicate_insert_increments_count_without_new_node() -> None:
    tree = BinaryTree([5, 7, 2])
    tree.insert(7, payload="again")

    node = tree.find(7)
    assert node is not None
    assert node.count == 2
    assert node.payloads() == [None, "again"]
    assert tree.node_count == 3
    assert len(tree) == 4
    assert tree.keys() == [2, 5, 7]


def test_repeated_insert_of_same_key_counts_every_entry() -> None:
    tree = BinaryTree()
    for _ in range(5):
        tree.insert(42)

    assert tree.node_count == 1
    root = tree.root
    assert root is not None and root.count == 5
    assert root.left is None and root.right is None


def test_height_of_empty_and_single_node_trees() -> None:
    assert get_height(None) == 0
    assert BinaryTree().height() == 0
    assert BinaryTree([3]).height() == 1


def test_height_is_bounded_by_node_count_but_not_logarithmic() -> None:
    tree = BinaryTree(range(10))

    assert tree.height() == tree.node_count == 10
    assert not tree.is_balanced()


def test_skewed_tree_does_not_exhaust_recursion() -> None:
    tree = BinaryTree(range(2000))

    assert tree.height() == 2000
    node = tree.find(1999)
    assert node is not None and node.key == 1999
    assert tree.keys() == list(range(2000))


def test_find_on_empty_tree_returns_none() -> None:
    assert find_node(None, 1) is None


def test_insert_rejects_non_integer_keys() -> None:
    tree = BinaryTree([1])
    with pytest.raises(TypeError):
        tree.insert("1")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        insert_node(None, 2.5)  # type: ignore[arg-type]


def test_lookup_and_delete_reject_boolean_keys() -> None:
    tree = BinaryTree([5, 1, 8])

    with pytest.raises(TypeError):
        tree.delete(True)
    with pytest.raises(TypeError):
        tree.find(True)
    with pytest.raises(TypeError):
        delete_node(tree.root, True)
    with pytest.raises(TypeError):
        find_node(tree.root, "5")

    assert tree.keys() == [1, 5, 8]
    assert len(tree) == 3


def test_contains_and_iteration() -> None:
    tree = BinaryTree(SCENARIO_KEYS)

    assert 6 in tree
    assert 7 not in tree
    assert "6" not in tree
    assert True not in tree
    assert list(tree) == sorted(SCENARIO_KEYS)


def test_parent_of_is_derived_from_structure() -> None:
    tree = BinaryTree(SCENARIO_KEYS)

    parent = tree.parent_of(6)
    assert parent is not None and parent.key == 4
    assert tree.parent_of(9) is None
    assert tree.parent_of(99) is None


def test_clear_unlinks_nodes_and_empties_tree() -> None:
    tree = BinaryTree(SCENARIO_KEYS)
    old_root = tree.root
    tree.insert(9)

    tree.clear()

    assert tree.root is None
    assert len(tree) == 0
    assert old_root is not None
    assert old_root.left is None and old_root.right is None
    assert old_root.duplicates == []


def test_free_tree_accepts_empty_tree() -> None:
    assert free_tree(None) is None
