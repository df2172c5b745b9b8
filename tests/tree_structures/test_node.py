from __future__ import annotations

import pytest

from bintree.node import DuplicateEntry, Node, is_leaf, new_node


def test_new_node_starts_detached_with_single_count() -> None:
    node = new_node(5, 3, payload="five")

    assert node.key == 5
    assert node.index == 3
    assert node.payload == "five"
    assert node.left is None and node.right is None
    assert node.duplicates == []
    assert node.count == 1


def test_add_duplicate_grows_count_in_insertion_order() -> None:
    node = new_node(7, payload="first")
    node.add_duplicate("second")
    node.add_duplicate("third")

    assert node.count == 3
    assert node.duplicates == [DuplicateEntry(7, "second"), DuplicateEntry(7, "third")]
    assert node.payloads() == ["first", "second", "third"]


def test_is_leaf_handles_children_and_none() -> None:
    parent = Node(2, left=Node(1, index=1))

    assert is_leaf(None)
    assert is_leaf(parent.left)
    assert not is_leaf(parent)


@pytest.mark.parametrize("key", ["invalid", 1.5, True, None])
def test_node_rejects_non_integer_keys(key: object) -> None:
    with pytest.raises(TypeError):
        Node(key)  # type: ignore[arg-type]


def test_node_rejects_negative_index() -> None:
    with pytest.raises(ValueError):
        Node(1, index=-1)


def test_node_rejects_boolean_index() -> None:
    with pytest.raises(TypeError):
        Node(1, index=True)


def test_negative_keys_are_allowed() -> None:
    assert new_node(-12).key == -12
