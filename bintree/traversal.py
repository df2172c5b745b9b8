"""Read-only walks over a binary search tree.

All iterators use explicit stacks or queues instead of recursion.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, List, Optional, Tuple

from .node import Node


def iter_preorder(root: Optional[Node]) -> Iterator[Node]:
    """Yield the node, then its left subtree, then its right subtree."""

    stack: List[Node] = [root] if root is not None else []
    while stack:
        node = stack.pop()
        yield node
        if node.right is not None:
            stack.append(node.right)
        if node.left is not None:
            stack.append(node.left)


def iter_inorder(root: Optional[Node]) -> Iterator[Node]:
    """Yield nodes in ascending key order."""

    stack: List[Node] = []
    current = root
    while stack or current is not None:
        while current is not None:
            stack.append(current)
            current = current.left
        node = stack.pop()
        yield node
        current = node.right


def iter_reverse_inorder(root: Optional[Node]) -> Iterator[Node]:
    """Yield nodes in descending key order."""

    stack: List[Node] = []
    current = root
    while stack or current is not None:
        while current is not None:
            stack.append(current)
            current = current.right
        node = stack.pop()
        yield node
        current = node.left


def iter_postorder(root: Optional[Node]) -> Iterator[Node]:
    """Yield the left subtree, then the right subtree, then the node."""

    visited: List[Node] = []
    stack: List[Node] = [root] if root is not None else []
    while stack:
        node = stack.pop()
        visited.append(node)
        if node.left is not None:
            stack.append(node.left)
        if node.right is not None:
            stack.append(node.right)
    yield from reversed(visited)


def iter_levels(root: Optional[Node]) -> Iterator[List[Node]]:
    """Yield the nodes of each level from left to right."""

    level: List[Node] = [root] if root is not None else []
    while level:
        yield level
        level = [
            child
            for node in level
            for child in (node.left, node.right)
            if child is not None
        ]


def level_order_keys(root: Optional[Node]) -> List[Optional[int]]:
    """Return the level-order key sequence including ``None`` placeholders.

    Missing children of real nodes appear as ``None``; trailing placeholders
    are trimmed so the result describes the shape of the tree exactly.
    """

    if root is None:
        return []
    result: List[Optional[int]] = []
    queue: Deque[Optional[Node]] = deque([root])
    while queue:
        node = queue.popleft()
        if node is None:
            result.append(None)
            continue
        result.append(node.key)
        queue.append(node.left)
        queue.append(node.right)
    while result and result[-1] is None:
        result.pop()
    return result


def reindex(root: Optional[Node]) -> None:
    """Recompute every node's array index from its position below *root*."""

    stack: List[Tuple[Node, int]] = [(root, 0)] if root is not None else []
    while stack:
        node, index = stack.pop()
        node.index = index
        if node.left is not None:
            stack.append((node.left, 2 * index + 1))
        if node.right is not None:
            stack.append((node.right, 2 * index + 2))


__all__ = [
    "iter_inorder",
    "iter_levels",
    "iter_postorder",
    "iter_preorder",
    "iter_reverse_inorder",
    "level_order_keys",
    "reindex",
]
