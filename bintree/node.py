"""Node representation for the keyed binary search tree.

Each distinct key owns exactly one ``Node``.  Repeated insertions of the same
key do not grow the tree; they append a :class:`DuplicateEntry` to the node's
``duplicates`` list so the extra payloads stay attached to the primary node in
insertion order without ever becoming searchable tree nodes themselves.

Nodes deliberately carry no parent reference.  Delete and rebalance detach and
rebuild whole subtrees, and a stored back-pointer would go stale the moment a
subtree moves.  Code that needs a parent derives it by walking from the root.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional


def _validate_key(key: object) -> None:
    if not isinstance(key, int) or isinstance(key, bool):
        raise TypeError("Node key must be an integer")


@dataclass(frozen=True, slots=True)
class DuplicateEntry:
    """An additional logical entry sharing the key of a primary node."""

    key: int
    payload: Any = None


@dataclass(slots=True)
class Node:
    """Binary search tree node.

    ``index`` is the position the node would occupy in a complete binary tree
    stored as an array (root ``0``, children ``2i + 1`` and ``2i + 2``).  It is
    assigned at insertion time and only used for display layout.
    """

    key: int
    index: int = 0
    payload: Any = None
    left: Optional["Node"] = None
    right: Optional["Node"] = None
    duplicates: List[DuplicateEntry] = field(default_factory=list)

    def __post_init__(self) -> None:
        _validate_key(self.key)
        if not isinstance(self.index, int) or isinstance(self.index, bool):
            raise TypeError("Node index must be an integer")
        if self.index < 0:
            raise ValueError("Node index must be non-negative")

    @property
    def count(self) -> int:
        """Number of logical entries stored under this key."""

        return 1 + len(self.duplicates)

    def add_duplicate(self, payload: Any = None) -> DuplicateEntry:
        """Append a same-key entry carrying *payload* and return it."""

        entry = DuplicateEntry(self.key, payload)
        self.duplicates.append(entry)
        return entry

    def payloads(self) -> List[Any]:
        """Return every payload stored under this key, oldest first."""

        return [self.payload, *(entry.payload for entry in self.duplicates)]


def new_node(key: int, index: int = 0, payload: Any = None) -> Node:
    """Create a detached node with no children and a count of one."""

    return Node(key, index=index, payload=payload)


def is_leaf(node: Optional[Node]) -> bool:
    """Return ``True`` when *node* has no children.

    ``None`` counts as a degenerate leaf so traversal and printing code can
    treat missing children uniformly.
    """

    if node is None:
        return True
    return node.left is None and node.right is None


__all__ = [
    "DuplicateEntry",
    "Node",
    "is_leaf",
    "new_node",
]
