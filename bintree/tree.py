"""Keyed binary search tree operations.

The module exposes two layers:

* Functional operations over a root reference (``insert_node``,
  ``find_node``, ``get_height``, ``delete_node``, ``rebalance``).  Every
  mutating call returns the new root and callers must rebind their reference.
* ``BinaryTree`` – a small aggregate that owns the root, tracks the number of
  logical entries eagerly and offers the usual container protocol.

Deleting an internal node and rebalancing both work by flattening the affected
subtrees into a list of :class:`DetachedEntry` records (preorder) and feeding
those records back through the ordinary insert path.  The list is owned by the
call that builds it, so independent trees never share intermediate state.

Walks are iterative (explicit stacks or level lists) so heavily skewed trees
are bounded by memory rather than by the interpreter recursion limit.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
import logging
from operator import attrgetter
from typing import Any, Deque, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .node import DuplicateEntry, Node, _validate_key, is_leaf, new_node
from .traversal import iter_inorder, iter_postorder, iter_preorder

logger = logging.getLogger(__name__)


class PivotStrategy(str, Enum):
    """How :func:`rebalance` picks the new root."""

    PREORDER = "preorder"
    MEDIAN = "median"

    @classmethod
    def parse(cls, value: Union[str, "PivotStrategy"]) -> "PivotStrategy":
        """Return the strategy named by *value* (case-insensitive)."""

        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(strategy.value for strategy in cls)
            raise ValueError(
                f"Unknown pivot strategy {value!r}; expected one of: {choices}"
            ) from exc


@dataclass(frozen=True, slots=True)
class DetachedEntry:
    """Data extracted from a node that is about to be discarded."""

    key: int
    payload: Any = None
    duplicate_payloads: Tuple[Any, ...] = ()

    @classmethod
    def from_node(cls, node: Node) -> "DetachedEntry":
        return cls(
            node.key,
            node.payload,
            tuple(entry.payload for entry in node.duplicates),
        )

    @property
    def count(self) -> int:
        return 1 + len(self.duplicate_payloads)


# ----------------------------------------------------------------------
# Core operations
# ----------------------------------------------------------------------
def _insert(root: Optional[Node], key: int, payload: Any) -> Tuple[Node, Node]:
    """Insert *key* and return ``(root, node holding key)``."""

    _validate_key(key)
    if root is None:
        node = new_node(key, 0, payload)
        return node, node

    current = root
    while True:
        if key < current.key:
            if current.left is None:
                current.left = new_node(key, 2 * current.index + 1, payload)
                return root, current.left
            current = current.left
        elif key > current.key:
            if current.right is None:
                current.right = new_node(key, 2 * current.index + 2, payload)
                return root, current.right
            current = current.right
        else:
            current.add_duplicate(payload)
            return root, current


def insert_node(root: Optional[Node], key: int, payload: Any = None) -> Node:
    """Insert *key* below *root* and return the (possibly new) root.

    A key that is already present does not change the topology: the payload is
    appended to the existing node's duplicate list and its count grows by one.
    """

    root, _ = _insert(root, key, payload)
    return root


def find_node(root: Optional[Node], key: int) -> Optional[Node]:
    """Return the tree node holding *key* or ``None`` when absent."""

    _validate_key(key)
    current = root
    while current is not None:
        if key == current.key:
            return current
        current = current.left if key < current.key else current.right
    return None


def get_height(root: Optional[Node]) -> int:
    """Return the number of levels below and including *root*."""

    height = 0
    level: List[Node] = [root] if root is not None else []
    while level:
        height += 1
        level = [
            child
            for node in level
            for child in (node.left, node.right)
            if child is not None
        ]
    return height


def is_balanced(root: Optional[Node]) -> bool:
    """Return ``True`` when every subtree's children differ in height by <= 1."""

    heights: Dict[int, int] = {}
    for node in iter_postorder(root):
        left_height = heights.pop(id(node.left), 0) if node.left is not None else 0
        right_height = heights.pop(id(node.right), 0) if node.right is not None else 0
        if abs(left_height - right_height) > 1:
            return False
        heights[id(node)] = max(left_height, right_height) + 1
    return True


# ----------------------------------------------------------------------
# Flattening and reinsertion
# ----------------------------------------------------------------------
def flatten_preorder(*subtrees: Optional[Node]) -> List[DetachedEntry]:
    """Linearise *subtrees* (in argument order, each preorder) into entries."""

    entries: List[DetachedEntry] = []
    for subtree in subtrees:
        stack: List[Node] = [subtree] if subtree is not None else []
        while stack:
            node = stack.pop()
            entries.append(DetachedEntry.from_node(node))
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
    return entries


def reinsert_entries(
    root: Optional[Node], entries: Iterable[DetachedEntry]
) -> Optional[Node]:
    """Insert every entry (and its duplicates, in order) and return the root."""

    for entry in entries:
        root = insert_node(root, entry.key, entry.payload)
        for payload in entry.duplicate_payloads:
            root = insert_node(root, entry.key, payload)
    return root


def _node_from_entry(entry: DetachedEntry) -> Node:
    node = new_node(entry.key, 0, entry.payload)
    node.duplicates.extend(
        DuplicateEntry(entry.key, payload) for payload in entry.duplicate_payloads
    )
    return node


def free_tree(root: Optional[Node]) -> None:
    """Unlink every node below *root*; callers rebind their root to ``None``."""

    stack: List[Node] = [root] if root is not None else []
    while stack:
        node = stack.pop()
        if node.left is not None:
            stack.append(node.left)
        if node.right is not None:
            stack.append(node.right)
        node.left = None
        node.right = None
        node.duplicates.clear()
    return None


# ----------------------------------------------------------------------
# Delete
# ----------------------------------------------------------------------
def _locate(
    root: Optional[Node], key: int
) -> Tuple[Optional[Node], Optional[Node]]:
    """Return ``(parent, node)`` for *key*; ``node`` is ``None`` when absent."""

    _validate_key(key)
    parent: Optional[Node] = None
    current = root
    while current is not None and current.key != key:
        parent = current
        current = current.left if key < current.key else current.right
    return parent, current


def _detach(parent: Node, child: Node) -> None:
    if parent.left is child:
        parent.left = None
    elif parent.right is child:
        parent.right = None


def _rebuild_without_root(old_root: Node) -> Node:
    """Rebuild the tree after removing an internal root node."""

    left, right = old_root.left, old_root.right
    if left is not None:
        replacement = left
        entries = flatten_preorder(left.left, left.right, right)
    elif right is not None:
        replacement = right
        entries = flatten_preorder(right.left, right.right)
    else:
        raise ValueError(f"Root {old_root.key} has no child to promote")

    logger.debug(
        "Root %d removed; promoting %d and reinserting %d entries",
        old_root.key,
        replacement.key,
        len(entries),
    )
    new_root = _node_from_entry(DetachedEntry.from_node(replacement))
    # Inserting below a non-empty root never replaces it.
    reinsert_entries(new_root, entries)
    free_tree(old_root)
    return new_root


def delete_node(
    root: Optional[Node], key: int, *, all_entries: bool = False
) -> Tuple[Optional[Node], bool]:
    """Remove one logical entry for *key* and return ``(root, found)``.

    When the key carries duplicates only the most recent duplicate is dropped
    unless *all_entries* is set, in which case the whole node goes.  Removing a
    node with children reinserts both of its subtrees (preorder, left first);
    removing an internal root promotes its left child (or right child when
    there is no left one) and rebuilds the tree around it.
    """

    parent, target = _locate(root, key)
    if target is None:
        logger.debug("Delete skipped: key %r not present", key)
        return root, False

    if target.duplicates and not all_entries:
        target.duplicates.pop()
        logger.debug("Dropped duplicate of key %d (count now %d)", key, target.count)
        return root, True

    if is_leaf(target):
        if parent is None:
            logger.debug("Deleted root leaf %d; tree is now empty", key)
            free_tree(target)
            return None, True
        _detach(parent, target)
        free_tree(target)
        logger.debug("Deleted leaf %d below %d", key, parent.key)
        return root, True

    if parent is None:
        return _rebuild_without_root(target), True

    _detach(parent, target)
    entries = flatten_preorder(target.left, target.right)
    logger.debug(
        "Deleted internal node %d; reinserting %d entries", key, len(entries)
    )
    root = reinsert_entries(root, entries)
    free_tree(target)
    return root, True


# ----------------------------------------------------------------------
# Rebalance
# ----------------------------------------------------------------------
def _balanced_order(entries: Sequence[DetachedEntry]) -> List[DetachedEntry]:
    """Order sorted *entries* so that every midpoint precedes its halves."""

    ordered: List[DetachedEntry] = []
    ranges: Deque[Tuple[int, int]] = deque([(0, len(entries))])
    while ranges:
        low, high = ranges.popleft()
        if low >= high:
            continue
        middle = (low + high) // 2
        ordered.append(entries[middle])
        ranges.append((low, middle))
        ranges.append((middle + 1, high))
    return ordered


def rebalance(
    root: Optional[Node],
    strategy: Union[str, PivotStrategy] = PivotStrategy.PREORDER,
) -> Optional[Node]:
    """Rebuild the whole tree around a new pivot and return the new root.

    ``PREORDER`` takes the element at position ``n // 2`` of the preorder
    flattening and reinserts the rest in preorder; it does not guarantee a
    balanced result.  ``MEDIAN`` takes the true median key and reinserts the
    remaining entries midpoint-first, which yields minimum height.
    """

    strategy = PivotStrategy.parse(strategy)
    if root is None:
        return None

    entries = flatten_preorder(root)
    if strategy is PivotStrategy.MEDIAN:
        entries.sort(key=attrgetter("key"))
        ordered = _balanced_order(entries)
        pivot, remaining = ordered[0], ordered[1:]
    else:
        pivot = entries.pop(len(entries) // 2)
        remaining = entries

    logger.debug(
        "Rebalancing %d nodes around %d (%s pivot)",
        len(remaining) + 1,
        pivot.key,
        strategy.value,
    )
    new_root = _node_from_entry(pivot)
    new_root = reinsert_entries(new_root, remaining)
    free_tree(root)
    return new_root


# ----------------------------------------------------------------------
# Aggregate
# ----------------------------------------------------------------------
class BinaryTree:
    """Binary search tree owning its root reference."""

    __slots__ = ("root", "_size")

    def __init__(self, keys: Optional[Iterable[int]] = None) -> None:
        self.root: Optional[Node] = None
        self._size = 0
        if keys is not None:
            self.bulk_insert(keys)

    def insert(self, key: int, payload: Any = None) -> Node:
        """Insert *key* and return the tree node that now holds it."""

        self.root, node = _insert(self.root, key, payload)
        self._size += 1
        return node

    def bulk_insert(self, keys: Iterable[int]) -> None:
        """Insert each key in *keys* with no payload."""

        for key in list(keys):
            self.insert(key)

    def find(self, key: int) -> Optional[Node]:
        return find_node(self.root, key)

    def height(self) -> int:
        return get_height(self.root)

    def delete(self, key: int, *, all_entries: bool = False) -> bool:
        """Remove one entry for *key* (or all of them); report whether found."""

        node = find_node(self.root, key)
        removed = 0
        if node is not None:
            removed = node.count if all_entries else 1
        self.root, found = delete_node(self.root, key, all_entries=all_entries)
        if found:
            self._size -= removed
        return found

    def rebalance(
        self, strategy: Union[str, PivotStrategy] = PivotStrategy.PREORDER
    ) -> None:
        self.root = rebalance(self.root, strategy)

    def clear(self) -> None:
        self.root = free_tree(self.root)
        self._size = 0

    def parent_of(self, key: int) -> Optional[Node]:
        """Return the parent of the node holding *key* (``None`` for the root)."""

        parent, node = _locate(self.root, key)
        return parent if node is not None else None

    def is_balanced(self) -> bool:
        return is_balanced(self.root)

    def keys(self) -> List[int]:
        """Distinct keys in ascending order."""

        return [node.key for node in iter_inorder(self.root)]

    @property
    def node_count(self) -> int:
        """Number of tree nodes, i.e. distinct keys."""

        return sum(1 for _ in iter_preorder(self.root))

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[int]:
        for node in iter_inorder(self.root):
            yield node.key

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, int) or isinstance(key, bool):
            return False
        return find_node(self.root, key) is not None


__all__ = [
    "BinaryTree",
    "DetachedEntry",
    "PivotStrategy",
    "delete_node",
    "find_node",
    "flatten_preorder",
    "free_tree",
    "get_height",
    "insert_node",
    "is_balanced",
    "rebalance",
    "reinsert_entries",
]
