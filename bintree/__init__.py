"""Keyed binary search tree with delete-by-reinsertion and pivot rebalancing."""

from .node import DuplicateEntry, Node, is_leaf, new_node
from .render import (
    describe_node,
    format_key,
    format_traversal,
    render_by_level,
    render_compact,
)
from .traversal import (
    iter_inorder,
    iter_levels,
    iter_postorder,
    iter_preorder,
    iter_reverse_inorder,
    level_order_keys,
    reindex,
)
from .tree import (
    BinaryTree,
    DetachedEntry,
    PivotStrategy,
    delete_node,
    find_node,
    flatten_preorder,
    free_tree,
    get_height,
    insert_node,
    is_balanced,
    rebalance,
    reinsert_entries,
)

__all__ = [
    "BinaryTree",
    "DetachedEntry",
    "DuplicateEntry",
    "Node",
    "PivotStrategy",
    "delete_node",
    "describe_node",
    "find_node",
    "flatten_preorder",
    "format_key",
    "format_traversal",
    "free_tree",
    "get_height",
    "insert_node",
    "is_balanced",
    "is_leaf",
    "iter_inorder",
    "iter_levels",
    "iter_postorder",
    "iter_preorder",
    "iter_reverse_inorder",
    "level_order_keys",
    "new_node",
    "rebalance",
    "reindex",
    "reinsert_entries",
    "render_by_level",
    "render_compact",
]
