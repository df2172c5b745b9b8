"""Text renderers for binary search trees.

``render_by_level`` draws the first six levels the way a textbook figure
would, placing each node at a fixed column derived from its array index so
children sit below their parents.  Levels deeper than that no longer fit on a
reasonable line and are printed compactly, one space between nodes.

``render_compact`` is the narrow alternative the demo writes to its debug
log: each level on one line with ``·`` marking missing children.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from .node import Node, is_leaf
from .traversal import iter_levels

# Starting column of each array index in the six-level layout.  Index 63, the
# first slot of the seventh level, starts flush left; later indices are only
# separated by a single space.
_LEVEL_OFFSETS = (
    84,
    41, 131,
    19, 62, 112, 152,
    9, 31, 53, 75, 97, 119, 141, 163,
    3, 14, 25, 36, 47, 58, 69, 80, 91, 102, 113, 124, 135, 146, 157, 168,
    0, 5, 11, 16, 22, 27, 33, 38, 44, 49, 55, 60, 66, 71, 77, 82,
    88, 93, 99, 104, 110, 115, 121, 126, 132, 137, 143, 148, 154, 159, 165, 170,
    0,
)


def format_key(node: Node) -> str:
    return f"({node.key:02d})"


def render_by_level(root: Optional[Node]) -> str:
    """Render *root* level by level with textbook-style horizontal layout.

    Layout columns come from each node's ``index``, so the indices must be
    current (they are after insert, delete and rebalance; see ``reindex``).
    Levels are separated by a blank line.
    """

    if root is None:
        return "<empty>"

    lines: List[str] = []
    for level in iter_levels(root):
        parts: List[str] = []
        xpos = 0
        for node in level:
            if node.index < len(_LEVEL_OFFSETS):
                padding = _LEVEL_OFFSETS[node.index] - xpos
            else:
                padding = 1
            if padding > 0:
                parts.append(" " * padding)
                xpos += padding
            label = format_key(node)
            parts.append(label)
            xpos += len(label)
        lines.append("".join(parts))
    return "\n\n".join(lines)


def render_compact(root: Optional[Node]) -> str:
    """Render one line of keys per level with ``·`` for missing children.

    Output ends at the deepest level that still holds a real node.
    """

    if root is None:
        return "<empty>"

    lines: List[str] = []
    level: List[Optional[Node]] = [root]
    while any(node is not None for node in level):
        lines.append(
            " ".join("·" if node is None else str(node.key) for node in level)
        )
        level = [
            child
            for node in level
            for child in ((None, None) if node is None else (node.left, node.right))
        ]
    return "\n".join(lines)


def describe_node(node: Node) -> str:
    """Verbose one-line description: key, array index, count and leaf flag."""

    text = f"({node.key}) <{node.index}> count={node.count}"
    if is_leaf(node):
        text += " (leaf node)"
    return text


def format_traversal(nodes: Iterable[Node], *, verbose: bool = False) -> str:
    """Format a traversal as ``(k) (k) ...`` or one verbose line per node."""

    if verbose:
        return "\n".join(describe_node(node) for node in nodes)
    return " ".join(f"({node.key})" for node in nodes)


__all__ = [
    "describe_node",
    "format_key",
    "format_traversal",
    "render_by_level",
    "render_compact",
]
