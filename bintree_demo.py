"""Command line demonstration harness for the ``bintree`` package.

The harness seeds a tree with ``size // 2`` at the root (so random keys in
``[0, size)`` spread to both sides), inserts ``size - 1`` random keys, and then
prints the tree in several ways: its height, the level-by-level layout, a
search report for every key in range, and the in-order and reverse in-order
traversals.  Optional deletions and a rebalance run afterwards, followed by a
second report so the effect on the structure is visible.

Settings come from command line flags and, optionally, a YAML (or JSON) file
passed via ``--config``; flags win over file values.
"""

from __future__ import annotations

import argparse
import logging
import random
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence

import yaml
from rich.console import Console

from bintree import (
    BinaryTree,
    PivotStrategy,
    format_traversal,
    iter_inorder,
    iter_postorder,
    iter_preorder,
    iter_reverse_inorder,
    render_by_level,
    render_compact,
)

logger = logging.getLogger(__name__)

# Keys stay below 32 by default so the level layout fits on a wide terminal.
DEFAULT_SIZE = 18

_CONFIG_KEYS = frozenset({"size", "seed", "delete", "rebalance", "all_traversals"})


class DemoConfigError(ValueError):
    """Raised when the demo configuration is invalid."""


@dataclass(frozen=True)
class DemoConfig:
    """Settings for a demo run."""

    size: int = DEFAULT_SIZE
    seed: Optional[int] = None
    deletions: tuple[int, ...] = ()
    rebalance: Optional[PivotStrategy] = None
    all_traversals: bool = False


def _require_int(value: Any, label: str) -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise DemoConfigError(f"{label} must be an integer, got {value!r}")
    return value


def _require_size(value: Any) -> int:
    size = _require_int(value, "size")
    if size < 1:
        raise DemoConfigError("size must be a positive integer")
    return size


def parse_demo_config(payload: Any) -> DemoConfig:
    """Validate a decoded configuration mapping and build a :class:`DemoConfig`."""

    if payload is None:
        return DemoConfig()
    if not isinstance(payload, Mapping):
        raise DemoConfigError("Demo config must be a mapping of settings")

    unknown = sorted(str(key) for key in payload if key not in _CONFIG_KEYS)
    if unknown:
        raise DemoConfigError(f"Unknown demo config keys: {', '.join(unknown)}")

    size = _require_size(payload.get("size", DEFAULT_SIZE))

    seed = payload.get("seed")
    if seed is not None:
        seed = _require_int(seed, "seed")

    raw_deletions = payload.get("delete", [])
    if isinstance(raw_deletions, int) and not isinstance(raw_deletions, bool):
        raw_deletions = [raw_deletions]
    if not isinstance(raw_deletions, list):
        raise DemoConfigError("delete must be an integer or a list of integers")
    deletions = tuple(_require_int(item, "delete entries") for item in raw_deletions)

    strategy: Optional[PivotStrategy] = None
    raw_strategy = payload.get("rebalance")
    if raw_strategy is not None:
        try:
            strategy = PivotStrategy.parse(raw_strategy)
        except ValueError as exc:
            raise DemoConfigError(str(exc)) from exc

    all_traversals = payload.get("all_traversals", False)
    if not isinstance(all_traversals, bool):
        raise DemoConfigError("all_traversals must be a boolean")

    return DemoConfig(
        size=size,
        seed=seed,
        deletions=deletions,
        rebalance=strategy,
        all_traversals=all_traversals,
    )


def load_demo_config(path: Path) -> DemoConfig:
    """Load demo settings from a YAML or JSON file at *path*."""

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DemoConfigError(f"Unable to read demo config {path}: {exc}") from exc
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise DemoConfigError(f"Invalid YAML in demo config {path}: {exc}") from exc
    return parse_demo_config(payload)


def generate_keys(size: int, rng: random.Random) -> List[int]:
    """Draw ``size - 1`` keys uniformly from ``[0, size)``."""

    return [rng.randrange(size) for _ in range(size - 1)]


def build_demo_tree(size: int, keys: Iterable[int]) -> BinaryTree:
    """Root the tree at the middle of the key range, then insert *keys*."""

    tree = BinaryTree()
    tree.insert(size // 2)
    tree.bulk_insert(keys)
    return tree


def search_report(tree: BinaryTree, keys: Iterable[int]) -> List[str]:
    """Return one Rich-markup line per searched key."""

    lines: List[str] = []
    for key in keys:
        node = tree.find(key)
        if node is None:
            lines.append(
                f"searching for node ({key:02d})... [bold red]Not Found![/bold red]"
            )
        else:
            lines.append(
                f"searching for node ({key:02d})... [bold green]Found![/bold green]"
                f"  key = {node.key:02d}, count = {node.count}, index = {node.index}"
            )
    return lines


def report_tree(
    tree: BinaryTree,
    size: int,
    console: Console,
    *,
    all_traversals: bool = False,
) -> None:
    """Print height, layout, search results and traversals for *tree*."""

    logger.debug("Tree shape:\n%s", render_compact(tree.root))
    console.print(f"tree is {tree.height()} levels high")
    console.print("Print by Level Traversal:")
    console.print(render_by_level(tree.root))
    console.print()

    console.print("test our tree by searching for some values...")
    console.print()
    for line in search_report(tree, range(size)):
        console.print(line)
    console.print()

    traversals = [
        ("Inorder Traversal", iter_inorder),
        ("Reverse Inorder Traversal", iter_reverse_inorder),
    ]
    if all_traversals:
        traversals += [
            ("Preorder Traversal", iter_preorder),
            ("Postorder Traversal", iter_postorder),
        ]
    for title, walk in traversals:
        console.print(f"{title}:")
        console.print(format_traversal(walk(tree.root)))
        console.print()


def _apply_mutations(tree: BinaryTree, config: DemoConfig, console: Console) -> None:
    for key in config.deletions:
        if tree.delete(key):
            console.print(f"deleting node ({key:02d})... [bold green]Deleted![/bold green]")
        else:
            console.print(f"deleting node ({key:02d})... [bold red]Not Found![/bold red]")
    if config.rebalance is not None:
        tree.rebalance(config.rebalance)
        balanced = "Yes" if tree.is_balanced() else "No"
        console.print(
            f"rebalanced around a {config.rebalance.value} pivot, balanced? {balanced}"
        )
    console.print()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build a binary search tree from random keys and print it",
    )
    parser.add_argument(
        "-s",
        "--size",
        type=int,
        default=None,
        help=f"Number of keys (and key range) to generate (default: {DEFAULT_SIZE})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random key generator",
    )
    parser.add_argument(
        "--delete",
        type=int,
        action="append",
        dest="deletions",
        metavar="KEY",
        help="Delete KEY after the first report (repeatable)",
    )
    parser.add_argument(
        "--rebalance",
        choices=[strategy.value for strategy in PivotStrategy],
        default=None,
        help="Rebalance the tree after deletions using the given pivot",
    )
    parser.add_argument(
        "--all-traversals",
        action="store_true",
        help="Also print preorder and postorder traversals",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML or JSON file with demo settings",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity for diagnostic output.",
    )
    return parser


def _resolve_config(args: argparse.Namespace) -> DemoConfig:
    config = load_demo_config(args.config) if args.config is not None else DemoConfig()
    overrides: dict[str, Any] = {}
    if args.size is not None:
        overrides["size"] = _require_size(args.size)
    if args.seed is not None:
        overrides["seed"] = args.seed
    if args.deletions:
        overrides["deletions"] = tuple(args.deletions)
    if args.rebalance is not None:
        overrides["rebalance"] = PivotStrategy.parse(args.rebalance)
    if args.all_traversals:
        overrides["all_traversals"] = True
    return replace(config, **overrides)


def main(argv: Sequence[str] | None = None, *, console: Console | None = None) -> int:
    """Run the demonstration and return a process exit code."""

    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        config = _resolve_config(args)
    except DemoConfigError as exc:
        logger.error("Invalid demo configuration: %s", exc)
        return 2

    if console is None:
        console = Console(highlight=False, soft_wrap=True)

    rng = random.Random(config.seed)
    keys = generate_keys(config.size, rng)
    logger.info("Building demo tree of size %d with keys %s", config.size, keys)
    tree = build_demo_tree(config.size, keys)
    report_tree(tree, config.size, console, all_traversals=config.all_traversals)

    if config.deletions or config.rebalance is not None:
        _apply_mutations(tree, config, console)
        report_tree(tree, config.size, console, all_traversals=config.all_traversals)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
