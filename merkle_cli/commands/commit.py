"""
CLI Commit Command

Build a tree over the given items and print the root digest.

Usage:
    merkle commit --item A --item B --item C [--json]
    merkle commit --lines items.txt
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass
from typing import Any

from core.crypto.hashing import to_hex
from core.merkle import MerkleTree
from merkle_cli.commands.items import collect_items


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class CommitSummary:
    """Summary of a commitment for CLI output."""
    root: str = ""
    num_leaves: int = 0
    height: int = 0
    leaves: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if d["leaves"] is None:
            del d["leaves"]
        return d


def build_summary(tree: MerkleTree, show_leaves: bool = False) -> CommitSummary:
    return CommitSummary(
        root=to_hex(tree.root_digest()),
        num_leaves=tree.num_leaves,
        height=tree.height,
        leaves=[to_hex(d) for d in tree.leaf_digests()] if show_leaves else None,
    )


def print_summary_human(summary: CommitSummary) -> None:
    """Print summary in human-readable format."""
    print(f"root: {summary.root}")
    print(f"leaves: {summary.num_leaves}")
    print(f"height: {summary.height}")
    if summary.leaves:
        for i, leaf in enumerate(summary.leaves):
            print(f"  [{i}] {leaf}")


def commit_cmd(args: Namespace) -> int:
    """
    Execute the commit command.

    Raises:
        EmptyInputError: If no items were given
    """
    config = args.cli_config
    items = collect_items(args, encoding=config.item_encoding)

    logger.info("Committing to %d items", len(items))
    tree = MerkleTree.build(items)
    summary = build_summary(tree, show_leaves=args.show_leaves)

    if args.json or config.default_output_format == "json":
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS
