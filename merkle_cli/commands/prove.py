"""
CLI Prove Command

Build a tree over the given items and emit the inclusion proof for one index
as JSON (to a file with --out, otherwise stdout).

Usage:
    merkle prove --index 2 --item A --item B --item C --item D --out proof.json
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from pathlib import Path

from core.crypto.hashing import to_hex
from core.merkle import MerkleTree
from core.schemas.proof import InclusionProof
from merkle_cli.commands.items import collect_items


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def prove_cmd(args: Namespace) -> int:
    """
    Execute the prove command.

    Raises:
        EmptyInputError: If no items were given
        IndexOutOfRangeError: If --index is outside the item list
    """
    config = args.cli_config
    items = collect_items(args, encoding=config.item_encoding)

    tree = MerkleTree.build(items)
    proof = InclusionProof.from_merkle_proof(tree.prove(args.index))
    logger.info(
        "Generated proof for index %d of %d (root=%s, siblings=%d)",
        args.index, tree.num_leaves, to_hex(tree.root_digest()), len(proof.siblings),
    )

    payload = proof.to_json()
    if args.out:
        out_path = Path(args.out)
        out_path.write_text(payload + "\n", encoding="utf-8")
        print(f"Proof written to: {out_path}", file=sys.stderr)
    else:
        print(payload)

    return EXIT_SUCCESS
