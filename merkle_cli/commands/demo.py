"""
CLI Demo Command

Walk through the whole commitment protocol on a small item list:
commit, prove one index, verify the real item, then show that a
modified item is rejected with the same proof.

Usage:
    merkle demo [--index N] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from core.crypto.hashing import to_hex
from core.merkle import MerkleTree, verify_proof


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_VERIFICATION_FAILED = 2


@dataclass
class DemoReport:
    """Outcome of a demo run."""
    items: list[str] = field(default_factory=list)
    root: str = ""
    index: int = 0
    proof: list[str] = field(default_factory=list)
    valid_item_accepted: bool = False
    modified_item: str = ""
    modified_item_rejected: bool = False

    @property
    def ok(self) -> bool:
        return self.valid_item_accepted and self.modified_item_rejected

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["ok"] = self.ok
        return d


def run_demo(items: list[str], index: int, encoding: str = "utf-8") -> DemoReport:
    """
    Run the commit/prove/verify walkthrough.

    Raises:
        EmptyInputError: If items is empty
        IndexOutOfRangeError: If index is outside items
    """
    data = [item.encode(encoding) for item in items]
    tree = MerkleTree.build(data)
    root = tree.root_digest()
    proof = tree.generate_proof(index)

    modified = f"modified {items[index]}"
    report = DemoReport(
        items=list(items),
        root=to_hex(root),
        index=index,
        proof=[to_hex(s) for s in proof],
        valid_item_accepted=verify_proof(root, data[index], proof, index, len(data)),
        modified_item=modified,
        modified_item_rejected=not verify_proof(
            root, modified.encode(encoding), proof, index, len(data)
        ),
    )
    logger.debug("Demo finished: ok=%s", report.ok)
    return report


def print_report_human(report: DemoReport) -> None:
    """Print the walkthrough in human-readable format."""
    print("Merkle tree commitment demo")
    print("===========================")
    print()
    print(f"Building Merkle tree over {len(report.items)} items...")
    print(f"Root digest: {report.root}")
    print()
    print(f"Generating proof for item at index {report.index} ({report.items[report.index]!r})...")
    print(f"Proof contains {len(report.proof)} digests:")
    for i, digest in enumerate(report.proof, start=1):
        print(f"  digest {i}: {digest}")
    print()
    print("Verifying proof...")
    if report.valid_item_accepted:
        print("  ✓ Proof verified: the item is in the committed set.")
    else:
        print("  ✗ Proof verification failed!")
    print()
    print(f"Verifying the same proof with {report.modified_item!r}...")
    if report.modified_item_rejected:
        print("  ✓ Verification failed for the modified item, as expected.")
    else:
        print("  ✗ Verification wrongly succeeded!")


def demo_cmd(args: Namespace) -> int:
    """Execute the demo command."""
    config = args.cli_config
    index = args.index if args.index is not None else config.demo_index

    report = run_demo(config.demo_items, index, encoding=config.item_encoding)

    if args.json or config.default_output_format == "json":
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        print_report_human(report)

    return EXIT_SUCCESS if report.ok else EXIT_VERIFICATION_FAILED
