"""
CLI Verify Command

Check a proof file against one item. Needs no access to the other items.

Usage:
    merkle verify proof.json --item C [--json]
    merkle verify proof.json --file item.bin
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from core.schemas.errors import ErrorCodes, ProofFormatException
from core.schemas.proof import InclusionProof


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    root: str = ""
    index: int = 0
    total_leaves: int = 0
    valid: bool = False
    code: str | None = None  # set when the proof does not verify

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_proof(path: Path) -> InclusionProof:
    """
    Read and decode a proof file.

    Raises:
        OSError: If the file cannot be read
        ProofFormatException: If the contents are not a valid proof
    """
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ProofFormatException(
            f"Proof file is not UTF-8 text: {path}",
            details={"position": e.start},
        ) from e
    return InclusionProof.from_json(text)


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        EXIT_SUCCESS if the proof is valid, EXIT_VERIFICATION_FAILED otherwise
    """
    config = args.cli_config
    proof_path = Path(args.proof_path)
    proof = load_proof(proof_path)

    if args.item is not None:
        item = args.item.encode(config.item_encoding)
    else:
        item = Path(args.file).read_bytes()

    valid = proof.verify(item)
    logger.info("Proof %s for index %d: %s", proof_path, proof.index, "valid" if valid else "INVALID")

    summary = VerifySummary(
        proof_path=str(proof_path),
        root=proof.root,
        index=proof.index,
        total_leaves=proof.total_leaves,
        valid=valid,
        code=None if valid else ErrorCodes.MERKLE_PROOF_INVALID,
    )

    if args.json or config.default_output_format == "json":
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"proof: {summary.proof_path}")
        print(f"root: {summary.root}")
        print(f"index: {summary.index} of {summary.total_leaves}")
        print(f"valid: {str(summary.valid).lower()}")
        if summary.code:
            print(f"code: {summary.code}")

    return EXIT_SUCCESS if valid else EXIT_VERIFICATION_FAILED
