"""
Schemas - Proof Transport
File: proof.py

Purpose: JSON wire format for handing an inclusion proof to a verifier
in another process. The tree itself is never serialized.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from core.crypto.hashing import DIGEST_SIZE, ItemLike, from_hex, to_hex
from core.merkle.merkle_proofs import verify_merkle_proof, verify_proof
from core.merkle.merkle_tree import MerkleProof

from .errors import ProofFormatException


# Wire-format version written into every serialized proof
SCHEMA_VERSION = "v1"

# Versions this reader accepts
SUPPORTED_SCHEMA_VERSIONS: frozenset[str] = frozenset({SCHEMA_VERSION})


def _check_digest_hex(value: str) -> str:
    digest = from_hex(value)
    if len(digest) != DIGEST_SIZE:
        raise ValueError(
            f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}"
        )
    return to_hex(digest)


class InclusionProof(BaseModel):
    """
    Serializable inclusion proof.

    Digests are carried in their display form (lowercase hex, no prefix)
    and normalized on load.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: str = Field(default=SCHEMA_VERSION)
    root: str = Field(..., description="Root digest the proof is against (hex)")
    index: int = Field(..., ge=0, description="0-based leaf index")
    total_leaves: int = Field(..., ge=1, description="Leaf count of the committed list")
    leaf: str | None = Field(default=None, description="Leaf digest (hex), optional")
    siblings: list[str] = Field(
        default_factory=list,
        description="Sibling digests (hex), leaf-to-root order",
    )

    @field_validator("schema_version")
    @classmethod
    def _check_version(cls, value: str) -> str:
        if value not in SUPPORTED_SCHEMA_VERSIONS:
            raise ValueError(
                f"Unsupported proof format version {value!r}, "
                f"expected one of {sorted(SUPPORTED_SCHEMA_VERSIONS)}"
            )
        return value

    @field_validator("root", "leaf")
    @classmethod
    def _normalize_digest(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return _check_digest_hex(value)

    @field_validator("siblings")
    @classmethod
    def _normalize_siblings(cls, value: list[str]) -> list[str]:
        return [_check_digest_hex(v) for v in value]

    @model_validator(mode="after")
    def _check_index(self) -> "InclusionProof":
        if self.index >= self.total_leaves:
            raise ValueError(
                f"index {self.index} out of range for {self.total_leaves} leaves"
            )
        return self

    @classmethod
    def from_merkle_proof(cls, proof: MerkleProof) -> "InclusionProof":
        return cls(
            root=to_hex(proof.root),
            index=proof.index,
            total_leaves=proof.total_leaves,
            leaf=to_hex(proof.leaf),
            siblings=[to_hex(s) for s in proof.siblings],
        )

    def root_digest(self) -> bytes:
        return from_hex(self.root)

    def sibling_digests(self) -> list[bytes]:
        return [from_hex(s) for s in self.siblings]

    def to_merkle_proof(self) -> MerkleProof:
        """
        Convert to the in-memory proof type.

        Raises:
            ProofFormatException: If the leaf digest is missing
        """
        if self.leaf is None:
            raise ProofFormatException(
                "Proof has no leaf digest",
                details={"index": self.index},
            )
        return MerkleProof(
            root=self.root_digest(),
            leaf=from_hex(self.leaf),
            index=self.index,
            total_leaves=self.total_leaves,
            siblings=tuple(self.sibling_digests()),
        )

    def verify(self, item: ItemLike) -> bool:
        """Verify this proof against a data item."""
        if self.leaf is not None:
            return verify_merkle_proof(self.to_merkle_proof(), item)
        return verify_proof(
            self.root_digest(),
            item,
            self.sibling_digests(),
            self.index,
            self.total_leaves,
        )

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InclusionProof":
        """
        Load a proof from a decoded JSON object.

        Raises:
            ProofFormatException: If the data does not describe a valid proof
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ProofFormatException(
                f"Invalid inclusion proof: {e.error_count()} validation error(s)",
                details={"errors": [err["msg"] for err in e.errors()]},
            ) from e

    @classmethod
    def from_json(cls, text: str) -> "InclusionProof":
        """
        Load a proof from JSON text.

        Raises:
            ProofFormatException: If the text is not JSON or not a valid proof
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ProofFormatException(
                f"Proof is not valid JSON: {e}",
                details={"position": e.pos},
            ) from e

        if not isinstance(data, dict):
            raise ProofFormatException(
                "Proof JSON must be an object",
                details={"type": type(data).__name__},
            )
        return cls.from_dict(data)


__all__ = [
    "InclusionProof",
    "SCHEMA_VERSION",
    "SUPPORTED_SCHEMA_VERSIONS",
]
