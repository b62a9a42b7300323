"""
Merkle Proofs for Entitlements
Entitlement-level wrappers around the core Merkle tree functions.

This module provides:
- EntitlementTree: Build the committed tree over an entitlement list and
  produce per-account proofs (off-chain distribution tooling)
- MerkleProver: Generate proofs for leaves
- MerkleVerifier: Verify proofs against a committed root
"""
from __future__ import annotations

from typing import Any, Iterable, Sequence

from core.crypto.hashing import to_hex
from core.merkle.leaves import encode_leaf
from core.merkle.merkle_tree import (
    MerkleProof,
    build_merkle_proof,
    build_merkle_root,
    verify_merkle_proof,
)
from core.schemas.claims import Entitlement


class EntitlementTree:
    """
    Merkle tree over a fixed entitlement set.

    Leaves are sorted byte-wise before building so the root depends only on
    the set of entitlements, not on input order. Each account may appear once.

    Example:
        >>> tree = EntitlementTree([Entitlement(account=alice, amount=100)])
        >>> proof = tree.proof_for(alice)
        >>> MerkleVerifier.verify(proof.siblings, tree.root, proof.leaf)
        True
    """

    def __init__(self, entitlements: Iterable[Entitlement]) -> None:
        entries = list(entitlements)
        if not entries:
            raise ValueError("Cannot build a tree from an empty entitlement list")

        seen: set[str] = set()
        for entry in entries:
            if entry.account in seen:
                raise ValueError(f"Duplicate account in entitlements: {entry.account}")
            seen.add(entry.account)

        keyed = sorted(
            ((encode_leaf(e.account, e.amount), e) for e in entries),
            key=lambda pair: pair[0],
        )
        self._leaves: list[bytes] = [leaf for leaf, _ in keyed]
        self._entitlements: list[Entitlement] = [e for _, e in keyed]
        self._index: dict[str, int] = {
            e.account: i for i, e in enumerate(self._entitlements)
        }
        self._root = build_merkle_root(self._leaves)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, int]]) -> "EntitlementTree":
        return cls(Entitlement(account=a, amount=v) for a, v in pairs)

    @property
    def root(self) -> bytes:
        return self._root

    @property
    def leaves(self) -> list[bytes]:
        return list(self._leaves)

    def __len__(self) -> int:
        return len(self._leaves)

    def __contains__(self, account: str) -> bool:
        return account.lower() in self._index

    def entitlement_for(self, account: str) -> Entitlement:
        """Look up an account's entitlement; raises KeyError if absent."""
        return self._entitlements[self._index[account.lower()]]

    def proof_for(self, account: str) -> MerkleProof:
        """Inclusion proof for an account's leaf; raises KeyError if absent."""
        return build_merkle_proof(self._leaves, self._index[account.lower()])

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable distribution file: root plus per-account proofs."""
        claims: dict[str, Any] = {}
        total = 0
        for i, entry in enumerate(self._entitlements):
            proof = build_merkle_proof(self._leaves, i)
            total += entry.amount
            claims[entry.account] = {
                "index": i,
                "amount": str(entry.amount),
                "leaf": to_hex(proof.leaf),
                "proof": [to_hex(s) for s in proof.siblings],
            }
        return {
            "merkle_root": to_hex(self._root),
            "token_total": str(total),
            "claims": claims,
        }


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Provides static methods for proof generation from pre-hashed leaves
    or raw entitlements.
    """

    @staticmethod
    def prove(leaves: Sequence[bytes], index: int) -> MerkleProof:
        """
        Generate a Merkle proof for the leaf at the given index.

        Raises:
            IndexError: If index is out of range
            ValueError: If leaves is empty
        """
        return build_merkle_proof(leaves, index)

    @staticmethod
    def compute_root(leaves: Sequence[bytes]) -> bytes:
        """Compute the Merkle root for a sequence of leaves."""
        return build_merkle_root(leaves)

    @staticmethod
    def compute_root_from_entitlements(entitlements: Iterable[Entitlement]) -> bytes:
        """Compute the committed root of an entitlement set."""
        return EntitlementTree(entitlements).root


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Stateless; every method is a pure function of its inputs.
    """

    @staticmethod
    def verify(proof_path: Sequence[bytes], root: bytes, leaf: bytes) -> bool:
        """True iff ``leaf`` folds up ``proof_path`` to ``root``."""
        return verify_merkle_proof(proof_path, root, leaf)

    @staticmethod
    def verify_entitlement(
        account: str,
        amount: int,
        proof_path: Sequence[bytes],
        root: bytes,
    ) -> bool:
        """Encode the entitlement as a leaf and verify it under ``root``."""
        return verify_merkle_proof(proof_path, root, encode_leaf(account, amount))


__all__ = [
    "EntitlementTree",
    "MerkleProver",
    "MerkleVerifier",
]
