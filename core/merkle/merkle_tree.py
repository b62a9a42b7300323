"""
Merkle Tree Implementation
Sorted-pair Merkle tree construction, proof generation, and verification.

This module provides:
- Deterministic Merkle root computation
- Merkle proof generation for any leaf index
- Merkle proof verification against a committed root
- Standard padding rule for odd number of nodes

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = keccak256(keccak256(abi_encode(account, amount)))
   - Implemented via core.merkle.leaves.encode_leaf()
2. Parent hashing: parent = keccak256(min(a, b) + max(a, b))
   - Pairs are sorted byte-wise, so proofs carry no left/right flags
3. Padding rule: Duplicate last node if odd number at any level
4. Empty leaves: build_merkle_root([]) returns keccak256(b"")
5. Single leaf: root = leaf (the leaf hash itself)

Determinism Notes:
- No randomness or non-deterministic ordering
- build_merkle_root/build_merkle_proof trust input leaf order;
  EntitlementTree sorts leaves before building
- Sibling order in a proof is significant: each sibling belongs to one level
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.crypto.hashing import DIGEST_SIZE, hash_concat, keccak256


# Empty tree sentinel: keccak256 of empty bytes
EMPTY_TREE_ROOT: bytes = keccak256(b"")


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle inclusion proof for a single leaf.

    Attributes:
        leaf: The leaf hash being proven (32 bytes)
        siblings: Sibling hashes from bottom to top of tree
        root: The Merkle root this proof is against
    """
    leaf: bytes
    siblings: list[bytes]
    root: bytes

    def verify(self) -> bool:
        """Check this proof against its own root."""
        return verify_merkle_proof(self.siblings, self.root, self.leaf)


def merkle_parent(a: bytes, b: bytes) -> bytes:
    """
    Compute the parent hash of two child nodes.

    The pair is sorted before hashing, so parent(a, b) == parent(b, a).

    Returns:
        Parent hash (32 bytes)
    """
    if a <= b:
        return hash_concat(a, b)
    return hash_concat(b, a)


def process_proof(proof_path: Sequence[bytes], leaf: bytes) -> bytes:
    """
    Fold a proof path over a leaf, returning the reconstructed root.

    An empty path returns the leaf itself.
    """
    computed = leaf
    for sibling in proof_path:
        computed = merkle_parent(computed, sibling)
    return computed


def verify_merkle_proof(
    proof_path: Sequence[bytes],
    root: bytes,
    leaf: bytes,
) -> bool:
    """
    Verify that ``leaf`` is included under ``root``.

    Fails closed: any node that is not a 32-byte digest makes the proof
    invalid rather than raising. Pure function, safe to call speculatively.

    Args:
        proof_path: Sibling hashes, bottom-up
        root: Committed Merkle root
        leaf: Encoded leaf

    Returns:
        True if the reconstructed root equals ``root``
    """
    if len(leaf) != DIGEST_SIZE or len(root) != DIGEST_SIZE:
        return False
    for sibling in proof_path:
        if not isinstance(sibling, (bytes, bytearray)) or len(sibling) != DIGEST_SIZE:
            return False
    return process_proof(proof_path, leaf) == root


def _next_level(level: list[bytes]) -> list[bytes]:
    if len(level) % 2 == 1:
        level.append(level[-1])
    return [merkle_parent(level[i], level[i + 1]) for i in range(0, len(level), 2)]


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Build a Merkle root from a sequence of leaf hashes.

    Padding Rule: Duplicate last node at each level if odd.
    Example: [a, b, c] -> [a, b, c, c] -> [parent(a,b), parent(c,c)]

    Args:
        leaves: Sequence of 32-byte leaf hashes. Order matters and is preserved.

    Returns:
        32-byte Merkle root
    """
    if len(leaves) == 0:
        return EMPTY_TREE_ROOT

    if len(leaves) == 1:
        return leaves[0]

    current_level: list[bytes] = list(leaves)
    while len(current_level) > 1:
        current_level = _next_level(current_level)

    return current_level[0]


def build_merkle_proof(leaves: Sequence[bytes], index: int) -> MerkleProof:
    """
    Generate a Merkle proof for the leaf at the given index.

    Args:
        leaves: Sequence of leaf hashes
        index: 0-based index of the leaf to prove

    Returns:
        MerkleProof with leaf, siblings (bottom-up), and root

    Raises:
        IndexError: If index is out of range
        ValueError: If leaves is empty
    """
    if len(leaves) == 0:
        raise ValueError("Cannot generate proof for empty leaf list")

    if index < 0 or index >= len(leaves):
        raise IndexError(
            f"Leaf index {index} out of range for {len(leaves)} leaves"
        )

    siblings: list[bytes] = []
    current_level: list[bytes] = list(leaves)
    current_index = index

    while len(current_level) > 1:
        if len(current_level) % 2 == 1:
            current_level.append(current_level[-1])

        # XOR with 1 flips to the other node of the pair
        siblings.append(current_level[current_index ^ 1])

        current_level = _next_level(current_level)
        current_index = current_index // 2

    return MerkleProof(
        leaf=leaves[index],
        siblings=siblings,
        root=current_level[0],
    )


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a Merkle tree with given number of leaves.

    Depth is the number of levels from leaves to root (inclusive).
    A single leaf has depth 1, two leaves have depth 2, etc.
    """
    if num_leaves == 0:
        return 0
    if num_leaves == 1:
        return 1

    depth = 1
    n = num_leaves
    while n > 1:
        if n % 2 == 1:
            n += 1
        n = n // 2
        depth += 1

    return depth


__all__ = [
    "EMPTY_TREE_ROOT",
    "MerkleProof",
    "merkle_parent",
    "process_proof",
    "verify_merkle_proof",
    "build_merkle_root",
    "build_merkle_proof",
    "compute_tree_depth",
]
