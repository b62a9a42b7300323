"""
Merkle Tree and Commitments
Sorted-pair Merkle tree construction + proof generation/verification.

This module provides:
- encode_leaf: Double-hashed leaf for an (account, amount) entitlement
- MerkleProof: Dataclass representing a Merkle inclusion proof
- build_merkle_root: Compute root from leaf hashes
- build_merkle_proof: Generate proof for a specific leaf
- verify_merkle_proof: Verify a proof path against a committed root
- EntitlementTree: Committed tree over an entitlement list

Canonical Commitment Rules:
1. Leaf hashing: keccak256(keccak256(abi_encode(account, amount)))
2. Parent hashing: keccak256(sorted(left, right))
3. Padding: Duplicate last node if odd number at any level
4. Empty tree: keccak256(b"")
5. Single leaf: root = leaf

Usage:
    from core.merkle import EntitlementTree, verify_merkle_proof, encode_leaf

    tree = EntitlementTree.from_pairs([(alice, 100), (bob, 50)])
    proof = tree.proof_for(alice)
    assert verify_merkle_proof(proof.siblings, tree.root, encode_leaf(alice, 100))
"""
from .leaves import encode_leaf

from .merkle_tree import (
    EMPTY_TREE_ROOT,
    MerkleProof,
    merkle_parent,
    process_proof,
    build_merkle_root,
    build_merkle_proof,
    verify_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    EntitlementTree,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleProof",
    "EMPTY_TREE_ROOT",
    # Core functions
    "encode_leaf",
    "merkle_parent",
    "process_proof",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Convenience classes
    "EntitlementTree",
    "MerkleProver",
    "MerkleVerifier",
]
