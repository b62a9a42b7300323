"""
Leaf Encoding

leaf = keccak256(keccak256(abi_encode(account, amount)))

The second hash keeps leaves out of the 64-byte preimage space used by
internal nodes, so no internal node can be presented as a leaf.
"""
from __future__ import annotations

from core.crypto.hashing import keccak256
from core.schemas.canonical import encode_entitlement


def encode_leaf(account: str, amount: int) -> bytes:
    """Encode an (account, amount) entitlement as a 32-byte tree leaf."""
    return keccak256(keccak256(encode_entitlement(account, amount)))


__all__ = ["encode_leaf"]
