"""
Hashing Utilities
Keccak-256 hashing and hex helpers for Merkle commitments and typed data.

This module provides:
- Keccak-256 hashing for raw bytes (original Keccak padding, not NIST SHA3)
- Hex encoding/decoding with 0x prefix
- Pair hashing for Merkle parents

Security/Determinism Notes:
- hashlib.sha3_256 is NOT keccak256; always go through keccak256() here
- Always hash raw bytes exactly as specified
- All operations are deterministic
"""
from __future__ import annotations

from Crypto.Hash import keccak as _keccak_mod


DIGEST_SIZE = 32


def keccak256(data: bytes) -> bytes:
    """
    Compute Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    h = _keccak_mod.new(digest_bits=256)
    h.update(data)
    return h.digest()


def hash_text(text: str) -> bytes:
    """Keccak-256 of the UTF-8 encoding of ``text`` (type strings, domain names)."""
    return keccak256(text.encode("utf-8"))


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def digest_from_hex(hex_string: str) -> bytes:
    """Decode a 0x-prefixed 32-byte digest, rejecting any other length."""
    data = from_hex(hex_string)
    if len(data) != DIGEST_SIZE:
        raise ValueError(
            f"Digest must be {DIGEST_SIZE} bytes, got {len(data)}"
        )
    return data


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences: keccak256(left + right).

    Order is preserved; callers needing commutative pair hashing sort first
    (see core.merkle.merkle_tree.merkle_parent).
    """
    return keccak256(left + right)


__all__ = [
    "DIGEST_SIZE",
    "keccak256",
    "hash_text",
    "to_hex",
    "from_hex",
    "digest_from_hex",
    "hash_concat",
]
