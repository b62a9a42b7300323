"""
Schemas & Canonicalization
File: canonical.py

Purpose: Deterministic binary serialization for leaves and typed data.
Every value is encoded as one or more 32-byte big-endian words, matching
the ABI encoding used by EVM contracts, so digests computed here can be
reproduced by any independent client.

CRITICAL: All outputs from this module MUST be deterministic across runs.
"""

import re
from typing import Any

from .errors import CanonicalizationException

WORD_SIZE = 32
ADDRESS_SIZE = 20
UINT256_MAX = 2**256 - 1

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def normalize_address(address: Any) -> str:
    """
    Normalize an account address to lowercase 0x-prefixed hex.

    Checksum casing is accepted but not enforced.

    Raises:
        CanonicalizationException: If the value is not a 20-byte hex address.
    """
    if not isinstance(address, str):
        raise CanonicalizationException(
            message=f"Address must be a string, got {type(address).__name__}",
            details={"value": repr(address)},
        )
    candidate = address.strip()
    if not _ADDRESS_RE.match(candidate):
        raise CanonicalizationException(
            message=f"Invalid account address: {address!r}",
            details={"value": address},
        )
    return candidate.lower()


def address_bytes(address: str) -> bytes:
    """Return the raw 20 bytes of a (normalized or checksummed) address."""
    return bytes.fromhex(normalize_address(address)[2:])


def validate_amount(amount: Any) -> int:
    """
    Validate that ``amount`` is an unsigned 256-bit integer.

    Booleans are rejected even though they subclass int.
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise CanonicalizationException(
            message=f"Amount must be an integer, got {type(amount).__name__}",
            details={"value": repr(amount)},
        )
    if amount < 0 or amount > UINT256_MAX:
        raise CanonicalizationException(
            message="Amount out of uint256 range",
            details={"value": str(amount)},
        )
    return amount


def encode_uint256(value: int) -> bytes:
    """Encode an unsigned integer as one 32-byte big-endian word."""
    return validate_amount(value).to_bytes(WORD_SIZE, "big")


def encode_address(address: str) -> bytes:
    """Encode an address as one word, left-padded with zeros."""
    return address_bytes(address).rjust(WORD_SIZE, b"\x00")


def encode_bytes32(value: bytes) -> bytes:
    """Encode a fixed 32-byte value (digests, type hashes) as-is."""
    if len(value) != WORD_SIZE:
        raise CanonicalizationException(
            message=f"bytes32 value must be {WORD_SIZE} bytes, got {len(value)}",
        )
    return value


def encode_entitlement(account: str, amount: int) -> bytes:
    """Canonical serialization of an (account, amount) pair: two words."""
    return encode_address(account) + encode_uint256(amount)
