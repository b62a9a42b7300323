"""
secp256k1 Recoverable Signatures

Signature recovery and validation for claim authorization. Signatures are
65 bytes ``r || s || v`` over a 32-byte digest (no extra hashing).

Rejection rules (all yield "not authentic", never an exception from
``recover_address``/``is_valid_signature``):
- wrong length
- v not in {27, 28}
- r or s outside [1, n-1]
- s in the upper half of the curve order (malleable form)
- recovery failure inside libsecp256k1
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from coincurve import PrivateKey, PublicKey

from core.crypto.hashing import DIGEST_SIZE, keccak256


logger = logging.getLogger(__name__)

SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
SECP256K1_HALF_N = SECP256K1_N // 2

SIGNATURE_SIZE = 65


@dataclass(frozen=True)
class Signature:
    """A split recoverable signature."""
    v: int
    r: int
    s: int

    def to_bytes(self) -> bytes:
        return join_signature(self.v, self.r, self.s)


def split_signature(signature: bytes) -> Signature:
    """
    Split a 65-byte ``r || s || v`` signature into its components.

    Raises:
        ValueError: If the signature is not 65 bytes long
    """
    if len(signature) != SIGNATURE_SIZE:
        raise ValueError(
            f"Signature must be {SIGNATURE_SIZE} bytes, got {len(signature)}"
        )
    r = int.from_bytes(signature[0:32], "big")
    s = int.from_bytes(signature[32:64], "big")
    return Signature(v=signature[64], r=r, s=s)


def join_signature(v: int, r: int, s: int) -> bytes:
    """Pack (v, r, s) into the 65-byte ``r || s || v`` form."""
    return r.to_bytes(32, "big") + s.to_bytes(32, "big") + bytes([v])


def public_key_to_address(public_key: PublicKey) -> str:
    """Derive the 0x-prefixed lowercase account address of a public key."""
    uncompressed = public_key.format(compressed=False)
    return "0x" + keccak256(uncompressed[1:])[-20:].hex()


def address_from_private_key(private_key: bytes) -> str:
    """Account address controlled by a 32-byte secp256k1 private key."""
    return public_key_to_address(PrivateKey(private_key).public_key)


def sign_digest(digest: bytes, private_key: bytes) -> bytes:
    """
    Sign a 32-byte digest, returning ``r || s || v`` with v in {27, 28}.

    libsecp256k1 always produces low-s signatures, so the result passes
    recover_address() unchanged.
    """
    if len(digest) != DIGEST_SIZE:
        raise ValueError(f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}")
    raw = PrivateKey(private_key).sign_recoverable(digest, hasher=None)
    return raw[:64] + bytes([raw[64] + 27])


def _recovery_id(v: int) -> Optional[int]:
    if v in (27, 28):
        return v - 27
    return None


def recover_address(digest: bytes, signature: bytes) -> Optional[str]:
    """
    Recover the signing account from a digest and signature.

    Returns:
        The 0x-prefixed lowercase address, or None if the signature is
        malformed or does not recover.
    """
    if len(digest) != DIGEST_SIZE or len(signature) != SIGNATURE_SIZE:
        return None

    parts = split_signature(signature)
    recid = _recovery_id(parts.v)
    if recid is None:
        return None
    if not (0 < parts.r < SECP256K1_N):
        return None
    if not (0 < parts.s <= SECP256K1_HALF_N):
        return None

    try:
        public_key = PublicKey.from_signature_and_message(
            signature[:64] + bytes([recid]), digest, hasher=None
        )
    except Exception as e:  # coincurve raises ValueError/Exception variants
        logger.debug("Signature recovery failed: %s", e)
        return None
    return public_key_to_address(public_key)


def is_valid_signature(account: str, digest: bytes, signature: bytes) -> bool:
    """True iff ``signature`` over ``digest`` recovers to ``account``."""
    recovered = recover_address(digest, signature)
    if recovered is None:
        return False
    return recovered == account.lower()


__all__ = [
    "SECP256K1_N",
    "SIGNATURE_SIZE",
    "Signature",
    "split_signature",
    "join_signature",
    "public_key_to_address",
    "address_from_private_key",
    "sign_digest",
    "recover_address",
    "is_valid_signature",
]
