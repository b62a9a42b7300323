"""
Signature Unit Tests
Tests for core/crypto/signatures.py

Tests:
- Address derivation from known private keys
- sign_digest / recover_address agreement
- Only the {27, 28} v convention
- Rejection of malformed, out-of-range, and high-s signatures
"""
import pytest

from core.crypto.hashing import keccak256
from core.crypto.signatures import (
    SECP256K1_N,
    SIGNATURE_SIZE,
    address_from_private_key,
    is_valid_signature,
    join_signature,
    recover_address,
    sign_digest,
    split_signature,
)


KEY = keccak256(b"signer")
OTHER_KEY = keccak256(b"someone else")
DIGEST = keccak256(b"claim digest")


class TestAddressDerivation:
    """Tests for address_from_private_key()."""

    def test_private_key_one_known_address(self):
        key = (1).to_bytes(32, "big")
        assert address_from_private_key(key) == "0x7e5f4552091a69125d5dfcb7b8c2659029395bdf"

    def test_address_is_lowercase_hex(self):
        address = address_from_private_key(KEY)
        assert address.startswith("0x")
        assert len(address) == 42
        assert address == address.lower()


class TestSignAndRecover:
    """Tests for sign_digest() and recover_address()."""

    def test_signature_size(self):
        assert len(sign_digest(DIGEST, KEY)) == SIGNATURE_SIZE

    def test_v_is_27_or_28(self):
        assert split_signature(sign_digest(DIGEST, KEY)).v in (27, 28)

    def test_recovers_signer(self):
        signature = sign_digest(DIGEST, KEY)
        assert recover_address(DIGEST, signature) == address_from_private_key(KEY)

    def test_raw_recovery_id_rejected(self):
        parts = split_signature(sign_digest(DIGEST, KEY))
        signature = join_signature(parts.v - 27, parts.r, parts.s)
        assert recover_address(DIGEST, signature) is None

    def test_is_valid_signature_accepts_checksum_case(self):
        signature = sign_digest(DIGEST, KEY)
        account = address_from_private_key(KEY)
        assert is_valid_signature(account.upper().replace("0X", "0x"), DIGEST, signature)

    def test_other_signer_rejected(self):
        signature = sign_digest(DIGEST, OTHER_KEY)
        assert not is_valid_signature(address_from_private_key(KEY), DIGEST, signature)

    def test_other_digest_rejected(self):
        signature = sign_digest(DIGEST, KEY)
        other = keccak256(b"different digest")
        assert not is_valid_signature(address_from_private_key(KEY), other, signature)

    def test_sign_rejects_short_digest(self):
        with pytest.raises(ValueError, match="32 bytes"):
            sign_digest(b"short", KEY)


class TestMalformedSignatures:
    """Malformed signatures are rejected without raising."""

    def test_wrong_length(self):
        signature = sign_digest(DIGEST, KEY)
        assert recover_address(DIGEST, signature[:64]) is None
        assert recover_address(DIGEST, signature + b"\x00") is None

    def test_split_rejects_wrong_length(self):
        with pytest.raises(ValueError, match="65 bytes"):
            split_signature(b"\x00" * 64)

    def test_bad_v(self):
        parts = split_signature(sign_digest(DIGEST, KEY))
        assert recover_address(DIGEST, join_signature(29, parts.r, parts.s)) is None

    def test_zero_r(self):
        parts = split_signature(sign_digest(DIGEST, KEY))
        assert recover_address(DIGEST, join_signature(parts.v, 0, parts.s)) is None

    def test_zero_s(self):
        parts = split_signature(sign_digest(DIGEST, KEY))
        assert recover_address(DIGEST, join_signature(parts.v, parts.r, 0)) is None

    def test_r_at_curve_order(self):
        parts = split_signature(sign_digest(DIGEST, KEY))
        assert recover_address(DIGEST, join_signature(parts.v, SECP256K1_N, parts.s)) is None

    def test_high_s_rejected(self):
        """The malleable twin (n - s, flipped v) is rejected."""
        parts = split_signature(sign_digest(DIGEST, KEY))
        flipped_v = 28 if parts.v == 27 else 27
        twin = join_signature(flipped_v, parts.r, SECP256K1_N - parts.s)
        assert recover_address(DIGEST, twin) is None
        assert not is_valid_signature(address_from_private_key(KEY), DIGEST, twin)

    def test_all_zero_signature(self):
        assert not is_valid_signature(
            address_from_private_key(KEY), DIGEST, b"\x00" * SIGNATURE_SIZE
        )

    def test_short_digest_returns_none(self):
        signature = sign_digest(DIGEST, KEY)
        assert recover_address(b"\x00" * 31, signature) is None
