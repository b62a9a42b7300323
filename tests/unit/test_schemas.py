"""
Schema Unit Tests
Tests for core/schemas/claims.py and core/schemas/errors.py

Tests:
- Entitlement / ClaimRequest validation and normalization
- Error model <-> exception conversion
"""
import pytest
from pydantic import ValidationError

from core.crypto.hashing import keccak256
from core.schemas.claims import ClaimRequest, Entitlement
from core.schemas.errors import (
    AirdropError,
    AirdropException,
    AlreadyClaimedException,
    ClaimException,
    ErrorCodes,
    InvalidProofException,
    InvalidSignatureException,
    TransferFailedException,
)


ACCOUNT = "0x" + "ab" * 20
NODE = "0x" + "cd" * 32
SIGNATURE = "0x" + "01" * 65


class TestEntitlement:
    """Tests for Entitlement."""

    def test_normalizes_account(self):
        entry = Entitlement(account="0x" + "AB" * 20, amount=5)
        assert entry.account == ACCOUNT

    def test_rejects_bad_account(self):
        with pytest.raises(ValidationError):
            Entitlement(account="0x1234", amount=5)

    def test_rejects_negative_amount(self):
        with pytest.raises(ValidationError):
            Entitlement(account=ACCOUNT, amount=-1)

    def test_frozen(self):
        entry = Entitlement(account=ACCOUNT, amount=5)
        with pytest.raises(ValidationError):
            entry.amount = 6


class TestClaimRequest:
    """Tests for ClaimRequest."""

    def test_valid(self):
        request = ClaimRequest(account=ACCOUNT, amount=100, proof=[NODE], signature=SIGNATURE)
        assert request.proof_bytes() == [bytes.fromhex("cd" * 32)]
        assert request.signature_bytes() == bytes.fromhex("01" * 65)

    def test_amount_as_decimal_string(self):
        request = ClaimRequest.model_validate(
            {"account": ACCOUNT, "amount": "100", "proof": [], "signature": SIGNATURE}
        )
        assert request.amount == 100

    def test_empty_proof_allowed(self):
        request = ClaimRequest(account=ACCOUNT, amount=1, signature=SIGNATURE)
        assert request.proof == []

    def test_short_proof_node_rejected(self):
        with pytest.raises(ValidationError, match="proof"):
            ClaimRequest(account=ACCOUNT, amount=1, proof=["0x" + "cd" * 31], signature=SIGNATURE)

    def test_unprefixed_proof_node_rejected(self):
        with pytest.raises(ValidationError):
            ClaimRequest(account=ACCOUNT, amount=1, proof=["cd" * 32], signature=SIGNATURE)

    def test_short_signature_rejected(self):
        with pytest.raises(ValidationError, match="signature"):
            ClaimRequest(account=ACCOUNT, amount=1, signature="0x" + "01" * 64)

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError):
            ClaimRequest(account=ACCOUNT, amount=1, signature=SIGNATURE, nonce=1)

    def test_from_parts(self):
        node = keccak256(b"node")
        request = ClaimRequest.from_parts(ACCOUNT, 7, [node], b"\x02" * 65)
        assert request.proof_bytes() == [node]
        assert request.signature_bytes() == b"\x02" * 65


class TestErrors:
    """Tests for the error taxonomy."""

    @pytest.mark.parametrize("exc_type,code", [
        (AlreadyClaimedException, ErrorCodes.ALREADY_CLAIMED),
        (InvalidSignatureException, ErrorCodes.INVALID_SIGNATURE),
        (InvalidProofException, ErrorCodes.INVALID_PROOF),
        (TransferFailedException, ErrorCodes.TRANSFER_FAILED),
    ])
    def test_claim_exception_codes(self, exc_type, code):
        exc = exc_type("rejected", account=ACCOUNT)
        assert isinstance(exc, ClaimException)
        assert isinstance(exc, AirdropException)
        assert exc.code == code
        assert exc.details["account"] == ACCOUNT

    def test_round_trip_through_model(self):
        model = InvalidProofException("bad proof", account=ACCOUNT).to_error_model()
        assert isinstance(model, AirdropError)
        restored = model.to_exception()
        assert isinstance(restored, InvalidProofException)
        assert restored.message == "bad proof"

    def test_unknown_code_becomes_base_exception(self):
        exc = AirdropError(code="SOMETHING_ELSE", message="x").to_exception()
        assert type(exc) is AirdropException
        assert exc.code == "SOMETHING_ELSE"
