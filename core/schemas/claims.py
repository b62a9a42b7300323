"""
Schemas & Canonicalization
File: claims.py

Purpose: Wire models for entitlements, claim requests, and claim receipts.
Accounts are normalized to lowercase hex on the way in so every
downstream digest is computed over one canonical form.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.crypto.hashing import DIGEST_SIZE, from_hex, to_hex

from .canonical import normalize_address, validate_amount
from .errors import CanonicalizationException

SIGNATURE_SIZE = 65


def _account_field(value: Any) -> str:
    try:
        return normalize_address(value)
    except CanonicalizationException as e:
        raise ValueError(e.message) from e


def _amount_field(value: Any) -> int:
    try:
        return validate_amount(value)
    except CanonicalizationException as e:
        raise ValueError(e.message) from e


class Entitlement(BaseModel):
    """One (account, amount) pair committed under the Merkle root."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    account: str = Field(..., description="0x-prefixed 20-byte account address")
    amount: int = Field(..., description="Unsigned 256-bit token amount")

    @field_validator("account", mode="before")
    @classmethod
    def validate_account(cls, value: Any) -> str:
        return _account_field(value)

    @field_validator("amount")
    @classmethod
    def validate_amount_range(cls, value: int) -> int:
        return _amount_field(value)


class ClaimRequest(BaseModel):
    """
    A single claim submission.

    The signature must come from ``account`` over the typed-data digest of
    ``(account, amount)``; the submitter may be anyone.
    """

    model_config = ConfigDict(extra="forbid")

    account: str = Field(..., description="Claiming account (0x-prefixed hex)")
    amount: int = Field(..., description="Entitled amount")
    proof: list[str] = Field(
        default_factory=list,
        description="Sibling digests from leaf to root (0x-prefixed hex)",
    )
    signature: str = Field(
        ...,
        description="65-byte r||s||v signature (0x-prefixed hex)",
    )

    @field_validator("account", mode="before")
    @classmethod
    def validate_account(cls, value: Any) -> str:
        return _account_field(value)

    @field_validator("amount")
    @classmethod
    def validate_amount_range(cls, value: int) -> int:
        return _amount_field(value)

    @field_validator("proof")
    @classmethod
    def validate_proof(cls, value: list[str]) -> list[str]:
        for i, node in enumerate(value):
            if len(from_hex(node)) != DIGEST_SIZE:
                raise ValueError(f"proof[{i}] must be a {DIGEST_SIZE}-byte digest")
        return [node.lower() for node in value]

    @field_validator("signature")
    @classmethod
    def validate_signature(cls, value: str) -> str:
        # Malformed r/s/v is left to the authenticator, which rejects it.
        if len(from_hex(value)) != SIGNATURE_SIZE:
            raise ValueError(f"signature must be {SIGNATURE_SIZE} bytes")
        return value.lower()

    def proof_bytes(self) -> list[bytes]:
        return [from_hex(node) for node in self.proof]

    def signature_bytes(self) -> bytes:
        return from_hex(self.signature)

    @classmethod
    def from_parts(
        cls,
        account: str,
        amount: int,
        proof: list[bytes],
        signature: bytes,
    ) -> "ClaimRequest":
        """Build a request from raw digests and signature bytes."""
        return cls(
            account=account,
            amount=amount,
            proof=[to_hex(node) for node in proof],
            signature=to_hex(signature),
        )


class ClaimReceipt(BaseModel):
    """Result of a successful claim."""

    model_config = ConfigDict(extra="forbid")

    account: str
    amount: int
    token: str = Field(..., description="Address of the token ledger paid from")
    merkle_root: str = Field(..., description="Committed root (0x-prefixed hex)")
    sequence: int = Field(..., description="Position of this claim's event in the log")
