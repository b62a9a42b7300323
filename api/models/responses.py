"""
Distributor API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.events import ClaimEvent
from core.schemas.claims import ClaimReceipt
from core.schemas.verification import CheckResult


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "merkle-airdrop-api"
    version: str = "v1"


class DomainInfo(BaseModel):
    """Signing domain of the distributor."""

    name: str
    version: str
    chain_id: int
    verifying_contract: str


class RootResponse(BaseModel):
    """Response for GET /root endpoint."""

    ok: bool = True
    merkle_root: str = Field(..., description="Committed entitlement root")
    domain_separator: str = Field(..., description="EIP-712 domain separator")
    domain: DomainInfo


class TokenResponse(BaseModel):
    """Response for GET /token endpoint."""

    ok: bool = True
    address: str = Field(..., description="Token ledger address")
    name: str | None = None
    symbol: str | None = None
    distributor_balance: int = Field(
        ...,
        description="Amount still held by the distributor for payouts",
    )


class DigestResponse(BaseModel):
    """Response for GET /digest endpoint."""

    ok: bool = True
    account: str
    amount: int
    digest: str = Field(..., description="Typed-data digest the account must sign")


class ClaimStatusResponse(BaseModel):
    """Response for GET /claims/{account} endpoint."""

    ok: bool = True
    account: str
    claimed: bool
    events: list[ClaimEvent] = Field(default_factory=list)


class ClaimResponse(BaseModel):
    """Response for POST /claim endpoint."""

    ok: bool = True
    receipt: ClaimReceipt


class ClaimCheckResponse(BaseModel):
    """Response for POST /claim/check endpoint."""

    ok: bool = Field(..., description="Whether a real claim would pass every check")
    checks: list[CheckResult] = Field(default_factory=list)
    error: dict[str, Any] | None = Field(
        default=None,
        description="The rejection a real claim would hit first",
    )


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
