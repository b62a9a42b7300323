"""
Distributor API - Claim Routes

Submit claims, dry-run them, and look up claim status.

Handlers are plain ``def`` so FastAPI runs them in its threadpool; the
distributor serializes claims per account with blocking locks.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import get_airdrop
from api.models.responses import ClaimCheckResponse, ClaimResponse, ClaimStatusResponse
from core.schemas.canonical import normalize_address
from core.schemas.claims import ClaimRequest
from orchestrator.distributor import MerkleAirdrop


logger = logging.getLogger(__name__)

router = APIRouter(tags=["claims"])


@router.post("/claim", response_model=ClaimResponse)
def submit_claim(
    request: ClaimRequest,
    airdrop: MerkleAirdrop = Depends(get_airdrop),
) -> ClaimResponse:
    """
    Submit a claim.

    Anyone may submit; the signature must come from ``account``.
    Rejections are mapped to HTTP statuses by api.errors.
    """
    receipt = airdrop.submit(request)
    return ClaimResponse(receipt=receipt)


@router.post("/claim/check", response_model=ClaimCheckResponse)
def check_claim(
    request: ClaimRequest,
    airdrop: MerkleAirdrop = Depends(get_airdrop),
) -> ClaimCheckResponse:
    """Run every claim check without changing any state."""
    result = airdrop.check_claim(
        request.account,
        request.amount,
        request.proof_bytes(),
        request.signature_bytes(),
    )
    return ClaimCheckResponse(
        ok=result.ok,
        checks=result.checks,
        error=result.error.model_dump(mode="json") if result.error else None,
    )


@router.get("/claims/{account}", response_model=ClaimStatusResponse)
def claim_status(
    account: str,
    airdrop: MerkleAirdrop = Depends(get_airdrop),
) -> ClaimStatusResponse:
    """Return whether ``account`` has claimed, with its claim event if any."""
    account = normalize_address(account)
    return ClaimStatusResponse(
        account=account,
        claimed=airdrop.has_claimed(account),
        events=airdrop.events.events_for(account),
    )
