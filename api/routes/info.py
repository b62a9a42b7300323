"""
Distributor API - Read-only Routes

Committed root, signing domain, token, and the digest an account signs.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from api.deps import get_airdrop
from api.models.responses import DigestResponse, DomainInfo, RootResponse, TokenResponse
from core.crypto.hashing import to_hex
from core.schemas.canonical import normalize_address, validate_amount
from orchestrator.distributor import MerkleAirdrop


router = APIRouter(tags=["distributor"])


@router.get("/root", response_model=RootResponse)
async def get_root(airdrop: MerkleAirdrop = Depends(get_airdrop)) -> RootResponse:
    """Return the committed root and the signing domain."""
    domain = airdrop.domain
    return RootResponse(
        merkle_root=to_hex(airdrop.get_root()),
        domain_separator=to_hex(airdrop.domain_separator()),
        domain=DomainInfo(
            name=domain.name,
            version=domain.version,
            chain_id=domain.chain_id,
            verifying_contract=domain.verifying_contract,
        ),
    )


@router.get("/token", response_model=TokenResponse)
async def get_token(airdrop: MerkleAirdrop = Depends(get_airdrop)) -> TokenResponse:
    """Return the token ledger the distributor pays from."""
    token = airdrop.get_token()
    return TokenResponse(
        address=token.address,
        name=getattr(token, "name", None),
        symbol=getattr(token, "symbol", None),
        distributor_balance=token.balance_of(airdrop.domain.verifying_contract),
    )


@router.get("/digest", response_model=DigestResponse)
async def get_digest(
    account: str = Query(..., description="Claiming account (0x-prefixed hex)"),
    amount: int = Query(..., ge=0, description="Entitled amount"),
    airdrop: MerkleAirdrop = Depends(get_airdrop),
) -> DigestResponse:
    """Return the typed-data digest ``account`` must sign to claim ``amount``."""
    account = normalize_address(account)
    validate_amount(amount)
    return DigestResponse(
        account=account,
        amount=amount,
        digest=to_hex(airdrop.message_digest(account, amount)),
    )
