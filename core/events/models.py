"""
Claim Event Models

Schema for the claim-completed notification emitted once per successful
claim, for external observers and indexers.

Key Design Principles:
1. (account, amount) plus root/token identify the claim
2. sequence orders events within one distributor instance
3. emitted_at is wall-clock metadata only
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ClaimEvent(BaseModel):
    """Emitted when a claim has been committed and paid out."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    account: str = Field(
        ...,
        description="Account that received the payout",
    )
    amount: int = Field(
        ...,
        description="Amount transferred",
    )
    merkle_root: str = Field(
        ...,
        description="Committed root of the distributor (0x-prefixed)",
    )
    token: str = Field(
        ...,
        description="Token ledger address paid from",
    )
    sequence: int = Field(
        ...,
        ge=0,
        description="Position in this distributor's event log",
    )
    emitted_at: Optional[datetime] = Field(
        default=None,
        description="Wall-clock emission time (non-committed)",
    )
