"""
Claim Orchestration

Wires the leaf encoder, Merkle verifier, message authenticator, claim
ledger, token ledger and event log into one claim entry point.

Public API:
- MerkleAirdrop: The distributor
- ClaimStage: Progress of a single claim request
"""

from orchestrator.distributor import ClaimStage, MerkleAirdrop


__all__ = [
    "ClaimStage",
    "MerkleAirdrop",
]
