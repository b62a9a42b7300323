"""
Claim Ledger Module

Per-account at-most-once claim bookkeeping.
"""

from .claim_ledger import ClaimLedger, ClaimSlot

__all__ = [
    "ClaimLedger",
    "ClaimSlot",
]
