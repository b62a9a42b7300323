"""
Test fixtures package for Merkle airdrop tests.

This package provides factory functions for creating test objects:
- common.py: Keys, addresses, entitlement trees, token ledgers, distributors

Usage:
    from fixtures.common import ALICE, ALICE_KEY, make_airdrop, make_claim

    def test_something():
        tree, airdrop = make_airdrop()
        airdrop.claim(*make_claim(airdrop, tree, ALICE_KEY, ALICE))
"""

from .common import (
    ALICE,
    ALICE_KEY,
    BOB,
    BOB_KEY,
    CAROL,
    CAROL_KEY,
    CHAIN_ID,
    CONTRACT,
    OTHER_CONTRACT,
    TOKEN,
    FailingTokenLedger,
    make_airdrop,
    make_claim,
    make_claim_request,
    make_token,
    make_tree,
    sign_claim,
)

__all__ = [
    "ALICE",
    "ALICE_KEY",
    "BOB",
    "BOB_KEY",
    "CAROL",
    "CAROL_KEY",
    "CHAIN_ID",
    "CONTRACT",
    "OTHER_CONTRACT",
    "TOKEN",
    "FailingTokenLedger",
    "make_airdrop",
    "make_claim",
    "make_claim_request",
    "make_token",
    "make_tree",
    "sign_claim",
]
