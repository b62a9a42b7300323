"""
Token Ledger Module

Interface to the token a distributor pays out from.
"""

from .ledger import InMemoryTokenLedger, TokenLedger

__all__ = [
    "InMemoryTokenLedger",
    "TokenLedger",
]
