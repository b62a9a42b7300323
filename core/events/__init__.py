"""
Core Events Module

Claim-completed notifications for external observers and indexers.
"""

from .models import ClaimEvent
from .recorder import ClaimEventLog, ClaimListener

__all__ = [
    "ClaimEvent",
    "ClaimEventLog",
    "ClaimListener",
]
