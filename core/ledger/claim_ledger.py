"""
Claim Ledger

Tracks which accounts have successfully claimed. The flag for an account
goes from unset to set exactly once; the only way back is an explicit
revert by the slot that set it, before the slot is released.

Concurrency:
- Accounts map onto a fixed pool of re-entrant locks; every read and write
  of an account's flag happens under that account's lock.
- ``claim_slot(account)`` holds the lock for the whole check -> commit ->
  transfer sequence, so two claims for the same account are serialized and
  only one of them can observe the flag unset and commit.
- ``ClaimSlot.revert()`` undoes the slot's own commit. Since readers take
  the same lock, nobody observes the transient flag of a reverted claim.
  An exception leaving the slot does not revert anything by itself.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator

from core.schemas.canonical import normalize_address


logger = logging.getLogger(__name__)


# Number of lock stripes shared by all accounts
LOCK_STRIPES = 64


class ClaimSlot:
    """
    Exclusive handle on one account's claim flag for the duration of a claim.

    Obtained from ClaimLedger.claim_slot(); not constructed directly.
    """

    def __init__(self, ledger: "ClaimLedger", account: str) -> None:
        self._ledger = ledger
        self.account = account
        self.committed = False

    @property
    def claimed(self) -> bool:
        return self._ledger._is_set(self.account)

    def commit(self) -> None:
        """Set the account's flag. Must be called at most once per slot."""
        if self.committed:
            raise RuntimeError(f"Claim slot for {self.account} already committed")
        if self._ledger._is_set(self.account):
            raise RuntimeError(f"Account {self.account} has already claimed")
        self._ledger._set(self.account)
        self.committed = True

    def revert(self) -> None:
        """Undo this slot's commit. Only valid after commit()."""
        if not self.committed:
            raise RuntimeError(f"Claim slot for {self.account} has nothing to revert")
        logger.warning("Rolling back claim flag for %s", self.account)
        self._ledger._unset(self.account)
        self.committed = False


class ClaimLedger:
    """
    Keyed store of per-account claim flags.

    Usage:
        ledger = ClaimLedger()

        with ledger.claim_slot(account) as slot:
            if slot.claimed:
                ...  # reject
            slot.commit()
            try:
                ...  # external transfer
            except TransferError:
                slot.revert()
                raise

        ledger.has_claimed(account)
    """

    def __init__(self, stripes: int = LOCK_STRIPES) -> None:
        if stripes < 1:
            raise ValueError(f"stripes must be positive, got {stripes}")
        self._claimed: set[str] = set()
        self._locks = tuple(threading.RLock() for _ in range(stripes))
        self._guard = threading.Lock()

    def _lock_for(self, account: str) -> threading.RLock:
        return self._locks[int(account[2:], 16) % len(self._locks)]

    def _is_set(self, account: str) -> bool:
        with self._guard:
            return account in self._claimed

    def _set(self, account: str) -> None:
        with self._guard:
            self._claimed.add(account)

    def _unset(self, account: str) -> None:
        with self._guard:
            self._claimed.discard(account)

    @contextmanager
    def claim_slot(self, account: str) -> Iterator[ClaimSlot]:
        """Hold the account's lock for a full claim attempt."""
        account = normalize_address(account)
        with self._lock_for(account):
            yield ClaimSlot(self, account)

    def has_claimed(self, account: str) -> bool:
        """Whether ``account`` has completed a claim."""
        account = normalize_address(account)
        with self._lock_for(account):
            return self._is_set(account)

    def mark_claimed(self, account: str) -> None:
        """
        Set ``account``'s flag outside of a claim slot.

        Raises:
            RuntimeError: If the account has already claimed
        """
        with self.claim_slot(account) as slot:
            slot.commit()

    def claimed_count(self) -> int:
        with self._guard:
            return len(self._claimed)

    def claimed_accounts(self) -> list[str]:
        """Snapshot of claimed accounts, sorted."""
        with self._guard:
            return sorted(self._claimed)
