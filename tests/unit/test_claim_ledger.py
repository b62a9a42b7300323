"""
Claim Ledger Unit Tests
Tests for core/ledger/claim_ledger.py

Tests:
- Flags start unset and are set exactly once
- Explicit revert of a committed slot; exceptions alone revert nothing
- Lock pool stays fixed regardless of how many accounts are queried
- Per-account serialization under concurrency
"""
import threading

import pytest

from core.ledger import ClaimLedger
from core.ledger.claim_ledger import LOCK_STRIPES
from core.schemas.errors import CanonicalizationException


A = "0x" + "11" * 20
B = "0x" + "22" * 20


class TestFlags:
    """Tests for has_claimed / mark_claimed."""

    def test_initially_unclaimed(self):
        assert not ClaimLedger().has_claimed(A)

    def test_mark_claimed(self):
        ledger = ClaimLedger()
        ledger.mark_claimed(A)
        assert ledger.has_claimed(A)
        assert not ledger.has_claimed(B)

    def test_mark_twice_raises(self):
        ledger = ClaimLedger()
        ledger.mark_claimed(A)
        with pytest.raises(RuntimeError, match="already claimed"):
            ledger.mark_claimed(A)
        assert ledger.has_claimed(A)

    def test_case_insensitive(self):
        ledger = ClaimLedger()
        ledger.mark_claimed("0x" + "AB" * 20)
        assert ledger.has_claimed("0x" + "ab" * 20)

    def test_invalid_account(self):
        with pytest.raises(CanonicalizationException):
            ClaimLedger().has_claimed("not-an-address")

    def test_counts(self):
        ledger = ClaimLedger()
        ledger.mark_claimed(B)
        ledger.mark_claimed(A)
        assert ledger.claimed_count() == 2
        assert ledger.claimed_accounts() == [A, B]


class TestClaimSlot:
    """Tests for claim_slot()."""

    def test_commit_sets_flag(self):
        ledger = ClaimLedger()
        with ledger.claim_slot(A) as slot:
            assert not slot.claimed
            slot.commit()
            assert slot.claimed
        assert ledger.has_claimed(A)

    def test_double_commit_raises(self):
        ledger = ClaimLedger()
        with pytest.raises(RuntimeError):
            with ledger.claim_slot(A) as slot:
                slot.commit()
                slot.commit()

    def test_revert_clears_flag(self):
        ledger = ClaimLedger()
        with pytest.raises(ValueError):
            with ledger.claim_slot(A) as slot:
                slot.commit()
                slot.revert()
                assert not slot.claimed
                raise ValueError("transfer failed")
        assert not ledger.has_claimed(A)

    def test_exception_after_commit_keeps_flag(self):
        ledger = ClaimLedger()
        with pytest.raises(OSError):
            with ledger.claim_slot(A) as slot:
                slot.commit()
                raise OSError("notification failed")
        assert ledger.has_claimed(A)

    def test_revert_without_commit_raises(self):
        ledger = ClaimLedger()
        with ledger.claim_slot(A) as slot:
            with pytest.raises(RuntimeError, match="nothing to revert"):
                slot.revert()
        assert not ledger.has_claimed(A)

    def test_revert_keeps_prior_claim(self):
        ledger = ClaimLedger()
        ledger.mark_claimed(A)
        with ledger.claim_slot(A) as slot:
            with pytest.raises(RuntimeError):
                slot.commit()
            with pytest.raises(RuntimeError):
                slot.revert()
        assert ledger.has_claimed(A)

    def test_exception_before_commit_leaves_nothing(self):
        ledger = ClaimLedger()
        with pytest.raises(ValueError):
            with ledger.claim_slot(A):
                raise ValueError("rejected")
        assert not ledger.has_claimed(A)

    def test_existing_flag_survives_failed_slot(self):
        ledger = ClaimLedger()
        ledger.mark_claimed(A)
        with pytest.raises(ValueError):
            with ledger.claim_slot(A) as slot:
                assert slot.claimed
                raise ValueError("rejected")
        assert ledger.has_claimed(A)

    def test_reentrant_slot_sees_commit(self):
        ledger = ClaimLedger()
        with ledger.claim_slot(A) as outer:
            outer.commit()
            with ledger.claim_slot(A) as inner:
                assert inner.claimed


class TestLockPool:
    """Locks come from a fixed pool shared by all accounts."""

    def test_queries_do_not_grow_pool(self):
        ledger = ClaimLedger()
        for i in range(1000):
            assert not ledger.has_claimed("0x" + format(i, "040x"))
        assert len(ledger._locks) == LOCK_STRIPES

    def test_single_stripe_serves_all_accounts(self):
        ledger = ClaimLedger(stripes=1)
        with ledger.claim_slot(A) as slot_a:
            slot_a.commit()
            with ledger.claim_slot(B) as slot_b:
                assert not slot_b.claimed
                slot_b.commit()
        assert ledger.claimed_accounts() == [A, B]

    def test_invalid_stripe_count(self):
        with pytest.raises(ValueError):
            ClaimLedger(stripes=0)


class TestConcurrency:
    """Only one of many concurrent committers wins."""

    def test_single_winner(self):
        ledger = ClaimLedger()
        barrier = threading.Barrier(8)
        wins: list[int] = []
        lock = threading.Lock()

        def attempt(i: int) -> None:
            barrier.wait()
            with ledger.claim_slot(A) as slot:
                if slot.claimed:
                    return
                slot.commit()
                with lock:
                    wins.append(i)

        threads = [threading.Thread(target=attempt, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(wins) == 1
        assert ledger.has_claimed(A)
