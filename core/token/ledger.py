"""
Token Ledger

Interface to the external balance/transfer collaborator the distributor
pays out from, plus an in-memory implementation used by the API service,
the CLI, and tests.

Contract for implementations:
- ``transfer`` moves ``amount`` from the distributor's holding to ``to``
- failure raises TransferError and moves nothing
- ``transfer`` must not call back into the distributor's ``claim``
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod

from core.schemas.canonical import normalize_address, validate_amount
from core.schemas.errors import ErrorCodes, TransferError


logger = logging.getLogger(__name__)


class TokenLedger(ABC):
    """Interface for the token a distributor pays out from."""

    @property
    @abstractmethod
    def address(self) -> str:
        """Address of the token ledger."""
        ...

    @abstractmethod
    def transfer(self, to: str, amount: int) -> None:
        """Move ``amount`` to ``to``, raising TransferError on failure."""
        ...

    @abstractmethod
    def balance_of(self, account: str) -> int:
        ...


class InMemoryTokenLedger(TokenLedger):
    """
    Balance map with a single paying account (the distributor holding).

    Usage:
        token = InMemoryTokenLedger(address=token_addr, holder=distributor_addr)
        token.mint(distributor_addr, 1_000)
        token.transfer(alice, 100)
    """

    def __init__(
        self,
        address: str,
        holder: str,
        *,
        name: str = "Airdrop Token",
        symbol: str = "DROP",
        initial_supply: int = 0,
    ) -> None:
        self._address = normalize_address(address)
        self._holder = normalize_address(holder)
        self.name = name
        self.symbol = symbol
        self._balances: dict[str, int] = {}
        self._lock = threading.Lock()
        if initial_supply:
            self.mint(self._holder, initial_supply)

    @property
    def address(self) -> str:
        return self._address

    @property
    def holder(self) -> str:
        return self._holder

    def mint(self, account: str, amount: int) -> None:
        account = normalize_address(account)
        validate_amount(amount)
        with self._lock:
            self._balances[account] = self._balances.get(account, 0) + amount

    def balance_of(self, account: str) -> int:
        account = normalize_address(account)
        with self._lock:
            return self._balances.get(account, 0)

    def total_supply(self) -> int:
        with self._lock:
            return sum(self._balances.values())

    def transfer(self, to: str, amount: int) -> None:
        """
        Move ``amount`` from the holder to ``to``.

        Raises:
            TransferError: If the holder's balance is insufficient
        """
        to = normalize_address(to)
        validate_amount(amount)
        with self._lock:
            available = self._balances.get(self._holder, 0)
            if available < amount:
                raise TransferError(
                    f"Insufficient balance: holder has {available}, needs {amount}",
                    code=ErrorCodes.INSUFFICIENT_BALANCE,
                    details={
                        "holder": self._holder,
                        "available": str(available),
                        "requested": str(amount),
                    },
                )
            self._balances[self._holder] = available - amount
            self._balances[to] = self._balances.get(to, 0) + amount
        logger.debug("%s transfer %s -> %s: %d", self.symbol, self._holder, to, amount)
