"""
Claim Event Log

Records claim-completed events and fans them out to subscribers.
The distributor calls ``emit`` exactly once per successful claim, while
still holding the account's claim slot.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Optional

from .models import ClaimEvent


logger = logging.getLogger(__name__)

ClaimListener = Callable[[ClaimEvent], None]


class ClaimEventLog:
    """
    Append-only log of claim events.

    Usage:
        log = ClaimEventLog()
        log.subscribe(lambda event: print(event.account, event.amount))

        event = log.emit(account=..., amount=..., merkle_root=..., token=...)

        events = log.get_events()
    """

    def __init__(self) -> None:
        self._events: list[ClaimEvent] = []
        self._listeners: list[ClaimListener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: ClaimListener) -> None:
        """Register a callback invoked with every future event."""
        with self._lock:
            self._listeners.append(listener)

    def unsubscribe(self, listener: ClaimListener) -> None:
        with self._lock:
            self._listeners.remove(listener)

    def emit(
        self,
        *,
        account: str,
        amount: int,
        merkle_root: str,
        token: str,
        emitted_at: Optional[datetime] = None,
    ) -> ClaimEvent:
        """
        Append an event and notify listeners.

        Listener failures are logged and do not propagate: by the time an
        event is emitted the claim is final.
        """
        with self._lock:
            event = ClaimEvent(
                account=account,
                amount=amount,
                merkle_root=merkle_root,
                token=token,
                sequence=len(self._events),
                emitted_at=emitted_at or datetime.now(timezone.utc),
            )
            self._events.append(event)
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception(
                    "Claim listener %r failed for event %d", listener, event.sequence
                )
        return event

    def get_events(self) -> list[ClaimEvent]:
        """Get all recorded events in emission order."""
        with self._lock:
            return list(self._events)

    def events_for(self, account: str) -> list[ClaimEvent]:
        account = account.lower()
        with self._lock:
            return [e for e in self._events if e.account == account]

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def to_dict_list(self) -> list[dict]:
        """Convert all events to JSON-serializable dicts."""
        return [e.model_dump(mode="json") for e in self.get_events()]
