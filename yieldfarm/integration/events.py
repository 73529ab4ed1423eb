"""
Observable ledger events.

Every accepted operation appends one `FarmEvent` to the farm's log and hands it
to subscribers synchronously, after the custody transfer has succeeded. By then
the operation is committed, so a subscriber that raises is logged and skipped;
the remaining subscribers still receive the event.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..core.types import Effect, Event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FarmEvent:
    sequence: int
    event: Event
    participant: Optional[str]
    amount: int

    @property
    def name(self) -> str:
        return self.event.value

    @property
    def args(self) -> Tuple[Any, ...]:
        """Event arguments: `(amount,)` for RewardsAdded, else `(participant, amount)`."""
        if self.event is Event.REWARDS_ADDED:
            return (self.amount,)
        return (self.participant, self.amount)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sequence": self.sequence,
            "event": self.name,
            "participant": self.participant,
            "amount": self.amount,
        }


Subscriber = Callable[[FarmEvent], None]


class EventLog:
    """Append-only event list with synchronous fan-out."""

    def __init__(self) -> None:
        self._events: List[FarmEvent] = []
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register `callback`; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def record(self, participant: str, effect: Effect) -> FarmEvent:
        event = FarmEvent(
            sequence=len(self._events),
            event=effect.event,
            participant=None if effect.event is Event.REWARDS_ADDED else participant,
            amount=effect.amount,
        )
        self._events.append(event)
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception("subscriber %r failed on %s #%d", callback, event.name, event.sequence)
        return event

    def all(self) -> Tuple[FarmEvent, ...]:
        return tuple(self._events)

    def __len__(self) -> int:
        return len(self._events)
