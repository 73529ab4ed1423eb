"""
Participant record table for the staking ledger.

Maps participant id -> `StakerPosition`. Records are created on first stake and
kept after a withdrawal to zero so unclaimed rewards are not lost.
"""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple

from ..core.types import StakerPosition

# Type alias: opaque, externally authenticated identity.
ParticipantId = str


class StakerTable:
    """
    Mutable mapping participant -> position, owned by the ledger shell.

    Notes:
    - Positions are immutable values; the table only swaps them.
    - Do not rely on dict iteration order; `items_sorted()` gives a
      deterministic order for serialization and hashing.
    """

    def __init__(self) -> None:
        self._positions: Dict[ParticipantId, StakerPosition] = {}
        self._total_staked = 0

    def get(self, participant: ParticipantId) -> StakerPosition:
        """Return the participant's position, or a zero position if unknown."""
        return self._positions.get(participant, StakerPosition())

    def lookup(self, participant: ParticipantId) -> Optional[StakerPosition]:
        """Return the stored position, or None if no record exists."""
        return self._positions.get(participant)

    def put(self, participant: ParticipantId, position: StakerPosition) -> None:
        if not isinstance(participant, str) or not participant:
            raise TypeError("participant must be a non-empty str")
        if not isinstance(position, StakerPosition):
            raise TypeError("position must be a StakerPosition")
        previous = self._positions.get(participant)
        if previous is not None:
            self._total_staked -= previous.staked_amount
        self._positions[participant] = position
        self._total_staked += position.staked_amount

    def restore(self, participant: ParticipantId, position: Optional[StakerPosition]) -> None:
        """Put back a value returned by `lookup()`, including "no record"."""
        if position is None:
            self.discard(participant)
        else:
            self.put(participant, position)

    def discard(self, participant: ParticipantId) -> None:
        previous = self._positions.pop(participant, None)
        if previous is not None:
            self._total_staked -= previous.staked_amount

    def __contains__(self, participant: object) -> bool:
        return participant in self._positions

    def __len__(self) -> int:
        return len(self._positions)

    def __iter__(self) -> Iterator[ParticipantId]:
        return iter(sorted(self._positions))

    def items_sorted(self) -> list[Tuple[ParticipantId, StakerPosition]]:
        return sorted(self._positions.items())

    @property
    def total_staked(self) -> int:
        """Running sum of every record's `staked_amount`."""
        return self._total_staked

    def verify_total(self, expected_total: int) -> bool:
        """Recompute the stake sum from scratch and compare."""
        total = sum(p.staked_amount for p in self._positions.values())
        return total == self._total_staked == expected_total

    def __repr__(self) -> str:
        return f"StakerTable({len(self._positions)} entries)"
