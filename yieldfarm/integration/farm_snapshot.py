"""
Ledger state snapshot encoding.

Goals:
- Deterministic JSON serialization for hashing / handing state to a host.
- Round-trippable into the `PoolState` + `StakerTable` pair a `YieldFarm` is
  constructed from.
- Explicit versioning.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple

from ..core.engine import pending_rewards
from ..core.invariants import check_all
from ..core.state import pool_from_dict, pool_to_dict, position_from_dict, position_to_dict
from ..core.types import PoolState
from ..state.canonical import canonical_json_bytes, domain_sep_bytes, sha256_hex
from ..state.stakers import StakerTable


FARM_SNAPSHOT_VERSION = 1


@dataclass(frozen=True)
class FarmSnapshot:
    """
    Deterministic, versioned snapshot of the ledger state.

    The commitment is *not* included inside `data` to avoid self-reference.
    """

    version: int
    data: Dict[str, Any]

    def canonical_bytes(self) -> bytes:
        return canonical_json_bytes(self.data)

    def _commitment_payload(self) -> bytes:
        return domain_sep_bytes("farm_snapshot", version=self.version) + self.canonical_bytes()

    def commitment_bytes(self) -> bytes:
        return hashlib.sha256(self._commitment_payload()).digest()

    def commitment_hex(self) -> str:
        return sha256_hex(self._commitment_payload())


def snapshot_from_farm_state(
    pool: PoolState,
    stakers: StakerTable,
    *,
    version: int = FARM_SNAPSHOT_VERSION,
) -> FarmSnapshot:
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")

    positions = []
    for participant, position in stakers.items_sorted():
        entry: Dict[str, Any] = {"participant": participant}
        entry.update(position_to_dict(position))
        positions.append(entry)

    data: Dict[str, Any] = {
        "version": int(version),
        "pool": pool_to_dict(pool),
        "positions": positions,
    }
    return FarmSnapshot(version=version, data=data)


def farm_state_from_snapshot(
    snapshot: Mapping[str, Any],
    *,
    max_positions: int = 1_000_000,
    max_participant_len: int = 4096,
) -> Tuple[PoolState, StakerTable]:
    """Decode a snapshot fail-closed. Raises TypeError/ValueError on bad input."""
    if not isinstance(snapshot, Mapping):
        raise TypeError("snapshot must be a mapping")
    version = snapshot.get("version")
    if version != FARM_SNAPSHOT_VERSION or isinstance(version, bool):
        raise ValueError(f"unsupported snapshot version: {version!r}")

    pool_obj = snapshot.get("pool")
    if not isinstance(pool_obj, Mapping):
        raise TypeError("pool must be a mapping")
    try:
        pool = pool_from_dict(pool_obj)
    except KeyError as exc:
        raise ValueError(f"pool missing field {exc.args[0]!r}") from exc

    entries = snapshot.get("positions")
    if not isinstance(entries, list):
        raise TypeError("positions must be a list")
    if len(entries) > max_positions:
        raise ValueError("too many positions")

    stakers = StakerTable()
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise TypeError("position entry must be a mapping")
        participant = entry.get("participant")
        if not isinstance(participant, str) or not participant:
            raise TypeError("participant must be a non-empty string")
        if len(participant) > max_participant_len:
            raise ValueError("participant too large")
        if participant in stakers:
            raise ValueError(f"duplicate participant: {participant!r}")
        try:
            position = position_from_dict(entry)
        except KeyError as exc:
            raise ValueError(f"position missing field {exc.args[0]!r}") from exc
        violations = check_all(pool, position)
        if violations:
            raise ValueError(f"position {participant!r} violates {', '.join(violations)}")
        stakers.put(participant, position)

    if not stakers.verify_total(pool.total_staked):
        raise ValueError("pool total_staked does not match the sum of positions")
    owed = sum(pending_rewards(pool, position) for _, position in stakers.items_sorted())
    if owed + pool.undistributed_rewards > pool.reward_reserve:
        raise ValueError(
            f"rewards owed {owed} + undistributed {pool.undistributed_rewards} exceed reward_reserve {pool.reward_reserve}"
        )
    return pool, stakers
