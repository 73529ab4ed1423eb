"""State construction and serialization for the staking kernel.

`initial_pool()` returns the genesis pool (nothing staked, accumulator at 0).

Round-trip property (tested): `pool_from_dict(pool_to_dict(p)) == p` and the
same for positions.
"""

from __future__ import annotations

from typing import Any, Mapping

from .types import PoolState, StakerPosition

# Auto-derived from the dataclass field definitions (single source of truth).
POOL_VAR_NAMES: tuple[str, ...] = tuple(PoolState.__dataclass_fields__)
POSITION_VAR_NAMES: tuple[str, ...] = tuple(StakerPosition.__dataclass_fields__)


def initial_pool() -> PoolState:
    return PoolState()


def _ints_from(d: Mapping[str, Any], names: tuple[str, ...], *, kind: str) -> dict[str, int]:
    kwargs: dict[str, int] = {}
    for name in names:
        val = d[name]
        if not isinstance(val, int) or isinstance(val, bool):
            raise TypeError(f"{kind} var {name!r} must be int, got {type(val).__name__}")
        kwargs[name] = int(val)  # normalize int subclasses
    return kwargs


def pool_to_dict(pool: PoolState) -> dict[str, int]:
    return {name: getattr(pool, name) for name in POOL_VAR_NAMES}


def pool_from_dict(d: Mapping[str, Any]) -> PoolState:
    """Deserialize a dict to a PoolState. Raises KeyError on missing fields."""
    return PoolState(**_ints_from(d, POOL_VAR_NAMES, kind="pool"))


def position_to_dict(position: StakerPosition) -> dict[str, int]:
    return {name: getattr(position, name) for name in POSITION_VAR_NAMES}


def position_from_dict(d: Mapping[str, Any]) -> StakerPosition:
    return StakerPosition(**_ints_from(d, POSITION_VAR_NAMES, kind="position"))
