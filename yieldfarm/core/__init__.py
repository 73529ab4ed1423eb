"""Staking kernel: pure, integer-only reward accounting.

- deterministic transitions over immutable state (frozen dataclasses),
- accumulated-reward-per-share accrual (O(1) per action, no participant scans),
- fail-closed guards and invariant checks.

Public API:
- `initial_pool() -> PoolState`
- `step(pool, position, params) -> StepResult`
- `step_or_raise(pool, position, params) -> StepResult` (raises on rejection)
- `pending_rewards(pool, position) -> int`
"""

from .engine import pending_rewards, rejection_error, step, step_or_raise
from .errors import (
    FarmError,
    FarmInvariantError,
    InsufficientStake,
    InvalidAmount,
    NoRewardsAvailable,
    NoStakers,
    ReentrantCall,
    TransferFailed,
    Unauthorized,
)
from .math import ACC_SCALE, MAX_AMOUNT
from .state import initial_pool, pool_from_dict, pool_to_dict, position_from_dict, position_to_dict
from .types import (
    Action,
    ActionParams,
    Effect,
    Event,
    PoolState,
    StakerPosition,
    StepResult,
    ZeroStakePolicy,
)
from .updates import settle

__all__ = [
    "step",
    "step_or_raise",
    "rejection_error",
    "pending_rewards",
    "settle",
    "initial_pool",
    "pool_to_dict",
    "pool_from_dict",
    "position_to_dict",
    "position_from_dict",
    "ACC_SCALE",
    "MAX_AMOUNT",
    "Action",
    "ActionParams",
    "Effect",
    "Event",
    "PoolState",
    "StakerPosition",
    "StepResult",
    "ZeroStakePolicy",
    "FarmError",
    "FarmInvariantError",
    "InsufficientStake",
    "InvalidAmount",
    "NoRewardsAvailable",
    "NoStakers",
    "ReentrantCall",
    "TransferFailed",
    "Unauthorized",
]
