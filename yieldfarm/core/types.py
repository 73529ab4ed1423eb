"""Data types for the staking kernel.

All types are frozen dataclasses (immutable). A kernel step never mutates its
inputs; it returns new `PoolState` / `StakerPosition` values.

Units/conventions:
- amounts are integer base units of the stake or reward asset,
- `acc_reward_per_share` is reward-per-unit-stake scaled by `ACC_SCALE`,
- `reward_debt` is stored in the same scaled units (not divided).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique


def _require_int(name: str, value: object, *, non_negative: bool = True) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if non_negative and value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")


@unique
class Action(Enum):
    STAKE = "stake"
    WITHDRAW = "withdraw"
    ADD_REWARDS = "add_rewards"
    CLAIM_REWARDS = "claim_rewards"


@unique
class Event(Enum):
    """Observable event emitted by each accepted action."""
    STAKED = "Staked"
    WITHDRAWN = "Withdrawn"
    REWARDS_ADDED = "RewardsAdded"
    REWARDS_CLAIMED = "RewardsClaimed"


@unique
class ZeroStakePolicy(Enum):
    """What `add_rewards` does while nothing is staked."""
    CARRY_OVER = "carry_over"
    REJECT = "reject"


@dataclass(frozen=True)
class PoolState:
    """Global ledger state shared by every participant."""

    total_staked: int = 0
    acc_reward_per_share: int = 0
    total_rewards_injected: int = 0
    total_rewards_paid: int = 0
    # Injected while nobody was staked, plus per-injection rounding dust.
    undistributed_rewards: int = 0

    def __post_init__(self) -> None:
        _require_int("total_staked", self.total_staked)
        _require_int("acc_reward_per_share", self.acc_reward_per_share)
        _require_int("total_rewards_injected", self.total_rewards_injected)
        _require_int("total_rewards_paid", self.total_rewards_paid)
        _require_int("undistributed_rewards", self.undistributed_rewards)

    @property
    def reward_reserve(self) -> int:
        """Reward asset still held in custody."""
        return self.total_rewards_injected - self.total_rewards_paid


@dataclass(frozen=True)
class StakerPosition:
    """Per-participant record."""

    staked_amount: int = 0
    reward_debt: int = 0
    claimable: int = 0

    def __post_init__(self) -> None:
        _require_int("staked_amount", self.staked_amount)
        _require_int("reward_debt", self.reward_debt, non_negative=False)
        _require_int("claimable", self.claimable)

    def is_empty(self) -> bool:
        return self.staked_amount == 0 and self.reward_debt == 0 and self.claimable == 0


@dataclass(frozen=True)
class ActionParams:
    """Parameters for an action. `amount` is unused by CLAIM_REWARDS."""

    action: Action
    amount: int = 0
    auth_ok: bool = False  # add_rewards: caller is the operator


@dataclass(frozen=True)
class Effect:
    """Post-state observables emitted after a successful step."""

    event: Event
    amount: int
    settled: int = 0  # reward credited to `claimable` by the implicit settlement
    staked_after: int = 0
    claimable_after: int = 0
    total_staked_after: int = 0
    acc_after: int = 0
    undistributed_after: int = 0


@dataclass(frozen=True)
class StepResult:
    """Result of a single kernel step."""

    accepted: bool
    pool: PoolState | None = None
    position: StakerPosition | None = None
    effect: Effect | None = None
    rejection: str | None = None
