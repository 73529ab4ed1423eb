"""Invariant checkers for the staking kernel.

Each function returns True when the invariant holds. `check_all()` returns the
list of violated invariant IDs for a post-state; `check_transition()` adds the
checks that compare against the pre-state (accumulator monotonicity, injected
rewards never shrinking).

Note: these are per-step invariants over the pool and one position. The
global `total_staked == sum(staked_amount)` law is checked over the whole
table by `StakerTable.verify_total()`.
"""

from __future__ import annotations

from typing import Callable

from .math import accrued_scaled
from .types import PoolState, StakerPosition


def inv_paid_within_injected(p: PoolState, s: StakerPosition) -> bool:
    return p.total_rewards_paid <= p.total_rewards_injected


def inv_undistributed_within_reserve(p: PoolState, s: StakerPosition) -> bool:
    return p.undistributed_rewards <= p.reward_reserve


def inv_position_within_total(p: PoolState, s: StakerPosition) -> bool:
    return s.staked_amount <= p.total_staked


def inv_debt_not_ahead_of_acc(p: PoolState, s: StakerPosition) -> bool:
    return accrued_scaled(s.staked_amount, p.acc_reward_per_share, s.reward_debt) >= 0


def inv_claimable_within_reserve(p: PoolState, s: StakerPosition) -> bool:
    return s.claimable <= p.reward_reserve


INVARIANT_REGISTRY: dict[str, Callable[[PoolState, StakerPosition], bool]] = {
    "inv_paid_within_injected": inv_paid_within_injected,
    "inv_undistributed_within_reserve": inv_undistributed_within_reserve,
    "inv_position_within_total": inv_position_within_total,
    "inv_debt_not_ahead_of_acc": inv_debt_not_ahead_of_acc,
    "inv_claimable_within_reserve": inv_claimable_within_reserve,
}


def check_all(pool: PoolState, position: StakerPosition) -> list[str]:
    """Return list of violated invariant IDs (empty = all pass)."""
    return [
        inv_id
        for inv_id, check_fn in INVARIANT_REGISTRY.items()
        if not check_fn(pool, position)
    ]


def check_transition(pre: PoolState, post: PoolState) -> list[str]:
    violations = []
    if post.acc_reward_per_share < pre.acc_reward_per_share:
        violations.append("inv_acc_monotone")
    if post.total_rewards_injected < pre.total_rewards_injected:
        violations.append("inv_injected_monotone")
    if post.total_rewards_paid < pre.total_rewards_paid:
        violations.append("inv_paid_monotone")
    return violations
