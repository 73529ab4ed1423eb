"""Guard functions for the staking kernel.

One pure function per action. Each returns ``None`` when the action is allowed
in the given PRE-state, or the rejection code otherwise. Checks run in the
order callers observe them (e.g. authorization before amount validation for
``add_rewards``).
"""

from __future__ import annotations

from .math import MAX_AMOUNT, pending_amount
from .types import ActionParams, PoolState, StakerPosition, ZeroStakePolicy


def _amount_error(params: ActionParams, max_amount: int) -> str | None:
    amount = params.amount
    if not isinstance(amount, int) or isinstance(amount, bool):
        return "invalid_amount"
    if amount <= 0 or amount > max_amount:
        return "invalid_amount"
    return None


def guard_stake(
    pool: PoolState,
    position: StakerPosition,
    params: ActionParams,
    *,
    policy: ZeroStakePolicy = ZeroStakePolicy.CARRY_OVER,
    max_amount: int = MAX_AMOUNT,
) -> str | None:
    return _amount_error(params, max_amount)


def guard_withdraw(
    pool: PoolState,
    position: StakerPosition,
    params: ActionParams,
    *,
    policy: ZeroStakePolicy = ZeroStakePolicy.CARRY_OVER,
    max_amount: int = MAX_AMOUNT,
) -> str | None:
    err = _amount_error(params, max_amount)
    if err is not None:
        return err
    if params.amount > position.staked_amount:
        return "insufficient_stake"
    return None


def guard_add_rewards(
    pool: PoolState,
    position: StakerPosition,
    params: ActionParams,
    *,
    policy: ZeroStakePolicy = ZeroStakePolicy.CARRY_OVER,
    max_amount: int = MAX_AMOUNT,
) -> str | None:
    if not params.auth_ok:
        return "unauthorized"
    err = _amount_error(params, max_amount)
    if err is not None:
        return err
    if pool.total_staked == 0 and policy is ZeroStakePolicy.REJECT:
        return "no_stakers"
    return None


def guard_claim_rewards(
    pool: PoolState,
    position: StakerPosition,
    params: ActionParams,
    *,
    policy: ZeroStakePolicy = ZeroStakePolicy.CARRY_OVER,
    max_amount: int = MAX_AMOUNT,
) -> str | None:
    owed = pending_amount(
        position.staked_amount, pool.acc_reward_per_share,
        position.reward_debt, position.claimable,
    )
    if owed == 0:
        return "no_rewards_available"
    return None
