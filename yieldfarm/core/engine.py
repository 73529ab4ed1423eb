"""Dispatch-table engine for the staking kernel.

``step(pool, position, params)`` is the single entry point. It:

1. Dispatches to the action's guard / update / effect functions.
2. Evaluates the guard on the PRE-state (rejection code on failure).
3. Applies the update (settlement first, then the balance mutation).
4. Checks all invariants on the post-state and against the pre-state.
5. Returns a ``StepResult`` (accepted or rejected with reason).

Inputs are never mutated, so a rejected step leaves the caller's state exactly
as it was.
"""

from __future__ import annotations

from typing import Callable

from .effects import effect_add_rewards, effect_claim_rewards, effect_stake, effect_withdraw
from .errors import ERRORS_BY_CODE, FarmError, FarmInvariantError
from .guards import guard_add_rewards, guard_claim_rewards, guard_stake, guard_withdraw
from .invariants import check_all, check_transition
from .math import MAX_AMOUNT, pending_amount
from .types import Action, ActionParams, Effect, PoolState, StakerPosition, StepResult, ZeroStakePolicy
from .updates import apply_add_rewards, apply_claim_rewards, apply_stake, apply_withdraw

GuardFn = Callable[..., "str | None"]
UpdateFn = Callable[..., "tuple[PoolState, StakerPosition]"]
EffectFn = Callable[..., Effect]

_DISPATCH: dict[Action, tuple[GuardFn, UpdateFn, EffectFn]] = {
    Action.STAKE: (guard_stake, apply_stake, effect_stake),
    Action.WITHDRAW: (guard_withdraw, apply_withdraw, effect_withdraw),
    Action.ADD_REWARDS: (guard_add_rewards, apply_add_rewards, effect_add_rewards),
    Action.CLAIM_REWARDS: (guard_claim_rewards, apply_claim_rewards, effect_claim_rewards),
}


def step(
    pool: PoolState,
    position: StakerPosition,
    params: ActionParams,
    *,
    policy: ZeroStakePolicy = ZeroStakePolicy.CARRY_OVER,
    max_amount: int = MAX_AMOUNT,
) -> StepResult:
    """Execute one action for one participant against the given pool.

    Returns ``StepResult`` with ``accepted=True`` on success,
    or ``accepted=False`` with a ``rejection`` code.
    """
    entry = _DISPATCH.get(params.action)
    if entry is None:
        return StepResult(accepted=False, rejection=f"unknown_action:{params.action}")

    guard_fn, update_fn, effect_fn = entry

    err = guard_fn(pool, position, params, policy=policy, max_amount=max_amount)
    if err is not None:
        return StepResult(accepted=False, rejection=err)

    new_pool, new_position = update_fn(pool, position, params, policy=policy)

    violations = check_transition(pool, new_pool) + check_all(new_pool, new_position)
    if violations:
        return StepResult(
            accepted=False,
            rejection=f"invariant:{','.join(violations)}",
        )

    effect = effect_fn(pool, position, new_pool, new_position, params)
    return StepResult(accepted=True, pool=new_pool, position=new_position, effect=effect)


def rejection_error(reason: str) -> FarmError:
    """Map a ``StepResult.rejection`` code to its exception."""
    if reason.startswith("invariant:"):
        return FarmInvariantError(reason.removeprefix("invariant:").split(","))
    cls = ERRORS_BY_CODE.get(reason)
    if cls is None:
        return FarmError(reason)
    return cls(reason)


def step_or_raise(
    pool: PoolState,
    position: StakerPosition,
    params: ActionParams,
    *,
    policy: ZeroStakePolicy = ZeroStakePolicy.CARRY_OVER,
    max_amount: int = MAX_AMOUNT,
) -> StepResult:
    """Like ``step()`` but raises on rejection instead of returning a result.

    Raises:
        InvalidAmount, InsufficientStake, Unauthorized, NoStakers,
        NoRewardsAvailable: guard not satisfied.
        FarmInvariantError: post-state violates one or more invariants.
    """
    result = step(pool, position, params, policy=policy, max_amount=max_amount)
    if result.accepted:
        return result
    raise rejection_error(result.rejection or "")


def pending_rewards(pool: PoolState, position: StakerPosition) -> int:
    """Reward owed to `position`: unsettled accrual plus settled claimable."""
    return pending_amount(
        position.staked_amount, pool.acc_reward_per_share,
        position.reward_debt, position.claimable,
    )
