"""Effect functions for the staking kernel.

One pure function per action. Each computes the ``Effect`` from the PRE and
POST states; ``settled`` is the reward the implicit settlement credited.
"""

from __future__ import annotations

from .math import settle_amounts
from .types import ActionParams, Effect, Event, PoolState, StakerPosition


def _settled(pool: PoolState, position: StakerPosition) -> int:
    credited, _ = settle_amounts(
        position.staked_amount, pool.acc_reward_per_share, position.reward_debt,
    )
    return credited


def _common(
    pre_pool: PoolState,
    pre_position: StakerPosition,
    pool: PoolState,
    position: StakerPosition,
) -> dict[str, int]:
    return dict(
        settled=_settled(pre_pool, pre_position),
        staked_after=position.staked_amount,
        claimable_after=position.claimable,
        total_staked_after=pool.total_staked,
        acc_after=pool.acc_reward_per_share,
        undistributed_after=pool.undistributed_rewards,
    )


def effect_stake(pre_pool, pre_position, pool, position, params: ActionParams) -> Effect:
    return Effect(
        event=Event.STAKED, amount=params.amount,
        **_common(pre_pool, pre_position, pool, position),
    )


def effect_withdraw(pre_pool, pre_position, pool, position, params: ActionParams) -> Effect:
    return Effect(
        event=Event.WITHDRAWN, amount=params.amount,
        **_common(pre_pool, pre_position, pool, position),
    )


def effect_add_rewards(pre_pool, pre_position, pool, position, params: ActionParams) -> Effect:
    return Effect(
        event=Event.REWARDS_ADDED, amount=params.amount,
        **_common(pre_pool, pre_position, pool, position),
    )


def effect_claim_rewards(pre_pool, pre_position, pool, position, params: ActionParams) -> Effect:
    claimed = pool.total_rewards_paid - pre_pool.total_rewards_paid
    return Effect(
        event=Event.REWARDS_CLAIMED, amount=claimed,
        **_common(pre_pool, pre_position, pool, position),
    )
