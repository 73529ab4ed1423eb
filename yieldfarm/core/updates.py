"""State transition functions for the staking kernel.

One pure function per action. Each takes the PRE-state (pool + the caller's
position) and returns the POST-state pair. Every mutating action first runs
`settle()` so accrual is computed on the pre-mutation stake.

Updates are implemented via `dataclasses.replace()` on frozen dataclasses.
"""

from __future__ import annotations

from dataclasses import replace

from .math import distribute, rebase_debt, settle_amounts
from .types import ActionParams, PoolState, StakerPosition, ZeroStakePolicy


def settle(pool: PoolState, position: StakerPosition) -> StakerPosition:
    """Credit reward accrued since the last settlement into `claimable`."""
    credited, debt = settle_amounts(
        position.staked_amount, pool.acc_reward_per_share, position.reward_debt,
    )
    if credited == 0 and debt == position.reward_debt:
        return position
    return replace(position, reward_debt=debt, claimable=position.claimable + credited)


def _resize(pool: PoolState, settled: StakerPosition, new_staked: int) -> StakerPosition:
    return replace(
        settled,
        staked_amount=new_staked,
        reward_debt=rebase_debt(
            new_staked, pool.acc_reward_per_share, settled.reward_debt, settled.staked_amount,
        ),
    )


def apply_stake(
    pool: PoolState,
    position: StakerPosition,
    params: ActionParams,
    *,
    policy: ZeroStakePolicy = ZeroStakePolicy.CARRY_OVER,
) -> tuple[PoolState, StakerPosition]:
    settled = settle(pool, position)
    new_position = _resize(pool, settled, settled.staked_amount + params.amount)
    new_total = pool.total_staked + params.amount

    if pool.total_staked != 0 or pool.undistributed_rewards == 0:
        return replace(pool, total_staked=new_total), new_position

    # First staker after an empty period: the carry-over pool goes to them.
    # Their debt was fixed at the pre-distribution accumulator above.
    delta_acc, dust = distribute(pool.undistributed_rewards, new_total)
    new_pool = replace(
        pool,
        total_staked=new_total,
        acc_reward_per_share=pool.acc_reward_per_share + delta_acc,
        undistributed_rewards=dust,
    )
    return new_pool, new_position


def apply_withdraw(
    pool: PoolState,
    position: StakerPosition,
    params: ActionParams,
    *,
    policy: ZeroStakePolicy = ZeroStakePolicy.CARRY_OVER,
) -> tuple[PoolState, StakerPosition]:
    settled = settle(pool, position)
    new_position = _resize(pool, settled, settled.staked_amount - params.amount)
    return replace(pool, total_staked=pool.total_staked - params.amount), new_position


def apply_add_rewards(
    pool: PoolState,
    position: StakerPosition,
    params: ActionParams,
    *,
    policy: ZeroStakePolicy = ZeroStakePolicy.CARRY_OVER,
) -> tuple[PoolState, StakerPosition]:
    settled = settle(pool, position)
    injected = pool.total_rewards_injected + params.amount

    if pool.total_staked == 0:
        new_pool = replace(
            pool,
            total_rewards_injected=injected,
            undistributed_rewards=pool.undistributed_rewards + params.amount,
        )
        return new_pool, settled

    delta_acc, dust = distribute(pool.undistributed_rewards + params.amount, pool.total_staked)
    new_pool = replace(
        pool,
        acc_reward_per_share=pool.acc_reward_per_share + delta_acc,
        total_rewards_injected=injected,
        undistributed_rewards=dust,
    )
    return new_pool, settled


def apply_claim_rewards(
    pool: PoolState,
    position: StakerPosition,
    params: ActionParams,
    *,
    policy: ZeroStakePolicy = ZeroStakePolicy.CARRY_OVER,
) -> tuple[PoolState, StakerPosition]:
    settled = settle(pool, position)
    new_pool = replace(pool, total_rewards_paid=pool.total_rewards_paid + settled.claimable)
    return new_pool, replace(settled, claimable=0)
