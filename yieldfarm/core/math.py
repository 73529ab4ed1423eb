"""Pure fixed-point arithmetic for the reward accumulator.

Every function is stateless and operates on plain Python ints. All divisions
floor (`//`); the only ceiling is `ceil_div`, used to decide how much of an
injection the accumulator actually represents so that rounding dust is carried
instead of over-promised.
"""

from __future__ import annotations

ACC_SCALE: int = 10**12
MAX_AMOUNT: int = 10**36


def ceil_div(a: int, b: int) -> int:
    if b <= 0:
        raise ValueError("divisor must be positive")
    return -(-a // b)


def accrued_scaled(staked: int, acc: int, reward_debt: int) -> int:
    """Reward accrued since the last settlement, still scaled by ACC_SCALE."""
    return staked * acc - reward_debt


def settle_amounts(staked: int, acc: int, reward_debt: int) -> tuple[int, int]:
    """Return `(credited, new_reward_debt)` for a settlement at `acc`.

    The sub-unit remainder stays in the debt, so repeated settlements never
    lose more than one unit per participant in total.
    """
    scaled = accrued_scaled(staked, acc, reward_debt)
    if scaled < 0:
        raise ValueError("reward_debt exceeds accumulated reward")
    credited, remainder = divmod(scaled, ACC_SCALE)
    return credited, staked * acc - remainder


def rebase_debt(new_staked: int, acc: int, settled_debt: int, old_staked: int) -> int:
    """Carry a settled position's remainder over to a new stake size."""
    remainder = old_staked * acc - settled_debt
    return new_staked * acc - remainder


def pending_amount(staked: int, acc: int, reward_debt: int, claimable: int) -> int:
    return accrued_scaled(staked, acc, reward_debt) // ACC_SCALE + claimable


def distribute(total: int, total_staked: int) -> tuple[int, int]:
    """Spread `total` across `total_staked` units.

    Returns `(delta_acc, dust)`: the accumulator increment and the part of
    `total` it does not cover. `dust` is computed with a ceiling so that the
    sum of all future per-participant credits never exceeds `total - dust`.
    """
    if total_staked <= 0:
        raise ValueError("total_staked must be positive")
    if total < 0:
        raise ValueError("total must be non-negative")
    delta_acc = (total * ACC_SCALE) // total_staked
    represented = ceil_div(delta_acc * total_staked, ACC_SCALE)
    return delta_acc, total - represented
