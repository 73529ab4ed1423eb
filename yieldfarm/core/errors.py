"""Exception types for the staking ledger.

The kernel reports rejections as stable code strings in ``StepResult``; these
exceptions carry the same codes for callers that prefer raising (see
``step_or_raise()`` in ``engine.py`` and the ``YieldFarm`` shell).
"""

from __future__ import annotations


class FarmError(Exception):
    """Base class for every rejected ledger operation."""

    code = "farm_error"


class InvalidAmount(FarmError):
    """Amount is zero, negative, not an int, or outside the parameter domain."""

    code = "invalid_amount"


class InsufficientStake(FarmError):
    """Withdrawal exceeds the caller's staked balance."""

    code = "insufficient_stake"


class Unauthorized(FarmError):
    """Non-operator attempted a privileged operation."""

    code = "unauthorized"


class NoStakers(FarmError):
    """Reward injection with zero total stake under the `reject` policy."""

    code = "no_stakers"


class NoRewardsAvailable(FarmError):
    """Claim attempted with nothing accrued."""

    code = "no_rewards_available"


class TransferFailed(FarmError):
    """The external custody capability reported failure."""

    code = "transfer_failed"


class ReentrantCall(FarmError):
    """A mutating operation was invoked while another was in progress."""

    code = "reentrant_call"


class FarmInvariantError(FarmError):
    """Raised when a post-state violates one or more invariants."""

    code = "invariant"

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")


ERRORS_BY_CODE: dict[str, type[FarmError]] = {
    cls.code: cls
    for cls in (
        InvalidAmount,
        InsufficientStake,
        Unauthorized,
        NoStakers,
        NoRewardsAvailable,
        TransferFailed,
        ReentrantCall,
    )
}
