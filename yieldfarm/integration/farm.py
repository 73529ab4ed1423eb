"""
Staking ledger shell.

This is an imperative-shell wrapper around the functional core:
- Runs each operation through the pure kernel `step()` (checks).
- Commits the new pool and caller position to the owned state (effects).
- Calls the external custody capability (interactions).
- Restores the exact pre-call state if the transfer fails.
- Emits the operation's event once everything succeeded.

A reentrancy flag is held for the whole of every mutating operation, so a
custody callback that re-enters the ledger is rejected with `ReentrantCall`.
Read-only views stay available during a transfer and see committed state.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from ..core.engine import pending_rewards as kernel_pending_rewards
from ..core.engine import rejection_error, step
from ..core.errors import FarmError, ReentrantCall, TransferFailed
from ..core.invariants import check_all
from ..core.types import Action, ActionParams, Effect, PoolState, StakerPosition
from ..state.stakers import ParticipantId, StakerTable
from .config import FarmConfig
from .custody import AssetCustody, Authority
from .events import EventLog, FarmEvent, Subscriber

logger = logging.getLogger(__name__)

TransferFn = Callable[[int], bool]


class YieldFarm:
    """
    Single-asset staking ledger with operator-funded rewards.

    State (`pool`, `stakers`) is injected or created fresh; it is owned by this
    object and only mutated through the four operations.
    """

    def __init__(
        self,
        *,
        stake_custody: AssetCustody,
        reward_custody: AssetCustody,
        authority: Authority,
        config: Optional[FarmConfig] = None,
        pool: Optional[PoolState] = None,
        stakers: Optional[StakerTable] = None,
    ) -> None:
        self.config = config if config is not None else FarmConfig()
        self.stake_custody = stake_custody
        self.reward_custody = reward_custody
        self.authority = authority
        self._pool = pool if pool is not None else PoolState()
        self._stakers = stakers if stakers is not None else StakerTable()
        if self._stakers.total_staked != self._pool.total_staked:
            raise ValueError(
                f"stakers sum {self._stakers.total_staked} != pool total_staked {self._pool.total_staked}"
            )
        for participant, position in self._stakers.items_sorted():
            violations = check_all(self._pool, position)
            if violations:
                raise ValueError(f"position {participant!r} violates {', '.join(violations)}")
        self._events = EventLog()
        self._entered = False

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def stake(self, caller: ParticipantId, amount: int) -> None:
        self._execute(
            caller,
            ActionParams(action=Action.STAKE, amount=amount),
            lambda amt: self.stake_custody.transfer_in(caller, amt),
        )

    def withdraw(self, caller: ParticipantId, amount: int) -> None:
        self._execute(
            caller,
            ActionParams(action=Action.WITHDRAW, amount=amount),
            lambda amt: self.stake_custody.transfer_out(caller, amt),
        )

    def add_rewards(self, caller: ParticipantId, amount: int) -> None:
        """Operator-only: pull `amount` of the reward asset and distribute it."""
        self._execute(
            caller,
            ActionParams(
                action=Action.ADD_REWARDS,
                amount=amount,
                auth_ok=bool(self.authority.is_operator(caller)),
            ),
            lambda amt: self.reward_custody.transfer_in(caller, amt),
        )

    def claim_rewards(self, caller: ParticipantId) -> int:
        """Pay out everything owed to `caller`; returns the amount transferred."""
        effect = self._execute(
            caller,
            ActionParams(action=Action.CLAIM_REWARDS),
            lambda amt: self.reward_custody.transfer_out(caller, amt),
        )
        return effect.amount

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def pending_rewards(self, participant: ParticipantId) -> int:
        return kernel_pending_rewards(self._pool, self._stakers.get(participant))

    def position(self, participant: ParticipantId) -> StakerPosition:
        """The participant's record (zero-valued if they never staked)."""
        return self._stakers.get(participant)

    def positions(self) -> List[Tuple[ParticipantId, StakerPosition]]:
        return self._stakers.items_sorted()

    def has_record(self, participant: ParticipantId) -> bool:
        return participant in self._stakers

    @property
    def pool(self) -> PoolState:
        return self._pool

    @property
    def total_staked(self) -> int:
        return self._pool.total_staked

    @property
    def total_rewards(self) -> int:
        """Cumulative rewards injected by the operator."""
        return self._pool.total_rewards_injected

    @property
    def acc_reward_per_share(self) -> int:
        return self._pool.acc_reward_per_share

    @property
    def stake_asset(self) -> str:
        return self.config.stake_asset

    @property
    def reward_asset(self) -> str:
        return self.config.reward_asset

    @property
    def events(self) -> Tuple[FarmEvent, ...]:
        return self._events.all()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        return self._events.subscribe(callback)

    def verify_invariants(self) -> List[str]:
        """Full-table audit. Returns violated invariant IDs (empty = all pass)."""
        violations: List[str] = []
        if not self._stakers.verify_total(self._pool.total_staked):
            violations.append("inv_total_staked_matches_positions")
        owed = 0
        for participant, position in self._stakers.items_sorted():
            for inv_id in check_all(self._pool, position):
                violations.append(f"{inv_id}:{participant}")
            owed += kernel_pending_rewards(self._pool, position)
        if owed + self._pool.undistributed_rewards > self._pool.reward_reserve:
            violations.append("inv_rewards_conserved")
        return violations

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _execute(self, caller: ParticipantId, params: ActionParams, transfer: TransferFn) -> Effect:
        op = params.action.value
        if self._entered:
            logger.warning("%s rejected for %s: reentrant call", op, caller)
            raise ReentrantCall(f"{op} called while another operation is in progress")
        if not isinstance(caller, str) or not caller:
            raise TypeError("caller must be a non-empty str")

        self._entered = True
        try:
            effect = self._commit_and_transfer(caller, params, transfer)
        finally:
            self._entered = False

        logger.info("%s accepted participant=%s amount=%s", op, caller, effect.amount)
        self._events.record(caller, effect)
        return effect

    def _commit_and_transfer(self, caller: ParticipantId, params: ActionParams, transfer: TransferFn) -> Effect:
        op = params.action.value
        pre_pool = self._pool
        pre_record = self._stakers.lookup(caller)

        result = step(
            pre_pool,
            pre_record if pre_record is not None else StakerPosition(),
            params,
            policy=self.config.zero_stake_policy,
            max_amount=self.config.max_amount,
        )
        if not result.accepted:
            reason = result.rejection or ""
            logger.warning("%s rejected for %s: %s", op, caller, reason)
            raise _describe(rejection_error(reason), op, caller, params.amount)

        assert result.pool is not None and result.position is not None and result.effect is not None
        effect = result.effect
        if effect.settled:
            logger.debug("settled %s for %s before %s", effect.settled, caller, op)

        self._pool = result.pool
        self._store(caller, pre_record, result.position)

        try:
            ok = transfer(effect.amount)
        except Exception as exc:
            self._rollback(caller, pre_pool, pre_record)
            logger.warning("%s transfer raised for %s; state rolled back", op, caller, exc_info=True)
            raise TransferFailed(f"{op} transfer of {effect.amount} for {caller} raised: {exc}") from exc
        if not ok:
            self._rollback(caller, pre_pool, pre_record)
            logger.warning("%s transfer failed for %s; state rolled back", op, caller)
            raise TransferFailed(f"{op} transfer of {effect.amount} for {caller} failed")
        return effect

    def _store(
        self,
        caller: ParticipantId,
        pre_record: Optional[StakerPosition],
        position: StakerPosition,
    ) -> None:
        if position.is_empty() and (pre_record is None or self.config.prune_empty_positions):
            self._stakers.discard(caller)
            return
        self._stakers.put(caller, position)

    def _rollback(
        self,
        caller: ParticipantId,
        pre_pool: PoolState,
        pre_record: Optional[StakerPosition],
    ) -> None:
        self._pool = pre_pool
        self._stakers.restore(caller, pre_record)


def _describe(err: FarmError, op: str, caller: str, amount: int) -> FarmError:
    messages = {
        "invalid_amount": f"{op}: amount must be a positive int within bounds, got {amount!r}",
        "insufficient_stake": f"{op}: {caller} has insufficient staked amount for {amount}",
        "unauthorized": f"{op}: {caller} is not an operator",
        "no_stakers": f"{op}: nothing is staked",
        "no_rewards_available": f"{op}: no rewards to claim for {caller}",
    }
    msg = messages.get(err.code)
    if msg is None:
        return err
    return type(err)(msg)
