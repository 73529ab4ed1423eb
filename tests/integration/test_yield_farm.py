# [TESTER] v1

from __future__ import annotations

import logging

import pytest

from yieldfarm.core import (
    InsufficientStake,
    InvalidAmount,
    NoRewardsAvailable,
    NoStakers,
    StakerPosition,
    Unauthorized,
    ZeroStakePolicy,
)
from yieldfarm.integration import FarmConfig, LedgerCustody, SingleOperatorAuthority, YieldFarm
from yieldfarm.state import TokenLedger

INITIAL_SUPPLY = 1_000_000
STAKE_AMOUNT = 100
REWARD_AMOUNT = 1000


def _deploy(**config):
    ledger = TokenLedger()
    ledger.mint("user1", "STAKE", INITIAL_SUPPLY)
    ledger.mint("user2", "STAKE", INITIAL_SUPPLY)
    ledger.mint("owner", "REWARD", INITIAL_SUPPLY)
    farm = YieldFarm(
        stake_custody=LedgerCustody(ledger, "STAKE", "farm"),
        reward_custody=LedgerCustody(ledger, "REWARD", "farm"),
        authority=SingleOperatorAuthority("owner"),
        config=FarmConfig(**config),
    )
    return farm, ledger


# ---------------------------------------------------------------------------
# Deployment
# ---------------------------------------------------------------------------

def test_exposes_assets_and_owner() -> None:
    farm, _ = _deploy()
    assert farm.stake_asset == "STAKE"
    assert farm.reward_asset == "REWARD"
    assert farm.authority.operator == "owner"
    assert farm.total_staked == 0
    assert farm.total_rewards == 0


# ---------------------------------------------------------------------------
# Staking
# ---------------------------------------------------------------------------

def test_stake_records_position_and_total() -> None:
    farm, ledger = _deploy()
    farm.stake("user1", STAKE_AMOUNT)

    assert farm.position("user1").staked_amount == STAKE_AMOUNT
    assert farm.total_staked == STAKE_AMOUNT
    assert ledger.get("user1", "STAKE") == INITIAL_SUPPLY - STAKE_AMOUNT
    assert ledger.get("farm", "STAKE") == STAKE_AMOUNT
    assert farm.events[-1].name == "Staked"
    assert farm.events[-1].args == ("user1", STAKE_AMOUNT)


def test_stake_zero_fails() -> None:
    farm, _ = _deploy()
    with pytest.raises(InvalidAmount, match="positive"):
        farm.stake("user1", 0)
    assert farm.events == ()


# ---------------------------------------------------------------------------
# Withdrawals
# ---------------------------------------------------------------------------

def test_withdraw_returns_stake() -> None:
    farm, ledger = _deploy()
    farm.stake("user1", STAKE_AMOUNT)
    farm.withdraw("user1", STAKE_AMOUNT)

    assert farm.position("user1").staked_amount == 0
    assert farm.total_staked == 0
    assert ledger.get("user1", "STAKE") == INITIAL_SUPPLY
    assert farm.events[-1].args == ("user1", STAKE_AMOUNT)
    assert farm.events[-1].name == "Withdrawn"


def test_withdraw_more_than_staked_fails() -> None:
    farm, _ = _deploy()
    farm.stake("user1", STAKE_AMOUNT)
    with pytest.raises(InsufficientStake):
        farm.withdraw("user1", STAKE_AMOUNT + 1)
    assert farm.total_staked == STAKE_AMOUNT


def test_withdraw_zero_fails() -> None:
    farm, _ = _deploy()
    with pytest.raises(InvalidAmount):
        farm.withdraw("user1", 0)


# ---------------------------------------------------------------------------
# Rewards
# ---------------------------------------------------------------------------

def test_owner_can_add_rewards_before_anyone_stakes() -> None:
    farm, ledger = _deploy()
    farm.add_rewards("owner", REWARD_AMOUNT)

    assert farm.total_rewards == REWARD_AMOUNT
    assert ledger.get("farm", "REWARD") == REWARD_AMOUNT
    assert farm.events[-1].name == "RewardsAdded"
    assert farm.events[-1].args == (REWARD_AMOUNT,)
    assert not farm.has_record("owner")


def test_carried_rewards_go_to_first_staker() -> None:
    farm, _ = _deploy()
    farm.add_rewards("owner", REWARD_AMOUNT)
    farm.stake("user1", STAKE_AMOUNT)
    assert farm.pending_rewards("user1") == REWARD_AMOUNT

    farm.stake("user2", 300)
    assert farm.pending_rewards("user2") == 0
    assert farm.pending_rewards("user1") == REWARD_AMOUNT


def test_reject_policy_refuses_rewards_without_stakers() -> None:
    farm, ledger = _deploy(zero_stake_policy=ZeroStakePolicy.REJECT)
    with pytest.raises(NoStakers):
        farm.add_rewards("owner", REWARD_AMOUNT)
    assert farm.total_rewards == 0
    assert ledger.get("owner", "REWARD") == INITIAL_SUPPLY


def test_non_owner_cannot_add_rewards() -> None:
    farm, _ = _deploy()
    with pytest.raises(Unauthorized, match="not an operator"):
        farm.add_rewards("user1", REWARD_AMOUNT)


def test_sole_staker_earns_whole_reward() -> None:
    farm, _ = _deploy()
    farm.stake("user1", STAKE_AMOUNT)
    farm.add_rewards("owner", REWARD_AMOUNT)
    assert farm.pending_rewards("user1") == REWARD_AMOUNT


def test_rewards_split_by_share() -> None:
    farm, _ = _deploy()
    farm.stake("user1", 100)
    farm.stake("user2", 300)
    farm.add_rewards("owner", REWARD_AMOUNT)
    assert farm.pending_rewards("user1") == 250
    assert farm.pending_rewards("user2") == 750


def test_claim_transfers_rewards() -> None:
    farm, ledger = _deploy()
    farm.stake("user1", STAKE_AMOUNT)
    farm.add_rewards("owner", REWARD_AMOUNT)

    assert farm.claim_rewards("user1") == REWARD_AMOUNT
    assert ledger.get("user1", "REWARD") == REWARD_AMOUNT
    assert farm.pending_rewards("user1") == 0
    assert farm.events[-1].name == "RewardsClaimed"
    assert farm.events[-1].args == ("user1", REWARD_AMOUNT)

    with pytest.raises(NoRewardsAvailable):
        farm.claim_rewards("user1")


def test_claim_with_nothing_accrued_fails() -> None:
    farm, _ = _deploy()
    with pytest.raises(NoRewardsAvailable, match="no rewards to claim"):
        farm.claim_rewards("user1")


def test_partial_withdraw_keeps_reward_accrued_before_it() -> None:
    farm, _ = _deploy()
    farm.stake("user1", STAKE_AMOUNT)
    farm.add_rewards("owner", REWARD_AMOUNT)
    farm.withdraw("user1", 40)

    assert farm.position("user1").claimable == REWARD_AMOUNT
    assert farm.claim_rewards("user1") == REWARD_AMOUNT

    # Later rewards follow the reduced stake.
    farm.stake("user2", 60)
    farm.add_rewards("owner", 600)
    assert farm.pending_rewards("user1") == 300
    assert farm.pending_rewards("user2") == 300


def test_full_withdraw_keeps_unclaimed_reward_record() -> None:
    farm, _ = _deploy(prune_empty_positions=True)
    farm.stake("user1", STAKE_AMOUNT)
    farm.add_rewards("owner", REWARD_AMOUNT)
    farm.withdraw("user1", STAKE_AMOUNT)

    assert farm.has_record("user1")
    assert farm.pending_rewards("user1") == REWARD_AMOUNT
    farm.claim_rewards("user1")
    assert not farm.has_record("user1")


def test_empty_records_are_kept_unless_pruning() -> None:
    farm, _ = _deploy()
    farm.stake("user1", STAKE_AMOUNT)
    farm.withdraw("user1", STAKE_AMOUNT)
    assert farm.has_record("user1")
    assert farm.position("user1") == StakerPosition()


def test_max_amount_bounds_every_amount() -> None:
    farm, _ = _deploy(max_amount=500)
    with pytest.raises(InvalidAmount):
        farm.stake("user1", 501)
    farm.stake("user1", 500)


def test_pending_rewards_is_a_pure_read() -> None:
    farm, _ = _deploy()
    farm.stake("user1", 7)
    farm.stake("user2", 3)
    farm.add_rewards("owner", 999)
    pool = farm.pool
    first = farm.pending_rewards("user1")
    assert [farm.pending_rewards("user1") for _ in range(3)] == [first] * 3
    assert farm.pool is pool
    assert farm.pending_rewards("nobody") == 0
    assert not farm.has_record("nobody")


def test_invariants_hold_after_mixed_sequence() -> None:
    farm, ledger = _deploy()
    farm.stake("user1", 333)
    farm.add_rewards("owner", 1001)
    farm.stake("user2", 667)
    farm.add_rewards("owner", 10)
    farm.withdraw("user1", 100)
    farm.claim_rewards("user2")
    farm.add_rewards("owner", 7)

    assert farm.verify_invariants() == []
    paid = farm.pool.total_rewards_paid
    outstanding = farm.pending_rewards("user1") + farm.pending_rewards("user2")
    assert paid + outstanding <= farm.total_rewards
    assert ledger.get("farm", "STAKE") == farm.total_staked


def test_injected_state_must_be_consistent() -> None:
    from yieldfarm.core import PoolState
    from yieldfarm.state import StakerTable

    ledger = TokenLedger()
    with pytest.raises(ValueError):
        YieldFarm(
            stake_custody=LedgerCustody(ledger, "STAKE"),
            reward_custody=LedgerCustody(ledger, "REWARD"),
            authority=SingleOperatorAuthority("owner"),
            pool=PoolState(total_staked=5),
            stakers=StakerTable(),
        )


def test_injected_position_with_debt_ahead_of_accumulator_is_rejected() -> None:
    from yieldfarm.core import PoolState
    from yieldfarm.state import StakerTable

    stakers = StakerTable()
    stakers.put("user1", StakerPosition(staked_amount=5, reward_debt=1))
    ledger = TokenLedger()
    with pytest.raises(ValueError, match="inv_debt_not_ahead_of_acc"):
        YieldFarm(
            stake_custody=LedgerCustody(ledger, "STAKE"),
            reward_custody=LedgerCustody(ledger, "REWARD"),
            authority=SingleOperatorAuthority("owner"),
            pool=PoolState(total_staked=5),
            stakers=stakers,
        )


def test_operations_are_logged(caplog) -> None:
    farm, _ = _deploy()
    with caplog.at_level(logging.INFO, logger="yieldfarm.integration.farm"):
        farm.stake("user1", STAKE_AMOUNT)
        with pytest.raises(InvalidAmount):
            farm.stake("user1", 0)
    messages = [r.getMessage() for r in caplog.records]
    assert any("stake accepted participant=user1 amount=100" in m for m in messages)
    assert any("stake rejected for user1: invalid_amount" in m for m in messages)
