# [TESTER] v1

from __future__ import annotations

import pytest

from yieldfarm.core.types import StakerPosition
from yieldfarm.state import StakerTable, TokenLedger


def test_unknown_participant_reads_as_zero_position() -> None:
    table = StakerTable()
    assert table.get("alice") == StakerPosition()
    assert table.lookup("alice") is None
    assert "alice" not in table


def test_running_total_tracks_puts_and_discards() -> None:
    table = StakerTable()
    table.put("alice", StakerPosition(staked_amount=100))
    table.put("bob", StakerPosition(staked_amount=300))
    table.put("alice", StakerPosition(staked_amount=40, claimable=5))
    assert table.total_staked == 340
    assert table.verify_total(340)

    table.discard("bob")
    table.discard("nobody")
    assert table.total_staked == 40
    assert table.verify_total(40)
    assert not table.verify_total(41)


def test_restore_puts_back_missing_record() -> None:
    table = StakerTable()
    before = table.lookup("alice")
    table.put("alice", StakerPosition(staked_amount=9))
    table.restore("alice", before)
    assert "alice" not in table
    assert table.total_staked == 0

    table.put("bob", StakerPosition(staked_amount=3))
    prev = table.lookup("bob")
    table.put("bob", StakerPosition(staked_amount=8))
    table.restore("bob", prev)
    assert table.get("bob") == StakerPosition(staked_amount=3)
    assert table.total_staked == 3


def test_iteration_is_sorted_regardless_of_insertion_order() -> None:
    table = StakerTable()
    table.put("carol", StakerPosition(staked_amount=1))
    table.put("alice", StakerPosition(staked_amount=2))
    table.put("bob", StakerPosition(staked_amount=3))
    assert list(table) == ["alice", "bob", "carol"]
    assert [p for p, _ in table.items_sorted()] == ["alice", "bob", "carol"]
    assert len(table) == 3


def test_put_rejects_bad_inputs() -> None:
    table = StakerTable()
    with pytest.raises(TypeError):
        table.put("", StakerPosition())
    with pytest.raises(TypeError):
        table.put("alice", {"staked_amount": 1})  # type: ignore[arg-type]


def test_token_ledger_move_is_all_or_nothing() -> None:
    ledger = TokenLedger()
    ledger.mint("alice", "STAKE", 50)
    assert ledger.move("alice", "farm", "STAKE", 20)
    assert not ledger.move("alice", "farm", "STAKE", 31)
    assert ledger.get("alice", "STAKE") == 30
    assert ledger.get("farm", "STAKE") == 20
    assert ledger.total_supply("STAKE") == 50
    assert ledger.get_balances_for_asset("STAKE") == {"alice": 30, "farm": 20}
    with pytest.raises(ValueError):
        ledger.move("alice", "farm", "STAKE", -1)
