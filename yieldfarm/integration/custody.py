"""
Custody and authorization capabilities (imperative shell).

The ledger treats asset movement and operator identity as external
collaborators. This module defines the interfaces the `YieldFarm` shell calls,
plus small in-memory implementations backed by `TokenLedger` for tests and
offline simulations.

Contract for implementations:
- `transfer_in` / `transfer_out` return True on success and False on failure,
  and must not partially move funds on failure.
- Raising is also treated as failure by the shell (the ledger rolls back).
"""

from __future__ import annotations

from typing import FrozenSet, Iterable

from ..state.balances import AssetId, Holder, TokenLedger


class AssetCustody:
    """Interface for moving one asset into and out of the ledger's custody."""

    def transfer_in(self, sender: str, amount: int) -> bool:
        raise NotImplementedError

    def transfer_out(self, recipient: str, amount: int) -> bool:
        raise NotImplementedError


class Authority:
    """Interface for deciding who may inject rewards."""

    def is_operator(self, caller: str) -> bool:
        raise NotImplementedError


class LedgerCustody(AssetCustody):
    """
    Custody account inside a `TokenLedger`.

    `transfer_in` pulls from the sender's balance (like a pre-approved
    `transferFrom`); it fails when the sender holds less than `amount`.
    """

    def __init__(self, ledger: TokenLedger, asset: AssetId, account: Holder = "custody") -> None:
        if not isinstance(asset, str) or not asset:
            raise TypeError("asset must be a non-empty str")
        if not isinstance(account, str) or not account:
            raise TypeError("account must be a non-empty str")
        self._ledger = ledger
        self.asset = asset
        self.account = account

    def transfer_in(self, sender: str, amount: int) -> bool:
        return self._ledger.move(sender, self.account, self.asset, amount)

    def transfer_out(self, recipient: str, amount: int) -> bool:
        return self._ledger.move(self.account, recipient, self.asset, amount)

    def balance(self) -> int:
        """Units of `asset` currently held in custody."""
        return self._ledger.get(self.account, self.asset)


class SingleOperatorAuthority(Authority):
    """The deploying owner is the only operator."""

    def __init__(self, operator: str) -> None:
        if not isinstance(operator, str) or not operator:
            raise TypeError("operator must be a non-empty str")
        self.operator = operator

    def is_operator(self, caller: str) -> bool:
        return caller == self.operator


class OperatorSetAuthority(Authority):
    def __init__(self, operators: Iterable[str]) -> None:
        ops: FrozenSet[str] = frozenset(operators)
        if not ops:
            raise ValueError("operators must be non-empty")
        for op in ops:
            if not isinstance(op, str) or not op:
                raise TypeError("operators must be non-empty strs")
        self.operators = ops

    def is_operator(self, caller: str) -> bool:
        return caller in self.operators
