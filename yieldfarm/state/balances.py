"""
In-memory token balances for the reference custody implementation.

Implements TokenLedger[Holder, AssetId] -> Amount. The staking engine never
touches this table directly; it only sees the custody capability built on top
of it (`yieldfarm.integration.custody.LedgerCustody`).
"""

from typing import Dict, Tuple


# Type aliases
Holder = str  # participant id or custody account name
AssetId = str
Amount = int  # Non-negative integer (arbitrary precision)


class TokenLedger:
    """
    Balance table mapping (holder, asset) -> amount.

    Zero balances are removed to keep the table sparse.
    """

    def __init__(self):
        self._balances: Dict[Tuple[Holder, AssetId], Amount] = {}

    def get(self, holder: Holder, asset: AssetId) -> Amount:
        """Get balance for (holder, asset). Returns 0 if not found."""
        return self._balances.get((holder, asset), 0)

    def set(self, holder: Holder, asset: AssetId, amount: Amount) -> None:
        """
        Set balance for (holder, asset).

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop((holder, asset), None)
        else:
            self._balances[(holder, asset)] = amount

    def mint(self, holder: Holder, asset: AssetId, amount: Amount) -> None:
        """Credit newly issued units (test fixtures, faucets)."""
        if amount < 0:
            raise ValueError(f"Mint amount must be non-negative: {amount}")
        self.set(holder, asset, self.get(holder, asset) + amount)

    def move(self, sender: Holder, recipient: Holder, asset: AssetId, amount: Amount) -> bool:
        """
        Move `amount` of `asset` from sender to recipient.

        Returns:
            False (and changes nothing) if the sender's balance is insufficient
        """
        if amount < 0:
            raise ValueError(f"Transfer amount must be non-negative: {amount}")
        available = self.get(sender, asset)
        if available < amount:
            return False
        self.set(sender, asset, available - amount)
        self.set(recipient, asset, self.get(recipient, asset) + amount)
        return True

    def total_supply(self, asset: AssetId) -> Amount:
        return sum(amount for (_, a), amount in self._balances.items() if a == asset)

    def get_balances_for_asset(self, asset: AssetId) -> Dict[Holder, Amount]:
        """Get all balances for a specific asset."""
        result = {}
        for (holder, a), amount in self._balances.items():
            if a == asset:
                result[holder] = amount
        return result

    def __repr__(self) -> str:
        return f"TokenLedger({len(self._balances)} entries)"
