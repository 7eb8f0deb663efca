"""In-memory fungible token."""

from __future__ import annotations

import structlog

from amm_facade.chain.state import Chain, TokenLedger
from amm_facade.constants import UINT256_MAX
from amm_facade.errors import InvalidAmountError, TransferFailedError
from amm_facade.models.types import normalize_address

logger = structlog.get_logger()


class FungibleToken:
    """Balance/allowance ledger for one asset.

    An allowance of 2^256-1 is treated as infinite and never decremented.
    """

    def __init__(
        self,
        chain: Chain,
        address: str,
        symbol: str = "TKN",
        decimals: int = 18,
    ) -> None:
        self.chain = chain
        self.address = normalize_address(address, validate=True)
        self.symbol = symbol
        self.decimals = decimals
        chain.state.ledgers.setdefault(self.address, TokenLedger())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.symbol}, {self.address})"

    @property
    def _ledger(self) -> TokenLedger:
        # Always go through chain.state: atomic() may have swapped it out
        return self.chain.state.ledgers[self.address]

    # --- Views ---

    def balance_of(self, owner: str) -> int:
        return self._ledger.balances.get(normalize_address(owner), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._ledger.allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    def total_supply(self) -> int:
        return self._ledger.total_supply

    # --- Transfers ---

    def transfer(self, sender: str, to: str, amount: int) -> None:
        """Move amount from sender to to.

        Raises:
            TransferFailedError: If the amount is negative or sender's balance is insufficient
        """
        self._move(normalize_address(sender), normalize_address(to), amount)

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None:
        """Move amount from owner to to, spending spender's allowance.

        Raises:
            TransferFailedError: If the allowance or owner's balance is insufficient
        """
        key = (normalize_address(owner), normalize_address(spender))
        allowed = self._ledger.allowances.get(key, 0)
        if allowed < amount:
            raise TransferFailedError(
                f"{self.symbol}: insufficient allowance for {key[1]}: {allowed} < {amount}"
            )
        self._move(key[0], normalize_address(to), amount)
        if allowed != UINT256_MAX:
            self._ledger.allowances[key] = allowed - amount

    def approve(self, owner: str, spender: str, amount: int) -> None:
        if not 0 <= amount <= UINT256_MAX:
            raise InvalidAmountError(f"Allowance out of range: {amount}")
        self._ledger.allowances[(normalize_address(owner), normalize_address(spender))] = amount

    # --- Supply ---

    def mint(self, to: str, amount: int) -> None:
        """Create tokens (bootstrapping and tests)."""
        if amount < 0:
            raise InvalidAmountError(f"Cannot mint negative amount: {amount}")
        ledger = self._ledger
        to_norm = normalize_address(to)
        ledger.balances[to_norm] = ledger.balances.get(to_norm, 0) + amount
        ledger.total_supply += amount

    def burn(self, owner: str, amount: int) -> None:
        """Destroy tokens held by owner.

        Raises:
            TransferFailedError: If owner's balance is insufficient
        """
        ledger = self._ledger
        owner_norm = normalize_address(owner)
        balance = ledger.balances.get(owner_norm, 0)
        if amount < 0 or balance < amount:
            raise TransferFailedError(
                f"{self.symbol}: cannot burn {amount} from {owner_norm} (balance {balance})"
            )
        ledger.balances[owner_norm] = balance - amount
        ledger.total_supply -= amount

    def _move(self, sender: str, to: str, amount: int) -> None:
        if amount < 0:
            raise TransferFailedError(f"{self.symbol}: negative transfer amount {amount}")
        ledger = self._ledger
        balance = ledger.balances.get(sender, 0)
        if balance < amount:
            raise TransferFailedError(
                f"{self.symbol}: insufficient balance for {sender}: {balance} < {amount}"
            )
        ledger.balances[sender] = balance - amount
        ledger.balances[to] = ledger.balances.get(to, 0) + amount


__all__ = ["FungibleToken"]
