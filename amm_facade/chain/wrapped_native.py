"""Wrapped native currency: 1 token per native unit held in custody."""

from __future__ import annotations

from amm_facade.chain.state import Chain
from amm_facade.chain.token import FungibleToken
from amm_facade.constants import NATIVE_DECIMALS
from amm_facade.errors import NativeTransferFailedError


class WrappedNative(FungibleToken):
    """Fungible token backed one-to-one by native value held at its own address."""

    def __init__(self, chain: Chain, address: str, symbol: str = "WNATIVE") -> None:
        super().__init__(chain, address, symbol=symbol, decimals=NATIVE_DECIMALS)

    def deposit(self, sender: str, value: int) -> None:
        """Take value native units from sender and credit sender the same amount of tokens."""
        self.chain.transfer_native(sender, self.address, value)
        self.mint(sender, value)

    def withdraw(self, sender: str, amount: int) -> None:
        """Burn tokens from sender and release the same native value to sender.

        Raises:
            NativeTransferFailedError: If sender lacks tokens or cannot receive native value
        """
        balance = self.balance_of(sender)
        if amount < 0 or balance < amount:
            raise NativeTransferFailedError(
                f"Cannot unwrap {amount} for {sender}: wrapped balance is {balance}"
            )
        self.burn(sender, amount)
        self.chain.transfer_native(self.address, sender, amount)


__all__ = ["WrappedNative"]
