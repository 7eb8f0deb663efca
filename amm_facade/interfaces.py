"""Protocols for the collaborators the facade calls.

The facade never reaches into collaborator state directly. Everything it
needs from the pool engine, the token ledger and the native wrapper goes
through these interfaces, and every method may raise a FacadeError that
the facade propagates unchanged.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class FungibleAsset(Protocol):
    """Standard value-transfer contract with caller-funded allowances."""

    address: str

    def balance_of(self, owner: str) -> int: ...

    def allowance(self, owner: str, spender: str) -> int: ...

    def transfer(self, sender: str, to: str, amount: int) -> None:
        """Move amount from sender to to. Raises TransferFailedError on insufficient balance."""
        ...

    def transfer_from(self, spender: str, owner: str, to: str, amount: int) -> None:
        """Move amount from owner to to using spender's allowance.

        Raises:
            TransferFailedError: If owner's balance or spender's allowance is insufficient
        """
        ...

    def approve(self, owner: str, spender: str, amount: int) -> None: ...


@runtime_checkable
class NativeWrapper(FungibleAsset, Protocol):
    """Fungible representation of the native currency."""

    def deposit(self, sender: str, value: int) -> None:
        """Take value native units from sender and credit sender the same amount of tokens."""
        ...

    def withdraw(self, sender: str, amount: int) -> None:
        """Burn amount tokens from sender and release the native value to sender.

        Raises:
            NativeTransferFailedError: If sender lacks tokens or cannot receive native value
        """
        ...


@runtime_checkable
class Pair(FungibleAsset, Protocol):
    """A two-asset constant product pool; its fungible balance is the ownership share."""

    token0: str
    token1: str

    def get_reserves(self) -> tuple[int, int, int]:
        """Return (reserve0, reserve1, block_timestamp_last) in canonical token order."""
        ...

    def swap(self, amount0_out: int, amount1_out: int, to: str, data: bytes = b"") -> None:
        """Send the requested outputs to to.

        Precondition: the caller has ALREADY transferred the input amount into
        this pool. The pool infers the input from its balance surplus over the
        stored reserves and fails if the constant product invariant (after fee)
        would decrease. Nothing is pulled from the caller.
        """
        ...


@runtime_checkable
class PoolRegistry(Protocol):
    """Registry mapping unordered asset pairs to pool addresses."""

    def get_pair(self, token_a: str, token_b: str) -> str | None: ...

    def create_pair(self, token_a: str, token_b: str) -> str: ...


@runtime_checkable
class LiquidityProvider(Protocol):
    """Pool-provisioning and withdrawal primitive for native-paired pools."""

    address: str

    def add_liquidity_native(
        self,
        sender: str,
        value: int,
        token: str,
        amount_token_desired: int,
        amount_token_min: int,
        amount_native_min: int,
        to: str,
        deadline: int,
    ) -> tuple[int, int, int]:
        """Provision liquidity; returns (amount_token, amount_native, shares).

        Pulls the token from sender via allowance, takes value native units from
        sender and returns any unused native value to sender.
        """
        ...

    def remove_liquidity_native(
        self,
        sender: str,
        token: str,
        liquidity: int,
        amount_token_min: int,
        amount_native_min: int,
        to: str,
        deadline: int,
    ) -> tuple[int, int]:
        """Burn liquidity shares pulled from sender; returns (amount_token, amount_native)."""
        ...


@runtime_checkable
class ExecutionEnvironment(Protocol):
    """Ledger of native balances, contract directory and clock.

    atomic() must undo every effect made inside it when an exception escapes.
    """

    @property
    def timestamp(self) -> int: ...

    def atomic(self) -> AbstractContextManager[None]: ...

    def contract(self, address: str) -> Any: ...

    def native_balance_of(self, owner: str) -> int: ...

    def transfer_native(self, sender: str, to: str, amount: int) -> None: ...


__all__ = [
    "FungibleAsset",
    "NativeWrapper",
    "Pair",
    "PoolRegistry",
    "LiquidityProvider",
    "ExecutionEnvironment",
]
