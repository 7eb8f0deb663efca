"""In-memory ledger state and the Chain that owns it."""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

import structlog

from amm_facade.errors import InvalidAmountError, InvalidAssetError, NativeTransferFailedError
from amm_facade.models.types import normalize_address

logger = structlog.get_logger()


@dataclass
class TokenLedger:
    """Balances and allowances of one fungible token."""

    balances: dict[str, int] = field(default_factory=dict)
    # (owner, spender) -> remaining allowance
    allowances: dict[tuple[str, str], int] = field(default_factory=dict)
    total_supply: int = 0


@dataclass
class PoolReserves:
    """Stored reserves of one pool."""

    reserve0: int = 0
    reserve1: int = 0
    block_timestamp_last: int = 0


@dataclass
class ChainState:
    """Everything a call can mutate. Snapshotted as a unit by Chain.atomic()."""

    native: dict[str, int] = field(default_factory=dict)
    ledgers: dict[str, TokenLedger] = field(default_factory=dict)
    reserves: dict[str, PoolReserves] = field(default_factory=dict)
    # (token0, token1) -> pool address
    pairs: dict[tuple[str, str], str] = field(default_factory=dict)
    all_pairs: list[str] = field(default_factory=list)
    non_payable: set[str] = field(default_factory=set)
    timestamp: int = 0
    address_nonce: int = 0


class Chain:
    """Single-threaded execution environment with all-or-nothing calls.

    Args:
        timestamp: Initial block timestamp
        clock: Optional callable returning the current timestamp. When given,
               it replaces the stored timestamp (used by the HTTP service).
    """

    # Deployed addresses start here so they never collide with small test addresses
    ADDRESS_BASE = 0xC0DE << 144

    def __init__(self, timestamp: int = 0, clock: Callable[[], int] | None = None) -> None:
        self.state = ChainState(timestamp=timestamp)
        self._clock = clock
        self._contracts: dict[str, Any] = {}

    # --- Clock ---

    @property
    def timestamp(self) -> int:
        if self._clock is not None:
            return self._clock()
        return self.state.timestamp

    def warp(self, timestamp: int) -> None:
        """Move the stored block timestamp."""
        self.state.timestamp = timestamp

    # --- Atomicity ---

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Undo every state change made inside the block if an exception escapes.

        Nestable: an inner failure that is caught inside an outer block only
        rolls back the inner block.
        """
        saved_state = copy.deepcopy(self.state)
        saved_contracts = dict(self._contracts)
        try:
            yield
        except Exception as err:
            self.state = saved_state
            self._contracts = saved_contracts
            logger.debug("call_reverted", error=type(err).__name__, reason=str(err))
            raise

    # --- Contracts ---

    def new_address(self) -> str:
        """Allocate a fresh contract address."""
        self.state.address_nonce += 1
        return f"0x{self.ADDRESS_BASE + self.state.address_nonce:040x}"

    def deploy(self, contract: Any) -> Any:
        """Register a contract object under its address and return it."""
        address = normalize_address(contract.address)
        if address in self._contracts:
            raise ValueError(f"Address already in use: {address}")
        self._contracts[address] = contract
        return contract

    def contract(self, address: str) -> Any:
        """Look up a deployed contract.

        Raises:
            InvalidAssetError: If nothing is deployed at the address
        """
        address_norm = normalize_address(address)
        if address_norm not in self._contracts:
            raise InvalidAssetError(f"No contract at {address_norm}")
        return self._contracts[address_norm]

    def has_contract(self, address: str) -> bool:
        return normalize_address(address) in self._contracts

    # --- Native currency ---

    def native_balance_of(self, owner: str) -> int:
        return self.state.native.get(normalize_address(owner), 0)

    def mint_native(self, to: str, amount: int) -> None:
        """Create native value out of thin air (bootstrapping and tests)."""
        if amount < 0:
            raise InvalidAmountError(f"Cannot mint negative amount: {amount}")
        to_norm = normalize_address(to)
        self.state.native[to_norm] = self.state.native.get(to_norm, 0) + amount

    def set_payable(self, address: str, payable: bool) -> None:
        """Mark whether an address accepts incoming native value."""
        address_norm = normalize_address(address)
        if payable:
            self.state.non_payable.discard(address_norm)
        else:
            self.state.non_payable.add(address_norm)

    def transfer_native(self, sender: str, to: str, amount: int) -> None:
        """Move native value between accounts.

        Raises:
            NativeTransferFailedError: If the amount is negative, the sender's
                balance is insufficient or the recipient rejects native value
        """
        sender_norm, to_norm = normalize_address(sender), normalize_address(to)
        if amount < 0:
            raise NativeTransferFailedError(f"Negative native transfer: {amount}")
        if amount == 0:
            return
        if to_norm in self.state.non_payable:
            raise NativeTransferFailedError(f"Recipient {to_norm} does not accept native value")
        balance = self.state.native.get(sender_norm, 0)
        if balance < amount:
            raise NativeTransferFailedError(
                f"Insufficient native balance: {sender_norm} has {balance}, needs {amount}"
            )
        self.state.native[sender_norm] = balance - amount
        self.state.native[to_norm] = self.state.native.get(to_norm, 0) + amount


__all__ = ["TokenLedger", "PoolReserves", "ChainState", "Chain"]
