"""Call context and receipt types for facade operations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CallContext:
    """Who is calling and how much native value they sent with the call."""

    sender: str
    value: int = 0


@dataclass(frozen=True)
class SwapReceipt:
    """Exact result of a single-pool swap."""

    pool_address: str
    token_in: str
    token_out: str
    amount_in: int
    amount_out: int
    recipient: str


@dataclass(frozen=True)
class ProvisionReceipt:
    """Exact result of adding liquidity, including what was sent back."""

    amount_token: int
    amount_native: int
    shares: int
    refund_token: int = 0
    refund_native: int = 0

    def as_tuple(self) -> tuple[int, int, int]:
        return self.amount_token, self.amount_native, self.shares


@dataclass(frozen=True)
class WithdrawalReceipt:
    """Exact amounts released by removing liquidity."""

    amount_token: int
    amount_native: int
    shares: int

    def as_tuple(self) -> tuple[int, int]:
        return self.amount_token, self.amount_native


__all__ = ["CallContext", "SwapReceipt", "ProvisionReceipt", "WithdrawalReceipt"]
