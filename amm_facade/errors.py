"""Facade error classes.

Every failure aborts the whole call; nothing here is recovered locally.
Each error carries a stable ``kind`` identifier and a human-readable reason.
"""


class FacadeError(Exception):
    """Base error for facade operations."""

    kind = "facade_error"

    def __init__(self, reason: str = "") -> None:
        super().__init__(reason or self.kind)
        self.reason = reason or self.kind


class InvalidAssetError(FacadeError):
    """Asset is zero, identical to its counterpart, or forbidden for the operation."""

    kind = "invalid_asset"


class ZeroAssetError(InvalidAssetError):
    """Asset identifier is the null handle."""

    kind = "zero_asset"


class IdenticalAssetsError(InvalidAssetError):
    """Both sides of a pair are the same asset."""

    kind = "identical_assets"


class InvalidAmountError(FacadeError):
    """Amount parameter is zero or inconsistent with the sent value."""

    kind = "invalid_amount"


class InsufficientInputAmountError(InvalidAmountError):
    """Pricing was asked for a zero input or output."""

    kind = "insufficient_input_amount"


class PoolNotFoundError(FacadeError):
    """No pool exists for the asset pair."""

    kind = "pool_not_found"


class InsufficientLiquidityError(FacadeError):
    """A reserve is zero or too small for the requested amount."""

    kind = "insufficient_liquidity"


class SlippageExceededError(FacadeError):
    """Computed amount is below the caller's minimum."""

    kind = "slippage_exceeded"


class DeadlineExceededError(FacadeError):
    """Call executed after the caller's deadline."""

    kind = "deadline_exceeded"


class TransferFailedError(FacadeError):
    """Fungible asset movement failed (balance, allowance or invariant)."""

    kind = "transfer_failed"


class NativeTransferFailedError(FacadeError):
    """Wrapping, unwrapping or forwarding native value failed."""

    kind = "native_transfer_failed"


class RefundFailedError(FacadeError):
    """Unused input could not be returned to the caller."""

    kind = "refund_failed"


class ArithmeticOverflowError(FacadeError, ArithmeticError):
    """Value exceeds the width allowed for a computation or storage slot."""

    kind = "arithmetic_overflow"


__all__ = [
    "FacadeError",
    "InvalidAssetError",
    "ZeroAssetError",
    "IdenticalAssetsError",
    "InvalidAmountError",
    "InsufficientInputAmountError",
    "PoolNotFoundError",
    "InsufficientLiquidityError",
    "SlippageExceededError",
    "DeadlineExceededError",
    "TransferFailedError",
    "NativeTransferFailedError",
    "RefundFailedError",
    "ArithmeticOverflowError",
]
