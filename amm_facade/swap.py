"""Swap execution through a single native-paired pool.

Each swap is one pass: validate, resolve the pool, take custody of the
input, price it against fresh reserves, enforce the caller's minimum,
then hand the input to the pool and deliver the output.
"""

from __future__ import annotations

import structlog

from amm_facade.amm.pricing import ConstantProductPricing, pricing
from amm_facade.amm.reserves import PoolSnapshot, ReserveOracle
from amm_facade.config import FacadeConfig
from amm_facade.errors import (
    InvalidAmountError,
    InvalidAssetError,
    SlippageExceededError,
    ZeroAssetError,
)
from amm_facade.interfaces import ExecutionEnvironment, FungibleAsset, NativeWrapper, Pair
from amm_facade.models.types import is_valid_address, is_zero_address, normalize_address
from amm_facade.types import CallContext, SwapReceipt

logger = structlog.get_logger()


class SwapExecutor:
    """Sells native value for an asset, or an asset for native value.

    The executor holds custody of the input only for the duration of a call.
    It does not manage atomicity itself; the caller runs it inside
    ExecutionEnvironment.atomic().

    Args:
        env: Execution environment
        config: Facade configuration (addresses and fee)
        custodian: Address that holds assets in transit (the facade)
        amm: Pricing implementation. Defaults to the constant product singleton.
    """

    def __init__(
        self,
        env: ExecutionEnvironment,
        config: FacadeConfig,
        custodian: str,
        amm: ConstantProductPricing | None = None,
    ) -> None:
        self.env = env
        self.config = config
        self.custodian = normalize_address(custodian)
        self.amm = amm if amm is not None else pricing
        self.oracle = ReserveOracle(env, config.factory)

    @property
    def wrapper(self) -> NativeWrapper:
        wrapper: NativeWrapper = self.env.contract(self.config.wrapped_native)
        return wrapper

    def _validate(self, asset: str, amount_in: int, min_amount_out: int) -> str:
        if amount_in <= 0:
            raise InvalidAmountError(f"Input amount must be positive: {amount_in}")
        if min_amount_out <= 0:
            raise InvalidAmountError(f"Minimum output must be positive: {min_amount_out}")
        asset_norm = normalize_address(asset)
        if not is_valid_address(asset_norm):
            raise InvalidAssetError(f"Malformed asset identifier: {asset}")
        if is_zero_address(asset_norm):
            raise ZeroAssetError("Asset is the zero address")
        if asset_norm == self.config.wrapped_native:
            raise InvalidAssetError("Cannot swap the native asset for itself")
        return asset_norm

    def sell_native(self, ctx: CallContext, target_asset: str, min_amount_out: int) -> SwapReceipt:
        """Swap all native value sent with the call for target_asset, delivered to the caller.

        Expects ctx.value to already be held by the custodian.
        """
        target = self._validate(target_asset, ctx.value, min_amount_out)
        native = self.config.wrapped_native
        self.oracle.resolve(native, target)

        self.wrapper.deposit(self.custodian, ctx.value)

        return self._execute(native, target, ctx.value, min_amount_out, recipient=ctx.sender)

    def sell_asset(
        self,
        ctx: CallContext,
        source_asset: str,
        amount_in: int,
        min_amount_out: int,
    ) -> SwapReceipt:
        """Swap amount_in of source_asset for native value, delivered to the caller.

        The caller must have approved the custodian for amount_in.

        Raises:
            TransferFailedError: If the caller's balance or allowance is insufficient
            NativeTransferFailedError: If unwrapping or forwarding the output fails
        """
        source = self._validate(source_asset, amount_in, min_amount_out)
        native = self.config.wrapped_native
        self.oracle.resolve(source, native)

        token: FungibleAsset = self.env.contract(source)
        token.transfer_from(self.custodian, ctx.sender, self.custodian, amount_in)

        receipt = self._execute(source, native, amount_in, min_amount_out, recipient=self.custodian)

        self.wrapper.withdraw(self.custodian, receipt.amount_out)
        self.env.transfer_native(self.custodian, ctx.sender, receipt.amount_out)
        return SwapReceipt(
            pool_address=receipt.pool_address,
            token_in=receipt.token_in,
            token_out=receipt.token_out,
            amount_in=receipt.amount_in,
            amount_out=receipt.amount_out,
            recipient=normalize_address(ctx.sender),
        )

    def quote(self, token_in: str, token_out: str, amount_in: int) -> int:
        """Output the pool would give for amount_in right now, without executing."""
        snapshot = self.oracle.snapshot(token_in, token_out)
        reserve_in, reserve_out = snapshot.get_reserves(token_in)
        return self.amm.get_amount_out(amount_in, reserve_in, reserve_out, self.config.fee)

    def quote_exact_output(self, token_in: str, token_out: str, amount_out: int) -> int:
        """Input required right now to receive amount_out, without executing."""
        snapshot = self.oracle.snapshot(token_in, token_out)
        reserve_in, reserve_out = snapshot.get_reserves(token_in)
        return self.amm.get_amount_in(amount_out, reserve_in, reserve_out, self.config.fee)

    def _execute(
        self,
        token_in: str,
        token_out: str,
        amount_in: int,
        min_amount_out: int,
        recipient: str,
    ) -> SwapReceipt:
        snapshot: PoolSnapshot = self.oracle.snapshot(token_in, token_out)
        reserve_in, reserve_out = snapshot.get_reserves(token_in)
        amount_out = self.amm.get_amount_out(amount_in, reserve_in, reserve_out, self.config.fee)

        # Must fail before any value reaches the pool
        if amount_out < min_amount_out:
            raise SlippageExceededError(
                f"Output {amount_out} below minimum {min_amount_out}"
            )

        token: FungibleAsset = self.env.contract(token_in)
        token.transfer(self.custodian, snapshot.address, amount_in)
        amount0_out, amount1_out = snapshot.amounts_out(token_in, amount_out)
        pool: Pair = self.env.contract(snapshot.address)
        pool.swap(amount0_out, amount1_out, recipient, b"")

        logger.info(
            "swap_executed",
            pool=snapshot.address,
            token_in=token_in,
            token_out=token_out,
            amount_in=amount_in,
            amount_out=amount_out,
            reserve_in=reserve_in,
            reserve_out=reserve_out,
        )
        return SwapReceipt(
            pool_address=snapshot.address,
            token_in=token_in,
            token_out=token_out,
            amount_in=amount_in,
            amount_out=amount_out,
            recipient=normalize_address(recipient),
        )


__all__ = ["SwapExecutor"]
