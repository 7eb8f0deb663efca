"""Liquidity provision and withdrawal with exact refund accounting."""

from __future__ import annotations

import structlog

from amm_facade.amm.reserves import ReserveOracle
from amm_facade.config import FacadeConfig
from amm_facade.errors import (
    InvalidAmountError,
    InvalidAssetError,
    NativeTransferFailedError,
    RefundFailedError,
    TransferFailedError,
    ZeroAssetError,
)
from amm_facade.interfaces import ExecutionEnvironment, FungibleAsset, LiquidityProvider
from amm_facade.models.types import is_valid_address, is_zero_address, normalize_address
from amm_facade.types import CallContext, ProvisionReceipt, WithdrawalReceipt

logger = structlog.get_logger()


class LiquidityManager:
    """Moves caller funds through the liquidity primitive and returns what it did not use.

    Invariant: after every call the custodian holds none of the caller's
    token, native value or shares.

    Args:
        env: Execution environment
        config: Facade configuration (addresses)
        custodian: Address that holds assets in transit (the facade)
    """

    def __init__(self, env: ExecutionEnvironment, config: FacadeConfig, custodian: str) -> None:
        self.env = env
        self.config = config
        self.custodian = normalize_address(custodian)
        self.oracle = ReserveOracle(env, config.factory)

    @property
    def router(self) -> LiquidityProvider:
        router: LiquidityProvider = self.env.contract(self.config.router)
        return router

    def _validate_asset(self, asset: str) -> str:
        asset_norm = normalize_address(asset)
        if not is_valid_address(asset_norm):
            raise InvalidAssetError(f"Malformed asset identifier: {asset}")
        if is_zero_address(asset_norm):
            raise ZeroAssetError("Asset is the zero address")
        if asset_norm == self.config.wrapped_native:
            raise InvalidAssetError("Native asset cannot be paired with itself")
        return asset_norm

    def provide(
        self,
        ctx: CallContext,
        asset: str,
        amount_token_desired: int,
        amount_native: int,
        amount_token_min: int,
        amount_native_min: int,
        recipient: str,
        deadline: int,
    ) -> ProvisionReceipt:
        """Add liquidity to the asset/native pool.

        Expects ctx.value to already be held by the custodian; anything the
        pool does not consume goes back to ctx.sender.

        Raises:
            InvalidAmountError: If an amount is zero or ctx.value < amount_native
            RefundFailedError: If unused input cannot be returned to the caller
        """
        token_address = self._validate_asset(asset)
        if amount_token_desired <= 0:
            raise InvalidAmountError(f"Token amount must be positive: {amount_token_desired}")
        if amount_native <= 0:
            raise InvalidAmountError(f"Native amount must be positive: {amount_native}")
        if ctx.value < amount_native:
            raise InvalidAmountError(
                f"Sent value {ctx.value} is less than native amount {amount_native}"
            )

        token: FungibleAsset = self.env.contract(token_address)
        token.transfer_from(self.custodian, ctx.sender, self.custodian, amount_token_desired)
        token.approve(self.custodian, self.router.address, amount_token_desired)

        amount_token, amount_native_used, shares = self.router.add_liquidity_native(
            self.custodian,
            amount_native,
            token_address,
            amount_token_desired,
            amount_token_min,
            amount_native_min,
            recipient,
            deadline,
        )
        token.approve(self.custodian, self.router.address, 0)

        refund_native = ctx.value - amount_native_used
        refund_token = amount_token_desired - amount_token
        self._refund(ctx.sender, token, refund_token, refund_native)

        logger.info(
            "liquidity_provided",
            asset=token_address,
            amount_token=amount_token,
            amount_native=amount_native_used,
            shares=shares,
            refund_token=refund_token,
            refund_native=refund_native,
        )
        return ProvisionReceipt(
            amount_token=amount_token,
            amount_native=amount_native_used,
            shares=shares,
            refund_token=refund_token,
            refund_native=refund_native,
        )

    def withdraw(
        self,
        ctx: CallContext,
        asset: str,
        shares: int,
        amount_token_min: int,
        amount_native_min: int,
        recipient: str,
        deadline: int,
    ) -> WithdrawalReceipt:
        """Remove liquidity from the asset/native pool, delivering both assets to recipient.

        The caller must have approved the custodian for shares on the pool token.
        """
        token_address = self._validate_asset(asset)
        if shares <= 0:
            raise InvalidAmountError(f"Shares must be positive: {shares}")

        pool = self.oracle.pool(token_address, self.config.wrapped_native)
        pool.transfer_from(self.custodian, ctx.sender, self.custodian, shares)
        pool.approve(self.custodian, self.router.address, shares)

        amount_token, amount_native = self.router.remove_liquidity_native(
            self.custodian,
            token_address,
            shares,
            amount_token_min,
            amount_native_min,
            recipient,
            deadline,
        )

        logger.info(
            "liquidity_withdrawn",
            asset=token_address,
            shares=shares,
            amount_token=amount_token,
            amount_native=amount_native,
        )
        return WithdrawalReceipt(
            amount_token=amount_token, amount_native=amount_native, shares=shares
        )

    def _refund(self, to: str, token: FungibleAsset, amount_token: int, amount_native: int) -> None:
        """Return unused input to the caller. Never skipped, never swallowed."""
        try:
            if amount_native > 0:
                self.env.transfer_native(self.custodian, to, amount_native)
        except NativeTransferFailedError as err:
            raise RefundFailedError(f"Native refund of {amount_native} failed: {err.reason}") from err
        try:
            if amount_token > 0:
                token.transfer(self.custodian, to, amount_token)
        except TransferFailedError as err:
            raise RefundFailedError(f"Token refund of {amount_token} failed: {err.reason}") from err


__all__ = ["LiquidityManager"]
