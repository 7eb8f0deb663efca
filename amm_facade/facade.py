"""Public trading facade over native-paired constant product pools.

Four entry points move value: sell_native_for_asset, sell_asset_for_native,
add_liquidity and remove_liquidity. Each runs as one atomic unit: if any
step fails, every balance touched during the call is restored.
"""

from __future__ import annotations

import structlog

from amm_facade.amm.reserves import ReserveOracle
from amm_facade.config import FacadeConfig
from amm_facade.errors import DeadlineExceededError, InvalidAmountError
from amm_facade.interfaces import ExecutionEnvironment
from amm_facade.liquidity import LiquidityManager
from amm_facade.models.types import normalize_address
from amm_facade.swap import SwapExecutor
from amm_facade.types import CallContext, ProvisionReceipt, SwapReceipt, WithdrawalReceipt

logger = structlog.get_logger()


class Facade:
    """Stateless trading facade; all state lives in the collaborators.

    Args:
        env: Execution environment providing atomic calls and contract lookup
        address: The facade's own address (where assets in transit are held)
        config: Immutable collaborator addresses and fee rate
    """

    def __init__(self, env: ExecutionEnvironment, address: str, config: FacadeConfig) -> None:
        self.env = env
        self.address = normalize_address(address, validate=True)
        self.config = config
        self.swaps = SwapExecutor(env, config, self.address)
        self.liquidity = LiquidityManager(env, config, self.address)
        self.oracle = ReserveOracle(env, config.factory)

    def _ensure(self, deadline: int | None) -> None:
        if deadline is not None and self.env.timestamp > deadline:
            raise DeadlineExceededError(
                f"Deadline {deadline} passed (now {self.env.timestamp})"
            )

    def _receive(self, ctx: CallContext) -> None:
        """Take custody of the native value sent with the call."""
        if ctx.value < 0:
            raise InvalidAmountError(f"Negative value: {ctx.value}")
        self.env.transfer_native(ctx.sender, self.address, ctx.value)

    def _reject_value(self, ctx: CallContext) -> None:
        if ctx.value != 0:
            raise InvalidAmountError("Operation does not accept native value")

    # --- Swaps ---

    def sell_native_for_asset(
        self,
        ctx: CallContext,
        target_asset: str,
        min_out: int,
        *,
        deadline: int | None = None,
    ) -> SwapReceipt:
        """Sell all native value sent (ctx.value) for target_asset.

        Returns:
            SwapReceipt with the exact output delivered to ctx.sender
        """
        with self.env.atomic():
            self._ensure(deadline)
            self._receive(ctx)
            return self.swaps.sell_native(ctx, target_asset, min_out)

    def sell_asset_for_native(
        self,
        ctx: CallContext,
        source_asset: str,
        amount_in: int,
        min_out: int,
        *,
        deadline: int | None = None,
    ) -> SwapReceipt:
        """Sell amount_in of source_asset for native value delivered to ctx.sender."""
        with self.env.atomic():
            self._ensure(deadline)
            self._reject_value(ctx)
            return self.swaps.sell_asset(ctx, source_asset, amount_in, min_out)

    # --- Liquidity ---

    def add_liquidity(
        self,
        ctx: CallContext,
        asset: str,
        amount_desired: int,
        native_amount: int,
        amount_min: int,
        native_amount_min: int,
        recipient: str,
        deadline: int,
    ) -> ProvisionReceipt:
        """Provide asset and native liquidity; unused input is refunded to ctx.sender.

        ctx.value must be at least native_amount. Shares go to recipient.
        """
        with self.env.atomic():
            self._ensure(deadline)
            self._receive(ctx)
            return self.liquidity.provide(
                ctx,
                asset,
                amount_desired,
                native_amount,
                amount_min,
                native_amount_min,
                recipient,
                deadline,
            )

    def remove_liquidity(
        self,
        ctx: CallContext,
        asset: str,
        shares: int,
        amount_min: int,
        native_amount_min: int,
        recipient: str,
        deadline: int,
    ) -> WithdrawalReceipt:
        """Burn shares of the asset/native pool and deliver both assets to recipient."""
        with self.env.atomic():
            self._ensure(deadline)
            self._reject_value(ctx)
            return self.liquidity.withdraw(
                ctx, asset, shares, amount_min, native_amount_min, recipient, deadline
            )

    # --- Read-only ---

    def get_reserves(self, asset_a: str, asset_b: str) -> tuple[int, int]:
        """Current reserves ordered as (reserve_a, reserve_b)."""
        return self.oracle.get_reserves(asset_a, asset_b)

    def quote_sell(self, asset_in: str, asset_out: str, amount_in: int) -> int:
        """Exact output a sale of amount_in would produce at current reserves."""
        return self.swaps.quote(asset_in, asset_out, amount_in)

    def quote_buy(self, asset_in: str, asset_out: str, amount_out: int) -> int:
        """Minimum input that produces amount_out at current reserves."""
        return self.swaps.quote_exact_output(asset_in, asset_out, amount_out)


__all__ = ["Facade"]
