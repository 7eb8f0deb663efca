"""In-memory constant product pool.

The pool's own fungible balance is the ownership share. Reserves are
stored as uint112 and only change through mint, burn, swap and sync.
"""

from __future__ import annotations

import math

import structlog

from amm_facade.amm.pricing import DEFAULT_FEE, FeeRate
from amm_facade.chain.state import Chain, PoolReserves
from amm_facade.chain.token import FungibleToken
from amm_facade.constants import MINIMUM_LIQUIDITY, UINT112_MAX, ZERO_ADDRESS
from amm_facade.errors import (
    ArithmeticOverflowError,
    InsufficientInputAmountError,
    InsufficientLiquidityError,
    InvalidAmountError,
    InvalidAssetError,
    TransferFailedError,
)
from amm_facade.models.types import normalize_address

logger = structlog.get_logger()


class Pair(FungibleToken):
    """Two-asset pool holding reserves of token0 and token1 (canonical order).

    Args:
        chain: Execution environment
        address: Pool address
        token0: Lower-valued asset of the pair
        token1: Higher-valued asset of the pair
        fee: Fee rate used by the invariant check on swap
    """

    def __init__(
        self,
        chain: Chain,
        address: str,
        token0: str,
        token1: str,
        fee: FeeRate = DEFAULT_FEE,
    ) -> None:
        super().__init__(chain, address, symbol="AMM-LP", decimals=18)
        self.token0 = normalize_address(token0)
        self.token1 = normalize_address(token1)
        self.fee = fee
        chain.state.reserves.setdefault(self.address, PoolReserves())

    @property
    def _reserves(self) -> PoolReserves:
        return self.chain.state.reserves[self.address]

    def get_reserves(self) -> tuple[int, int, int]:
        """Return (reserve0, reserve1, block_timestamp_last)."""
        reserves = self._reserves
        return reserves.reserve0, reserves.reserve1, reserves.block_timestamp_last

    def _tokens(self) -> tuple[FungibleToken, FungibleToken]:
        return self.chain.contract(self.token0), self.chain.contract(self.token1)

    def _balances(self) -> tuple[int, int]:
        token0, token1 = self._tokens()
        return token0.balance_of(self.address), token1.balance_of(self.address)

    def _update(self, balance0: int, balance1: int) -> None:
        if balance0 > UINT112_MAX or balance1 > UINT112_MAX:
            raise ArithmeticOverflowError(
                f"Reserve overflow: {balance0}, {balance1} exceed uint112"
            )
        reserves = self._reserves
        reserves.reserve0 = balance0
        reserves.reserve1 = balance1
        reserves.block_timestamp_last = self.chain.timestamp

    # --- Shares ---

    def mint_liquidity(self, to: str) -> int:
        """Issue shares for whatever was transferred in since the last update.

        Returns:
            Number of shares minted to to
        """
        reserve0, reserve1, _ = self.get_reserves()
        balance0, balance1 = self._balances()
        amount0 = balance0 - reserve0
        amount1 = balance1 - reserve1

        total_supply = self.total_supply()
        if total_supply == 0:
            liquidity = math.isqrt(amount0 * amount1) - MINIMUM_LIQUIDITY
            if liquidity > 0:
                # Permanently lock the first MINIMUM_LIQUIDITY shares
                self.mint(ZERO_ADDRESS, MINIMUM_LIQUIDITY)
        else:
            liquidity = min(amount0 * total_supply // reserve0, amount1 * total_supply // reserve1)

        if liquidity <= 0:
            raise InsufficientLiquidityError("Insufficient liquidity minted")

        self.mint(to, liquidity)
        self._update(balance0, balance1)
        logger.debug("pool_mint", pool=self.address, amount0=amount0, amount1=amount1, shares=liquidity)
        return liquidity

    def burn_liquidity(self, to: str) -> tuple[int, int]:
        """Redeem the shares held by the pool itself for a proportional cut of both reserves.

        Shares must have been transferred to the pool address beforehand.

        Returns:
            Tuple of (amount0, amount1) sent to to
        """
        token0, token1 = self._tokens()
        balance0, balance1 = self._balances()
        liquidity = self.balance_of(self.address)
        total_supply = self.total_supply()
        if total_supply == 0:
            raise InsufficientLiquidityError("Pool has no shares")

        amount0 = liquidity * balance0 // total_supply
        amount1 = liquidity * balance1 // total_supply
        if amount0 <= 0 or amount1 <= 0:
            raise InsufficientLiquidityError("Insufficient liquidity burned")

        self.burn(self.address, liquidity)
        token0.transfer(self.address, to, amount0)
        token1.transfer(self.address, to, amount1)
        self._update(*self._balances())
        logger.debug("pool_burn", pool=self.address, amount0=amount0, amount1=amount1, shares=liquidity)
        return amount0, amount1

    # --- Trading ---

    def swap(self, amount0_out: int, amount1_out: int, to: str, data: bytes = b"") -> None:
        """Send the requested outputs to to.

        Precondition: the input has already been transferred into this pool.
        The input is inferred from the balance surplus over stored reserves.
        data is accepted for interface compatibility; no callback is made.

        Raises:
            InvalidAmountError: If both outputs are zero or negative
            InsufficientLiquidityError: If an output would drain a reserve
            InsufficientInputAmountError: If no input was transferred in
            TransferFailedError: If the constant product invariant would decrease
        """
        if amount0_out < 0 or amount1_out < 0 or (amount0_out == 0 and amount1_out == 0):
            raise InvalidAmountError(f"Invalid swap outputs: {amount0_out}, {amount1_out}")
        reserve0, reserve1, _ = self.get_reserves()
        if amount0_out >= reserve0 or amount1_out >= reserve1:
            raise InsufficientLiquidityError(
                f"Outputs {amount0_out}, {amount1_out} exceed reserves {reserve0}, {reserve1}"
            )

        to_norm = normalize_address(to)
        if to_norm in (self.token0, self.token1):
            raise InvalidAssetError(f"Invalid swap recipient: {to_norm}")

        token0, token1 = self._tokens()
        if amount0_out > 0:
            token0.transfer(self.address, to_norm, amount0_out)
        if amount1_out > 0:
            token1.transfer(self.address, to_norm, amount1_out)

        balance0, balance1 = self._balances()
        amount0_in = max(balance0 - (reserve0 - amount0_out), 0)
        amount1_in = max(balance1 - (reserve1 - amount1_out), 0)
        if amount0_in == 0 and amount1_in == 0:
            raise InsufficientInputAmountError("No input transferred before swap")

        den = self.fee.denominator
        retained = den - self.fee.numerator
        balance0_adjusted = balance0 * den - amount0_in * retained
        balance1_adjusted = balance1 * den - amount1_in * retained
        if balance0_adjusted * balance1_adjusted < reserve0 * reserve1 * den * den:
            raise TransferFailedError("Constant product invariant violated")

        self._update(balance0, balance1)
        logger.debug(
            "pool_swap",
            pool=self.address,
            amount0_in=amount0_in,
            amount1_in=amount1_in,
            amount0_out=amount0_out,
            amount1_out=amount1_out,
        )

    def sync(self) -> None:
        """Force reserves to match current balances."""
        self._update(*self._balances())


__all__ = ["Pair"]
