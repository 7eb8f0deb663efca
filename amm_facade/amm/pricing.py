"""Constant product pricing.

Pools use the constant product formula: x * y = k
The fee is taken from the input side only, so k never decreases.
"""

from __future__ import annotations

from dataclasses import dataclass

from amm_facade.constants import DEFAULT_FEE_DENOMINATOR, DEFAULT_FEE_NUMERATOR
from amm_facade.errors import InsufficientInputAmountError, InsufficientLiquidityError
from amm_facade.safe_int import S


@dataclass(frozen=True)
class FeeRate:
    """Share of the input that counts towards the price, as numerator/denominator.

    997/1000 means 0.3% of every input is retained by the pool.
    """

    numerator: int = DEFAULT_FEE_NUMERATOR
    denominator: int = DEFAULT_FEE_DENOMINATOR

    def __post_init__(self) -> None:
        if self.denominator <= 0:
            raise ValueError(f"Fee denominator must be positive: {self.denominator}")
        if not 0 < self.numerator <= self.denominator:
            raise ValueError(
                f"Fee numerator must be in (0, {self.denominator}]: {self.numerator}"
            )

    @classmethod
    def from_bps(cls, fee_bps: int) -> FeeRate:
        """Build a fee rate from basis points (30 bps = 0.3% = 9970/10000)."""
        return cls(numerator=10000 - fee_bps, denominator=10000)

    @property
    def fee_bps(self) -> int:
        """Fee in basis points, rounded down."""
        return (self.denominator - self.numerator) * 10000 // self.denominator


DEFAULT_FEE = FeeRate()


class ConstantProductPricing:
    """Constant product math.

    Formula: amount_out = (amount_in * num * reserve_out) / (reserve_in * den + amount_in * num)

    With the default fee, num/den is 997/1000.
    """

    def get_amount_out(
        self,
        amount_in: int,
        reserve_in: int,
        reserve_out: int,
        fee: FeeRate = DEFAULT_FEE,
    ) -> int:
        """Calculate output amount for an exact input.

        Args:
            amount_in: Input asset amount
            reserve_in: Reserve of the input asset in the pool
            reserve_out: Reserve of the output asset in the pool
            fee: Fee rate applied to the input

        Returns:
            Output asset amount, rounded down

        Raises:
            InsufficientInputAmountError: If amount_in is zero
            InsufficientLiquidityError: If either reserve is zero
            ArithmeticOverflowError: If an intermediate exceeds uint256
        """
        if amount_in <= 0:
            raise InsufficientInputAmountError(f"Input amount must be positive: {amount_in}")
        if reserve_in <= 0 or reserve_out <= 0:
            raise InsufficientLiquidityError(
                f"Empty reserves: reserve_in={reserve_in}, reserve_out={reserve_out}"
            )

        amount_in_with_fee = S(amount_in) * fee.numerator
        numerator = amount_in_with_fee * S(reserve_out)
        denominator = S(reserve_in) * fee.denominator + amount_in_with_fee

        return (numerator // denominator).value

    def get_amount_in(
        self,
        amount_out: int,
        reserve_in: int,
        reserve_out: int,
        fee: FeeRate = DEFAULT_FEE,
    ) -> int:
        """Calculate the minimum input that yields amount_out.

        Formula: amount_in = (res_in * out * den) / ((res_out - out) * num) + 1

        Raises:
            InsufficientInputAmountError: If amount_out is zero
            InsufficientLiquidityError: If a reserve is zero or amount_out >= reserve_out
        """
        if amount_out <= 0:
            raise InsufficientInputAmountError(f"Output amount must be positive: {amount_out}")
        if reserve_in <= 0 or reserve_out <= 0:
            raise InsufficientLiquidityError(
                f"Empty reserves: reserve_in={reserve_in}, reserve_out={reserve_out}"
            )
        if amount_out >= reserve_out:
            raise InsufficientLiquidityError(
                f"Cannot extract {amount_out} from reserve of {reserve_out}"
            )

        numerator = S(reserve_in) * S(amount_out) * fee.denominator
        denominator = (S(reserve_out) - S(amount_out)) * fee.numerator

        return ((numerator // denominator) + 1).value

    def quote(self, amount_a: int, reserve_a: int, reserve_b: int) -> int:
        """Amount of asset B worth amount_a of asset A at the current reserve ratio.

        Raises:
            InsufficientInputAmountError: If amount_a is zero
            InsufficientLiquidityError: If either reserve is zero
        """
        if amount_a <= 0:
            raise InsufficientInputAmountError(f"Amount must be positive: {amount_a}")
        if reserve_a <= 0 or reserve_b <= 0:
            raise InsufficientLiquidityError(
                f"Empty reserves: reserve_a={reserve_a}, reserve_b={reserve_b}"
            )
        return (S(amount_a) * S(reserve_b) // S(reserve_a)).value


# Singleton instance
pricing = ConstantProductPricing()


__all__ = [
    "FeeRate",
    "DEFAULT_FEE",
    "ConstantProductPricing",
    "pricing",
]
