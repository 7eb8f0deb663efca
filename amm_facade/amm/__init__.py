"""Constant product pricing and reserve reads."""

from amm_facade.amm.pricing import DEFAULT_FEE, ConstantProductPricing, FeeRate, pricing
from amm_facade.amm.reserves import PoolSnapshot, ReserveOracle

__all__ = [
    "FeeRate",
    "DEFAULT_FEE",
    "ConstantProductPricing",
    "pricing",
    "PoolSnapshot",
    "ReserveOracle",
]
