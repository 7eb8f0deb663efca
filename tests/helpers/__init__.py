"""Test helpers module for shared test utilities.

- constants: Account addresses and common values
- factories: Deployment seeding functions
"""

from tests.helpers.constants import (
    ALICE,
    BOB,
    CAROL,
    FAR_DEADLINE,
    TOKEN_HIGH,
    TOKEN_LOW,
    ZERO,
)
from tests.helpers.factories import LIQUIDITY_SEEDER, balances, fund, seed_pool

__all__ = [
    # Constants
    "ALICE",
    "BOB",
    "CAROL",
    "ZERO",
    "TOKEN_LOW",
    "TOKEN_HIGH",
    "FAR_DEADLINE",
    # Factories
    "LIQUIDITY_SEEDER",
    "balances",
    "fund",
    "seed_pool",
]
