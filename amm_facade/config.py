"""Facade configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from amm_facade.amm.pricing import FeeRate
from amm_facade.constants import DEFAULT_FEE_DENOMINATOR, DEFAULT_FEE_NUMERATOR
from amm_facade.models.types import is_valid_address, is_zero_address, normalize_address


def _validate_contract_address(name: str, address: str) -> str:
    """Validate and normalize a collaborator address.

    Raises:
        ValueError: If the address is malformed or the zero address
    """
    normalized = normalize_address(address)
    if not is_valid_address(normalized) or is_zero_address(normalized):
        raise ValueError(f"Invalid {name} address: {address} (must be 0x + 40 hex chars, non-zero)")
    return normalized


@dataclass(frozen=True)
class FacadeConfig:
    """Immutable configuration of one facade instance.

    Attributes:
        factory: Pool registry address
        router: Liquidity primitive address
        wrapped_native: Address of the fungible representation of the native asset
        fee_numerator: Share of the input that counts towards the price (997)
        fee_denominator: Fee base (1000)
    """

    factory: str
    router: str
    wrapped_native: str
    fee_numerator: int = DEFAULT_FEE_NUMERATOR
    fee_denominator: int = DEFAULT_FEE_DENOMINATOR

    def __post_init__(self) -> None:
        object.__setattr__(self, "factory", _validate_contract_address("factory", self.factory))
        object.__setattr__(self, "router", _validate_contract_address("router", self.router))
        object.__setattr__(
            self,
            "wrapped_native",
            _validate_contract_address("wrapped native", self.wrapped_native),
        )
        # Raises ValueError for an invalid numerator/denominator pair
        FeeRate(numerator=self.fee_numerator, denominator=self.fee_denominator)

    @property
    def fee(self) -> FeeRate:
        return FeeRate(numerator=self.fee_numerator, denominator=self.fee_denominator)

    @classmethod
    def from_env(cls, factory: str, router: str, wrapped_native: str) -> FacadeConfig:
        """Build a config, reading fee overrides from the environment.

        Environment variables:
        - AMM_FACADE_FEE_NUMERATOR (default: 997)
        - AMM_FACADE_FEE_DENOMINATOR (default: 1000)
        """
        return cls(
            factory=factory,
            router=router,
            wrapped_native=wrapped_native,
            fee_numerator=int(
                os.environ.get("AMM_FACADE_FEE_NUMERATOR", str(DEFAULT_FEE_NUMERATOR))
            ),
            fee_denominator=int(
                os.environ.get("AMM_FACADE_FEE_DENOMINATOR", str(DEFAULT_FEE_DENOMINATOR))
            ),
        )


__all__ = ["FacadeConfig"]
