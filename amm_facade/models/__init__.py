"""Data models for the AMM facade."""

from amm_facade.models.types import (
    Address,
    Uint256,
    address_value,
    is_valid_address,
    is_zero_address,
    normalize_address,
    validate_uint256,
)

__all__ = [
    "Address",
    "Uint256",
    "address_value",
    "is_valid_address",
    "is_zero_address",
    "normalize_address",
    "validate_uint256",
]
