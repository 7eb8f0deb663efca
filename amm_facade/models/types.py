"""Shared type definitions for facade models.

These types are used by the request models and by every component that
handles asset identifiers.
"""

import re
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from amm_facade.constants import UINT256_MAX, ZERO_ADDRESS


def validate_uint256(value: Any) -> str:
    """Validate that a value is a valid uint256 decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid uint256 as decimal string

    Raises:
        ValueError: If value is not a valid non-negative integer within uint256 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint256 must be string or int, got bool")
    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")

    return str(int_value)


ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"
_ADDRESS_RE = re.compile(ADDRESS_PATTERN)

# Asset identifier (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=ADDRESS_PATTERN)]

# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize an address to lowercase with 0x prefix.

    Args:
        address: An address (with or without 0x prefix)
        validate: If True, raises ValueError for invalid addresses.

    Returns:
        Lowercase address with 0x prefix

    Raises:
        ValueError: If validate=True and address is not a valid address
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise ValueError(f"Invalid address: {address}")

    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a well-formed 160-bit address."""
    if not isinstance(address, str):
        return False
    # int(x, 16) alone would also accept underscores and surrounding whitespace
    return _ADDRESS_RE.fullmatch(address) is not None


def is_zero_address(address: str) -> bool:
    """True if the address is the null asset handle."""
    return normalize_address(address) == ZERO_ADDRESS


def address_value(address: str) -> int:
    """Raw 160-bit integer value of an address, used for canonical ordering."""
    return int(normalize_address(address), 16)
