"""Canonical ordering of the two assets in a pool.

Pool reserve slots are assigned once, at pool creation, in this order.
The registry and the facade both call sort_tokens so the assignment can
never drift between them.
"""

from amm_facade.errors import IdenticalAssetsError, InvalidAssetError, ZeroAssetError
from amm_facade.models.types import address_value, is_valid_address, normalize_address


def sort_tokens(token_a: str, token_b: str) -> tuple[str, str]:
    """Return the two asset identifiers with the smaller raw value first.

    Args:
        token_a: First asset identifier (any case)
        token_b: Second asset identifier (any case)

    Returns:
        Tuple of (token0, token1), both normalized to lowercase

    Raises:
        IdenticalAssetsError: If both identifiers are the same asset
        ZeroAssetError: If either identifier is the null handle
    """
    for token in (token_a, token_b):
        if not is_valid_address(normalize_address(token)):
            raise InvalidAssetError(f"Malformed asset identifier: {token}")

    a, b = normalize_address(token_a), normalize_address(token_b)
    value_a, value_b = address_value(a), address_value(b)
    if value_a == value_b:
        raise IdenticalAssetsError(f"Identical assets: {a}")

    token0, token1 = (a, b) if value_a < value_b else (b, a)
    if min(value_a, value_b) == 0:
        raise ZeroAssetError("Zero asset in pair")
    return token0, token1


__all__ = ["sort_tokens"]
