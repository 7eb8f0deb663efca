"""Router calldata for the four facade operations.

Lets a caller submit the same operation to an on-chain router instead of
executing it against the in-memory system.
"""

from __future__ import annotations

from typing import ClassVar

from eth_abi import encode  # type: ignore[attr-defined]

from amm_facade.config import FacadeConfig
from amm_facade.models.types import is_valid_address

# Far future, for swaps submitted without a deadline
NO_DEADLINE = 2**32 - 1


def _address_bytes(name: str, address: str) -> bytes:
    if not is_valid_address(address):
        raise ValueError(f"Invalid {name} address: {address}")
    return bytes.fromhex(address[2:])


class RouterCalldata:
    """Encodes facade operations as calls on a native-paired router.

    Every method returns (router_address, calldata).
    """

    SWAP_EXACT_NATIVE_FOR_TOKENS_SELECTOR: ClassVar[str] = "0x7ff36ab5"  # swapExactETHForTokens
    SWAP_EXACT_TOKENS_FOR_NATIVE_SELECTOR: ClassVar[str] = "0x18cbafe5"  # swapExactTokensForETH
    ADD_LIQUIDITY_NATIVE_SELECTOR: ClassVar[str] = "0xf305d719"  # addLiquidityETH
    REMOVE_LIQUIDITY_NATIVE_SELECTOR: ClassVar[str] = "0x02751cec"  # removeLiquidityETH

    def __init__(self, config: FacadeConfig) -> None:
        self.config = config

    def sell_native_for_asset(
        self,
        target_asset: str,
        min_out: int,
        recipient: str,
        deadline: int = NO_DEADLINE,
    ) -> tuple[str, str]:
        """swapExactETHForTokens(uint256,address[],address,uint256); value is sent alongside."""
        path = [
            _address_bytes("wrapped native", self.config.wrapped_native),
            _address_bytes("target asset", target_asset),
        ]
        encoded_args = encode(
            ["uint256", "address[]", "address", "uint256"],
            [min_out, path, _address_bytes("recipient", recipient), deadline],
        )
        return self.config.router, self.SWAP_EXACT_NATIVE_FOR_TOKENS_SELECTOR + encoded_args.hex()

    def sell_asset_for_native(
        self,
        source_asset: str,
        amount_in: int,
        min_out: int,
        recipient: str,
        deadline: int = NO_DEADLINE,
    ) -> tuple[str, str]:
        """swapExactTokensForETH(uint256,uint256,address[],address,uint256)."""
        path = [
            _address_bytes("source asset", source_asset),
            _address_bytes("wrapped native", self.config.wrapped_native),
        ]
        encoded_args = encode(
            ["uint256", "uint256", "address[]", "address", "uint256"],
            [amount_in, min_out, path, _address_bytes("recipient", recipient), deadline],
        )
        return self.config.router, self.SWAP_EXACT_TOKENS_FOR_NATIVE_SELECTOR + encoded_args.hex()

    def add_liquidity(
        self,
        asset: str,
        amount_desired: int,
        amount_min: int,
        native_amount_min: int,
        recipient: str,
        deadline: int,
    ) -> tuple[str, str]:
        """addLiquidityETH(address,uint256,uint256,uint256,address,uint256); value is sent alongside."""
        return self._liquidity_call(
            self.ADD_LIQUIDITY_NATIVE_SELECTOR,
            asset,
            amount_desired,
            amount_min,
            native_amount_min,
            recipient,
            deadline,
        )

    def remove_liquidity(
        self,
        asset: str,
        shares: int,
        amount_min: int,
        native_amount_min: int,
        recipient: str,
        deadline: int,
    ) -> tuple[str, str]:
        """removeLiquidityETH(address,uint256,uint256,uint256,address,uint256)."""
        return self._liquidity_call(
            self.REMOVE_LIQUIDITY_NATIVE_SELECTOR,
            asset,
            shares,
            amount_min,
            native_amount_min,
            recipient,
            deadline,
        )

    def _liquidity_call(
        self,
        selector: str,
        asset: str,
        amount: int,
        amount_min: int,
        native_amount_min: int,
        recipient: str,
        deadline: int,
    ) -> tuple[str, str]:
        encoded_args = encode(
            ["address", "uint256", "uint256", "uint256", "address", "uint256"],
            [
                _address_bytes("asset", asset),
                amount,
                amount_min,
                native_amount_min,
                _address_bytes("recipient", recipient),
                deadline,
            ],
        )
        return self.config.router, selector + encoded_args.hex()


__all__ = ["RouterCalldata", "NO_DEADLINE"]
