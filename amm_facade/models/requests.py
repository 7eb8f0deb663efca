"""Pydantic request and response models for the HTTP service.

Amounts travel as decimal strings so values above 2^53 survive JSON.
"""

from pydantic import BaseModel, ConfigDict, Field

from amm_facade.models.types import Address, Uint256


class FacadeRequest(BaseModel):
    """Common fields: who is calling."""

    model_config = ConfigDict(populate_by_name=True)

    sender: Address


class SellNativeRequest(FacadeRequest):
    target_asset: Address = Field(alias="targetAsset")
    value: Uint256
    min_out: Uint256 = Field(alias="minOut")
    deadline: int | None = None


class SellAssetRequest(FacadeRequest):
    source_asset: Address = Field(alias="sourceAsset")
    amount_in: Uint256 = Field(alias="amountIn")
    min_out: Uint256 = Field(alias="minOut")
    deadline: int | None = None


class AddLiquidityRequest(FacadeRequest):
    asset: Address
    value: Uint256
    amount_desired: Uint256 = Field(alias="amountDesired")
    native_amount: Uint256 = Field(alias="nativeAmount")
    amount_min: Uint256 = Field(alias="amountMin")
    native_amount_min: Uint256 = Field(alias="nativeAmountMin")
    recipient: Address
    deadline: int


class RemoveLiquidityRequest(FacadeRequest):
    asset: Address
    shares: Uint256
    amount_min: Uint256 = Field(alias="amountMin")
    native_amount_min: Uint256 = Field(alias="nativeAmountMin")
    recipient: Address
    deadline: int


class QuoteRequest(BaseModel):
    """Exact-input quote when amountIn is given, exact-output when amountOut is."""

    model_config = ConfigDict(populate_by_name=True)

    asset_in: Address = Field(alias="assetIn")
    asset_out: Address = Field(alias="assetOut")
    amount_in: Uint256 | None = Field(default=None, alias="amountIn")
    amount_out: Uint256 | None = Field(default=None, alias="amountOut")


class QuoteResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount_in: Uint256 = Field(serialization_alias="amountIn")
    amount_out: Uint256 = Field(serialization_alias="amountOut")


class ReservesResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pool: Address
    reserve_a: Uint256 = Field(serialization_alias="reserveA")
    reserve_b: Uint256 = Field(serialization_alias="reserveB")


class SwapResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pool: Address
    token_in: Address = Field(serialization_alias="tokenIn")
    token_out: Address = Field(serialization_alias="tokenOut")
    amount_in: Uint256 = Field(serialization_alias="amountIn")
    amount_out: Uint256 = Field(serialization_alias="amountOut")
    recipient: Address


class AddLiquidityResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount_token: Uint256 = Field(serialization_alias="amountToken")
    amount_native: Uint256 = Field(serialization_alias="amountNative")
    shares: Uint256
    refund_token: Uint256 = Field(serialization_alias="refundToken")
    refund_native: Uint256 = Field(serialization_alias="refundNative")


class RemoveLiquidityResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount_token: Uint256 = Field(serialization_alias="amountToken")
    amount_native: Uint256 = Field(serialization_alias="amountNative")


class ErrorResponse(BaseModel):
    error: str
    reason: str


class CalldataResponse(BaseModel):
    """A router call equivalent to a facade operation, ready to submit on-chain."""

    model_config = ConfigDict(populate_by_name=True)

    target: Address
    value: Uint256
    call_data: str = Field(serialization_alias="callData")
