"""API endpoints for the facade simulation service."""

import time
from functools import lru_cache

import structlog
from fastapi import APIRouter, Depends, HTTPException

from amm_facade.chain import Chain, Deployment, deploy_system
from amm_facade.encoding import NO_DEADLINE, RouterCalldata
from amm_facade.models.requests import (
    AddLiquidityRequest,
    AddLiquidityResponse,
    CalldataResponse,
    QuoteRequest,
    QuoteResponse,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
    ReservesResponse,
    SellAssetRequest,
    SellNativeRequest,
    SwapResponse,
)
from amm_facade.types import CallContext, SwapReceipt

logger = structlog.get_logger()

router = APIRouter()


@lru_cache(maxsize=1)
def get_default_deployment() -> Deployment:
    """Process-wide in-memory system, clocked by wall time.

    It starts empty: no pools, no tokens and no funded accounts, and the HTTP
    surface has no way to mint or deploy. Until something seeds it in-process
    (Deployment.deploy_token, Chain.mint_native, then a first add_liquidity),
    every pool lookup fails with pool_not_found. Embedders that need a
    populated system override get_deployment instead.
    """
    return deploy_system(Chain(clock=lambda: int(time.time())))


def get_deployment() -> Deployment:
    """Dependency provider for the deployment.

    Override this in tests to inject a seeded deployment:
        app.dependency_overrides[get_deployment] = lambda: deployment
    """
    return get_default_deployment()


def _swap_response(receipt: SwapReceipt) -> SwapResponse:
    return SwapResponse(
        pool=receipt.pool_address,
        token_in=receipt.token_in,
        token_out=receipt.token_out,
        amount_in=receipt.amount_in,
        amount_out=receipt.amount_out,
        recipient=receipt.recipient,
    )


@router.get("/pools/{asset_a}/{asset_b}")
async def get_pool(
    asset_a: str, asset_b: str, deployment: Deployment = Depends(get_deployment)
) -> ReservesResponse:
    """Current reserves of a pool, ordered to match the path."""
    facade = deployment.facade
    reserve_a, reserve_b = facade.get_reserves(asset_a, asset_b)
    return ReservesResponse(
        pool=facade.oracle.resolve(asset_a, asset_b),
        reserve_a=reserve_a,
        reserve_b=reserve_b,
    )


@router.post("/quote")
async def quote(
    request: QuoteRequest, deployment: Deployment = Depends(get_deployment)
) -> QuoteResponse:
    """Quote an exact-input or exact-output swap at current reserves."""
    if (request.amount_in is None) == (request.amount_out is None):
        raise HTTPException(status_code=422, detail="Provide exactly one of amountIn, amountOut")

    facade = deployment.facade
    if request.amount_in is not None:
        amount_in = int(request.amount_in)
        amount_out = facade.quote_sell(request.asset_in, request.asset_out, amount_in)
    else:
        amount_out = int(request.amount_out)  # type: ignore[arg-type]
        amount_in = facade.quote_buy(request.asset_in, request.asset_out, amount_out)
    return QuoteResponse(amount_in=amount_in, amount_out=amount_out)


@router.post("/swap/native-for-asset")
async def sell_native_for_asset(
    request: SellNativeRequest, deployment: Deployment = Depends(get_deployment)
) -> SwapResponse:
    logger.info(
        "received_swap",
        direction="native_for_asset",
        sender=request.sender,
        asset=request.target_asset,
        value=request.value,
    )
    receipt = deployment.facade.sell_native_for_asset(
        CallContext(sender=request.sender, value=int(request.value)),
        request.target_asset,
        int(request.min_out),
        deadline=request.deadline,
    )
    return _swap_response(receipt)


@router.post("/swap/asset-for-native")
async def sell_asset_for_native(
    request: SellAssetRequest, deployment: Deployment = Depends(get_deployment)
) -> SwapResponse:
    logger.info(
        "received_swap",
        direction="asset_for_native",
        sender=request.sender,
        asset=request.source_asset,
        amount_in=request.amount_in,
    )
    receipt = deployment.facade.sell_asset_for_native(
        CallContext(sender=request.sender),
        request.source_asset,
        int(request.amount_in),
        int(request.min_out),
        deadline=request.deadline,
    )
    return _swap_response(receipt)


@router.post("/liquidity/add")
async def add_liquidity(
    request: AddLiquidityRequest, deployment: Deployment = Depends(get_deployment)
) -> AddLiquidityResponse:
    receipt = deployment.facade.add_liquidity(
        CallContext(sender=request.sender, value=int(request.value)),
        request.asset,
        int(request.amount_desired),
        int(request.native_amount),
        int(request.amount_min),
        int(request.native_amount_min),
        request.recipient,
        request.deadline,
    )
    return AddLiquidityResponse(
        amount_token=receipt.amount_token,
        amount_native=receipt.amount_native,
        shares=receipt.shares,
        refund_token=receipt.refund_token,
        refund_native=receipt.refund_native,
    )


@router.post("/liquidity/remove")
async def remove_liquidity(
    request: RemoveLiquidityRequest, deployment: Deployment = Depends(get_deployment)
) -> RemoveLiquidityResponse:
    receipt = deployment.facade.remove_liquidity(
        CallContext(sender=request.sender),
        request.asset,
        int(request.shares),
        int(request.amount_min),
        int(request.native_amount_min),
        request.recipient,
        request.deadline,
    )
    return RemoveLiquidityResponse(
        amount_token=receipt.amount_token, amount_native=receipt.amount_native
    )


@router.post("/calldata/swap/native-for-asset")
async def sell_native_for_asset_calldata(
    request: SellNativeRequest, deployment: Deployment = Depends(get_deployment)
) -> CalldataResponse:
    """Router call that performs the same swap on-chain, output going to the sender."""
    deadline = request.deadline if request.deadline is not None else NO_DEADLINE
    target, call_data = RouterCalldata(deployment.facade.config).sell_native_for_asset(
        request.target_asset, int(request.min_out), request.sender, deadline
    )
    return CalldataResponse(target=target, value=int(request.value), call_data=call_data)


@router.post("/calldata/swap/asset-for-native")
async def sell_asset_for_native_calldata(
    request: SellAssetRequest, deployment: Deployment = Depends(get_deployment)
) -> CalldataResponse:
    deadline = request.deadline if request.deadline is not None else NO_DEADLINE
    target, call_data = RouterCalldata(deployment.facade.config).sell_asset_for_native(
        request.source_asset, int(request.amount_in), int(request.min_out), request.sender, deadline
    )
    return CalldataResponse(target=target, value=0, call_data=call_data)


@router.post("/calldata/liquidity/add")
async def add_liquidity_calldata(
    request: AddLiquidityRequest, deployment: Deployment = Depends(get_deployment)
) -> CalldataResponse:
    # The router takes its native amount from the attached value
    target, call_data = RouterCalldata(deployment.facade.config).add_liquidity(
        request.asset,
        int(request.amount_desired),
        int(request.amount_min),
        int(request.native_amount_min),
        request.recipient,
        request.deadline,
    )
    return CalldataResponse(target=target, value=int(request.native_amount), call_data=call_data)


@router.post("/calldata/liquidity/remove")
async def remove_liquidity_calldata(
    request: RemoveLiquidityRequest, deployment: Deployment = Depends(get_deployment)
) -> CalldataResponse:
    target, call_data = RouterCalldata(deployment.facade.config).remove_liquidity(
        request.asset,
        int(request.shares),
        int(request.amount_min),
        int(request.native_amount_min),
        request.recipient,
        request.deadline,
    )
    return CalldataResponse(target=target, value=0, call_data=call_data)
