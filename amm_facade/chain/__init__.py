"""In-memory collaborators: ledger, tokens, native wrapper, pools, registry and router."""

from amm_facade.chain.deployment import Deployment, deploy_system
from amm_facade.chain.factory import Factory
from amm_facade.chain.pair import Pair
from amm_facade.chain.router import Router
from amm_facade.chain.state import Chain, ChainState, PoolReserves, TokenLedger
from amm_facade.chain.token import FungibleToken
from amm_facade.chain.wrapped_native import WrappedNative

__all__ = [
    "Chain",
    "ChainState",
    "PoolReserves",
    "TokenLedger",
    "FungibleToken",
    "WrappedNative",
    "Pair",
    "Factory",
    "Router",
    "Deployment",
    "deploy_system",
]
