"""In-memory pool registry."""

from __future__ import annotations

import structlog

from amm_facade.amm.pricing import DEFAULT_FEE, FeeRate
from amm_facade.chain.pair import Pair
from amm_facade.chain.state import Chain
from amm_facade.errors import InvalidAssetError, PoolNotFoundError
from amm_facade.models.types import normalize_address
from amm_facade.ordering import sort_tokens

logger = structlog.get_logger()


class Factory:
    """Creates pools and maps unordered asset pairs to pool addresses.

    Pools are keyed by sort_tokens(), the same ordering the facade uses.
    """

    def __init__(self, chain: Chain, address: str, fee: FeeRate = DEFAULT_FEE) -> None:
        self.chain = chain
        self.address = normalize_address(address, validate=True)
        self.fee = fee

    def get_pair(self, token_a: str, token_b: str) -> str | None:
        """Get the pool address for a pair (order independent), or None."""
        return self.chain.state.pairs.get(sort_tokens(token_a, token_b))

    def pair_for(self, token_a: str, token_b: str) -> Pair:
        """Get the pool contract for a pair.

        Raises:
            PoolNotFoundError: If the pair has no pool
        """
        address = self.get_pair(token_a, token_b)
        if address is None:
            raise PoolNotFoundError(f"No pool for {token_a}/{token_b}")
        pair: Pair = self.chain.contract(address)
        return pair

    def create_pair(self, token_a: str, token_b: str) -> str:
        """Deploy a pool for a pair.

        Raises:
            InvalidAssetError: If the pair is zero, identical or already has a pool
        """
        token0, token1 = sort_tokens(token_a, token_b)
        if (token0, token1) in self.chain.state.pairs:
            raise InvalidAssetError(f"Pool already exists for {token0}/{token1}")

        pair = Pair(self.chain, self.chain.new_address(), token0, token1, fee=self.fee)
        self.chain.deploy(pair)
        self.chain.state.pairs[(token0, token1)] = pair.address
        self.chain.state.all_pairs.append(pair.address)
        logger.info(
            "pair_created",
            pool=pair.address,
            token0=token0,
            token1=token1,
            pair_count=len(self.chain.state.all_pairs),
        )
        return pair.address

    def all_pairs(self) -> list[str]:
        return list(self.chain.state.all_pairs)


__all__ = ["Factory"]
