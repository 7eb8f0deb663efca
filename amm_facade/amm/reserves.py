"""Reserve oracle: fresh, canonically ordered reserve reads for a pool."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from amm_facade.errors import InvalidAssetError, PoolNotFoundError
from amm_facade.interfaces import ExecutionEnvironment, Pair, PoolRegistry
from amm_facade.models.types import normalize_address
from amm_facade.ordering import sort_tokens

logger = structlog.get_logger()


@dataclass(frozen=True)
class PoolSnapshot:
    """Reserves of a pool as read at one point in a call."""

    address: str
    token0: str
    token1: str
    reserve0: int
    reserve1: int
    block_timestamp_last: int = 0

    def get_reserves(self, token_in: str) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        token_in_norm = normalize_address(token_in)
        if token_in_norm == self.token0:
            return self.reserve0, self.reserve1
        elif token_in_norm == self.token1:
            return self.reserve1, self.reserve0
        else:
            raise InvalidAssetError(f"Token {token_in} not in pool {self.address}")

    def get_token_out(self, token_in: str) -> str:
        """Get the output token for a given input token."""
        token_in_norm = normalize_address(token_in)
        if token_in_norm == self.token0:
            return self.token1
        elif token_in_norm == self.token1:
            return self.token0
        else:
            raise InvalidAssetError(f"Token {token_in} not in pool {self.address}")

    def amounts_out(self, token_in: str, amount_out: int) -> tuple[int, int]:
        """Map an output amount onto (amount0_out, amount1_out) for the pool's swap."""
        if self.get_token_out(token_in) == self.token0:
            return amount_out, 0
        return 0, amount_out

    @property
    def is_empty(self) -> bool:
        return self.reserve0 == 0 or self.reserve1 == 0


class ReserveOracle:
    """Read-only accessor for pool reserves.

    Nothing is cached: every call reads the pool's current state.

    Args:
        env: Execution environment used to look up contracts
        factory: Address of the pool registry
    """

    def __init__(self, env: ExecutionEnvironment, factory: str) -> None:
        self.env = env
        self.factory = normalize_address(factory)

    @property
    def registry(self) -> PoolRegistry:
        registry: PoolRegistry = self.env.contract(self.factory)
        return registry

    def resolve(self, token_a: str, token_b: str) -> str:
        """Return the pool address for a pair (order independent).

        Raises:
            InvalidAssetError: If the pair is zero or identical
            PoolNotFoundError: If no pool exists for the pair
        """
        sort_tokens(token_a, token_b)
        address = self.registry.get_pair(token_a, token_b)
        if address is None:
            raise PoolNotFoundError(
                f"No pool for {normalize_address(token_a)}/{normalize_address(token_b)}"
            )
        return address

    def pool(self, token_a: str, token_b: str) -> Pair:
        """Return the pool contract for a pair."""
        pool: Pair = self.env.contract(self.resolve(token_a, token_b))
        return pool

    def snapshot(self, token_a: str, token_b: str) -> PoolSnapshot:
        """Read current reserves for a pair, tagged with canonical token order."""
        pool = self.pool(token_a, token_b)
        token0, token1 = sort_tokens(token_a, token_b)
        reserve0, reserve1, block_timestamp_last = pool.get_reserves()
        return PoolSnapshot(
            address=normalize_address(pool.address),
            token0=token0,
            token1=token1,
            reserve0=reserve0,
            reserve1=reserve1,
            block_timestamp_last=block_timestamp_last,
        )

    def get_reserves(self, token_a: str, token_b: str) -> tuple[int, int]:
        """Reserves ordered as (reserve_a, reserve_b) to match the argument order."""
        return self.snapshot(token_a, token_b).get_reserves(token_a)


__all__ = ["PoolSnapshot", "ReserveOracle"]
