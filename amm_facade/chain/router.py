"""In-memory liquidity primitive for native-paired pools.

Computes the amounts actually consumed at the current reserve ratio,
enforces the caller's minimums and deadline, and mints or burns shares.
"""

from __future__ import annotations

import structlog

from amm_facade.amm.pricing import pricing
from amm_facade.chain.factory import Factory
from amm_facade.chain.pair import Pair
from amm_facade.chain.state import Chain
from amm_facade.chain.token import FungibleToken
from amm_facade.chain.wrapped_native import WrappedNative
from amm_facade.errors import DeadlineExceededError, SlippageExceededError
from amm_facade.models.types import normalize_address
from amm_facade.ordering import sort_tokens

logger = structlog.get_logger()


class Router:
    """Liquidity provisioning and withdrawal against the factory's pools.

    Args:
        chain: Execution environment
        address: Router address
        factory: Pool registry address
        wrapped_native: Wrapped native token address
    """

    def __init__(self, chain: Chain, address: str, factory: str, wrapped_native: str) -> None:
        self.chain = chain
        self.address = normalize_address(address, validate=True)
        self.factory = normalize_address(factory)
        self.wrapped_native = normalize_address(wrapped_native)

    @property
    def _factory(self) -> Factory:
        factory: Factory = self.chain.contract(self.factory)
        return factory

    @property
    def _wrapper(self) -> WrappedNative:
        wrapper: WrappedNative = self.chain.contract(self.wrapped_native)
        return wrapper

    def _ensure(self, deadline: int) -> None:
        if self.chain.timestamp > deadline:
            raise DeadlineExceededError(
                f"Deadline {deadline} passed (now {self.chain.timestamp})"
            )

    def _reserves(self, token_a: str, token_b: str) -> tuple[int, int]:
        """Reserves of an existing pool ordered as (reserve_a, reserve_b)."""
        pair = self._factory.pair_for(token_a, token_b)
        reserve0, reserve1, _ = pair.get_reserves()
        token0, _ = sort_tokens(token_a, token_b)
        if normalize_address(token_a) == token0:
            return reserve0, reserve1
        return reserve1, reserve0

    def _optimal_amounts(
        self,
        token_a: str,
        token_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
    ) -> tuple[int, int]:
        """Largest amounts not exceeding the desired ones that keep the pool price.

        Creates the pool first if it does not exist yet.

        Raises:
            SlippageExceededError: If the matching amount falls below its minimum
        """
        if self._factory.get_pair(token_a, token_b) is None:
            self._factory.create_pair(token_a, token_b)

        reserve_a, reserve_b = self._reserves(token_a, token_b)
        if reserve_a == 0 and reserve_b == 0:
            return amount_a_desired, amount_b_desired

        amount_b_optimal = pricing.quote(amount_a_desired, reserve_a, reserve_b)
        if amount_b_optimal <= amount_b_desired:
            if amount_b_optimal < amount_b_min:
                raise SlippageExceededError(
                    f"Insufficient B amount: {amount_b_optimal} < minimum {amount_b_min}"
                )
            return amount_a_desired, amount_b_optimal

        amount_a_optimal = pricing.quote(amount_b_desired, reserve_b, reserve_a)
        if amount_a_optimal < amount_a_min:
            raise SlippageExceededError(
                f"Insufficient A amount: {amount_a_optimal} < minimum {amount_a_min}"
            )
        return amount_a_optimal, amount_b_desired

    def add_liquidity_native(
        self,
        sender: str,
        value: int,
        token: str,
        amount_token_desired: int,
        amount_token_min: int,
        amount_native_min: int,
        to: str,
        deadline: int,
    ) -> tuple[int, int, int]:
        """Provision a token/native pool.

        Takes value native units from sender; whatever the pool ratio does not
        need is sent straight back to sender.

        Returns:
            Tuple of (amount_token, amount_native, shares)
        """
        self._ensure(deadline)
        with self.chain.atomic():
            self.chain.transfer_native(sender, self.address, value)
            amount_token, amount_native = self._optimal_amounts(
                token,
                self.wrapped_native,
                amount_token_desired,
                value,
                amount_token_min,
                amount_native_min,
            )
            pair = self._factory.pair_for(token, self.wrapped_native)
            token_contract: FungibleToken = self.chain.contract(token)
            token_contract.transfer_from(self.address, sender, pair.address, amount_token)
            self._wrapper.deposit(self.address, amount_native)
            self._wrapper.transfer(self.address, pair.address, amount_native)
            shares = pair.mint_liquidity(to)
            if value > amount_native:
                self.chain.transfer_native(self.address, sender, value - amount_native)

        logger.info(
            "liquidity_added",
            pool=pair.address,
            amount_token=amount_token,
            amount_native=amount_native,
            shares=shares,
        )
        return amount_token, amount_native, shares

    def remove_liquidity_native(
        self,
        sender: str,
        token: str,
        liquidity: int,
        amount_token_min: int,
        amount_native_min: int,
        to: str,
        deadline: int,
    ) -> tuple[int, int]:
        """Burn shares pulled from sender and deliver both assets to to.

        Returns:
            Tuple of (amount_token, amount_native)

        Raises:
            DeadlineExceededError: If called after deadline
            SlippageExceededError: If either released amount is below its minimum
        """
        self._ensure(deadline)
        with self.chain.atomic():
            pair: Pair = self._factory.pair_for(token, self.wrapped_native)
            pair.transfer_from(self.address, sender, pair.address, liquidity)
            amount0, amount1 = pair.burn_liquidity(self.address)
            token0, _ = sort_tokens(token, self.wrapped_native)
            if normalize_address(token) == token0:
                amount_token, amount_native = amount0, amount1
            else:
                amount_token, amount_native = amount1, amount0

            if amount_token < amount_token_min:
                raise SlippageExceededError(
                    f"Insufficient token amount: {amount_token} < minimum {amount_token_min}"
                )
            if amount_native < amount_native_min:
                raise SlippageExceededError(
                    f"Insufficient native amount: {amount_native} < minimum {amount_native_min}"
                )

            token_contract: FungibleToken = self.chain.contract(token)
            token_contract.transfer(self.address, to, amount_token)
            self._wrapper.withdraw(self.address, amount_native)
            self.chain.transfer_native(self.address, to, amount_native)

        logger.info(
            "liquidity_removed",
            pool=pair.address,
            amount_token=amount_token,
            amount_native=amount_native,
            shares=liquidity,
        )
        return amount_token, amount_native


__all__ = ["Router"]
