"""Tests for the pool registry and the liquidity primitive."""

import pytest

from amm_facade.errors import (
    DeadlineExceededError,
    IdenticalAssetsError,
    InvalidAssetError,
    PoolNotFoundError,
    SlippageExceededError,
)
from tests.helpers import ALICE, BOB, FAR_DEADLINE, balances, fund, seed_pool


class TestFactory:
    def test_create_and_lookup_either_order(self, deployment, token):
        native = deployment.wrapped_native.address
        address = deployment.factory.create_pair(native, token.address)
        assert deployment.factory.get_pair(token.address, native) == address
        assert deployment.factory.get_pair(native, token.address) == address
        assert deployment.factory.all_pairs() == [address]

    def test_pool_tokens_are_canonically_ordered(self, deployment, token):
        native = deployment.wrapped_native.address
        pair = deployment.chain.contract(deployment.factory.create_pair(native, token.address))
        assert int(pair.token0, 16) < int(pair.token1, 16)

    def test_duplicate_pair(self, deployment, token):
        native = deployment.wrapped_native.address
        deployment.factory.create_pair(native, token.address)
        with pytest.raises(InvalidAssetError):
            deployment.factory.create_pair(token.address, native)

    def test_identical_pair(self, deployment, token):
        with pytest.raises(IdenticalAssetsError):
            deployment.factory.create_pair(token.address, token.address)

    def test_padded_spelling_cannot_pair_with_itself(self, deployment, token):
        with pytest.raises(InvalidAssetError):
            deployment.factory.create_pair(token.address, token.address + " ")
        assert deployment.factory.all_pairs() == []

    def test_pair_for_missing(self, deployment, token):
        assert deployment.factory.get_pair(token.address, deployment.wrapped_native.address) is None
        with pytest.raises(PoolNotFoundError):
            deployment.factory.pair_for(token.address, deployment.wrapped_native.address)


class TestAddLiquidityNative:
    def test_creates_pool_on_first_provision(self, deployment, token):
        pair = seed_pool(deployment, token, token_amount=10_000, native_amount=40_000)
        assert pair.total_supply() == 20_000
        assert deployment.chain.native_balance_of(deployment.router.address) == 0

    def test_refunds_excess_native_to_sender(self, deployment, token):
        seed_pool(deployment, token, token_amount=10_000, native_amount=40_000)
        fund(deployment, ALICE, token, 100, 1000)
        token.approve(ALICE, deployment.router.address, 100)

        amount_token, amount_native, shares = deployment.router.add_liquidity_native(
            ALICE, 1000, token.address, 100, 0, 0, ALICE, FAR_DEADLINE
        )

        assert (amount_token, amount_native) == (100, 400)
        assert balances(deployment, ALICE, token) == (0, 600)
        assert shares == 200

    def test_uses_less_token_when_native_is_short(self, deployment, token):
        seed_pool(deployment, token, token_amount=10_000, native_amount=40_000)
        fund(deployment, ALICE, token, 100, 200)
        token.approve(ALICE, deployment.router.address, 100)

        amount_token, amount_native, _ = deployment.router.add_liquidity_native(
            ALICE, 200, token.address, 100, 0, 0, ALICE, FAR_DEADLINE
        )

        assert (amount_token, amount_native) == (50, 200)
        assert token.balance_of(ALICE) == 50
        assert token.allowance(ALICE, deployment.router.address) == 50

    def test_minimum_enforced(self, deployment, token):
        seed_pool(deployment, token, token_amount=10_000, native_amount=40_000)
        fund(deployment, ALICE, token, 100, 1000)
        token.approve(ALICE, deployment.router.address, 100)

        with pytest.raises(SlippageExceededError):
            deployment.router.add_liquidity_native(
                ALICE, 1000, token.address, 100, 0, 401, ALICE, FAR_DEADLINE
            )
        assert balances(deployment, ALICE, token) == (100, 1000)

    def test_deadline(self, deployment, token):
        fund(deployment, ALICE, token, 100, 1000)
        with pytest.raises(DeadlineExceededError):
            deployment.router.add_liquidity_native(
                ALICE, 1000, token.address, 100, 0, 0, ALICE, deployment.chain.timestamp - 1
            )


class TestRemoveLiquidityNative:
    def test_burns_and_delivers_both_assets(self, deployment, token):
        pair = seed_pool(deployment, token, token_amount=10_000, native_amount=40_000)
        fund(deployment, ALICE, token, 100, 400)
        token.approve(ALICE, deployment.router.address, 100)
        _, _, shares = deployment.router.add_liquidity_native(
            ALICE, 400, token.address, 100, 0, 0, ALICE, FAR_DEADLINE
        )
        pair.approve(ALICE, deployment.router.address, shares)

        amount_token, amount_native = deployment.router.remove_liquidity_native(
            ALICE, token.address, shares, 0, 0, BOB, FAR_DEADLINE
        )

        assert (amount_token, amount_native) == (100, 400)
        assert balances(deployment, BOB, token) == (100, 400)
        assert pair.balance_of(ALICE) == 0

    def test_minimum_enforced(self, deployment, token):
        pair = seed_pool(deployment, token, token_amount=10_000, native_amount=40_000)
        fund(deployment, ALICE, token, 100, 400)
        token.approve(ALICE, deployment.router.address, 100)
        _, _, shares = deployment.router.add_liquidity_native(
            ALICE, 400, token.address, 100, 0, 0, ALICE, FAR_DEADLINE
        )
        pair.approve(ALICE, deployment.router.address, shares)
        reserves_before = pair.get_reserves()

        with pytest.raises(SlippageExceededError):
            deployment.router.remove_liquidity_native(
                ALICE, token.address, shares, 101, 0, ALICE, FAR_DEADLINE
            )
        assert pair.balance_of(ALICE) == shares
        assert pair.get_reserves() == reserves_before
