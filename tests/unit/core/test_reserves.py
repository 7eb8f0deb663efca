"""Tests for the reserve oracle and pool snapshots."""

import pytest

from amm_facade.amm.reserves import PoolSnapshot, ReserveOracle
from amm_facade.errors import IdenticalAssetsError, InvalidAssetError, PoolNotFoundError
from tests.helpers import TOKEN_HIGH, TOKEN_LOW, seed_pool

POOL = "0x00000000000000000000000000000000000000ee"


@pytest.fixture
def snapshot() -> PoolSnapshot:
    return PoolSnapshot(address=POOL, token0=TOKEN_LOW, token1=TOKEN_HIGH, reserve0=100, reserve1=900)


class TestPoolSnapshot:
    def test_get_reserves_in_either_direction(self, snapshot):
        assert snapshot.get_reserves(TOKEN_LOW) == (100, 900)
        assert snapshot.get_reserves(TOKEN_HIGH) == (900, 100)

    def test_amounts_out_target_the_output_slot(self, snapshot):
        assert snapshot.amounts_out(TOKEN_LOW, 5) == (0, 5)
        assert snapshot.amounts_out(TOKEN_HIGH, 5) == (5, 0)

    def test_unknown_token(self, snapshot):
        with pytest.raises(InvalidAssetError):
            snapshot.get_reserves(POOL)

    def test_is_empty(self, snapshot):
        assert not snapshot.is_empty
        assert PoolSnapshot(POOL, TOKEN_LOW, TOKEN_HIGH, 0, 0).is_empty


class TestReserveOracle:
    def test_missing_pool(self, deployment, token):
        oracle = ReserveOracle(deployment.chain, deployment.factory.address)
        with pytest.raises(PoolNotFoundError):
            oracle.resolve(token.address, deployment.wrapped_native.address)

    def test_identical_assets(self, deployment, token):
        oracle = ReserveOracle(deployment.chain, deployment.factory.address)
        with pytest.raises(IdenticalAssetsError):
            oracle.resolve(token.address, token.address)

    def test_reads_fresh_reserves_in_argument_order(self, deployment, token):
        seed_pool(deployment, token, token_amount=3000, native_amount=5000)
        oracle = ReserveOracle(deployment.chain, deployment.factory.address)
        native = deployment.wrapped_native.address

        assert oracle.get_reserves(token.address, native) == (3000, 5000)
        assert oracle.get_reserves(native, token.address) == (5000, 3000)

        # Donation + sync changes reserves; the oracle must not cache
        pool = oracle.pool(token.address, native)
        token.mint(pool.address, 1000)
        pool.sync()
        assert oracle.get_reserves(token.address, native) == (4000, 5000)
