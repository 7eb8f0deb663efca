"""Pytest configuration and fixtures."""

import pytest

from amm_facade.chain import Chain, Deployment, FungibleToken, Pair, deploy_system
from tests.helpers import seed_pool

START_TIME = 1_700_000_000


@pytest.fixture(autouse=True)
def _default_fee_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep fee overrides in the developer's environment out of tests."""
    monkeypatch.delenv("AMM_FACADE_FEE_NUMERATOR", raising=False)
    monkeypatch.delenv("AMM_FACADE_FEE_DENOMINATOR", raising=False)


@pytest.fixture
def chain() -> Chain:
    """Fresh chain at a fixed timestamp."""
    return Chain(timestamp=START_TIME)


@pytest.fixture
def deployment(chain: Chain) -> Deployment:
    """Factory, wrapped native, router and facade with the default 0.3% fee."""
    return deploy_system(chain)


@pytest.fixture
def token(deployment: Deployment) -> FungibleToken:
    """A non-native asset with no pool yet."""
    return deployment.deploy_token("TKN")


@pytest.fixture
def pool(deployment: Deployment, token: FungibleToken) -> Pair:
    """Token/native pool with 1,000,000 token and 1,000,000 native reserves."""
    return seed_pool(deployment, token, token_amount=1_000_000, native_amount=1_000_000)
