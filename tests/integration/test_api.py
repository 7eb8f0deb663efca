"""Integration tests for the facade HTTP service."""

from collections.abc import Iterator

import pytest
from eth_abi import decode  # type: ignore[attr-defined]
from fastapi.testclient import TestClient

from amm_facade import __version__
from amm_facade.api.endpoints import get_default_deployment, get_deployment
from amm_facade.api.main import app
from amm_facade.encoding import NO_DEADLINE
from tests.helpers import ALICE, BOB, FAR_DEADLINE, TOKEN_LOW, fund


@pytest.fixture
def client(deployment, pool) -> Iterator[TestClient]:
    """Test client backed by the seeded test deployment."""
    app.dependency_overrides[get_deployment] = lambda: deployment
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    def test_health_check(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}


class TestPools:
    def test_reserves_follow_path_order(self, client, deployment, token, pool):
        native = deployment.wrapped_native.address
        response = client.get(f"/pools/{native}/{token.address}")

        assert response.status_code == 200
        data = response.json()
        assert data == {"pool": pool.address, "reserveA": "1000000", "reserveB": "1000000"}

    def test_missing_pool(self, client, deployment):
        other = deployment.deploy_token("OTHER")
        response = client.get(f"/pools/{other.address}/{deployment.wrapped_native.address}")

        assert response.status_code == 400
        assert response.json()["error"] == "pool_not_found"

    def test_identical_assets(self, client, token):
        response = client.get(f"/pools/{token.address}/{token.address}")
        assert response.status_code == 400
        assert response.json()["error"] == "identical_assets"


class TestQuote:
    def test_exact_input(self, client, deployment, token):
        response = client.post(
            "/quote",
            json={
                "assetIn": deployment.wrapped_native.address,
                "assetOut": token.address,
                "amountIn": "10000",
            },
        )
        assert response.status_code == 200
        assert response.json() == {"amountIn": "10000", "amountOut": "9871"}

    def test_exact_output(self, client, deployment, token):
        response = client.post(
            "/quote",
            json={
                "assetIn": deployment.wrapped_native.address,
                "assetOut": token.address,
                "amountOut": "9871",
            },
        )
        assert response.status_code == 200
        assert int(response.json()["amountIn"]) <= 10000

    def test_requires_exactly_one_amount(self, client, deployment, token):
        response = client.post(
            "/quote",
            json={"assetIn": deployment.wrapped_native.address, "assetOut": token.address},
        )
        assert response.status_code == 422


class TestSwaps:
    def test_sell_native(self, client, deployment, token):
        fund(deployment, ALICE, native_amount=10_000)
        response = client.post(
            "/swap/native-for-asset",
            json={
                "sender": ALICE,
                "targetAsset": token.address,
                "value": "10000",
                "minOut": "9871",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["amountOut"] == "9871"
        assert data["recipient"] == ALICE
        assert token.balance_of(ALICE) == 9871

    def test_slippage_is_reported(self, client, deployment, token):
        fund(deployment, ALICE, native_amount=10_000)
        response = client.post(
            "/swap/native-for-asset",
            json={
                "sender": ALICE,
                "targetAsset": token.address,
                "value": "10000",
                "minOut": "9872",
            },
        )

        assert response.status_code == 400
        assert response.json()["error"] == "slippage_exceeded"
        assert deployment.chain.native_balance_of(ALICE) == 10_000

    def test_sell_asset(self, client, deployment, token):
        fund(deployment, ALICE, token, token_amount=10_000)
        token.approve(ALICE, deployment.facade.address, 10_000)
        response = client.post(
            "/swap/asset-for-native",
            json={
                "sender": ALICE,
                "sourceAsset": token.address,
                "amountIn": "10000",
                "minOut": "1",
                "deadline": FAR_DEADLINE,
            },
        )

        assert response.status_code == 200
        assert deployment.chain.native_balance_of(ALICE) == int(response.json()["amountOut"])

    def test_malformed_amount(self, client, token):
        response = client.post(
            "/swap/asset-for-native",
            json={"sender": ALICE, "sourceAsset": token.address, "amountIn": "-1", "minOut": "1"},
        )
        assert response.status_code == 422


class TestLiquidity:
    def test_add_then_remove(self, client, deployment, token, pool):
        fund(deployment, ALICE, token, token_amount=1000, native_amount=1500)
        token.approve(ALICE, deployment.facade.address, 1000)

        response = client.post(
            "/liquidity/add",
            json={
                "sender": ALICE,
                "asset": token.address,
                "value": "1500",
                "amountDesired": "1000",
                "nativeAmount": "1500",
                "amountMin": "0",
                "nativeAmountMin": "0",
                "recipient": ALICE,
                "deadline": FAR_DEADLINE,
            },
        )
        assert response.status_code == 200
        assert response.json() == {
            "amountToken": "1000",
            "amountNative": "1000",
            "shares": "1000",
            "refundToken": "0",
            "refundNative": "500",
        }

        pool.approve(ALICE, deployment.facade.address, 1000)
        response = client.post(
            "/liquidity/remove",
            json={
                "sender": ALICE,
                "asset": token.address,
                "shares": "1000",
                "amountMin": "1000",
                "nativeAmountMin": "1000",
                "recipient": BOB,
                "deadline": FAR_DEADLINE,
            },
        )
        assert response.status_code == 200
        assert response.json() == {"amountToken": "1000", "amountNative": "1000"}
        assert deployment.chain.native_balance_of(BOB) == 1000

    def test_undeployed_asset(self, client, deployment):
        fund(deployment, ALICE, native_amount=10)
        response = client.post(
            "/liquidity/add",
            json={
                "sender": ALICE,
                "asset": "0x" + "ab" * 20,
                "value": "10",
                "amountDesired": "100",
                "nativeAmount": "10",
                "amountMin": "0",
                "nativeAmountMin": "0",
                "recipient": ALICE,
                "deadline": FAR_DEADLINE,
            },
        )
        assert response.status_code == 400
        assert response.json()["error"] == "invalid_asset"
        assert deployment.chain.native_balance_of(ALICE) == 10

    def test_expired_deadline(self, client, deployment, token):
        response = client.post(
            "/liquidity/remove",
            json={
                "sender": ALICE,
                "asset": token.address,
                "shares": "1",
                "amountMin": "0",
                "nativeAmountMin": "0",
                "recipient": ALICE,
                "deadline": deployment.chain.timestamp - 1,
            },
        )
        assert response.status_code == 400
        assert response.json()["error"] == "deadline_exceeded"


class TestCalldata:
    def test_sell_native(self, client, deployment, token):
        response = client.post(
            "/calldata/swap/native-for-asset",
            json={"sender": ALICE, "targetAsset": token.address, "value": "100", "minOut": "90"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["target"] == deployment.router.address
        assert data["value"] == "100"

        min_out, path, recipient, deadline = decode(
            ["uint256", "address[]", "address", "uint256"], bytes.fromhex(data["callData"][10:])
        )
        assert data["callData"].startswith("0x7ff36ab5")
        assert min_out == 90
        assert [p.lower() for p in path] == [deployment.wrapped_native.address, token.address]
        assert recipient.lower() == ALICE
        assert deadline == NO_DEADLINE

    def test_sell_asset_carries_no_value(self, client, deployment, token):
        response = client.post(
            "/calldata/swap/asset-for-native",
            json={
                "sender": ALICE,
                "sourceAsset": token.address,
                "amountIn": "1000",
                "minOut": "1",
                "deadline": 123,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["value"] == "0"
        assert data["callData"].startswith("0x18cbafe5")

    def test_add_liquidity_sends_native_amount(self, client, deployment, token):
        response = client.post(
            "/calldata/liquidity/add",
            json={
                "sender": ALICE,
                "asset": token.address,
                "value": "1500",
                "amountDesired": "1000",
                "nativeAmount": "1200",
                "amountMin": "0",
                "nativeAmountMin": "0",
                "recipient": BOB,
                "deadline": FAR_DEADLINE,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["value"] == "1200"
        assert data["callData"].startswith("0xf305d719")

    def test_remove_liquidity(self, client, deployment, token):
        response = client.post(
            "/calldata/liquidity/remove",
            json={
                "sender": ALICE,
                "asset": token.address,
                "shares": "31",
                "amountMin": "0",
                "nativeAmountMin": "0",
                "recipient": ALICE,
                "deadline": FAR_DEADLINE,
            },
        )
        assert response.status_code == 200
        assert response.json()["callData"].startswith("0x02751cec")

    def test_does_not_touch_state(self, client, deployment, token, pool):
        before = pool.get_reserves()
        client.post(
            "/calldata/swap/native-for-asset",
            json={"sender": ALICE, "targetAsset": token.address, "value": "100", "minOut": "1"},
        )
        assert pool.get_reserves() == before


class TestDefaultDeployment:
    def test_starts_empty(self):
        deployment = get_default_deployment()
        assert get_default_deployment() is deployment
        assert deployment.factory.all_pairs() == []

    def test_pool_lookup_before_seeding(self):
        native = get_default_deployment().wrapped_native.address
        response = TestClient(app).get(f"/pools/{native}/{TOKEN_LOW}")
        assert response.status_code == 400
        assert response.json()["error"] == "pool_not_found"


class TestRequestLimits:
    def test_oversized_body_rejected(self, client):
        response = client.post(
            "/quote",
            content=b"{" + b" " * (64 * 1024 + 1) + b"}",
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 413
