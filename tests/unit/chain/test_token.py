"""Tests for fungible tokens and the native wrapper."""

import pytest

from amm_facade.constants import UINT256_MAX
from amm_facade.errors import InvalidAmountError, NativeTransferFailedError, TransferFailedError
from tests.helpers import ALICE, BOB, CAROL


class TestFungibleToken:
    def test_transfer(self, token):
        token.mint(ALICE, 100)
        token.transfer(ALICE, BOB, 30)
        assert token.balance_of(ALICE) == 70
        assert token.balance_of(BOB) == 30
        assert token.total_supply() == 100

    def test_transfer_insufficient(self, token):
        with pytest.raises(TransferFailedError):
            token.transfer(ALICE, BOB, 1)

    def test_transfer_from_spends_allowance(self, token):
        token.mint(ALICE, 100)
        token.approve(ALICE, BOB, 50)
        token.transfer_from(BOB, ALICE, CAROL, 20)
        assert token.allowance(ALICE, BOB) == 30
        assert token.balance_of(CAROL) == 20

    def test_transfer_from_without_allowance(self, token):
        token.mint(ALICE, 100)
        with pytest.raises(TransferFailedError):
            token.transfer_from(BOB, ALICE, CAROL, 1)

    def test_infinite_allowance_not_decremented(self, token):
        token.mint(ALICE, 100)
        token.approve(ALICE, BOB, UINT256_MAX)
        token.transfer_from(BOB, ALICE, CAROL, 60)
        assert token.allowance(ALICE, BOB) == UINT256_MAX

    def test_approve_out_of_range(self, token):
        with pytest.raises(InvalidAmountError):
            token.approve(ALICE, BOB, -1)

    def test_burn(self, token):
        token.mint(ALICE, 10)
        token.burn(ALICE, 4)
        assert token.total_supply() == 6
        with pytest.raises(TransferFailedError):
            token.burn(ALICE, 7)


class TestWrappedNative:
    def test_deposit_and_withdraw(self, deployment):
        wrapper = deployment.wrapped_native
        deployment.chain.mint_native(ALICE, 100)

        wrapper.deposit(ALICE, 60)
        assert wrapper.balance_of(ALICE) == 60
        assert deployment.chain.native_balance_of(wrapper.address) == 60

        wrapper.withdraw(ALICE, 25)
        assert wrapper.balance_of(ALICE) == 35
        assert deployment.chain.native_balance_of(ALICE) == 65

    def test_deposit_without_funds(self, deployment):
        with pytest.raises(NativeTransferFailedError):
            deployment.wrapped_native.deposit(ALICE, 1)

    def test_withdraw_more_than_wrapped(self, deployment):
        with pytest.raises(NativeTransferFailedError):
            deployment.wrapped_native.withdraw(ALICE, 1)
