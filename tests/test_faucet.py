"""
Tests for testnet faucet requests.
"""
from unittest.mock import MagicMock

import pytest
import requests

from bnb_agent_sdk.actions.faucet import FaucetAction
from bnb_agent_sdk.constants import FAUCET_TOKENS
from bnb_agent_sdk.exceptions import InfrastructureError, NoTransactionHash, ValidationError
from bnb_agent_sdk.models import FaucetIntent
from bnb_agent_sdk.resolvers import AddressResolver

from conftest import OTHER_ADDRESS, TEST_ADDRESS, TX_HASH


@pytest.fixture
def transport():
    transport = MagicMock(name="faucet-transport")
    transport.request.return_value = TX_HASH
    return transport


@pytest.fixture
def faucet(registry, mock_name_service, transport):
    return FaucetAction(registry, AddressResolver(mock_name_service), transport)


def test_defaults_to_bnb_for_own_address(faucet, transport):
    result = faucet.faucet({})
    assert result.token == "BNB"
    assert result.recipient == TEST_ADDRESS
    assert result.tx_hash == TX_HASH
    assert result.chain == "bscTestnet"
    transport.request.assert_called_once_with("BNB", TEST_ADDRESS)


def test_null_address_means_own_address(faucet, transport):
    result = faucet.faucet({"token": "usdc", "toAddress": "null"})
    assert result.recipient == TEST_ADDRESS
    transport.request.assert_called_once_with("USDC", TEST_ADDRESS)


def test_explicit_recipient(faucet, transport):
    result = faucet.faucet(FaucetIntent(token="DAI", to_address=OTHER_ADDRESS))
    assert result.recipient == OTHER_ADDRESS
    transport.request.assert_called_once_with("DAI", OTHER_ADDRESS)


def test_name_recipient_resolved(faucet, transport, mock_name_service):
    mock_name_service.resolve.return_value = OTHER_ADDRESS
    result = faucet.faucet({"toAddress": "alice.bnb"})
    assert result.recipient == OTHER_ADDRESS


@pytest.mark.parametrize("token", FAUCET_TOKENS)
def test_every_supported_token(faucet, transport, token):
    assert faucet.faucet({"token": token}).token == token


@pytest.mark.parametrize("token", ["CAKE", "USDT", "tBNB"])
def test_unsupported_token(faucet, transport, token):
    with pytest.raises(ValidationError, match="Supported tokens are"):
        faucet.faucet({"token": token})
    transport.request.assert_not_called()


@pytest.mark.parametrize("chain", ["bsc", "opBNB", "opBNBTestnet"])
def test_only_bsc_testnet(faucet, transport, chain):
    with pytest.raises(ValidationError, match="only serves BSC testnet"):
        faucet.faucet({"chain": chain})
    transport.request.assert_not_called()


def test_malformed_recipient(faucet, transport):
    with pytest.raises(ValidationError, match="valid BSC address"):
        faucet.faucet({"toAddress": "0x1234"})
    transport.request.assert_not_called()


def test_transport_failure_is_infrastructure_error(faucet, transport):
    transport.request.side_effect = requests.ConnectionError("refused")
    with pytest.raises(InfrastructureError, match="Connection to faucet failed"):
        faucet.faucet({})


@pytest.mark.parametrize("answer", [None, "", "0x", "0x" + "00" * 32])
def test_missing_hash(faucet, transport, answer):
    transport.request.return_value = answer
    with pytest.raises(NoTransactionHash):
        faucet.faucet({"token": "ETH"})
