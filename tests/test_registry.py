"""
Tests for ChainRegistry, ChainDescriptor and ChainContext.
"""
from unittest.mock import MagicMock

import pytest

from bnb_agent_sdk.config import OrchestratorConfig
from bnb_agent_sdk.exceptions import ConfigurationError, UnknownChain
from bnb_agent_sdk.registry import ChainDescriptor, ChainRegistry, ClientRole
from bnb_agent_sdk.signer import LocalSigner

from conftest import TEST_ADDRESS, TEST_PRIV_KEY


@pytest.mark.parametrize("ref,key", [
    ("bsc", "bsc"),
    ("BSC", "bsc"),
    ("opbnb", "opBNB"),
    (" bscTestnet ", "bscTestnet"),
    (56, "bsc"),
    (204, "opBNB"),
    (5611, "opBNBTestnet"),
])
def test_descriptor_lookup(registry, ref, key):
    assert registry.descriptor(ref).key == key


@pytest.mark.parametrize("ref", ["ethereum", "", None, 1, True])
def test_descriptor_unknown(registry, ref):
    with pytest.raises(UnknownChain):
        registry.descriptor(ref)


def test_descriptor_fields(registry):
    testnet = registry.descriptor("bscTestnet")
    assert testnet.id == 97
    assert testnet.native_symbol == "tBNB"
    assert testnet.testnet
    assert testnet.is_native_symbol("bnb")
    assert testnet.is_native_symbol("TBNB")
    assert not testnet.is_native_symbol("USDT")
    assert not testnet.is_custom_rpc


def test_with_rpc_returns_new_descriptor(registry):
    bsc = registry.descriptor("bsc")
    custom = bsc.with_rpc("https://custom.example.com")
    assert custom.is_custom_rpc
    assert custom.rpc_url == "https://custom.example.com"
    assert not bsc.is_custom_rpc


def test_tx_url(registry):
    assert registry.descriptor("bsc").tx_url("0xabc") == "https://bscscan.com/tx/0xabc"


def test_client_for_builds_fresh_client(registry, web3_factory):
    registry.client_for("bsc")
    registry.client_for("bsc")
    assert web3_factory.call_count == 2
    assert web3_factory.call_args[0][0].key == "bsc"


def test_client_for_write_sets_default_account(chain_descriptors, mock_signer):
    clients = []

    def factory(descriptor):
        client = MagicMock()
        clients.append(client)
        return client

    registry = ChainRegistry(chain_descriptors, mock_signer, web3_factory=factory)
    registry.client_for("opBNB", ClientRole.WRITE)
    assert clients[0].eth.default_account == TEST_ADDRESS


def test_duplicate_chain_rejected(chain_descriptors, mock_signer):
    with pytest.raises(ValueError, match="Duplicate"):
        ChainRegistry(chain_descriptors + chain_descriptors[:1], mock_signer)


def test_context_switch_is_request_scoped(registry):
    first = registry.context("bsc")
    second = first.switch("opBNB")
    assert first.chain.key == "bsc"
    assert second.chain.key == "opBNB"
    assert first.address == second.address == TEST_ADDRESS


def test_from_config_applies_custom_rpc():
    config = OrchestratorConfig(private_key=TEST_PRIV_KEY, rpc_urls={"opBNB": "https://my-opbnb.example.com"})
    registry = ChainRegistry.from_config(config, web3_factory=MagicMock())
    opbnb = registry.descriptor("opBNB")
    assert opbnb.rpc_url == "https://my-opbnb.example.com"
    assert opbnb.is_custom_rpc
    assert not registry.descriptor("bsc").is_custom_rpc
    assert registry.account() == TEST_ADDRESS
    assert isinstance(registry.signer, LocalSigner)


def test_from_config_requires_private_key():
    with pytest.raises(ConfigurationError, match="BNB_PRIVATE_KEY"):
        ChainRegistry.from_config(OrchestratorConfig())


def test_from_config_accepts_custom_signer(mock_signer):
    registry = ChainRegistry.from_config(OrchestratorConfig(), signer=mock_signer)
    assert registry.account() == TEST_ADDRESS


def test_default_factory_uses_rpc_url(chain_descriptors, mock_signer):
    registry = ChainRegistry(chain_descriptors, mock_signer, rpc_timeout=5)
    w3 = registry.client_for("bsc")
    assert w3.provider.endpoint_uri == "https://bsc-dataseed.bnbchain.org"


def test_from_network_defaults():
    descriptor = ChainDescriptor.from_network("x", {
        "chainId": "1", "name": "X", "nativeSymbol": "XX", "rpc": "https://x",
    })
    assert descriptor.id == 1
    assert descriptor.native_aliases == ("XX",)
    assert descriptor.explorer is None
