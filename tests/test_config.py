"""
Tests for network and environment configuration.
"""
import pytest

from bnb_agent_sdk.config import (
    DEFAULT_LIFI_API_URL, NetworkConfig, OrchestratorConfig,
)
from bnb_agent_sdk.exceptions import ConfigurationError, UnknownChain

from conftest import TEST_PRIV_KEY


def test_load_networks_has_four_chains():
    networks = NetworkConfig.load_networks()
    assert set(networks) == {"bsc", "bscTestnet", "opBNB", "opBNBTestnet"}
    assert networks["bsc"]["chainId"] == 56
    assert networks["opBNBTestnet"]["chainId"] == 5611


def test_load_networks_is_cached():
    assert NetworkConfig.load_networks() is NetworkConfig.load_networks()


def test_get_network_unknown():
    with pytest.raises(UnknownChain):
        NetworkConfig.get_network("ethereum")


def test_from_env_reads_values():
    config = OrchestratorConfig.from_env({
        "BNB_PRIVATE_KEY": TEST_PRIV_KEY,
        "BSC_PROVIDER_URL": "https://my-bsc.example.com",
        "BNB_RPC_TIMEOUT": "12.5",
    })
    assert config.private_key == TEST_PRIV_KEY
    assert config.rpc_urls == {"bsc": "https://my-bsc.example.com"}
    assert config.rpc_timeout == 12.5
    assert config.lifi_api_url == DEFAULT_LIFI_API_URL
    assert config.has_wallet_configured()


def test_from_env_adds_0x_prefix():
    config = OrchestratorConfig.from_env({"BNB_PRIVATE_KEY": TEST_PRIV_KEY[2:]})
    assert config.private_key == TEST_PRIV_KEY


def test_from_env_empty():
    config = OrchestratorConfig.from_env({})
    assert config.private_key is None
    assert not config.has_wallet_configured()


def test_from_env_invalid_key():
    with pytest.raises(ConfigurationError, match="private_key"):
        OrchestratorConfig.from_env({"BNB_PRIVATE_KEY": "0x1234"})


def test_from_env_invalid_rpc_url():
    with pytest.raises(ConfigurationError, match="rpc_urls"):
        OrchestratorConfig.from_env({"OPBNB_PROVIDER_URL": "ws://node"})


def test_private_key_not_in_repr():
    config = OrchestratorConfig(private_key=TEST_PRIV_KEY)
    assert TEST_PRIV_KEY not in repr(config)
