"""
Tests for AddressResolver strategy ordering.
"""
import pytest
from hypothesis import given, settings, strategies as st

from bnb_agent_sdk.config import NetworkConfig
from bnb_agent_sdk.registry import ChainDescriptor
from bnb_agent_sdk.resolvers import AddressResolver

from conftest import OTHER_ADDRESS, TEST_ADDRESS

BSC = ChainDescriptor.from_network("bsc", NetworkConfig.get_network("bsc"))
BSC_TESTNET = ChainDescriptor.from_network("bscTestnet", NetworkConfig.get_network("bscTestnet"))

hex_addresses = st.text(alphabet="0123456789abcdefABCDEF", min_size=40, max_size=40).map(lambda s: "0x" + s)


class RecordingNameService:
    def __init__(self, answer=None, error=None):
        self.answer = answer
        self.error = error
        self.calls = []

    def resolve(self, name, chain):
        self.calls.append((name, chain.key))
        if self.error:
            raise self.error
        return self.answer


def test_strategy_order_is_explicit():
    assert list(AddressResolver().strategy_names) == [
        "empty", "hex", "token-symbol", "name-service", "loose-hex", "fallback",
    ]


@pytest.mark.parametrize("raw", [None, "", "   ", "null", "undefined"])
def test_empty_resolves_to_own_address(raw):
    assert AddressResolver().resolve(raw, TEST_ADDRESS, BSC) == TEST_ADDRESS


@settings(max_examples=100)
@given(address=hex_addresses)
def test_hex_addresses_pass_through_unchanged(address):
    service = RecordingNameService(answer=OTHER_ADDRESS)
    assert AddressResolver(service).resolve(address, TEST_ADDRESS, BSC) == address
    assert service.calls == []


@pytest.mark.parametrize("symbol", ["BNB", "bnb", "tBNB", "USDT", "usdc", "WBNB", "ETH"])
def test_token_symbols_never_reach_name_service(mock_name_service, symbol):
    resolver = AddressResolver(mock_name_service)
    assert resolver.resolve(symbol, TEST_ADDRESS, BSC_TESTNET) == TEST_ADDRESS
    mock_name_service.resolve.assert_not_called()


def test_name_service_hit():
    service = RecordingNameService(answer=OTHER_ADDRESS)
    assert AddressResolver(service).resolve("alice.bnb", TEST_ADDRESS, BSC) == OTHER_ADDRESS
    assert service.calls == [("alice.bnb", "bsc")]


def test_name_service_miss_falls_back_to_own_address():
    service = RecordingNameService(answer=None)
    assert AddressResolver(service).resolve("nobody.bnb", TEST_ADDRESS, BSC) == TEST_ADDRESS


def test_name_service_error_never_escapes():
    service = RecordingNameService(error=RuntimeError("rpc down"))
    assert AddressResolver(service).resolve("alice.bnb", TEST_ADDRESS, BSC) == TEST_ADDRESS


def test_short_hex_is_kept_with_warning(caplog):
    resolver = AddressResolver(RecordingNameService())
    with caplog.at_level("WARNING"):
        assert resolver.resolve("0x1234", TEST_ADDRESS, BSC) == "0x1234"
    assert "not a standard" in caplog.text


def test_without_name_service_unknown_name_is_own_address():
    assert AddressResolver().resolve("alice.bnb", TEST_ADDRESS, BSC) == TEST_ADDRESS
