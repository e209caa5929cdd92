"""
Tests for the wallet provider.
"""
from bnb_agent_sdk.providers import WalletProvider

from conftest import TEST_ADDRESS


def test_wallet_summary(registry, mock_w3):
    mock_w3.eth.get_balance.return_value = 15 * 10 ** 17
    text = WalletProvider(registry).get()
    assert text == (
        f"BNB chain Wallet Address: {TEST_ADDRESS}\n"
        "Balance: 1.5 BNB\n"
        "Chain ID: 56, Name: BNB Smart Chain"
    )


def test_wallet_summary_other_chain(registry):
    text = WalletProvider(registry).get("opBNBTestnet")
    assert "Balance: 0 tBNB" in text
    assert "Chain ID: 5611" in text


def test_wallet_summary_failure_returns_none(registry, mock_w3):
    mock_w3.eth.get_balance.side_effect = RuntimeError("rpc down")
    assert WalletProvider(registry).get() is None


def test_wallet_summary_unknown_chain(registry):
    assert WalletProvider(registry, default_chain="ethereum").get() is None
