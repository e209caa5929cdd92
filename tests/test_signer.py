"""
Tests for LocalSigner.
"""
import pytest
from eth_account import Account

from bnb_agent_sdk.signer import LocalSigner

from conftest import OTHER_ADDRESS, TEST_ADDRESS, TEST_PRIV_KEY


def test_local_signer_address():
    signer = LocalSigner(TEST_PRIV_KEY)
    assert signer.address == TEST_ADDRESS
    assert TEST_PRIV_KEY not in repr(signer)


def test_local_signer_empty_key():
    with pytest.raises(ValueError):
        LocalSigner("")


def test_local_signer_signs_legacy_transaction():
    signer = LocalSigner(TEST_PRIV_KEY)
    tx = {
        "to": OTHER_ADDRESS,
        "value": 10 ** 15,
        "gas": 21000,
        "gasPrice": 3_000_000_000,
        "nonce": 0,
        "chainId": 56,
        "data": "0x",
    }
    signed = signer.sign_transaction(tx)
    assert Account.recover_transaction(signed.raw_transaction) == TEST_ADDRESS
