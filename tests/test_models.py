"""
Tests for intents, token references and outcomes.
"""
import pytest
from pydantic import TypeAdapter

from bnb_agent_sdk.exceptions import ExecutionRevertedError, TransactionPendingError, ValidationError
from bnb_agent_sdk.models import (
    BridgeIntent, ClaimIntent, DepositIntent, Erc20Token, FaucetIntent, NativeToken, SwapIntent, TokenRef,
    TransactionOutcome, TransferIntent, TxReceipt, TxStatus, WithdrawIntent, parse_stake_intent,
)
from conftest import OTHER_ADDRESS, TX_HASH


def test_bridge_intent_normalizes_null_strings():
    intent = BridgeIntent.from_params({
        "fromChain": "bsc",
        "toChain": "opBNB",
        "amount": "0.1",
        "fromToken": "null",
        "toToken": "undefined",
        "toAddress": "  ",
    })
    assert intent.from_token is None
    assert intent.to_token is None
    assert intent.to_address is None


def test_bridge_intent_accepts_field_names():
    intent = BridgeIntent.from_params({"from_chain": "opBNB", "to_chain": "bsc", "amount": "1"})
    assert intent.from_chain == "opBNB"


def test_bridge_intent_missing_amount():
    with pytest.raises(ValidationError, match="amount"):
        BridgeIntent.from_params({"fromChain": "bsc", "toChain": "opBNB", "amount": "null"})


def test_intents_are_frozen():
    intent = SwapIntent.from_params({"inputToken": "BNB", "outputToken": "USDT", "amount": "1"})
    with pytest.raises(Exception):
        intent.amount = "2"


def test_transfer_intent_drops_non_hex_data():
    intent = TransferIntent.from_params({"chain": "bsc", "toAddress": OTHER_ADDRESS, "data": "hello"})
    assert intent.data is None
    intent = TransferIntent.from_params({"chain": "bsc", "toAddress": OTHER_ADDRESS, "data": "0x1234"})
    assert intent.data == "0x1234"


def test_transfer_intent_requires_recipient():
    with pytest.raises(ValidationError, match="toAddress"):
        TransferIntent.from_params({"chain": "bsc", "toAddress": "null"})


@pytest.mark.parametrize("params,expected", [
    ({"action": "deposit", "amount": "1"}, DepositIntent),
    ({"action": "WITHDRAW"}, WithdrawIntent),
    ({"action": "claim", "amount": "null"}, ClaimIntent),
])
def test_parse_stake_intent_dispatches_on_action(params, expected):
    intent = parse_stake_intent(params)
    assert isinstance(intent, expected)
    assert intent.chain == "bsc"


def test_stake_intents_normalize_null_strings():
    intent = parse_stake_intent({"action": "withdraw", "amount": "undefined", "chain": " bsc "})
    assert isinstance(intent, WithdrawIntent)
    assert intent.amount is None
    assert intent.chain == "bsc"
    assert parse_stake_intent({"action": " Deposit ", "amount": "0.5"}).amount == "0.5"


def test_faucet_intent_aliases():
    intent = FaucetIntent.from_params({"token": "null", "toAddress": OTHER_ADDRESS})
    assert intent.token is None
    assert intent.to_address == OTHER_ADDRESS
    assert intent.chain == "bscTestnet"


def test_parse_stake_intent_missing_action():
    with pytest.raises(ValidationError, match="Action is required"):
        parse_stake_intent({"amount": "1"})
    with pytest.raises(ValidationError, match="Action is required"):
        parse_stake_intent({"action": "null"})


def test_parse_stake_intent_unknown_action():
    with pytest.raises(ValidationError):
        parse_stake_intent({"action": "restake"})


def test_deposit_requires_amount():
    with pytest.raises(ValidationError, match="amount"):
        parse_stake_intent({"action": "deposit"})


def test_token_ref_discriminates():
    adapter = TypeAdapter(TokenRef)
    assert isinstance(adapter.validate_python({"kind": "native", "symbol": "BNB"}), NativeToken)
    token = adapter.validate_python({"kind": "erc20", "address": OTHER_ADDRESS})
    assert isinstance(token, Erc20Token)
    assert not token.is_native


def test_outcome_raise_for_status():
    ok = TransactionOutcome(chain="bsc", tx_hash=TX_HASH, status=TxStatus.SUCCESS)
    assert ok.raise_for_status() is ok
    assert ok.ok

    reverted = TransactionOutcome(chain="bsc", tx_hash=TX_HASH, status=TxStatus.REVERTED)
    with pytest.raises(ExecutionRevertedError) as exc_info:
        reverted.raise_for_status("bridge")
    assert exc_info.value.tx_hash == TX_HASH

    pending = TransactionOutcome(chain="bsc", tx_hash=TX_HASH, status=TxStatus.PENDING)
    with pytest.raises(TransactionPendingError):
        pending.raise_for_status()


def test_tx_receipt_aliases():
    receipt = TxReceipt.model_validate({
        "transactionHash": TX_HASH,
        "blockNumber": 1,
        "blockHash": "0x" + "00" * 32,
        "status": 1,
        "gasUsed": 21000,
        "contractAddress": OTHER_ADDRESS,
    })
    assert receipt.tx_hash == TX_HASH
    assert receipt.contract_address == OTHER_ADDRESS
    assert receipt.logs == []
