"""
Pytest fixtures for the BNB agent SDK tests.

Chain access is faked with MagicMock: every registry built here hands out the
same ``mock_w3`` client, and ``contracts`` returns one mock per contract
address so tests can program reads and inspect writes.
"""
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from eth_account import Account

from bnb_agent_sdk._rate_limited_log import reset_rate_limits
from bnb_agent_sdk.config import NetworkConfig
from bnb_agent_sdk.models import TransactionOutcome, TxStatus
from bnb_agent_sdk.registry import ChainDescriptor, ChainRegistry

TEST_PRIV_KEY = "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
TEST_ADDRESS = Account.from_key(TEST_PRIV_KEY).address
OTHER_ADDRESS = "0x2222222222222222222222222222222222222222"
TOKEN_ADDRESS = "0x3333333333333333333333333333333333333333"
L2_TOKEN_ADDRESS = "0x4444444444444444444444444444444444444444"
SPENDER_ADDRESS = "0x5555555555555555555555555555555555555555"
TX_HASH = "0x" + "ab" * 32
APPROVAL_HASH = "0x" + "cd" * 32


def make_receipt(status=1, tx_hash=TX_HASH, contract_address=None, block_number=100):
    """Raw receipt in the shape web3 returns (bytes for hashes)."""
    return {
        "transactionHash": bytes.fromhex(tx_hash[2:]),
        "blockNumber": block_number,
        "blockHash": bytes.fromhex("ef" * 32),
        "status": status,
        "gasUsed": 21000,
        "from": TEST_ADDRESS,
        "to": OTHER_ADDRESS,
        "contractAddress": contract_address,
        "logs": [],
    }


def success_outcome(chain="bsc", tx_hash=TX_HASH, receipt=None):
    return TransactionOutcome(chain=chain, tx_hash=tx_hash, status=TxStatus.SUCCESS, receipt=receipt)


class FakeContracts:
    """Hands out one MagicMock per contract address from ``w3.eth.contract``."""

    def __init__(self, w3):
        self.by_address = {}
        self.factory = MagicMock(name="contract-factory")
        w3.eth.contract.side_effect = self._contract

    def get(self, address):
        key = address.lower()
        if key not in self.by_address:
            self.by_address[key] = MagicMock(name=f"contract:{address}")
        return self.by_address[key]

    def set_read(self, address, function, value):
        """Program ``contract.functions.<function>(...).call()`` to return value."""
        getattr(self.get(address).functions, function).return_value.call.return_value = value

    def _contract(self, address=None, abi=None, bytecode=None):
        if address is None:
            return self.factory
        return self.get(address)


@pytest.fixture(autouse=True)
def _clear_rate_limits():
    reset_rate_limits()
    yield
    reset_rate_limits()


@pytest.fixture
def mock_w3():
    """A Web3 stand-in with a successful send/receipt path."""
    w3 = MagicMock(name="web3")
    w3.eth.get_transaction_count.return_value = 7
    w3.eth.gas_price = 5_000_000_000
    w3.eth.estimate_gas.return_value = 21000
    w3.eth.get_balance.return_value = 0
    w3.eth.send_raw_transaction.return_value = bytes.fromhex(TX_HASH[2:])
    w3.eth.wait_for_transaction_receipt.return_value = make_receipt()
    return w3


@pytest.fixture
def contracts(mock_w3):
    return FakeContracts(mock_w3)


@pytest.fixture
def mock_signer():
    signer = MagicMock(name="signer")
    signer.address = TEST_ADDRESS
    signer.sign_transaction.return_value = SimpleNamespace(raw_transaction=b"\x02signed")
    return signer


@pytest.fixture
def chain_descriptors():
    return [ChainDescriptor.from_network(key, raw) for key, raw in NetworkConfig.load_networks().items()]


@pytest.fixture
def web3_factory(mock_w3):
    return MagicMock(name="web3-factory", return_value=mock_w3)


@pytest.fixture
def registry(chain_descriptors, mock_signer, web3_factory):
    return ChainRegistry(chain_descriptors, mock_signer, web3_factory=web3_factory)


@pytest.fixture
def mock_orchestrator():
    orchestrator = MagicMock(name="orchestrator")
    orchestrator.run.side_effect = lambda chain, call: success_outcome(
        chain=chain if isinstance(chain, str) else chain.key
    )
    return orchestrator


@pytest.fixture
def mock_allowances():
    allowances = MagicMock(name="allowances")
    allowances.ensure.return_value = None
    return allowances


@pytest.fixture
def mock_name_service():
    service = MagicMock(name="name-service")
    service.resolve.return_value = None
    return service
