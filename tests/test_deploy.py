"""
Tests for contract deployment.
"""
import pytest

from bnb_agent_sdk.actions.deploy import ContractDeployer
from bnb_agent_sdk.exceptions import ChainExecutionError, ValidationError
from bnb_agent_sdk.models import TxReceipt

from conftest import OTHER_ADDRESS, TX_HASH, success_outcome

ABI = [{"type": "constructor", "inputs": [{"name": "supply", "type": "uint256"}]}]


def _receipt(contract_address):
    return TxReceipt.model_validate({
        "transactionHash": TX_HASH,
        "blockNumber": 1,
        "blockHash": "0x" + "11" * 32,
        "status": 1,
        "gasUsed": 500000,
        "contractAddress": contract_address,
    })


@pytest.fixture
def deployer(registry, mock_orchestrator):
    return ContractDeployer(registry, mock_orchestrator)


def test_deploy(deployer, contracts, mock_w3, mock_orchestrator):
    mock_orchestrator.run.side_effect = None
    mock_orchestrator.run.return_value = success_outcome(chain="bscTestnet", receipt=_receipt(OTHER_ADDRESS))

    result = deployer.deploy("bscTestnet", ABI, "6080", args=[1000])

    assert result.contract_address == OTHER_ADDRESS
    assert result.chain == "bscTestnet"
    assert mock_w3.eth.contract.call_args.kwargs == {"abi": ABI, "bytecode": "0x6080"}
    contracts.factory.constructor.assert_called_once_with(1000)
    chain, call = mock_orchestrator.run.call_args[0]
    assert chain.key == "bscTestnet"
    assert call.deployment
    assert call.function is contracts.factory.constructor.return_value


@pytest.mark.parametrize("bytecode", ["", "  ", "0x"])
def test_deploy_requires_bytecode(deployer, mock_orchestrator, bytecode):
    with pytest.raises(ValidationError):
        deployer.deploy("bsc", ABI, bytecode)
    mock_orchestrator.run.assert_not_called()


def test_deploy_without_contract_address(deployer, contracts, mock_orchestrator):
    mock_orchestrator.run.side_effect = None
    mock_orchestrator.run.return_value = success_outcome(receipt=_receipt(None))
    with pytest.raises(ChainExecutionError) as exc_info:
        deployer.deploy("bsc", ABI, "0x6080")
    assert exc_info.value.tx_hash == TX_HASH
