"""
Contract deployment from a caller-supplied ABI and bytecode.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

from ..exceptions import ChainExecutionError, ValidationError
from ..models import DeployResult
from ..registry import ChainRef, ChainRegistry
from ..transactions import TransactionOrchestrator, TxCall

logger = logging.getLogger(__name__)


class ContractDeployer:
    """Deploys compiled contracts through the transaction pipeline."""

    def __init__(self, registry: ChainRegistry, orchestrator: TransactionOrchestrator):
        self.registry = registry
        self.orchestrator = orchestrator

    def deploy(
        self,
        chain: ChainRef,
        abi: List[Dict[str, Any]],
        bytecode: str,
        args: Optional[Sequence[Any]] = None,
        label: str = "contract deployment",
    ) -> DeployResult:
        """
        Deploy a contract.

        Args:
            chain: Network key, id or descriptor
            abi: Contract ABI
            bytecode: Creation bytecode (hex, with or without 0x)
            args: Constructor arguments
            label: Description used in logs and errors

        Returns:
            DeployResult with the new contract address

        Raises:
            ValidationError: Empty bytecode
            ChainExecutionError: Deployment failed or produced no contract address
        """
        if not bytecode or not bytecode.strip() or bytecode.strip() == "0x":
            raise ValidationError("Contract bytecode is required")
        code = bytecode.strip()
        if not code.startswith("0x"):
            code = "0x" + code

        descriptor = self.registry.descriptor(chain)
        w3 = self.registry.client_for(descriptor)
        factory = w3.eth.contract(abi=abi, bytecode=code)
        constructor = factory.constructor(*(args or ()))

        outcome = self.orchestrator.run(descriptor, TxCall(label=label, function=constructor, deployment=True))
        outcome.raise_for_status(label)

        address = outcome.receipt.contract_address if outcome.receipt else None
        if not address:
            raise ChainExecutionError(
                f"Deployment {outcome.tx_hash} produced no contract address",
                tx_hash=outcome.tx_hash,
            )
        logger.info(f"Deployed contract at {address} on {descriptor.key}")
        return DeployResult(chain=descriptor.key, tx_hash=outcome.tx_hash, contract_address=address)
