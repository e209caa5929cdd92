"""
ERC20 allowance management.
"""
import logging
from typing import Optional

from web3 import Web3

from .models import TransactionOutcome
from .registry import ChainRef, ChainRegistry
from .resolvers.token import erc20_contract
from .transactions import TransactionOrchestrator, TxCall

logger = logging.getLogger(__name__)


class AllowanceManager:
    """
    Makes sure a spender may move at least a given amount of a token.

    The allowance is read fresh on every call. When it falls short, exactly
    ``required`` (never unlimited) is approved and the approval must confirm
    before ``ensure`` returns.
    """

    def __init__(self, registry: ChainRegistry, orchestrator: TransactionOrchestrator):
        self.registry = registry
        self.orchestrator = orchestrator

    def current(self, chain: ChainRef, token: str, owner: str, spender: str) -> int:
        """Read allowance(owner, spender) for a token."""
        w3 = self.registry.client_for(chain)
        contract = erc20_contract(w3, token)
        return int(contract.functions.allowance(
            Web3.to_checksum_address(owner), Web3.to_checksum_address(spender)
        ).call())

    def ensure(
        self,
        chain: ChainRef,
        token: str,
        owner: str,
        spender: str,
        required: int,
    ) -> Optional[TransactionOutcome]:
        """
        Approve ``spender`` for ``required`` if the current allowance is lower.

        Args:
            chain: Network key, id or descriptor
            token: ERC20 contract address
            owner: Token holder (the signing account)
            spender: Contract that will pull the tokens
            required: Amount in base units

        Returns:
            The approval outcome, or None when no approval was needed

        Raises:
            ExecutionRevertedError: If the approval reverts
            TransactionPendingError: If the approval is not mined in time
        """
        allowance = self.current(chain, token, owner, spender)
        if allowance >= required:
            logger.debug(f"Allowance {allowance} covers {required} for spender {spender}")
            return None

        logger.info(f"Allowance {allowance} < {required}; approving {spender} on token {token}")
        w3 = self.registry.client_for(chain)
        contract = erc20_contract(w3, token)
        call = TxCall(
            label="token approval",
            function=contract.functions.approve(Web3.to_checksum_address(spender), required),
        )
        outcome = self.orchestrator.run(chain, call)
        return outcome.raise_for_status("token approval")
