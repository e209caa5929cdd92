"""
Liquid staking of BNB through the Lista DAO stake manager (BNB <-> slisBNB).
"""
import logging
from typing import Any, Dict, Iterator, List, Optional, Union

from web3 import Web3

from ..abis import LISTA_STAKE_MANAGER_ABI
from ..allowance import AllowanceManager
from ..constants import LISTA_STAKE_MANAGER_ADDRESS, NATIVE_DECIMALS, SLIS_BNB_ADDRESS, STAKE_CHAIN
from ..exceptions import ValidationError
from ..models import (
    ClaimIntent, DepositIntent, StakeAction, StakeResult, WithdrawalRequest, WithdrawIntent,
    parse_stake_intent,
)
from ..registry import ChainRegistry
from ..resolvers import erc20_contract
from ..transactions import TransactionOrchestrator, TxCall
from ..utils import from_base_units, to_base_units

logger = logging.getLogger(__name__)

StakeRequest = Union[DepositIntent, WithdrawIntent, ClaimIntent]


class StakeCoordinator:
    """
    Sequences deposit, withdrawal request and claim against the stake manager.

    Only BSC mainnet is supported. Each call takes a typed intent; raw
    dictionaries are parsed with ``parse_stake_intent`` first.
    """

    def __init__(
        self,
        registry: ChainRegistry,
        orchestrator: TransactionOrchestrator,
        allowances: AllowanceManager,
        stake_manager: str = LISTA_STAKE_MANAGER_ADDRESS,
        derivative_token: str = SLIS_BNB_ADDRESS,
        derivative_symbol: str = "slisBNB",
    ):
        self.registry = registry
        self.orchestrator = orchestrator
        self.allowances = allowances
        self.stake_manager = stake_manager
        self.derivative_token = derivative_token
        self.derivative_symbol = derivative_symbol

    def stake(self, intent: Union[StakeRequest, Dict[str, Any]]) -> StakeResult:
        """
        Dispatch a stake request.

        Args:
            intent: DepositIntent, WithdrawIntent, ClaimIntent, or raw parameters
                with an "action" key

        Returns:
            StakeResult

        Raises:
            ValidationError: Unknown action, unsupported chain or bad amount
            ChainExecutionError: A transaction failed
        """
        if isinstance(intent, dict):
            intent = parse_stake_intent(intent)
        self._check_chain(intent.chain)

        if isinstance(intent, DepositIntent):
            return self.deposit(intent.amount)
        if isinstance(intent, WithdrawIntent):
            return self.withdraw(intent.amount)
        if isinstance(intent, ClaimIntent):
            return self.claim()
        raise ValidationError(f"Unsupported stake request: {type(intent).__name__}")

    def deposit(self, amount: str) -> StakeResult:
        """Stake ``amount`` BNB and report the resulting slisBNB balance."""
        if not amount:
            raise ValidationError("Amount is required for deposit")
        value = to_base_units(amount, NATIVE_DECIMALS)
        amount_text = from_base_units(value)
        logger.debug(f"Depositing {amount_text} BNB to {self.stake_manager}")

        manager = self._manager()
        outcome = self.orchestrator.run(STAKE_CHAIN, TxCall(
            label="stake deposit", function=manager.functions.deposit(), value=value,
        ))
        outcome.raise_for_status(f"deposit {amount_text} BNB")

        balance = from_base_units(self.derivative_balance())
        return StakeResult(
            action=StakeAction.DEPOSIT,
            message=f"Successfully deposited {amount_text} BNB. {balance} {self.derivative_symbol} held.",
            tx_hash=outcome.tx_hash,
            amount=amount_text,
            derivative_balance=balance,
        )

    def withdraw(self, amount: Optional[str] = None) -> StakeResult:
        """
        Request a withdrawal of slisBNB.

        Args:
            amount: Amount of slisBNB; None withdraws the full on-chain balance

        Raises:
            ValidationError: If the resolved amount is zero
        """
        owner = self.registry.account()
        if amount is None:
            units = self.derivative_balance()
            logger.debug(f"No amount given; withdrawing full balance of {units}")
        else:
            units = to_base_units(amount, NATIVE_DECIMALS)
        if units <= 0:
            logger.error(f"No {self.derivative_symbol} to withdraw")
            raise ValidationError(
                f"No {self.derivative_symbol} tokens available to withdraw",
                user_message=f"No {self.derivative_symbol} tokens available to withdraw.",
            )
        amount_text = from_base_units(units)

        self.allowances.ensure(STAKE_CHAIN, self.derivative_token, owner, self.stake_manager, units)

        manager = self._manager()
        outcome = self.orchestrator.run(STAKE_CHAIN, TxCall(
            label="stake withdrawal request", function=manager.functions.requestWithdraw(units),
        ))
        outcome.raise_for_status(f"withdraw {amount_text} {self.derivative_symbol}")

        remaining = from_base_units(self.derivative_balance())
        return StakeResult(
            action=StakeAction.WITHDRAW,
            message=(
                f"Successfully requested withdrawal of {amount_text} {self.derivative_symbol}. "
                f"{remaining} {self.derivative_symbol} left."
            ),
            tx_hash=outcome.tx_hash,
            amount=amount_text,
            derivative_balance=remaining,
        )

    def iter_withdrawal_requests(self) -> Iterator[WithdrawalRequest]:
        """
        Yield the account's withdrawal requests in index order.

        Each request's status is read only when it is reached, so a consumer
        that stops early never queries the later ones.
        """
        owner = Web3.to_checksum_address(self.registry.account())
        manager = self._manager()
        raw_requests = manager.functions.getUserWithdrawalRequests(owner).call()
        for idx in range(len(raw_requests)):
            claimable, amount = manager.functions.getUserRequestStatus(owner, idx).call()
            yield WithdrawalRequest(index=idx, amount_in_token=int(amount), claimable=bool(claimable))

    def withdrawal_requests(self) -> List[WithdrawalRequest]:
        """Enumerate the account's withdrawal requests with their claimability."""
        return list(self.iter_withdrawal_requests())

    def claim(self) -> StakeResult:
        """
        Claim matured withdrawal requests in index order.

        Stops at the first request that is not yet claimable. Having nothing to
        claim is reported as an informational result.
        """
        manager = self._manager()
        found = False
        total = 0
        hashes: List[str] = []
        for request in self.iter_withdrawal_requests():
            found = True
            if not request.claimable:
                logger.debug(f"Request {request.index} is not claimable yet; stopping")
                break
            outcome = self.orchestrator.run(STAKE_CHAIN, TxCall(
                label="stake claim", function=manager.functions.claimWithdraw(request.index),
            ))
            outcome.raise_for_status("claim")
            total += request.amount_in_token
            hashes.append(outcome.tx_hash)

        if not found:
            logger.warning("No withdrawal requests found for claiming")
            return StakeResult(
                action=StakeAction.CLAIM,
                message=(
                    "No withdrawal requests found to claim. Request a withdrawal first "
                    "using the 'withdraw' action."
                ),
            )

        if not hashes:
            return StakeResult(
                action=StakeAction.CLAIM,
                message=(
                    "No claimable withdrawals found. Withdrawal requests typically need "
                    "7-14 days to become claimable."
                ),
            )

        claimed = from_base_units(total)
        return StakeResult(
            action=StakeAction.CLAIM,
            message=f"Successfully claimed {claimed} BNB from {len(hashes)} request(s).",
            tx_hash=hashes[-1],
            claimed_total=claimed,
            claimed_count=len(hashes),
            claim_tx_hashes=hashes,
        )

    def derivative_balance(self) -> int:
        """slisBNB balance of the signing account, in base units."""
        w3 = self.registry.client_for(STAKE_CHAIN)
        token = erc20_contract(w3, self.derivative_token)
        return int(token.functions.balanceOf(Web3.to_checksum_address(self.registry.account())).call())

    def _manager(self):
        w3 = self.registry.client_for(STAKE_CHAIN)
        return w3.eth.contract(address=Web3.to_checksum_address(self.stake_manager), abi=LISTA_STAKE_MANAGER_ABI)

    def _check_chain(self, chain: str) -> None:
        if self.registry.descriptor(chain).key != STAKE_CHAIN:
            logger.error(f"Unsupported chain for staking: {chain}")
            raise ValidationError(
                f"Unsupported chain for staking: {chain}",
                user_message="Only BSC mainnet is supported for staking",
            )
