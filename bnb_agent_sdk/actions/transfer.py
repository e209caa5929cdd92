"""
Same-chain transfers of native BNB or ERC20 tokens.
"""
import logging
from typing import Any, Dict, Union

from web3 import Web3

from ..constants import DEFAULT_GAS_PRICE, NATIVE_DECIMALS, NATIVE_TRANSFER_GAS
from ..exceptions import ErrorKind, InsufficientFundsError, ValidationError, user_message_for
from ..models import NativeToken, TransferIntent, TransferResult
from ..registry import ChainDescriptor, ChainRegistry
from ..resolvers import AddressResolver, TokenResolver, erc20_contract, read_decimals
from ..transactions import TransactionOrchestrator, TxCall
from ..utils import from_base_units, is_hex_address, to_base_units

logger = logging.getLogger(__name__)


class TransferAction:
    """
    Sends native BNB or an ERC20 token to a recipient.

    Omitting the amount sends everything: the full token balance, or for the
    native coin the balance minus a fixed 21000 gas at 3 gwei.
    """

    def __init__(
        self,
        registry: ChainRegistry,
        orchestrator: TransactionOrchestrator,
        addresses: AddressResolver,
        tokens: TokenResolver,
    ):
        self.registry = registry
        self.orchestrator = orchestrator
        self.addresses = addresses
        self.tokens = tokens

    def transfer(self, intent: Union[TransferIntent, Dict[str, Any]]) -> TransferResult:
        """
        Transfer funds on one chain.

        Args:
            intent: TransferIntent or raw parameters (chain, toAddress, token, amount, data)

        Returns:
            TransferResult with the amount actually sent

        Raises:
            ValidationError: Missing recipient, unknown chain or bad amount
            TokenNotFound: Token symbol could not be resolved
            ChainExecutionError: The transfer failed
        """
        if not isinstance(intent, TransferIntent):
            intent = TransferIntent.from_params(intent)

        chain = self.registry.descriptor(intent.chain)
        sender = self.registry.account()
        recipient = self.addresses.resolve(intent.to_address, sender, chain)
        if not is_hex_address(recipient):
            raise ValidationError(
                f"Invalid recipient address: {recipient}",
                user_message=f"Could not resolve recipient {intent.to_address} to a valid address.",
            )
        token = self.tokens.resolve_ref(intent.token, chain)

        if isinstance(token, NativeToken):
            return self._send_native(chain, sender, recipient, intent)
        return self._send_erc20(chain, sender, recipient, token.address, token.symbol or token.address, intent)

    def _send_native(
        self, chain: ChainDescriptor, sender: str, recipient: str, intent: TransferIntent,
    ) -> TransferResult:
        call_kwargs: Dict[str, Any] = {}
        if intent.amount is None:
            w3 = self.registry.client_for(chain)
            balance = int(w3.eth.get_balance(Web3.to_checksum_address(sender)))
            value = balance - DEFAULT_GAS_PRICE * NATIVE_TRANSFER_GAS
            if value <= 0:
                raise InsufficientFundsError(
                    f"Balance {balance} does not cover gas on {chain.key}",
                    user_message=user_message_for(ErrorKind.INSUFFICIENT_FUNDS, "transfer"),
                )
            call_kwargs.update(gas=NATIVE_TRANSFER_GAS, gas_price=DEFAULT_GAS_PRICE)
            logger.debug(f"No amount given; sending balance minus gas: {value}")
        else:
            value = to_base_units(intent.amount, NATIVE_DECIMALS)

        amount_text = from_base_units(value, NATIVE_DECIMALS)
        call = TxCall(
            label=f"transfer {amount_text} {chain.native_symbol}",
            to=Web3.to_checksum_address(recipient),
            data=intent.data,
            value=value,
            **call_kwargs,
        )
        outcome = self.orchestrator.run(chain, call)
        outcome.raise_for_status(call.label)
        logger.info(f"Transferred {amount_text} {chain.native_symbol} to {recipient}: {outcome.tx_hash}")
        return TransferResult(
            chain=chain.key,
            tx_hash=outcome.tx_hash,
            recipient=recipient,
            token=chain.native_symbol,
            amount=amount_text,
        )

    def _send_erc20(
        self,
        chain: ChainDescriptor,
        sender: str,
        recipient: str,
        token_address: str,
        token_label: str,
        intent: TransferIntent,
    ) -> TransferResult:
        w3 = self.registry.client_for(chain)
        contract = erc20_contract(w3, token_address)
        decimals = read_decimals(w3, token_address)
        if intent.amount is None:
            value = int(contract.functions.balanceOf(Web3.to_checksum_address(sender)).call())
            if value <= 0:
                raise ValidationError(
                    f"No {token_label} balance to transfer",
                    user_message=f"You have no {token_label} to transfer.",
                )
        else:
            value = to_base_units(intent.amount, decimals)

        amount_text = from_base_units(value, decimals)
        call = TxCall(
            label=f"transfer {amount_text} {token_label}",
            function=contract.functions.transfer(Web3.to_checksum_address(recipient), value),
        )
        outcome = self.orchestrator.run(chain, call)
        outcome.raise_for_status(call.label)
        logger.info(f"Transferred {amount_text} {token_label} to {recipient}: {outcome.tx_hash}")
        return TransferResult(
            chain=chain.key,
            tx_hash=outcome.tx_hash,
            recipient=recipient,
            token=token_label,
            amount=amount_text,
        )
