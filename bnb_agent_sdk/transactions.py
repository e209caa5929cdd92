"""
The shared transaction pipeline: simulate, sign, submit, wait, classify.

Every state-changing operation (transfer, approval, bridge, stake, swap,
deployment) builds a ``TxCall`` and hands it to ``TransactionOrchestrator.run``.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from web3 import Web3
from web3.exceptions import TimeExhausted

from .constants import DEFAULT_GAS_PRICE
from .exceptions import (
    ErrorKind, NoTransactionHash, OrchestrationError,
    classify_chain_error, user_message_for,
)
from .models import TransactionOutcome, TxReceipt, TxStatus
from .registry import ChainRef, ChainRegistry, ClientRole
from .utils import format_tx_hash, is_empty_hash

logger = logging.getLogger(__name__)


@dataclass
class TxCall:
    """
    One on-chain call, described independently of the chain it runs on.

    Either ``function`` (a bound contract function or constructor) or a raw
    ``to``/``data`` pair must be given.

    Attributes:
        label: Short description used in logs and user-facing errors
        function: Bound ContractFunction, or ContractConstructor when deploying
        to: Destination for raw calls
        data: Hex call data for raw calls
        value: Native value in wei
        gas: Fixed gas limit; estimated when None
        gas_price: Fixed gas price; read from the node when None
        deployment: True when ``function`` is a contract constructor
    """
    label: str
    function: Any = None
    to: Optional[str] = None
    data: Optional[str] = None
    value: int = 0
    gas: Optional[int] = None
    gas_price: Optional[int] = None
    deployment: bool = False

    def __post_init__(self):
        if self.function is None and self.to is None:
            raise ValueError("TxCall needs either a contract function or a destination address")
        if self.value < 0:
            raise ValueError("TxCall value must not be negative")


class TransactionOrchestrator:
    """
    Runs calls through simulate -> sign/submit -> wait -> classify.

    Failures before a hash exists raise a ChainExecutionError subclass (or
    InfrastructureError). Once a hash exists the result is a
    TransactionOutcome: Success, Reverted, or Pending when the receipt did not
    arrive within ``receipt_timeout``.
    """

    def __init__(
        self,
        registry: ChainRegistry,
        receipt_timeout: float = 120,
        poll_interval: float = 0.5,
        gas_buffer: float = 1.1,
    ):
        """
        Args:
            registry: Source of clients and the signing account
            receipt_timeout: Seconds to wait for a receipt before reporting Pending
            poll_interval: Receipt polling interval in seconds
            gas_buffer: Multiplier applied to gas estimates
        """
        self.registry = registry
        self.receipt_timeout = receipt_timeout
        self.poll_interval = poll_interval
        self.gas_buffer = gas_buffer

    def run(self, chain: ChainRef, call: TxCall) -> TransactionOutcome:
        """
        Execute a call on a chain and wait for its receipt.

        Args:
            chain: Network key, id or descriptor
            call: The call to execute

        Returns:
            TransactionOutcome

        Raises:
            NoTransactionHash: If submission produced no usable hash
            ChainExecutionError: If simulation, signing or submission fails
            InfrastructureError: If the RPC endpoint is unreachable
        """
        descriptor = self.registry.descriptor(chain)
        w3 = self.registry.client_for(descriptor, ClientRole.WRITE)
        sender = self.registry.account()
        base: Dict[str, Any] = {"from": sender, "value": int(call.value), "chainId": descriptor.id}

        try:
            # 1. Simulate to fail fast without spending gas
            logger.debug(f"Simulating {call.label} on {descriptor.key}")
            self._simulate(w3, call, base)

            # 2. Build
            tx = self._build(w3, call, base)
        except OrchestrationError:
            raise
        except Exception as e:
            logger.error(f"{call.label} failed before submission on {descriptor.key}: {e}")
            raise classify_chain_error(e, call.label) from e

        # 3. Sign
        try:
            signed = self.registry.signer.sign_transaction(tx)
        except Exception as e:
            logger.error(f"Transaction signing failed: {e}")
            raise classify_chain_error(e, call.label) from e

        # 4. Submit
        try:
            raw_hash = w3.eth.send_raw_transaction(signed.raw_transaction)
        except Exception as e:
            logger.error(f"Failed to send transaction: {e}")
            raise classify_chain_error(e, call.label) from e

        tx_hash = format_tx_hash(raw_hash)
        if is_empty_hash(tx_hash):
            logger.error(f"{call.label} on {descriptor.key} returned no transaction hash")
            raise NoTransactionHash(user_message=user_message_for(ErrorKind.NO_TRANSACTION_HASH, call.label))
        logger.info(f"Transaction sent on {descriptor.key}: {tx_hash}")

        # 5. Wait
        try:
            web3_receipt = w3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=self.receipt_timeout,
                poll_latency=self.poll_interval,
            )
        except TimeExhausted:
            logger.warning(f"No receipt for {tx_hash} after {self.receipt_timeout}s; still pending")
            return TransactionOutcome(chain=descriptor.key, tx_hash=tx_hash, status=TxStatus.PENDING)
        except Exception as e:
            logger.error(f"Waiting for receipt of {tx_hash} failed: {e}")
            error = classify_chain_error(e, call.label)
            if hasattr(error, "tx_hash"):
                error.tx_hash = tx_hash
            raise error from e

        # 6. Classify
        receipt = self._convert_receipt(web3_receipt)
        if is_empty_hash(receipt.tx_hash):
            raise NoTransactionHash(user_message=user_message_for(ErrorKind.NO_TRANSACTION_HASH, call.label))

        if receipt.status == 1:
            logger.debug(f"{call.label} confirmed in block {receipt.block_number}")
            return TransactionOutcome(
                chain=descriptor.key, tx_hash=receipt.tx_hash, status=TxStatus.SUCCESS, receipt=receipt,
            )
        logger.error(f"{call.label} reverted on {descriptor.key}: {receipt.tx_hash}")
        return TransactionOutcome(
            chain=descriptor.key,
            tx_hash=receipt.tx_hash,
            status=TxStatus.REVERTED,
            error_kind=ErrorKind.EXECUTION_REVERTED,
            receipt=receipt,
        )

    def _simulate(self, w3: Web3, call: TxCall, base: Dict[str, Any]) -> None:
        if call.function is None:
            w3.eth.call({**base, "to": call.to, "data": call.data or "0x"})
        elif call.deployment:
            w3.eth.call({**base, "data": call.function.data_in_transaction})
        else:
            call.function.call(dict(base))

    def _build(self, w3: Web3, call: TxCall, base: Dict[str, Any]) -> Dict[str, Any]:
        params = dict(base)
        params["nonce"] = w3.eth.get_transaction_count(base["from"], "pending")
        params["gasPrice"] = call.gas_price if call.gas_price is not None else self._gas_price(w3)

        if call.function is None:
            params["to"] = call.to
            params["data"] = call.data or "0x"
            params["gas"] = call.gas if call.gas is not None else self._estimate(w3.eth.estimate_gas, params)
            return params

        if call.gas is not None:
            params["gas"] = call.gas
        else:
            estimate_params = {k: v for k, v in params.items() if k != "nonce"}
            params["gas"] = self._estimate(call.function.estimate_gas, estimate_params)
        return call.function.build_transaction(params)

    def _estimate(self, estimator, params: Dict[str, Any]) -> int:
        gas = int(estimator(params) * self.gas_buffer)
        logger.debug(f"Estimated gas: {gas}")
        return gas

    def _gas_price(self, w3: Web3) -> int:
        try:
            return int(w3.eth.gas_price)
        except Exception as e:
            logger.warning(f"Gas price lookup failed, using default {DEFAULT_GAS_PRICE}: {e}")
            return DEFAULT_GAS_PRICE

    def _convert_receipt(self, web3_receipt: Any) -> TxReceipt:
        """
        Convert a web3 receipt to our TxReceipt model.

        Args:
            web3_receipt: AttributeDict (or plain dict) returned by web3

        Returns:
            TxReceipt
        """
        receipt_dict = dict(web3_receipt)
        for key, value in list(receipt_dict.items()):
            if isinstance(value, (bytes, bytearray)):
                receipt_dict[key] = Web3.to_hex(value)
        receipt_dict["logs"] = [dict(log) for log in receipt_dict.get("logs") or []]
        return TxReceipt.model_validate(receipt_dict)
