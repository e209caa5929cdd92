"""
Test token requests against the BSC testnet faucet.

The faucet's wire protocol lives behind ``FaucetTransport``; this module only
validates the request, resolves the recipient and interprets the answer.
"""
import logging
from typing import Any, Dict, Optional, Protocol, Union

from ..constants import FAUCET_CHAIN, FAUCET_DEFAULT_TOKEN, FAUCET_TOKENS
from ..exceptions import InfrastructureError, NoTransactionHash, OrchestrationError, ValidationError
from ..models import FaucetIntent, FaucetResult
from ..registry import ChainRegistry
from ..resolvers import AddressResolver
from ..utils import format_tx_hash, is_empty_hash, is_hex_address

logger = logging.getLogger(__name__)


class FaucetTransport(Protocol):
    """Connection to a faucet service."""

    def request(self, token: str, recipient: str) -> Optional[str]:
        """Ask the faucet to send ``token`` to ``recipient``; return the funding tx hash."""
        ...


class FaucetAction:
    """Requests test tokens for the signing account or a resolved recipient."""

    def __init__(
        self,
        registry: ChainRegistry,
        addresses: AddressResolver,
        transport: FaucetTransport,
    ):
        self.registry = registry
        self.addresses = addresses
        self.transport = transport

    def faucet(self, intent: Union[FaucetIntent, Dict[str, Any]]) -> FaucetResult:
        """
        Request test tokens.

        Args:
            intent: FaucetIntent or raw parameters (token, toAddress, chain)

        Returns:
            FaucetResult with the funding transaction hash

        Raises:
            ValidationError: Not BSC testnet, unsupported token or bad recipient
            InfrastructureError: The faucet could not be reached
            NoTransactionHash: The faucet answered without a transaction hash
        """
        if not isinstance(intent, FaucetIntent):
            intent = FaucetIntent.from_params(intent)

        chain = self.registry.descriptor(intent.chain)
        if chain.key != FAUCET_CHAIN:
            logger.error(f"Faucet requested on {chain.key}")
            raise ValidationError(
                f"Faucet is not available on {chain.key}",
                user_message="The faucet only serves BSC testnet (bscTestnet).",
            )

        token = (intent.token or FAUCET_DEFAULT_TOKEN).upper()
        if token not in FAUCET_TOKENS:
            supported = ", ".join(FAUCET_TOKENS)
            raise ValidationError(
                f"Unsupported faucet token: {intent.token}",
                user_message=f"Unsupported token: {intent.token}. Supported tokens are: {supported}",
            )

        sender = self.registry.account()
        recipient = self.addresses.resolve(intent.to_address, sender, chain)
        if not is_hex_address(recipient):
            raise ValidationError(
                f"Invalid recipient address: {recipient}",
                user_message="Failed to validate address. Please provide a valid BSC address.",
            )

        logger.debug(f"Requesting {token} from the faucet for {recipient}")
        try:
            raw_hash = self.transport.request(token, recipient)
        except OrchestrationError:
            raise
        except Exception as e:
            logger.error(f"Faucet request failed: {e}")
            raise InfrastructureError(
                f"Faucet request failed: {e}",
                user_message="Connection to faucet failed. Please try again later.",
            ) from e

        tx_hash = format_tx_hash(raw_hash)
        if is_empty_hash(tx_hash):
            raise NoTransactionHash(
                "Faucet returned no transaction hash",
                user_message=f"The faucet accepted the {token} request but returned no transaction hash.",
            )
        logger.info(f"Faucet sent {token} to {recipient}: {tx_hash}")
        return FaucetResult(chain=chain.key, token=token, recipient=recipient, tx_hash=tx_hash)
