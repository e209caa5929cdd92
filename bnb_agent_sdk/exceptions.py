"""
Exceptions for the BNB agent SDK.

The hierarchy follows the order in which a request can fail:

- ``ValidationError``: the request itself is malformed (raised before any RPC call)
- ``ResolutionError``: a token or address could not be resolved (raised before signing)
- ``ChainExecutionError``: the chain refused or reverted the transaction
- ``InfrastructureError``: the RPC endpoint or an external API is unreachable
"""
import logging
from enum import Enum
from typing import Optional

import requests
from web3.exceptions import ContractLogicError, TimeExhausted

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Categories of chain execution failures."""
    INSUFFICIENT_FUNDS = "insufficient_funds"
    USER_REJECTED = "user_rejected"
    EXECUTION_REVERTED = "execution_reverted"
    NO_TRANSACTION_HASH = "no_transaction_hash"
    UNKNOWN = "unknown"


class OrchestrationError(Exception):
    """
    Base exception for all SDK errors.

    Attributes:
        message: The original (technical) error message
        user_message: Optional human-readable rewrite suitable for end users
    """

    def __init__(self, message: str, user_message: Optional[str] = None):
        self.message = message
        self.user_message = user_message
        super().__init__(message)

    def __str__(self) -> str:
        if self.user_message and self.user_message != self.message:
            return f"{self.user_message} ({self.message})"
        return self.message


class ConfigurationError(OrchestrationError):
    """Raised when the environment configuration is missing or invalid."""
    pass


class ValidationError(OrchestrationError):
    """Raised when request parameters are missing or malformed."""
    pass


class UnknownChain(ValidationError):
    """Raised when a chain name or id has no registered descriptor."""

    def __init__(self, chain: object, supported: Optional[list] = None):
        self.chain = chain
        self.supported = supported or []
        message = f"Chain '{chain}' is not supported"
        if self.supported:
            message += f". Please use one of: {', '.join(self.supported)}"
        super().__init__(message)


class UnsupportedBridgeDirection(ValidationError):
    """Raised when a bridge request names a chain pair other than bsc <-> opBNB."""

    def __init__(self, from_chain: str, to_chain: str):
        self.from_chain = from_chain
        self.to_chain = to_chain
        super().__init__(
            f"Unsupported bridge direction: {from_chain} to {to_chain}",
            user_message="Unsupported bridge direction. Currently only supporting: BSC <-> opBNB",
        )


class ResolutionError(OrchestrationError):
    """Raised when a token or address cannot be resolved."""
    pass


class TokenNotFound(ResolutionError):
    """Raised when a token symbol has no known contract address on a chain."""

    def __init__(self, symbol: str, chain: str, reason: Optional[str] = None):
        self.symbol = symbol
        self.chain = chain
        message = f"Token {symbol} not found on chain {chain}"
        if reason:
            message += f": {reason}"
        super().__init__(
            message,
            user_message=(
                f"Could not find token {symbol} on chain {chain}. "
                "Please check the token symbol or use the contract address."
            ),
        )


class ChainExecutionError(OrchestrationError):
    """
    Raised when a transaction fails on chain or cannot be submitted.

    Attributes:
        kind: The ErrorKind category of the failure
        tx_hash: Hash of the failed transaction, if one was produced
    """
    default_kind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        user_message: Optional[str] = None,
        kind: Optional[ErrorKind] = None,
        tx_hash: Optional[str] = None,
    ):
        self.kind = kind or self.default_kind
        self.tx_hash = tx_hash
        super().__init__(message, user_message)


class InsufficientFundsError(ChainExecutionError):
    """The sender cannot cover value plus gas."""
    default_kind = ErrorKind.INSUFFICIENT_FUNDS


class UserRejectedError(ChainExecutionError):
    """The signer refused to sign the transaction."""
    default_kind = ErrorKind.USER_REJECTED


class ExecutionRevertedError(ChainExecutionError):
    """The call reverted during simulation or after inclusion."""
    default_kind = ErrorKind.EXECUTION_REVERTED


class NoTransactionHash(ChainExecutionError):
    """Submission returned no usable transaction hash."""
    default_kind = ErrorKind.NO_TRANSACTION_HASH

    def __init__(self, message: str = "Get transaction hash failed", user_message: Optional[str] = None):
        super().__init__(message, user_message=user_message)


class InfrastructureError(OrchestrationError):
    """Raised when an RPC node or external API is unreachable or times out."""
    pass


class TransactionPendingError(InfrastructureError):
    """Raised when a submitted transaction was not mined within the wait window."""

    def __init__(self, tx_hash: str):
        self.tx_hash = tx_hash
        super().__init__(
            f"Transaction {tx_hash} is still pending",
            user_message=(
                f"Transaction {tx_hash} was submitted but not confirmed yet. "
                "It cannot be cancelled; check the explorer before retrying."
            ),
        )


_KIND_TO_ERROR = {
    ErrorKind.INSUFFICIENT_FUNDS: InsufficientFundsError,
    ErrorKind.USER_REJECTED: UserRejectedError,
    ErrorKind.EXECUTION_REVERTED: ExecutionRevertedError,
    ErrorKind.NO_TRANSACTION_HASH: NoTransactionHash,
}


def _kind_from_message(text: str) -> ErrorKind:
    lowered = text.lower()
    if "insufficient funds" in lowered or "insufficient balance" in lowered:
        return ErrorKind.INSUFFICIENT_FUNDS
    if "user rejected" in lowered or "user denied" in lowered:
        return ErrorKind.USER_REJECTED
    if "execution reverted" in lowered or "revert" in lowered:
        return ErrorKind.EXECUTION_REVERTED
    return ErrorKind.UNKNOWN


def user_message_for(kind: ErrorKind, action: str = "transaction", detail: Optional[str] = None) -> str:
    """
    Build the user-facing rewrite for an error category.

    Args:
        kind: Error category
        action: Short description of what was attempted (e.g. "bridge 0.1 BNB")
        detail: Optional extra text appended to the message

    Returns:
        Human-readable message
    """
    if kind == ErrorKind.INSUFFICIENT_FUNDS:
        text = f"Insufficient funds to {action}. Please check your balance."
    elif kind == ErrorKind.USER_REJECTED:
        text = "Transaction rejected by user."
    elif kind == ErrorKind.EXECUTION_REVERTED:
        text = (
            f"The {action} transaction reverted. This could be due to contract "
            "restrictions or incorrect parameters."
        )
    elif kind == ErrorKind.NO_TRANSACTION_HASH:
        text = f"The {action} was submitted but no transaction hash was returned."
    else:
        text = f"The {action} failed."
    if detail:
        text = f"{text} {detail}"
    return text


def classify_chain_error(exc: BaseException, action: str = "transaction") -> OrchestrationError:
    """
    Map a low-level exception to the SDK error taxonomy.

    SDK errors pass through unchanged. Timeouts and connection failures become
    InfrastructureError; everything else becomes a ChainExecutionError subclass
    chosen from the exception type and message.

    Args:
        exc: The exception raised by web3, eth-account or requests
        action: Short description of the attempted operation, used in user messages

    Returns:
        An OrchestrationError instance (not raised)
    """
    if isinstance(exc, OrchestrationError):
        return exc

    message = str(exc) or exc.__class__.__name__

    if isinstance(exc, TimeExhausted):
        return InfrastructureError(message, user_message="Timed out waiting for the network. Please try again later.")
    if isinstance(exc, (requests.ConnectionError, requests.Timeout, ConnectionError, TimeoutError)):
        return InfrastructureError(message, user_message="Network connection issue. Please try again later.")

    if isinstance(exc, ContractLogicError):
        kind = _kind_from_message(message)
        if kind == ErrorKind.UNKNOWN:
            kind = ErrorKind.EXECUTION_REVERTED
    else:
        kind = _kind_from_message(message)

    error_cls = _KIND_TO_ERROR.get(kind, ChainExecutionError)
    if error_cls is NoTransactionHash:
        return NoTransactionHash(message, user_message=user_message_for(kind, action))
    return error_cls(message, user_message=user_message_for(kind, action), kind=kind)
