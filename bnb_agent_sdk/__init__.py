"""
BNB agent SDK - transaction orchestration on BNB Smart Chain and opBNB.
"""
from .version import __version__
from .client import AgentClient
from .config import NetworkConfig, OrchestratorConfig
from .registry import ChainContext, ChainDescriptor, ChainRegistry, ClientRole
from .signer import LocalSigner, Signer
from .transactions import TransactionOrchestrator, TxCall
from .allowance import AllowanceManager
from .resolvers import AddressResolver, SpaceIdNameService, TokenResolver
from .actions import (
    BalanceReader, BridgeDirection, BridgeDirector, BridgeEntryPoint, ContractDeployer,
    FaucetAction, FaucetTransport, StakeCoordinator, SwapAction, TransferAction, select_entry_point,
)
from .providers import WalletProvider
from .models import (
    BalanceResult, BridgeIntent, BridgeResult, ClaimIntent, DepositIntent, DeployResult,
    Erc20Token, FaucetIntent, FaucetResult, NativeToken, StakeAction, StakeResult, SwapIntent,
    SwapResult, TransactionOutcome, TransferIntent, TransferResult, TxReceipt, TxStatus,
    WithdrawalRequest, WithdrawIntent, parse_stake_intent,
)
from .exceptions import (
    ChainExecutionError, ConfigurationError, ErrorKind, ExecutionRevertedError, InfrastructureError,
    InsufficientFundsError, NoTransactionHash, OrchestrationError, ResolutionError, TokenNotFound,
    TransactionPendingError, UnknownChain, UnsupportedBridgeDirection, UserRejectedError,
    ValidationError,
)

__all__ = [
    "__version__",
    "AgentClient",
    "NetworkConfig",
    "OrchestratorConfig",
    "ChainContext",
    "ChainDescriptor",
    "ChainRegistry",
    "ClientRole",
    "LocalSigner",
    "Signer",
    "TransactionOrchestrator",
    "TxCall",
    "AllowanceManager",
    "AddressResolver",
    "SpaceIdNameService",
    "TokenResolver",
    "BalanceReader",
    "BridgeDirection",
    "BridgeDirector",
    "BridgeEntryPoint",
    "ContractDeployer",
    "FaucetAction",
    "FaucetTransport",
    "StakeCoordinator",
    "SwapAction",
    "TransferAction",
    "select_entry_point",
    "WalletProvider",
    "BalanceResult",
    "BridgeIntent",
    "BridgeResult",
    "ClaimIntent",
    "DepositIntent",
    "DeployResult",
    "Erc20Token",
    "FaucetIntent",
    "FaucetResult",
    "NativeToken",
    "StakeAction",
    "StakeResult",
    "SwapIntent",
    "SwapResult",
    "TransactionOutcome",
    "TransferIntent",
    "TransferResult",
    "TxReceipt",
    "TxStatus",
    "WithdrawalRequest",
    "WithdrawIntent",
    "parse_stake_intent",
    "ChainExecutionError",
    "ConfigurationError",
    "ErrorKind",
    "ExecutionRevertedError",
    "InfrastructureError",
    "InsufficientFundsError",
    "NoTransactionHash",
    "OrchestrationError",
    "ResolutionError",
    "TokenNotFound",
    "TransactionPendingError",
    "UnknownChain",
    "UnsupportedBridgeDirection",
    "UserRejectedError",
    "ValidationError",
]
