"""
AgentClient - one object wiring the registry, resolvers and actions together.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from .actions import (
    BalanceReader, BridgeDirector, ContractDeployer, FaucetAction, FaucetTransport, StakeCoordinator,
    SwapAction, TransferAction,
)
from .allowance import AllowanceManager
from .config import OrchestratorConfig
from .exceptions import ConfigurationError
from .explorer import ExplorerClient
from .lifi import LiFiClient
from .models import (
    BalanceResult, BridgeIntent, BridgeResult, DeployResult, FaucetIntent, FaucetResult, StakeResult,
    SwapIntent, SwapResult, TransferIntent, TransferResult,
)
from .providers import WalletProvider
from .registry import ChainRef, ChainRegistry, Web3Factory
from .resolvers import AddressResolver, NameService, SpaceIdNameService, TokenResolver
from .signer import Signer
from .transactions import TransactionOrchestrator

logger = logging.getLogger(__name__)


class AgentClient:
    """
    Entry point for agents.

    Typical use::

        client = AgentClient.from_env()
        client.bridge({"fromChain": "bsc", "toChain": "opBNB", "amount": "0.001"})

    Every operation takes its chain explicitly; the client holds no active chain
    and can serve concurrent requests.
    """

    def __init__(
        self,
        registry: ChainRegistry,
        lifi: Optional[LiFiClient] = None,
        explorer: Optional[ExplorerClient] = None,
        name_service: Optional[NameService] = None,
        faucet_transport: Optional[FaucetTransport] = None,
        receipt_timeout: float = 120,
    ):
        """
        Args:
            registry: Chain registry with the signing account
            lifi: LI.FI client for mainnet token lookup and swaps
            explorer: Explorer client for the testnet balance fallback
            name_service: Name service for recipient resolution (SPACE ID by default)
            faucet_transport: Connection to the testnet faucet; faucet requests fail without one
            receipt_timeout: Seconds to wait for each receipt
        """
        self.registry = registry
        self.lifi = lifi or LiFiClient()
        self.explorer = explorer or ExplorerClient()
        self.name_service = name_service if name_service is not None else SpaceIdNameService(registry)

        self.orchestrator = TransactionOrchestrator(registry, receipt_timeout=receipt_timeout)
        self.allowances = AllowanceManager(registry, self.orchestrator)
        self.addresses = AddressResolver(self.name_service)
        self.tokens = TokenResolver(self.lifi)

        self.transfers = TransferAction(registry, self.orchestrator, self.addresses, self.tokens)
        self.bridges = BridgeDirector(registry, self.orchestrator, self.allowances, self.addresses, self.tokens)
        self.staking = StakeCoordinator(registry, self.orchestrator, self.allowances)
        self.swaps = SwapAction(registry, self.orchestrator, self.allowances, self.tokens, self.lifi)
        self.balances = BalanceReader(registry, self.addresses, self.tokens, self.explorer)
        self.deployer = ContractDeployer(registry, self.orchestrator)
        self.wallet = WalletProvider(registry)
        self.faucets = (
            FaucetAction(registry, self.addresses, faucet_transport) if faucet_transport is not None else None
        )

    @classmethod
    def from_config(
        cls,
        config: OrchestratorConfig,
        signer: Optional[Signer] = None,
        web3_factory: Optional[Web3Factory] = None,
    ) -> "AgentClient":
        """Build a client from an OrchestratorConfig."""
        registry = ChainRegistry.from_config(config, signer=signer, web3_factory=web3_factory)
        return cls(
            registry,
            lifi=LiFiClient(config.lifi_api_url),
            explorer=ExplorerClient(config.explorer_api_url, api_key=config.explorer_api_key),
        )

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "AgentClient":
        """Build a client from environment variables (see OrchestratorConfig.from_env)."""
        return cls.from_config(OrchestratorConfig.from_env(environ))

    @property
    def address(self) -> str:
        return self.registry.account()

    def transfer(self, intent: Union[TransferIntent, Dict[str, Any]]) -> TransferResult:
        return self.transfers.transfer(intent)

    def bridge(self, intent: Union[BridgeIntent, Dict[str, Any]]) -> BridgeResult:
        return self.bridges.bridge(intent)

    def stake(self, intent: Any) -> StakeResult:
        return self.staking.stake(intent)

    def swap(self, intent: Union[SwapIntent, Dict[str, Any]]) -> SwapResult:
        return self.swaps.swap(intent)

    def get_balance(self, chain: ChainRef, address: Optional[str] = None, token: Optional[str] = None) -> BalanceResult:
        return self.balances.get_balance(chain, address=address, token=token)

    def deploy(
        self,
        chain: ChainRef,
        abi: List[Dict[str, Any]],
        bytecode: str,
        args: Optional[Sequence[Any]] = None,
    ) -> DeployResult:
        return self.deployer.deploy(chain, abi, bytecode, args)

    def faucet(self, intent: Union[FaucetIntent, Dict[str, Any]]) -> FaucetResult:
        if self.faucets is None:
            raise ConfigurationError("No faucet transport configured")
        return self.faucets.faucet(intent)

    def wallet_summary(self, chain: Optional[ChainRef] = None) -> Optional[str]:
        return self.wallet.get(chain)

    def close(self) -> None:
        """Release the name service worker threads."""
        close = getattr(self.name_service, "close", None)
        if close is not None:
            close()
