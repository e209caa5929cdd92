"""
Chain registry: network descriptors, the signing account and per-chain clients.

Clients are built fresh on every request from the descriptor's RPC URL. The
registry holds no "active chain"; callers pass the chain explicitly or carry a
``ChainContext`` scoped to their request.
"""
import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from web3 import Web3

from .config import NetworkConfig, OrchestratorConfig
from .exceptions import ConfigurationError, UnknownChain
from .signer import LocalSigner, Signer

logger = logging.getLogger(__name__)

ChainRef = Union[str, int, "ChainDescriptor"]
Web3Factory = Callable[["ChainDescriptor"], Web3]


@dataclass(frozen=True)
class ChainDescriptor:
    """
    Immutable description of one configured network.

    Attributes:
        key: Registry key (e.g. "bsc", "opBNBTestnet")
        id: EIP-155 chain id
        name: Display name
        native_symbol: Symbol of the native currency (BNB or tBNB)
        rpc_url: RPC endpoint in use
        is_custom_rpc: True when rpc_url came from configuration, not the default table
        native_aliases: Symbols accepted as synonyms for the native currency
        testnet: True for test networks
        explorer: Block explorer base URL
        explorer_api: BscScan-compatible API URL, if the network has one
    """
    key: str
    id: int
    name: str
    native_symbol: str
    rpc_url: str
    is_custom_rpc: bool = False
    native_aliases: Tuple[str, ...] = ()
    testnet: bool = False
    explorer: Optional[str] = None
    explorer_api: Optional[str] = None

    @classmethod
    def from_network(cls, key: str, raw: Dict, rpc_url: Optional[str] = None) -> "ChainDescriptor":
        """
        Build a descriptor from a networks.json entry.

        Args:
            key: Network key
            raw: Raw definition from networks.json
            rpc_url: Custom RPC URL overriding the default

        Returns:
            ChainDescriptor
        """
        aliases = tuple(raw.get("nativeAliases") or (raw["nativeSymbol"],))
        return cls(
            key=key,
            id=int(raw["chainId"]),
            name=raw["name"],
            native_symbol=raw["nativeSymbol"],
            rpc_url=rpc_url or raw["rpc"],
            is_custom_rpc=bool(rpc_url),
            native_aliases=aliases,
            testnet=bool(raw.get("testnet", False)),
            explorer=raw.get("explorer"),
            explorer_api=raw.get("explorerApi"),
        )

    def with_rpc(self, rpc_url: str) -> "ChainDescriptor":
        """Return a copy of this descriptor using a custom RPC endpoint."""
        return dataclasses.replace(self, rpc_url=rpc_url, is_custom_rpc=True)

    def is_native_symbol(self, symbol: Optional[str]) -> bool:
        """True if symbol names this chain's native currency (case-insensitive)."""
        if not symbol:
            return False
        wanted = symbol.strip().upper()
        return wanted == self.native_symbol.upper() or any(
            wanted == alias.upper() for alias in self.native_aliases
        )

    def tx_url(self, tx_hash: str) -> Optional[str]:
        """Explorer link for a transaction hash."""
        if not self.explorer:
            return None
        return f"{self.explorer.rstrip('/')}/tx/{tx_hash}"


class ClientRole(str, Enum):
    """What a client is used for."""
    READ = "read"
    WRITE = "write"


class ChainRegistry:
    """
    Holds one descriptor per configured network and the single signing account.

    Lookups accept the network key (case-insensitive), the numeric chain id or
    a descriptor. Everything else is derived on demand.
    """

    def __init__(
        self,
        chains: Iterable[ChainDescriptor],
        signer: Signer,
        web3_factory: Optional[Web3Factory] = None,
        rpc_timeout: float = 30.0,
    ):
        """
        Args:
            chains: Network descriptors to register
            signer: Signing account used for every write
            web3_factory: Builds a Web3 client for a descriptor (defaults to HTTPProvider)
            rpc_timeout: HTTP timeout for the default factory, in seconds

        Raises:
            ValueError: If no chains are given or two share a key or id
        """
        self._chains: Dict[str, ChainDescriptor] = {}
        self._by_lower_key: Dict[str, str] = {}
        self._by_id: Dict[int, str] = {}
        for descriptor in chains:
            if descriptor.key in self._chains or descriptor.id in self._by_id:
                raise ValueError(f"Duplicate chain definition: {descriptor.key} ({descriptor.id})")
            self._chains[descriptor.key] = descriptor
            self._by_lower_key[descriptor.key.lower()] = descriptor.key
            self._by_id[descriptor.id] = descriptor.key
        if not self._chains:
            raise ValueError("At least one chain must be registered")

        self.signer = signer
        self.rpc_timeout = rpc_timeout
        self._web3_factory = web3_factory or self._default_web3

    @classmethod
    def from_config(
        cls,
        config: OrchestratorConfig,
        signer: Optional[Signer] = None,
        web3_factory: Optional[Web3Factory] = None,
    ) -> "ChainRegistry":
        """
        Build a registry from configuration and the packaged network table.

        Args:
            config: Runtime configuration
            signer: Custom signer; when omitted a LocalSigner is built from config.private_key
            web3_factory: Optional client factory

        Returns:
            ChainRegistry

        Raises:
            ConfigurationError: If no signer is given and the private key is missing
        """
        if signer is None:
            if not config.private_key:
                raise ConfigurationError("BNB_PRIVATE_KEY is missing")
            signer = LocalSigner(config.private_key)

        chains: List[ChainDescriptor] = []
        for key, raw in NetworkConfig.load_networks().items():
            descriptor = ChainDescriptor.from_network(key, raw, config.rpc_urls.get(key))
            if key == "bscTestnet" and config.explorer_api_url:
                descriptor = dataclasses.replace(descriptor, explorer_api=config.explorer_api_url)
            if descriptor.is_custom_rpc:
                logger.debug("Using custom RPC for %s", key)
            chains.append(descriptor)

        return cls(chains, signer, web3_factory=web3_factory, rpc_timeout=config.rpc_timeout)

    @property
    def chains(self) -> List[ChainDescriptor]:
        return list(self._chains.values())

    def chain_names(self) -> List[str]:
        return list(self._chains.keys())

    def descriptor(self, chain: ChainRef) -> ChainDescriptor:
        """
        Look up a network.

        Args:
            chain: Network key (any case), chain id, or descriptor

        Returns:
            The registered ChainDescriptor

        Raises:
            UnknownChain: If nothing is registered under that name or id
        """
        if isinstance(chain, ChainDescriptor):
            registered = self._chains.get(chain.key)
            if registered is None:
                raise UnknownChain(chain.key, supported=self.chain_names())
            return registered
        if isinstance(chain, bool):
            raise UnknownChain(chain, supported=self.chain_names())
        if isinstance(chain, int):
            key = self._by_id.get(chain)
        elif isinstance(chain, str) and chain.strip():
            key = self._by_lower_key.get(chain.strip().lower())
        else:
            key = None
        if key is None:
            raise UnknownChain(chain, supported=self.chain_names())
        return self._chains[key]

    def account(self) -> str:
        """Address of the signing account."""
        return self.signer.address

    def client_for(self, chain: ChainRef, role: ClientRole = ClientRole.READ) -> Web3:
        """
        Build a client bound to one chain.

        Args:
            chain: Network key, id or descriptor
            role: READ for queries, WRITE to default ``from`` to the signing account

        Returns:
            A new Web3 instance
        """
        descriptor = self.descriptor(chain)
        w3 = self._web3_factory(descriptor)
        if role == ClientRole.WRITE:
            w3.eth.default_account = self.signer.address
        return w3

    def context(self, chain: ChainRef) -> "ChainContext":
        """Return a request-scoped context bound to one chain."""
        return ChainContext(registry=self, chain=self.descriptor(chain))

    def _default_web3(self, descriptor: ChainDescriptor) -> Web3:
        provider = Web3.HTTPProvider(descriptor.rpc_url, request_kwargs={"timeout": self.rpc_timeout})
        return Web3(provider)

    def __repr__(self) -> str:
        return f"ChainRegistry(chains={self.chain_names()}, account={self.signer.address})"


@dataclass(frozen=True)
class ChainContext:
    """
    A chain selection owned by a single request.

    Switching returns a new context; the registry and other requests are
    unaffected.
    """
    registry: ChainRegistry
    chain: ChainDescriptor

    @property
    def address(self) -> str:
        return self.registry.account()

    def read(self) -> Web3:
        return self.registry.client_for(self.chain, ClientRole.READ)

    def write(self) -> Web3:
        return self.registry.client_for(self.chain, ClientRole.WRITE)

    def switch(self, chain: ChainRef) -> "ChainContext":
        return ChainContext(registry=self.registry, chain=self.registry.descriptor(chain))
