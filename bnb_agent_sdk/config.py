"""
Configuration for the BNB agent SDK.

Two sources are combined:

- ``networks.json`` (shipped with the package) describes the four supported
  networks and their default RPC endpoints.
- Environment variables supply the signing key and optional RPC overrides.
"""
import importlib.resources
import json
import logging
import os
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigurationError, UnknownChain

logger = logging.getLogger(__name__)

DEFAULT_LIFI_API_URL = "https://li.quest/v1"
DEFAULT_BSCSCAN_TESTNET_API_URL = "https://api-testnet.bscscan.com/api"

# Env var holding the custom RPC URL for each network
RPC_ENV_VARS = {
    "bsc": "BSC_PROVIDER_URL",
    "bscTestnet": "BSC_TESTNET_PROVIDER_URL",
    "opBNB": "OPBNB_PROVIDER_URL",
    "opBNBTestnet": "OPBNB_TESTNET_PROVIDER_URL",
}


class NetworkConfig:
    """Loads and caches the packaged network table."""

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        """
        Load network definitions from networks.json.

        Returns:
            Mapping of network key (e.g. "bsc") to its raw definition
        """
        if cls._networks_cache is not None:
            return cls._networks_cache

        resource = importlib.resources.files("bnb_agent_sdk").joinpath("networks.json")
        with resource.open("r", encoding="utf-8") as f:
            cls._networks_cache = json.load(f)
        logger.debug("Loaded %d network definitions", len(cls._networks_cache))
        return cls._networks_cache

    @classmethod
    def get_network(cls, name: str) -> Dict[str, Any]:
        """
        Get a single network definition.

        Args:
            name: Network key

        Returns:
            Raw network definition

        Raises:
            UnknownChain: If the network is not defined
        """
        networks = cls.load_networks()
        if name not in networks:
            raise UnknownChain(name, supported=list(networks.keys()))
        return networks[name]

    @classmethod
    def network_names(cls) -> List[str]:
        """Return the keys of all configured networks."""
        return list(cls.load_networks().keys())


class OrchestratorConfig(BaseModel):
    """
    Runtime settings, normally read from the environment.

    Attributes:
        private_key: Hex private key of the agent wallet (BNB_PRIVATE_KEY)
        public_key: Optional watch-only address (BNB_PUBLIC_KEY)
        rpc_urls: Custom RPC URL per network key, overriding networks.json
        lifi_api_url: Base URL of the LI.FI API
        explorer_api_url: BscScan-compatible API used as a fallback balance source
        explorer_api_key: Optional API key for the explorer
        rpc_timeout: HTTP timeout for RPC requests in seconds
    """
    private_key: Optional[str] = Field(default=None, repr=False)
    public_key: Optional[str] = None
    rpc_urls: Dict[str, str] = Field(default_factory=dict)
    lifi_api_url: str = DEFAULT_LIFI_API_URL
    explorer_api_url: str = DEFAULT_BSCSCAN_TESTNET_API_URL
    explorer_api_key: Optional[str] = Field(default=None, repr=False)
    rpc_timeout: float = Field(default=30.0, gt=0)

    @field_validator("private_key")
    @classmethod
    def _check_private_key(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value:
            return None
        if not value.startswith("0x"):
            value = "0x" + value
        if len(value) != 66:
            raise ValueError("must be a 32-byte hex string")
        try:
            int(value, 16)
        except ValueError:
            raise ValueError("must be a 32-byte hex string")
        return value

    @field_validator("rpc_urls")
    @classmethod
    def _check_rpc_urls(cls, value: Dict[str, str]) -> Dict[str, str]:
        for name, url in value.items():
            if not url.startswith(("http://", "https://")):
                raise ValueError(f"RPC URL for {name} must be an http(s) URL")
        return value

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "OrchestratorConfig":
        """
        Build a configuration from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (useful in tests)

        Returns:
            Validated OrchestratorConfig

        Raises:
            ConfigurationError: If any value fails validation
        """
        env = os.environ if environ is None else environ
        rpc_urls = {
            network: env[var]
            for network, var in RPC_ENV_VARS.items()
            if env.get(var)
        }
        raw: Dict[str, Any] = {
            "private_key": env.get("BNB_PRIVATE_KEY"),
            "public_key": env.get("BNB_PUBLIC_KEY"),
            "rpc_urls": rpc_urls,
            "lifi_api_url": env.get("LIFI_API_URL") or DEFAULT_LIFI_API_URL,
            "explorer_api_url": env.get("BSCSCAN_TESTNET_API_URL") or DEFAULT_BSCSCAN_TESTNET_API_URL,
            "explorer_api_key": env.get("BSCSCAN_API_KEY"),
        }
        if env.get("BNB_RPC_TIMEOUT"):
            raw["rpc_timeout"] = env["BNB_RPC_TIMEOUT"]

        try:
            return cls.model_validate(raw)
        except PydanticValidationError as e:
            details = "\n".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ConfigurationError(f"BNB configuration validation failed:\n{details}") from e

    def has_wallet_configured(self) -> bool:
        """True when either a private key or a public address is configured."""
        return bool(self.private_key or self.public_key)
