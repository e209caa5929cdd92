"""
Wallet discovery provider: a plain-text wallet summary for agent context.
"""
import logging
from typing import Optional

from web3 import Web3

from .constants import NATIVE_DECIMALS
from .registry import ChainRef, ChainRegistry
from .utils import from_base_units

logger = logging.getLogger(__name__)


class WalletProvider:
    """Describes the signing wallet on one chain as text."""

    def __init__(self, registry: ChainRegistry, default_chain: ChainRef = "bsc"):
        self.registry = registry
        self.default_chain = default_chain

    def get(self, chain: Optional[ChainRef] = None) -> Optional[str]:
        """
        Summarise the wallet.

        Args:
            chain: Network to report on (defaults to ``default_chain``)

        Returns:
            Address, native balance and chain id/name as text, or None on any failure
        """
        try:
            descriptor = self.registry.descriptor(chain if chain is not None else self.default_chain)
            address = self.registry.account()
            w3 = self.registry.client_for(descriptor)
            balance = from_base_units(int(w3.eth.get_balance(Web3.to_checksum_address(address))), NATIVE_DECIMALS)
        except Exception as e:
            logger.error(f"Error in BNB chain wallet provider: {e}")
            return None
        return (
            f"BNB chain Wallet Address: {address}\n"
            f"Balance: {balance} {descriptor.native_symbol}\n"
            f"Chain ID: {descriptor.id}, Name: {descriptor.name}"
        )
