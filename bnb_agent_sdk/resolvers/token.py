"""
Token symbol resolution.
"""
import logging
from typing import Dict, Optional

from web3 import Web3

from ..abis import ERC20_ABI
from ..constants import NATIVE_TOKEN_ADDRESS, TESTNET_TOKEN_ADDRESSES
from ..exceptions import TokenNotFound, ValidationError
from ..lifi import LiFiClient
from ..models import Erc20Token, NativeToken, TokenRef
from ..registry import ChainDescriptor
from ..utils import normalize_optional, same_address

logger = logging.getLogger(__name__)


class TokenResolver:
    """
    Maps a token symbol to a contract address on a given chain.

    Addresses pass through untouched and native-currency symbols map to the
    native sentinel. Otherwise test networks use a fixed table and main
    networks ask the token aggregator. A miss always raises TokenNotFound.
    """

    def __init__(
        self,
        aggregator: Optional[LiFiClient] = None,
        testnet_tokens: Optional[Dict[str, str]] = None,
    ):
        self.aggregator = aggregator
        self.testnet_tokens = {
            k.upper(): v for k, v in (testnet_tokens or TESTNET_TOKEN_ADDRESSES).items()
        }

    def resolve(self, symbol_or_address: str, chain: ChainDescriptor) -> str:
        """
        Resolve a token to an address.

        Args:
            symbol_or_address: Symbol such as "USDT", or a 0x address
            chain: Chain the token lives on

        Returns:
            Contract address, or NATIVE_TOKEN_ADDRESS for the native currency

        Raises:
            ValidationError: If no token was given
            TokenNotFound: If the symbol is unknown on this chain
        """
        value = normalize_optional(symbol_or_address)
        if value is None:
            raise ValidationError("Token is required")
        value = str(value)

        if value.startswith("0x"):
            return value
        if chain.is_native_symbol(value):
            return NATIVE_TOKEN_ADDRESS

        symbol = value.upper()
        if chain.testnet:
            address = self.testnet_tokens.get(symbol)
            if address is None:
                logger.error(f"No testnet address for {symbol} on {chain.key}")
                raise TokenNotFound(symbol, chain.key, reason="not in the testnet token table")
            return address

        if self.aggregator is None:
            raise TokenNotFound(symbol, chain.key, reason="no token aggregator configured")
        return self.aggregator.get_token(chain.id, symbol, chain_name=chain.key).address

    def resolve_ref(self, symbol_or_address: Optional[str], chain: ChainDescriptor) -> TokenRef:
        """
        Resolve a token into a typed reference.

        A missing token means the native currency.
        """
        value = normalize_optional(symbol_or_address)
        if value is None or chain.is_native_symbol(str(value)):
            return NativeToken(symbol=chain.native_symbol)
        address = self.resolve(str(value), chain)
        if same_address(address, NATIVE_TOKEN_ADDRESS):
            return NativeToken(symbol=chain.native_symbol)
        symbol = None if str(value).startswith("0x") else str(value).upper()
        return Erc20Token(address=address, symbol=symbol)


def erc20_contract(w3: Web3, address: str):
    """ERC20 contract handle for an address."""
    return w3.eth.contract(address=Web3.to_checksum_address(address), abi=ERC20_ABI)


def read_decimals(w3: Web3, address: str) -> int:
    """Read an ERC20 token's decimals."""
    return int(erc20_contract(w3, address).functions.decimals().call())
