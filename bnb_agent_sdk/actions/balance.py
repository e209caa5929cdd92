"""
Balance queries for native BNB and ERC20 tokens.
"""
import logging
from typing import Optional

from web3 import Web3

from ..constants import NATIVE_DECIMALS
from ..exceptions import classify_chain_error
from ..explorer import ExplorerClient
from ..models import BalanceResult, Erc20Token
from ..registry import ChainRef, ChainRegistry
from ..resolvers import AddressResolver, TokenResolver, erc20_contract, read_decimals
from ..utils import from_base_units

logger = logging.getLogger(__name__)


class BalanceReader:
    """
    Reads balances for a resolved address.

    On test networks a zero or failed native read is double-checked against
    the block explorer API, because public testnet RPC nodes are often stale.
    """

    def __init__(
        self,
        registry: ChainRegistry,
        addresses: AddressResolver,
        tokens: TokenResolver,
        explorer: Optional[ExplorerClient] = None,
    ):
        self.registry = registry
        self.addresses = addresses
        self.tokens = tokens
        self.explorer = explorer

    def get_balance(
        self,
        chain: ChainRef,
        address: Optional[str] = None,
        token: Optional[str] = None,
    ) -> BalanceResult:
        """
        Get a balance.

        Args:
            chain: Network key, id or descriptor
            address: Address or name; defaults to the signing account
            token: Symbol or address; defaults to the native currency

        Returns:
            BalanceResult with a decimal amount string

        Raises:
            TokenNotFound: Token symbol could not be resolved
            InfrastructureError: RPC unreachable and no fallback available
        """
        descriptor = self.registry.descriptor(chain)
        owner = self.addresses.resolve(address, self.registry.account(), descriptor)
        ref = self.tokens.resolve_ref(token, descriptor)
        w3 = self.registry.client_for(descriptor)

        if isinstance(ref, Erc20Token):
            try:
                decimals = read_decimals(w3, ref.address)
                raw = erc20_contract(w3, ref.address).functions.balanceOf(
                    Web3.to_checksum_address(owner)
                ).call()
            except Exception as e:
                logger.error(f"Token balance read failed on {descriptor.key}: {e}")
                raise classify_chain_error(e, "balance query") from e
            return BalanceResult(
                chain=descriptor.key,
                address=owner,
                token=ref.symbol or ref.address,
                amount=from_base_units(int(raw), decimals),
            )

        source = "rpc"
        try:
            wei = int(w3.eth.get_balance(Web3.to_checksum_address(owner)))
        except Exception as e:
            logger.error(f"Native balance read failed on {descriptor.key}: {e}")
            fallback = self._explorer_balance(descriptor, owner)
            if fallback is None:
                raise classify_chain_error(e, "balance query") from e
            wei, source = fallback, "explorer"
        else:
            if wei == 0:
                fallback = self._explorer_balance(descriptor, owner)
                if fallback:
                    logger.debug(f"Explorer reports non-zero balance {fallback} for {owner}")
                    wei, source = fallback, "explorer"

        return BalanceResult(
            chain=descriptor.key,
            address=owner,
            token=descriptor.native_symbol,
            amount=from_base_units(wei, NATIVE_DECIMALS),
            source=source,
        )

    def _explorer_balance(self, descriptor, owner: str) -> Optional[int]:
        if not descriptor.testnet or self.explorer is None or not descriptor.explorer_api:
            return None
        return self.explorer.native_balance(owner, api_url=descriptor.explorer_api)
