"""
Address resolution.

A user-supplied recipient string is passed through an ordered list of named
strategies; the first one that returns an address wins. The final strategy
always returns the caller's own address, so resolution never fails.
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from ..constants import COMMON_TOKEN_SYMBOLS
from ..registry import ChainDescriptor
from ..utils import is_hex_address, normalize_optional
from .names import NameService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolutionRequest:
    """Input shared by every strategy."""
    raw: Optional[str]
    own_address: str
    chain: ChainDescriptor


StrategyFn = Callable[[ResolutionRequest], Optional[str]]


@dataclass(frozen=True)
class Strategy:
    name: str
    apply: StrategyFn


def _empty_is_self(request: ResolutionRequest) -> Optional[str]:
    if request.raw is None:
        return request.own_address
    return None


def _hex_passthrough(request: ResolutionRequest) -> Optional[str]:
    # No checksum validation; the string is returned exactly as given
    if is_hex_address(request.raw):
        return request.raw
    return None


def _token_symbol_is_self(request: ResolutionRequest) -> Optional[str]:
    symbol = request.raw.upper()
    if symbol in COMMON_TOKEN_SYMBOLS or request.chain.is_native_symbol(symbol):
        logger.debug("'%s' looks like a token symbol, not an address; using own address", request.raw)
        return request.own_address
    return None


def _loose_hex(request: ResolutionRequest) -> Optional[str]:
    if request.raw.startswith("0x"):
        logger.warning("Address %s is not a standard 42-character address; using it as is", request.raw)
        return request.raw
    return None


def _fallback_self(request: ResolutionRequest) -> Optional[str]:
    logger.debug("Could not resolve '%s'; using own address", request.raw)
    return request.own_address


class AddressResolver:
    """
    Turns a recipient string into an address.

    Order: blank -> own address; 42-char hex -> unchanged; token ticker ->
    own address; name service (time-bounded); other 0x strings -> unchanged
    with a warning; anything else -> own address.
    """

    def __init__(self, name_service: Optional[NameService] = None):
        self.name_service = name_service
        self.strategies: List[Strategy] = [
            Strategy("empty", _empty_is_self),
            Strategy("hex", _hex_passthrough),
            Strategy("token-symbol", _token_symbol_is_self),
            Strategy("name-service", self._name_lookup),
            Strategy("loose-hex", _loose_hex),
            Strategy("fallback", _fallback_self),
        ]

    @property
    def strategy_names(self) -> Sequence[str]:
        return [s.name for s in self.strategies]

    def resolve(self, raw: Optional[str], own_address: str, chain: ChainDescriptor) -> str:
        """
        Resolve a recipient.

        Args:
            raw: User-supplied address, name, or null-ish value
            own_address: Address used when nothing better is found
            chain: Chain the name service is queried on

        Returns:
            An address string (never None)
        """
        value = normalize_optional(raw)
        request = ResolutionRequest(
            raw=str(value) if value is not None else None,
            own_address=own_address,
            chain=chain,
        )
        for strategy in self.strategies:
            result = strategy.apply(request)
            if result is not None:
                logger.debug("Address '%s' resolved by %s strategy", raw, strategy.name)
                return result
        return own_address

    def _name_lookup(self, request: ResolutionRequest) -> Optional[str]:
        if self.name_service is None:
            return None
        try:
            return self.name_service.resolve(request.raw, request.chain)
        except Exception as e:
            logger.debug("Name service error for '%s': %s", request.raw, e)
            return None
