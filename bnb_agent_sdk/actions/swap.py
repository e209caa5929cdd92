"""
Same-chain token swaps routed through the LI.FI aggregator.
"""
import logging
from typing import Any, Dict, Optional, Union

from ..allowance import AllowanceManager
from ..constants import DEFAULT_SLIPPAGE, NATIVE_DECIMALS, NATIVE_TOKEN_ADDRESS, SWAP_CHAIN
from ..exceptions import ValidationError
from ..lifi import LiFiClient
from ..models import Erc20Token, SwapIntent, SwapResult
from ..registry import ChainRegistry
from ..resolvers import TokenResolver, read_decimals
from ..transactions import TransactionOrchestrator, TxCall
from ..utils import from_base_units, parse_amount, same_address, to_base_units

logger = logging.getLogger(__name__)


def _to_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, str):
        return int(value, 0)
    return int(value)


class SwapAction:
    """Swaps one token for another on BSC using a single LI.FI quote."""

    def __init__(
        self,
        registry: ChainRegistry,
        orchestrator: TransactionOrchestrator,
        allowances: AllowanceManager,
        tokens: TokenResolver,
        aggregator: LiFiClient,
    ):
        self.registry = registry
        self.orchestrator = orchestrator
        self.allowances = allowances
        self.tokens = tokens
        self.aggregator = aggregator

    def swap(self, intent: Union[SwapIntent, Dict[str, Any]]) -> SwapResult:
        """
        Swap tokens.

        Args:
            intent: SwapIntent or raw parameters (chain, inputToken, outputToken,
                amount, slippage)

        Returns:
            SwapResult

        Raises:
            ValidationError: Unsupported chain, identical tokens, bad amount or
                slippage, or no route
            TokenNotFound: A token symbol could not be resolved
            ChainExecutionError: Approval or swap transaction failed
        """
        if not isinstance(intent, SwapIntent):
            intent = SwapIntent.from_params(intent)

        chain = self.registry.descriptor(intent.chain)
        if chain.key != SWAP_CHAIN:
            raise ValidationError(
                f"Unsupported chain for swap: {intent.chain}",
                user_message="Swaps are only supported on BSC mainnet",
            )
        slippage = DEFAULT_SLIPPAGE if intent.slippage is None else float(intent.slippage)
        if not 0 < slippage <= 1:
            raise ValidationError(
                f"Invalid slippage: {slippage}",
                user_message="Slippage must be greater than 0 and at most 1 (100%).",
            )
        if intent.from_token.upper() == intent.to_token.upper():
            raise ValidationError("Cannot swap a token for itself")
        amount = parse_amount(intent.amount)

        from_ref = self.tokens.resolve_ref(intent.from_token, chain)
        from_address = from_ref.address if isinstance(from_ref, Erc20Token) else NATIVE_TOKEN_ADDRESS
        to_address = self.tokens.resolve(intent.to_token, chain)
        if same_address(from_address, to_address):
            raise ValidationError("Cannot swap a token for itself")

        w3 = self.registry.client_for(chain)
        decimals = read_decimals(w3, from_ref.address) if isinstance(from_ref, Erc20Token) else NATIVE_DECIMALS
        units = to_base_units(amount, decimals)
        amount_text = from_base_units(units, decimals)
        sender = self.registry.account()

        quote = self.aggregator.get_quote(
            chain_id=chain.id,
            from_token=from_address,
            to_token=to_address,
            from_amount=units,
            from_address=sender,
            slippage=slippage,
        )
        logger.debug(f"Quote: {amount_text} {intent.from_token} -> {quote.to_amount} {intent.to_token} base units")

        if isinstance(from_ref, Erc20Token) and quote.approval_address:
            self.allowances.ensure(chain, from_ref.address, sender, quote.approval_address, units)

        request = quote.transaction_request
        call = TxCall(
            label=f"swap {amount_text} {intent.from_token} for {intent.to_token}",
            to=request["to"],
            data=request.get("data"),
            value=_to_int(request.get("value")) or 0,
            gas=_to_int(request.get("gasLimit")),
            gas_price=_to_int(request.get("gasPrice")),
        )
        outcome = self.orchestrator.run(chain, call)
        outcome.raise_for_status(call.label)
        logger.info(f"Swapped {amount_text} {intent.from_token} for {intent.to_token}: {outcome.tx_hash}")

        return SwapResult(
            chain=chain.key,
            tx_hash=outcome.tx_hash,
            from_token=intent.from_token,
            to_token=intent.to_token,
            amount=amount_text,
            slippage=slippage,
        )
