"""
Bridging between BNB Smart Chain (L1) and opBNB (L2) over the standard bridge.

Success means the source-chain transaction confirmed. Delivery on the
destination chain is handled by the bridge relayers and is not tracked here.
"""
import logging
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from web3 import Web3

from ..abis import L1_STANDARD_BRIDGE_ABI, L2_STANDARD_BRIDGE_ABI
from ..allowance import AllowanceManager
from ..constants import (
    BRIDGE_EXTRA_DATA, BRIDGE_L1_CHAIN, BRIDGE_L2_CHAIN, BRIDGE_MIN_GAS_LIMIT,
    L1_BRIDGE_ADDRESS, L2_BRIDGE_ADDRESS, LEGACY_ERC20_ETH, NATIVE_DECIMALS, NATIVE_TOKEN_ADDRESS,
)
from ..exceptions import UnsupportedBridgeDirection, ValidationError
from ..models import BridgeIntent, BridgeResult, Erc20Token, NativeToken
from ..registry import ChainRegistry
from ..resolvers import AddressResolver, TokenResolver, read_decimals
from ..transactions import TransactionOrchestrator, TxCall
from ..utils import from_base_units, is_hex_address, normalize_optional, parse_amount, same_address, to_base_units

logger = logging.getLogger(__name__)


class BridgeDirection(str, Enum):
    """The two supported directions."""
    L1_TO_L2 = "L1_TO_L2"  # bsc -> opBNB, deposit
    L2_TO_L1 = "L2_TO_L1"  # opBNB -> bsc, withdrawal


class BridgeEntryPoint(str, Enum):
    """Bridge contract entry points, one per (direction, recipient, token kind)."""
    DEPOSIT_NATIVE = "depositNative"
    DEPOSIT_TOKEN = "depositToken"
    DEPOSIT_NATIVE_TO = "depositNativeTo"
    DEPOSIT_TOKEN_TO = "depositTokenTo"
    WITHDRAW_NATIVE = "withdrawNative"
    WITHDRAW_TOKEN = "withdrawToken"
    WITHDRAW_NATIVE_TO = "withdrawNativeTo"
    WITHDRAW_TOKEN_TO = "withdrawTokenTo"

    @property
    def contract_function(self) -> str:
        """Name of the Solidity function this entry point calls."""
        return _CONTRACT_FUNCTIONS[self]

    @property
    def has_recipient(self) -> bool:
        return self.value.endswith("To")


_CONTRACT_FUNCTIONS = {
    BridgeEntryPoint.DEPOSIT_NATIVE: "depositETH",
    BridgeEntryPoint.DEPOSIT_TOKEN: "depositERC20",
    BridgeEntryPoint.DEPOSIT_NATIVE_TO: "depositETHTo",
    BridgeEntryPoint.DEPOSIT_TOKEN_TO: "depositERC20To",
    BridgeEntryPoint.WITHDRAW_NATIVE: "withdraw",
    BridgeEntryPoint.WITHDRAW_TOKEN: "withdraw",
    BridgeEntryPoint.WITHDRAW_NATIVE_TO: "withdrawTo",
    BridgeEntryPoint.WITHDRAW_TOKEN_TO: "withdrawTo",
}

# (direction, self_bridge, native) -> entry point
ENTRY_POINTS: Dict[Tuple[BridgeDirection, bool, bool], BridgeEntryPoint] = {
    (BridgeDirection.L1_TO_L2, True, True): BridgeEntryPoint.DEPOSIT_NATIVE,
    (BridgeDirection.L1_TO_L2, True, False): BridgeEntryPoint.DEPOSIT_TOKEN,
    (BridgeDirection.L1_TO_L2, False, True): BridgeEntryPoint.DEPOSIT_NATIVE_TO,
    (BridgeDirection.L1_TO_L2, False, False): BridgeEntryPoint.DEPOSIT_TOKEN_TO,
    (BridgeDirection.L2_TO_L1, True, True): BridgeEntryPoint.WITHDRAW_NATIVE,
    (BridgeDirection.L2_TO_L1, True, False): BridgeEntryPoint.WITHDRAW_TOKEN,
    (BridgeDirection.L2_TO_L1, False, True): BridgeEntryPoint.WITHDRAW_NATIVE_TO,
    (BridgeDirection.L2_TO_L1, False, False): BridgeEntryPoint.WITHDRAW_TOKEN_TO,
}


def select_entry_point(direction: BridgeDirection, self_bridge: bool, native: bool) -> BridgeEntryPoint:
    """
    Pick the bridge entry point.

    Args:
        direction: L1_TO_L2 or L2_TO_L1
        self_bridge: True when the recipient is the sender
        native: True when bridging the native currency

    Returns:
        BridgeEntryPoint
    """
    return ENTRY_POINTS[(BridgeDirection(direction), bool(self_bridge), bool(native))]


class BridgeDirector:
    """
    Executes one bridge request end to end.

    Validation (direction, amount, destination token) happens before any RPC
    call; token and recipient resolution happen before signing.
    """

    def __init__(
        self,
        registry: ChainRegistry,
        orchestrator: TransactionOrchestrator,
        allowances: AllowanceManager,
        addresses: AddressResolver,
        tokens: TokenResolver,
        l1_bridge: str = L1_BRIDGE_ADDRESS,
        l2_bridge: str = L2_BRIDGE_ADDRESS,
    ):
        self.registry = registry
        self.orchestrator = orchestrator
        self.allowances = allowances
        self.addresses = addresses
        self.tokens = tokens
        self.l1_bridge = l1_bridge
        self.l2_bridge = l2_bridge

    def direction_for(self, from_chain: str, to_chain: str) -> BridgeDirection:
        """
        Map a chain pair to a direction.

        Raises:
            ValidationError: If a chain is missing
            UnknownChain: If a chain is not registered
            UnsupportedBridgeDirection: For any pair other than bsc <-> opBNB
        """
        if not normalize_optional(from_chain):
            raise ValidationError("From chain is required for bridging")
        if not normalize_optional(to_chain):
            raise ValidationError("To chain is required for bridging")
        source = self.registry.descriptor(from_chain).key
        destination = self.registry.descriptor(to_chain).key
        if (source, destination) == (BRIDGE_L1_CHAIN, BRIDGE_L2_CHAIN):
            return BridgeDirection.L1_TO_L2
        if (source, destination) == (BRIDGE_L2_CHAIN, BRIDGE_L1_CHAIN):
            return BridgeDirection.L2_TO_L1
        logger.error(f"Unsupported bridge direction: {from_chain} to {to_chain}")
        raise UnsupportedBridgeDirection(source, destination)

    def bridge(self, intent: Union[BridgeIntent, Dict[str, Any]]) -> BridgeResult:
        """
        Bridge native BNB or an ERC20 token between bsc and opBNB.

        Args:
            intent: BridgeIntent or raw parameters (fromChain, toChain, amount,
                fromToken, toToken, toAddress)

        Returns:
            BridgeResult

        Raises:
            ValidationError: Bad direction, amount, or missing destination token
            ResolutionError: Token could not be resolved
            ChainExecutionError: Approval or bridge call failed
        """
        if not isinstance(intent, BridgeIntent):
            intent = BridgeIntent.from_params(intent)

        # Pure input checks first; nothing below this block may precede them
        direction = self.direction_for(intent.from_chain, intent.to_chain)
        amount = parse_amount(intent.amount)
        source = self.registry.descriptor(intent.from_chain)
        destination = self.registry.descriptor(intent.to_chain)
        native = (
            intent.from_token is None
            or source.is_native_symbol(intent.from_token)
            or same_address(intent.from_token, NATIVE_TOKEN_ADDRESS)
        )
        if direction == BridgeDirection.L1_TO_L2 and not native and intent.to_token is None:
            logger.error("Missing L2 token address for ERC20 bridging")
            raise ValidationError(
                "Token address on opBNB is required when bridging ERC20 from BSC to opBNB",
                user_message=(
                    "When bridging ERC20 tokens from BSC to opBNB, you must specify "
                    "the token address on opBNB."
                ),
            )

        # Resolution
        sender = self.registry.account()
        recipient = self.addresses.resolve(intent.to_address, sender, source)
        if not is_hex_address(recipient):
            raise ValidationError(
                f"Invalid recipient address: {recipient}",
                user_message=f"Could not resolve recipient {intent.to_address} to a valid address.",
            )
        self_bridge = same_address(recipient, sender)
        from_token = NativeToken(symbol=source.native_symbol) if native else self.tokens.resolve_ref(intent.from_token, source)
        native = isinstance(from_token, NativeToken)
        to_token: Optional[str] = None
        if not native and direction == BridgeDirection.L1_TO_L2:
            to_token = self.tokens.resolve(intent.to_token, destination)

        entry_point = select_entry_point(direction, self_bridge, native)
        logger.debug(
            f"Bridge {direction.value}: self_bridge={self_bridge} native={native} -> {entry_point.value}"
        )

        w3 = self.registry.client_for(source)
        decimals = NATIVE_DECIMALS if native else read_decimals(w3, from_token.address)
        amount_units = to_base_units(amount, decimals)
        amount_text = from_base_units(amount_units, decimals)

        bridge_address = self.l1_bridge if direction == BridgeDirection.L1_TO_L2 else self.l2_bridge
        approval_hash = None
        if not native:
            approval = self.allowances.ensure(source, from_token.address, sender, bridge_address, amount_units)
            approval_hash = approval.tx_hash if approval else None

        if direction == BridgeDirection.L1_TO_L2:
            call, fee = self._deposit_call(w3, entry_point, from_token, to_token, recipient, amount_units), 0
        else:
            call, fee = self._withdraw_call(w3, entry_point, from_token, recipient, amount_units)

        action = f"bridge {amount_text} {self._token_label(from_token)}"
        outcome = self.orchestrator.run(source, call)
        outcome.raise_for_status(action)
        logger.info(f"Bridged {amount_text} from {source.key} to {destination.key}: {outcome.tx_hash}")

        return BridgeResult(
            from_chain=source.key,
            to_chain=destination.key,
            tx_hash=outcome.tx_hash,
            recipient=recipient,
            amount=amount_text,
            from_token=self._token_label(from_token),
            to_token=to_token or (destination.native_symbol if native else self._token_label(from_token)),
            entry_point=entry_point.value,
            delegation_fee=fee,
            approval_tx_hash=approval_hash,
        )

    def _deposit_call(
        self,
        w3: Web3,
        entry_point: BridgeEntryPoint,
        token,
        l2_token: Optional[str],
        recipient: str,
        amount: int,
    ) -> TxCall:
        contract = w3.eth.contract(address=Web3.to_checksum_address(self.l1_bridge), abi=L1_STANDARD_BRIDGE_ABI)
        fn = getattr(contract.functions, entry_point.contract_function)
        tail = (BRIDGE_MIN_GAS_LIMIT, BRIDGE_EXTRA_DATA)

        if entry_point == BridgeEntryPoint.DEPOSIT_NATIVE:
            return TxCall(label=entry_point.value, function=fn(*tail), value=amount)
        if entry_point == BridgeEntryPoint.DEPOSIT_NATIVE_TO:
            return TxCall(label=entry_point.value, function=fn(_checksum(recipient), *tail), value=amount)

        l1_token, l2 = _checksum(token.address), _checksum(l2_token)
        if entry_point == BridgeEntryPoint.DEPOSIT_TOKEN:
            return TxCall(label=entry_point.value, function=fn(l1_token, l2, amount, *tail))
        return TxCall(label=entry_point.value, function=fn(l1_token, l2, _checksum(recipient), amount, *tail))

    def _withdraw_call(
        self,
        w3: Web3,
        entry_point: BridgeEntryPoint,
        token,
        recipient: str,
        amount: int,
    ) -> Tuple[TxCall, int]:
        contract = w3.eth.contract(address=Web3.to_checksum_address(self.l2_bridge), abi=L2_STANDARD_BRIDGE_ABI)
        fee = int(contract.functions.delegationFee().call())
        logger.debug(f"Delegation fee: {fee}")

        native = isinstance(token, NativeToken)
        l2_token = LEGACY_ERC20_ETH if native else _checksum(token.address)
        value = amount + fee if native else fee
        fn = getattr(contract.functions, entry_point.contract_function)
        tail = (BRIDGE_MIN_GAS_LIMIT, BRIDGE_EXTRA_DATA)

        if entry_point.has_recipient:
            function = fn(l2_token, _checksum(recipient), amount, *tail)
        else:
            function = fn(l2_token, amount, *tail)
        return TxCall(label=entry_point.value, function=function, value=value), fee

    @staticmethod
    def _token_label(token) -> str:
        if isinstance(token, Erc20Token):
            return token.symbol or token.address
        return token.symbol


def _checksum(address: str) -> str:
    return Web3.to_checksum_address(address)
