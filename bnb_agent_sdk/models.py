"""
Data models for the BNB agent SDK.

Intents carry validated, chain-scoped request parameters; results are what
each operation returns to its caller.
"""
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import (
    ErrorKind, ExecutionRevertedError, TransactionPendingError, ValidationError,
    user_message_for,
)
from .utils import normalize_optional


class TxReceipt(BaseModel):
    """Transaction receipt from the blockchain"""
    model_config = ConfigDict(populate_by_name=True)

    tx_hash: str = Field(..., alias="transactionHash")
    block_number: int = Field(..., alias="blockNumber")
    block_hash: str = Field(..., alias="blockHash")
    status: int
    gas_used: int = Field(..., alias="gasUsed")
    from_address: Optional[str] = Field(None, alias="from")
    to_address: Optional[str] = Field(None, alias="to")
    contract_address: Optional[str] = Field(None, alias="contractAddress")
    logs: List[Dict[str, Any]] = Field(default_factory=list)


class TxStatus(str, Enum):
    """Terminal state of a submitted transaction as last observed."""
    SUCCESS = "success"
    REVERTED = "reverted"
    PENDING = "pending"


class TransactionOutcome(BaseModel):
    """
    Result of running one call through the transaction pipeline.

    Attributes:
        chain: Network key the transaction was sent on
        tx_hash: Hash of the submitted transaction
        status: Success, Reverted or Pending (receipt wait timed out)
        error_kind: Set when status is not Success
        receipt: Parsed receipt, when one was observed
    """
    chain: str
    tx_hash: str
    status: TxStatus
    error_kind: Optional[ErrorKind] = None
    receipt: Optional[TxReceipt] = None

    @property
    def ok(self) -> bool:
        return self.status == TxStatus.SUCCESS

    def raise_for_status(self, action: str = "transaction") -> "TransactionOutcome":
        """
        Raise if the transaction did not succeed.

        Args:
            action: Description of the operation, used in the user message

        Returns:
            self, so calls can be chained

        Raises:
            ExecutionRevertedError: If the receipt reports a revert
            TransactionPendingError: If no receipt was observed in time
        """
        if self.status == TxStatus.REVERTED:
            raise ExecutionRevertedError(
                f"Transaction {self.tx_hash} reverted on {self.chain}",
                user_message=user_message_for(ErrorKind.EXECUTION_REVERTED, action),
                tx_hash=self.tx_hash,
            )
        if self.status == TxStatus.PENDING:
            raise TransactionPendingError(self.tx_hash)
        return self


class NativeToken(BaseModel):
    """The chain's base currency."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["native"] = "native"
    symbol: str

    @property
    def is_native(self) -> bool:
        return True


class Erc20Token(BaseModel):
    """An ERC20 contract token."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["erc20"] = "erc20"
    address: str
    symbol: Optional[str] = None

    @property
    def is_native(self) -> bool:
        return False


TokenRef = Annotated[Union[NativeToken, Erc20Token], Field(discriminator="kind")]


class _Intent(BaseModel):
    """Base for request intents: frozen, null-ish strings become None."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _normalize_sentinels(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: normalize_optional(value) for key, value in data.items()}
        return data

    @classmethod
    def from_params(cls, params: Dict[str, Any]):
        """
        Validate raw extracted parameters into an intent.

        Args:
            params: Parameter dictionary (keys may use either field names or aliases)

        Returns:
            Intent instance

        Raises:
            ValidationError: If required parameters are missing or malformed
        """
        try:
            return cls.model_validate(params)
        except PydanticValidationError as e:
            raise _to_validation_error(cls.__name__, e) from e


def _to_validation_error(name: str, error: PydanticValidationError) -> ValidationError:
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'value'}: {err['msg']}" for err in error.errors()
    )
    return ValidationError(f"Invalid {name}: {details}")


class TransferIntent(_Intent):
    """Send native coin or an ERC20 token on one chain."""
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    chain: str
    to_address: str = Field(..., alias="toAddress")
    token: Optional[str] = None
    amount: Optional[str] = None
    data: Optional[str] = None

    @field_validator("data")
    @classmethod
    def _check_data(cls, value: Optional[str]) -> Optional[str]:
        # Anything that is not hex call data is dropped
        if value is not None and not value.startswith("0x"):
            return None
        return value


class BridgeIntent(_Intent):
    """Move funds between BSC (L1) and opBNB (L2)."""
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    from_chain: str = Field(..., alias="fromChain")
    to_chain: str = Field(..., alias="toChain")
    amount: str
    from_token: Optional[str] = Field(None, alias="fromToken")
    to_token: Optional[str] = Field(None, alias="toToken")
    to_address: Optional[str] = Field(None, alias="toAddress")


class SwapIntent(_Intent):
    """Same-chain token swap."""
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    chain: str = "bsc"
    from_token: str = Field(..., alias="inputToken")
    to_token: str = Field(..., alias="outputToken")
    amount: str
    slippage: Optional[float] = None


class FaucetIntent(_Intent):
    """Request test tokens from the testnet faucet."""
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    chain: str = "bscTestnet"
    token: Optional[str] = None
    to_address: Optional[str] = Field(None, alias="toAddress")


class StakeAction(str, Enum):
    """Liquid staking operations."""
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    CLAIM = "claim"


class DepositIntent(_Intent):
    """Stake native BNB for the derivative token."""
    action: Literal["deposit"] = "deposit"
    chain: str = "bsc"
    amount: str


class WithdrawIntent(_Intent):
    """Request a withdrawal; amount None means the whole derivative balance."""
    action: Literal["withdraw"] = "withdraw"
    chain: str = "bsc"
    amount: Optional[str] = None


class ClaimIntent(_Intent):
    """Claim every withdrawal request that has finished unbonding."""
    action: Literal["claim"] = "claim"
    chain: str = "bsc"


StakeIntent = Annotated[
    Union[DepositIntent, WithdrawIntent, ClaimIntent],
    Field(discriminator="action"),
]

_stake_intent_adapter = TypeAdapter(StakeIntent)


def parse_stake_intent(params: Dict[str, Any]) -> Union[DepositIntent, WithdrawIntent, ClaimIntent]:
    """
    Validate a raw stake request into one of the stake intents.

    Args:
        params: Dictionary with an "action" key of deposit, withdraw or claim

    Returns:
        DepositIntent, WithdrawIntent or ClaimIntent

    Raises:
        ValidationError: If the action is unknown or required fields are missing
    """
    raw = dict(params)
    action = normalize_optional(raw.get("action"))
    if action is None:
        raise ValidationError(
            "Action is required for staking",
            user_message="Action is required for staking. Use 'deposit', 'withdraw', or 'claim'",
        )
    raw["action"] = str(action).lower()
    try:
        return _stake_intent_adapter.validate_python(raw)
    except PydanticValidationError as e:
        raise _to_validation_error("stake request", e) from e


class WithdrawalRequest(BaseModel):
    """A pending withdrawal on the staking contract."""
    index: int
    amount_in_token: int
    claimable: bool


class TransferResult(BaseModel):
    chain: str
    tx_hash: str
    recipient: str
    token: str
    amount: str


class BridgeResult(BaseModel):
    """
    Outcome of a bridge call.

    Success means the source-chain transaction was confirmed; arrival on the
    destination chain is not tracked.
    """
    from_chain: str
    to_chain: str
    tx_hash: str
    recipient: str
    amount: str
    from_token: str
    to_token: str
    entry_point: str
    delegation_fee: int = 0
    approval_tx_hash: Optional[str] = None


class StakeResult(BaseModel):
    action: StakeAction
    message: str
    tx_hash: Optional[str] = None
    amount: Optional[str] = None
    derivative_balance: Optional[str] = None
    claimed_total: Optional[str] = None
    claimed_count: int = 0
    claim_tx_hashes: List[str] = Field(default_factory=list)


class SwapResult(BaseModel):
    chain: str
    tx_hash: str
    from_token: str
    to_token: str
    amount: str
    slippage: float


class BalanceResult(BaseModel):
    chain: str
    address: str
    token: str
    amount: str
    source: Literal["rpc", "explorer"] = "rpc"


class FaucetResult(BaseModel):
    chain: str
    token: str
    recipient: str
    tx_hash: str


class DeployResult(BaseModel):
    chain: str
    tx_hash: str
    contract_address: str
