"""
Utility functions for the BNB agent SDK.
"""
import re
from decimal import Context, Decimal, InvalidOperation
from typing import Any, Optional, Union

from .exceptions import ValidationError

NULL_SENTINELS = frozenset({"null", "none", "undefined", "nil"})

_HEX_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")
_ZERO_HASH_RE = re.compile(r"^(0x)?0*$")

# Wide enough for any uint256 amount at any decimals
_AMOUNT_CONTEXT = Context(prec=100)


def normalize_optional(value: Any) -> Any:
    """
    Convert null-ish strings to None.

    LLM-extracted parameters frequently carry the literal string "null" (or an
    empty string) where a value is absent.

    Args:
        value: Raw parameter value

    Returns:
        None for null-ish values, otherwise the (stripped) value
    """
    if value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped or stripped.lower() in NULL_SENTINELS:
            return None
        return stripped
    return value


def is_hex_address(value: Optional[str]) -> bool:
    """Check for a 0x-prefixed 40-hex-digit string (no checksum validation)."""
    return bool(value) and bool(_HEX_ADDRESS_RE.match(value))


def same_address(a: Optional[str], b: Optional[str]) -> bool:
    """Case-insensitive address comparison."""
    if not a or not b:
        return False
    return a.lower() == b.lower()


def parse_amount(amount: Union[str, int, float, Decimal]) -> Decimal:
    """
    Parse a user-facing decimal amount.

    Args:
        amount: Decimal string such as "0.001"

    Returns:
        Decimal value, guaranteed finite and > 0

    Raises:
        ValidationError: If the amount is not a positive number
    """
    try:
        value = Decimal(str(amount).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(
            f"Invalid amount format: {amount}",
            user_message=f"Invalid amount format: {amount}. Please provide a valid number.",
        )
    if not value.is_finite() or value <= 0:
        raise ValidationError(
            f"Invalid amount: {amount}",
            user_message=f"Invalid amount: {amount}. Please provide a positive number.",
        )
    return value


def to_base_units(amount: Union[str, Decimal], decimals: int = 18) -> int:
    """
    Convert a decimal amount to the token's integer unit (wei-equivalent).

    The conversion is exact: amounts with more fractional digits than the
    token supports are rejected rather than rounded.

    Args:
        amount: Decimal string or Decimal
        decimals: Token decimals (18 for native BNB)

    Returns:
        Integer amount in base units

    Raises:
        ValidationError: If the amount is not positive or is too precise
    """
    value = amount if isinstance(amount, Decimal) else parse_amount(amount)
    scaled = value.scaleb(decimals, context=_AMOUNT_CONTEXT)
    if scaled != scaled.to_integral_value():
        raise ValidationError(
            f"Amount {amount} has more than {decimals} decimal places",
            user_message=f"Invalid amount: {amount}. The token supports at most {decimals} decimals.",
        )
    return int(scaled)


def from_base_units(value: int, decimals: int = 18) -> str:
    """
    Format an integer base-unit amount as a plain decimal string.

    Args:
        value: Amount in base units
        decimals: Token decimals

    Returns:
        Decimal string without exponent or trailing zeros (e.g. "0.001")
    """
    quantity = Decimal(int(value)).scaleb(-decimals, context=_AMOUNT_CONTEXT)
    if quantity == 0:
        return "0"
    return format(quantity.normalize(context=_AMOUNT_CONTEXT), "f")


def format_tx_hash(tx_hash: Any) -> Optional[str]:
    """
    Normalise a transaction hash to a 0x-prefixed hex string.

    Args:
        tx_hash: bytes, HexBytes or str as returned by web3

    Returns:
        Hex string, or None if no hash was given
    """
    if tx_hash is None:
        return None
    if isinstance(tx_hash, (bytes, bytearray)):
        return "0x" + bytes(tx_hash).hex()
    text = str(tx_hash)
    if not text:
        return None
    if not text.startswith("0x"):
        text = "0x" + text
    return text


def is_empty_hash(tx_hash: Optional[str]) -> bool:
    """True when a hash is missing, "0x" or all zeros."""
    if not tx_hash:
        return True
    return bool(_ZERO_HASH_RE.match(tx_hash))
