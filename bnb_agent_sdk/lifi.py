"""
Minimal client for the LI.FI REST API (token metadata and swap quotes).
"""
import logging
from typing import Any, Dict, Optional

import requests
from pydantic import BaseModel, ConfigDict, Field

from ._http import retrying_session
from .config import DEFAULT_LIFI_API_URL
from .exceptions import InfrastructureError, TokenNotFound, ValidationError

logger = logging.getLogger(__name__)


class LiFiToken(BaseModel):
    """Token metadata as returned by ``GET /token``."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    address: str
    symbol: str
    decimals: int
    chain_id: int = Field(..., alias="chainId")
    name: Optional[str] = None


class LiFiQuote(BaseModel):
    """
    A single-step quote from ``GET /quote``.

    Attributes:
        approval_address: Spender that must be approved for ERC20 inputs
        to_amount: Expected output in base units
        to_amount_min: Output after slippage, in base units
        transaction_request: Ready-to-sign call (to, data, value, gasLimit, gasPrice)
    """
    model_config = ConfigDict(extra="ignore")

    approval_address: Optional[str] = None
    to_amount: Optional[str] = None
    to_amount_min: Optional[str] = None
    transaction_request: Dict[str, Any]

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "LiFiQuote":
        estimate = data.get("estimate") or {}
        return cls(
            approval_address=estimate.get("approvalAddress"),
            to_amount=estimate.get("toAmount"),
            to_amount_min=estimate.get("toAmountMin"),
            transaction_request=data.get("transactionRequest") or {},
        )


class LiFiClient:
    """HTTP client with retries for the handful of LI.FI endpoints the SDK uses."""

    def __init__(
        self,
        base_url: str = DEFAULT_LIFI_API_URL,
        retry_count: int = 3,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            base_url: API root (e.g. "https://li.quest/v1")
            retry_count: Retries for connection errors and 5xx/429 responses
            timeout: Request timeout in seconds
            session: Pre-built session (tests); a retrying session is created otherwise
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or retrying_session(retry_count)

    def _get(self, path: str, params: Dict[str, Any]) -> requests.Response:
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            return self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"LI.FI request to {path} failed: {e}")
            raise InfrastructureError(
                f"LI.FI request failed: {e}",
                user_message="Token service is unreachable. Please try again later.",
            ) from e

    def get_token(self, chain_id: int, symbol: str, chain_name: Optional[str] = None) -> LiFiToken:
        """
        Look up a token by symbol.

        Args:
            chain_id: EIP-155 chain id
            symbol: Token symbol (or address)
            chain_name: Network key used in error messages

        Returns:
            LiFiToken

        Raises:
            TokenNotFound: If the API does not know the token
            InfrastructureError: On transport errors or unexpected status codes
        """
        response = self._get("token", {"chain": chain_id, "token": symbol})
        if response.status_code in (400, 404):
            raise TokenNotFound(symbol, chain_name or str(chain_id), reason=_error_message(response))
        if response.status_code != 200:
            raise InfrastructureError(f"LI.FI token lookup returned HTTP {response.status_code}")
        token = LiFiToken.model_validate(response.json())
        logger.debug(f"LI.FI resolved {symbol} on chain {chain_id} to {token.address}")
        return token

    def get_quote(
        self,
        chain_id: int,
        from_token: str,
        to_token: str,
        from_amount: int,
        from_address: str,
        slippage: float,
    ) -> LiFiQuote:
        """
        Request a same-chain swap quote.

        Args:
            chain_id: Chain to swap on
            from_token: Input token address (native sentinel for BNB)
            to_token: Output token address
            from_amount: Input amount in base units
            from_address: Wallet that will send the transaction
            slippage: Fraction in (0, 1]

        Returns:
            LiFiQuote

        Raises:
            ValidationError: If no route exists for the pair
            InfrastructureError: On transport errors or unexpected status codes
        """
        params = {
            "fromChain": chain_id,
            "toChain": chain_id,
            "fromToken": from_token,
            "toToken": to_token,
            "fromAmount": str(from_amount),
            "fromAddress": from_address,
            "slippage": slippage,
        }
        response = self._get("quote", params)
        if response.status_code in (400, 404):
            message = _error_message(response)
            raise ValidationError(
                f"No swap route found: {message}",
                user_message=(
                    f"No swap route found from {from_token} to {to_token}. "
                    "Please check that both tokens exist and have liquidity."
                ),
            )
        if response.status_code != 200:
            raise InfrastructureError(f"LI.FI quote returned HTTP {response.status_code}")
        quote = LiFiQuote.from_response(response.json())
        if not quote.transaction_request.get("to"):
            raise InfrastructureError("LI.FI quote has no transaction request")
        return quote


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}"
