"""
BscScan-compatible explorer API, used as a secondary read path for balances.
"""
import logging
from typing import Optional

import requests

from ._http import retrying_session
from .config import DEFAULT_BSCSCAN_TESTNET_API_URL

logger = logging.getLogger(__name__)


class ExplorerClient:
    """Reads native balances from a BscScan-style ``module=account`` endpoint."""

    def __init__(
        self,
        api_url: str = DEFAULT_BSCSCAN_TESTNET_API_URL,
        api_key: Optional[str] = None,
        retry_count: int = 2,
        timeout: int = 10,
        session: Optional[requests.Session] = None,
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or retrying_session(retry_count)

    def native_balance(self, address: str, api_url: Optional[str] = None) -> Optional[int]:
        """
        Get the native balance of an address in wei.

        Args:
            address: Account address
            api_url: Endpoint to use instead of the client default

        Returns:
            Balance in wei, or None if the explorer did not answer with a result
        """
        params = {"module": "account", "action": "balance", "address": address, "tag": "latest"}
        if self.api_key:
            params["apikey"] = self.api_key
        try:
            response = self.session.get(api_url or self.api_url, params=params, timeout=self.timeout)
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Explorer balance request failed: {e}")
            return None

        if str(data.get("status")) == "1" and data.get("message") == "OK":
            try:
                return int(data["result"])
            except (KeyError, TypeError, ValueError):
                logger.error(f"Explorer returned malformed balance: {data.get('result')!r}")
                return None
        logger.error(f"Explorer API error: {data.get('message')}")
        return None
