"""
Signers for the BNB agent SDK.
"""
import logging
from typing import Any, Dict, Protocol

from eth_account import Account
from eth_account.signers.local import LocalAccount

logger = logging.getLogger(__name__)


class Signer(Protocol):
    """Protocol for custom signers"""
    address: str

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        """Sign transaction and return signed tx object"""
        ...


class LocalSigner:
    """
    Signer backed by an in-process private key.

    The address is derived once at construction and never changes for the
    lifetime of the signer.
    """

    def __init__(self, private_key: str):
        """
        Args:
            private_key: Hex private key, with or without 0x prefix

        Raises:
            ValueError: If the key is not a valid secp256k1 private key
        """
        if not private_key:
            raise ValueError("private_key must not be empty")
        self._account: LocalAccount = Account.from_key(private_key)
        self.address: str = self._account.address

    def sign_transaction(self, transaction_dict: Dict[str, Any]) -> Any:
        """
        Sign a transaction dictionary.

        Args:
            transaction_dict: Fully populated transaction (nonce, gas, chainId, ...)

        Returns:
            SignedTransaction with ``raw_transaction`` and ``hash``
        """
        return self._account.sign_transaction(transaction_dict)

    def __repr__(self) -> str:
        return f"LocalSigner(address={self.address})"
