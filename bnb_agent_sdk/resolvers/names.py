"""
Web3 name service lookups (SPACE ID .bnb names via the ENS-compatible registry).
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Optional, Protocol

from ens import ENS

from .._rate_limited_log import rate_limited_log
from ..constants import NAME_SERVICE_TIMEOUT, SPACE_ID_REGISTRY_ADDRESS
from ..registry import ChainDescriptor, ChainRegistry

logger = logging.getLogger(__name__)


class NameService(Protocol):
    """Anything that can turn a human-readable name into an address."""

    def resolve(self, name: str, chain: ChainDescriptor) -> Optional[str]:
        ...


class SpaceIdNameService:
    """
    Resolves names through the SPACE ID registry using the chain's own RPC.

    Each lookup runs on a worker thread and is abandoned after ``timeout``
    seconds; a timeout, an unknown name and any lookup error all yield None.

    An abandoned lookup keeps its worker until the RPC call returns, bounded
    only by the registry's RPC timeout. While every worker is held this way,
    new lookups return None at once instead of queueing behind them.
    """

    def __init__(
        self,
        registry: ChainRegistry,
        registry_address: str = SPACE_ID_REGISTRY_ADDRESS,
        timeout: float = NAME_SERVICE_TIMEOUT,
        max_workers: int = 4,
    ):
        self.registry = registry
        self.registry_address = registry_address
        self.timeout = timeout
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="name-service")
        self._slots = threading.BoundedSemaphore(max_workers)

    def resolve(self, name: str, chain: ChainDescriptor) -> Optional[str]:
        """
        Resolve a name to an address.

        Args:
            name: Name such as "alice.bnb"
            chain: Chain whose RPC endpoint is queried

        Returns:
            Checksummed address, or None when unresolved
        """
        if not self._slots.acquire(blocking=False):
            rate_limited_log(
                f"Name service busy on {chain.key}: all workers are held by earlier lookups",
                level="warning",
                logger_instance=logger,
            )
            return None
        try:
            future = self._executor.submit(self._lookup, name, chain)
        except RuntimeError:
            self._slots.release()
            raise
        future.add_done_callback(lambda _: self._slots.release())

        try:
            address = future.result(timeout=self.timeout)
        except FutureTimeoutError:
            future.cancel()
            rate_limited_log(
                f"Name service lookup timed out on {chain.key} after {self.timeout}s",
                level="warning",
                logger_instance=logger,
            )
            return None
        except Exception as e:
            rate_limited_log(
                f"Name service lookup failed on {chain.key}: {e}",
                level="warning",
                logger_instance=logger,
            )
            return None

        if address:
            logger.debug("Resolved name %s to %s", name, address)
            return str(address)
        logger.debug("Name %s not registered", name)
        return None

    def _lookup(self, name: str, chain: ChainDescriptor) -> Optional[str]:
        w3 = self.registry.client_for(chain)
        ns = ENS.from_web3(w3, addr=self.registry_address)
        return ns.address(name)

    def close(self) -> None:
        """Stop the worker threads without waiting for stuck lookups."""
        self._executor.shutdown(wait=False)
