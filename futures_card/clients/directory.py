"""Main contract directory client and its optional TTL cache."""

import time
from typing import Callable, Optional, Protocol

from ..data.models import ContractDirectoryEntry
from ..data.parsers import DIRECTORY_ENDPOINT, parse_directory_payload
from ..errors import ApiError
from ..logging.config import get_logger
from .base import BaseQuoteClient

logger = get_logger(__name__)


class ContractDirectory(Protocol):
    """Anything that can list the main contracts."""

    async def list_main_contracts(self) -> list[ContractDirectoryEntry]: ...


class ContractDirectoryClient(BaseQuoteClient):
    """Fetches the full main contract directory, one GET per call."""

    endpoint = DIRECTORY_ENDPOINT

    async def list_main_contracts(self) -> list[ContractDirectoryEntry]:
        """
        Fetch every tradable main contract.

        Returns:
            Directory entries in service order

        Raises:
            NetworkError: If the transport fails or HTTP status is not 2xx
            ApiError: If the envelope code is non-zero
        """
        url = self.config.endpoints.directory_url
        payload = await self._request_json("GET", url)

        try:
            entries = parse_directory_payload(payload)
        except ApiError as e:
            self._error_count += 1
            self.logger.warning("Directory service reported failure",
                                status_code=e.status_code, service_message=e.service_message)
            raise

        self.logger.info("Contract directory fetched", entry_count=len(entries))
        return entries


class CachedContractDirectory:
    """
    Single-entry TTL cache in front of a contract directory source.

    Only successful fetches are stored; a failed fetch leaves the previous
    state untouched and propagates its error.
    """

    def __init__(self, source: ContractDirectory, ttl_seconds: int = 3600,
                 clock: Callable[[], float] = time.monotonic):
        self._source = source
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: Optional[list[ContractDirectoryEntry]] = None
        self._fetched_at: float = 0.0

    @property
    def is_fresh(self) -> bool:
        """True if a cached directory exists and is within TTL."""
        return self._entries is not None and self._clock() - self._fetched_at < self._ttl

    async def list_main_contracts(self) -> list[ContractDirectoryEntry]:
        """Return the cached directory, fetching when missing or expired."""
        if self.is_fresh:
            return list(self._entries)
        return await self.refresh()

    async def refresh(self) -> list[ContractDirectoryEntry]:
        """Fetch the directory now and replace the cached copy."""
        entries = await self._source.list_main_contracts()
        self._entries = list(entries)
        self._fetched_at = self._clock()
        logger.info("Contract directory cache refreshed", entry_count=len(entries),
                    ttl_seconds=self._ttl)
        return list(entries)

    def invalidate(self) -> None:
        """Drop the cached directory so the next call fetches."""
        self._entries = None
        logger.info("Contract directory cache invalidated")
