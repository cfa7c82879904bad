"""
Quoting service clients.

Async clients for the main contract directory and daily kline endpoints,
sharing one httpx connection pool.
"""

from .base import BaseQuoteClient, create_http_client
from .directory import CachedContractDirectory, ContractDirectory, ContractDirectoryClient
from .kline import KlineClient, build_kline_request, translate_market

__all__ = [
    "BaseQuoteClient",
    "create_http_client",
    "ContractDirectory",
    "ContractDirectoryClient",
    "CachedContractDirectory",
    "KlineClient",
    "build_kline_request",
    "translate_market",
]
