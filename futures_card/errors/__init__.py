"""
Error classification for the futures card pipeline.

Upstream errors describe a quoting service that could not be reached or
reported a failure; data quality errors describe a name or series the
pipeline cannot turn into card metrics. All of them derive from
FuturesCardError and are propagated unchanged to the caller.
"""

from .base import FuturesCardError
from .data_quality import (
    DataQualityError,
    ContractNotFoundError,
    EmptySeriesError,
    InsufficientDataError,
    DegenerateSeriesError,
)
from .upstream import (
    UpstreamError,
    NetworkError,
    ApiError,
    MalformedResponseError,
)

__all__ = [
    "FuturesCardError",
    # Data Quality Errors
    "DataQualityError",
    "ContractNotFoundError",
    "EmptySeriesError",
    "InsufficientDataError",
    "DegenerateSeriesError",
    # Upstream Errors
    "UpstreamError",
    "NetworkError",
    "ApiError",
    "MalformedResponseError",
]
