"""
Data quality error classifications.

These exceptions cover inputs the pipeline cannot turn into metrics: a name
that matches no contract, or a kline series too short or too degenerate to
derive day-over-day changes from.
"""

from typing import Optional

from .base import FuturesCardError


class DataQualityError(FuturesCardError):
    """Base class for problems with the requested name or returned data."""


class ContractNotFoundError(DataQualityError):
    """No directory entry matches the requested contract name."""

    def __init__(self, message: str, contract_name: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.contract_name = contract_name


class EmptySeriesError(DataQualityError):
    """Kline response parsed but carries no usable bars."""

    def __init__(self, message: str, market: Optional[str] = None,
                 contract_code: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.market = market
        self.contract_code = contract_code


class InsufficientDataError(DataQualityError):
    """Not enough bars to compute change metrics."""

    def __init__(self, message: str, required_count: Optional[int] = None,
                 available_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.required_count = required_count
        self.available_count = available_count


class DegenerateSeriesError(DataQualityError):
    """Previous close is zero or not finite, so change percent is undefined."""

    def __init__(self, message: str, previous_close: Optional[float] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.previous_close = previous_close
