"""Card metrics derived from a daily kline series"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from ..config.defaults import DefaultConfig, get_default_config
from ..data.models import DerivedMetrics, OhlcBar, ResolvedContract
from ..errors import DegenerateSeriesError, InsufficientDataError
from ..logging.config import get_logger
from ..utils.time import format_trade_date, resolve_timezone

logger = get_logger(__name__)

_TRAILING_DIGITS = re.compile(r"\d+$")


def extract_contract_code(full_code: str) -> str:
    """
    Short display code of a contract: its trailing digit run.

    FG2601 -> 2601. A code without trailing digits is returned unchanged.
    """
    match = _TRAILING_DIGITS.search(full_code)
    return match.group(0) if match else full_code


def round_half_away(value: float, decimals: int = 2) -> float:
    """
    Round to a fixed number of decimals, halves away from zero.

    Works on the exact binary value of the float, so 1.005 (stored as
    1.00499...) rounds to 1.0 the same way a JavaScript toFixed does.
    """
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


class MetricsCalculator:
    """
    Derives current price, day-over-day change and trading date from the
    last two bars of a daily series.
    """

    def __init__(self, config: Optional[DefaultConfig] = None):
        self.config = config or get_default_config()
        self.min_bars = self.config.metrics.min_bars
        self.decimals = self.config.metrics.decimals
        self.exchange_tz = resolve_timezone(self.config.metrics.exchange_timezone)

    def derive_metrics(self, contract_name: str, resolved: ResolvedContract,
                       series: Sequence[OhlcBar]) -> DerivedMetrics:
        """
        Derive card metrics for a resolved contract

        Args:
            contract_name: Name as given by the caller, echoed in the result
            resolved: Contract the series belongs to
            series: Daily bars, oldest first

        Returns:
            DerivedMetrics computed from the last two bars

        Raises:
            InsufficientDataError: If fewer than two bars are available
            DegenerateSeriesError: If the previous close is zero or not finite
        """
        if len(series) < self.min_bars:
            raise InsufficientDataError(
                f"At least {self.min_bars} bars are required to compute change, got {len(series)}",
                required_count=self.min_bars,
                available_count=len(series),
                context={"contract_code": resolved.contract_code},
            )

        latest = series[-1]
        previous = series[-2]

        if previous.close == 0 or not math.isfinite(previous.close):
            raise DegenerateSeriesError(
                f"Previous close {previous.close} cannot be used as a change base",
                previous_close=previous.close,
                context={"contract_code": resolved.contract_code,
                         "timestamp_ms": previous.timestamp_ms},
            )

        if not math.isfinite(latest.close):
            raise DegenerateSeriesError(
                f"Latest close {latest.close} is not a finite price",
                previous_close=previous.close,
                context={"contract_code": resolved.contract_code,
                         "timestamp_ms": latest.timestamp_ms},
            )

        current_price = latest.close
        change_amount = current_price - previous.close
        change_percent = change_amount / previous.close * 100

        metrics = DerivedMetrics(
            contract_name=contract_name,
            contract_code=extract_contract_code(resolved.contract_code),
            current_price=current_price,
            change_amount=round_half_away(change_amount, self.decimals),
            change_percent=round_half_away(change_percent, self.decimals),
            date=format_trade_date(latest.timestamp_ms, self.exchange_tz),
        )

        logger.debug(
            "Metrics derived",
            contract_name=contract_name,
            contract_code=metrics.contract_code,
            current_price=metrics.current_price,
            change_amount=metrics.change_amount,
            change_percent=metrics.change_percent,
            date=metrics.date,
        )
        return metrics


def derive_metrics(contract_name: str, resolved: ResolvedContract,
                   series: Sequence[OhlcBar],
                   config: Optional[DefaultConfig] = None) -> DerivedMetrics:
    """Derive card metrics with a one-off calculator."""
    return MetricsCalculator(config).derive_metrics(contract_name, resolved, series)
