"""
Trading date helpers for kline timestamps.

The kline service stamps each daily bar with epoch milliseconds at the start
of the trading day in exchange-local time. These helpers turn such a stamp
into the calendar date shown on a card.
"""

from datetime import datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

TRADE_DATE_FORMAT = "%Y/%m/%d"


def resolve_timezone(tz_name: Optional[str]) -> Optional[tzinfo]:
    """
    Look up an IANA timezone.

    Args:
        tz_name: Timezone name such as "Asia/Shanghai", or None

    Returns:
        The timezone, or None to mean runtime local time
    """
    if not tz_name:
        return None
    return ZoneInfo(tz_name)


def timestamp_to_datetime(timestamp_ms: int, tz: Optional[tzinfo] = None) -> datetime:
    """
    Convert epoch milliseconds to a datetime.

    Args:
        timestamp_ms: Epoch milliseconds
        tz: Target timezone; None gives naive runtime local time

    Returns:
        Datetime for the instant in the requested timezone
    """
    return datetime.fromtimestamp(timestamp_ms / 1000.0, tz=tz)


def format_trade_date(timestamp_ms: int, tz: Optional[tzinfo] = None) -> str:
    """
    Format a bar timestamp as YYYY/MM/DD.

    Args:
        timestamp_ms: Epoch milliseconds of the bar
        tz: Exchange timezone; None uses runtime local time

    Returns:
        Zero-padded trading date string
    """
    return timestamp_to_datetime(timestamp_ms, tz).strftime(TRADE_DATE_FORMAT)
