"""
Quoting service payload parsers.

This module converts the raw JSON envelopes of the contract directory and
kline services into canonical data structures, mapping service-reported
failures and malformed bodies onto the pipeline error taxonomy.
"""

from datetime import timezone
from typing import Any

import orjson

from ..errors import ApiError, EmptySeriesError, MalformedResponseError
from ..utils.time import timestamp_to_datetime
from .models import ContractDirectoryEntry, OhlcBar

DIRECTORY_ENDPOINT = "contract_directory"
KLINE_ENDPOINT = "single_kline"

# [timestamp, open, high, low, close, volume, turnover]; only the first five are used
_MIN_KLINE_ROW_LEN = 5


def parse_json_payload(raw_data: bytes, endpoint: str) -> Any:
    """
    Parse a raw response body.

    Args:
        raw_data: Response body bytes
        endpoint: Endpoint label used in error reporting

    Returns:
        Decoded JSON value

    Raises:
        MalformedResponseError: If the body is not valid JSON
    """
    try:
        return orjson.loads(raw_data)
    except orjson.JSONDecodeError as e:
        raise MalformedResponseError(
            f"Invalid JSON from {endpoint}: {e}",
            endpoint=endpoint,
            raw_data=raw_data[:200].decode("utf-8", errors="replace"),
            expected_format="json",
        ) from e


def validate_directory_response(payload: Any) -> None:
    """
    Validate the directory envelope reports success.

    Expected format:
    {"code": 0, "msg": "", "data": {"result": [...]}}

    Raises:
        MalformedResponseError: If the envelope has no numeric code
        ApiError: If the service reports a non-zero code
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("code"), int):
        raise MalformedResponseError(
            "Directory response has no status code",
            endpoint=DIRECTORY_ENDPOINT,
            expected_format="{code, msg, data: {result: []}}",
        )

    code = payload["code"]
    if code != 0:
        msg = str(payload.get("msg") or "")
        raise ApiError(
            msg,
            service_message=msg,
            status_code=code,
            endpoint=DIRECTORY_ENDPOINT,
        )


def parse_directory_payload(payload: Any) -> list[ContractDirectoryEntry]:
    """
    Parse the main contract directory envelope.

    Args:
        payload: Decoded directory response

    Returns:
        Directory entries in service order

    Raises:
        ApiError: If the service reports a failure
        MalformedResponseError: If the result list is missing or not rows
    """
    validate_directory_response(payload)

    data = payload.get("data")
    result = data.get("result") if isinstance(data, dict) else None
    if not isinstance(result, list):
        raise MalformedResponseError(
            "Directory response has no result list",
            endpoint=DIRECTORY_ENDPOINT,
            expected_format="{code, msg, data: {result: []}}",
        )

    entries = []
    for i, row in enumerate(result):
        if not isinstance(row, dict):
            raise MalformedResponseError(
                f"Directory row at index {i} is not an object",
                endpoint=DIRECTORY_ENDPOINT,
                raw_data=repr(row)[:200],
            )
        entries.append(ContractDirectoryEntry.from_payload(row))

    return entries


def validate_kline_response(payload: Any) -> None:
    """
    Validate the kline envelope reports success.

    Raises:
        MalformedResponseError: If the envelope has no numeric status code
        ApiError: If the service reports a non-zero status code
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("status_code"), int):
        raise MalformedResponseError(
            "Kline response has no status code",
            endpoint=KLINE_ENDPOINT,
            expected_format="{status_code, status_msg, data: {quote_data: []}}",
        )

    status_code = payload["status_code"]
    if status_code != 0:
        msg = str(payload.get("status_msg") or "")
        raise ApiError(
            msg,
            service_message=msg,
            status_code=status_code,
            endpoint=KLINE_ENDPOINT,
        )


def parse_kline_payload(payload: Any, market: str = "", contract_code: str = "") -> list[OhlcBar]:
    """
    Parse a single_kline envelope into daily bars.

    Expected format:
    {
        "status_code": 0,
        "status_msg": "success",
        "data": {
            "quote_data": [{
                "market": "129", "code": "FG2601", "data_fields": [...],
                "value": [[1700000000000, 100.0, 105.0, 99.0, 102.0, 5000, 1.2e9]]
            }]
        }
    }

    Args:
        payload: Decoded kline response
        market: Requested market, for error context
        contract_code: Requested contract, for error context

    Returns:
        Bars in the order returned by the service

    Raises:
        ApiError: If the service reports a failure
        EmptySeriesError: If no quote data or no rows are present
        MalformedResponseError: If a row cannot be read as numbers or its
            timestamp is out of range
    """
    validate_kline_response(payload)

    data = payload.get("data")
    if data is not None and not isinstance(data, dict):
        raise MalformedResponseError(
            "Kline response data is not an object",
            endpoint=KLINE_ENDPOINT,
            raw_data=repr(data)[:200],
        )

    quote_data = (data or {}).get("quote_data")
    if not quote_data:
        raise EmptySeriesError(
            "Kline response contains no quote data",
            market=market,
            contract_code=contract_code,
        )

    if not isinstance(quote_data, list):
        raise MalformedResponseError(
            "Kline quote_data is not a list",
            endpoint=KLINE_ENDPOINT,
            raw_data=repr(quote_data)[:200],
        )

    first = quote_data[0]
    if not isinstance(first, dict):
        raise MalformedResponseError(
            "Kline quote_data entry is not an object",
            endpoint=KLINE_ENDPOINT,
            raw_data=repr(first)[:200],
        )

    rows = first.get("value")
    if not rows:
        raise EmptySeriesError(
            "Kline quote data has no values",
            market=market,
            contract_code=contract_code,
        )

    bars = []
    for i, row in enumerate(rows):
        try:
            bars.append(_parse_single_bar(row))
        except (ValueError, TypeError, OverflowError, OSError) as e:
            raise MalformedResponseError(
                f"Invalid kline row at index {i}: {e}",
                endpoint=KLINE_ENDPOINT,
                raw_data=repr(row)[:200],
                expected_format="[timestamp, open, high, low, close, ...]",
            ) from e

    return bars


def _parse_single_bar(row: Any) -> OhlcBar:
    """Parse one kline row, ignoring volume and turnover columns."""
    if not isinstance(row, list):
        raise TypeError("Kline row must be a list")

    if len(row) < _MIN_KLINE_ROW_LEN:
        raise ValueError(f"Kline row must have at least {_MIN_KLINE_ROW_LEN} elements, got {len(row)}")

    timestamp, open_price, high_price, low_price, close_price = row[:_MIN_KLINE_ROW_LEN]
    timestamp_ms = int(timestamp)
    # Raises for stamps outside the datetime range
    timestamp_to_datetime(timestamp_ms, timezone.utc)

    return OhlcBar(
        timestamp_ms=timestamp_ms,
        open=float(open_price),
        high=float(high_price),
        low=float(low_price),
        close=float(close_price),
    )
