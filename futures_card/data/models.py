"""
Canonical data models for the futures card pipeline.

This module defines immutable data structures for the contract directory,
resolved contracts, daily kline bars and the derived card metrics. All of
them are created fresh for each pipeline invocation.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


@dataclass(frozen=True)
class ContractDirectoryEntry:
    """One main contract row from the contract directory service."""
    market: str                 # Market identifier, e.g. "-127"
    variety: str                # Variety code, e.g. "FG"
    variety_short_name: str     # e.g. "玻璃"
    variety_name: str           # Full variety name
    variety_code: str
    contract_code: str          # Full code, e.g. "FG2601"
    contract_name: str          # Human contract name
    ifind_code: Optional[str] = None
    unit_num: Optional[str] = None
    deal_unit: Optional[str] = None
    min_change: Optional[str] = None
    margin_rate: Optional[str] = None
    contract_multiple: Optional[str] = None
    place_code: Optional[str] = None     # Exchange code
    market_code: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    new_market_id: Optional[str] = None

    @classmethod
    def from_payload(cls, row: dict[str, Any]) -> "ContractDirectoryEntry":
        """Build an entry from a camelCase directory row."""
        return cls(
            market=str(row.get("market") or ""),
            variety=str(row.get("variety") or ""),
            variety_short_name=str(row.get("varietyShortName") or ""),
            variety_name=str(row.get("varietyName") or ""),
            variety_code=str(row.get("varietyCode") or ""),
            contract_code=str(row.get("contractCode") or ""),
            contract_name=str(row.get("contractName") or ""),
            ifind_code=_optional_str(row.get("ifindCode")),
            unit_num=_optional_str(row.get("unitNum")),
            deal_unit=_optional_str(row.get("dealUnit")),
            min_change=_optional_str(row.get("minChange")),
            margin_rate=_optional_str(row.get("marginRate")),
            contract_multiple=_optional_str(row.get("contractMultiple")),
            place_code=_optional_str(row.get("placeCode")),
            market_code=_optional_str(row.get("marketCode")),
            start_date=_optional_str(row.get("startDate")),
            end_date=_optional_str(row.get("endDate")),
            new_market_id=_optional_str(row.get("newMarketId")),
        )


@dataclass(frozen=True)
class ResolvedContract:
    """Contract selected for a requested name."""
    market: str
    contract_code: str
    contract_name: str
    variety_name: str

    @classmethod
    def from_entry(cls, entry: ContractDirectoryEntry) -> "ResolvedContract":
        return cls(
            market=entry.market,
            contract_code=entry.contract_code,
            contract_name=entry.contract_name,
            variety_name=entry.variety_name,
        )


@dataclass(frozen=True)
class OhlcBar:
    """One trading day of a kline series."""
    timestamp_ms: int   # Epoch milliseconds, start of the trading day
    open: float
    high: float
    low: float
    close: float


@dataclass(frozen=True)
class DerivedMetrics:
    """Metrics rendered on the strategy card."""
    contract_name: str      # As given by the caller
    contract_code: str      # Month digits, e.g. "2601"
    current_price: float
    change_amount: float
    change_percent: float
    date: str               # YYYY/MM/DD

    def to_dict(self) -> dict[str, Any]:
        """Camel-case mapping for the presentation layer."""
        return {
            "contractName": self.contract_name,
            "contractCode": self.contract_code,
            "currentPrice": self.current_price,
            "changeAmount": self.change_amount,
            "changePercent": self.change_percent,
            "date": self.date,
        }


@dataclass(frozen=True)
class ContractSeries:
    """Daily series together with the contract it belongs to."""
    contract: ResolvedContract
    series: list[OhlcBar] = field(default_factory=list)


@dataclass(frozen=True)
class BatchItemResult:
    """Outcome of one name in a concurrent batch lookup."""
    contract_name: str
    metrics: Optional[DerivedMetrics] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.metrics is not None
