"""Default configuration parameters for the futures card pipeline."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class EndpointParams:
    """Upstream quoting service endpoints."""
    directory_url: str = (
        "https://ftapi.10jqka.com.cn/futgwapi/api/market/v1/contract/getMainContractDetailList"
    )
    kline_url: str = (
        "https://quota-h.10jqka.com.cn/fuyao/futures_common_hq/quote/v1/single_kline"
    )
    auth_header_name: str = "X-Fuyao-Auth"
    auth_header_value: str = "basecomponent"


@dataclass(frozen=True)
class KlineParams:
    """Kline request parameters."""
    begin_offset_days: int = -30                     # Days before today, server-side
    end_offset_days: int = 0                         # 0 = today
    trade_date: int = -1
    trade_class: str = "intraday"
    time_period: str = "day_1"
    adjust_type: str = "forward"                     # Forward-adjusted across rolls
    data_fields: tuple[int, ...] = (8,)
    # Directory and kline services number some markets differently
    market_aliases: dict[str, str] = field(default_factory=lambda: {"-127": "129"})


@dataclass(frozen=True)
class HttpParams:
    """Shared HTTP transport parameters."""
    timeout_seconds: float = 10.0
    user_agent: str = "futures-card/0.1"


@dataclass(frozen=True)
class DirectoryCacheParams:
    """Contract directory caching (off: every lookup re-fetches)."""
    enabled: bool = False
    ttl_seconds: int = 3600


@dataclass(frozen=True)
class ResolverParams:
    """Contract name resolution parameters."""
    tie_break: str = "first"                         # "first" or "shortest"


@dataclass(frozen=True)
class MetricsParams:
    """Metrics derivation parameters."""
    min_bars: int = 2
    decimals: int = 2
    exchange_timezone: Optional[str] = None          # None = runtime local time


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    endpoints: EndpointParams
    kline: KlineParams
    http: HttpParams
    directory_cache: DirectoryCacheParams
    resolver: ResolverParams
    metrics: MetricsParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        endpoints=EndpointParams(),
        kline=KlineParams(),
        http=HttpParams(),
        directory_cache=DirectoryCacheParams(),
        resolver=ResolverParams(),
        metrics=MetricsParams(),
    )
