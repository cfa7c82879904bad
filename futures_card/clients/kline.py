"""Daily kline client for a resolved contract."""

from typing import Any, Optional

from ..config.defaults import KlineParams
from ..data.models import OhlcBar
from ..data.parsers import KLINE_ENDPOINT, parse_kline_payload
from ..errors import ApiError, EmptySeriesError
from .base import BaseQuoteClient


def translate_market(market: str, aliases: Optional[dict[str, str]] = None) -> str:
    """
    Map a directory market id onto the kline service's numbering.

    The directory reports some markets under an id the kline service does not
    accept ("-127" is served as "129").
    """
    if aliases is None:
        aliases = KlineParams().market_aliases
    return aliases.get(market, market)


def build_kline_request(market: str, contract_code: str,
                        begin_offset_days: int = -30, end_offset_days: int = 0,
                        params: Optional[KlineParams] = None) -> dict[str, Any]:
    """
    Build the single_kline request body.

    Args:
        market: Market id as reported by the directory (translated here)
        contract_code: Full contract code, e.g. "FG2601"
        begin_offset_days: First day relative to today, server-side
        end_offset_days: Last day relative to today, 0 = today
        params: Kline parameters; defaults when omitted

    Returns:
        JSON-serializable request body
    """
    params = params or KlineParams()
    return {
        "code_list": [
            {
                "market": translate_market(market, params.market_aliases),
                "codes": [contract_code],
            }
        ],
        "trade_date": params.trade_date,
        "trade_class": params.trade_class,
        "time_period": params.time_period,
        "begin_time": str(begin_offset_days),
        "end_time": str(end_offset_days),
        "adjust_type": params.adjust_type,
        "data_fields": list(params.data_fields),
    }


class KlineClient(BaseQuoteClient):
    """Requests a forward-adjusted daily OHLC series, one POST per call."""

    endpoint = KLINE_ENDPOINT

    async def fetch_daily_series(self, market: str, contract_code: str,
                                 begin_offset_days: Optional[int] = None,
                                 end_offset_days: Optional[int] = None) -> list[OhlcBar]:
        """
        Fetch daily bars for a contract.

        Args:
            market: Market id from the directory
            contract_code: Full contract code
            begin_offset_days: Defaults to the configured -30
            end_offset_days: Defaults to the configured 0

        Returns:
            Bars in service order (oldest first)

        Raises:
            NetworkError: If the transport fails or HTTP status is not 2xx
            ApiError: If the envelope status code is non-zero
            EmptySeriesError: If no bars are returned
        """
        params = self.config.kline
        if begin_offset_days is None:
            begin_offset_days = params.begin_offset_days
        if end_offset_days is None:
            end_offset_days = params.end_offset_days

        body = build_kline_request(market, contract_code, begin_offset_days,
                                   end_offset_days, params)
        endpoints = self.config.endpoints
        payload = await self._request_json(
            "POST",
            endpoints.kline_url,
            json=body,
            headers={endpoints.auth_header_name: endpoints.auth_header_value},
        )

        try:
            bars = parse_kline_payload(payload, market=market, contract_code=contract_code)
        except ApiError as e:
            self._error_count += 1
            self.logger.warning("Kline service reported failure", contract_code=contract_code,
                                status_code=e.status_code, service_message=e.service_message)
            raise
        except EmptySeriesError:
            self._error_count += 1
            self.logger.warning("Kline series is empty", market=market,
                                contract_code=contract_code)
            raise

        self.logger.info("Kline series fetched", market=market, contract_code=contract_code,
                         bar_count=len(bars))
        return bars
