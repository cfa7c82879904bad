"""Pytest configuration and shared fixtures."""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from futures_card.data.models import ContractDirectoryEntry, OhlcBar, ResolvedContract


def make_directory_row(market: str, variety: str, short_name: str, full_name: str,
                       contract_code: str, contract_name: Optional[str] = None) -> Dict[str, Any]:
    """Directory row in the service's camelCase wire format."""
    return {
        "market": market,
        "variety": variety,
        "varietyShortName": short_name,
        "varietyCode": variety,
        "varietyName": full_name,
        "contractCode": contract_code,
        "ifindCode": f"{contract_code}.CZC",
        "unitNum": "20",
        "dealUnit": "吨/手",
        "minChange": "1",
        "marginRate": "0.09",
        "contractMultiple": None,
        "placeCode": "CZCE",
        "marketCode": "CZC",
        "startDate": "20250101",
        "endDate": "20260115",
        "newMarketId": market,
        "contractName": contract_name or f"{short_name}{contract_code[-4:]}",
    }


def make_kline_response(rows: List[List[float]], status_code: int = 0,
                        status_msg: str = "success") -> Dict[str, Any]:
    """Kline envelope with a single quote_data entry."""
    return {
        "status_code": status_code,
        "status_msg": status_msg,
        "data": {
            "quote_data": [
                {
                    "market": "129",
                    "code": "FG2601",
                    "data_fields": ["7", "8", "9", "11", "13", "19"],
                    "value": rows,
                }
            ]
        },
    }


class FakeQuoteService:
    """
    In-memory stand-in for the directory and kline services.

    Used as an httpx.MockTransport handler; records every request.
    """

    def __init__(self, directory: Dict[str, Any],
                 klines: Optional[Dict[str, Any]] = None,
                 default_kline: Optional[Dict[str, Any]] = None,
                 directory_status: int = 200,
                 kline_status: int = 200):
        self.directory = directory
        self.klines = klines or {}
        self.default_kline = default_kline
        self.directory_status = directory_status
        self.kline_status = kline_status
        self.requests: List[httpx.Request] = []

    @property
    def directory_calls(self) -> int:
        return sum(1 for r in self.requests if r.method == "GET")

    @property
    def kline_requests(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests if r.method == "POST"]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.method == "GET":
            return httpx.Response(self.directory_status, json=self.directory)

        body = json.loads(request.content)
        code = body["code_list"][0]["codes"][0]
        payload = self.klines.get(code, self.default_kline)
        if isinstance(payload, Exception):
            raise payload
        if payload is None:
            return httpx.Response(404, text="unknown contract")
        return httpx.Response(self.kline_status, json=payload)


@pytest.fixture
def directory_rows() -> List[Dict[str, Any]]:
    """Directory rows covering exact, full-name and substring matches."""
    return [
        make_directory_row("-127", "FG", "玻璃", "玻璃", "FG2601"),
        make_directory_row("-128", "RB", "螺纹钢", "螺纹钢", "RB2601"),
        make_directory_row("-128", "CU", "沪铜", "铜", "CU2512"),
        make_directory_row("-127", "SA", "纯碱", "Soda Ash", "SA2601"),
        make_directory_row("-127", "GL", "Glass", "Float Glass", "GL2605"),
    ]


@pytest.fixture
def directory_payload(directory_rows: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Successful directory envelope."""
    return {"code": 0, "msg": "", "data": {"result": directory_rows}}


@pytest.fixture
def directory_entries(directory_rows: List[Dict[str, Any]]) -> List[ContractDirectoryEntry]:
    """Parsed directory entries."""
    return [ContractDirectoryEntry.from_payload(row) for row in directory_rows]


@pytest.fixture
def sample_kline_rows() -> List[List[float]]:
    """Two daily rows: close 102 then 106, with volume and turnover columns."""
    return [
        [1700000000000, 100.0, 105.0, 99.0, 102.0, 52000.0, 1.1e9],
        [1700086400000, 102.0, 108.0, 101.0, 106.0, 61000.0, 1.3e9],
    ]


@pytest.fixture
def sample_series() -> List[OhlcBar]:
    """Two bars matching sample_kline_rows."""
    return [
        OhlcBar(timestamp_ms=1700000000000, open=100.0, high=105.0, low=99.0, close=102.0),
        OhlcBar(timestamp_ms=1700086400000, open=102.0, high=108.0, low=101.0, close=106.0),
    ]


@pytest.fixture
def glass_contract() -> ResolvedContract:
    """Resolved glass main contract."""
    return ResolvedContract(market="-127", contract_code="FG2601",
                            contract_name="玻璃2601", variety_name="玻璃")


@pytest.fixture
def fake_service(directory_payload: Dict[str, Any],
                 sample_kline_rows: List[List[float]]) -> FakeQuoteService:
    """Quote service answering every contract with the sample rows."""
    return FakeQuoteService(directory_payload,
                            default_kline=make_kline_response(sample_kline_rows))


@pytest.fixture
def http_client_factory() -> Callable[[Callable[[httpx.Request], Any]], httpx.AsyncClient]:
    """Build an AsyncClient routed to a mock handler."""
    def factory(handler: Callable[[httpx.Request], Any]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return factory


@pytest.fixture
def kline_response() -> Callable[..., Dict[str, Any]]:
    """Factory for kline envelopes."""
    return make_kline_response


@pytest.fixture
def quote_service() -> Callable[..., FakeQuoteService]:
    """Factory for quote services with custom payloads or statuses."""
    return FakeQuoteService
