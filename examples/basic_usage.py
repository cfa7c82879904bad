#!/usr/bin/env python3
"""
Basic Usage Example - Futures Card Metrics Pipeline

This script demonstrates the pipeline against a simulated quoting service,
so it runs offline. It shows how to:
- Initialize the pipeline with an injected HTTP client
- Look up card metrics for a single variety name
- Run a best-effort batch lookup where some names fail
- Format metrics for display

Run: python examples/basic_usage.py
"""

import asyncio
import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List

import httpx

from futures_card.engine import FuturesMetricsPipeline
from futures_card.logging import configure_logging
from futures_card.metrics.formatting import format_change_amount, format_change_percent, format_price


def create_directory_row(market: str, variety: str, short_name: str, full_name: str,
                         contract_code: str) -> Dict[str, Any]:
    """Create a directory row in the service's camelCase format."""
    return {
        "market": market,
        "variety": variety,
        "varietyShortName": short_name,
        "varietyName": full_name,
        "varietyCode": variety,
        "contractCode": contract_code,
        "contractName": f"{short_name}{contract_code[-4:]}",
        "placeCode": "CZCE" if market == "-127" else "SHFE",
    }


DIRECTORY = {
    "code": 0,
    "msg": "",
    "data": {
        "result": [
            create_directory_row("-127", "FG", "玻璃", "玻璃", "FG2601"),
            create_directory_row("-128", "RB", "螺纹钢", "螺纹钢", "RB2601"),
            create_directory_row("-128", "CU", "铜", "沪铜", "CU2512"),
        ]
    },
}


def create_kline_rows(start_price: float, days: int = 5) -> List[List[float]]:
    """Create [timestamp, open, high, low, close, volume, turnover] rows."""
    start = datetime(2025, 11, 3, tzinfo=timezone(timedelta(hours=8)))
    rows = []
    price = start_price
    for i in range(days):
        ts = int((start + timedelta(days=i)).timestamp() * 1000)
        close = price * (1.01 if i % 2 == 0 else 0.995)
        rows.append([ts, price, max(price, close) * 1.005, min(price, close) * 0.995,
                     round(close, 1), 120000.0, 1.5e9])
        price = close
    return rows


def simulated_service(request: httpx.Request) -> httpx.Response:
    """Answer directory GETs and kline POSTs like the real services."""
    if request.method == "GET":
        return httpx.Response(200, json=DIRECTORY)

    body = json.loads(request.content)
    code = body["code_list"][0]["codes"][0]
    if code == "CU2512":
        return httpx.Response(200, json={"status_code": 0, "status_msg": "success",
                                         "data": {"quote_data": [{"value": []}]}})
    start_price = 1050.0 if code == "FG2601" else 3100.0
    return httpx.Response(200, json={
        "status_code": 0,
        "status_msg": "success",
        "data": {"quote_data": [{"market": body["code_list"][0]["market"], "code": code,
                                 "value": create_kline_rows(start_price)}]},
    })


async def main_async() -> None:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(simulated_service))

    async with http_client:
        pipeline = FuturesMetricsPipeline(http_client=http_client)

        print("\n📈 Single lookup")
        metrics = await pipeline.get_futures_metrics("玻璃")
        print(json.dumps(metrics.to_dict(), ensure_ascii=False, indent=2))

        print("\n📊 Batch lookup (one empty series, one unknown name)")
        results = await pipeline.gather_metrics(["玻璃", "螺纹钢", "铜", "不存在的品种"])
        for result in results:
            if result.ok:
                m = result.metrics
                print(f"  ✅ {m.contract_name} {m.contract_code}: {format_price(m.current_price)} "
                      f"{format_change_amount(m.change_amount)} "
                      f"({format_change_percent(m.change_percent)}) {m.date}")
            else:
                print(f"  ❌ {result.contract_name}: {type(result.error).__name__}: {result.error}")


def main() -> None:
    configure_logging(level="WARNING")
    asyncio.run(main_async())


if __name__ == "__main__":
    main()
