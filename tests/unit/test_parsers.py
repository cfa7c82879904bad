"""Unit tests for quoting service payload parsing."""

import pytest

from futures_card.data.models import ContractDirectoryEntry, OhlcBar
from futures_card.data.parsers import (
    parse_directory_payload,
    parse_json_payload,
    parse_kline_payload,
)
from futures_card.errors import ApiError, EmptySeriesError, MalformedResponseError


class TestParseJsonPayload:

    def test_decodes_utf8_json(self) -> None:
        assert parse_json_payload('{"msg": "玻璃"}'.encode("utf-8"), "test") == {"msg": "玻璃"}

    def test_invalid_json(self) -> None:
        with pytest.raises(MalformedResponseError) as exc_info:
            parse_json_payload(b"<html>gateway error</html>", "contract_directory")

        assert exc_info.value.endpoint == "contract_directory"
        assert exc_info.value.raw_data.startswith("<html>")
        assert isinstance(exc_info.value, ApiError)


class TestParseDirectoryPayload:

    def test_parses_rows_in_order(self, directory_payload) -> None:
        entries = parse_directory_payload(directory_payload)

        assert [e.contract_code for e in entries] == [
            "FG2601", "RB2601", "CU2512", "SA2601", "GL2605"
        ]
        glass = entries[0]
        assert glass == ContractDirectoryEntry.from_payload(directory_payload["data"]["result"][0])
        assert glass.market == "-127"
        assert glass.variety_short_name == "玻璃"
        assert glass.place_code == "CZCE"
        assert glass.contract_multiple is None

    def test_service_failure_carries_message(self) -> None:
        with pytest.raises(ApiError) as exc_info:
            parse_directory_payload({"code": 1, "msg": "rate limited", "data": None})

        assert str(exc_info.value) == "rate limited"
        assert exc_info.value.service_message == "rate limited"
        assert exc_info.value.status_code == 1
        assert not isinstance(exc_info.value, MalformedResponseError)

    def test_missing_code(self) -> None:
        with pytest.raises(MalformedResponseError):
            parse_directory_payload({"msg": "ok", "data": {"result": []}})

    def test_missing_result(self) -> None:
        with pytest.raises(MalformedResponseError):
            parse_directory_payload({"code": 0, "msg": "", "data": {}})

    def test_empty_directory_is_valid(self) -> None:
        assert parse_directory_payload({"code": 0, "msg": "", "data": {"result": []}}) == []

    def test_row_must_be_object(self) -> None:
        with pytest.raises(MalformedResponseError, match="index 1"):
            parse_directory_payload({"code": 0, "msg": "", "data": {"result": [{}, "FG2601"]}})


class TestParseKlinePayload:

    def test_parses_rows_dropping_extra_fields(self, kline_response, sample_kline_rows, sample_series) -> None:
        bars = parse_kline_payload(kline_response(sample_kline_rows))
        assert bars == sample_series

    def test_keeps_service_order(self, kline_response) -> None:
        rows = [
            [1700086400000, 1.0, 1.0, 1.0, 2.0],
            [1700000000000, 1.0, 1.0, 1.0, 1.0],
        ]
        bars = parse_kline_payload(kline_response(rows))
        assert [b.timestamp_ms for b in bars] == [1700086400000, 1700000000000]

    def test_service_failure(self, kline_response) -> None:
        with pytest.raises(ApiError) as exc_info:
            parse_kline_payload(kline_response([], status_code=-1, status_msg="auth failed"))

        assert exc_info.value.service_message == "auth failed"
        assert exc_info.value.status_code == -1

    def test_empty_value(self, kline_response) -> None:
        with pytest.raises(EmptySeriesError) as exc_info:
            parse_kline_payload(kline_response([]), market="129", contract_code="FG2601")

        assert exc_info.value.market == "129"
        assert exc_info.value.contract_code == "FG2601"

    @pytest.mark.parametrize("data", [None, {}, {"quote_data": []}, {"quote_data": None}])
    def test_missing_quote_data(self, data) -> None:
        with pytest.raises(EmptySeriesError):
            parse_kline_payload({"status_code": 0, "status_msg": "", "data": data})

    def test_short_row(self, kline_response) -> None:
        with pytest.raises(MalformedResponseError, match="index 0"):
            parse_kline_payload(kline_response([[1700000000000, 1.0, 2.0]]))

    def test_non_numeric_row(self, kline_response) -> None:
        with pytest.raises(MalformedResponseError):
            parse_kline_payload(kline_response([[1700000000000, "n/a", 2.0, 1.0, 1.5]]))

    def test_numeric_strings_accepted(self, kline_response) -> None:
        bars = parse_kline_payload(kline_response([["1700000000000", "1", "2", "0.5", "1.5"]]))
        assert bars == [OhlcBar(timestamp_ms=1700000000000, open=1.0, high=2.0, low=0.5, close=1.5)]

    def test_quote_entry_must_be_object(self) -> None:
        payload = {"status_code": 0, "status_msg": "", "data": {"quote_data": ["FG2601"]}}
        with pytest.raises(MalformedResponseError):
            parse_kline_payload(payload)

    @pytest.mark.parametrize("timestamp", [1e18, -1e18])
    def test_timestamp_out_of_range(self, kline_response, timestamp) -> None:
        rows = [[timestamp, 1.0, 2.0, 0.5, 1.5]]
        with pytest.raises(MalformedResponseError, match="index 0"):
            parse_kline_payload(kline_response(rows))
