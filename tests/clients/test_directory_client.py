"""Tests for the contract directory client and its cache."""

import httpx
import pytest

from futures_card.clients.directory import CachedContractDirectory, ContractDirectoryClient
from futures_card.config.defaults import get_default_config
from futures_card.errors import ApiError, MalformedResponseError, NetworkError


class TestContractDirectoryClient:

    @pytest.mark.asyncio
    async def test_lists_entries(self, fake_service, http_client_factory) -> None:
        async with http_client_factory(fake_service) as http_client:
            entries = await ContractDirectoryClient(http_client).list_main_contracts()

        assert [e.variety for e in entries] == ["FG", "RB", "CU", "SA", "GL"]
        assert fake_service.directory_calls == 1
        request = fake_service.requests[0]
        assert request.method == "GET"
        assert str(request.url) == get_default_config().endpoints.directory_url

    @pytest.mark.asyncio
    async def test_every_call_refetches(self, fake_service, http_client_factory) -> None:
        async with http_client_factory(fake_service) as http_client:
            client = ContractDirectoryClient(http_client)
            await client.list_main_contracts()
            await client.list_main_contracts()

        assert fake_service.directory_calls == 2
        assert client.get_stats()["request_count"] == 2

    @pytest.mark.asyncio
    async def test_service_failure(self, quote_service, http_client_factory) -> None:
        service = quote_service({"code": 1, "msg": "rate limited", "data": None})

        async with http_client_factory(service) as http_client:
            client = ContractDirectoryClient(http_client)
            with pytest.raises(ApiError) as exc_info:
                await client.list_main_contracts()

        assert exc_info.value.service_message == "rate limited"
        assert exc_info.value.status_code == 1
        assert client.get_stats()["error_count"] == 1

    @pytest.mark.asyncio
    async def test_http_error_status(self, quote_service, directory_payload, http_client_factory) -> None:
        service = quote_service(directory_payload, directory_status=503)

        async with http_client_factory(service) as http_client:
            with pytest.raises(NetworkError) as exc_info:
                await ContractDirectoryClient(http_client).list_main_contracts()

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_transport_failure(self, http_client_factory) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with http_client_factory(refuse) as http_client:
            with pytest.raises(NetworkError) as exc_info:
                await ContractDirectoryClient(http_client).list_main_contracts()

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout_is_network_error(self, http_client_factory) -> None:
        def hang(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with http_client_factory(hang) as http_client:
            client = ContractDirectoryClient(http_client)
            with pytest.raises(NetworkError, match="timed out") as exc_info:
                await client.list_main_contracts()

        assert isinstance(exc_info.value.__cause__, httpx.TimeoutException)
        assert exc_info.value.status_code is None
        assert client.get_stats()["error_count"] == 1

    @pytest.mark.asyncio
    async def test_non_json_body(self, http_client_factory) -> None:
        def html(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>maintenance</html>")

        async with http_client_factory(html) as http_client:
            with pytest.raises(MalformedResponseError):
                await ContractDirectoryClient(http_client).list_main_contracts()


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


class TestCachedContractDirectory:

    @pytest.mark.asyncio
    async def test_serves_cached_copy_within_ttl(self, fake_service, http_client_factory) -> None:
        clock = FakeClock()

        async with http_client_factory(fake_service) as http_client:
            cache = CachedContractDirectory(ContractDirectoryClient(http_client),
                                            ttl_seconds=60, clock=clock)
            first = await cache.list_main_contracts()
            clock.now += 59
            second = await cache.list_main_contracts()

        assert first == second
        assert fake_service.directory_calls == 1
        assert cache.is_fresh

    @pytest.mark.asyncio
    async def test_refetches_after_ttl(self, fake_service, http_client_factory) -> None:
        clock = FakeClock()

        async with http_client_factory(fake_service) as http_client:
            cache = CachedContractDirectory(ContractDirectoryClient(http_client),
                                            ttl_seconds=60, clock=clock)
            await cache.list_main_contracts()
            clock.now += 60
            assert not cache.is_fresh
            await cache.list_main_contracts()

        assert fake_service.directory_calls == 2

    @pytest.mark.asyncio
    async def test_invalidate_and_refresh(self, fake_service, http_client_factory) -> None:
        async with http_client_factory(fake_service) as http_client:
            cache = CachedContractDirectory(ContractDirectoryClient(http_client))
            await cache.list_main_contracts()
            cache.invalidate()
            assert not cache.is_fresh
            await cache.list_main_contracts()
            await cache.refresh()

        assert fake_service.directory_calls == 3

    @pytest.mark.asyncio
    async def test_failures_are_not_cached(self, quote_service, directory_payload, http_client_factory) -> None:
        service = quote_service({"code": 1, "msg": "rate limited", "data": None})

        async with http_client_factory(service) as http_client:
            cache = CachedContractDirectory(ContractDirectoryClient(http_client))
            with pytest.raises(ApiError):
                await cache.list_main_contracts()
            assert not cache.is_fresh

            service.directory = directory_payload
            entries = await cache.list_main_contracts()

        assert len(entries) == 5
        assert service.directory_calls == 2

    @pytest.mark.asyncio
    async def test_callers_cannot_mutate_cache(self, fake_service, http_client_factory) -> None:
        async with http_client_factory(fake_service) as http_client:
            cache = CachedContractDirectory(ContractDirectoryClient(http_client))
            entries = await cache.list_main_contracts()
            entries.clear()
            assert len(await cache.list_main_contracts()) == 5
