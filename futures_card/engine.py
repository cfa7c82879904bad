"""
Main pipeline coordinator.

Orchestrates the lookup of card metrics for a futures variety name,
coordinating the directory fetch, contract resolution, kline fetch and
metrics derivation.
"""

import asyncio
from pathlib import Path
from typing import Any, Iterable, Optional

import httpx
import structlog

from .clients.base import create_http_client
from .clients.directory import CachedContractDirectory, ContractDirectory, ContractDirectoryClient
from .clients.kline import KlineClient
from .config.defaults import DefaultConfig, get_default_config
from .config.loader import ConfigLoader
from .config.validation import ConfigValidator
from .data.models import BatchItemResult, ContractSeries, DerivedMetrics, OhlcBar, ResolvedContract
from .errors import ApiError, FuturesCardError, NetworkError
from .logging.config import get_pipeline_logger, log_stage_result
from .metrics.calculator import MetricsCalculator
from .resolution.resolver import ContractResolver

logger = structlog.get_logger(__name__)


class FuturesMetricsPipeline:
    """
    Main coordinator for card metrics lookups.

    Manages the pipeline:
    Name → Contract Directory → Resolution → Daily Kline → Metrics

    Every call runs the whole chain again; the first failing stage raises and
    its error reaches the caller unchanged. Use as an async context manager so
    the owned HTTP client is closed.
    """

    def __init__(self, config: Optional[DefaultConfig] = None,
                 http_client: Optional[httpx.AsyncClient] = None,
                 directory: Optional[ContractDirectory] = None) -> None:
        """Initialize the pipeline and its stage components."""
        self.config = config or get_default_config()
        self.logger = get_pipeline_logger(__name__)

        self._owns_http_client = http_client is None
        self.http_client = http_client or create_http_client(self.config.http)

        if directory is None:
            directory = ContractDirectoryClient(self.http_client, self.config)
            if self.config.directory_cache.enabled:
                directory = CachedContractDirectory(
                    directory, ttl_seconds=self.config.directory_cache.ttl_seconds
                )
        self.directory = directory
        self.resolver = ContractResolver(self.config.resolver.tie_break)
        self.kline_client = KlineClient(self.http_client, self.config)
        self.metrics_calculator = MetricsCalculator(self.config)

        logger.info(
            "Futures metrics pipeline initialized",
            directory_cache=self.config.directory_cache.enabled,
            tie_break=self.config.resolver.tie_break,
        )

    @classmethod
    def create(cls, config_dir: Optional[Path] = None,
               overrides: Optional[dict[str, Any]] = None,
               http_client: Optional[httpx.AsyncClient] = None) -> "FuturesMetricsPipeline":
        """
        Build a pipeline from settings.yaml and runtime overrides.

        Raises:
            ValueError: If the merged configuration fails validation
        """
        loader = ConfigLoader.create(config_dir)
        merged = loader.merge_config(overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            details = "; ".join(f"{e.field}: {e.message} (got {e.value!r})" for e in errors)
            raise ValueError(f"Invalid configuration: {details}")

        return cls(config=loader.build_config(merged), http_client=http_client)

    async def __aenter__(self) -> "FuturesMetricsPipeline":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this pipeline created it."""
        if self._owns_http_client:
            await self.http_client.aclose()

    async def resolve(self, contract_name: str) -> ResolvedContract:
        """
        Fetch the directory and resolve a name against it.

        Raises:
            NetworkError, ApiError: If the directory fetch fails
            ContractNotFoundError: If no entry matches
        """
        try:
            directory = await self.directory.list_main_contracts()
        except FuturesCardError as e:
            log_stage_result(self.logger, "directory", contract_name, False,
                             {"error_type": type(e).__name__, "error": str(e)})
            raise

        try:
            resolved = self.resolver.resolve(contract_name, directory)
        except FuturesCardError as e:
            log_stage_result(self.logger, "resolve", contract_name, False,
                             {"error_type": type(e).__name__, "directory_size": len(directory)})
            raise

        log_stage_result(self.logger, "resolve", contract_name, True,
                         {"market": resolved.market, "contract_code": resolved.contract_code})
        return resolved

    async def get_series_with_contract(self, contract_name: str) -> ContractSeries:
        """
        Resolve a name and fetch its daily series.

        Raises:
            ContractNotFoundError, NetworkError, ApiError, EmptySeriesError
        """
        resolved = await self.resolve(contract_name)

        try:
            series = await self.kline_client.fetch_daily_series(
                resolved.market, resolved.contract_code
            )
        except FuturesCardError as e:
            log_stage_result(self.logger, "kline", contract_name, False,
                             {"error_type": type(e).__name__,
                              "contract_code": resolved.contract_code})
            raise

        log_stage_result(self.logger, "kline", contract_name, True,
                         {"bar_count": len(series)})
        return ContractSeries(contract=resolved, series=series)

    async def get_daily_series(self, contract_name: str) -> list[OhlcBar]:
        """Daily bars for a name, without contract details."""
        contract_series = await self.get_series_with_contract(contract_name)
        return contract_series.series

    async def get_futures_metrics(self, contract_name: str) -> DerivedMetrics:
        """
        Full lookup: name to card metrics.

        Args:
            contract_name: Free-text variety name

        Returns:
            DerivedMetrics for the resolved main contract

        Raises:
            ContractNotFoundError, NetworkError, ApiError, EmptySeriesError,
            InsufficientDataError, DegenerateSeriesError
        """
        contract_series = await self.get_series_with_contract(contract_name)

        try:
            metrics = self.metrics_calculator.derive_metrics(
                contract_name, contract_series.contract, contract_series.series
            )
        except FuturesCardError as e:
            log_stage_result(self.logger, "metrics", contract_name, False,
                             {"error_type": type(e).__name__, "error": str(e)})
            raise

        log_stage_result(self.logger, "metrics", contract_name, True,
                         {"contract_code": metrics.contract_code,
                          "current_price": metrics.current_price})
        return metrics

    async def gather_metrics(self, contract_names: Iterable[str]) -> list[BatchItemResult]:
        """
        Look up several names concurrently, best effort.

        Each name runs its own independent pipeline; a failure is reported in
        its item and never cancels the others. Results keep input order.
        """
        names = list(contract_names)

        async def _one(name: str) -> BatchItemResult:
            try:
                metrics = await self.get_futures_metrics(name)
            except FuturesCardError as e:
                return BatchItemResult(contract_name=name, error=e)
            except Exception as e:
                self.logger.exception("Unexpected failure in batch item", contract_name=name,
                                      error_type=type(e).__name__)
                return BatchItemResult(contract_name=name, error=e)
            return BatchItemResult(contract_name=name, metrics=metrics)

        results = await asyncio.gather(*(_one(name) for name in names))

        failed = [r.contract_name for r in results if not r.ok]
        self.logger.info("Batch lookup finished", requested=len(names),
                         succeeded=len(names) - len(failed), failed=failed)
        return list(results)

    async def check_api_health(self) -> bool:
        """True if the directory service answers successfully."""
        try:
            await self.directory.list_main_contracts()
        except (NetworkError, ApiError) as e:
            self.logger.warning("API health check failed", error_type=type(e).__name__,
                                error=str(e))
            return False
        return True


async def get_futures_metrics(contract_name: str,
                              config: Optional[DefaultConfig] = None) -> DerivedMetrics:
    """One-shot lookup with a short-lived pipeline."""
    async with FuturesMetricsPipeline(config=config) as pipeline:
        return await pipeline.get_futures_metrics(contract_name)
