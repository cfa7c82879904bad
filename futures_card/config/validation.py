"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

TIE_BREAK_CHOICES = ("first", "shortest")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_endpoint_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate upstream endpoint parameters."""
        errors = []

        for name in ("directory_url", "kline_url"):
            if name in params:
                value = params[name]
                if not isinstance(value, str) or not value.startswith(("http://", "https://")):
                    errors.append(ValidationError(
                        field=name,
                        message="Must be an http(s) URL",
                        value=value
                    ))

        if "auth_header_name" in params:
            value = params["auth_header_name"]
            if not isinstance(value, str) or not value.strip():
                errors.append(ValidationError(
                    field="auth_header_name",
                    message="Must be a non-empty string",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_kline_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate kline request parameters."""
        errors = []

        # Offsets count days relative to today, so they never point forward
        for name in ("begin_offset_days", "end_offset_days"):
            if name in params:
                value = params[name]
                if not isinstance(value, int) or isinstance(value, bool) or value > 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-positive integer",
                        value=value
                    ))

        begin = params.get("begin_offset_days")
        end = params.get("end_offset_days")
        if isinstance(begin, int) and isinstance(end, int) and begin > end:
            errors.append(ValidationError(
                field="begin_offset_days",
                message="Must not be later than end_offset_days",
                value=begin
            ))

        if "market_aliases" in params:
            value = params["market_aliases"]
            if not isinstance(value, dict):
                errors.append(ValidationError(
                    field="market_aliases",
                    message="Must be a mapping of market code to market code",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_http_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate HTTP transport parameters."""
        errors = []

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_directory_cache_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate directory cache parameters."""
        errors = []

        if "enabled" in params and not isinstance(params["enabled"], bool):
            errors.append(ValidationError(
                field="enabled",
                message="Must be a boolean",
                value=params["enabled"]
            ))

        if "ttl_seconds" in params:
            value = params["ttl_seconds"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="ttl_seconds",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_resolver_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate resolver parameters."""
        errors = []

        if "tie_break" in params and params["tie_break"] not in TIE_BREAK_CHOICES:
            errors.append(ValidationError(
                field="tie_break",
                message=f"Must be one of {', '.join(TIE_BREAK_CHOICES)}",
                value=params["tie_break"]
            ))

        return errors

    @staticmethod
    def validate_metrics_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate metrics parameters."""
        errors = []

        if "min_bars" in params:
            value = params["min_bars"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 2:
                errors.append(ValidationError(
                    field="min_bars",
                    message="Must be an integer of at least 2",
                    value=value
                ))

        if "decimals" in params:
            value = params["decimals"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="decimals",
                    message="Must be a non-negative integer",
                    value=value
                ))

        tz_name = params.get("exchange_timezone")
        if tz_name is not None:
            try:
                ZoneInfo(str(tz_name))
            except (ZoneInfoNotFoundError, ValueError):
                errors.append(ValidationError(
                    field="exchange_timezone",
                    message="Must be an IANA timezone name",
                    value=tz_name
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "endpoints" in config:
            errors.extend(ConfigValidator.validate_endpoint_params(config["endpoints"]))

        if "kline" in config:
            errors.extend(ConfigValidator.validate_kline_params(config["kline"]))

        if "http" in config:
            errors.extend(ConfigValidator.validate_http_params(config["http"]))

        if "directory_cache" in config:
            errors.extend(ConfigValidator.validate_directory_cache_params(config["directory_cache"]))

        if "resolver" in config:
            errors.extend(ConfigValidator.validate_resolver_params(config["resolver"]))

        if "metrics" in config:
            errors.extend(ConfigValidator.validate_metrics_params(config["metrics"]))

        return errors
