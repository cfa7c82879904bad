"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from .defaults import (
    DefaultConfig,
    DirectoryCacheParams,
    EndpointParams,
    HttpParams,
    KlineParams,
    MetricsParams,
    ResolverParams,
    get_default_config,
)

_SECTIONS = {
    "endpoints": EndpointParams,
    "kline": KlineParams,
    "http": HttpParams,
    "directory_cache": DirectoryCacheParams,
    "resolver": ResolverParams,
    "metrics": MetricsParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_settings_file(self) -> dict[str, Any]:
        """Load settings.yaml overrides, empty when the file is absent."""
        settings_file = self.config_dir / "settings.yaml"

        if not settings_file.exists():
            return {}

        with open(settings_file, encoding="utf-8") as f:
            settings = yaml.safe_load(f)

        return settings or {}

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Runtime overrides (highest priority)
        2. settings.yaml in the config directory
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_settings_file())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Merge all tiers and build a typed configuration."""
        return self.build_config(self.merge_config(overrides))

    @staticmethod
    def build_config(config: dict[str, Any]) -> DefaultConfig:
        """Convert a merged configuration dict into DefaultConfig."""
        sections = {}
        for name, params_cls in _SECTIONS.items():
            values = dict(config.get(name) or {})
            known = {f.name for f in fields(params_cls)}
            unknown = set(values) - known
            if unknown:
                raise ValueError(f"Unknown {name} settings: {sorted(unknown)}")
            if "data_fields" in values:
                values["data_fields"] = tuple(values["data_fields"])
            if "market_aliases" in values:
                values["market_aliases"] = {
                    str(k): str(v) for k, v in values["market_aliases"].items()
                }
            sections[name] = params_cls(**values)
        return DefaultConfig(**sections)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                elif isinstance(value, dict):
                    result[field_name] = dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def load_config(config_dir: Optional[Path] = None,
                overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
    """Load the effective configuration."""
    return ConfigLoader.create(config_dir).load(overrides)
