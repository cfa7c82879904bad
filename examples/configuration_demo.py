#!/usr/bin/env python3
"""
Configuration Demo - Futures Card Metrics Pipeline

This script demonstrates the configuration layers, showing how to:
- Inspect the built-in defaults
- Layer a settings.yaml file and runtime overrides on top of them
- Validate settings before building a pipeline

Run: python examples/configuration_demo.py
"""

import tempfile
from pathlib import Path

import yaml

from futures_card.config.defaults import get_default_config
from futures_card.config.loader import ConfigLoader
from futures_card.config.validation import ConfigValidator
from futures_card.engine import FuturesMetricsPipeline


def demonstrate_default_config():
    """Show the default configuration structure."""
    print("⚙️ DEFAULT CONFIGURATION")
    print("=" * 50)

    config = get_default_config()
    print("1. Kline request:")
    print(f"   window: {config.kline.begin_offset_days}..{config.kline.end_offset_days} days")
    print(f"   adjust_type: {config.kline.adjust_type}")
    print(f"   market_aliases: {config.kline.market_aliases}")

    print("\n2. Resolution and metrics:")
    print(f"   tie_break: {config.resolver.tie_break}")
    print(f"   directory cache enabled: {config.directory_cache.enabled}")
    print(f"   exchange_timezone: {config.metrics.exchange_timezone or 'runtime local'}")
    print()


def demonstrate_precedence(config_dir: Path):
    """Show defaults < settings.yaml < runtime overrides."""
    print("📚 CONFIGURATION PRECEDENCE")
    print("=" * 50)

    settings = {
        "http": {"timeout_seconds": 5.0},
        "resolver": {"tie_break": "shortest"},
        "metrics": {"exchange_timezone": "Asia/Shanghai"},
    }
    (config_dir / "settings.yaml").write_text(yaml.safe_dump(settings), encoding="utf-8")

    loader = ConfigLoader.create(config_dir)
    from_file = loader.load()
    print(f"1. settings.yaml: timeout={from_file.http.timeout_seconds}s, "
          f"tie_break={from_file.resolver.tie_break}")

    overridden = loader.load({"resolver": {"tie_break": "first"}})
    print(f"2. runtime override: tie_break={overridden.resolver.tie_break}, "
          f"timezone kept as {overridden.metrics.exchange_timezone}")
    print()


def demonstrate_validation(config_dir: Path):
    """Show validation errors for bad settings."""
    print("✅ CONFIGURATION VALIDATION")
    print("=" * 50)

    bad_overrides = {
        "http": {"timeout_seconds": 0},
        "kline": {"begin_offset_days": -1, "end_offset_days": -7},
        "metrics": {"exchange_timezone": "Mars/Olympus"},
    }
    merged = ConfigLoader.create(config_dir).merge_config(bad_overrides)
    for error in ConfigValidator.validate_config(merged):
        print(f"   ✗ {error.field}: {error.message} (got: {error.value!r})")

    try:
        FuturesMetricsPipeline.create(config_dir, overrides=bad_overrides)
    except ValueError as e:
        print(f"\n   Pipeline refused to start: {str(e)[:60]}...")
    print()


def main():
    """Run the configuration demo."""
    print("🎯 FUTURES CARD CONFIGURATION DEMO")
    print("=" * 60)
    print()

    demonstrate_default_config()
    with tempfile.TemporaryDirectory() as tmp:
        config_dir = Path(tmp)
        demonstrate_precedence(config_dir)
        demonstrate_validation(config_dir)


if __name__ == "__main__":
    main()
