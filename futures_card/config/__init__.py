"""
Configuration module.

Default parameters, YAML-backed loading with override precedence, and
validation for the futures card pipeline.
"""

from .defaults import DefaultConfig, get_default_config
from .loader import ConfigLoader, load_config

__all__ = ["DefaultConfig", "get_default_config", "ConfigLoader", "load_config"]
