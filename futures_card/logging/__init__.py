"""
Logging configuration and utilities for the futures card pipeline.
"""
from .config import configure_logging, get_logger, get_pipeline_logger, log_stage_result

__all__ = ["configure_logging", "get_logger", "get_pipeline_logger", "log_stage_result"]
