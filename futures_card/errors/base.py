"""Common base for every error raised by the pipeline."""

from typing import Optional, Dict, Any


class FuturesCardError(Exception):
    """Base class for all pipeline failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
