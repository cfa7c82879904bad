"""
Upstream service error classifications.

NetworkError covers the transport (connection, timeout, HTTP status);
ApiError covers a reachable service whose envelope reports a failure.
"""

from typing import Optional

from .base import FuturesCardError


class UpstreamError(FuturesCardError):
    """Base class for failures talking to the quoting services."""


class NetworkError(UpstreamError):
    """Transport failure or non-success HTTP status."""

    def __init__(self, message: str, url: Optional[str] = None,
                 status_code: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.url = url
        self.status_code = status_code


class ApiError(UpstreamError):
    """Service envelope reports a failure code."""

    def __init__(self, message: str, service_message: Optional[str] = None,
                 status_code: Optional[int] = None, endpoint: Optional[str] = None,
                 **kwargs):
        super().__init__(message, **kwargs)
        self.service_message = service_message
        self.status_code = status_code
        self.endpoint = endpoint


class MalformedResponseError(ApiError):
    """Response body does not have the documented shape."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format
