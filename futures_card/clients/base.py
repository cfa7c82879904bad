"""Base class for the quoting service clients."""

from typing import Any, Optional

import httpx

from ..config.defaults import DefaultConfig, HttpParams, get_default_config
from ..data.parsers import parse_json_payload
from ..errors import NetworkError
from ..logging.config import get_logger


def create_http_client(params: Optional[HttpParams] = None) -> httpx.AsyncClient:
    """Create the shared async HTTP client used by every pipeline stage."""
    params = params or HttpParams()
    return httpx.AsyncClient(
        timeout=params.timeout_seconds,
        headers={"User-Agent": params.user_agent},
    )


class BaseQuoteClient:
    """
    Sends one request to a quoting service endpoint and decodes its JSON body.

    Transport failures, timeouts and non-2xx statuses become NetworkError;
    an undecodable body becomes MalformedResponseError. Nothing is retried.
    """

    endpoint = "quote"

    def __init__(self, http_client: httpx.AsyncClient, config: Optional[DefaultConfig] = None):
        self.http_client = http_client
        self.config = config or get_default_config()
        self.logger = get_logger(f"futures_card.clients.{self.endpoint}")
        self._request_count = 0
        self._error_count = 0

    async def _request_json(self, method: str, url: str, **kwargs: Any) -> Any:
        """
        Issue a request and decode the JSON response.

        Args:
            method: HTTP method
            url: Endpoint URL
            **kwargs: Passed to httpx (json body, headers)

        Returns:
            Decoded JSON value

        Raises:
            NetworkError: If the transport fails or the status is not 2xx
            MalformedResponseError: If the body is not JSON
        """
        self._request_count += 1
        try:
            response = await self.http_client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            self._error_count += 1
            self.logger.warning("Upstream request timed out", endpoint=self.endpoint,
                                url=url, error=str(e))
            raise NetworkError(f"Request to {self.endpoint} timed out", url=url) from e
        except httpx.HTTPError as e:
            self._error_count += 1
            self.logger.warning("Upstream request failed", endpoint=self.endpoint,
                                url=url, error=str(e))
            raise NetworkError(f"Network error calling {self.endpoint}: {e}", url=url) from e

        if not response.is_success:
            self._error_count += 1
            self.logger.warning("Upstream returned HTTP error", endpoint=self.endpoint,
                                url=url, response_code=response.status_code)
            raise NetworkError(
                f"HTTP {response.status_code} from {self.endpoint}",
                url=url,
                status_code=response.status_code,
            )

        return parse_json_payload(response.content, self.endpoint)

    def get_stats(self) -> dict[str, Any]:
        """Get request statistics."""
        return {
            "endpoint": self.endpoint,
            "request_count": self._request_count,
            "error_count": self._error_count,
        }
