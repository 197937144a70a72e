"""
Base async HTTP client with common functionality
"""

from typing import Dict, Any, Optional

import httpx

from catalog_sync.core.logging import get_logger
from catalog_sync.core.exceptions import NetworkError
from catalog_sync.shared.constants import USER_AGENT, DEFAULT_REQUEST_TIMEOUT_MS

logger = get_logger(__name__)


class BaseAPIClient:
    """Base JSON-over-HTTP client shared by the storefront and catalog clients"""

    def __init__(
        self,
        timeout_ms: int = DEFAULT_REQUEST_TIMEOUT_MS,
        user_agent: str = USER_AGENT,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.timeout_ms = timeout_ms
        self.user_agent = user_agent

        # An injected client belongs to the caller and is never closed here
        self.http_client: Optional[httpx.AsyncClient] = http_client
        self._owns_client = http_client is None

    async def __aenter__(self):
        """Async context manager entry"""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()

    async def connect(self):
        """Initialize HTTP client"""
        if self.http_client is None:
            self.http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout_ms / 1000),
                headers={"User-Agent": self.user_agent},
            )
            self._owns_client = True

    async def close(self):
        """Close HTTP client"""
        if self.http_client and self._owns_client:
            await self.http_client.aclose()
            self.http_client = None

    def _get_headers(self, extra: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers = {"Accept": "application/json", "User-Agent": self.user_agent}
        if extra:
            headers.update(extra)
        return headers

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout_ms: Optional[int] = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Transport failures, timeouts, non-2xx statuses and undecodable bodies
        are all raised as NetworkError. The HTTP status is kept on the error
        so callers can tell a missing endpoint from a flaky one.
        """
        await self.connect()

        timeout = (timeout_ms or self.timeout_ms) / 1000

        try:
            response = await self.http_client.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._get_headers(headers),
                timeout=timeout,
            )
        except httpx.TimeoutException as e:
            raise NetworkError(
                f"Request timed out after {timeout:g}s", url=url, cause=e
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Request failed: {e}", url=url, cause=e) from e

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = response.text or None
            logger.debug(
                "HTTP error response",
                method=method,
                url=url,
                status_code=response.status_code,
            )
            raise NetworkError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                url=url,
                status_code=response.status_code,
                response_body=body,
            )

        try:
            return response.json()
        except ValueError as e:
            raise NetworkError(
                "Response body is not valid JSON",
                url=url,
                status_code=response.status_code,
                cause=e,
            ) from e

    async def _get_json(self, url: str, **kwargs) -> Any:
        return await self._request("GET", url, **kwargs)

    async def _post_json(self, url: str, payload: Dict[str, Any], **kwargs) -> Any:
        return await self._request("POST", url, json=payload, **kwargs)
