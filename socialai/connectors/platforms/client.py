"""SocialAI Insights — Platform HTTP Client.

Thin async wrapper over httpx shared by the platform fetchers. Every call
is a single attempt: no retry, no rate-limit handling.
"""

import time
from typing import Any, Dict, Optional

import httpx

from socialai.config import settings
from socialai.core.logging import get_logger

logger = get_logger("platforms.client")


class PlatformAPIError(Exception):
    """Raised when a platform API call fails or returns unreadable data."""

    def __init__(self, message: str, status_code: int = 0, platform: str = ""):
        self.status_code = status_code
        self.platform = platform
        super().__init__(message)


class PlatformClient:
    """Async HTTP client used by the platform fetchers.

    Pass an existing ``httpx.AsyncClient`` to share a connection pool (or a
    mock transport in tests); otherwise one is created lazily and owned by
    this instance.
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float | None = None,
    ):
        self.timeout = timeout or settings.http_timeout
        self._client = http_client
        self._owns_client = http_client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "PlatformClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()

    async def request_json(
        self,
        platform: str,
        method: str,
        url: str,
        params: Dict[str, Any] | None = None,
        json: Dict[str, Any] | None = None,
        headers: Dict[str, str] | None = None,
    ) -> Any:
        """Make one request and return the decoded JSON body."""
        client = await self._get_client()
        started = time.perf_counter()
        try:
            resp = await client.request(
                method, url, params=params, json=json, headers=headers
            )
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPStatusError as e:
            raise PlatformAPIError(
                f"{platform} API returned {e.response.status_code}",
                e.response.status_code,
                platform,
            ) from e
        except httpx.RequestError as e:
            raise PlatformAPIError(f"{platform} request failed: {e}", 0, platform) from e
        except ValueError as e:
            raise PlatformAPIError(
                f"{platform} API returned malformed JSON", resp.status_code, platform
            ) from e

        logger.info(
            f"{method} {platform} API OK",
            extra={
                "platform": platform,
                "endpoint": resp.url.path,
                "status_code": resp.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
        return body
