"""Async Finnhub API client with token injection and error handling."""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class FinnhubError(Exception):
    """Raised when a Finnhub request fails.

    ``status_code`` is None for transport failures (DNS, connection reset,
    timeout), which is the only thing that distinguishes them from HTTP errors.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        status_text: str = "",
        body: str = "",
    ):
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        super().__init__(message)


class FinnhubClient:
    """Async HTTP client for the Finnhub REST API.

    Every request carries the API key as the ``token`` query parameter.
    A single attempt is made per call: no caching, no retries.
    """

    BASE_URL = "https://finnhub.io/api/v1"

    def __init__(self, api_key: str, base_url: str | None = None, timeout: float = 30.0):
        self.api_key = api_key
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def get(self, path: str, params: dict | None = None) -> Any:
        """Make a GET request to the Finnhub API.

        Args:
            path: Endpoint path relative to the API root (e.g. "/quote")
            params: Additional query parameters

        Returns:
            Parsed JSON response

        Raises:
            FinnhubError: On non-2xx status, transport failure, or a non-JSON body
        """
        params = dict(params or {})
        params["token"] = self.api_key

        logger.debug("GET %s %s", path, sorted(k for k in params if k != "token"))

        try:
            resp = await self._get_client().get(path, params=params)
        except httpx.RequestError as e:
            raise FinnhubError(f"Request failed: {e!r}") from e

        if not resp.is_success:
            body = resp.text
            message = f"Finnhub API error: {resp.status_code} {resp.reason_phrase}"
            if body:
                message += f" - {body}"
            raise FinnhubError(
                message,
                status_code=resp.status_code,
                status_text=resp.reason_phrase,
                body=body,
            )

        try:
            return resp.json()
        except ValueError as e:
            raise FinnhubError(
                f"Finnhub API returned invalid JSON for {path}",
                status_code=resp.status_code,
                status_text=resp.reason_phrase,
                body=resp.text[:200],
            ) from e
