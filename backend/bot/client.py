"""HTTP client the bot uses to read the dashboard API."""
from __future__ import annotations

import httpx


class DashboardAPIError(RuntimeError):
    """Raised when the dashboard API cannot be reached or answers badly."""


class DashboardAPIClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = http_client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = http_client is None

    async def fetch_data(self) -> dict:
        try:
            response = await self._client.get(f"{self._base_url}/api/data")
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise DashboardAPIError(f"dashboard API request failed: {exc}") from exc
        if not isinstance(payload, dict):
            raise DashboardAPIError("dashboard API returned an unexpected payload")
        return payload

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def api_base_from_app_url(mini_app_url: str) -> str:
    """``https://host/app`` -> ``https://host``."""

    url = mini_app_url.rstrip("/")
    if url.endswith("/app"):
        url = url[: -len("/app")]
    return url
