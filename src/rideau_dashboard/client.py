"""
HTTP client for the ice-condition dashboard backend.
"""

import json
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from .config import DashboardConfig
from .exceptions import (
    DashboardConnectionError,
    DashboardError,
    DashboardResponseError,
)
from .models import HistoryResponse, LatestResponse, StatusResponse

logger = logging.getLogger(__name__)

# Characters encodeURIComponent leaves alone besides the unreserved set
PATH_SAFE_CHARS = "!'()*"


class DashboardClient:
    """
    Async client for the dashboard's JSON endpoints.

    The backend serves three endpoints, all relative to the configured base URL:
    /api/latest, /api/status and /api/history/{location}?limit=N.
    """

    def __init__(self, config: Optional[DashboardConfig] = None):
        self.config = config or DashboardConfig()
        self.timeout = self.config.timeout
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.timeout,
            headers={
                "User-Agent": "rideau-dashboard/0.1.0",
                "Accept": "application/json",
            },
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "DashboardClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def _make_request(
        self, endpoint: str, params: Optional[Dict[str, str]] = None
    ) -> Any:
        """Make a request to the backend with error handling."""
        logger.debug(f"GET {endpoint} params={params}")

        try:
            response = await self._client.get(endpoint, params=params)
            response.raise_for_status()
            return response.json()

        except httpx.TimeoutException as e:
            raise DashboardConnectionError(
                f"Request timeout after {self.timeout}s"
            ) from e
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise DashboardResponseError(f"Endpoint not found: {endpoint}") from e
            elif e.response.status_code == 429:
                raise DashboardConnectionError("Rate limit exceeded") from e
            elif e.response.status_code >= 500:
                raise DashboardConnectionError(
                    "Dashboard backend temporarily unavailable"
                ) from e
            else:
                raise DashboardConnectionError(
                    f"HTTP error {e.response.status_code}: {e}"
                ) from e
        except httpx.RequestError as e:
            raise DashboardConnectionError(f"Network error: {e}") from e
        except json.JSONDecodeError as e:
            raise DashboardResponseError(f"Invalid JSON response: {e}") from e

    async def get_latest(self) -> LatestResponse:
        """Get the latest reading for every location."""
        data = await self._make_request("/api/latest")
        return LatestResponse.from_dict(data)

    async def get_status(self) -> StatusResponse:
        """Get the aggregate canal status."""
        data = await self._make_request("/api/status")
        return StatusResponse.from_dict(data)

    async def get_history(
        self, location: str, limit: Optional[int] = None
    ) -> HistoryResponse:
        """
        Get the most recent history points for one location.

        Args:
            location: Location display name (URL-encoded into the path)
            limit: Number of points to request, defaults to config.history_limit

        Returns:
            HistoryResponse with points ordered oldest to newest
        """
        if limit is None:
            limit = self.config.history_limit

        endpoint = f"/api/history/{quote(location, safe=PATH_SAFE_CHARS)}"
        try:
            data = await self._make_request(endpoint, {"limit": str(limit)})
            return HistoryResponse.from_dict(location, data)
        except DashboardError:
            raise
        except Exception as e:
            raise DashboardResponseError(
                f"Failed to retrieve history for {location}: {e}"
            ) from e
