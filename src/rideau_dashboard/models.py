"""
Data models for the ice-condition telemetry served by the dashboard backend.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .exceptions import DashboardResponseError

logger = logging.getLogger(__name__)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a window end time.

    Accepts ISO-8601 text (a trailing 'Z' means UTC) or epoch milliseconds.
    ISO text without an offset stays naive, i.e. local wall time. Missing or
    unreadable values give None.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            logger.debug(f"Unreadable windowEndTime: {value!r}")
            return None
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.debug(f"Unreadable windowEndTime: {value!r}")
            return None
    return None


@dataclass
class LocationReading:
    """Latest aggregated reading for one location.

    Metric values are kept as the backend sent them; format_metric decides
    what is displayable.
    """

    location: str
    avg_ice_thickness: Any = None
    avg_surface_temperature: Any = None
    avg_snow_accumulation: Any = None
    safety_status: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LocationReading":
        if not isinstance(data, dict):
            raise DashboardResponseError(f"Expected a reading object, got {data!r}")
        location = data.get("location")
        if not isinstance(location, str):
            raise DashboardResponseError("Reading is missing its location name")

        status = data.get("safetyStatus")
        return cls(
            location=location,
            avg_ice_thickness=data.get("avgIceThickness"),
            avg_surface_temperature=data.get("avgSurfaceTemperature"),
            avg_snow_accumulation=data.get("avgSnowAccumulation"),
            safety_status=status if isinstance(status, str) and status else None,
        )


@dataclass
class HistoryPoint:
    """One aggregation window in a location's recent history."""

    window_end_time: Optional[datetime]
    avg_ice_thickness: Any = None
    avg_surface_temperature: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryPoint":
        if not isinstance(data, dict):
            raise DashboardResponseError(f"Expected a history point, got {data!r}")
        return cls(
            window_end_time=parse_timestamp(data.get("windowEndTime")),
            avg_ice_thickness=data.get("avgIceThickness"),
            avg_surface_temperature=data.get("avgSurfaceTemperature"),
        )


@dataclass
class LatestResponse:
    """Payload of /api/latest."""

    success: bool
    data: List[LocationReading] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Any) -> "LatestResponse":
        if not isinstance(payload, dict):
            raise DashboardResponseError("Latest response is not a JSON object")
        success = bool(payload.get("success"))
        if not success:
            return cls(success=False)

        rows = payload.get("data")
        if not isinstance(rows, list):
            raise DashboardResponseError("Latest response has no data array")
        return cls(success=True, data=[LocationReading.from_dict(row) for row in rows])


@dataclass
class StatusResponse:
    """Payload of /api/status."""

    success: bool
    overall_status: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Any) -> "StatusResponse":
        if not isinstance(payload, dict):
            raise DashboardResponseError("Status response is not a JSON object")
        success = bool(payload.get("success"))
        if not success:
            return cls(success=False)

        status = payload.get("overallStatus")
        if not isinstance(status, str) or not status:
            raise DashboardResponseError(
                f"Status response reports success without an overallStatus: {status!r}"
            )
        return cls(success=True, overall_status=status)


@dataclass
class HistoryResponse:
    """Payload of /api/history/{location}, tagged with the requested location."""

    location: str
    data: List[HistoryPoint] = field(default_factory=list)

    @classmethod
    def from_dict(cls, location: str, payload: Any) -> "HistoryResponse":
        if not isinstance(payload, dict):
            raise DashboardResponseError(
                f"History response for {location} is not a JSON object"
            )
        # A missing data array is an empty series, not an error
        rows = payload.get("data") or []
        if not isinstance(rows, list):
            raise DashboardResponseError(
                f"History response for {location} has a non-list data field"
            )
        return cls(location=location, data=[HistoryPoint.from_dict(row) for row in rows])
