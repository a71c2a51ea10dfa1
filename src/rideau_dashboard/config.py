"""
Configuration for the dashboard poller and presenters.

The location tables (DOM key and chart color per location) are plain data so a
new monitoring site can be added without touching presenter code.
"""

import os
from dataclasses import dataclass, field, replace
from datetime import tzinfo
from typing import Dict, Optional, Tuple
from zoneinfo import ZoneInfo


@dataclass(frozen=True)
class LocationConfig:
    """A monitored canal location."""

    name: str  # display name, as sent by the backend
    key: str  # suffix used in element ids (ice-{key}, status-{key}, ...)
    color: str  # chart stroke color token, e.g. 'rgb(75, 192, 192)'


DEFAULT_LOCATIONS: Tuple[LocationConfig, ...] = (
    LocationConfig("Dow's Lake", "dows", "rgb(75, 192, 192)"),
    LocationConfig("Fifth Avenue", "fifth", "rgb(255, 99, 132)"),
    LocationConfig("NAC", "nac", "rgb(54, 162, 235)"),
)

DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_REFRESH_INTERVAL = 30.0  # seconds
DEFAULT_HISTORY_LIMIT = 12

ENV_BASE_URL = "RIDEAU_DASHBOARD_URL"
ENV_REFRESH_INTERVAL = "RIDEAU_DASHBOARD_REFRESH"
ENV_TIMEZONE = "RIDEAU_DASHBOARD_TZ"


@dataclass
class DashboardConfig:
    """Settings shared by the client, the presenters and the poller."""

    base_url: str = DEFAULT_BASE_URL
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    history_limit: int = DEFAULT_HISTORY_LIMIT
    timeout: float = 30.0
    timezone: Optional[str] = None  # IANA name; None means system local time
    locations: Tuple[LocationConfig, ...] = field(
        default_factory=lambda: DEFAULT_LOCATIONS
    )

    def __post_init__(self) -> None:
        if self.refresh_interval <= 0:
            raise ValueError("refresh_interval must be positive")
        if self.history_limit <= 0:
            raise ValueError("history_limit must be positive")
        if not self.locations:
            raise ValueError("at least one location must be configured")
        self.base_url = self.base_url.rstrip("/")
        self.locations = tuple(self.locations)

    @property
    def location_names(self) -> Tuple[str, ...]:
        return tuple(location.name for location in self.locations)

    @property
    def key_map(self) -> Dict[str, str]:
        return {location.name: location.key for location in self.locations}

    @property
    def color_map(self) -> Dict[str, str]:
        return {location.name: location.color for location in self.locations}

    def tzinfo(self) -> Optional[tzinfo]:
        """Resolve the display timezone (None means system local)."""
        if self.timezone is None:
            return None
        return ZoneInfo(self.timezone)

    @classmethod
    def from_env(cls, **overrides) -> "DashboardConfig":
        """
        Build a configuration from environment variables.

        Recognised variables are RIDEAU_DASHBOARD_URL, RIDEAU_DASHBOARD_REFRESH
        (seconds) and RIDEAU_DASHBOARD_TZ. Keyword overrides win over the
        environment.
        """
        config = cls()
        env_values = {}

        base_url = os.getenv(ENV_BASE_URL)
        if base_url:
            env_values["base_url"] = base_url

        refresh = os.getenv(ENV_REFRESH_INTERVAL)
        if refresh:
            try:
                env_values["refresh_interval"] = float(refresh)
            except ValueError as e:
                raise ValueError(
                    f"{ENV_REFRESH_INTERVAL} must be a number of seconds, got {refresh!r}"
                ) from e

        tz_name = os.getenv(ENV_TIMEZONE)
        if tz_name:
            env_values["timezone"] = tz_name

        env_values.update(overrides)
        return replace(config, **env_values)
