"""
Polling client for the Rideau Canal ice-conditions dashboard.

Fetch ice thickness, surface temperature and snow accumulation per location,
render them into status cards and keep two history charts up to date.
"""

try:
    from importlib import metadata

    __version__ = metadata.version("rideau-dashboard")
except Exception:
    __version__ = "unknown"

from .charts import (
    ICE_THICKNESS_CHART,
    TEMPERATURE_CHART,
    ChartPhase,
    ChartPresenter,
    ChartSpec,
    ChartState,
    build_datasets,
    build_labels,
)
from .client import DashboardClient
from .config import DEFAULT_LOCATIONS, DashboardConfig, LocationConfig
from .exceptions import (
    DashboardConnectionError,
    DashboardError,
    DashboardRenderError,
    DashboardResponseError,
)
from .formatting import (
    MISSING_VALUE,
    derive_status_class,
    fill_color,
    format_clock,
    format_metric,
    location_key,
)
from .models import (
    HistoryPoint,
    HistoryResponse,
    LatestResponse,
    LocationReading,
    StatusResponse,
)
from .poller import DashboardPoller
from .presenter import CardPresenter
from .result import CycleReport, FetchResult
from .sync import refresh_once_sync, run_dashboard_sync
from .view import Dataset, DashboardView, Element, InMemoryChart, InMemoryView

__all__ = [
    # Client
    "DashboardClient",
    # Configuration
    "DashboardConfig",
    "LocationConfig",
    "DEFAULT_LOCATIONS",
    # Exceptions
    "DashboardError",
    "DashboardConnectionError",
    "DashboardResponseError",
    "DashboardRenderError",
    # Models
    "LocationReading",
    "HistoryPoint",
    "LatestResponse",
    "StatusResponse",
    "HistoryResponse",
    # Formatting
    "MISSING_VALUE",
    "format_metric",
    "derive_status_class",
    "location_key",
    "fill_color",
    "format_clock",
    # Presenters
    "CardPresenter",
    "ChartPresenter",
    "ChartPhase",
    "ChartSpec",
    "ChartState",
    "ICE_THICKNESS_CHART",
    "TEMPERATURE_CHART",
    "build_labels",
    "build_datasets",
    # Views
    "DashboardView",
    "InMemoryView",
    "InMemoryChart",
    "Element",
    "Dataset",
    # Polling
    "DashboardPoller",
    "CycleReport",
    "FetchResult",
    "run_dashboard_sync",
    "refresh_once_sync",
]
