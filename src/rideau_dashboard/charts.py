"""
History charts: label and dataset shaping, and the per-chart create-or-update
state machine.

Both charts share one label sequence taken from the first configured location.
Every series is assumed to be on that timeline; series of a different length
are handed to the view unchanged.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from .client import DashboardClient
from .config import DashboardConfig
from .formatting import fill_color, format_clock
from .models import HistoryResponse
from .view import (
    ICE_CHART_CANVAS,
    TEMPERATURE_CHART_CANVAS,
    ChartHandle,
    DashboardView,
    Dataset,
)

logger = logging.getLogger(__name__)

# Label for a window whose end time was missing or unreadable
INVALID_TIME_LABEL = "Invalid Date"


class ChartPhase(Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"


@dataclass(frozen=True)
class ChartSpec:
    """Fixed display settings for one metric chart."""

    canvas_id: str
    metric: str  # HistoryPoint attribute plotted on the y axis
    y_title: str
    begin_at_zero: Optional[bool] = None

    def options(self) -> Dict[str, Any]:
        y_axis: Dict[str, Any] = {"title": {"display": True, "text": self.y_title}}
        if self.begin_at_zero is not None:
            y_axis["beginAtZero"] = self.begin_at_zero
        return {
            "responsive": True,
            "maintainAspectRatio": True,
            "plugins": {
                "legend": {"position": "top"},
                "title": {"display": False},
            },
            "scales": {"y": y_axis},
        }


ICE_THICKNESS_CHART = ChartSpec(
    canvas_id=ICE_CHART_CANVAS,
    metric="avg_ice_thickness",
    y_title="Ice Thickness (cm)",
    begin_at_zero=False,
)
TEMPERATURE_CHART = ChartSpec(
    canvas_id=TEMPERATURE_CHART_CANVAS,
    metric="avg_surface_temperature",
    y_title="Surface Temperature (°C)",
)


def build_labels(
    histories: Sequence[HistoryResponse], tz: Optional[Any] = None
) -> List[str]:
    """Time labels from the first location's history, 'hh:mm a.m.' style."""
    if not histories:
        return []
    return [
        format_clock(point.window_end_time, seconds=False, tz=tz)
        if point.window_end_time is not None
        else INVALID_TIME_LABEL
        for point in histories[0].data
    ]


def build_datasets(
    histories: Sequence[HistoryResponse], metric: str, colors: Dict[str, str]
) -> List[Dataset]:
    """One series per location, values in history order, passed through as sent."""
    datasets = []
    for history in histories:
        color = colors.get(history.location, "")
        datasets.append(
            Dataset(
                label=history.location,
                data=[getattr(point, metric) for point in history.data],
                border_color=color,
                background_color=fill_color(color),
            )
        )
    return datasets


@dataclass
class ChartState:
    """One chart's lifecycle: created once, then updated in place."""

    spec: ChartSpec
    phase: ChartPhase = ChartPhase.UNINITIALIZED
    handle: Optional[ChartHandle] = None
    labels: List[str] = field(default_factory=list)
    datasets: List[Dataset] = field(default_factory=list)

    def apply(
        self, view: DashboardView, labels: List[str], datasets: List[Dataset]
    ) -> None:
        if self.phase is ChartPhase.UNINITIALIZED:
            self.handle = view.create_chart(
                self.spec.canvas_id,
                labels=labels,
                datasets=datasets,
                options=self.spec.options(),
            )
            self.phase = ChartPhase.ACTIVE
            logger.debug(f"Created chart {self.spec.canvas_id}")
        else:
            assert self.handle is not None
            self.handle.labels = labels
            self.handle.datasets = datasets
            self.handle.update()

        self.labels = labels
        self.datasets = datasets

    def to_pandas(self) -> Any:
        """Current chart data as a DataFrame: one column per series."""
        try:
            import pandas as pd
        except ImportError:
            raise ImportError(
                "pandas is required for DataFrame conversion. Install with: pip install pandas"
            ) from None

        columns = {}
        for dataset in self.datasets:
            values = list(dataset.data)[: len(self.labels)]
            values += [None] * (len(self.labels) - len(values))
            columns[dataset.label] = pd.to_numeric(
                pd.Series(values, dtype="object"), errors="coerce"
            )
        df = pd.DataFrame(columns)
        df.index = pd.Index(self.labels, name="time")
        return df


class ChartPresenter:
    """Owns the ice and temperature charts and refreshes them from history."""

    def __init__(
        self,
        view: DashboardView,
        client: DashboardClient,
        config: Optional[DashboardConfig] = None,
        specs: Sequence[ChartSpec] = (ICE_THICKNESS_CHART, TEMPERATURE_CHART),
    ):
        self.view = view
        self.client = client
        self.config = config or DashboardConfig()
        self.charts = {spec.canvas_id: ChartState(spec) for spec in specs}

    @property
    def ice_chart(self) -> ChartState:
        return self.charts[ICE_CHART_CANVAS]

    @property
    def temperature_chart(self) -> ChartState:
        return self.charts[TEMPERATURE_CHART_CANVAS]

    async def fetch_histories(self) -> List[HistoryResponse]:
        """Fetch every location's history concurrently; any failure fails all."""
        tasks = [
            self.client.get_history(name, limit=self.config.history_limit)
            for name in self.config.location_names
        ]
        return list(await asyncio.gather(*tasks))

    def render(self, histories: Sequence[HistoryResponse]) -> None:
        labels = build_labels(histories, tz=self.config.tzinfo())
        colors = self.config.color_map
        for chart in self.charts.values():
            datasets = build_datasets(histories, chart.spec.metric, colors)
            chart.apply(self.view, labels, datasets)

    async def update_charts(self) -> None:
        """
        Refresh both charts.

        Raises whatever the history fetch or the view raised; nothing is
        rendered unless every location's history arrived.
        """
        histories = await self.fetch_histories()
        self.render(histories)
