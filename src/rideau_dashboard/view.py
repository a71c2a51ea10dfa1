"""
The surface the presenters write to.

A real front end (a web page, a TUI, a notebook widget) implements
``DashboardView``. ``InMemoryView`` keeps everything in plain Python objects and
is what tests and headless runs use.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Protocol, Set

from .config import DEFAULT_LOCATIONS, LocationConfig
from .exceptions import DashboardRenderError

OVERALL_STATUS_ID = "overallStatus"
LAST_UPDATE_ID = "lastUpdate"
ICE_CHART_CANVAS = "iceThicknessChart"
TEMPERATURE_CHART_CANVAS = "temperatureChart"

METRIC_PREFIXES = ("ice", "temp", "snow", "status")


def element_ids_for(locations: Iterable[LocationConfig]) -> List[str]:
    """Every element id the presenters write for the given locations."""
    ids = [
        f"{prefix}-{location.key}"
        for location in locations
        for prefix in METRIC_PREFIXES
    ]
    ids.extend([OVERALL_STATUS_ID, LAST_UPDATE_ID])
    return ids


@dataclass
class Element:
    """A text element with a CSS class list."""

    element_id: str
    text: str = ""
    class_name: str = ""


@dataclass
class Dataset:
    """One named series of a line chart."""

    label: str
    data: List[Any]
    border_color: str
    background_color: str
    tension: float = 0.4
    fill: bool = False


class ChartHandle(Protocol):
    """A live chart whose data is replaced in place."""

    labels: List[str]
    datasets: List[Dataset]

    def update(self) -> None: ...


class DashboardView(Protocol):
    def element(self, element_id: str) -> Element: ...

    def create_chart(
        self,
        canvas_id: str,
        labels: List[str],
        datasets: List[Dataset],
        options: Dict[str, Any],
        chart_type: str = "line",
    ) -> ChartHandle: ...


@dataclass
class InMemoryChart:
    """Chart stand-in that records what a charting library would draw."""

    canvas_id: str
    chart_type: str
    labels: List[str]
    datasets: List[Dataset]
    options: Dict[str, Any]
    update_count: int = 0

    def update(self) -> None:
        self.update_count += 1


@dataclass
class InMemoryView:
    """A view made of ``Element`` objects and ``InMemoryChart`` objects."""

    elements: Dict[str, Element] = field(default_factory=dict)
    canvases: Set[str] = field(default_factory=set)
    charts: Dict[str, InMemoryChart] = field(default_factory=dict)

    @classmethod
    def for_locations(
        cls, locations: Iterable[LocationConfig] = DEFAULT_LOCATIONS
    ) -> "InMemoryView":
        elements = {
            element_id: Element(element_id)
            for element_id in element_ids_for(locations)
        }
        return cls(
            elements=elements,
            canvases={ICE_CHART_CANVAS, TEMPERATURE_CHART_CANVAS},
        )

    def element(self, element_id: str) -> Element:
        try:
            return self.elements[element_id]
        except KeyError:
            raise DashboardRenderError(f"No element with id '{element_id}'") from None

    def create_chart(
        self,
        canvas_id: str,
        labels: List[str],
        datasets: List[Dataset],
        options: Dict[str, Any],
        chart_type: str = "line",
    ) -> InMemoryChart:
        if canvas_id not in self.canvases:
            raise DashboardRenderError(f"No chart canvas with id '{canvas_id}'")
        chart = InMemoryChart(
            canvas_id=canvas_id,
            chart_type=chart_type,
            labels=labels,
            datasets=datasets,
            options=options,
        )
        self.charts[canvas_id] = chart
        return chart

    def snapshot(self) -> Dict[str, Dict[str, str]]:
        """Text and class of every element, keyed by id."""
        return {
            element_id: {"text": element.text, "class": element.class_name}
            for element_id, element in sorted(self.elements.items())
        }
