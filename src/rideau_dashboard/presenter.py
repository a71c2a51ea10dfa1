"""
Card and status-badge presenter.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from .config import DashboardConfig
from .formatting import derive_status_class, format_clock, format_metric, location_key
from .models import LocationReading
from .view import LAST_UPDATE_ID, OVERALL_STATUS_ID, DashboardView

logger = logging.getLogger(__name__)

SAFETY_BADGE_CLASS = "safety-badge"
STATUS_BADGE_CLASS = "status-badge"
OVERALL_STATUS_TEMPLATE = "Canal Status: {status}"


class CardPresenter:
    """Writes latest readings and statuses into the view's text elements."""

    def __init__(self, view: DashboardView, config: Optional[DashboardConfig] = None):
        self.view = view
        self.config = config or DashboardConfig()
        self._key_map = self.config.key_map

    def update_location_cards(self, readings: Iterable[LocationReading]) -> None:
        for reading in readings:
            key = location_key(reading.location, self._key_map)

            self.view.element(f"ice-{key}").text = format_metric(
                reading.avg_ice_thickness
            )
            self.view.element(f"temp-{key}").text = format_metric(
                reading.avg_surface_temperature
            )
            self.view.element(f"snow-{key}").text = format_metric(
                reading.avg_snow_accumulation
            )

            badge = self.view.element(f"status-{key}")
            status = reading.safety_status
            if not status:
                # No status: neutral badge
                badge.text = ""
                badge.class_name = SAFETY_BADGE_CLASS
            else:
                badge.text = status
                badge.class_name = f"{SAFETY_BADGE_CLASS} {derive_status_class(status)}"

    def update_overall_status(self, status: str) -> None:
        """
        Set the overall canal badge.

        Raises:
            ValueError: If status is not a non-empty string
        """
        if not isinstance(status, str) or not status:
            raise ValueError(f"overall status must be a non-empty string, got {status!r}")

        badge = self.view.element(OVERALL_STATUS_ID)
        badge.class_name = f"{STATUS_BADGE_CLASS} {status.lower()}"
        badge.text = OVERALL_STATUS_TEMPLATE.format(status=status)

    def update_last_update_time(self, now: Optional[datetime] = None) -> str:
        if now is None:
            now = datetime.now(tz=self.config.tzinfo())
        text = format_clock(now, seconds=True, tz=self.config.tzinfo())
        self.view.element(LAST_UPDATE_ID).text = text
        logger.debug(f"Last update time set to {text}")
        return text
