"""
Periodic refresh of the dashboard.

A refresh cycle has two failure domains. Cards and status run first: a failed
fetch or parse there is logged, reported through ``on_error`` and ends that
domain for the cycle. Charts run afterwards regardless, inside their own
domain. Neither domain stops the timer.

Ticks are time-based. A tick that fires while the previous cycle is still in
flight is skipped, so cycles never overlap.
"""

import asyncio
import logging
from typing import Callable, List, Optional

from .charts import ChartPresenter
from .client import DashboardClient
from .config import DashboardConfig
from .presenter import CardPresenter
from .result import CycleReport, FetchResult, capture
from .view import DashboardView

logger = logging.getLogger(__name__)

ErrorHook = Callable[[str, BaseException], None]


def log_error(message: str, error: BaseException) -> None:
    """Default error hook: log only, there is no on-screen error surface."""
    logger.error(f"{message}: {error}")


class DashboardPoller:
    """Drives the card and chart presenters on a fixed interval."""

    def __init__(
        self,
        view: DashboardView,
        client: Optional[DashboardClient] = None,
        config: Optional[DashboardConfig] = None,
        on_error: ErrorHook = log_error,
    ):
        self.config = config or (client.config if client else DashboardConfig())
        self.client = client or DashboardClient(self.config)
        self.view = view
        self.cards = CardPresenter(view, self.config)
        self.charts = ChartPresenter(view, self.client, self.config)
        self.on_error = on_error

        self.reports: List[CycleReport] = []
        self._cycle_count = 0
        self._cycle_task: Optional["asyncio.Task[CycleReport]"] = None
        self._stopped = asyncio.Event()

    @property
    def busy(self) -> bool:
        """True while a refresh cycle is in flight."""
        return self._cycle_task is not None and not self._cycle_task.done()

    async def _refresh_cards(self) -> bool:
        latest = await self.client.get_latest()
        if latest.success:
            self.cards.update_location_cards(latest.data)
            self.cards.update_last_update_time()
        else:
            logger.debug("Latest readings reported success=false; cards unchanged")

        status = await self.client.get_status()
        if status.success:
            self.cards.update_overall_status(status.overall_status)
        else:
            logger.debug("Status reported success=false; badge unchanged")

        return latest.success and status.success

    async def _refresh_charts(self) -> bool:
        await self.charts.update_charts()
        return True

    async def refresh_cycle(self) -> CycleReport:
        """Run one full fetch-and-render pass and report each domain's outcome."""
        self._cycle_count += 1
        report = CycleReport(cycle=self._cycle_count)

        report.cards = await capture(self._refresh_cards())
        if not report.cards.ok:
            logger.error("Error updating dashboard", exc_info=report.cards.error)
            self.on_error("Failed to fetch latest data. Retrying...", report.cards.error)

        report.charts = await capture(self._refresh_charts())
        if not report.charts.ok:
            logger.error("Error updating charts", exc_info=report.charts.error)

        self.reports.append(report)
        return report

    def tick(self) -> Optional["asyncio.Task[CycleReport]"]:
        """
        Start a cycle unless one is still running.

        Returns the new task, or None when the tick was skipped.
        """
        if self.busy:
            logger.warning(
                f"Refresh cycle {self._cycle_count} still running; skipping this tick"
            )
            self.reports.append(
                CycleReport(
                    cycle=self._cycle_count,
                    cards=FetchResult.success(False),
                    charts=FetchResult.success(False),
                    skipped=True,
                )
            )
            return None
        self._cycle_task = asyncio.ensure_future(self.refresh_cycle())
        return self._cycle_task

    async def initialize(self, max_cycles: Optional[int] = None) -> None:
        """
        Refresh once, then every ``refresh_interval`` seconds.

        Runs until ``stop()`` is called or, when ``max_cycles`` is given, until
        that many ticks (including the initial refresh) have fired.
        """
        logger.info(
            f"Starting dashboard refresh every {self.config.refresh_interval}s "
            f"against {self.config.base_url}"
        )
        self._stopped.clear()
        self._cycle_task = asyncio.ensure_future(self.refresh_cycle())
        await self._cycle_task
        ticks = 1

        while max_cycles is None or ticks < max_cycles:
            try:
                await asyncio.wait_for(
                    self._stopped.wait(), timeout=self.config.refresh_interval
                )
                break
            except asyncio.TimeoutError:
                pass
            self.tick()
            ticks += 1

        if self._cycle_task is not None and not self._cycle_task.done():
            await self._cycle_task
        logger.info("Dashboard refresh stopped")

    def stop(self) -> None:
        self._stopped.set()

    async def close(self) -> None:
        self.stop()
        await self.client.close()

    async def __aenter__(self) -> "DashboardPoller":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
