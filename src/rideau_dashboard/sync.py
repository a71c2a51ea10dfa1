"""
Blocking entry points for code that does not run an event loop.

Usage:
    # Instead of this async code:
    async with DashboardPoller(view, config=config) as poller:
        await poller.initialize()

    # Use this sync code:
    from rideau_dashboard.sync import run_dashboard_sync
    run_dashboard_sync(view, config=config)
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional, TypeVar

from .config import DashboardConfig
from .poller import DashboardPoller
from .result import CycleReport
from .view import DashboardView

R = TypeVar("R")


def run_async(async_fn: Callable[..., Awaitable[R]], *args: Any, **kwargs: Any) -> R:
    """Run an async function to completion.

    Raises:
        RuntimeError: If called from within a running event loop
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(async_fn(*args, **kwargs))

    raise RuntimeError(
        "Cannot use sync version from within an existing asyncio event loop. "
        "Use the async version instead."
    )


def run_dashboard_sync(
    view: DashboardView,
    config: Optional[DashboardConfig] = None,
    max_cycles: Optional[int] = None,
) -> DashboardPoller:
    """Poll and render until interrupted or ``max_cycles`` ticks have fired."""

    async def _run() -> DashboardPoller:
        async with DashboardPoller(view, config=config) as poller:
            await poller.initialize(max_cycles=max_cycles)
        return poller

    return run_async(_run)


def refresh_once_sync(
    view: DashboardView, config: Optional[DashboardConfig] = None
) -> CycleReport:
    """Synchronous version of a single ``DashboardPoller.refresh_cycle``."""

    async def _run() -> CycleReport:
        async with DashboardPoller(view, config=config) as poller:
            return await poller.refresh_cycle()

    return run_async(_run)
