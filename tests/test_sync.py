"""
Tests for the blocking entry points.
"""

from unittest.mock import AsyncMock, patch

import pytest

from rideau_dashboard.result import CycleReport, FetchResult
from rideau_dashboard.sync import refresh_once_sync, run_async


def test_run_async():
    async def double(x):
        return x * 2

    assert run_async(double, 21) == 42


@pytest.mark.asyncio
async def test_run_async_inside_loop_raises():
    async def noop():
        return None

    with pytest.raises(RuntimeError, match="existing asyncio event loop"):
        run_async(noop)


def test_refresh_once_sync(view, config):
    report = CycleReport(cycle=1, cards=FetchResult.success(True))

    with patch(
        "rideau_dashboard.sync.DashboardPoller.refresh_cycle",
        new=AsyncMock(return_value=report),
    ):
        assert refresh_once_sync(view, config) is report
