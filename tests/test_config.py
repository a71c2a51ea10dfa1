"""
Tests for dashboard configuration.
"""

from zoneinfo import ZoneInfo

import pytest

from rideau_dashboard.config import (
    DEFAULT_LOCATIONS,
    DashboardConfig,
    LocationConfig,
)


def test_defaults():
    config = DashboardConfig()
    assert config.refresh_interval == 30.0
    assert config.history_limit == 12
    assert config.location_names == ("Dow's Lake", "Fifth Avenue", "NAC")
    assert config.key_map == {"Dow's Lake": "dows", "Fifth Avenue": "fifth", "NAC": "nac"}
    assert config.color_map["NAC"] == "rgb(54, 162, 235)"
    assert config.tzinfo() is None


def test_base_url_trailing_slash_removed():
    assert DashboardConfig(base_url="http://x.test/").base_url == "http://x.test"


@pytest.mark.parametrize(
    "kwargs",
    [{"refresh_interval": 0}, {"history_limit": 0}, {"locations": ()}],
)
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        DashboardConfig(**kwargs)


def test_extra_location_is_configuration_only():
    locations = DEFAULT_LOCATIONS + (
        LocationConfig("Hartwell Locks", "hartwell", "rgb(153, 102, 255)"),
    )
    config = DashboardConfig(locations=locations)
    assert config.location_names[-1] == "Hartwell Locks"
    assert config.key_map["Hartwell Locks"] == "hartwell"


def test_from_env(monkeypatch):
    monkeypatch.setenv("RIDEAU_DASHBOARD_URL", "http://canal.example/")
    monkeypatch.setenv("RIDEAU_DASHBOARD_REFRESH", "5")
    monkeypatch.setenv("RIDEAU_DASHBOARD_TZ", "America/Toronto")

    config = DashboardConfig.from_env(history_limit=6)

    assert config.base_url == "http://canal.example"
    assert config.refresh_interval == 5.0
    assert config.history_limit == 6
    assert config.tzinfo() == ZoneInfo("America/Toronto")


def test_from_env_bad_refresh(monkeypatch):
    monkeypatch.setenv("RIDEAU_DASHBOARD_REFRESH", "soon")
    with pytest.raises(ValueError, match="RIDEAU_DASHBOARD_REFRESH"):
        DashboardConfig.from_env()
