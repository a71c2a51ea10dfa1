"""
Exceptions for dashboard operations.
"""


class DashboardError(Exception):
    """Base exception for dashboard-related errors."""

    pass


class DashboardConnectionError(DashboardError):
    """Error connecting to the dashboard backend."""

    pass


class DashboardResponseError(DashboardError):
    """Error in a backend response or while parsing it."""

    pass


class DashboardRenderError(DashboardError):
    """The view is missing an element or canvas the presenter writes to."""

    pass
