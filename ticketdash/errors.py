"""Dashboard exceptions."""
from typing import Optional


class DashboardError(Exception):
    """Base class for failures scoped to a single view refresh."""


class ConfigurationError(DashboardError):
    """Upstream URL or token is not configured."""


class UpstreamError(DashboardError):
    """The participants source failed or answered with a non-success status.

    `status_code` is the upstream HTTP status, or None for transport and
    decoding failures.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(DashboardError):
    """Credential mismatch at login."""
