"""
Error types raised by the upstream client, aggregator and prediction engine.
"""
from typing import Optional


class ForecastError(Exception):
    """Base class for all service errors."""


class UpstreamUnavailable(ForecastError):
    """
    The upstream provider could not be reached or returned an unusable response.

    Callers absorb this with a default value everywhere except the
    single-fixture lookup used by the prediction engine.
    """

    def __init__(self, endpoint: str, status_code: Optional[int] = None, detail: str = ""):
        self.endpoint = endpoint
        self.status_code = status_code
        self.detail = detail
        message = f"Upstream request failed: {endpoint}"
        if status_code:
            message += f" (HTTP {status_code})"
        if detail:
            message += f" - {detail}"
        super().__init__(message)


class FixtureNotFound(ForecastError):
    """Requested fixture id does not exist upstream."""

    def __init__(self, fixture_id: int):
        self.fixture_id = fixture_id
        super().__init__(f"Fixture {fixture_id} not found")


class InvalidDate(ForecastError, ValueError):
    """Day string is not an ISO calendar date (YYYY-MM-DD)."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid date '{value}', expected YYYY-MM-DD")
