"""
Live API client for API-Football
Fetches fixtures, team statistics, injuries and lineups consumed by the
aggregator and prediction engine. Caching happens one level up.
"""
import logging
import threading
from typing import Optional, List, Dict, Any

import requests

from app.errors import UpstreamUnavailable
from config.settings import Settings

logger = logging.getLogger("api_client")


class ApiFootballClient:
    """
    Thin wrapper over the API-Football v3 REST endpoints.

    Every fetch either returns the unwrapped ``response`` payload or raises
    UpstreamUnavailable; callers decide whether a failure is fatal.
    """

    def __init__(
        self,
        settings: Settings,
        session: Optional[requests.Session] = None,
        max_concurrent_requests: int = 10,
    ):
        """
        Args:
            settings: Supplies API key, base URL and request timeout
            session: Optional pre-configured requests session
            max_concurrent_requests: Cap on simultaneous upstream calls
        """
        self.base_url = settings.api_football_base_url.rstrip("/")
        self.timeout = settings.request_timeout_seconds
        self._api_key = (settings.af_api_key or "").strip()
        self._session = session or requests.Session()
        # Limit concurrent API requests across all in-flight handlers
        self._api_semaphore = threading.Semaphore(max_concurrent_requests)

        if not self._api_key:
            logger.warning("AF_API_KEY is not set; upstream requests will be rejected")

    def _get_headers(self) -> dict:
        """Get API authentication headers."""
        return {"x-apisports-key": self._api_key}

    def _make_request(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> dict:
        """
        Make a GET request against the provider.

        Args:
            endpoint: API endpoint path (e.g. "fixtures", "teams/statistics")
            params: Query parameters

        Returns:
            Decoded JSON body

        Raises:
            UpstreamUnavailable: network error, HTTP error or non-JSON body
        """
        url = f"{self.base_url}/{endpoint}"
        try:
            with self._api_semaphore:
                response = self._session.get(
                    url,
                    headers=self._get_headers(),
                    params=params or {},
                    timeout=self.timeout,
                )
            response.raise_for_status()
            return response.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.warning(f"{endpoint} {params} failed with HTTP {status}")
            raise UpstreamUnavailable(endpoint, status_code=status, detail=str(e)) from e
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"{endpoint} {params} failed: {e}")
            raise UpstreamUnavailable(endpoint, detail=str(e)) from e

    def _response_list(self, endpoint: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        data = self._make_request(endpoint, params)
        response = data.get("response") if isinstance(data, dict) else None
        if not isinstance(response, list):
            return []
        return response

    # ===== FIXTURES =====

    def list_fixtures(
        self,
        date: Optional[str] = None,
        from_date: Optional[str] = None,
        to_date: Optional[str] = None,
        fixture_id: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        List raw fixture records.

        Exactly one filter style is expected: a single ``date``, a
        ``from_date``/``to_date`` range, or a ``fixture_id``.

        Returns:
            Raw fixture records as returned by the provider
        """
        params: Dict[str, Any] = {}
        if fixture_id is not None:
            params["id"] = fixture_id
        if date:
            params["date"] = date
        if from_date:
            params["from"] = from_date
        if to_date:
            params["to"] = to_date

        fixtures = self._response_list("fixtures", params)
        logger.info(f"fixtures {params} = {len(fixtures)}")
        return fixtures

    # ===== TEAMS =====

    def get_team_statistics(
        self,
        team_id: int,
        league_id: int,
        season: int,
    ) -> Optional[Dict[str, Any]]:
        """
        Get season statistics for a team within a league.

        Returns:
            Raw statistics object, or None if the provider has none
        """
        data = self._make_request(
            "teams/statistics",
            {"team": team_id, "league": league_id, "season": season},
        )
        response = data.get("response") if isinstance(data, dict) else None
        if not isinstance(response, dict) or not response:
            return None
        return response

    # ===== MATCH DETAILS =====

    def list_injuries(self, fixture_id: int) -> List[Dict[str, Any]]:
        """Get injury records for a fixture, each tagged with its team."""
        return self._response_list("injuries", {"fixture": fixture_id})

    def list_lineups(self, fixture_id: int) -> List[Dict[str, Any]]:
        """Get lineup records for a fixture (empty until lineups are announced)."""
        return self._response_list("fixtures/lineups", {"fixture": fixture_id})

    # ===== DIAGNOSTICS =====

    def check_status(self) -> Dict[str, Any]:
        """
        Probe the provider's status endpoint.

        Never raises; failures are reported in the returned dict.
        """
        try:
            self._make_request("status")
        except UpstreamUnavailable as e:
            return {
                "ok": False,
                "status_http": e.status_code or 0,
                "error_detail": e.detail or str(e),
            }
        return {"ok": True, "status_http": 200, "error_detail": None}
