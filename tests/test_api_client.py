"""
Tests for the API-Football client using a mocked requests session.
"""
from unittest.mock import MagicMock

import pytest
import requests

from app.api_client import ApiFootballClient
from app.errors import UpstreamUnavailable
from config.settings import Settings


def _response(payload=None, status=200):
    response = MagicMock()
    response.status_code = status
    response.json.return_value = payload
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status} Error", response=response
        )
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(session):
    return ApiFootballClient(Settings(af_api_key=" key-123 ", request_timeout_seconds=5), session=session)


def test_list_fixtures_sends_key_and_filters(api, session):
    session.get.return_value = _response({"response": [{"fixture": {"id": 1}}]})

    fixtures = api.list_fixtures(from_date="2024-04-30", to_date="2024-05-02")

    assert fixtures == [{"fixture": {"id": 1}}]
    args, kwargs = session.get.call_args
    assert args[0] == "https://v3.football.api-sports.io/fixtures"
    assert kwargs["headers"] == {"x-apisports-key": "key-123"}
    assert kwargs["params"] == {"from": "2024-04-30", "to": "2024-05-02"}
    assert kwargs["timeout"] == 5


def test_missing_response_list_is_empty(api, session):
    session.get.return_value = _response({"errors": {"token": "invalid"}})
    assert api.list_injuries(10) == []


def test_team_statistics_absent(api, session):
    session.get.return_value = _response({"response": []})
    assert api.get_team_statistics(40, 39, 2023) is None


def test_http_error_raises_upstream_unavailable(api, session):
    session.get.return_value = _response(status=429)
    with pytest.raises(UpstreamUnavailable) as exc_info:
        api.list_lineups(10)
    assert exc_info.value.status_code == 429


def test_network_error_raises_upstream_unavailable(api, session):
    session.get.side_effect = requests.ConnectionError("connection refused")
    with pytest.raises(UpstreamUnavailable):
        api.list_fixtures(date="2024-05-01")


def test_check_status_never_raises(api, session):
    session.get.return_value = _response(status=403)
    status = api.check_status()
    assert status["ok"] is False
    assert status["status_http"] == 403

    session.get.return_value = _response({"response": {"account": {}}})
    assert api.check_status() == {"ok": True, "status_http": 200, "error_detail": None}
