"""
API endpoint tests against a fake upstream client.
"""
import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from tests.conftest import make_fixture, make_stats


@pytest.fixture
def client(test_settings, fake_client, cache):
    return TestClient(create_app(test_settings, client=fake_client, cache=cache))


def test_leagues_endpoint(client, fake_client):
    fake_client.fixtures_by_date["2024-05-01"] = [make_fixture(1), make_fixture(2)]
    response = client.get("/api/leagues/2024-05-01")
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 1
    assert data["leagues"][0] == {
        "id": 39, "name": "Premier League", "country": "England", "season": 2023,
    }


def test_leagues_endpoint_rejects_bad_date(client):
    response = client.get("/api/leagues/yesterday")
    assert response.status_code == 400


def test_day_endpoint_with_league_filter(client, fake_client):
    fake_client.fixtures_by_range[("2024-04-30", "2024-05-02")] = [
        make_fixture(1, league_id=39),
        make_fixture(2, league_id=140, league_name="La Liga", country="Spain"),
    ]
    response = client.get("/api/day/2024-05-01?league=140")
    assert response.status_code == 200
    data = response.json()
    assert data["meta"]["leagueFilter"] == 140
    assert [m["match"]["id"] for m in data["matches"]] == ["2"]


def test_details_endpoint_degrades_on_upstream_failure(client, fake_client):
    fake_client.failing.update({"injuries", "lineups"})
    response = client.get("/api/fixture/77/details")
    assert response.status_code == 200
    assert response.json() == {"injuries": [], "lineupsConfirmed": False}


def test_predict_endpoint(client, fake_client):
    fake_client.fixtures_by_id[5] = make_fixture(5)
    fake_client.team_stats[40] = make_stats(for_home=2.0, against_home=1.0)
    fake_client.team_stats[50] = make_stats(for_away=1.0, against_away=1.0)

    response = client.get("/api/predict/5")
    assert response.status_code == 200
    data = response.json()
    assert data["fixtureId"] == "5"
    assert data["pick"] == "HOME"
    assert data["prob"]["home"] > data["prob"]["away"]


def test_predict_unknown_fixture_returns_404(client):
    response = client.get("/api/predict/999")
    assert response.status_code == 404


def test_predict_upstream_outage_returns_500(client, fake_client):
    fake_client.failing.add("fixture")
    response = client.get("/api/predict/5")
    assert response.status_code == 500
    assert "fixture" in response.json()["detail"]


def test_leagues_unexpected_error_returns_500(client, monkeypatch):
    def boom(day):
        raise RuntimeError("boom")

    monkeypatch.setattr(client.app.state.aggregator, "get_leagues_for_day", boom)
    response = client.get("/api/leagues/2024-05-01")
    assert response.status_code == 500
    assert response.json()["detail"] == "boom"


def test_day_unexpected_error_returns_500(client, monkeypatch):
    def boom(day, league_id=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(client.app.state.aggregator, "get_day_view", boom)
    response = client.get("/api/day/2024-05-01")
    assert response.status_code == 500
    assert response.json()["detail"] == "boom"


def test_diag_endpoint(client, fake_client):
    fake_client.failing.add("status")
    data = client.get("/api/diag").json()
    assert data["ok"] is False
    assert data["status_http"] == 503
    assert data["base"] == "https://upstream.test"


def test_cache_stats_and_purge(client, fake_client, clock):
    fake_client.fixtures_by_date["2024-05-01"] = [make_fixture(1)]
    client.get("/api/day/2024-05-01")
    assert client.get("/cache/stats").json()["entries_by_kind"]["day"] == 1

    clock.advance(601)
    assert client.post("/cache/purge").json() == {"purged": 1}
