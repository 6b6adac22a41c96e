"""
Fixture Forecast - Main FastAPI Application
Day fixtures, league summaries, fixture details and outcome predictions
built on API-Football data with per-kind freshness caching.
"""
import logging
from typing import Optional

from fastapi import APIRouter, FastAPI, HTTPException, Query, Request

from app.api_client import ApiFootballClient
from app.cache import CacheManager, ttl_config_from_settings
from app.errors import FixtureNotFound, InvalidDate
from app.fixtures import FixtureAggregator
from app.prediction import PredictionEngine
from config.settings import Settings, settings as default_settings

# Version tracking
APP_VERSION = "v1.0.0"
APP_NAME = "Fixture Forecast"

logger = logging.getLogger("main")

router = APIRouter()


def create_app(
    settings: Optional[Settings] = None,
    client: Optional[ApiFootballClient] = None,
    cache: Optional[CacheManager] = None,
) -> FastAPI:
    """
    Build the application and its services.

    One cache is created here and shared by the aggregator and the
    prediction engine. Tests pass their own client and cache.
    """
    settings = settings or default_settings
    logging.basicConfig(level=settings.log_level.upper())

    client = client or ApiFootballClient(settings)
    cache = cache or CacheManager(ttl_config=ttl_config_from_settings(settings))

    application = FastAPI(
        title=APP_NAME,
        description="Match outcome estimates from API-Football team statistics",
        version=APP_VERSION,
    )
    application.state.settings = settings
    application.state.client = client
    application.state.cache = cache
    application.state.aggregator = FixtureAggregator(client, cache)
    application.state.engine = PredictionEngine(client, cache, settings)

    application.include_router(router)

    logger.info(
        f"{APP_NAME} {APP_VERSION} ready "
        f"(upstream {settings.api_football_base_url}, "
        f"API key {'set' if settings.af_api_key else 'missing'})"
    )
    return application


@router.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok", "source": "api-football"}


@router.get("/version")
def version_info():
    """Version information endpoint."""
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "full": f"{APP_NAME} {APP_VERSION}",
    }


@router.get("/cache/stats")
def cache_stats(request: Request):
    """Get cache statistics."""
    return request.app.state.cache.get_stats()


@router.post("/cache/purge")
def cache_purge(request: Request):
    """Drop every expired cache entry now."""
    removed = request.app.state.cache.purge_expired()
    return {"purged": removed}


# ===== DIAGNOSTICS =====

@router.get("/api/diag")
def diagnostics(request: Request):
    """Check that the upstream provider is reachable with the configured key."""
    client = request.app.state.client
    status = client.check_status()
    return {
        "provider": "API-Sports (direct)",
        "base": client.base_url,
        **status,
    }


# ===== FIXTURES =====

@router.get("/api/leagues/{day}")
def leagues_for_day(day: str, request: Request):
    """Get the leagues with fixtures on a day (YYYY-MM-DD)."""
    try:
        return request.app.state.aggregator.get_leagues_for_day(day)
    except InvalidDate as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"leagues for {day} failed")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/api/day/{day}")
def day_view(
    day: str,
    request: Request,
    league: Optional[int] = Query(None, description="Filter by league ID"),
):
    """Get the matches on a day, optionally for one league."""
    try:
        return request.app.state.aggregator.get_day_view(day, league_id=league)
    except InvalidDate as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"day view for {day} failed")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/api/fixture/{fixture_id}/details")
def fixture_details(fixture_id: int, request: Request):
    """Get injuries and lineup confirmation for a fixture."""
    try:
        return request.app.state.aggregator.get_fixture_details(fixture_id)
    except Exception as e:
        logger.exception(f"details for fixture {fixture_id} failed")
        raise HTTPException(status_code=500, detail=str(e))


# ===== PREDICTIONS =====

@router.get("/api/predict/{fixture_id}")
def predict(fixture_id: int, request: Request):
    """Home/draw/away probabilities and pick for a fixture."""
    try:
        result = request.app.state.engine.predict(fixture_id)
    except FixtureNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception(f"prediction for fixture {fixture_id} failed")
        raise HTTPException(status_code=500, detail=str(e))
    return result.to_dict()


app = create_app()
