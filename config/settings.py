"""Configuration management using pydantic-settings."""
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API-Football configuration
    af_api_key: Optional[str] = None  # AF_API_KEY
    api_football_base_url: str = "https://v3.football.api-sports.io"
    request_timeout_seconds: float = 30.0

    # Freshness windows per cache kind
    ttl_day_seconds: int = 600              # 10 minutes
    ttl_leagues_seconds: int = 900          # 15 minutes
    ttl_injuries_seconds: int = 1800        # 30 minutes
    ttl_lineups_seconds: int = 1800         # 30 minutes
    ttl_team_stats_seconds: int = 86400     # 24 hours

    # Prediction model
    injury_weight: float = 0.08   # Impact per injured player
    max_goals: int = 10           # Scorelines enumerated per side: 0..max_goals
    lambda_floor: float = 0.1

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
