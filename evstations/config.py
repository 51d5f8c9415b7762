"""
Application configuration using pydantic-settings.
Loads environment variables for database, auth and CORS settings.
"""
from typing import List
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./stations.db"

    # Auth (tokens are issued by the external authentication service)
    jwt_secret: str = "change-me-please"
    jwt_algorithm: str = "HS256"

    # CORS
    allowed_origins: List[str] = [
        "https://the-charging-station.vercel.app",
        "http://localhost:3000",
    ]

    # App settings
    app_name: str = "Charging Station Directory API"
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
