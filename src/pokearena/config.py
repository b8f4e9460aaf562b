"""Lightweight configuration for the Pokearena service."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from the environment or ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="POKEARENA_"
    )

    pokeapi_base_url: str = Field(
        default="https://pokeapi.co/api/v2", description="Root of the public creature API"
    )
    http_timeout_seconds: float = Field(
        default=10.0, description="Timeout applied to every upstream request", gt=0.0
    )
    database_url: str = Field(
        default="sqlite:///pokearena.db", description="SQLAlchemy URL for roster and history"
    )
    database_echo: bool = Field(default=False, description="Echo SQL statements to the log")
    page_size: int = Field(default=10, description="Creatures per catalog page", ge=1)
    max_pages: int = Field(
        default=60, description="Catalog pages exposed to clients (600 creatures)", ge=1
    )
    roster_max_size: int = Field(default=6, description="Maximum roster entries", ge=1)
    random_pool_max_id: int = Field(
        default=151, description="Highest catalog id drawn for random opponents", ge=1
    )
    enemy_team_size: int = Field(default=6, description="Size of a generated enemy team", ge=1)
    history_limit: int = Field(
        default=50, description="Default number of battle records returned", ge=1
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )
    log_level: str = Field(default="INFO", description="Root log level")


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
