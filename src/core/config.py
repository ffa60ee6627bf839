"""Application settings, read from environment variables prefixed with CHESS_ (ex. CHESS_DATABASE_URL)."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite:///./chess.db"
    sql_echo: bool = False
    log_level: str = "INFO"

    # Bounds on the read-only listings
    active_games_limit: int = Field(default=50, gt=0)
    my_games_limit: int = Field(default=50, gt=0)
    games_per_role_limit: int = Field(default=25, gt=0)

    model_config = SettingsConfigDict(env_prefix="CHESS_")


@lru_cache
def get_settings() -> Settings:
    return Settings()
