"""Unit tests for src/core/config.py"""

import pytest
from pydantic import ValidationError

from src.core.config import Settings, get_settings

SETTINGS_VARIABLES = [
    "CHESS_DATABASE_URL",
    "CHESS_SQL_ECHO",
    "CHESS_LOG_LEVEL",
    "CHESS_ACTIVE_GAMES_LIMIT",
    "CHESS_MY_GAMES_LIMIT",
    "CHESS_GAMES_PER_ROLE_LIMIT",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make sure the machine running the tests does not leak its own CHESS_* settings in."""
    for variable in SETTINGS_VARIABLES:
        monkeypatch.delenv(variable, raising=False)


def test_defaults() -> None:
    settings = Settings()
    assert settings.database_url == "sqlite:///./chess.db"
    assert settings.sql_echo is False
    assert settings.log_level == "INFO"
    assert settings.active_games_limit == 50
    assert settings.my_games_limit == 50
    assert settings.games_per_role_limit == 25


def test_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHESS_DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("CHESS_SQL_ECHO", "true")
    monkeypatch.setenv("CHESS_ACTIVE_GAMES_LIMIT", "10")
    monkeypatch.setenv("ACTIVE_GAMES_LIMIT", "3")  # no prefix, ignored

    settings = Settings()
    assert settings.database_url == "sqlite:///:memory:"
    assert settings.sql_echo is True
    assert settings.active_games_limit == 10
    assert settings.games_per_role_limit == 25


def test_limits_must_be_positive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHESS_MY_GAMES_LIMIT", "0")
    with pytest.raises(ValidationError):
        Settings()


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()
