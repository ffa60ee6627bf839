"""Unit tests for src/db/sql_players.py"""

from uuid import uuid4

from sqlalchemy.orm import Session

from src.core.models import Player
from src.db.sql_players import ANONYMOUS_DISPLAY_NAME, SQLPlayerDirectory


def test_register_and_resolve(db_session_repo: Session) -> None:
    directory = SQLPlayerDirectory(db_session_repo)
    player = directory.register_player("token-alice", name="Alice Liddell", username="alice")

    assert isinstance(player, Player)
    assert directory.resolve("token-alice") == player
    assert directory.get_player(player.id) == player


def test_unknown_player(db_session_repo: Session) -> None:
    directory = SQLPlayerDirectory(db_session_repo)
    assert directory.resolve("nobody") is None
    assert directory.get_player(uuid4()) is None


def test_display_name_fallbacks(db_session_repo: Session) -> None:
    """Full name, then username, then a generic name."""
    directory = SQLPlayerDirectory(db_session_repo)
    full_name = directory.register_player("t1", name="Bob Fischer", username="bobby")
    username = directory.register_player("t2", username="magnus")
    anonymous = directory.register_player("t3")

    assert full_name.display_name == "Bob Fischer"
    assert username.display_name == "magnus"
    assert anonymous.display_name == ANONYMOUS_DISPLAY_NAME
