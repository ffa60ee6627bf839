"""Unit tests for src/db/sql_repository.py"""

from dataclasses import replace
from datetime import datetime, timedelta
from pathlib import Path
from uuid import UUID, uuid4

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from src.chess.fen import STARTING_POSITION
from src.core.exceptions import StaleGameError
from src.core.models import GameModel
from src.core.shared_types import Color, Status
from src.db.schema import Base
from src.db.sql_repository import SQLGameRepository

# NOTE: SQLite drops the timezone of a datetime, so naive datetimes make the comparisons below exact.
STARTED_AT = datetime(2024, 5, 1, 12, 0, 0)
WHITE = UUID("00000000-0000-0000-0000-00000000000a")
BLACK = UUID("00000000-0000-0000-0000-00000000000b")


def make_model(**overrides: object) -> GameModel:
    """Mock game data"""
    fields: dict[str, object] = dict(
        player1=WHITE,
        player2=BLACK,
        board="rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR",
        current_turn=Color.BLACK.value,
        status=Status.IN_PROGRESS.value,
        started_at=STARTED_AT,
        moved_squares=["e4"],
        move_history=[
            {
                "from": {"row": 6, "col": 4},
                "to": {"row": 4, "col": 4},
                "piece": "pawn",
                "captured": None,
                "is_check": False,
                "is_checkmate": False,
            }
        ],
    )
    fields.update(overrides)
    return GameModel(**fields)  # type: ignore[arg-type]


def test_create_game(db_session_repo: Session) -> None:
    """Conversion from a GameModel to DBGame for a new entry to the database."""
    model = make_model()
    repo = SQLGameRepository(db_session_repo)
    record_in_db, game_id = repo.create_game(model)

    assert isinstance(record_in_db, GameModel)
    assert isinstance(game_id, UUID)
    assert record_in_db == model


def test_get_game_by_id(db_session_repo: Session) -> None:
    """Create a game, then fetch it from db."""
    repo = SQLGameRepository(db_session_repo)
    expected_game, game_id = repo.create_game(make_model())
    game_found = repo.get_game(game_id)
    assert isinstance(game_found, GameModel)
    assert game_found == expected_game


def test_get_unknown_game(db_session_repo: Session) -> None:
    """
    Should return None if ID does not match anything in database.

    NOTE with an empty database, any id is a valid test case.
    """
    repo = SQLGameRepository(db_session_repo)
    assert repo.get_game(uuid4()) is None

    # Now do it with creating a game, but retrieving from the wrong ID
    repo.create_game(make_model())
    assert repo.get_game(uuid4()) is None


def test_update_game(db_session_repo: Session) -> None:
    """Update an earlier created record."""
    repo = SQLGameRepository(db_session_repo)
    waiting = make_model(
        player2=None,
        board=STARTING_POSITION,
        current_turn="white",
        status="waiting",
        moved_squares=[],
        move_history=[],
    )
    _, game_id = repo.create_game(waiting)

    updated = make_model(is_check=True)
    record_in_db = repo.update_game(game_id, updated)
    assert record_in_db == replace(updated, version=1)
    assert repo.get_game(game_id) == record_in_db

    # the stored version is what the next update has to present
    assert repo.update_game(game_id, record_in_db) == replace(updated, version=2)


def test_stale_update_is_rejected(tmp_path: Path) -> None:
    """Two sessions read the same game; the one writing second must not overwrite the first."""
    engine = create_engine(f"sqlite:///{tmp_path / 'chess.db'}")
    Base.metadata.create_all(bind=engine)
    first_session, second_session = Session(engine), Session(engine)
    try:
        first, second = SQLGameRepository(first_session), SQLGameRepository(second_session)
        _, game_id = first.create_game(make_model())

        read_by_first = first.get_game(game_id)
        read_by_second = second.get_game(game_id)
        assert read_by_first is not None and read_by_second is not None

        reply = {
            "from": {"row": 1, "col": 4},
            "to": {"row": 3, "col": 4},
            "piece": "pawn",
            "captured": None,
            "is_check": False,
            "is_checkmate": False,
        }
        first.update_game(
            game_id, replace(read_by_first, move_history=read_by_first.move_history + [reply])
        )
        with pytest.raises(StaleGameError):
            second.update_game(
                game_id, replace(read_by_second, move_history=read_by_second.move_history + [reply])
            )

        stored = second.get_game(game_id)
        assert stored is not None
        assert stored.version == 1
        assert len(stored.move_history) == 2
    finally:
        first_session.close()
        second_session.close()
        engine.dispose()


def test_update_unknown_game(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    assert repo.update_game(uuid4(), make_model()) is None


def test_finished_game_fields(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    finished = make_model(
        status=Status.COMPLETED.value,
        is_check=True,
        is_checkmate=True,
        winner=BLACK,
        completed_at=STARTED_AT + timedelta(minutes=5),
    )
    _, game_id = repo.create_game(finished)
    assert repo.get_game(game_id) == finished


def test_delete_game(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    model, game_id = repo.create_game(make_model())

    deleted = repo.delete_game(game_id)
    assert deleted == model
    assert repo.get_game(game_id) is None
    # nothing left to delete
    assert repo.delete_game(game_id) is None


def test_list_games_by_status(db_session_repo: Session) -> None:
    """Newest first, bounded by the limit, only the requested status."""
    repo = SQLGameRepository(db_session_repo)
    ids = []
    for hours in range(3):
        _, game_id = repo.create_game(
            make_model(status="waiting", player2=None, started_at=STARTED_AT + timedelta(hours=hours))
        )
        ids.append(game_id)
    repo.create_game(make_model())

    waiting = repo.list_games_by_status("waiting", limit=10)
    assert [game_id for game_id, _ in waiting] == list(reversed(ids))
    assert all(model.status == "waiting" for _, model in waiting)

    assert len(repo.list_games_by_status("waiting", limit=2)) == 2
    assert repo.list_games_by_status("cancelled", limit=10) == []


def test_list_games_by_player(db_session_repo: Session) -> None:
    """player1 plays white, player2 plays black."""
    repo = SQLGameRepository(db_session_repo)
    _, white_game = repo.create_game(make_model())
    _, black_game = repo.create_game(
        make_model(player1=uuid4(), player2=WHITE, started_at=STARTED_AT + timedelta(hours=1))
    )

    as_white = repo.list_games_by_player(WHITE, Color.WHITE, limit=10)
    as_black = repo.list_games_by_player(WHITE, Color.BLACK, limit=10)
    assert [game_id for game_id, _ in as_white] == [white_game]
    assert [game_id for game_id, _ in as_black] == [black_game]
    assert repo.list_games_by_player(BLACK, Color.WHITE, limit=10) == []
