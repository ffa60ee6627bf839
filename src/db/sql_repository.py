"""Implementation of (Game)Repository using SQLAlchemy"""

from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from src.core.exceptions import StaleGameError
from src.core.models import GameModel, PlayerId
from src.core.shared_types import Color
from src.db.repository import StoredGame
from src.db.schema import DBGame


class SQLGameRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""

        new_id = uuid4()
        game_db = DBGame(id=new_id, version=0, **self._column_values(game))
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """
        Add new info to existing record.
        ----
        Compare-and-set on the version: the row is only written if it still holds the version `game` was read at.
        A concurrent writer that got there first makes this raise StaleGameError (and nothing is written).
        """
        query = (
            update(DBGame)
            .where(DBGame.id == game_id)
            .where(DBGame.version == game.version)
            .values(**self._column_values(game), version=game.version + 1)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(query)
        if result.rowcount == 0:
            self.db.rollback()
            if self.db.scalar(select(DBGame.id).where(DBGame.id == game_id)) is None:
                return None
            raise StaleGameError(f"Game {game_id} was changed by another request. Please try again.")

        self.db.commit()
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(game_id, for_update=True)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def list_games_by_status(self, status: str, limit: int) -> list[StoredGame]:
        query = (
            select(DBGame)
            .where(DBGame.status == status)
            .order_by(DBGame.started_at.desc())
            .limit(limit)
        )
        return [(game_db.id, self._to_model(game_db)) for game_db in self.db.scalars(query)]

    def list_games_by_player(
        self, player_id: PlayerId, color: str, limit: int
    ) -> list[StoredGame]:
        # player1 always has the white pieces, player2 the black ones
        column = DBGame.player1 if color == Color.WHITE else DBGame.player2
        query = (
            select(DBGame)
            .where(column == player_id)
            .order_by(DBGame.started_at.desc())
            .limit(limit)
        )
        return [(game_db.id, self._to_model(game_db)) for game_db in self.db.scalars(query)]

    def _fetch_game(self, game_id: UUID, for_update: bool = False) -> DBGame | None:
        """NOTE: for_update locks the row until commit on databases that support it (no-op on SQLite)."""
        query = select(DBGame).where(DBGame.id == game_id)
        if for_update:
            query = query.with_for_update()
        return self.db.scalar(query)

    def _column_values(self, game: GameModel) -> dict[str, Any]:
        """All GameModel fields as column values (new lists, so the JSON columns register the change). Version is the repository's business."""
        return {
            "player1": game.player1,
            "player2": game.player2,
            "invited_player": game.invited_player,
            "board": game.board,
            "moved_squares": list(game.moved_squares),
            "move_history": [dict(record) for record in game.move_history],
            "current_turn": game.current_turn,
            "is_check": game.is_check,
            "is_checkmate": game.is_checkmate,
            "status": game.status,
            "winner": game.winner,
            "started_at": game.started_at,
            "completed_at": game.completed_at,
        }

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            player1=game_db.player1,
            board=game_db.board,
            current_turn=game_db.current_turn,
            status=game_db.status,
            started_at=game_db.started_at,
            player2=game_db.player2,
            invited_player=game_db.invited_player,
            moved_squares=list(game_db.moved_squares),
            move_history=[dict(record) for record in game_db.move_history],
            is_check=game_db.is_check,
            is_checkmate=game_db.is_checkmate,
            winner=game_db.winner,
            completed_at=game_db.completed_at,
            version=game_db.version,
        )
