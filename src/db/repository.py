"""Protocol repository (implemented with SQLAlchemy in sql_repository.py, and with a dictionary in the tests)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel, PlayerId

StoredGame = tuple[UUID, GameModel]


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """
        Add new info to existing record, unless it changed since `game` was read (its version no longer matches).
        Raise StaleGameError in that case. Return None if the record does not exist.
        """
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        ...

    def list_games_by_status(self, status: str, limit: int) -> list[StoredGame]:
        """Newest games first."""
        ...

    def list_games_by_player(
        self, player_id: PlayerId, color: str, limit: int
    ) -> list[StoredGame]:
        """Newest games first, in which the player plays the pieces of the given color."""
        ...
