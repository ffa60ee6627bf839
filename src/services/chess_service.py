"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

from contextlib import contextmanager
from typing import Generator, Optional
from uuid import UUID

from loguru import logger

from src.api.models import (
    CancelGameRequest,
    CreateGameRequest,
    DeleteGameRequest,
    GameIdResponse,
    GameResponse,
    GetGameRequest,
    JoinGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRecordResponse,
    MoveRequest,
    MoveResponse,
    MyGamesRequest,
    PieceResponse,
    PlayerResponse,
    SquareResponse,
)
from src.chess.game import Game
from src.chess.square import BOARD_SIZE, Square
from src.core.config import Settings, get_settings
from src.core.exceptions import (
    GameError,
    PlayerNotFoundError,
    RepositoryError,
    UnauthenticatedError,
)
from src.core.models import GameModel, Player, PlayerId
from src.core.shared_types import Color, Status
from src.db.repository import GameRepository, StoredGame
from src.services.collaborators import (
    LoggingNotificationSink,
    NotificationSink,
    PlayerDirectory,
)
from src.services.locks import GameLocks

# Shared by all service instances in this process (ex. one service per request)
GAME_LOCKS = GameLocks()


class ChessService:
    """Orchestration of layers for chess game."""

    def __init__(
        self,
        repository: GameRepository,
        players: PlayerDirectory,
        notifications: Optional[NotificationSink] = None,
        settings: Optional[Settings] = None,
        locks: Optional[GameLocks] = None,
    ) -> None:
        self.repo = repository
        self.players = players
        self.notifications = notifications or LoggingNotificationSink()
        self.settings = settings or get_settings()
        self.locks = locks or GAME_LOCKS

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameIdResponse:
        """A player requested to create a new game (optionally inviting a specific opponent)."""
        player = self._authenticate(request.token)

        invited: Optional[Player] = None
        if request.invited_player_id is not None:
            invited = self.players.get_player(request.invited_player_id)
            if invited is None:
                raise PlayerNotFoundError(
                    f"Invited player {request.invited_player_id} not found."
                )

        # Create a new Game, and store it as a GameModel in the repository
        new_game = Game.new_game(
            creator=player.id, invited_player=invited.id if invited else None
        )
        _, game_id = self.repo.create_game(new_game.to_model())
        logger.info(f"Game {game_id} created by {player.id}")

        if invited is not None:
            self._notify_invite(game_id, invited, player)
        return GameIdResponse(game_id=game_id)

    def join_game(self, request: JoinGameRequest) -> GameIdResponse:
        """Second player requested to join a game."""
        player = self._authenticate(request.token)

        with self._mutating("join", request.game_id):
            game = self._load_game(request.game_id)
            game.join(player.id)
            self._store_game(request.game_id, game)

        logger.info(f"Player {player.id} joined game {request.game_id}")
        return GameIdResponse(game_id=request.game_id)

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """Make a move attempt."""
        player = self._authenticate(request.token)
        from_square = Square(request.from_row, request.from_col)
        to_square = Square(request.to_row, request.to_col)

        with self._mutating("move", request.game_id):
            game = self._load_game(request.game_id)
            outcome = game.make_move(player.id, from_square, to_square)
            self._store_game(request.game_id, game)

        logger.info(
            f"Game {request.game_id}: {player.id} played {from_square.to_algebraic()}{to_square.to_algebraic()}"
            f" (check={outcome.is_check}, checkmate={outcome.is_checkmate})"
        )
        if outcome.is_checkmate:
            logger.info(f"Game {request.game_id} won by {player.id}")
            self.locks.discard(request.game_id)
        return MoveResponse(
            is_check=outcome.is_check, is_checkmate=outcome.is_checkmate
        )

    def cancel_game(self, request: CancelGameRequest) -> None:
        """One of the participants calls off the game."""
        player = self._authenticate(request.token)

        with self._mutating("cancel", request.game_id):
            game = self._load_game(request.game_id)
            game.cancel(player.id)
            self._store_game(request.game_id, game)

        logger.info(f"Game {request.game_id} cancelled by {player.id}")
        self.locks.discard(request.game_id)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves."""
        player = self._authenticate(request.token)
        game = self._load_game(request.game_id)

        # Compute legal moves
        legal_moves = game.legal_moves(player.id)
        color = game.player_color(player.id)
        assert color is not None  # for the type checker: legal_moves() only answers participants
        return LegalMovesResponse(
            game_id=request.game_id,
            player_id=player.id,
            color=color,
            legal_moves=legal_moves,
        )

    def get_game(self, request: GetGameRequest) -> Optional[GameResponse]:
        """
        Retrieve current game state (or None if there is no such game).
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        game_model = self.repo.get_game(request.game_id)
        if game_model is None:
            return None
        return self._create_game_response(request.game_id, game_model)

    def list_active_games(self) -> list[GameResponse]:
        """Games still waiting for a second player, newest first."""
        stored_games = self.repo.list_games_by_status(
            Status.WAITING, limit=self.settings.active_games_limit
        )
        return [self._create_game_response(game_id, model) for game_id, model in stored_games]

    def list_my_games(self, request: MyGamesRequest) -> list[GameResponse]:
        """
        All games the caller plays in (as either color), newest first.
        An anonymous / unknown caller simply has no games.
        """
        if not request.token:
            return []
        player = self.players.resolve(request.token)
        if player is None:
            return []

        per_role = self.settings.games_per_role_limit
        as_white = self.repo.list_games_by_player(player.id, Color.WHITE, limit=per_role)
        as_black = self.repo.list_games_by_player(player.id, Color.BLACK, limit=per_role)
        stored_games = self._newest_first(as_white + as_black)
        return [
            self._create_game_response(game_id, model)
            for game_id, model in stored_games[: self.settings.my_games_limit]
        ]

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        with self.locks.hold(request.game_id):
            self.repo.delete_game(request.game_id)
        self.locks.discard(request.game_id)

    # -- Internal helpers --
    def _authenticate(self, token: Optional[str]) -> Player:
        """Who is calling? Raise if nobody (or nobody we know)."""
        if not token:
            raise UnauthenticatedError("You must be logged in.")
        player = self.players.resolve(token)
        if player is None:
            raise PlayerNotFoundError("Player not found.")
        return player

    def _notify_invite(self, game_id: UUID, invited: Player, inviter: Player) -> None:
        """The game is stored already: a failing notification is logged, not reported to the creator."""
        try:
            self.notifications.notify(
                invited.id,
                f"{inviter.display_name} invited you to a game of chess",
                actor=inviter.id,
            )
        except Exception:
            logger.exception(f"Could not notify {invited.id} about game {game_id}")

    @contextmanager
    def _mutating(self, action: str, game_id: UUID) -> Generator[None, None, None]:
        """Hold the game's lock for the whole read-modify-write, and log rejected requests."""
        with self.locks.hold(game_id):
            try:
                yield
            except GameError as error:
                logger.warning(f"Rejected {action} on game {game_id}: [{error.code}] {error.message}")
                raise

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model

    def _load_game(self, game_id: UUID) -> Game:
        return Game.from_model(self._fetch_game(game_id))

    def _store_game(self, game_id: UUID, game: Game) -> None:
        if self.repo.update_game(game_id, game.to_model()) is None:
            raise RepositoryError(f"Game with {game_id=} not found.")

    def _newest_first(self, stored_games: list[StoredGame]) -> list[StoredGame]:
        return sorted(stored_games, key=lambda stored: stored[1].started_at, reverse=True)

    def _player_response(self, player_id: Optional[PlayerId]) -> Optional[PlayerResponse]:
        if player_id is None:
            return None
        player = self.players.get_player(player_id)
        if player is None:
            return None
        return PlayerResponse(id=player.id, display_name=player.display_name)

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        game = Game.from_model(model)
        board = [
            [
                PieceResponse(kind=piece.kind, color=piece.color, has_moved=piece.has_moved)
                if (piece := game.board.get(row, col)) is not None
                else None
                for col in range(BOARD_SIZE)
            ]
            for row in range(BOARD_SIZE)
        ]
        move_history = [
            MoveRecordResponse(
                from_square=SquareResponse(row=record.from_square.row, col=record.from_square.col),
                to_square=SquareResponse(row=record.to_square.row, col=record.to_square.col),
                piece=record.piece,
                captured=record.captured,
                is_check=record.is_check,
                is_checkmate=record.is_checkmate,
            )
            for record in game.moves
        ]
        return GameResponse(
            game_id=game_id,
            player1=self._player_response(game.player1),
            player2=self._player_response(game.player2),
            invited_player_id=game.invited_player,
            board=board,
            fen_state=model.board,
            current_turn=game.current_turn,
            move_history=move_history,
            is_check=game.is_check,
            is_checkmate=game.is_checkmate,
            status=game.status,
            winner_id=game.winner,
            started_at=game.started_at,
            completed_at=game.completed_at,
        )
