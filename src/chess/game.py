"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of the board game -->
passes this information to the service layer, which can then pass it onwards to the API layer.

Lifecycle: waiting --(second player joins)--> in_progress --(checkmate)--> completed
                   \\-------------------------(cancel)-----------------> cancelled
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Self

from src.chess.attacks import is_in_check, simulate_move
from src.chess.board import Board, initial_board
from src.chess.checkmate import generate_legal_moves, is_checkmate
from src.chess.moves import Move, MoveRecord, is_legal_move
from src.chess.square import Square
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    NotAParticipantError,
    NotInvitedError,
    NotYourTurnError,
    SelfCheckError,
    SelfPlayError,
)
from src.core.models import GameModel, PlayerId
from src.core.shared_types import TERMINAL_STATUSES, Color, Status


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class MoveOutcome:
    """Everything an accepted move changes about the game (besides the board itself)."""

    record: MoveRecord
    next_turn: Color
    is_check: bool
    is_checkmate: bool
    winner: Optional[PlayerId] = None


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    player1: PlayerId  # always plays white
    board: Board
    current_turn: Color
    status: Status
    started_at: datetime
    player2: Optional[PlayerId] = None  # always plays black
    invited_player: Optional[PlayerId] = None
    moves: list[MoveRecord] = field(default_factory=list)
    is_check: bool = False
    is_checkmate: bool = False
    winner: Optional[PlayerId] = None
    completed_at: Optional[datetime] = None
    version: int = 0

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if model.status not in {status.value for status in Status}:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(status.value for status in Status)}"
            )
        if model.current_turn not in {color.value for color in Color}:
            raise GameStateError(f"Invalid color to move: {model.current_turn!r}")

        # create the Game
        return cls(
            player1=model.player1,
            board=Board.from_fen(model.board, model.moved_squares),
            current_turn=Color(model.current_turn),
            status=Status(model.status),
            started_at=model.started_at,
            player2=model.player2,
            invited_player=model.invited_player,
            moves=[MoveRecord.from_dict(data) for data in model.move_history],
            is_check=model.is_check,
            is_checkmate=model.is_checkmate,
            winner=model.winner,
            completed_at=model.completed_at,
            version=model.version,
        )

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""

        return GameModel(
            player1=self.player1,
            board=self.board.to_fen(),
            current_turn=self.current_turn.value,
            status=self.status.value,
            started_at=self.started_at,
            player2=self.player2,
            invited_player=self.invited_player,
            moved_squares=self.board.moved_squares(),
            move_history=[record.to_dict() for record in self.moves],
            is_check=self.is_check,
            is_checkmate=self.is_checkmate,
            winner=self.winner,
            completed_at=self.completed_at,
            version=self.version,
        )

    @classmethod
    def new_game(
        cls, creator: PlayerId, invited_player: Optional[PlayerId] = None
    ) -> Self:
        """The creator always gets the white pieces. If a player is invited, only that player may join."""
        return cls(
            player1=creator,
            board=initial_board(),
            current_turn=Color.WHITE,
            status=Status.WAITING,
            started_at=utc_now(),
            invited_player=invited_player,
        )

    @property
    def players(self) -> dict[Color, PlayerId]:
        players = {Color.WHITE: self.player1}
        if self.player2 is not None:
            players[Color.BLACK] = self.player2
        return players

    @property
    def is_finished(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def winner_color(self) -> Optional[Color]:
        if self.winner is None:
            return None
        return self.player_color(self.winner)

    def player_color(self, player: PlayerId) -> Optional[Color]:
        return next(
            (color for color, participant in self.players.items() if participant == player),
            None,
        )

    def join(self, player: PlayerId) -> None:
        """Registering the 2nd player (black pieces) to an open game"""
        if self.status != Status.WAITING:
            raise GameStateError(
                f"Cannot join this game. Game is not accepting new players. status: {self.status}"
            )

        if player == self.player1:
            raise SelfPlayError("Cannot join your own game.")

        if self.invited_player is not None and player != self.invited_player:
            raise NotInvitedError("Only the invited player can join this game.")

        self.player2 = player
        self._change_status(Status.IN_PROGRESS)

    def legal_moves(self, player: PlayerId) -> list[str]:
        """
        Service will request the set of legal moves.
        ----

        1. Check if it is your turn
        2. Yes? Generate legal moves and return a list of moves (UCI notation).
        """
        self._assert_in_progress()
        player_color = self._assert_participant(player)
        self._assert_your_turn(player_color)
        return [move.to_uci() for move in generate_legal_moves(self.board, player_color)]

    def make_move(
        self, player: PlayerId, from_square: Square, to_square: Square
    ) -> MoveOutcome:
        """
        Attempt to make a move
        -----

        1. make sure the game is in progress, the player takes part in it and it is their turn
        2. make sure the move is legal: own piece, movement rules, and not leaving your own king in check
        3. play the move on a copy of the board, and see if it checks / checkmates the opponent
        4. commit: board, move history, turn, check flags, and (on checkmate) game status + winner

        Nothing changes before step 4, so a rejected move leaves the game exactly as it was.
        """
        self._assert_in_progress()
        player_color = self._assert_participant(player)
        self._assert_your_turn(player_color)

        move = Move(from_square, to_square)
        self._assert_legal(move, player_color)

        # play the move on a copy. Refuse if it exposes your own king.
        moving_piece = self.board.piece(from_square)
        captured_piece = self.board.piece(to_square)
        board_after = simulate_move(self.board, move)
        if is_in_check(board_after, player_color):
            raise SelfCheckError(
                f"Move not allowed: {move.to_uci()} leaves your king in check."
            )

        # effect on the opponent
        opponent_color = player_color.opponent
        gives_check = is_in_check(board_after, opponent_color)
        gives_checkmate = gives_check and is_checkmate(board_after, opponent_color)

        assert moving_piece is not None  # for the type checker: verified by _assert_legal
        outcome = MoveOutcome(
            record=MoveRecord(
                from_square=from_square,
                to_square=to_square,
                piece=moving_piece.kind,
                captured=captured_piece.kind if captured_piece else None,
                is_check=gives_check,
                is_checkmate=gives_checkmate,
            ),
            next_turn=opponent_color,
            is_check=gives_check,
            is_checkmate=gives_checkmate,
            winner=player if gives_checkmate else None,
        )
        self._apply(board_after, outcome)
        return outcome

    def cancel(self, player: PlayerId) -> None:
        """Either participant may call off a game, as long as it has not ended yet."""
        self._assert_participant(player)
        if self.is_finished:
            raise GameStateError(f"Game already ended. status: {self.status}")

        self._change_status(Status.CANCELLED)
        self.completed_at = utc_now()

    # -- PRIVATE HELPERS ---
    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _assert_participant(self, player: PlayerId) -> Color:
        player_color = self.player_color(player)
        if player_color is None:
            raise NotAParticipantError("You are not playing in this game.")
        return player_color

    def _assert_your_turn(self, player_color: Color) -> None:
        """You must wait for your turn before calculating legal moves / making a move."""
        if player_color != self.current_turn:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {self.current_turn} to make a move first."
            )

    def _assert_legal(self, move: Move, player_color: Color) -> None:
        """Every check that only needs the current board (self-check requires playing the move first)."""
        if not (move.from_square.is_within_bounds() and move.to_square.is_within_bounds()):
            raise IllegalMoveError(f"Square outside of the board: {move}")

        piece = self.board.piece(move.from_square)
        if piece is None:
            raise IllegalMoveError(
                f"There is no piece on {move.from_square.to_algebraic()}."
            )

        if piece.color != player_color:
            raise IllegalMoveError(
                f"The piece on {move.from_square.to_algebraic()} does not belong to you."
            )

        if not is_legal_move(self.board, move.from_square, move.to_square):
            raise IllegalMoveError(f"Move not allowed: {move.to_uci()}")

    def _apply(self, board_after: Board, outcome: MoveOutcome) -> None:
        """Commit an accepted move."""
        self.board = board_after
        self.moves.append(outcome.record)
        self.current_turn = outcome.next_turn
        self.is_check = outcome.is_check
        self.is_checkmate = outcome.is_checkmate
        if outcome.is_checkmate:
            self.winner = outcome.winner
            self.completed_at = utc_now()
            self._change_status(Status.COMPLETED)

    def _change_status(self, new_status: Status) -> None:
        self.status = new_status
