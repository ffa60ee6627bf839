"""Requests and Response models"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.chess.square import BOARD_SIZE
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, PieceType, Status

# Credential of the caller as issued by the auth provider. Missing -> UNAUTHENTICATED
Token = Optional[str]


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    token: Token = None
    invited_player_id: Optional[UUID] = None


class JoinGameRequest(BaseModel):
    token: Token = None
    game_id: UUID


class MoveRequest(BaseModel):
    token: Token = None
    game_id: UUID
    from_row: int
    from_col: int
    to_row: int
    to_col: int

    @field_validator("from_row", "from_col", "to_row", "to_col")
    @classmethod
    def validate_coordinate(cls, value: int) -> int:
        if not 0 <= value < BOARD_SIZE:
            raise InvalidRequestError(
                f"Coordinate {value!r} is outside of the board (0 - {BOARD_SIZE - 1})."
            )
        return value


class CancelGameRequest(BaseModel):
    token: Token = None
    game_id: UUID


class LegalMovesRequest(BaseModel):
    token: Token = None
    game_id: UUID


class GetGameRequest(BaseModel):
    game_id: UUID


class MyGamesRequest(BaseModel):
    token: Token = None


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameIdResponse(BaseModel):
    game_id: UUID


class MoveResponse(BaseModel):
    is_check: bool
    is_checkmate: bool


class PieceResponse(BaseModel):
    kind: PieceType
    color: Color
    has_moved: bool


class SquareResponse(BaseModel):
    row: int
    col: int


class MoveRecordResponse(BaseModel):
    from_square: SquareResponse
    to_square: SquareResponse
    piece: PieceType
    captured: Optional[PieceType]
    is_check: bool
    is_checkmate: bool


class PlayerResponse(BaseModel):
    id: UUID
    display_name: str


class GameResponse(BaseModel):
    game_id: UUID
    player1: Optional[PlayerResponse]
    player2: Optional[PlayerResponse]
    invited_player_id: Optional[UUID]
    board: list[list[Optional[PieceResponse]]]
    fen_state: str
    current_turn: Color
    move_history: list[MoveRecordResponse]
    is_check: bool
    is_checkmate: bool
    status: Status
    winner_id: Optional[UUID]
    started_at: datetime
    completed_at: Optional[datetime]


class LegalMovesResponse(BaseModel):
    game_id: UUID
    player_id: UUID
    color: Color
    legal_moves: list[str]
