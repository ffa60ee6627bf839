"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

# Type aliases to make GameModel easier to read
PlayerId = UUID
BoardPlacement = str  # FEN piece placement, ex. "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
AlgebraicSquare = str  # ex. "e2"
MoveRecordData = dict[str, Any]


@dataclass
class GameModel:
    """Transport-safe representation of a chess game used between API, Service, DB, and Game layers."""

    player1: PlayerId
    board: BoardPlacement
    current_turn: str
    status: str
    started_at: datetime
    player2: Optional[PlayerId] = None
    invited_player: Optional[PlayerId] = None
    moved_squares: list[AlgebraicSquare] = field(default_factory=list)
    move_history: list[MoveRecordData] = field(default_factory=list)
    is_check: bool = False
    is_checkmate: bool = False
    winner: Optional[PlayerId] = None
    completed_at: Optional[datetime] = None
    version: int = 0  # bumped by the repository on every stored update


@dataclass(frozen=True)
class Player:
    """A resolved identity, as handed out by the player directory."""

    id: PlayerId
    display_name: str
