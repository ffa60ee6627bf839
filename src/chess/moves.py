"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the movement rule of each piece type.

A move is "legal" here in the geometric sense only: right shape for the piece, nothing in the way, no capturing your own pieces.
Whether the move leaves your own king in check is decided by the attack analysis (see attacks.py).
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Self

from src.chess.board import Board
from src.chess.pieces import Piece
from src.chess.square import ALL_SQUARES, BOARD_SIZE, Square
from src.core.shared_types import Color, PieceType

Vector = tuple[int, int]


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface notation: <from_square><to_square>

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "g8f6": (knight) moves from g8 to f6
        """
        return cls(Square.from_algebraic(uci[:2]), Square.from_algebraic(uci[2:4]))

    def to_uci(self) -> str:
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"

    @property
    def delta(self) -> Vector:
        return (
            self.to_square.row - self.from_square.row,
            self.to_square.col - self.from_square.col,
        )


@dataclass(frozen=True)
class MoveRecord:
    """Entry of a game's move history. Created once the move got accepted, never changed afterwards."""

    from_square: Square
    to_square: Square
    piece: PieceType
    captured: Optional[PieceType]
    is_check: bool
    is_checkmate: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": {"row": self.from_square.row, "col": self.from_square.col},
            "to": {"row": self.to_square.row, "col": self.to_square.col},
            "piece": self.piece.value,
            "captured": self.captured.value if self.captured else None,
            "is_check": self.is_check,
            "is_checkmate": self.is_checkmate,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        captured = data.get("captured")
        return cls(
            from_square=Square(data["from"]["row"], data["from"]["col"]),
            to_square=Square(data["to"]["row"], data["to"]["col"]),
            piece=PieceType(data["piece"]),
            captured=PieceType(captured) if captured else None,
            is_check=bool(data.get("is_check", False)),
            is_checkmate=bool(data.get("is_checkmate", False)),
        )


# --- HELPERS ---
def pawn_direction(color: Color) -> int:
    """White pawns move UP the board (towards row 0), black pawns move DOWN (towards row 7)"""
    return -1 if color == Color.WHITE else 1


def pawn_starting_row(color: Color) -> int:
    return BOARD_SIZE - 2 if color == Color.WHITE else 1


def unit_step(from_square: Square, to_square: Square) -> Vector:
    """Direction to walk from one square to the other, one square at a time. Only meaningful along a line or diagonal."""

    def _sign(value: int) -> int:
        return (value > 0) - (value < 0)

    return (
        _sign(to_square.row - from_square.row),
        _sign(to_square.col - from_square.col),
    )


def is_path_clear(board: Board, from_square: Square, to_square: Square) -> bool:
    """
    Path clearance for sliding pieces
    ----

    Step from the starting square towards the target, one square at a time.
    Every square strictly in between must be empty (the target itself is judged by the capture rules).
    """
    d_row, d_col = unit_step(from_square, to_square)
    square = from_square.offset(d_row, d_col)
    while square != to_square:
        if not board.is_empty(square):
            return False
        square = square.offset(d_row, d_col)
    return True


# --- MOVEMENT RULES ---
# Every rule gets called with the piece standing on from_square, after the generic checks in `is_legal_move()` passed.
def pawn_move_is_legal(board: Board, move: Move, piece: Piece) -> bool:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - It can move by two in their first move (so when on their starting rank), if both squares are empty.
    - takes diagonally (one square forward), but only when an opponent's piece stands there.

    NOTE: No en passant, no promotion.
    """
    direction = pawn_direction(piece.color)
    d_row, d_col = move.delta
    target = board.piece(move.to_square)

    # Pawn pushes
    if d_col == 0 and target is None:
        if d_row == direction:
            return True

        is_first_move = (not piece.has_moved) and (
            move.from_square.row == pawn_starting_row(piece.color)
        )
        if is_first_move and d_row == 2 * direction:
            return board.is_empty(move.from_square.offset(direction, 0))

    # Pawn takes
    if abs(d_col) == 1 and d_row == direction:
        return target is not None and target.is_opponent_of(piece)

    return False


def rook_move_is_legal(board: Board, move: Move, piece: Piece) -> bool:
    """Rooks move either horizontally or vertically"""
    d_row, d_col = move.delta
    if d_row != 0 and d_col != 0:
        return False
    return is_path_clear(board, move.from_square, move.to_square)


def knight_move_is_legal(board: Board, move: Move, piece: Piece) -> bool:
    """Knights jump: |delta_row| + |delta_col| = 3, both non-zero. Nothing can block them."""
    d_row, d_col = move.delta
    return (abs(d_row), abs(d_col)) in {(1, 2), (2, 1)}


def bishop_move_is_legal(board: Board, move: Move, piece: Piece) -> bool:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    d_row, d_col = move.delta
    if abs(d_row) != abs(d_col):
        return False
    return is_path_clear(board, move.from_square, move.to_square)


def queen_move_is_legal(board: Board, move: Move, piece: Piece) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return rook_move_is_legal(board, move, piece) or bishop_move_is_legal(
        board, move, piece
    )


def king_move_is_legal(board: Board, move: Move, piece: Piece) -> bool:
    """
    The king can move by a single square at the time, in any direction.

    NOTE: No castling.
    """
    d_row, d_col = move.delta
    return max(abs(d_row), abs(d_col)) == 1


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MoveRuleFn = Callable[[Board, Move, Piece], bool]
MOVEMENT_RULES: dict[PieceType, MoveRuleFn] = {
    PieceType.PAWN: pawn_move_is_legal,
    PieceType.KNIGHT: knight_move_is_legal,
    PieceType.BISHOP: bishop_move_is_legal,
    PieceType.ROOK: rook_move_is_legal,
    PieceType.QUEEN: queen_move_is_legal,
    PieceType.KING: king_move_is_legal,
}


def is_legal_move(board: Board, from_square: Square, to_square: Square) -> bool:
    """
    Is moving the piece on from_square to to_square allowed by that piece's movement rules?
    ----

    1. Both squares must be on the board, and there must be a piece to move.
    2. You can never land on your own piece (this also rules out "moving" to the square you stand on).
    3. The rest depends on the piece type.
    """
    if not (from_square.is_within_bounds() and to_square.is_within_bounds()):
        return False

    piece = board.piece(from_square)
    if piece is None:
        return False

    target = board.piece(to_square)
    if target is not None and not target.is_opponent_of(piece):
        return False

    movement_rule = MOVEMENT_RULES[piece.kind]
    return movement_rule(board, Move(from_square, to_square), piece)


def candidate_moves(board: Board, square: Square) -> list[Move]:
    """All moves of the piece on the given square that satisfy its movement rules (may still leave its king in check)."""
    return [
        Move(square, target)
        for target in ALL_SQUARES
        if is_legal_move(board, square, target)
    ]
