"""
Attack analysis: Is a square under attack? Is a king in check? Would a move leave your own king in check?

The movement rules (moves.py) are reused as a black box: a square is attacked by a color if any piece of that color
could legally move there. Pawns need no special treatment, since their movement rule already only allows the diagonal
step onto an occupied square.
"""

from src.chess.board import Board
from src.chess.moves import Move, is_legal_move
from src.chess.square import Square
from src.core.shared_types import Color


def is_square_attacked(board: Board, square: Square, by_color: Color) -> bool:
    """TRUE if any piece of by_color could legally move to (i.e. capture on) the given square."""
    return any(
        is_legal_move(board, attacker, square)
        for attacker in board.locate_color(by_color)
    )


def is_in_check(board: Board, color: Color) -> bool:
    """
    Locate the king of the given color and check whether the opponent attacks it.

    NOTE: A board without such king is reported as "not in check". That cannot happen during a game,
    since the self-check rule prevents a king from ever being capturable.
    """
    king_square = board.locate_king(color)
    if king_square is None:
        return False
    return is_square_attacked(board, king_square, color.opponent)


def simulate_move(board: Board, move: Move) -> Board:
    """Play the move on a snapshot of the board. The original board is left untouched."""
    snapshot = board.copy()
    snapshot.move_piece(move.from_square, move.to_square)
    return snapshot


def leaves_king_in_check(board: Board, move: Move) -> bool:
    """
    Return True if the move puts (or leaves) the mover's own king in check

    plan:
    1. Copy the board
    2. make the candidate move
    3. determine if king is in check on the new board
    """
    moving_piece = board.piece(move.from_square)
    if moving_piece is None:
        raise ValueError(f"No piece to move on {move.from_square.to_algebraic()}")
    return is_in_check(simulate_move(board, move), moving_piece.color)
