"""
Checkmate detection: exhaustive search for a move that gets out of check.

Every candidate gets played on a snapshot of the board (see attacks.simulate_move), so the board handed in
is never modified, not even temporarily.
"""

from loguru import logger

from src.chess.attacks import is_in_check, leaves_king_in_check
from src.chess.board import Board
from src.chess.moves import Move, candidate_moves
from src.core.shared_types import Color


def generate_legal_moves(board: Board, color: Color) -> list[Move]:
    """
    List of legal moves for the player with the 'color' pieces
    ----

    1. generate candidate moves, using the basic movement rules for all pieces
    2. remove illegal options --> a move that would put you in check or you are in check and the move does not get you out of it.
    """
    return [
        move
        for square in board.locate_color(color)
        for move in candidate_moves(board, square)
        if not leaves_king_in_check(board, move)
    ]


def has_escape(board: Board, color: Color) -> bool:
    """Is there at least one move for `color` after which its king is not in check? Stops at the first one found."""
    for square in board.locate_color(color):
        for move in candidate_moves(board, square):
            if not leaves_king_in_check(board, move):
                return True
    return False


def is_checkmate(board: Board, color: Color) -> bool:
    """Checkmate: you are in check and no move gets you out of it."""
    if not is_in_check(board, color):
        return False

    mated = not has_escape(board, color)
    if mated:
        logger.debug(f"No escape from check found for {color}")
    return mated
