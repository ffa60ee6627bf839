"""Unit tests for /src/chess/pieces.py"""

import pytest

from src.chess.pieces import Piece
from src.core.shared_types import Color, PieceType


@pytest.mark.parametrize(
    "character, kind, color",
    [
        ("P", PieceType.PAWN, Color.WHITE),
        ("n", PieceType.KNIGHT, Color.BLACK),
        ("B", PieceType.BISHOP, Color.WHITE),
        ("r", PieceType.ROOK, Color.BLACK),
        ("Q", PieceType.QUEEN, Color.WHITE),
        ("k", PieceType.KING, Color.BLACK),
    ],
)
def test_fen_characters(character: str, kind: PieceType, color: Color) -> None:
    """Upper case for white, lower case for black."""
    piece = Piece.from_fen(character)
    assert piece.kind == kind
    assert piece.color == color
    assert not piece.has_moved
    assert piece.to_fen() == character


def test_moved_returns_a_new_piece() -> None:
    """Pieces are immutable: moving produces a flagged copy, the original stays untouched."""
    pawn = Piece(PieceType.PAWN, Color.WHITE)
    moved_pawn = pawn.moved()
    assert moved_pawn.has_moved
    assert not pawn.has_moved
    assert moved_pawn.kind == pawn.kind and moved_pawn.color == pawn.color

    # flag never flips back
    assert moved_pawn.moved() == moved_pawn


def test_opponents() -> None:
    white_rook = Piece(PieceType.ROOK, Color.WHITE)
    black_rook = Piece(PieceType.ROOK, Color.BLACK)
    assert white_rook.is_opponent_of(black_rook)
    assert not white_rook.is_opponent_of(Piece(PieceType.KING, Color.WHITE))
