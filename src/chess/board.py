"""
The Board holds the position (in chess: the configuration of pieces on the board).

Cells are stored in a flat 64-element list, indexed by row * 8 + col.
`get()` and `set()` are the only methods touching that list: everything else (inside and outside this module) goes through them,
so the representation can change without touching any rules logic.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Self

from src.chess.fen import is_valid_position, is_valid_square
from src.chess.pieces import BACK_RANK, Piece
from src.chess.square import ALL_SQUARES, BOARD_SIZE, Square
from src.core.exceptions import InvalidFENError
from src.core.shared_types import Color, PieceType

Cell = Optional[Piece]


def _empty_cells() -> list[Cell]:
    return [None] * (BOARD_SIZE * BOARD_SIZE)


@dataclass
class Board:
    _cells: list[Cell] = field(default_factory=_empty_cells)

    # --- PRIMITIVE ACCESSORS ---
    def get(self, row: int, col: int) -> Cell:
        return self._cells[row * BOARD_SIZE + col]

    def set(self, row: int, col: int, piece: Cell) -> None:
        self._cells[row * BOARD_SIZE + col] = piece

    # --- CONVENIENCE WRAPPERS (square based) ---
    def piece(self, square: Square) -> Cell:
        return self.get(square.row, square.col)

    def place_piece(self, piece: Piece, square: Square) -> None:
        self.set(square.row, square.col, piece)

    def remove_piece(self, square: Square) -> Cell:
        removed = self.piece(square)
        self.set(square.row, square.col, None)
        return removed

    def is_empty(self, square: Square) -> bool:
        return self.piece(square) is None

    def copy(self) -> Self:
        """
        Snapshot used to simulate moves.
        Pieces are immutable values, so copying the cells is enough to decouple the two boards.
        """
        snapshot = type(self)()
        for square, piece in self.occupied():
            snapshot.place_piece(piece, square)
        return snapshot

    # --- CREATION ---
    @classmethod
    def empty(cls) -> Self:
        return cls()

    @classmethod
    def from_fen(cls, placement: str, moved_squares: Iterable[str] = ()) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 0), starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank (row 7) are the white pieces.

        FEN has no notion of whether a piece has moved, so the squares holding moved pieces are passed separately.
        """
        if not is_valid_position(placement):
            raise InvalidFENError(f"Cannot interpret supplied string as a board position: {placement!r}")

        moved_squares = list(moved_squares)
        invalid_squares = [sq for sq in moved_squares if not is_valid_square(sq)]
        if invalid_squares:
            raise InvalidFENError(f"Cannot interpret moved squares: {invalid_squares!r}")

        moved = {Square.from_algebraic(sq) for sq in moved_squares}
        board = cls()
        # FEN string is read from top rank (row 0) to bottom rank (row 7)
        for row, fen_one_rank in enumerate(placement.split("/")):
            col = 0
            for character in fen_one_rank:
                if character.isalpha():
                    square = Square(row, col)
                    piece = Piece.from_fen(character)
                    board.place_piece(piece.moved() if square in moved else piece, square)
                    col += 1
                else:
                    # A number denotes the amount of empty squares after each other
                    col += int(character)
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._row_to_fen(row) for row in range(BOARD_SIZE))

    def _row_to_fen(self, row: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for col in range(BOARD_SIZE):
            piece = self.get(row, col)
            if piece is None:
                empty_count += 1
                continue

            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def moved_squares(self) -> list[str]:
        """Squares (algebraic) of the pieces that have moved at least once. Complements to_fen()."""
        return [square.to_algebraic() for square, piece in self.occupied() if piece.has_moved]

    # --- QUERIES ---
    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        for square in ALL_SQUARES:
            piece = self.piece(square)
            if piece is not None:
                yield square, piece

    def locate_color(self, color: Color) -> list[Square]:
        return [square for square, piece in self.occupied() if piece.color == color]

    def locate_king(self, color: Color) -> Optional[Square]:
        """First king of the given color found scanning from a8 to h1. None if there is no such king."""
        return next(
            (
                square
                for square, piece in self.occupied()
                if piece.kind == PieceType.KING and piece.color == color
            ),
            None,
        )

    # --- UPDATES ---
    def move_piece(self, from_square: Square, to_square: Square) -> Cell:
        """Relocate a piece (capturing whatever stands on the target square) and return the captured piece."""
        moving_piece = self.remove_piece(from_square)
        if moving_piece is None:
            raise ValueError(f"No piece to move on {from_square.to_algebraic()}")
        captured = self.piece(to_square)
        self.place_piece(moving_piece.moved(), to_square)
        return captured


def initial_board() -> Board:
    """The canonical starting position. Built square by square (and must match fen.STARTING_POSITION)."""
    board = Board.empty()
    for col, kind in enumerate(BACK_RANK):
        board.set(0, col, Piece(kind, Color.BLACK))
        board.set(1, col, Piece(PieceType.PAWN, Color.BLACK))
        board.set(BOARD_SIZE - 2, col, Piece(PieceType.PAWN, Color.WHITE))
        board.set(BOARD_SIZE - 1, col, Piece(kind, Color.WHITE))
    return board

