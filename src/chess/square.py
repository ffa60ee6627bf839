"""
A square on the board

(placed in its own module as multiple other modules need to import it)

Coordinates are (row, col), both zero-based:
* row 0 is black's back rank (rank 8), row 7 is white's back rank (rank 1)
* col 0 - col 7 are the files a - h
"""

from __future__ import annotations

from dataclasses import dataclass

# Chess board is always 8x8.
BOARD_SIZE = 8


@dataclass(frozen=True)
class Square:
    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' - 'h1' get converted to (0,0) - (7,7)"""
        col = ord(sq[0]) - ord("a")
        row = BOARD_SIZE - int(sq[1])
        return cls(row, col)

    @classmethod
    def from_index(cls, index: int) -> Square:
        return cls(*divmod(index, BOARD_SIZE))

    def to_algebraic(self) -> str:
        return f"{chr(self.col + ord('a'))}{BOARD_SIZE - self.row}"

    @property
    def index(self) -> int:
        """Position in the flat 64-cell board array"""
        return self.row * BOARD_SIZE + self.col

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_SIZE) and (0 <= self.col < BOARD_SIZE)

    def offset(self, d_row: int, d_col: int) -> Square:
        return Square(self.row + d_row, self.col + d_col)


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square.from_index(index) for index in range(BOARD_SIZE * BOARD_SIZE)
)
