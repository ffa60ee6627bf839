"""
Text encoding of a board: the piece placement part of a FEN string, plus the validators for it.

FEN, or Forsyth-Edwards Notation, is a standard notation for describing a particular board position of a chess game.
Only its first field (the piece placement) is used here: the rest of a full FEN describes rules (castling, en passant,
move clocks) this engine does not play with.
"""

from string import ascii_lowercase

from src.chess.pieces import FEN_TO_PIECE
from src.chess.square import BOARD_SIZE

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


def is_valid_position(position: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    rank_fens = position.split("/")
    if len(rank_fens) != BOARD_SIZE:
        return False

    for rank_fen in rank_fens:
        file_count = 0
        for character in rank_fen:
            # make sure every character is valid
            if character.isdigit():
                file_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                file_count += 1
            else:
                # immediately invalidate if the character is anything else
                return False

        # make sure you are creating a correctly sized board
        if file_count != BOARD_SIZE:
            return False
    return True


def is_valid_square(square: str) -> bool:
    """Valid square should be a letter for the file + a number for the rank"""
    if len(square) != 2:
        return False

    file_char, rank_char = square[0], square[1]
    allowed_file_names = ascii_lowercase[:BOARD_SIZE]
    if file_char not in allowed_file_names:
        return False

    if not rank_char.isdigit():
        return False

    return 1 <= int(rank_char) <= BOARD_SIZE
