"""Core domain layer: pure chess rules with no I/O.

Quick start::

    from chessrules.core import MoveGenerator, position_from_fen, STARTING_FEN

    pos = position_from_fen(STARTING_FEN)
    for move in MoveGenerator(pos).legal_moves():
        print(move)
"""

from chessrules.core.attacks import attackers_of, is_in_check, is_square_attacked
from chessrules.core.board import Board
from chessrules.core.enums import (
    CastlingRights,
    Color,
    DrawReason,
    GameStatus,
    MoveFlag,
    PieceType,
)
from chessrules.core.errors import (
    AmbiguousPromotionError,
    ChessRulesError,
    GameOverError,
    IllegalMoveError,
    InvalidFENError,
)
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.notation import (
    STARTING_FEN,
    move_to_san,
    parse_san,
    position_from_fen,
    position_to_fen,
)
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.types import Square, parse_square

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "DrawReason",
    "GameStatus",
    "MoveFlag",
    "PieceType",
    # Errors
    "AmbiguousPromotionError",
    "ChessRulesError",
    "GameOverError",
    "IllegalMoveError",
    "InvalidFENError",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    "Square",
    "parse_square",
    # Attack detection
    "attackers_of",
    "is_in_check",
    "is_square_attacked",
    # Notation
    "STARTING_FEN",
    "move_to_san",
    "parse_san",
    "position_from_fen",
    "position_to_fen",
]
