"""chessrules: a pure, synchronous chess rule engine.

Logging goes through loguru and is disabled for this package by default;
call ``logger.enable("chessrules")`` to see it.
"""

from loguru import logger

from chessrules.config import RulesSettings, settings
from chessrules.core import (
    STARTING_FEN,
    AmbiguousPromotionError,
    ChessRulesError,
    Color,
    GameOverError,
    GameStatus,
    IllegalMoveError,
    InvalidFENError,
    Move,
    Piece,
    PieceType,
    Square,
    is_square_attacked,
)
from chessrules.game import GameController, GameState

logger.disable("chessrules")

__version__ = "0.1.0"

__all__ = [
    "STARTING_FEN",
    "AmbiguousPromotionError",
    "ChessRulesError",
    "Color",
    "GameController",
    "GameOverError",
    "GameState",
    "GameStatus",
    "IllegalMoveError",
    "InvalidFENError",
    "Move",
    "Piece",
    "PieceType",
    "RulesSettings",
    "Square",
    "is_square_attacked",
    "settings",
]
