"""Game layer: immutable game states and a reference match controller."""

from chessrules.game.controller import GameController, GameEvents
from chessrules.game.interfaces import MoveProvider, SearchBudget, StateObserver
from chessrules.game.state import GameState, MoveRecord

__all__ = [
    "GameController",
    "GameEvents",
    "GameState",
    "MoveProvider",
    "MoveRecord",
    "SearchBudget",
    "StateObserver",
]
