"""Typed, recoverable rule errors.

Every error is raised before any state is built, so the caller's current
:class:`~chessrules.game.state.GameState` is always left as it was.
"""

from __future__ import annotations


class ChessRulesError(Exception):
    """Base class for every error raised by the rules engine."""


class IllegalMoveError(ChessRulesError, ValueError):
    """The move is not in the legal set of the side to move."""


class AmbiguousPromotionError(ChessRulesError):
    """A pawn move reaching the far rank was submitted without a promotion kind."""


class GameOverError(ChessRulesError):
    """A move was submitted to a state that is already terminal."""


class InvalidFENError(ChessRulesError, ValueError):
    """A FEN string could not be imported."""
