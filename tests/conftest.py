"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chessrules.core.move import Move
from chessrules.game.state import GameState

Play = Callable[..., GameState]


def _play(state: GameState, *moves: str) -> GameState:
    for text in moves:
        state = state.execute_move(Move.from_uci(text))
    return state


@pytest.fixture
def start() -> GameState:
    """A fresh game in the standard starting position."""
    return GameState.new_game()


@pytest.fixture
def play() -> Play:
    """Execute UCI-style move requests (``"e2e4"``, ``"e7e8q"``) in order."""
    return _play
