"""Abstract interfaces for collaborators that consume the engine.

The engine itself never calls out: a controller hands each collaborator
what it needs (a FEN string, a state snapshot) and validates whatever comes
back through :meth:`GameState.execute_move`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessrules.core.move import Move
    from chessrules.game.state import GameState


class SearchBudget:
    """Depth / time allowance forwarded to a move provider.

    Args:
        depth: Maximum search depth in plies, or ``None`` for provider default.
        time_seconds: Wall-clock allowance, or ``None`` for provider default.
    """

    __slots__ = ("depth", "time_seconds")

    def __init__(self, depth: int | None = None, time_seconds: float | None = None) -> None:
        self.depth = depth
        self.time_seconds = time_seconds

    @classmethod
    def quick(cls) -> SearchBudget:
        return cls(depth=2, time_seconds=1.0)

    @classmethod
    def unlimited(cls) -> SearchBudget:
        return cls()

    def __repr__(self) -> str:
        return f"SearchBudget(depth={self.depth}, time_seconds={self.time_seconds})"


class MoveProvider(ABC):
    """An opponent or hint source proposing moves for a position."""

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    def propose_move(self, fen: str, budget: SearchBudget) -> Move:
        """Return a move for the position encoded by *fen*.

        Only ``from_sq``, ``to_sq`` and ``promotion`` are read; the move is
        validated like any other.
        """


class StateObserver(ABC):
    """A renderer or other read-only consumer of state snapshots."""

    @abstractmethod
    def on_state(self, state: GameState) -> None:
        """Called with each new current state (after moves, undo and redo)."""
