"""GameController: owns the snapshot history of one match.

Coordinates: GameState snapshots, move providers, observers.
Emits events via simple callbacks so a UI / tests can subscribe.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from loguru import logger

from chessrules.config import RulesSettings
from chessrules.core.errors import ChessRulesError
from chessrules.core.move import Move
from chessrules.game.interfaces import MoveProvider, SearchBudget, StateObserver
from chessrules.game.state import GameState, MoveRecord

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]  # record, new state
GameOverCallback = Callable[[GameState], None]
RejectCallback = Callable[[Move, ChessRulesError], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_rejected: list[RejectCallback] = field(default_factory=list)
    observers: list[StateObserver] = field(default_factory=list)


class GameController:
    """Holds the ordered snapshots of one game and a cursor into them.

    Undo and redo only move the cursor; submitting a move after an undo
    drops the snapshots ahead of the cursor. Every move, including one
    proposed by a :class:`MoveProvider`, goes through
    :meth:`GameState.execute_move`. No undo or hint quotas are enforced.

    Thread-safety: one controller per match, called from a single thread.
    """

    __slots__ = ("_snapshots", "_cursor", "_last_error", "events")

    def __init__(self, state: GameState | None = None) -> None:
        self._snapshots: list[GameState] = [state or GameState.new_game()]
        self._cursor = 0
        self._last_error: ChessRulesError | None = None
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._snapshots[self._cursor]

    @property
    def snapshots(self) -> tuple[GameState, ...]:
        """Snapshots up to and including the current one."""
        return tuple(self._snapshots[: self._cursor + 1])

    @property
    def last_error(self) -> ChessRulesError | None:
        """Why the most recent submission was rejected, if it was."""
        return self._last_error

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(self, fen: str | None = None, settings: RulesSettings | None = None) -> None:
        """Start over from the standard setup or *fen*.

        An invalid *fen* raises :class:`InvalidFENError` and keeps the
        current game.
        """
        state = (
            GameState.from_fen(fen, settings)
            if fen is not None
            else GameState.new_game(settings)
        )
        self._snapshots = [state]
        self._cursor = 0
        self._last_error = None
        logger.debug(f"chessrules.controller.new_game fen={state.to_fen()}")
        self._notify_observers()

    def submit_move(self, move: Move) -> bool:
        """Submit a move. Returns True if legal and applied."""
        try:
            new_state = self.state.execute_move(move)
        except ChessRulesError as exc:
            self._last_error = exc
            for cb in self.events.on_rejected:
                cb(move, exc)
            return False

        self._last_error = None
        del self._snapshots[self._cursor + 1 :]
        self._snapshots.append(new_state)
        self._cursor += 1

        record = new_state.history[-1]
        for cb in self.events.on_move:
            cb(record, new_state)
        self._notify_observers()

        if new_state.status.is_terminal:
            self._emit_game_over(new_state)
        return True

    def request_provider_move(
        self, provider: MoveProvider, budget: SearchBudget | None = None
    ) -> bool:
        """Ask *provider* for a move on the current position and submit it."""
        state = self.state
        if state.is_terminal:
            return False
        move = provider.propose_move(state.to_fen(), budget or SearchBudget())
        logger.debug(f"chessrules.controller.provider name={provider.name} move={move}")
        return self.submit_move(move)

    def undo(self) -> bool:
        """Step back one ply. Returns True on success."""
        if not self.can_undo:
            return False
        self._cursor -= 1
        self._notify_observers()
        return True

    def redo(self) -> bool:
        """Step forward over a previously undone ply."""
        if not self.can_redo:
            return False
        self._cursor += 1
        self._notify_observers()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _notify_observers(self) -> None:
        for observer in self.events.observers:
            observer.on_state(self.state)

    def _emit_game_over(self, state: GameState) -> None:
        winner = state.winner
        logger.info(
            f"chessrules.controller.game_over status={state.status.value} "
            f"winner={winner if winner is not None else '-'}"
        )
        for cb in self.events.on_game_over:
            cb(state)

