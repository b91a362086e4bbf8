"""Game state machine: immutable per-ply snapshots with move history."""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from chessrules.config import RulesSettings
from chessrules.config import settings as default_settings
from chessrules.core.attacks import is_in_check
from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, DrawReason, GameStatus
from chessrules.core.errors import (
    AmbiguousPromotionError,
    GameOverError,
    IllegalMoveError,
)
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.notation import (
    move_to_san,
    parse_san,
    position_from_fen,
    position_to_fen,
)
from chessrules.core.position import Position, PositionKey
from chessrules.core.rules import Rules
from chessrules.core.types import Square


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    san: str
    fen_after: str


@dataclass(frozen=True)
class GameState:
    """One immutable snapshot of a game.

    :meth:`execute_move` validates a move against the legal set and returns
    the next snapshot; ``self`` is never changed, so a rejected move leaves
    the caller holding the same valid state. Keeping older snapshots (for
    undo, analysis or display) is the caller's business.
    """

    position: Position = field(default_factory=Position)
    status: GameStatus = GameStatus.ACTIVE
    history: tuple[MoveRecord, ...] = ()
    draw_reason: DrawReason | None = None
    settings: RulesSettings = field(default=default_settings, compare=False, repr=False)
    position_keys: tuple[PositionKey, ...] = field(default=(), compare=False, repr=False)

    # ── Construction ─────────────────────────────────────────────────────

    @classmethod
    def new_game(cls, settings: RulesSettings | None = None) -> GameState:
        """Standard starting position."""
        return cls.from_position(Position(), settings)

    @classmethod
    def from_fen(cls, fen: str, settings: RulesSettings | None = None) -> GameState:
        """Import a FEN string; raises :class:`InvalidFENError` if malformed."""
        return cls.from_position(position_from_fen(fen), settings)

    @classmethod
    def from_position(
        cls, position: Position, settings: RulesSettings | None = None
    ) -> GameState:
        rules = settings or default_settings
        status, reason = Rules.evaluate(position, rules)
        return cls(
            position=position,
            status=status,
            draw_reason=reason,
            settings=rules,
            position_keys=(position.key(),),
        )

    def to_fen(self) -> str:
        return position_to_fen(self.position)

    # ── Position accessors ───────────────────────────────────────────────

    @property
    def board(self) -> Board:
        """A copy of the piece placement; writing to it never affects this state."""
        return self.position.board.copy()

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def castling(self) -> CastlingRights:
        return self.position.castling

    @property
    def en_passant(self) -> Square | None:
        return self.position.en_passant

    @property
    def halfmove_clock(self) -> int:
        return self.position.halfmove_clock

    @property
    def fullmove_number(self) -> int:
        return self.position.fullmove_number

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def winner(self) -> Color | None:
        """The side that delivered mate, if any."""
        if self.status == GameStatus.CHECKMATE:
            return self.side_to_move.opposite
        return None

    @property
    def ply_count(self) -> int:
        return len(self.history)

    @property
    def last_move(self) -> Move | None:
        return self.history[-1].move if self.history else None

    def is_in_check(self, color: Color | None = None) -> bool:
        """Is *color* (default: side to move) in check?"""
        return is_in_check(self.side_to_move if color is None else color, self.position.board)

    def legal_moves(self) -> list[Move]:
        """Legal moves of the side to move; empty once the game is over."""
        if self.is_terminal:
            return []
        return MoveGenerator(self.position).legal_moves()

    def get_valid_moves(self, square: Square) -> list[Square]:
        """Legal destinations of the piece on *square*, file-major then rank."""
        if self.is_terminal:
            return []
        moves = MoveGenerator(self.position).legal_moves_from(square)
        return sorted({m.to_sq for m in moves})

    def is_valid_move(self, from_sq: Square, to_sq: Square) -> bool:
        return to_sq in self.get_valid_moves(from_sq)

    def repetition_count(self) -> int:
        """How many times the current position occurred in this game."""
        return self.position_keys.count(self.position.key())

    # ── Move application ─────────────────────────────────────────────────

    def resolve_move(self, move: Move) -> Move:
        """Match a proposed move against the legal set.

        Only ``from_sq``, ``to_sq`` and ``promotion`` of *move* are read;
        the returned move is the engine's own fully described one.
        """
        if self.is_terminal:
            raise GameOverError(f"Game is over ({self.status.value}); {move} rejected")

        candidates = [
            m
            for m in MoveGenerator(self.position).legal_moves_from(move.from_sq)
            if m.to_sq == move.to_sq
        ]
        if not candidates:
            raise IllegalMoveError(f"Illegal move: {move}")
        if candidates[0].promotion is not None and move.promotion is None:
            raise AmbiguousPromotionError(
                f"Move {move.from_sq}{move.to_sq} reaches the last rank; "
                "a promotion kind is required"
            )

        for m in candidates:
            if m.matches(move):
                return m
        raise IllegalMoveError(f"Invalid promotion for {move}: {move.promotion}")

    def execute_move(self, move: Move) -> GameState:
        """Validate *move* and return the next state.

        Raises :class:`GameOverError`, :class:`IllegalMoveError` or
        :class:`AmbiguousPromotionError`; ``self`` is unchanged either way.
        """
        try:
            resolved = self.resolve_move(move)
        except (GameOverError, IllegalMoveError, AmbiguousPromotionError) as exc:
            logger.debug(f"chessrules.game.execute_move rejected move={move} error={exc}")
            raise

        after = self.position.play(resolved)
        keys = self.position_keys + (after.key(),)
        status, reason = Rules.evaluate(after, self.settings, keys.count(after.key()))

        gives_check = is_in_check(after.side_to_move, after.board)
        is_mate = status == GameStatus.CHECKMATE
        suffix = "#" if is_mate else "+" if gives_check else ""
        san = move_to_san(self.position, resolved, suffix=suffix)
        record = MoveRecord(
            move=resolved.with_outcome(gives_check, is_mate),
            san=san,
            fen_after=position_to_fen(after),
        )

        logger.debug(
            f"chessrules.game.execute_move accepted san={san} status={status.value}"
        )
        if status.is_terminal:
            logger.info(
                f"chessrules.game.terminal status={status.value} "
                f"reason={reason.value if reason else None} plies={len(self.history) + 1}"
            )

        return GameState(
            position=after,
            status=status,
            history=self.history + (record,),
            draw_reason=reason,
            settings=self.settings,
            position_keys=keys,
        )

    def execute_san(self, san: str) -> GameState:
        """Convenience wrapper: parse *san* against this state and execute it."""
        if self.is_terminal:
            raise GameOverError(f"Game is over ({self.status.value}); {san} rejected")
        return self.execute_move(parse_san(self.position, san))

