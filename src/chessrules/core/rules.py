"""High-level rule checks: check, checkmate, stalemate, draw by rule."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.attacks import is_in_check
from chessrules.core.enums import Color, DrawReason, GameStatus, PieceType
from chessrules.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chessrules.config import RulesSettings
    from chessrules.core.position import Position

_MINORS = (PieceType.KNIGHT, PieceType.BISHOP)
_HEAVY = (PieceType.PAWN, PieceType.ROOK, PieceType.QUEEN)


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return is_in_check(position.side_to_move, position.board)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return Rules.is_in_check(position) and not MoveGenerator(position).has_legal_move()

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return not Rules.is_in_check(position) and not MoveGenerator(position).has_legal_move()

    @staticmethod
    def is_fifty_move_rule(position: Position, limit: int = 100) -> bool:
        return position.halfmove_clock >= limit  # 100 half-moves = 50 full moves

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, K+minor vs K, K+B vs K+B with same-colour bishops."""
        board = position.board
        for color in Color:
            if any(board.count(color, kind) for kind in _HEAVY):
                return False

        minors = [
            (sq, board[sq])
            for color in Color
            for kind in _MINORS
            for sq in board.pieces(color, kind)
        ]
        if len(minors) <= 1:
            return True
        if len(minors) == 2:
            (sq_a, a), (sq_b, b) = minors
            return (
                a is not None
                and b is not None
                and a.kind == b.kind == PieceType.BISHOP
                and a.color != b.color
                and sq_a.is_light == sq_b.is_light
            )
        return False

    @staticmethod
    def evaluate(
        position: Position,
        settings: RulesSettings,
        repetitions: int = 1,
    ) -> tuple[GameStatus, DrawReason | None]:
        """Status of *position* for its side to move.

        Mate and stalemate take precedence over draw rules. *repetitions* is
        how many times the position has occurred in the game so far.
        """
        in_check = Rules.is_in_check(position)
        if not MoveGenerator(position).has_legal_move():
            return (GameStatus.CHECKMATE if in_check else GameStatus.STALEMATE), None

        if Rules.is_fifty_move_rule(position, settings.fifty_move_limit):
            return GameStatus.DRAW_BY_RULE, DrawReason.FIFTY_MOVE
        if settings.threefold_repetition and repetitions >= 3:
            return GameStatus.DRAW_BY_RULE, DrawReason.THREEFOLD_REPETITION
        if settings.insufficient_material and Rules.is_insufficient_material(position):
            return GameStatus.DRAW_BY_RULE, DrawReason.INSUFFICIENT_MATERIAL

        return (GameStatus.CHECK if in_check else GameStatus.ACTIVE), None
