"""Position: board plus the metadata a FEN string carries."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, PieceType
from chessrules.core.move import Move
from chessrules.core.special_moves import (
    apply_to_board,
    en_passant_target_after,
    rights_after,
)
from chessrules.core.types import Square

PositionKey = tuple[object, ...]


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable chess position: board, side to move, castling, en passant, clocks.

    :meth:`play` never touches ``self``; it builds the successor position on
    a copied board.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    def play(self, move: Move) -> Position:
        """Successor position after *move* (no legality check)."""
        mover = self.side_to_move
        resets_clock = move.piece == PieceType.PAWN or move.is_capture
        return Position(
            board=apply_to_board(self.board, move),
            side_to_move=mover.opposite,
            castling=rights_after(self.castling, move, mover),
            en_passant=en_passant_target_after(move),
            halfmove_clock=0 if resets_clock else self.halfmove_clock + 1,
            fullmove_number=self.fullmove_number + (1 if mover == Color.BLACK else 0),
        )

    def key(self) -> PositionKey:
        """Identity used for repetition counting (placement, side, rights, ep)."""
        return (self.board.key(), self.side_to_move, self.castling, self.en_passant)
