"""Legal and pseudo-legal move generation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
    Ray,
    is_in_check,
)
from chessrules.core.enums import Color, MoveFlag, PieceType
from chessrules.core.move import Move
from chessrules.core.special_moves import (
    apply_to_board,
    castling_moves,
    en_passant_moves,
    is_promotion_square,
    promotion_moves,
)
from chessrules.core.types import Square

if TYPE_CHECKING:
    from chessrules.core.position import Position

_SLIDER_RAYS: dict[PieceType, tuple[tuple[Ray, ...], ...]] = {
    PieceType.BISHOP: BISHOP_RAYS,
    PieceType.ROOK: ROOK_RAYS,
    PieceType.QUEEN: QUEEN_RAYS,
}


def _order(move: Move) -> tuple[Square, Square, int]:
    return (move.from_sq, move.to_sq, int(move.promotion or 0))


class MoveGenerator:
    """Generates moves for the side to move of a :class:`Position`.

    Candidates are produced from piece geometry first, then kept only if
    playing them on a scratch copy of the board leaves the mover's king
    unattacked. That one filter covers pins and check evasion alike. The
    position is never modified.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def legal_moves(self) -> list[Move]:
        """All strictly legal moves, ordered by origin then destination."""
        color = self._pos.side_to_move
        return [m for m in self.pseudo_legal_moves() if self._is_safe(m, color)]

    def legal_moves_from(self, sq: Square) -> list[Move]:
        """Legal moves of the side-to-move piece standing on *sq*."""
        piece = self._board[sq]
        if piece is None or piece.color != self._pos.side_to_move:
            return []
        moves = self._piece_moves(sq, piece.kind, piece.color)
        return sorted((m for m in moves if self._is_safe(m, piece.color)), key=_order)

    def pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check)."""
        color = self._pos.side_to_move
        moves: list[Move] = []
        for sq, piece in self._board.items():
            if piece.color == color:
                moves.extend(self._piece_moves(sq, piece.kind, color))
        return sorted(moves, key=_order)

    def has_legal_move(self) -> bool:
        color = self._pos.side_to_move
        return any(self._is_safe(m, color) for m in self.pseudo_legal_moves())

    # -- Legality filter ----------------------------------------------------

    def _is_safe(self, move: Move, color: Color) -> bool:
        return not is_in_check(color, apply_to_board(self._board, move))

    # -- Piece-specific generators -----------------------------------------

    def _piece_moves(self, sq: Square, kind: PieceType, color: Color) -> list[Move]:
        if kind == PieceType.PAWN:
            moves = self._gen_pawn(sq, color)
            if self._pos.en_passant is not None:
                moves.extend(
                    m
                    for m in en_passant_moves(self._board, color, self._pos.en_passant)
                    if m.from_sq == sq
                )
            return moves
        if kind == PieceType.KNIGHT:
            return self._gen_steps(sq, color, kind, KNIGHT_TARGETS[sq.index])
        if kind == PieceType.KING:
            moves = self._gen_steps(sq, color, kind, KING_TARGETS[sq.index])
            moves.extend(castling_moves(self._board, color, self._pos.castling))
            return moves
        return self._gen_sliding(sq, color, kind)

    def _gen_pawn(self, sq: Square, color: Color) -> list[Move]:
        board = self._board
        step = color.pawn_direction
        moves: list[Move] = []

        one = sq.offset(0, step)
        if one is not None and board.is_empty(one):
            if is_promotion_square(one, color):
                moves.extend(promotion_moves(sq, one, None))
            else:
                moves.append(Move(sq, one, PieceType.PAWN))
                start_rank = 1 if color == Color.WHITE else 6
                two = one.offset(0, step)
                if sq.rank == start_rank and two is not None and board.is_empty(two):
                    moves.append(Move(sq, two, PieceType.PAWN, flag=MoveFlag.DOUBLE_PAWN))

        for df in (-1, 1):
            cap = sq.offset(df, step)
            if cap is None:
                continue
            target = board[cap]
            if target is None or target.color == color:
                continue
            if is_promotion_square(cap, color):
                moves.extend(promotion_moves(sq, cap, target.kind))
            else:
                moves.append(Move(sq, cap, PieceType.PAWN, target.kind))
        return moves

    def _gen_steps(
        self, sq: Square, color: Color, kind: PieceType, targets: tuple[Square, ...]
    ) -> list[Move]:
        board = self._board
        moves: list[Move] = []
        for to_sq in targets:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq, kind))
            elif target.color != color:
                moves.append(Move(sq, to_sq, kind, target.kind))
        return moves

    def _gen_sliding(self, sq: Square, color: Color, kind: PieceType) -> list[Move]:
        board = self._board
        moves: list[Move] = []
        for ray in _SLIDER_RAYS[kind][sq.index]:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq, kind))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq, kind, target.kind))
                break
        return moves
