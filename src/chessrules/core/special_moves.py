"""Castling, en passant and promotion bookkeeping.

Also owns :func:`apply_to_board`, the single place where a move is laid
onto a board, so the legality filter and the game-state machine relocate
pieces the same way.
"""

from __future__ import annotations

from chessrules.core.attacks import is_in_check, is_square_attacked
from chessrules.core.board import Board
from chessrules.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    MoveFlag,
    PieceType,
)
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.types import SQUARES, Square

# King origin, king destination, rook origin, rook destination, squares that
# must be empty, squares the king stands on or crosses.
_CastlePlan = tuple[Square, Square, Square, Square, tuple[Square, ...], tuple[Square, ...]]


def _castle_plan(color: Color, flag: MoveFlag) -> _CastlePlan:
    base = color.back_rank * 8

    def sq(file: int) -> Square:
        return SQUARES[base + file]

    if flag == MoveFlag.CASTLE_KINGSIDE:
        return sq(4), sq(6), sq(7), sq(5), (sq(5), sq(6)), (sq(4), sq(5), sq(6))
    return sq(4), sq(2), sq(0), sq(3), (sq(1), sq(2), sq(3)), (sq(4), sq(3), sq(2))


_PLANS: dict[tuple[Color, MoveFlag], _CastlePlan] = {
    (color, flag): _castle_plan(color, flag)
    for color in Color
    for flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)
}

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    SQUARES[0]: CastlingRights.WHITE_QUEENSIDE,
    SQUARES[7]: CastlingRights.WHITE_KINGSIDE,
    SQUARES[56]: CastlingRights.BLACK_QUEENSIDE,
    SQUARES[63]: CastlingRights.BLACK_KINGSIDE,
}


# ── Castling ─────────────────────────────────────────────────────────────────


def can_castle(board: Board, color: Color, rights: CastlingRights, flag: MoveFlag) -> bool:
    """Whether *color* may castle on the wing given by *flag* right now.

    Requires the rights flag, king and rook on their origins, empty squares
    between them, the king not in check, and no attacked square on the
    king's path (origin, transit, destination).
    """
    wing = (
        CastlingRights.kingside(color)
        if flag == MoveFlag.CASTLE_KINGSIDE
        else CastlingRights.queenside(color)
    )
    if not rights & wing:
        return False

    king_from, _, rook_from, _, between, path = _PLANS[(color, flag)]
    if board[king_from] != Piece(color, PieceType.KING):
        return False
    if board[rook_from] != Piece(color, PieceType.ROOK):
        return False
    if any(not board.is_empty(sq) for sq in between):
        return False

    opponent = color.opposite
    return not any(is_square_attacked(sq, opponent, board) for sq in path)


def castling_moves(board: Board, color: Color, rights: CastlingRights) -> list[Move]:
    """Castling candidates; already fully legal, no filter needed."""
    if not rights & CastlingRights.both(color) or is_in_check(color, board):
        return []

    moves: list[Move] = []
    for flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE):
        if can_castle(board, color, rights, flag):
            king_from, king_to = _PLANS[(color, flag)][:2]
            moves.append(Move(king_from, king_to, PieceType.KING, flag=flag))
    return moves


def rights_after(rights: CastlingRights, move: Move, mover: Color) -> CastlingRights:
    """Castling rights once *move* has been played.

    A king move drops both of its side's flags; any move from or onto a rook
    corner drops that corner's flag, which covers rook moves and captures.
    """
    if move.piece == PieceType.KING:
        rights &= ~CastlingRights.both(mover)
    for sq in (move.from_sq, move.to_sq):
        corner = _ROOK_CORNERS.get(sq)
        if corner is not None:
            rights &= ~corner
    return rights


# ── En passant ───────────────────────────────────────────────────────────────


def en_passant_victim(target: Square, mover: Color) -> Square:
    """Square of the pawn removed by an en-passant capture onto *target*."""
    return SQUARES[(target.rank - mover.pawn_direction) * 8 + target.file]


def en_passant_moves(board: Board, color: Color, target: Square | None) -> list[Move]:
    """Pseudo-legal en-passant captures onto *target* for *color*."""
    if target is None:
        return []
    victim = en_passant_victim(target, color)
    if board[victim] != Piece(color.opposite, PieceType.PAWN) or not board.is_empty(target):
        return []

    own_pawn = Piece(color, PieceType.PAWN)
    moves: list[Move] = []
    for df in (-1, 1):
        origin = victim.offset(df, 0)
        if origin is not None and board[origin] == own_pawn:
            moves.append(
                Move(origin, target, PieceType.PAWN, PieceType.PAWN, flag=MoveFlag.EN_PASSANT)
            )
    return moves


def en_passant_target_after(move: Move) -> Square | None:
    """The skipped square after a double pawn push, else ``None``."""
    if move.flag != MoveFlag.DOUBLE_PAWN:
        return None
    return SQUARES[((move.from_sq.rank + move.to_sq.rank) // 2) * 8 + move.from_sq.file]


# ── Promotion ────────────────────────────────────────────────────────────────


def is_promotion_square(sq: Square, color: Color) -> bool:
    return sq.rank == color.opposite.back_rank


def promotion_moves(from_sq: Square, to_sq: Square, captured: PieceType | None) -> list[Move]:
    """One move per promotion kind; a bare pawn move is never generated."""
    return [
        Move(from_sq, to_sq, PieceType.PAWN, captured, kind, MoveFlag.PROMOTION)
        for kind in PROMOTION_TYPES
    ]


# ── Application ──────────────────────────────────────────────────────────────


def apply_to_board(board: Board, move: Move) -> Board:
    """Return a copy of *board* with *move* played on it.

    *board* itself is left untouched.
    """
    piece = board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {move.from_sq}")

    after = board.copy()
    after[move.from_sq] = None

    if move.flag == MoveFlag.EN_PASSANT:
        after[en_passant_victim(move.to_sq, piece.color)] = None

    if move.promotion is not None:
        after[move.to_sq] = Piece(piece.color, move.promotion)
    else:
        after[move.to_sq] = piece

    if move.is_castle:
        _, _, rook_from, rook_to, _, _ = _PLANS[(piece.color, move.flag)]
        after[rook_to] = after[rook_from]
        after[rook_from] = None
    return after
