"""SAN (Standard Algebraic Notation) rendering and parsing for move history."""

from __future__ import annotations

from chessrules.core.enums import MoveFlag, PieceType
from chessrules.core.errors import AmbiguousPromotionError, IllegalMoveError
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.piece import piece_letter
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.types import Square

_SAN_PIECE_REV: dict[str, PieceType] = {
    piece_letter(kind): kind for kind in PieceType if kind != PieceType.PAWN
}
_FILES = "abcdefgh"


def move_to_san(
    position: Position,
    move: Move,
    *,
    legal: list[Move] | None = None,
    suffix: str | None = None,
) -> str:
    """Convert a generated legal *move* to SAN given the *position* before it.

    *legal* and *suffix* let a caller that already generated the legal moves
    and evaluated the resulting position skip doing it again.
    """
    board = position.board
    piece = board[move.from_sq]
    if piece is None:
        raise IllegalMoveError(f"No piece on {move.from_sq}")

    if move.flag == MoveFlag.CASTLE_KINGSIDE:
        san = "O-O"
    elif move.flag == MoveFlag.CASTLE_QUEENSIDE:
        san = "O-O-O"
    else:
        san = ""
        if piece.kind == PieceType.PAWN:
            if move.is_capture:
                san += _FILES[move.from_sq.file]
        else:
            san += piece_letter(piece.kind)
            if legal is None:
                legal = MoveGenerator(position).legal_moves()
            san += _disambiguation(position, move, piece.kind, legal)

        if move.is_capture:
            san += "x"
        san += move.to_sq.name
        if move.promotion is not None:
            san += "=" + piece_letter(move.promotion)

    if suffix is None:
        after = position.play(move)
        suffix = ""
        if Rules.is_in_check(after):
            suffix = "#" if Rules.is_checkmate(after) else "+"
    return san + suffix


def _disambiguation(
    position: Position, move: Move, kind: PieceType, legal: list[Move]
) -> str:
    rivals = [
        m.from_sq
        for m in legal
        if m.to_sq == move.to_sq
        and m.from_sq != move.from_sq
        and (p := position.board[m.from_sq]) is not None
        and p.kind == kind
    ]
    if not rivals:
        return ""
    if all(sq.file != move.from_sq.file for sq in rivals):
        return _FILES[move.from_sq.file]
    if all(sq.rank != move.from_sq.rank for sq in rivals):
        return str(move.from_sq.rank + 1)
    return move.from_sq.name


def parse_san(position: Position, san: str) -> Move:
    """Resolve a SAN string to one of the legal moves of *position*.

    Raises :class:`IllegalMoveError` when nothing matches, and
    :class:`AmbiguousPromotionError` when a promoting pawn move omits
    its ``=X`` suffix.
    """
    legal = MoveGenerator(position).legal_moves()
    clean = san.rstrip("+#!?")

    if clean in ("O-O", "0-0", "O-O-O", "0-0-0"):
        flag = MoveFlag.CASTLE_KINGSIDE if len(clean) == 3 else MoveFlag.CASTLE_QUEENSIDE
        for m in legal:
            if m.flag == flag:
                return m
        raise IllegalMoveError(f"Illegal move: {san}")

    promotion: PieceType | None = None
    if "=" in clean:
        clean, _, promo_text = clean.partition("=")
        promotion = _SAN_PIECE_REV.get(promo_text)
        if promotion is None or promotion == PieceType.KING:
            raise IllegalMoveError(f"Invalid promotion in move: {san}")

    try:
        to_sq = Square.parse(clean[-2:])
    except ValueError as exc:
        raise IllegalMoveError(f"Invalid move text: {san}") from exc
    clean = clean[:-2].removesuffix("x")

    if clean and clean[0] in _SAN_PIECE_REV:
        kind = _SAN_PIECE_REV[clean[0]]
        clean = clean[1:]
    else:
        kind = PieceType.PAWN

    from_file: int | None = None
    from_rank: int | None = None
    for ch in clean:
        if ch in _FILES:
            from_file = _FILES.index(ch)
        elif ch in "12345678":
            from_rank = int(ch) - 1
        else:
            raise IllegalMoveError(f"Invalid move text: {san}")

    candidates = [
        m
        for m in legal
        if m.piece == kind
        and m.to_sq == to_sq
        and (from_file is None or m.from_sq.file == from_file)
        and (from_rank is None or m.from_sq.rank == from_rank)
    ]
    if promotion is None and candidates and all(m.promotion for m in candidates):
        raise AmbiguousPromotionError(f"Promotion kind required: {san}")
    candidates = [m for m in candidates if m.promotion == promotion]

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise IllegalMoveError(f"Illegal move: {san}")
    raise IllegalMoveError(f"Ambiguous move: {san} -> {[str(m) for m in candidates]}")
