"""FEN parsing and serialization."""

from __future__ import annotations

from chessrules.core.board import Board
from chessrules.core.enums import CastlingRights, Color, PieceType
from chessrules.core.errors import InvalidFENError
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.types import SQUARES, Square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_LETTERS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)
_MAX_PIECES_PER_SIDE = 16
_BACK_RANKS_MASK = 0xFF000000000000FF


def position_from_fen(fen: str) -> Position:
    """Parse a six-field FEN string into a :class:`Position`.

    Raises :class:`InvalidFENError` on any malformed field. Nothing is built
    until every field has been validated.
    """
    parts = fen.split()
    if len(parts) != 6:
        raise InvalidFENError(f"Invalid FEN (need 6 fields, got {len(parts)}): {fen!r}")

    placement, side_part, castling_part, ep_part, half_part, full_part = parts

    board = _parse_placement(placement, fen)
    side = _parse_side(side_part)
    castling = _parse_castling(castling_part)
    ep = _parse_en_passant(ep_part, side)
    halfmove = _parse_counter(half_part, "halfmove clock", minimum=0)
    fullmove = _parse_counter(full_part, "fullmove number", minimum=1)

    return Position(board, side, castling, ep, halfmove, fullmove)


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise InvalidFENError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")

    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not 1 <= step <= 8:
                    raise InvalidFENError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise InvalidFENError(f"Invalid FEN rank width: {fen!r}")
                try:
                    board[SQUARES[rank * 8 + file]] = Piece.from_char(ch)
                except ValueError as exc:
                    raise InvalidFENError(f"Invalid FEN piece {ch!r}: {fen!r}") from exc
                file += 1
            if file > 8:
                raise InvalidFENError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise InvalidFENError(f"Invalid FEN rank width: {fen!r}")

    for color in Color:
        kings = board.count(color, PieceType.KING)
        if kings != 1:
            raise InvalidFENError(f"Invalid FEN: {color} has {kings} kings: {fen!r}")
        if board.count(color) > _MAX_PIECES_PER_SIDE:
            raise InvalidFENError(f"Invalid FEN: too many {color} pieces: {fen!r}")
        if board.pieces_bitboard(color, PieceType.PAWN) & _BACK_RANKS_MASK:
            raise InvalidFENError(f"Invalid FEN: {color} pawn on a back rank: {fen!r}")
    return board


def _parse_side(side_part: str) -> Color:
    if side_part == "w":
        return Color.WHITE
    if side_part == "b":
        return Color.BLACK
    raise InvalidFENError(f"Invalid FEN side-to-move field: {side_part!r}")


def _parse_castling(castling_part: str) -> CastlingRights:
    castling = CastlingRights.NONE
    if castling_part == "-":
        return castling

    rights = dict(_CASTLING_LETTERS)
    for ch in castling_part:
        right = rights.get(ch)
        if right is None or castling & right:
            raise InvalidFENError(f"Invalid FEN castling field: {castling_part!r}")
        castling |= right
    return castling


def _parse_en_passant(ep_part: str, side: Color) -> Square | None:
    if ep_part == "-":
        return None
    try:
        ep = Square.parse(ep_part)
    except ValueError as exc:
        raise InvalidFENError(f"Invalid FEN en-passant square: {ep_part!r}") from exc

    # White to move means black just pushed: the target sits on rank 6.
    expected_rank = 5 if side == Color.WHITE else 2
    if ep.rank != expected_rank:
        raise InvalidFENError(
            f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
        )
    return ep


def _parse_counter(text: str, label: str, minimum: int) -> int:
    if not (text.isascii() and text.isdigit()) or int(text) < minimum:
        raise InvalidFENError(f"Invalid FEN {label}: {text!r}")
    return int(text)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = pos.board[SQUARES[rank * 8 + file]]
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    side_str = "w" if pos.side_to_move == Color.WHITE else "b"
    castling_str = "".join(ch for ch, right in _CASTLING_LETTERS if pos.castling & right)
    ep_str = pos.en_passant.name if pos.en_passant is not None else "-"

    return (
        f"{board_str} {side_str} {castling_str or '-'} {ep_str} "
        f"{pos.halfmove_clock} {pos.fullmove_number}"
    )
