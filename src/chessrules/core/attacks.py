"""Attack and check detection.

Pure functions of their arguments: nothing here reads or writes anything
except the board passed in.
"""

from __future__ import annotations

from chessrules.core.board import Board, squares_of
from chessrules.core.enums import Color, PieceType
from chessrules.core.types import SQUARES, Square

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

Ray = tuple[Square, ...]


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(offsets: tuple[tuple[int, int], ...]) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in SQUARES:
        hops = (sq.offset(df, dr) for df, dr in offsets)
        targets.append(tuple(to_sq for to_sq in hops if to_sq is not None))
    return tuple(targets)


def _to_mask(squares: tuple[Square, ...]) -> int:
    mask = 0
    for sq in squares:
        mask |= 1 << sq.index
    return mask


def _build_rays(directions: tuple[tuple[int, int], ...]) -> tuple[tuple[Ray, ...], ...]:
    rays: list[tuple[Ray, ...]] = []
    for sq in SQUARES:
        square_rays: list[Ray] = []
        for df, dr in directions:
            ray: list[Square] = []
            nxt = sq.offset(df, dr)
            while nxt is not None:
                ray.append(nxt)
                nxt = nxt.offset(df, dr)
            square_rays.append(tuple(ray))
        rays.append(tuple(square_rays))
    return tuple(rays)


def _build_pawn_attackers(color: Color) -> tuple[int, ...]:
    # Squares from which a *color* pawn would attack each target square:
    # one rank behind the target from that pawn's point of view.
    back = -color.pawn_direction
    return tuple(
        _to_mask(tuple(s for s in (sq.offset(-1, back), sq.offset(1, back)) if s))
        for sq in SQUARES
    )


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)
_KNIGHT_MASKS = tuple(_to_mask(t) for t in KNIGHT_TARGETS)
_KING_MASKS = tuple(_to_mask(t) for t in KING_TARGETS)
_PAWN_ATTACKERS = (_build_pawn_attackers(Color.WHITE), _build_pawn_attackers(Color.BLACK))

BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)


def _slider_hits(
    sq: Square,
    by_color: Color,
    board: Board,
    rays: tuple[tuple[Ray, ...], ...],
    kinds: tuple[PieceType, PieceType],
) -> list[Square]:
    hits: list[Square] = []
    for ray in rays[sq.index]:
        for to_sq in ray:
            piece = board[to_sq]
            if piece is None:
                continue
            if piece.color == by_color and piece.kind in kinds:
                hits.append(to_sq)
            break
    return hits


# -- Public API ---------------------------------------------------------------


def is_square_attacked(square: Square, by_color: Color, board: Board) -> bool:
    """Could some piece of *by_color* reach *square* in one pseudo-move?

    Pawns attack diagonally only, never the square in front of them.
    Sliding pieces are blocked by the first occupant of either color.
    """
    idx = square.index
    if board.pieces_bitboard(by_color, PieceType.PAWN) & _PAWN_ATTACKERS[by_color][idx]:
        return True
    if board.pieces_bitboard(by_color, PieceType.KNIGHT) & _KNIGHT_MASKS[idx]:
        return True
    if board.pieces_bitboard(by_color, PieceType.KING) & _KING_MASKS[idx]:
        return True

    queens = board.pieces_bitboard(by_color, PieceType.QUEEN)
    if (queens or board.pieces_bitboard(by_color, PieceType.BISHOP)) and _slider_hits(
        square, by_color, board, BISHOP_RAYS, (PieceType.BISHOP, PieceType.QUEEN)
    ):
        return True
    if (queens or board.pieces_bitboard(by_color, PieceType.ROOK)) and _slider_hits(
        square, by_color, board, ROOK_RAYS, (PieceType.ROOK, PieceType.QUEEN)
    ):
        return True
    return False


def attackers_of(square: Square, by_color: Color, board: Board) -> list[Square]:
    """Every square holding a *by_color* piece that attacks *square*."""
    idx = square.index
    mask = (
        (board.pieces_bitboard(by_color, PieceType.PAWN) & _PAWN_ATTACKERS[by_color][idx])
        | (board.pieces_bitboard(by_color, PieceType.KNIGHT) & _KNIGHT_MASKS[idx])
        | (board.pieces_bitboard(by_color, PieceType.KING) & _KING_MASKS[idx])
    )
    found = squares_of(mask)
    found += _slider_hits(
        square, by_color, board, BISHOP_RAYS, (PieceType.BISHOP, PieceType.QUEEN)
    )
    found += _slider_hits(
        square, by_color, board, ROOK_RAYS, (PieceType.ROOK, PieceType.QUEEN)
    )
    return sorted(found)


def is_in_check(color: Color, board: Board) -> bool:
    """Is *color*'s king attacked by the opponent?

    A board without a king for *color* is never in check.
    """
    king_sq = board.king_square(color)
    if king_sq is None:
        return False
    return is_square_attacked(king_sq, color.opposite, board)
