"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterator

from chessrules.core.enums import Color, PieceType
from chessrules.core.piece import Piece
from chessrules.core.types import SQUARES, Square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def squares_of(bitboard: int) -> list[Square]:
    """Squares set in *bitboard*, in index order."""
    squares: list[Square] = []
    while bitboard:
        lsb = bitboard & -bitboard
        squares.append(SQUARES[lsb.bit_length() - 1])
        bitboard ^= lsb
    return squares


class Board:
    """64-square storage with per-side occupancy indexes.

    A board is filled while a position is being built (standard setup, FEN
    import, or applying a move to a scratch copy) and is treated as frozen
    once it belongs to a :class:`~chessrules.core.position.Position`.
    """

    __slots__ = ("_squares", "_kind_bitboards", "_color_bitboards")

    def __init__(self) -> None:
        self._squares: list[Piece | None] = [None] * 64
        # [color][kind-1] -> bitboard of occupied squares.
        self._kind_bitboards: list[list[int]] = [[0] * 6 for _ in range(2)]
        self._color_bitboards: list[int] = [0, 0]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq.index]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        idx = sq.index
        old = self._squares[idx]
        if old == piece:
            return

        mask = 1 << idx
        if old is not None:
            self._kind_bitboards[old.color][old.kind - 1] &= ~mask
            self._color_bitboards[old.color] &= ~mask

        self._squares[idx] = piece
        if piece is not None:
            self._kind_bitboards[piece.color][piece.kind - 1] |= mask
            self._color_bitboards[piece.color] |= mask

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq.index] is None

    def items(self) -> Iterator[tuple[Square, Piece]]:
        """Occupied squares with their pieces, in index order."""
        for idx, piece in enumerate(self._squares):
            if piece is not None:
                yield SQUARES[idx], piece

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, kind: PieceType) -> list[Square]:
        """Squares occupied by *color*'s pieces of *kind*."""
        return squares_of(self._kind_bitboards[color][kind - 1])

    def pieces_bitboard(self, color: Color, kind: PieceType) -> int:
        return self._kind_bitboards[color][kind - 1]

    def occupied(self, color: Color) -> list[Square]:
        """All squares occupied by *color*."""
        return squares_of(self._color_bitboards[color])

    def occupied_bitboard(self, color: Color) -> int:
        return self._color_bitboards[color]

    def count(self, color: Color, kind: PieceType | None = None) -> int:
        if kind is None:
            return self._color_bitboards[color].bit_count()
        return self._kind_bitboards[color][kind - 1].bit_count()

    def king_square(self, color: Color) -> Square | None:
        """Square of *color*'s king, or ``None`` if it has none."""
        kings = self._kind_bitboards[color][PieceType.KING - 1]
        if not kings:
            return None
        return SQUARES[(kings & -kings).bit_length() - 1]

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = self._squares.copy()
        b._kind_bitboards = [row.copy() for row in self._kind_bitboards]
        b._color_bitboards = self._color_bitboards.copy()
        return b

    def key(self) -> tuple[Piece | None, ...]:
        """Hashable snapshot of the placement."""
        return tuple(self._squares)

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f, kind in enumerate(_BACK_RANK):
            b[SQUARES[f]] = Piece(Color.WHITE, kind)
            b[SQUARES[8 + f]] = Piece(Color.WHITE, PieceType.PAWN)
            b[SQUARES[48 + f]] = Piece(Color.BLACK, PieceType.PAWN)
            b[SQUARES[56 + f]] = Piece(Color.BLACK, kind)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = [str(p) if p else "." for p in self._squares[rank * 8 : rank * 8 + 8]]
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
