"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chessrules.core.enums import MoveFlag, PieceType
from chessrules.core.types import Square

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}
_PROMO_KINDS: dict[str, PieceType] = {v: k for k, v in _PROMO_CHARS.items()}


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    Moves produced by the engine carry the moving and captured piece kinds
    and their :class:`MoveFlag`. A move proposed by a collaborator only needs
    ``from_sq``, ``to_sq`` and, for promotions, ``promotion``; the engine
    resolves it against its own legal set (see :meth:`matches`).
    """

    from_sq: Square
    to_sq: Square
    piece: PieceType | None = None
    captured: PieceType | None = None
    promotion: PieceType | None = None
    flag: MoveFlag = MoveFlag.NORMAL
    is_check: bool = False
    is_checkmate: bool = False

    @property
    def is_castle(self) -> bool:
        return self.flag in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)

    @property
    def is_en_passant(self) -> bool:
        return self.flag == MoveFlag.EN_PASSANT

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def matches(self, other: Move) -> bool:
        """Same from/to/promotion, ignoring descriptive fields."""
        return (
            self.from_sq == other.from_sq
            and self.to_sq == other.to_sq
            and self.promotion == other.promotion
        )

    def with_outcome(self, is_check: bool, is_checkmate: bool) -> Move:
        return replace(self, is_check=is_check, is_checkmate=is_checkmate)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return self.uci

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation, e.g. ``e7e8q``."""
        base = f"{self.from_sq.name}{self.to_sq.name}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base

    @classmethod
    def from_uci(cls, text: str) -> Move:
        """Parse a bare move request such as ``'e2e4'`` or ``'e7e8q'``."""
        if len(text) not in (4, 5):
            raise ValueError(f"Invalid UCI move: {text!r}")
        promotion: PieceType | None = None
        if len(text) == 5:
            promotion = _PROMO_KINDS.get(text[4].lower())
            if promotion is None:
                raise ValueError(f"Invalid UCI promotion: {text!r}")
        return cls(Square.parse(text[:2]), Square.parse(text[2:4]), promotion=promotion)
