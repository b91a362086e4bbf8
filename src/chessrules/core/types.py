"""Square value type and coordinate helpers.

Board layout (Little-Endian Rank-File mapping)::

    a1=0, b1=1, ..., h1=7
    a2=8, b2=9, ..., h2=15
    ...
    a8=56, b8=57, ..., h8=63

Squares compare file-major, rank-minor (a1 < a2 < ... < a8 < b1).
"""

from __future__ import annotations

from dataclasses import dataclass

_FILES = "abcdefgh"
_RANKS = "12345678"


@dataclass(frozen=True, slots=True, order=True)
class Square:
    """A board coordinate: ``file`` and ``rank`` in 0–7."""

    file: int
    rank: int

    @property
    def index(self) -> int:
        """Linear index 0–63."""
        return self.rank * 8 + self.file

    @property
    def name(self) -> str:
        """Algebraic name, e.g. ``'e4'``."""
        return _FILES[self.file] + _RANKS[self.rank]

    @property
    def is_light(self) -> bool:
        return (self.file + self.rank) % 2 == 1

    def offset(self, df: int, dr: int) -> Square | None:
        """Square shifted by (*df*, *dr*), or ``None`` off the board."""
        f = self.file + df
        r = self.rank + dr
        if 0 <= f < 8 and 0 <= r < 8:
            return SQUARES[r * 8 + f]
        return None

    @classmethod
    def from_index(cls, index: int) -> Square:
        if not 0 <= index < 64:
            raise ValueError(f"Square index out of range: {index!r}")
        return SQUARES[index]

    @classmethod
    def parse(cls, name: str) -> Square:
        """Parse a square name, e.g. ``'e4'``."""
        if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
            raise ValueError(f"Invalid square name: {name!r}")
        return SQUARES[_RANKS.index(name[1]) * 8 + _FILES.index(name[0])]

    def __str__(self) -> str:
        return self.name


SQUARES: tuple[Square, ...] = tuple(
    Square(index & 7, index >> 3) for index in range(64)
)


def parse_square(name: str) -> Square:
    """Module-level alias of :meth:`Square.parse`."""
    return Square.parse(name)


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = SQUARES[0:8]
A2, B2, C2, D2, E2, F2, G2, H2 = SQUARES[8:16]
A3, B3, C3, D3, E3, F3, G3, H3 = SQUARES[16:24]
A4, B4, C4, D4, E4, F4, G4, H4 = SQUARES[24:32]
A5, B5, C5, D5, E5, F5, G5, H5 = SQUARES[32:40]
A6, B6, C6, D6, E6, F6, G6, H6 = SQUARES[40:48]
A7, B7, C7, D7, E7, F7, G7, H7 = SQUARES[48:56]
A8, B8, C8, D8, E8, F8, G8, H8 = SQUARES[56:64]
