"""river_hex.hex_engine.hex_coord
================================
Cell addresses used by the board, the match history and the computer player.

A single :class:`HexCoord` type carries an explicit :class:`CoordKind`
discriminant instead of three subclasses:

* ``PLAIN``  - a bare ``(row, col)`` address (human moves, the opening move).
* ``SCORED`` - adds the heuristic ``score`` it was chosen with.
* ``BRIDGE`` - adds the ``score`` **and** the two guard cells that must stay
  empty for the two-step link to remain secure.

The kind is what the save-file codec writes as the record tag, so it has to
survive a round-trip through :mod:`river_hex.hex_engine.persistence`.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Tuple


class CoordKind(IntEnum):
    PLAIN = 1
    SCORED = 2
    BRIDGE = 3


@dataclass(frozen=True)
class HexCoord:
    row: int
    col: int
    kind: CoordKind = CoordKind.PLAIN
    score: int = 0
    guards: Tuple["HexCoord", ...] = ()

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def plain(cls, row: int, col: int) -> "HexCoord":
        return cls(row, col)

    @classmethod
    def scored(cls, row: int, col: int, score: int) -> "HexCoord":
        return cls(row, col, CoordKind.SCORED, score)

    @classmethod
    def bridge(cls, row: int, col: int, score: int,
               guards: Tuple["HexCoord", ...]) -> "HexCoord":
        return cls(row, col, CoordKind.BRIDGE, score, tuple(guards))

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------
    def __add__(self, other) -> "HexCoord":
        """Translate by a relative offset.

        The offset may be another :class:`HexCoord` or a plain ``(d_row, d_col)``
        tuple. Kind, score and guards of the left operand are kept, the same
        way a bridge template keeps its score when anchored on a stone.
        """
        d_row, d_col = (other.row, other.col) if isinstance(other, HexCoord) else other
        return replace(self, row=self.row + d_row, col=self.col + d_col)

    def with_score(self, score: int) -> "HexCoord":
        return replace(self, score=score)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.row, self.col)

    @property
    def is_bridge(self) -> bool:
        return self.kind is CoordKind.BRIDGE

    def __str__(self) -> str:
        return f"({self.row},{self.col})"
