from __future__ import annotations

from enum import IntEnum
from typing import List, Tuple

import numpy as np

Coordinate = Tuple[int, int]


class HexState(IntEnum):
    """Ownership of a cell. Also used for "side to move" and "winner"."""
    NONE = 0
    RED = 1     # connects column 0 with column size-1
    BLUE = 2    # connects row 0 with row size-1

    @property
    def opponent(self) -> "HexState":
        if self is HexState.RED:
            return HexState.BLUE
        if self is HexState.BLUE:
            return HexState.RED
        return HexState.NONE


class HexBoard(object):
    """
    A ``size*size`` rhombus of hexagonal cells.

    Parameters
    ----------
    size : int
        Board side length.

    Attributes
    ----------
    size : int
        The size of the board. The board never changes shape.
    cells : numpy.ndarray
        ``int8`` array holding a :class:`HexState` value per cell, row-major.

    Queries outside the board never raise: :meth:`cell_state` reports
    ``HexState.NONE`` and :meth:`is_playable` reports ``False``, which keeps the
    neighbour loops of the computer player free of bounds checks.
    """

    def __init__(self, size: int = 7):
        if size < 1:
            raise ValueError(f"Board size must be positive, got {size}.")
        self.size = size
        self.cells = np.zeros((size, size), dtype=np.int8)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def cell_state(self, row: int, col: int) -> HexState:
        if not self.in_bounds(row, col):
            return HexState.NONE
        return HexState(int(self.cells[row, col]))

    def is_playable(self, row: int, col: int) -> bool:
        return self.in_bounds(row, col) and int(self.cells[row, col]) == HexState.NONE

    def set_state(self, row: int, col: int, state: HexState) -> bool:
        """Force the state of a cell. Returns ``False`` for a cell off the board."""
        if not self.in_bounds(row, col):
            return False
        self.cells[row, col] = int(state)
        return True

    def busy_count(self) -> int:
        return int(np.count_nonzero(self.cells))

    def is_empty(self) -> bool:
        return self.busy_count() == 0

    def empty_cells(self) -> List[Coordinate]:
        """Empty coordinates in row-major order."""
        return [(int(r), int(c)) for r, c in np.argwhere(self.cells == HexState.NONE)]

    # ------------------------------------------------------------------
    # Text rendering
    # ------------------------------------------------------------------
    def render(self) -> str:
        """Unicode drawing of the board, one row per line pair.

        Columns are labelled with letters, rows with numbers starting at 1,
        which is also the notation accepted by :func:`translator`.
        """
        names = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
        symbol = {HexState.NONE: ' ', HexState.RED: '●', HexState.BLUE: '○'}
        lines = []
        indent = 0
        headings = " "*5 + (" "*3).join(names[:self.size])
        lines.append(headings)
        lines.append(" "*5 + (" "*3).join("_"*self.size))
        lines.append(" "*4 + "/ \\" + "_/ \\" * (self.size - 1))
        for r in range(self.size):
            row_mid = " "*indent + "   | " + " | ".join(
                symbol[HexState(int(v))] for v in self.cells[r]
            ) + f" | {r+1} "
            lines.append(row_mid)
            row_bottom = " "*indent + " "*3 + " \\/"*self.size
            if r < self.size - 1:
                row_bottom += " \\"
            lines.append(row_bottom)
            indent += 2
        lines.append(" "*(indent-2) + headings)
        return "\n".join(lines)


def translator(text: str, size: int = 26) -> Coordinate | None:
    """Translate human terminal input such as ``"C4"`` into ``(row, col)``.

    The letter names the column, the number the row (1-based). Returns
    ``None`` for anything that does not address a cell of a ``size`` board.
    """
    names = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    text = text.strip().upper()
    if len(text) < 2 or text[0] not in names[:size] or not text[1:].isdigit():
        return None
    row = int(text[1:]) - 1
    col = names.index(text[0])
    if not 0 <= row < size:
        return None
    return (row, col)


class Level(IntEnum):
    """Playing strength of the computer player."""
    EASY = 0
    MEDIUM = 1
    HARD = 2


class PlayerType(IntEnum):
    HUMAN = 0
    COMPUTER = 1
