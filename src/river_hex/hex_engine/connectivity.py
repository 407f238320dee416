"""river_hex.hex_engine.connectivity
===================================
Win detection for a :class:`~river_hex.hex_engine.board.HexBoard`.

``find_winner`` walks the board depth-first from every border cell, red
first then blue for each border index, and returns the first chain that
reaches the opposite border. The neighbour order is fixed so the same board
always yields the same winner and the same path.
"""
from __future__ import annotations

from typing import List, Optional, Set, Tuple

from .board import Coordinate, HexBoard, HexState

# down, up, right, left, up-right, down-left
SEARCH_ORDER: List[Coordinate] = [
    (1, 0), (-1, 0),
    (0, 1), (0, -1),
    (-1, 1), (1, -1),
]

WinResult = Tuple[HexState, List[Coordinate]]


def _touches_target(side: HexState, cell: Coordinate, size: int) -> bool:
    if side is HexState.RED:
        return cell[1] == size - 1
    return cell[0] == size - 1


def search_path(board: HexBoard, side: HexState, start: Coordinate,
                explored: Optional[Set[Coordinate]] = None) -> Optional[List[Coordinate]]:
    """Depth-first search for a chain of ``side`` stones from ``start``.

    Returns the chain (start first) once a cell on the target border is
    reached, or ``None``. A branch ends on a cell off the board, of another
    colour, or already explored.

    ``explored`` may be shared between calls on the same board. A cell that
    has been fully explored without reaching the border can only lead to
    cells that are themselves exhausted or still on the current path, so
    skipping it yields the same first path as a search that only forbids
    revisiting cells of the current path, without the exponential blow-up.
    """
    if explored is None:
        explored = set()
    if start in explored or not board.in_bounds(*start) or board.cell_state(*start) is not side:
        return None
    explored.add(start)
    if _touches_target(side, start, board.size):
        return [start]

    path = [start]
    # one cursor into SEARCH_ORDER per cell of the path
    cursors = [0]
    while path:
        row, col = path[-1]
        k = cursors[-1]
        if k == len(SEARCH_ORDER):
            path.pop()
            cursors.pop()
            continue
        cursors[-1] = k + 1
        d_row, d_col = SEARCH_ORDER[k]
        nxt = (row + d_row, col + d_col)
        if nxt in explored or not board.in_bounds(*nxt) or board.cell_state(*nxt) is not side:
            continue
        explored.add(nxt)
        path.append(nxt)
        if _touches_target(side, nxt, board.size):
            return path
        cursors.append(0)
    return None


def find_winner(board: HexBoard) -> Optional[WinResult]:
    """Return ``(winner, path)`` or ``None`` when nobody has connected yet.

    For each border index ``i`` the red chain starting at ``(i, 0)`` is tried
    before the blue chain starting at ``(0, i)``. The board is not modified.
    """
    explored: Set[Coordinate] = set()
    for i in range(board.size):
        path = search_path(board, HexState.RED, (i, 0), explored)
        if path is not None:
            return HexState.RED, path
        path = search_path(board, HexState.BLUE, (0, i), explored)
        if path is not None:
            return HexState.BLUE, path
    return None


def has_won(board: HexBoard, side: HexState) -> bool:
    explored: Set[Coordinate] = set()
    for i in range(board.size):
        start = (i, 0) if side is HexState.RED else (0, i)
        if search_path(board, side, start, explored) is not None:
            return True
    return False
