from __future__ import annotations

from collections import Counter
from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from ..hex_engine.board import HexState
from ..hex_engine.hex_coord import HexCoord

# -------------------------------------------------------------------------------
# CONSTANTS
# -------------------------------------------------------------------------------
# Neighbouring offsets (d_row, d_col). The order matters: it indexes the
# per-side base scores below and the freedom weights.
HEX_NEIGHBORS: Tuple[Tuple[int, int], ...] = (
    (0, -1), (0, 1),    # left, right
    (-1, 0), (1, 0),    # up, down
    (-1, 1), (1, -1),   # up-right, down-left
)

_NEAR_SCORES: Mapping[HexState, Tuple[int, ...]] = MappingProxyType({
    HexState.RED:  (3, 3, 2, 2, 3, 3),
    HexState.BLUE: (2, 2, 3, 3, 3, 3),
})

# Playable cells next to a stone, relative, with their base score
NEAR_HEX_VALUES: Mapping[HexState, Tuple[HexCoord, ...]] = MappingProxyType({
    side: tuple(HexCoord.scored(dr, dc, score) for (dr, dc), score in zip(HEX_NEIGHBORS, scores))
    for side, scores in _NEAR_SCORES.items()
})

# Two-step links: (target offset, guard offsets)
BRIDGE_TEMPLATES: Tuple[Tuple[Tuple[int, int], Tuple[Tuple[int, int], Tuple[int, int]]], ...] = (
    ((1, -2),  ((0, -1), (1, -1))),
    ((2, -1),  ((1, -1), (1, 0))),
    ((1, 1),   ((1, 0), (0, 1))),
    ((-1, 2),  ((-1, 1), (0, 1))),
    ((-2, 1),  ((-1, 1), (-1, 0))),
    ((-1, -1), ((-1, 0), (0, -1))),
)

_FAR_SCORES: Mapping[HexState, Tuple[int, ...]] = MappingProxyType({
    HexState.RED:  (6, 4, 5, 6, 4, 5),
    HexState.BLUE: (4, 6, 5, 4, 6, 5),
})

# Playable bridge cells relative to a stone; guards are relative too
FAR_HEX_VALUES: Mapping[HexState, Tuple[HexCoord, ...]] = MappingProxyType({
    side: tuple(
        HexCoord.bridge(dr, dc, score, tuple(HexCoord.plain(gr, gc) for gr, gc in guards))
        for ((dr, dc), guards), score in zip(BRIDGE_TEMPLATES, scores)
    )
    for side, scores in _FAR_SCORES.items()
})

# Weight of each free neighbour, keyed by (side, sign of the direction)
AROUND_VALUES: Mapping[Tuple[HexState, int], Tuple[int, ...]] = MappingProxyType({
    (HexState.RED, 1):   (1, 3, 2, 2, 1, 3),
    (HexState.RED, -1):  (3, 1, 2, 2, 3, 1),
    (HexState.BLUE, 1):  (2, 1, 1, 3, 3, 2),
    (HexState.BLUE, -1): (2, 3, 3, 1, 1, 2),
})

TARGET_SIDE_BONUS = 10
FREE_TARGET_BONUS = 6

# Phases of the computer player that can decide a move
STRATEGIES: Tuple[str, ...] = (
    "opening",
    "defend_bridge",
    "consolidate_bridge",
    "best_candidate",
)

_STRATEGY_COUNTER: Counter = Counter()

LAST_STRATEGY_USED: str | None = None


# -------------------------------------------------------------------------------
# GENERAL HELPER FUNCTIONS FOR RULE BASED AGENT
# -------------------------------------------------------------------------------
def axis_coordinate(side: HexState, row: int, col: int) -> int:
    """Coordinate along the axis a side has to cross: column for red, row for blue."""
    return col if side is HexState.RED else row


def on_target_border(side: HexState, row: int, col: int, direction: int, size: int) -> bool:
    """Whether a cell lies on the border the side is heading to."""
    axis = axis_coordinate(side, row, col)
    return (axis == 0 and direction < 0) or (axis == size - 1 and direction > 0)


def bump_strategy(name: str) -> None:
    """Increment global usage count for `name`."""
    global LAST_STRATEGY_USED
    LAST_STRATEGY_USED = name
    _STRATEGY_COUNTER[name] += 1


def get_strategy_counts() -> Dict[str, int]:
    """Return a *shallow copy* so callers cannot mutate the original."""
    return dict(_STRATEGY_COUNTER)


def reset_strategy_counts() -> None:
    global LAST_STRATEGY_USED
    LAST_STRATEGY_USED = None
    _STRATEGY_COUNTER.clear()


def print_strategy_summary(counts: Dict[str, int] | None = None) -> None:
    """
    Prints a summary of how many times each phase decided a move.

    Args:
        counts (dict, optional): strategy name -> number of moves. Defaults to
            the module-wide counter.
    """
    counts = get_strategy_counts() if counts is None else counts
    print("\n Strategy usage summary:")
    for k in STRATEGIES:
        print(f"  {k}: {counts.get(k, 0)} times")
