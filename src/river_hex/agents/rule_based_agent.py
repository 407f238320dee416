"""river_hex.agents.rule_based_agent
===================================
The computer player of RiverHex.

One :class:`RuleBasedStrategy` exists per computer-controlled side. It does
not own anything it reads: the board and both move histories belong to the
match (:class:`river_hex.hex_engine.hexPosition`), which is also the only one
appending to them. What the strategy does own is small and persisted with the
match:

* ``mode``      - ``EXPAND`` while racing for the borders, ``CONSOLIDATE``
  once both borders have been touched.
* ``direction`` - signed; the sign is the way the side currently expands
  along its axis, the magnitude counts borders reached (1, 2, 4).

A move is chosen by the first phase that applies:

1. bridge defence (not at EASY),
2. direction update,
3. scoring of every cell next to, or a bridge away from, an own stone.
"""
from __future__ import annotations

import random
from enum import IntEnum
from typing import List, Optional, Sequence

from ..hex_engine.board import HexBoard, HexState, Level
from ..hex_engine.errors import InvariantViolation
from ..hex_engine.hex_coord import HexCoord
from .rule_based_helper import (
    AROUND_VALUES, FAR_HEX_VALUES, FREE_TARGET_BONUS, HEX_NEIGHBORS,
    NEAR_HEX_VALUES, TARGET_SIDE_BONUS,
    axis_coordinate, bump_strategy, on_target_border,
)


class StrategicMode(IntEnum):
    EXPAND = 0
    CONSOLIDATE = 1


class RuleBasedStrategy(object):
    """
    Heuristic move selection for one side.

    Parameters
    ----------
    board : HexBoard
        The live board of the match (read only).
    color : HexState
        ``RED`` or ``BLUE``.
    level : Level
        EASY skips bridges entirely, HARD adds the free-neighbour bonus.
    history, opponent_history : list[HexCoord]
        Live move lists of the match, in play order (read only).
    rng : random.Random, optional
        Source for the opening orientation.
    print_debug : bool, optional
        Print the candidate pool and tactical alerts to stdout.
    """

    def __init__(self, board: HexBoard, color: HexState, level: Level,
                 history: Sequence[HexCoord], opponent_history: Sequence[HexCoord],
                 rng: Optional[random.Random] = None, print_debug: bool = False):
        if color not in (HexState.RED, HexState.BLUE):
            raise ValueError(f"A strategy plays red or blue, not {color!r}.")
        self.board = board
        self.color = HexState(color)
        self.level = Level(level)
        self.history = history
        self.opponent_history = opponent_history
        self.rng = rng if rng is not None else random.Random()
        self.print_debug = print_debug
        self.mode = StrategicMode.EXPAND
        self.direction = 0

    @classmethod
    def restore(cls, board: HexBoard, color: HexState, level: Level,
                mode: StrategicMode, direction: int,
                history: Sequence[HexCoord], opponent_history: Sequence[HexCoord],
                rng: Optional[random.Random] = None) -> "RuleBasedStrategy":
        """Rebuild a strategy from its saved fields."""
        strategy = cls(board, color, level, history, opponent_history, rng=rng)
        strategy.mode = StrategicMode(mode)
        strategy.direction = int(direction)
        return strategy

    # ==============================================================
    # Public entry point
    # ==============================================================
    def compute_move(self) -> HexCoord:
        """Pick the next cell for this side.

        Only valid on this side's turn with at least one empty cell left.
        Raises :class:`InvariantViolation` if scoring ever picks a cell that
        is not playable.
        """
        if not self.history:
            play = self._first_play()
        else:
            play = self._general_strategy()

        if not self.board.is_playable(play.row, play.col):
            raise InvariantViolation(
                f"{self.color.name} selected {play} which is not an empty cell.")
        return play

    # ==============================================================
    # Phases
    # ==============================================================
    def _first_play(self) -> HexCoord:
        # Choose a way of expansion, then aim at the middle of the board
        self.direction = -1 if self.rng.randrange(2) == 0 else 1
        center = (self.board.size - 1) // 2

        # Slide across the own axis when the middle is taken
        for orientation in (self.direction, -self.direction):
            row, col = center, center
            while self.board.in_bounds(row, col):
                if self.board.is_playable(row, col):
                    play = HexCoord.plain(row, col)
                    self._debug_decision(None, play)
                    bump_strategy("opening")
                    return play
                if self.color is HexState.RED:
                    row -= orientation
                else:
                    col -= orientation
        raise InvariantViolation(
            f"No empty cell on the opening line of {self.color.name}.")

    def _general_strategy(self) -> HexCoord:
        farlink = self._check_far_links()
        if farlink is not None:
            return farlink

        self._update_direction()

        potential: List[HexCoord] = []
        for base in self.history:
            potential.extend(self.evaluate_playable(base))
        if not potential:
            raise InvariantViolation(
                f"{self.color.name} has no candidate around its {len(self.history)} stones.")

        decision = potential[0]
        for candidate in potential[1:]:
            if candidate.score > decision.score:
                decision = candidate

        self._debug_decision(potential, decision)
        bump_strategy("best_candidate")
        return decision

    def _check_far_links(self) -> Optional[HexCoord]:
        """Answer an intrusion into a previous bridge.

        In CONSOLIDATE mode an untouched bridge is closed as well (its first
        guard, from the last such bridge in the history).
        """
        if self.level is Level.EASY:
            return None

        opponent = self.color.opponent
        link_to_do = None
        for previous in self.history:
            if not previous.is_bridge:
                continue
            guard1, guard2 = previous.guards[0], previous.guards[1]
            state1 = self.board.cell_state(guard1.row, guard1.col)
            state2 = self.board.cell_state(guard2.row, guard2.col)
            if state1 is opponent and state2 is HexState.NONE:
                self._debug_message(f"!Far link alert ->{guard2}")
                bump_strategy("defend_bridge")
                return guard2
            elif state2 is opponent and state1 is HexState.NONE:
                self._debug_message(f"!Far link alert ->{guard1}")
                bump_strategy("defend_bridge")
                return guard1
            elif state1 is HexState.NONE and state2 is HexState.NONE:
                link_to_do = guard1

        if self.mode is StrategicMode.CONSOLIDATE and link_to_do is not None:
            self._debug_message(f"!Consolidate far link ->{link_to_do}")
            bump_strategy("consolidate_bridge")
            return link_to_do
        return None

    def _update_direction(self) -> None:
        last = self.history[-1]
        size = self.board.size

        # A border was touched: turn around, remember it in the magnitude
        if on_target_border(self.color, last.row, last.col, self.direction, size):
            self.direction = -self.direction * 2
            if abs(self.direction) == 4:
                self.mode = StrategicMode.CONSOLIDATE
                self._debug_message("! Both side touched, change mode")
            else:
                self._debug_message("! Side touch direction changed")

        # Follow the opponent while no border has been reached yet
        elif (self.level is not Level.EASY and abs(self.direction) < 2
              and self.opponent_history):
            opponent = self.opponent_history[-1]
            coord = axis_coordinate(self.color, opponent.row, opponent.col)
            middle = size // 2
            if (coord < middle and self.direction > 0) or (coord > middle and self.direction < 0):
                self.direction = -self.direction
                self._debug_message("! Change direction to match opponent")

    # ==============================================================
    # Scoring
    # ==============================================================
    def evaluate_playable(self, base: HexCoord) -> List[HexCoord]:
        """Scored candidates around one stone, near cells first then bridges."""
        board = self.board
        potential: List[HexCoord] = []
        for template in NEAR_HEX_VALUES[self.color]:
            test = template + base
            if board.is_playable(test.row, test.col):
                potential.append(test)

        if self.level is not Level.EASY:
            for template in FAR_HEX_VALUES[self.color]:
                test = template + base
                if not board.is_playable(test.row, test.col):
                    continue
                guards = tuple(guard + base for guard in template.guards)
                if all(board.is_playable(g.row, g.col) for g in guards):
                    potential.append(HexCoord.bridge(test.row, test.col, test.score, guards))

        return [candidate.with_score(self.score(candidate)) for candidate in potential]

    def score(self, candidate: HexCoord) -> int:
        """Base score plus the progress bonus, plus the freedom bonus at HARD."""
        size = self.board.size
        value = candidate.score
        axis = axis_coordinate(self.color, candidate.row, candidate.col)
        value += size - axis if self.direction < 0 else axis
        if on_target_border(self.color, candidate.row, candidate.col, self.direction, size):
            value += TARGET_SIDE_BONUS

        if self.level is Level.HARD:
            sign = 1 if self.direction > 0 else -1
            value += self._free_around(candidate, AROUND_VALUES[(self.color, sign)], sign)
        return value

    def _free_around(self, base: HexCoord, weights: Sequence[int], direction: int) -> int:
        total = 0
        for (d_row, d_col), weight in zip(HEX_NEIGHBORS, weights):
            row, col = base.row + d_row, base.col + d_col
            # off-board neighbours read as empty
            if self.board.cell_state(row, col) is HexState.NONE:
                total += weight
                if on_target_border(self.color, row, col, direction, self.board.size):
                    total += FREE_TARGET_BONUS
        return total

    # ==============================================================
    # Debug output
    # ==============================================================
    def _debug_decision(self, playable: Optional[List[HexCoord]], choice: HexCoord) -> None:
        if not self.print_debug:
            return
        if playable is not None:
            print(" ".join(f"({c.row},{c.col},{c.score})" for c in playable))
        print(f"->{choice}")

    def _debug_message(self, message: str) -> None:
        if self.print_debug:
            print(message)
