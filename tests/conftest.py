import random

import pytest

from river_hex.agents import rule_based_helper
from river_hex.agents.rule_based_agent import RuleBasedStrategy, StrategicMode
from river_hex.hex_engine.board import HexBoard, HexState, Level


class FixedRandom(random.Random):
    """Always answers the same index, to pin the opening orientation."""

    def __init__(self, value):
        super().__init__(0)
        self.value = value

    def randrange(self, *args, **kwargs):
        return self.value


@pytest.fixture(autouse=True)
def _fresh_strategy_counts():
    rule_based_helper.reset_strategy_counts()
    yield
    rule_based_helper.reset_strategy_counts()


def make_strategy(color, level, own=(), opponent=(), direction=1,
                  mode=StrategicMode.EXPAND, size=7, board=None):
    """Strategy over a board holding exactly the stones of both histories."""
    board = HexBoard(size) if board is None else board
    own = list(own)
    opponent = list(opponent)
    for coord in own:
        board.set_state(coord.row, coord.col, color)
    for coord in opponent:
        board.set_state(coord.row, coord.col, HexState(color).opponent)
    return RuleBasedStrategy.restore(board, color, Level(level), mode, direction, own, opponent)
