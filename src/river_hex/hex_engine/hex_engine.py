# river_hex.hex_engine - match orchestration
# ==============================================================
# A match of RiverHex: the board, both move histories, whose turn it is,
# the lazily created computer strategies and the end-of-game check.
#   • human_play / computer_play are the only writers of board and history
#   • the computer strategies only *read* board and histories
#   • to_bytes / from_bytes keep everything needed to resume a match,
#     including the strategies' mode and direction
# ------------------------------------------------------------------

from __future__ import annotations

import random
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Union

from ..agents.rule_based_agent import RuleBasedStrategy, StrategicMode
from .board import Coordinate, HexBoard, HexState, Level, PlayerType, translator
from .connectivity import find_winner
from .errors import PersistenceError
from .hex_coord import HexCoord
from .persistence import SavedMatch, StrategyRecord, decode_match, encode_match

MIN_SIZE, MAX_SIZE = 2, 26

# ==============================================================
# 🏗️  Game object
# ==============================================================

class hexPosition (object):
    """
    Objects of this class correspond to a match of RiverHex.

    Parameters
    ----------
    size : int, optional
        Board side length (min 2, max 26, default 7).
    red_player, blue_player : PlayerType, optional
        Who controls each side (default: human red, computer blue).
    level : Level, optional
        Strength of every computer player of the match (default EASY).
    first_player : HexState, optional
        Side making the first move (default RED).
    rng : random.Random, keyword-only, optional
        Random source handed to the computer strategies.
    print_debug : bool, keyword-only, optional
        Let the computer strategies print their reasoning.

    Attributes
    ----------
    size : int
        The size of the board. The board is 'size*size'.
    board : HexBoard
        Cell ownership. Red connects the left and right columns, blue the top
        and bottom rows.
    player : HexState
        The side who is currently required to move, ``NONE`` once ended.
    winner : HexState
        ``NONE`` while nobody has connected.
    winning_path : list[tuple[int, int]] | None
        The connecting chain of the winner, border to border.
    red_history, blue_history : list[HexCoord]
        Cells played by each side, in play order.
    """

    def __init__(self, size: int = 7,
                 red_player: PlayerType = PlayerType.HUMAN,
                 blue_player: PlayerType = PlayerType.COMPUTER,
                 level: Level = Level.EASY,
                 first_player: HexState = HexState.RED,
                 **kwargs):
        self._rng: Optional[random.Random] = kwargs.pop('rng', None)
        self.print_debug: bool = bool(kwargs.pop('print_debug', False))
        if kwargs:
            raise TypeError(
                f"Unexpected keyword argument(s): {', '.join(kwargs.keys())}"
            )
        if first_player not in (HexState.RED, HexState.BLUE):
            raise ValueError(f"First player must be red or blue, not {first_player!r}.")

        size = max(MIN_SIZE, min(size, MAX_SIZE))       # clamp board size
        self.size = size
        self.board = HexBoard(size)
        self.red_player = PlayerType(red_player)
        self.blue_player = PlayerType(blue_player)
        self.level = Level(level)
        self.first_player = HexState(first_player)
        self.player: HexState = self.first_player
        self.red_history: List[HexCoord] = []
        self.blue_history: List[HexCoord] = []
        self.ended: bool = False
        self.winner: HexState = HexState.NONE
        self.winning_path: Optional[List[Coordinate]] = None
        self._strategies: Dict[HexState, Optional[RuleBasedStrategy]] = {
            HexState.RED: None,
            HexState.BLUE: None,
        }

    # ==============================================================
    # Accessors
    # ==============================================================
    def history(self, color: HexState) -> List[HexCoord]:
        return self.blue_history if color is HexState.BLUE else self.red_history

    def get_player_type(self, color: HexState) -> PlayerType:
        """Player type of a side; ``NONE`` is answered like red."""
        if color is HexState.BLUE:
            return self.blue_player
        return self.red_player

    def strategy(self, color: HexState) -> Optional[RuleBasedStrategy]:
        return self._strategies[color]

    def get_hex_state(self, row: int, col: int) -> HexState:
        return self.board.cell_state(row, col)

    def set_hex_state(self, row: int, col: int, color: HexState) -> bool:
        """Force the state of a cell, bypassing turns and history."""
        return self.board.set_state(row, col, color)

    def is_playable(self, row: int, col: int) -> bool:
        return self.board.is_playable(row, col)

    def busy_count(self) -> int:
        return self.board.busy_count()

    def is_empty(self) -> bool:
        return self.board.is_empty()

    def legal_moves(self) -> List[Coordinate]:
        """
        Return a list of empty coordinates (row, col) that the current
        player could legally occupy. Coordinates are 0-based.
        """
        return self.board.empty_cells()

    get_action_space = legal_moves

    # ==============================================================
    # 🎮  Core gameplay primitives
    # ==============================================================
    def human_play(self, row: int, col: int) -> bool:
        """Claim a cell for the human side to move.

        Returns ``False`` when it is not a human's turn, the match is over or
        the cell is not playable.
        """
        if self.get_player_type(self.player) is not PlayerType.HUMAN or self.ended:
            return False
        if not self.board.is_playable(row, col):
            return False
        self._record_play(HexCoord.plain(row, col))
        return True

    def computer_play(self) -> Optional[HexCoord]:
        """Let the computer side to move play. Returns the chosen cell."""
        if self.get_player_type(self.player) is not PlayerType.COMPUTER or self.ended:
            return None

        strategy = self._strategies[self.player]
        if strategy is None:
            strategy = RuleBasedStrategy(
                self.board, self.player, self.level,
                self.history(self.player), self.history(self.player.opponent),
                rng=self._rng, print_debug=self.print_debug,
            )
            self._strategies[self.player] = strategy

        play = strategy.compute_move()
        self._record_play(play)
        return play

    def _record_play(self, play: HexCoord) -> None:
        self.board.set_state(play.row, play.col, self.player)
        self.history(self.player).append(play)
        self.player = self.player.opponent
        self._check_end_of_game()

    def is_ended(self) -> Tuple[bool, HexState]:
        """Run the end check; return ``(ended, winner)``."""
        self._check_end_of_game()
        return self.ended, self.winner

    def _check_end_of_game(self) -> None:
        if self.ended:
            return
        result = find_winner(self.board)
        if result is None:
            return
        self.winner, self.winning_path = result
        self.ended = True
        self.player = HexState.NONE

    # ==============================================================
    # 💾  Save / load
    # ==============================================================
    def to_bytes(self) -> bytes:
        """Serializes the match in the binary save format."""
        strategies = {}
        for color, strategy in self._strategies.items():
            strategies[color] = None if strategy is None else StrategyRecord(
                color=strategy.color,
                level=strategy.level,
                mode=int(strategy.mode),
                direction=strategy.direction,
            )
        return encode_match(SavedMatch(
            size=self.size,
            cells=self.board.cells,
            red_player=self.red_player,
            blue_player=self.blue_player,
            level=self.level,
            first_player=self.first_player,
            red_history=self.red_history,
            blue_history=self.blue_history,
            red_strategy=strategies[HexState.RED],
            blue_strategy=strategies[HexState.BLUE],
            current_player=self.player,
            ended=self.ended,
            winner=self.winner,
        ))

    @classmethod
    def from_bytes(cls, data: bytes, **kwargs) -> "hexPosition":
        """Rebuild a match written by :meth:`to_bytes`.

        Keyword arguments (``rng``, ``print_debug``) are passed to the
        constructor. Raises :class:`PersistenceError` on malformed data.
        """
        saved = decode_match(data)
        game = cls(saved.size, saved.red_player, saved.blue_player,
                   saved.level, saved.first_player or HexState.RED, **kwargs)
        # the saved size wins over the constructor's clamping
        game.size = saved.size
        game.board = HexBoard(saved.size)
        game.board.cells = saved.cells
        game.first_player = saved.first_player
        game.red_history.extend(saved.red_history)
        game.blue_history.extend(saved.blue_history)

        for slot, record in ((HexState.RED, saved.red_strategy),
                             (HexState.BLUE, saved.blue_strategy)):
            if record is None:
                continue
            if record.color is not slot:
                raise PersistenceError(
                    f"Strategy of side {record.color.name} saved in the {slot.name} slot.")
            try:
                mode = StrategicMode(record.mode)
            except ValueError as err:
                raise PersistenceError(f"Invalid strategic mode {record.mode}.") from err
            strategy = RuleBasedStrategy.restore(
                game.board, record.color, record.level, mode, record.direction,
                game.history(record.color), game.history(record.color.opponent),
                rng=game._rng,
            )
            strategy.print_debug = game.print_debug
            game._strategies[slot] = strategy

        game.player = saved.current_player
        game.winner = saved.winner
        if saved.ended:
            # rebuild winner and path from the board
            game.ended = False
            game._check_end_of_game()
            if not game.ended:
                raise PersistenceError("Match saved as ended but nobody has connected.")
        elif saved.current_player not in (HexState.RED, HexState.BLUE):
            raise PersistenceError(
                f"Running match saved with side to move {saved.current_player.name}.")
        return game

    def save(self, path: Union[str, Path]) -> None:
        Path(path).write_bytes(self.to_bytes())

    @classmethod
    def load(cls, path: Union[str, Path], **kwargs) -> "hexPosition":
        return cls.from_bytes(Path(path).read_bytes(), **kwargs)

    # ==============================================================
    # 🔁  Restarting
    # ==============================================================
    def can_restart(self) -> bool:
        """New settings are only accepted on an empty board or a finished match."""
        return self.is_empty() or self.is_ended()[0]

    def _restart(self, size: int, red_player: PlayerType, blue_player: PlayerType,
                 level: Level, first_player: HexState) -> Optional["hexPosition"]:
        if not self.can_restart():
            return None
        game = hexPosition(size, red_player, blue_player, level, first_player,
                           rng=self._rng, print_debug=self.print_debug)
        game.computer_play()     # no-op unless a computer opens
        return game

    def resized(self, size: int) -> Optional["hexPosition"]:
        return self._restart(size, self.red_player, self.blue_player,
                             self.level, self.first_player)

    def one_player(self) -> Optional["hexPosition"]:
        """Human red against computer blue; a second call raises the level."""
        level = self.level
        if PlayerType.COMPUTER in (self.red_player, self.blue_player):
            level = Level((level + 1) % len(Level))
        return self._restart(self.size, PlayerType.HUMAN, PlayerType.COMPUTER,
                             level, self.first_player)

    def two_players(self) -> Optional["hexPosition"]:
        return self._restart(self.size, PlayerType.HUMAN, PlayerType.HUMAN,
                             self.level, self.first_player)

    def reversed_sides(self) -> Optional["hexPosition"]:
        """Swap the opening side between humans, or the sides of human and computer."""
        if self.red_player is PlayerType.HUMAN and self.blue_player is PlayerType.HUMAN:
            return self._restart(self.size, self.red_player, self.blue_player,
                                 self.level, self.first_player.opponent)
        return self._restart(self.size, self.blue_player, self.red_player,
                             self.level, self.first_player)

    # ==============================================================
    # 🖥️  Console play
    # ==============================================================
    def print(self) -> None:
        """Print a Unicode representation of the board to stdout."""
        print(self.board.render())

    def play(self, input_fn: Optional[Callable[[str], str]] = None, verbose: bool = True) -> HexState:
        """
        Play the match to its end in the terminal.

        Humans type cells such as ``C4`` (letter = column, number = row);
        ``quit`` leaves the match unfinished. Computers answer immediately.
        Returns the winner (``NONE`` when the match was left).
        """
        input_fn = input if input_fn is None else input_fn
        while not self.ended:
            if verbose:
                self.print()
            who = self.player
            if self.get_player_type(who) is PlayerType.HUMAN:
                while True:
                    text = input_fn(f"{who.name.title()} - enter your move (e.g. 'A1'): ")
                    if text.strip().lower() in ('q', 'quit', 'exit'):
                        return HexState.NONE
                    cell = translator(text, self.size)
                    if cell is not None and self.human_play(*cell):
                        break
                    if verbose:
                        print("Not a free cell, try again.")
            else:
                play = self.computer_play()
                if verbose:
                    print(f"{who.name.title()} -> {play}")

        if verbose:
            self.print()
            print(f"{self.winner.name.title()} wins!")
            print(f"A winning path for {self.winner.name.lower()}:\n", self.winning_path)
        return self.winner
