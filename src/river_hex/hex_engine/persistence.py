"""river_hex.hex_engine.persistence
==================================
Binary save format of a match.

Everything is little-endian; integers are 4-byte signed, enums and flags are
single bytes. In order:

* board size, then ``size*size`` cell states (row-major);
* red player type, blue player type, computer level, first player;
* red history, blue history - a count followed by coordinate records;
* for red then blue: a presence flag, then side/level/mode/direction of the
  computer strategy when present;
* side to move, ended flag, winner.

A coordinate record starts with its :class:`CoordKind` tag. ``PLAIN`` holds
row and column, ``SCORED`` adds the score, ``BRIDGE`` adds the score, the
number of guards and the guards as nested records. A bridge always holds
two guards, each a ``PLAIN`` record.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from .board import HexState, Level, PlayerType
from .errors import PersistenceError
from .hex_coord import CoordKind, HexCoord

_INT = struct.Struct("<i")
_BYTE = struct.Struct("<B")


@dataclass
class StrategyRecord:
    color: HexState
    level: Level
    mode: int
    direction: int


@dataclass
class SavedMatch:
    size: int
    cells: np.ndarray
    red_player: PlayerType
    blue_player: PlayerType
    level: Level
    first_player: HexState
    red_history: List[HexCoord] = field(default_factory=list)
    blue_history: List[HexCoord] = field(default_factory=list)
    red_strategy: Optional[StrategyRecord] = None
    blue_strategy: Optional[StrategyRecord] = None
    current_player: HexState = HexState.NONE
    ended: bool = False
    winner: HexState = HexState.NONE


# ------------------------------------------------------------------
# Writing
# ------------------------------------------------------------------
def encode_coord(coord: HexCoord, out: bytearray) -> None:
    out += _BYTE.pack(int(coord.kind))
    out += _INT.pack(coord.row)
    out += _INT.pack(coord.col)
    if coord.kind is CoordKind.PLAIN:
        return
    out += _INT.pack(coord.score)
    if coord.kind is CoordKind.SCORED:
        return
    out += _INT.pack(len(coord.guards))
    for guard in coord.guards:
        encode_coord(guard, out)


def encode_match(saved: SavedMatch) -> bytes:
    out = bytearray()
    out += _INT.pack(saved.size)
    out += np.ascontiguousarray(saved.cells, dtype=np.uint8).tobytes()

    for value in (saved.red_player, saved.blue_player, saved.level, saved.first_player):
        out += _BYTE.pack(int(value))

    for history in (saved.red_history, saved.blue_history):
        out += _INT.pack(len(history))
        for coord in history:
            encode_coord(coord, out)

    for strategy in (saved.red_strategy, saved.blue_strategy):
        out += _BYTE.pack(strategy is not None)
        if strategy is not None:
            out += _BYTE.pack(int(strategy.color))
            out += _BYTE.pack(int(strategy.level))
            out += _BYTE.pack(int(strategy.mode))
            out += _INT.pack(strategy.direction)

    out += _BYTE.pack(int(saved.current_player))
    out += _BYTE.pack(bool(saved.ended))
    out += _BYTE.pack(int(saved.winner))
    return bytes(out)


# ------------------------------------------------------------------
# Reading
# ------------------------------------------------------------------
class _Reader(object):

    def __init__(self, data: bytes):
        self.data = memoryview(data)
        self.pos = 0

    def take(self, count: int) -> memoryview:
        if count < 0 or self.pos + count > len(self.data):
            raise PersistenceError(
                f"Saved match truncated at byte {self.pos} (wanted {count} more).")
        chunk = self.data[self.pos:self.pos + count]
        self.pos += count
        return chunk

    def int32(self) -> int:
        return _INT.unpack(self.take(_INT.size))[0]

    def byte(self) -> int:
        return _BYTE.unpack(self.take(_BYTE.size))[0]

    def flag(self) -> bool:
        return self.byte() != 0

    def enum(self, kind):
        value = self.byte()
        try:
            return kind(value)
        except ValueError as err:
            raise PersistenceError(f"Invalid {kind.__name__} value {value}.") from err


def _decode_guard(reader: _Reader) -> HexCoord:
    tag = reader.byte()
    if tag != CoordKind.PLAIN:
        raise PersistenceError(f"Bridge guard with coordinate tag {tag}, expected a plain cell.")
    return HexCoord.plain(reader.int32(), reader.int32())


def decode_coord(reader: _Reader) -> HexCoord:
    tag = reader.byte()
    if tag not in (CoordKind.PLAIN, CoordKind.SCORED, CoordKind.BRIDGE):
        raise PersistenceError(f"Unknown coordinate tag {tag}.")
    row = reader.int32()
    col = reader.int32()
    if tag == CoordKind.PLAIN:
        return HexCoord.plain(row, col)
    score = reader.int32()
    if tag == CoordKind.SCORED:
        return HexCoord.scored(row, col, score)
    count = reader.int32()
    # a bridge is held by exactly two guard cells
    if count != 2:
        raise PersistenceError(f"Bridge at ({row},{col}) with {count} guards.")
    guards = (_decode_guard(reader), _decode_guard(reader))
    return HexCoord.bridge(row, col, score, guards)


def decode_match(data: bytes) -> SavedMatch:
    reader = _Reader(data)
    size = reader.int32()
    if size < 1:
        raise PersistenceError(f"Invalid board size {size}.")
    raw = np.frombuffer(reader.take(size * size), dtype=np.uint8)
    if raw.size and raw.max() > max(HexState):
        raise PersistenceError(f"Invalid cell state {int(raw.max())}.")
    cells = raw.reshape(size, size).astype(np.int8)

    saved = SavedMatch(
        size=size,
        cells=cells,
        red_player=reader.enum(PlayerType),
        blue_player=reader.enum(PlayerType),
        level=reader.enum(Level),
        first_player=reader.enum(HexState),
    )
    saved.red_history = [decode_coord(reader) for _ in range(reader.int32())]
    saved.blue_history = [decode_coord(reader) for _ in range(reader.int32())]

    strategies = []
    for _ in range(2):
        record = None
        if reader.flag():
            record = StrategyRecord(
                color=reader.enum(HexState),
                level=reader.enum(Level),
                mode=reader.byte(),
                direction=reader.int32(),
            )
        strategies.append(record)
    saved.red_strategy, saved.blue_strategy = strategies

    saved.current_player = reader.enum(HexState)
    saved.ended = reader.flag()
    saved.winner = reader.enum(HexState)
    return saved
