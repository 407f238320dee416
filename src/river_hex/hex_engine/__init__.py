from .hex_engine import hexPosition
from .board import HexBoard, HexState, Level, PlayerType
from .connectivity import find_winner
from .errors import InvariantViolation, PersistenceError
from .hex_coord import CoordKind, HexCoord
