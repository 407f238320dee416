"""RiverHex - a two-player connection game on a rhombus of hexagons, with a
rule-based computer opponent."""
from .hex_engine import hexPosition

__all__ = ["hexPosition"]
