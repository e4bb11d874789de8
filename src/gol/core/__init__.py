"""Core Game of Life logic."""

from .state import Coord, GridState
from .rules import RulesFn, standard_rules
from .engine import advance, advance_by, count_neighbors, generations
from .errors import FormatError
from .padding import Padding
from .plaintext import PlainText, dumps, load, parse, parse_document, read
from .grid import Grid, GridView
from .world import World
from .patterns import Pattern, PatternLibrary

__all__ = [
    "Coord",
    "GridState",
    "RulesFn",
    "standard_rules",
    "advance",
    "advance_by",
    "count_neighbors",
    "generations",
    "FormatError",
    "Padding",
    "PlainText",
    "dumps",
    "load",
    "parse",
    "parse_document",
    "read",
    "Grid",
    "GridView",
    "World",
    "Pattern",
    "PatternLibrary",
]
