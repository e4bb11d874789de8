"""Conway's Game of Life engine with a plaintext pattern parser."""

__version__ = "0.1.0"

from .core.state import GridState
from .core.engine import advance
from .core.errors import FormatError
from .core.plaintext import dumps, parse
from .core.grid import Grid
from .core.world import World
from .core.patterns import Pattern, PatternLibrary

__all__ = ["GridState", "advance", "FormatError", "parse", "dumps", "Grid", "World", "Pattern", "PatternLibrary"]
