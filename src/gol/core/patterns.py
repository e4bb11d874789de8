"""Common Conway's Game of Life patterns and pattern management."""

from typing import Dict, List, Optional, Tuple, Union
from pathlib import Path
import logging

from .errors import FormatError
from .plaintext import dumps, load, parse
from .state import GridState

logger = logging.getLogger(__name__)

# Built-in patterns in plaintext form, keyed by name
BUILTIN_PATTERNS = {
    "Block": ("2x2 still life block", "OO\nOO"),
    "Beehive": ("Beehive still life", ".OO.\nO..O\n.OO."),
    "Blinker": ("Period-2 oscillator", "OOO"),
    "Toad": ("Period-2 oscillator", ".OOO\nOOO."),
    "Beacon": ("Period-2 oscillator", "OO..\nO...\n...O\n..OO"),
    "Glider": ("Smallest spaceship, period-4", ".O.\n..O\nOOO"),
    "Lightweight Spaceship": ("LWSS - Period-4 spaceship", "O..O.\n....O\nO...O\n.OOOO"),
    "R-pentomino": ("Famous methuselah that stabilizes after 1103 generations", ".OO\nOO.\n.O."),
}


class Pattern:
    """Represents a named Game of Life pattern."""

    def __init__(self, name: str, state: GridState, description: str = "") -> None:
        """Initialize a pattern.

        Args:
            name: Pattern name
            state: Live cells of the pattern
            description: Optional description
        """
        self.name = name
        self.state = state
        self.description = description

    @classmethod
    def from_plaintext(cls, name: str, text: str, description: str = "") -> "Pattern":
        """Create a pattern from plaintext rows.

        Raises:
            FormatError: If the text is not valid plaintext
        """
        return cls(name, parse(text), description)

    def to_plaintext(self) -> str:
        """Serialize the pattern with its name and description as header."""
        return dumps(self.state, name=self.name, comment=self.description)

    def get_size(self) -> Tuple[int, int]:
        """Get pattern size as (height, width)."""
        return self.state.get_size()

    def __repr__(self) -> str:
        return f"Pattern({self.name!r}, population={self.state.population})"


class PatternLibrary:
    """Manages a collection of patterns."""

    def __init__(self) -> None:
        """Initialize the library with the built-in patterns."""
        self._patterns: Dict[str, Pattern] = {}
        self._load_builtin_patterns()

    def _load_builtin_patterns(self) -> None:
        for name, (description, text) in BUILTIN_PATTERNS.items():
            self.add_pattern(Pattern.from_plaintext(name, text, description))

    def add_pattern(self, pattern: Pattern) -> None:
        """Add a pattern to the library, replacing any with the same name."""
        self._patterns[pattern.name] = pattern

    def get_pattern(self, name: str) -> Optional[Pattern]:
        """Get a pattern by name.

        Returns:
            Pattern instance or None if not found
        """
        return self._patterns.get(name)

    def list_patterns(self) -> List[str]:
        """Get list of all pattern names."""
        return list(self._patterns.keys())

    def load_file(self, path: Union[str, Path]) -> Pattern:
        """Load a plaintext file and add it to the library.

        The pattern is named after its ``!Name:`` header, or the file stem
        when the header is missing.

        Raises:
            FileNotFoundError: If the file doesn't exist
            FormatError: If the file content is invalid
        """
        path = Path(path)
        document = load(path)
        pattern = Pattern(document.name or path.stem, document.state, document.comment)
        self.add_pattern(pattern)
        return pattern

    def load_directory(self, directory: Union[str, Path]) -> List[Pattern]:
        """Load all ``*.cells`` files from a directory.

        Files that fail to parse are skipped with a warning.

        Returns:
            Patterns that were loaded, in file name order
        """
        loaded = []
        for filepath in sorted(Path(directory).glob("*.cells")):
            try:
                loaded.append(self.load_file(filepath))
            except FormatError as e:
                logger.warning("Failed to load pattern from %s: %s", filepath.name, e)
        return loaded
