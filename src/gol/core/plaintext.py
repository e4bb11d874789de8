"""Reader and writer for the plaintext Game of Life pattern format.

A plaintext file is a block of lines. Lines starting with ``!`` are comments;
every other line is a row of the pattern where ``O`` is a live cell and ``.``
a dead one::

    !Name: Glider
    !Padding: 1,2
    !
    .O.
    ..O
    OOO

The optional ``!Padding:`` header is a css-style ``top[,right[,bottom[,left]]]``
expression adding a dead margin around the body.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set, TextIO, Tuple, Union
import logging

from .errors import FormatError
from .grid import Grid
from .padding import Padding
from .state import Coord, GridState

logger = logging.getLogger(__name__)

LIVE = "O"
DEAD = "."
COMMENT = "!"

NAME_PREFIX = "Name:"
PADDING_PREFIX = "Padding:"


@dataclass
class PlainText:
    """Contents of a plaintext pattern file."""

    name: str = ""
    comment: str = ""
    padding: Padding = field(default_factory=Padding)
    state: GridState = field(default_factory=GridState)
    width: int = 0
    height: int = 0

    def to_grid(self, wrap_edges: bool = True) -> Grid:
        """Create a dense grid sized to the padded pattern."""
        return Grid.from_state(self.state, self.width, self.height, wrap_edges=wrap_edges)


def _parse_rows(
    lines: List[str], first_line: int, live: str, dead: str, comment: str
) -> Tuple[Set[Coord], int, int]:
    """Extract live cells from body lines.

    Returns:
        Tuple of (cells, height, width) where height excludes trailing blank
        rows and width is the longest row
    """
    cells: Set[Coord] = set()
    row = 0
    height = 0
    width = 0

    for lineno, raw in enumerate(lines, start=first_line):
        line = raw.rstrip()
        if line.startswith(comment):
            continue

        for col, char in enumerate(line):
            if char == live:
                cells.add((row, col))
            elif char != dead and char != comment and not char.isspace():
                raise FormatError(
                    f"Unexpected character {char!r}, expected {live!r} or {dead!r}", lineno, col + 1
                )

        row += 1
        if line:
            height = row
            width = max(width, len(line))

    return cells, height, width


def parse(text: str, live: str = LIVE, dead: str = DEAD, comment: str = COMMENT) -> GridState:
    """Parse plaintext pattern text into a grid state.

    Comment lines are skipped and do not take up a row. Rows may have
    different lengths; missing trailing cells are dead.

    Args:
        text: Pattern text
        live: Character marking a live cell
        dead: Character marking a dead cell
        comment: Character starting a comment line

    Returns:
        GridState anchored with the pattern's top-left corner at (0, 0)

    Raises:
        FormatError: If the text contains a character outside the format
    """
    cells, _, _ = _parse_rows(text.split("\n"), 1, live, dead, comment)
    return GridState(cells)


def parse_document(text: str, live: str = LIVE, dead: str = DEAD, comment: str = COMMENT) -> PlainText:
    """Parse a full plaintext file including its header.

    The leading block of comment lines is the header: ``!Name:`` sets the
    pattern name, ``!Padding:`` the margin and any other comment line is
    collected as free-form comment text. The keywords must follow the
    marker directly, so ``! Name: x`` is a comment.

    Raises:
        FormatError: If the body contains an invalid character or the
            padding expression is malformed
    """
    lines = text.split("\n")
    name = ""
    padding = Padding()
    comments: List[str] = []

    header_end = 0
    for lineno, line in enumerate(lines, start=1):
        if not line.startswith(comment):
            break
        header_end = lineno

        content = line[len(comment):]
        if content.startswith(NAME_PREFIX):
            name = content[len(NAME_PREFIX):].strip()
        elif content.startswith(PADDING_PREFIX):
            try:
                padding = Padding.parse(content[len(PADDING_PREFIX):])
            except ValueError as e:
                raise FormatError(str(e), lineno) from e
        else:
            comments.append(content.strip())

    cells, height, width = _parse_rows(lines[header_end:], header_end + 1, live, dead, comment)
    state = GridState(cells).translate(padding.top, padding.left)

    logger.debug("Parsed pattern %r: %dx%d body, %d live cells", name, width, height, len(cells))

    return PlainText(
        name=name,
        comment="\n".join(comments).strip("\n"),
        padding=padding,
        state=state,
        width=width + padding.left + padding.right,
        height=height + padding.top + padding.bottom,
    )


def read(stream: TextIO) -> PlainText:
    """Parse a plaintext document from an open text stream."""
    return parse_document(stream.read())


def load(path: Union[str, Path]) -> PlainText:
    """Load a plaintext document from a UTF-8 file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        FormatError: If the file is not UTF-8 text or its content is invalid
    """
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            document = read(f)
    except UnicodeDecodeError as e:
        raise FormatError(f"Not valid UTF-8 text ({e.reason} at byte {e.start})") from e

    logger.debug("Loaded %s", path)
    return document


def dumps(
    state: GridState, name: Optional[str] = None, comment: str = "", live: str = LIVE, dead: str = DEAD
) -> str:
    """Serialize a grid state to plaintext.

    The state is normalized so its bounding box starts at the origin; each
    row ends at its last live cell.

    Args:
        state: State to serialize
        name: Optional pattern name written as a ``!Name:`` header
        comment: Optional comment text, one header line per line. Each line
            is written after ``! `` so it never reads back as a keyword

    Returns:
        Plaintext ending with a newline
    """
    lines = []
    if name:
        lines.append(f"{COMMENT}{NAME_PREFIX} {name}")
    if comment:
        lines.extend(f"{COMMENT} {text}".rstrip() for text in comment.split("\n"))

    lines.extend(state.normalize().to_rows(live, dead))
    return "\n".join(lines) + "\n"
