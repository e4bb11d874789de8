"""Sparse, immutable grid state for the Game of Life."""

from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple
from collections import defaultdict
import numpy as np

Coord = Tuple[int, int]


class GridState:
    """Set of live cell coordinates at a given generation.

    Coordinates are ``(row, column)`` pairs of unbounded integers. A
    coordinate that is not in the set is dead. Instances never change once
    built; advancing a generation produces a new ``GridState``.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: Iterable[Coord] = ()) -> None:
        """Initialize a state from live cell coordinates.

        Args:
            cells: Iterable of (row, column) pairs; duplicates collapse
        """
        self._cells: FrozenSet[Coord] = frozenset((int(r), int(c)) for r, c in cells)

    @property
    def cells(self) -> FrozenSet[Coord]:
        """Get the live cells."""
        return self._cells

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return len(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __bool__(self) -> bool:
        return bool(self._cells)

    def __contains__(self, coord: object) -> bool:
        return coord in self._cells

    def __iter__(self) -> Iterator[Coord]:
        """Iterate live cells in row-major order."""
        return iter(sorted(self._cells))

    def __eq__(self, other: object) -> bool:
        """Check if two states hold the same live cells."""
        if isinstance(other, GridState):
            return self._cells == other._cells
        if isinstance(other, (set, frozenset)):
            return self._cells == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._cells)

    def __repr__(self) -> str:
        return f"GridState({sorted(self._cells)!r})"

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_row, min_col, max_row, max_col) or None if no living cells
        """
        if not self._cells:
            return None

        rows, cols = zip(*self._cells)
        return (min(rows), min(cols), max(rows), max(cols))

    def get_size(self) -> Tuple[int, int]:
        """Get size of the bounding box as (height, width)."""
        bbox = self.get_bounding_box()
        if bbox is None:
            return (0, 0)
        min_row, min_col, max_row, max_col = bbox
        return (max_row - min_row + 1, max_col - min_col + 1)

    def translate(self, drow: int, dcol: int) -> "GridState":
        """Return a new state with every cell moved by (drow, dcol)."""
        return GridState((r + drow, c + dcol) for r, c in self._cells)

    def normalize(self) -> "GridState":
        """Return a new state whose bounding box starts at (0, 0)."""
        bbox = self.get_bounding_box()
        if bbox is None:
            return self
        return self.translate(-bbox[0], -bbox[1])

    def to_array(self, shape: Optional[Tuple[int, int]] = None, origin: Coord = (0, 0)) -> np.ndarray:
        """Render the state into a dense 0/1 array indexed [row, col].

        Args:
            shape: (rows, cols) of the array; defaults to the bounding box
            origin: Coordinate mapped to array index [0, 0]; ignored when
                shape is None (the bounding box corner is used instead)

        Returns:
            numpy int8 array; cells falling outside the array are dropped
        """
        if shape is None:
            bbox = self.get_bounding_box()
            if bbox is None:
                return np.zeros((0, 0), dtype=np.int8)
            origin = (bbox[0], bbox[1])
            shape = self.get_size()

        arr = np.zeros(shape, dtype=np.int8)
        for r, c in self._cells:
            ar, ac = r - origin[0], c - origin[1]
            if 0 <= ar < shape[0] and 0 <= ac < shape[1]:
                arr[ar, ac] = 1
        return arr

    @classmethod
    def from_array(cls, arr: np.ndarray, origin: Coord = (0, 0)) -> "GridState":
        """Build a state from a 2D array indexed [row, col]; non-zero is alive."""
        rows, cols = np.nonzero(np.asarray(arr))
        return cls((int(r) + origin[0], int(c) + origin[1]) for r, c in zip(rows, cols))

    def to_rows(self, live: str = "O", dead: str = ".") -> List[str]:
        """Render the bounding box as plaintext rows without trailing dead cells."""
        bbox = self.get_bounding_box()
        if bbox is None:
            return []

        min_row, min_col, max_row, _ = bbox
        by_row: Dict[int, List[int]] = defaultdict(list)
        for r, c in self._cells:
            by_row[r].append(c - min_col)

        rows = []
        for r in range(min_row, max_row + 1):
            cols = by_row.get(r)
            if not cols:
                rows.append(dead)
                continue
            line = [dead] * (max(cols) + 1)
            for c in cols:
                line[c] = live
            rows.append("".join(line))
        return rows

    def __str__(self) -> str:
        """String representation showing living cells as 'O' and dead as '.'."""
        return "\n".join(self.to_rows())
