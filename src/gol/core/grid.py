"""Dense grid data structure for a fixed-size Game of Life world."""

from typing import Iterator, List, Optional, Tuple
import numpy as np
import torch
import torch.nn.functional as F

from .errors import FormatError
from .state import GridState


class Grid:
    """Represents a fixed-size 2D grid of cells.

    The grid uses numpy arrays for storage and supports both wraparound
    (torus world) and bounded edge behavior. Cells are addressed as (x, y),
    column then row.
    """

    def __init__(self, width: int, height: int, wrap_edges: bool = True) -> None:
        """Initialize a new dead grid.

        Args:
            width: Number of columns
            height: Number of rows
            wrap_edges: Whether edges wrap around (toroidal topology)

        Raises:
            ValueError: If width or height is negative
        """
        if width < 0 or height < 0:
            raise ValueError(f"Grid dimensions must be non-negative, got {width}x{height}")

        self.width = width
        self.height = height
        self.wrap_edges = wrap_edges
        self._cells = np.zeros((width, height), dtype=np.int8)

        torch.set_num_threads(1)
        self._torch_kernel = (
            torch.tensor([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=torch.float32).unsqueeze(0).unsqueeze(0)
        )

    @property
    def cells(self) -> np.ndarray:
        """Get the current cell array, indexed [x, y]."""
        return self._cells

    @property
    def shape(self) -> Tuple[int, int]:
        """Get grid dimensions as (width, height)."""
        return (self.width, self.height)

    @property
    def size(self) -> int:
        """Get the total number of cells."""
        return self.width * self.height

    def _resolve(self, x: int, y: int) -> Tuple[int, int]:
        if self.wrap_edges and self.size:
            return x % self.width, y % self.height
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Coordinates ({x}, {y}) out of range")
        return x, y

    def get_cell(self, x: int, y: int) -> bool:
        """Get the state of a cell.

        Args:
            x: Column coordinate
            y: Row coordinate

        Returns:
            True if cell is alive, False if dead

        Raises:
            IndexError: If coordinates are out of bounds and wrap_edges is False
        """
        x, y = self._resolve(x, y)
        return bool(self._cells[x, y])

    def set_cell(self, x: int, y: int, alive: bool) -> None:
        """Set the state of a cell.

        Raises:
            IndexError: If coordinates are out of bounds and wrap_edges is False
        """
        x, y = self._resolve(x, y)
        self._cells[x, y] = 1 if alive else 0

    def toggle_cell(self, x: int, y: int) -> bool:
        """Toggle the state of a cell and return its new state."""
        new_state = not self.get_cell(x, y)
        self.set_cell(x, y, new_state)
        return new_state

    def clear(self) -> None:
        """Clear all cells (set all to dead)."""
        self._cells.fill(0)

    def copy(self) -> "Grid":
        """Return an independent copy of this grid."""
        other = Grid(self.width, self.height, self.wrap_edges)
        other._cells[:] = self._cells
        return other

    @property
    def population(self) -> int:
        """Get the number of living cells."""
        return int(np.sum(self._cells > 0))

    def get_neighbors(self, x: int, y: int) -> int:
        """Count living neighbors of a cell.

        Returns:
            Number of living neighbors (0-8)
        """
        count = 0
        for dx in [-1, 0, 1]:
            for dy in [-1, 0, 1]:
                if dx == 0 and dy == 0:
                    continue

                nx, ny = x + dx, y + dy

                if self.wrap_edges:
                    count += self._cells[nx % self.width, ny % self.height]
                elif 0 <= nx < self.width and 0 <= ny < self.height:
                    count += self._cells[nx, ny]

        return int(count)

    def count_all_neighbors(self) -> np.ndarray:
        """Count neighbors for all cells using a PyTorch convolution.

        Returns:
            2D array with neighbor counts for each cell, indexed [x, y]
        """
        if self.size == 0:
            return np.zeros((self.width, self.height), dtype=np.int8)

        # Grid uses (width, height) but PyTorch expects (height, width), so transpose
        torch_input = torch.from_numpy((self._cells.T > 0).astype(np.float32)).unsqueeze(0).unsqueeze(0)

        if self.wrap_edges:
            padded = F.pad(torch_input, (1, 1, 1, 1), mode="circular")
            neighbors = F.conv2d(padded, self._torch_kernel)
        else:
            neighbors = F.conv2d(torch_input, self._torch_kernel, padding=1)

        return neighbors[0, 0].numpy().astype(np.int8).T

    def write_cells(self, data: "Grid", offset: Tuple[int, int] = (0, 0)) -> None:
        """Overwrite the block of cells starting at offset with another grid.

        Args:
            data: Source grid; its dead cells overwrite live ones too
            offset: (x, y) of the block's top-left corner

        Raises:
            IndexError: If the block does not fit inside this grid
        """
        ox, oy = offset
        if ox < 0 or oy < 0 or ox + data.width > self.width or oy + data.height > self.height:
            raise IndexError(
                f"Block of {data.width}x{data.height} at ({ox}, {oy}) does not fit in "
                f"{self.width}x{self.height} grid"
            )

        self._cells[ox : ox + data.width, oy : oy + data.height] = data._cells

    def shrink(self, size: Tuple[int, int], offset: Tuple[int, int] = (0, 0)) -> None:
        """Shrink the grid to the block of the given size starting at offset.

        Args:
            size: New (width, height)
            offset: (x, y) of the kept block's top-left corner

        Raises:
            ValueError: If size plus offset exceeds the current dimensions
        """
        new_w, new_h = size
        ox, oy = offset
        if new_w < 0 or new_h < 0 or ox < 0 or oy < 0:
            raise ValueError("Size and offset must be non-negative")
        if self.width < new_w + ox or self.height < new_h + oy:
            raise ValueError(
                f"New size {new_w}x{new_h} plus offset ({ox}, {oy}) exceeds grid {self.width}x{self.height}"
            )

        self._cells = self._cells[ox : ox + new_w, oy : oy + new_h].copy()
        self.width = new_w
        self.height = new_h

    def view(self, start: Tuple[int, int], end: Tuple[int, int]) -> "GridView":
        """Get a read-only view of the block from start (inclusive) to end (exclusive).

        Raises:
            IndexError: If the block is not inside this grid
        """
        return GridView(self, start, end)

    def iter_rows(self) -> Iterator[List[bool]]:
        """Iterate over rows from top to bottom.

        Yields:
            List of cell states for each row, left to right
        """
        for y in range(self.height):
            yield [bool(v) for v in self._cells[:, y]]

    def to_state(self) -> GridState:
        """Convert living cells to a sparse state; (x, y) becomes (row=y, col=x)."""
        return GridState.from_array(self._cells.T)

    @classmethod
    def from_state(
        cls,
        state: GridState,
        width: int,
        height: int,
        offset: Tuple[int, int] = (0, 0),
        wrap_edges: bool = True,
    ) -> "Grid":
        """Create a grid holding the cells of a sparse state.

        Args:
            state: Source state with (row, col) coordinates
            width: Grid width
            height: Grid height
            offset: (x, y) where state coordinate (0, 0) is placed
            wrap_edges: Whether edges wrap around; if True, cells outside the
                grid wrap onto it, otherwise they are dropped

        Returns:
            New Grid instance
        """
        grid = cls(width, height, wrap_edges)
        ox, oy = offset
        for row, col in state:
            x, y = col + ox, row + oy
            if wrap_edges and grid.size:
                grid._cells[x % width, y % height] = 1
            elif 0 <= x < width and 0 <= y < height:
                grid._cells[x, y] = 1
        return grid

    @classmethod
    def from_string(cls, text: str, wrap_edges: bool = True) -> "Grid":
        """Create a grid from rows of 'O' and '.' characters.

        Whitespace is ignored and blank lines are skipped.

        Raises:
            FormatError: If an unexpected character is found or rows differ in width
        """
        rows: List[List[int]] = []
        width: Optional[int] = None
        for lineno, line in enumerate(text.split("\n"), start=1):
            row = []
            for col, char in enumerate(line, start=1):
                if char == "O":
                    row.append(1)
                elif char == ".":
                    row.append(0)
                elif not char.isspace():
                    raise FormatError(f"Found character {char!r}, expected 'O' or '.'", lineno, col)

            if not row:
                continue
            if width is None:
                width = len(row)
            elif len(row) != width:
                raise FormatError(f"Expected width {width}, found {len(row)}", lineno)
            rows.append(row)

        grid = cls(width or 0, len(rows), wrap_edges)
        if rows:
            grid._cells[:] = np.array(rows, dtype=np.int8).T
        return grid

    def get_bounding_box(self) -> Optional[Tuple[int, int, int, int]]:
        """Get bounding box of living cells.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y) or None if no living cells
        """
        living_coords = np.where(self._cells > 0)
        if len(living_coords[0]) == 0:
            return None

        min_x, max_x = int(living_coords[0].min()), int(living_coords[0].max())
        min_y, max_y = int(living_coords[1].min()), int(living_coords[1].max())

        return (min_x, min_y, max_x, max_y)

    def __eq__(self, other: object) -> bool:
        """Check if two grids are equal."""
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.shape == other.shape
            and self.wrap_edges == other.wrap_edges
            and np.array_equal(self._cells, other._cells)
        )

    def __repr__(self) -> str:
        return f"!{self.width}x{self.height} grid:\n{self}"

    def __str__(self) -> str:
        """String representation showing living cells as 'O' and dead as '.'."""
        return "\n".join("".join("O" if cell else "." for cell in row) for row in self.iter_rows())


class GridView:
    """Read-only window onto a rectangular block of a grid.

    The view shares the grid's cells, so later changes to the grid show
    through it.
    """

    def __init__(self, grid: Grid, start: Tuple[int, int], end: Tuple[int, int]) -> None:
        """Initialize a view.

        Args:
            grid: Grid to look into
            start: (x, y) of the block's top-left corner
            end: (x, y) one past the block's bottom-right corner

        Raises:
            IndexError: If the block is not inside the grid
        """
        (sx, sy), (ex, ey) = start, end
        if not (0 <= sx <= ex <= grid.width and 0 <= sy <= ey <= grid.height):
            raise IndexError(f"View ({sx}, {sy})..({ex}, {ey}) is outside {grid.width}x{grid.height} grid")

        self.grid = grid
        self.start = (sx, sy)
        self.end = (ex, ey)

    @property
    def shape(self) -> Tuple[int, int]:
        """Get view dimensions as (width, height)."""
        return (self.end[0] - self.start[0], self.end[1] - self.start[1])

    @property
    def cells(self) -> np.ndarray:
        """Get the viewed block of the grid's cell array, indexed [x, y]."""
        (sx, sy), (ex, ey) = self.start, self.end
        return self.grid.cells[sx:ex, sy:ey]

    def iter_cells(self) -> Iterator[bool]:
        """Iterate over cell states row by row."""
        for row in self.iter_rows():
            yield from row

    def iter_rows(self) -> Iterator[List[bool]]:
        block = self.cells
        for y in range(block.shape[1]):
            yield [bool(v) for v in block[:, y]]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridView):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self.cells, other.cells)

    def __repr__(self) -> str:
        return f"!GridView: {self.start}..{self.end}\n{self}"

    def __str__(self) -> str:
        return "\n".join("".join("O" if cell else "." for cell in row) for row in self.iter_rows())
