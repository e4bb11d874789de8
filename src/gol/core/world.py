"""A fixed-size Game of Life world on a dense grid."""

from typing import Dict, Iterator, List, Tuple
import logging
import numpy as np

from .grid import Grid
from .rules import RulesFn, standard_rules
from .state import GridState

logger = logging.getLogger(__name__)


class World:
    """A dense grid plus generation counter and ruleset.

    Unlike the sparse engine, a World has a fixed size. With wrapping edges
    the grid is a torus; otherwise cells beyond the border are always dead.
    """

    def __init__(self, grid: Grid, rules: RulesFn = standard_rules, generation: int = 0) -> None:
        """Initialize the world with a grid.

        Args:
            grid: The cellular grid to simulate; owned by the world from now on
            rules: Function mapping (alive, neighbor count) to the next state
            generation: Starting generation number
        """
        self.grid = grid
        self.rules = rules
        self._generation = generation

    @property
    def generation(self) -> int:
        """Current generation number."""
        return self._generation

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def population(self) -> int:
        """Current number of living cells."""
        return self.grid.population

    def _next_cells(self) -> np.ndarray:
        """Compute the next generation of cells without applying it."""
        neighbor_counts = self.grid.count_all_neighbors()
        cells = self.grid.cells

        if self.rules is standard_rules:
            # Birth: dead cell with exactly 3 neighbors
            # Survival: live cell with 2 or 3 neighbors
            birth_mask = (cells == 0) & (neighbor_counts == 3)
            survive_mask = (cells > 0) & ((neighbor_counts == 2) | (neighbor_counts == 3))
            return (birth_mask | survive_mask).astype(cells.dtype)

        next_cells = cells.copy()
        for x in range(self.width):
            for y in range(self.height):
                next_cells[x, y] = 1 if self.rules(bool(cells[x, y]), int(neighbor_counts[x, y])) else 0
        return next_cells

    def step(self) -> "World":
        """Return a new world advanced by one generation, leaving this one untouched."""
        next_grid = Grid(self.width, self.height, self.grid.wrap_edges)
        next_grid.cells[:] = self._next_cells()
        return World(next_grid, self.rules, self._generation + 1)

    def step_mut(self) -> None:
        """Advance this world by one generation in place."""
        self.grid.cells[:] = self._next_cells()
        self._generation += 1

    def write_cells(self, data: Grid, offset: Tuple[int, int] = (0, 0)) -> None:
        """Overwrite the cells starting at offset (x, y) with the given grid."""
        self.grid.write_cells(data, offset)

    def iter_rows(self) -> Iterator[List[bool]]:
        """Iterate over rows in this world."""
        return self.grid.iter_rows()

    def to_state(self) -> GridState:
        """Get the living cells as a sparse state."""
        return self.grid.to_state()

    def run_until_stable(self, max_generations: int = 10000) -> Tuple[int, str]:
        """Run simulation in place until it dies out or repeats a state.

        Args:
            max_generations: Maximum generations to run

        Returns:
            Tuple of (final_generation, reason) where reason is one of:
            'cycle', 'extinction', 'max_generations'
        """
        seen: Dict[bytes, int] = {self.grid.cells.tobytes(): self._generation}

        for _ in range(max_generations):
            self.step_mut()

            if self.population == 0:
                logger.debug("Extinction at generation %d", self._generation)
                return self._generation, "extinction"

            state = self.grid.cells.tobytes()
            if state in seen:
                logger.debug(
                    "Cycle of length %d detected at generation %d",
                    self._generation - seen[state],
                    self._generation,
                )
                return self._generation, "cycle"
            seen[state] = self._generation

        return self._generation, "max_generations"

    def __str__(self) -> str:
        return str(self.grid)
