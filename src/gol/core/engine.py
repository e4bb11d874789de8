"""Generation advance for sparse Game of Life states."""

from typing import Counter as CounterType, Iterator
from collections import Counter
import logging

from .rules import RulesFn, standard_rules
from .state import Coord, GridState

logger = logging.getLogger(__name__)

# Moore neighborhood offsets, the cell itself excluded
NEIGHBOR_OFFSETS = tuple((dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if (dr, dc) != (0, 0))


def count_neighbors(state: GridState) -> CounterType[Coord]:
    """Count live neighbors of every cell adjacent to a live cell.

    Cells absent from the result have no live neighbors.

    Args:
        state: Current grid state

    Returns:
        Counter mapping coordinates to their live neighbor count
    """
    counts: CounterType[Coord] = Counter()
    for r, c in state.cells:
        for dr, dc in NEIGHBOR_OFFSETS:
            counts[(r + dr, c + dc)] += 1
    return counts


def advance(state: GridState, rules: RulesFn = standard_rules) -> GridState:
    """Compute the next generation of a state.

    Only live cells and their neighbors can be alive in the next generation,
    so those are the only candidates evaluated.

    Args:
        state: Current grid state
        rules: Function mapping (alive, neighbor count) to the next state

    Returns:
        New GridState for the following generation
    """
    counts = count_neighbors(state)
    live = state.cells
    candidates = live.union(counts)

    next_state = GridState(cell for cell in candidates if rules(cell in live, counts.get(cell, 0)))
    logger.debug("Advanced generation: population %d -> %d", state.population, next_state.population)
    return next_state


def advance_by(state: GridState, generations: int, rules: RulesFn = standard_rules) -> GridState:
    """Advance a state by a number of generations.

    Raises:
        ValueError: If generations is negative
    """
    if generations < 0:
        raise ValueError(f"Generations must be non-negative, got {generations}")

    for _ in range(generations):
        if not state:
            break
        state = advance(state, rules)
    return state


def generations(state: GridState, rules: RulesFn = standard_rules) -> Iterator[GridState]:
    """Yield the given state followed by each successive generation, forever."""
    while True:
        yield state
        state = advance(state, rules)
