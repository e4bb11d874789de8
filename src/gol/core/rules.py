"""Game of Life rulesets."""

from typing import Callable

# Takes the current cell state and its live neighbour count, returns the next state
RulesFn = Callable[[bool, int], bool]


def standard_rules(alive: bool, neighbors: int) -> bool:
    """Conway's rules: survive on 2 or 3 neighbors, birth on exactly 3."""
    if alive:
        return neighbors == 2 or neighbors == 3
    return neighbors == 3
