#!/usr/bin/env python3
"""
Example usage of the gol package.
"""

from gol import Grid, PatternLibrary, World, advance, parse


def main():
    """Demonstrate programmatic usage of the gol package."""
    # Parse a pattern in plaintext format
    state = parse("!Name: Glider\n.O.\n..O\nOOO\n")

    print("Initial state:")
    print(state)
    print()

    # Run on the unbounded engine
    for generation in range(1, 5):
        state = advance(state)
        print(f"Generation {generation} (bounding box {state.get_bounding_box()}):")
        print(state)
        print()

    # Run a library pattern on a 12x12 torus
    library = PatternLibrary()
    lwss = library.get_pattern("Lightweight Spaceship")

    if lwss:
        world = World(Grid.from_state(lwss.state, 12, 12, offset=(0, 4)))
        generation, reason = world.run_until_stable(max_generations=100)
        print(f"{lwss.name} on a 12x12 torus: stopped at generation {generation} ({reason})")
        print(world)


if __name__ == "__main__":
    main()
