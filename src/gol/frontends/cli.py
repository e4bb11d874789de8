"""Command-line interface for Conway's Game of Life."""

import argparse
import logging
import sys
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..core.engine import advance
from ..core.errors import FormatError
from ..core.grid import Grid
from ..core.patterns import PatternLibrary
from ..core.plaintext import dumps, load
from ..core.state import GridState
from ..core.world import World
from ..logging_config import setup_logging

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """Configuration for a simulation run."""
    pattern: Optional[str] = None
    file: Optional[str] = None
    generations: int = 10
    torus: Optional[Tuple[int, int]] = None
    every: int = 1
    patterns_dir: Optional[str] = None


class CLIGameOfLife:
    """Command-line interface for running Game of Life simulations."""

    def __init__(self, patterns_dir: Optional[str] = None) -> None:
        """Initialize CLI interface.

        Args:
            patterns_dir: Optional directory of ``*.cells`` files added to
                the built-in patterns
        """
        self.pattern_library = PatternLibrary()
        if patterns_dir:
            self.pattern_library.load_directory(patterns_dir)

    def load_initial_state(self, config: SimulationConfig) -> Tuple[str, GridState]:
        """Resolve the starting pattern from a file or the pattern library.

        Returns:
            Tuple of (pattern name, initial state)

        Raises:
            KeyError: If the named pattern is not in the library
            FileNotFoundError: If the pattern file doesn't exist
            FormatError: If the pattern file is invalid
        """
        if config.file:
            document = load(config.file)
            return document.name or config.file, document.state

        pattern = self.pattern_library.get_pattern(config.pattern or "")
        if pattern is None:
            raise KeyError(config.pattern)
        return pattern.name, pattern.state

    def run_simulation(self, config: SimulationConfig, out=None) -> Dict[str, Any]:
        """Run a Game of Life simulation and print generations.

        The unbounded sparse engine is used unless ``config.torus`` gives a
        (width, height), in which case the pattern runs on a wrapping grid.
        Pattern files keep the offset given by their ``!Padding:`` header.

        Args:
            config: Simulation settings
            out: Stream for generation output (defaults to stdout)

        Returns:
            Statistics dictionary
        """
        out = out if out is not None else sys.stdout
        name, state = self.load_initial_state(config)
        initial_population = state.population

        logger.info("Running '%s' for %d generations", name, config.generations)
        start_time = time.time()

        if config.torus:
            width, height = config.torus
            world = World(Grid.from_state(state, width, height, wrap_edges=True))
            frames = self._torus_frames(world, config.generations)
        else:
            frames = self._sparse_frames(state, config.generations)

        generation, text = 0, ""
        for generation, state, text in frames:
            if config.every and generation % config.every == 0:
                self._print_generation(out, generation, text)

        # The last generation is always shown
        if not config.every or generation % config.every:
            self._print_generation(out, generation, text)

        duration = time.time() - start_time
        reason = "extinction" if not state else "max_generations"
        logger.info("Finished '%s' at generation %d: %s", name, generation, reason)

        return {
            "name": name,
            "generation": generation,
            "reason": reason,
            "initial_population": initial_population,
            "population": state.population,
            "bounding_box": state.get_bounding_box(),
            "duration_seconds": duration,
        }

    def _sparse_frames(self, state: GridState, generations: int) -> Iterator[Tuple[int, GridState, str]]:
        """Yield (generation, state, text) on the unbounded engine, stopping at extinction."""
        generation = 0
        yield generation, state, self._format_state(state)
        while generation < generations and state:
            state = advance(state)
            generation += 1
            yield generation, state, self._format_state(state)

    def _torus_frames(self, world: World, generations: int) -> Iterator[Tuple[int, GridState, str]]:
        """Yield (generation, state, text) on a wrapping world, stopping at extinction."""
        yield world.generation, world.to_state(), str(world)
        while world.generation < generations and world.population:
            world.step_mut()
            yield world.generation, world.to_state(), str(world)

    @staticmethod
    def _print_generation(out, generation: int, text: str) -> None:
        print(f"!Generation {generation}", file=out)
        print(text, file=out)

    @staticmethod
    def _format_state(state: GridState) -> str:
        return dumps(state).rstrip("\n")

    def list_patterns(self) -> None:
        """List available patterns."""
        print("Available patterns:")
        for name in self.pattern_library.list_patterns():
            pattern = self.pattern_library.get_pattern(name)
            height, width = pattern.get_size()
            print(f"  {name:<24} {width}x{height}  {pattern.description}")


def parse_size(value: str) -> Tuple[int, int]:
    """Parse a ``WIDTHxHEIGHT`` argument."""
    try:
        width, height = (int(part) for part in value.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid size '{value}', expected WIDTHxHEIGHT")
    return width, height


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="gol-cli",
        description="Run Conway's Game of Life on plaintext patterns",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the built-in glider for 8 generations
  gol-cli Glider -g 8

  # Run a pattern file on a 20x20 torus, printing every 5th generation
  gol-cli --file gosper.cells --torus 20x20 -g 100 --every 5

  # List available patterns
  gol-cli --list-patterns
        """,
    )

    parser.add_argument("pattern", nargs="?", help="Name of a library pattern to run")
    parser.add_argument("-f", "--file", help="Plaintext (.cells) file to run")
    parser.add_argument(
        "-g", "--generations", type=int, default=10, help="Number of generations to run (default: 10)"
    )
    parser.add_argument(
        "--torus", type=parse_size, metavar="WxH", help="Run on a wrapping grid of this size instead of unbounded"
    )
    parser.add_argument(
        "--every", type=int, default=1, help="Print every Nth generation; 0 prints only the last (default: 1)"
    )
    parser.add_argument("--patterns-dir", help="Directory of extra .cells patterns to load")
    parser.add_argument("--list-patterns", action="store_true", help="List available patterns and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print run statistics")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Returns:
        True if arguments are valid
    """
    errors = []

    if not args.list_patterns and not args.pattern and not args.file:
        errors.append("A pattern name or --file is required")

    if args.pattern and args.file:
        errors.append("Give either a pattern name or --file, not both")

    if args.generations < 0:
        errors.append("Generations must be non-negative")

    if args.every < 0:
        errors.append("Print interval must be non-negative")

    if args.torus and (args.torus[0] <= 0 or args.torus[1] <= 0):
        errors.append("Torus dimensions must be positive")

    if errors:
        print("Error: Invalid arguments:", file=sys.stderr)
        for error in errors:
            print(f"  - {error}", file=sys.stderr)
        return False

    return True


def print_results(stats: Dict[str, Any]) -> None:
    """Print simulation statistics."""
    print(f"\nSimulation of '{stats['name']}' completed after {stats['generation']} generations")
    print(f"Finish reason: {stats['reason']}")
    print(f"Population: {stats['initial_population']} -> {stats['population']}")
    if stats["bounding_box"]:
        bbox = stats["bounding_box"]
        print(f"Bounding box: ({bbox[0]}, {bbox[1]}) to ({bbox[2]}, {bbox[3]})")
    print(f"Duration: {stats['duration_seconds']:.3f} seconds")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(getattr(logging, args.log_level))

    if not validate_args(args):
        return 1

    try:
        cli = CLIGameOfLife(args.patterns_dir)

        if args.list_patterns:
            cli.list_patterns()
            return 0

        config = SimulationConfig(
            pattern=args.pattern,
            file=args.file,
            generations=args.generations,
            torus=args.torus,
            every=args.every,
            patterns_dir=args.patterns_dir,
        )
        stats = cli.run_simulation(config)
    except KeyError:
        print(f"Error: Pattern '{args.pattern}' not found", file=sys.stderr)
        print("Use --list-patterns to see available patterns", file=sys.stderr)
        return 1
    except FormatError as e:
        print(f"Error: Invalid pattern file: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print_results(stats)

    return 0


if __name__ == "__main__":
    sys.exit(main())
