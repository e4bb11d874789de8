"""Tests for the CLI frontend."""

import argparse
from io import StringIO

import pytest

from gol.core.errors import FormatError
from gol.frontends.cli import (
    CLIGameOfLife,
    SimulationConfig,
    create_parser,
    main,
    parse_size,
    print_results,
    validate_args,
)


class TestCLIGameOfLife:
    """Test cases for the CLI Game of Life."""

    def test_initialization(self):
        """Test CLI initialization."""
        cli = CLIGameOfLife()
        assert cli.pattern_library is not None
        assert len(cli.pattern_library.list_patterns()) > 0

    def test_initialization_with_patterns_dir(self, tmp_path):
        (tmp_path / "tub.cells").write_text("!Name: Tub\n.O.\nO.O\n.O.\n", encoding="utf-8")

        cli = CLIGameOfLife(str(tmp_path))
        assert cli.pattern_library.get_pattern("Tub") is not None

    def test_run_simulation_with_pattern(self):
        """Test running a library pattern on the unbounded engine."""
        cli = CLIGameOfLife()
        out = StringIO()

        stats = cli.run_simulation(SimulationConfig(pattern="Glider", generations=4), out=out)

        assert stats["name"] == "Glider"
        assert stats["generation"] == 4
        assert stats["reason"] == "max_generations"
        assert stats["initial_population"] == 5
        assert stats["population"] == 5
        assert stats["bounding_box"] == (1, 1, 3, 3)
        assert "duration_seconds" in stats

        output = out.getvalue()
        assert output.count("!Generation") == 5
        assert output.startswith("!Generation 0\n.O\n..O\nOOO\n")

    def test_run_simulation_on_torus(self):
        """Test running a pattern on a wrapping grid."""
        cli = CLIGameOfLife()
        out = StringIO()

        stats = cli.run_simulation(SimulationConfig(pattern="Blinker", generations=2, torus=(5, 5)), out=out)

        assert stats["generation"] == 2
        assert stats["population"] == 3
        assert "OOO.." in out.getvalue()

    def test_run_simulation_extinction(self, tmp_path):
        """Test that a dying pattern stops early."""
        path = tmp_path / "dot.cells"
        path.write_text("!Name: Dot\nO\n", encoding="utf-8")

        cli = CLIGameOfLife()
        stats = cli.run_simulation(SimulationConfig(file=str(path), generations=10), out=StringIO())

        assert stats["name"] == "Dot"
        assert stats["generation"] == 1
        assert stats["reason"] == "extinction"
        assert stats["population"] == 0
        assert stats["bounding_box"] is None

    def test_print_interval(self):
        """Test that only every Nth and the last generation are printed."""
        cli = CLIGameOfLife()

        out = StringIO()
        cli.run_simulation(SimulationConfig(pattern="Glider", generations=4, every=3), out=out)
        assert out.getvalue().count("!Generation") == 3
        assert "!Generation 3" in out.getvalue()
        assert "!Generation 4" in out.getvalue()

        out = StringIO()
        cli.run_simulation(SimulationConfig(pattern="Glider", generations=4, every=0), out=out)
        assert out.getvalue().count("!Generation") == 1
        assert "!Generation 4" in out.getvalue()

    def test_unknown_pattern(self):
        cli = CLIGameOfLife()
        with pytest.raises(KeyError):
            cli.run_simulation(SimulationConfig(pattern="Nonexistent"), out=StringIO())

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "bad.cells"
        path.write_text("OzO\n", encoding="utf-8")

        cli = CLIGameOfLife()
        with pytest.raises(FormatError):
            cli.run_simulation(SimulationConfig(file=str(path)), out=StringIO())

    def test_list_patterns(self, capsys):
        CLIGameOfLife().list_patterns()

        output = capsys.readouterr().out
        assert "Available patterns:" in output
        assert "Glider" in output


class TestArguments:
    """Test argument parsing and validation."""

    def test_parse_size(self):
        assert parse_size("20x10") == (20, 10)
        assert parse_size("8X8") == (8, 8)

        with pytest.raises(argparse.ArgumentTypeError):
            parse_size("bad")

        with pytest.raises(argparse.ArgumentTypeError):
            parse_size("1x2x3")

    def test_create_parser_defaults(self):
        args = create_parser().parse_args(["Glider"])

        assert args.pattern == "Glider"
        assert args.file is None
        assert args.generations == 10
        assert args.torus is None
        assert args.every == 1
        assert args.log_level == "WARNING"

    def test_create_parser_options(self):
        args = create_parser().parse_args(["-f", "x.cells", "-g", "5", "--torus", "10x20", "--every", "0"])

        assert args.file == "x.cells"
        assert args.generations == 5
        assert args.torus == (10, 20)
        assert args.every == 0

    def test_validate_args(self, capsys):
        parser = create_parser()

        assert validate_args(parser.parse_args(["Glider"]))
        assert validate_args(parser.parse_args(["--list-patterns"]))

        assert not validate_args(parser.parse_args([]))
        assert not validate_args(parser.parse_args(["Glider", "-g", "-1"]))
        assert not validate_args(parser.parse_args(["Glider", "--every", "-2"]))
        assert not validate_args(parser.parse_args(["Glider", "--torus", "0x5"]))
        assert not validate_args(parser.parse_args(["Glider", "--file", "x.cells"]))

        assert "Error: Invalid arguments:" in capsys.readouterr().err

    def test_print_results(self, capsys):
        print_results(
            {
                "name": "Glider",
                "generation": 4,
                "reason": "max_generations",
                "initial_population": 5,
                "population": 5,
                "bounding_box": (1, 1, 3, 3),
                "duration_seconds": 0.01,
            }
        )

        output = capsys.readouterr().out
        assert "completed after 4 generations" in output
        assert "Population: 5 -> 5" in output


class TestMain:
    """Test the main entry point."""

    def test_run_pattern(self, capsys):
        assert main(["Glider", "-g", "2"]) == 0
        assert "!Generation 2" in capsys.readouterr().out

    def test_verbose(self, capsys):
        assert main(["Block", "-g", "1", "-v"]) == 0
        assert "Finish reason: max_generations" in capsys.readouterr().out

    def test_list_patterns(self, capsys):
        assert main(["--list-patterns"]) == 0
        assert "Glider" in capsys.readouterr().out

    def test_missing_arguments(self):
        assert main([]) == 1

    def test_unknown_pattern(self, capsys):
        assert main(["Nonexistent"]) == 1
        assert "Pattern 'Nonexistent' not found" in capsys.readouterr().err

    def test_invalid_file(self, tmp_path, capsys):
        path = tmp_path / "bad.cells"
        path.write_text("OzO\n", encoding="utf-8")

        assert main(["--file", str(path)]) == 1
        assert "line 1, column 2" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["--file", str(tmp_path / "missing.cells")]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_file_on_torus(self, tmp_path, capsys):
        path = tmp_path / "glider.cells"
        path.write_text("!Name: Glider\n.O.\n..O\nOOO\n", encoding="utf-8")

        assert main(["--file", str(path), "--torus", "8x8", "-g", "32", "--every", "0"]) == 0
        output = capsys.readouterr().out
        assert output == "!Generation 32\n.O......\n..O.....\nOOO.....\n" + "........\n" * 5

    def test_undecodable_file(self, tmp_path, capsys):
        path = tmp_path / "bad.cells"
        path.write_bytes(b"\xff\xfeO.\n")

        assert main(["--file", str(path)]) == 1
        assert "Invalid pattern file" in capsys.readouterr().err

    def test_padded_file_on_torus(self, tmp_path, capsys):
        """Test that the padding header places the pattern on the torus."""
        path = tmp_path / "block.cells"
        path.write_text("!Name: Block\n!Padding: 2,3\nOO\nOO\n", encoding="utf-8")

        assert main(["--file", str(path), "--torus", "8x8", "-g", "1", "--every", "0"]) == 0
        output = capsys.readouterr().out
        assert output == "!Generation 1\n" + "........\n" * 2 + "...OO...\n" * 2 + "........\n" * 4
