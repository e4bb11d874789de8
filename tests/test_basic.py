"""Basic tests for the gol package."""

from gol import FormatError, Grid, GridState, PatternLibrary, World, advance, dumps, parse


def test_parse_and_advance():
    """Test the parser feeding the engine."""
    state = parse("!Name: Blinker\nOOO\n")
    assert state == {(0, 0), (0, 1), (0, 2)}

    state = advance(state)
    assert state == {(-1, 1), (0, 1), (1, 1)}


def test_empty_state():
    assert advance(GridState()) == GridState()


def test_format_error():
    try:
        parse("OxO")
    except FormatError as e:
        assert e.line == 1
        assert e.column == 2
    else:
        raise AssertionError("FormatError not raised")


def test_round_trip():
    state = GridState([(2, 3), (4, 4)])
    assert parse(dumps(state)) == state.normalize()


def test_world_from_pattern():
    """Test running a library pattern on a dense world."""
    library = PatternLibrary()
    glider = library.get_pattern("Glider")

    world = World(Grid.from_state(glider.state, 10, 10))
    for _ in range(4):
        world.step_mut()

    assert world.to_state() == glider.state.translate(1, 1)
