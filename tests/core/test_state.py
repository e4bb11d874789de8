"""Tests for the GridState class."""

import numpy as np
import pytest

from gol.core.state import GridState


class TestGridState:
    """Test cases for the GridState class."""

    def test_initialization(self):
        """Test state creation from coordinates."""
        state = GridState([(0, 0), (1, 2)])

        assert state.population == 2
        assert len(state) == 2
        assert (0, 0) in state
        assert (1, 2) in state
        assert (2, 1) not in state

    def test_empty_state(self):
        """Test the empty state."""
        state = GridState()

        assert state.population == 0
        assert not state
        assert state.get_bounding_box() is None
        assert state.get_size() == (0, 0)
        assert str(state) == ""

    def test_duplicates_collapse(self):
        """Test that a coordinate appears at most once."""
        state = GridState([(3, 3), (3, 3), (3, 3)])
        assert state.population == 1

    def test_negative_coordinates(self):
        """Test that coordinates are unbounded."""
        state = GridState([(-5, -7), (100, 200)])
        assert (-5, -7) in state
        assert state.get_bounding_box() == (-5, -7, 100, 200)

    def test_equality_and_hash(self):
        """Test value equality between states and with plain sets."""
        a = GridState([(0, 0), (0, 1)])
        b = GridState([(0, 1), (0, 0)])

        assert a == b
        assert hash(a) == hash(b)
        assert a == {(0, 0), (0, 1)}
        assert a != GridState([(0, 0)])
        assert len({a, b}) == 1

    def test_immutable(self):
        """Test that a state cannot grow new attributes."""
        state = GridState([(0, 0)])
        with pytest.raises(AttributeError):
            state.extra = 1

    def test_iteration_order(self):
        """Test that iteration is row-major."""
        state = GridState([(1, 0), (0, 2), (0, 1)])
        assert list(state) == [(0, 1), (0, 2), (1, 0)]

    def test_bounding_box_and_size(self):
        """Test bounding box calculation."""
        state = GridState([(1, 2), (3, 5), (2, 3)])

        assert state.get_bounding_box() == (1, 2, 3, 5)
        assert state.get_size() == (3, 4)

    def test_translate(self):
        """Test moving all cells."""
        state = GridState([(0, 0), (1, 1)])
        moved = state.translate(2, -3)

        assert moved == {(2, -3), (3, -2)}
        # Original is untouched
        assert state == {(0, 0), (1, 1)}

    def test_normalize(self):
        """Test normalizing to the origin."""
        state = GridState([(5, 7), (6, 9)])
        assert state.normalize() == {(0, 0), (1, 2)}
        assert GridState().normalize() == GridState()

    def test_to_array(self):
        """Test dense rendering of the bounding box."""
        state = GridState([(10, 11), (11, 10)])
        arr = state.to_array()

        assert arr.shape == (2, 2)
        assert np.array_equal(arr, np.array([[0, 1], [1, 0]]))

    def test_to_array_with_shape(self):
        """Test dense rendering into a given window."""
        state = GridState([(0, 1), (1, 0), (9, 9)])
        arr = state.to_array(shape=(3, 3), origin=(-1, -1))

        assert arr.shape == (3, 3)
        assert arr[1, 2] == 1
        assert arr[2, 1] == 1
        # (9, 9) falls outside the window
        assert arr.sum() == 2

    def test_to_array_empty(self):
        """Test dense rendering of an empty state."""
        assert GridState().to_array().shape == (0, 0)

    def test_from_array(self):
        """Test building a state from a dense array."""
        arr = np.array([[0, 1, 0], [0, 0, 1], [1, 1, 1]])

        assert GridState.from_array(arr) == {(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)}
        assert GridState.from_array(arr, origin=(10, 20)) == {
            (10, 21),
            (11, 22),
            (12, 20),
            (12, 21),
            (12, 22),
        }

    def test_str(self):
        """Test plaintext rendering."""
        glider = GridState([(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)])
        assert str(glider) == ".O\n..O\nOOO"

    def test_to_rows_with_gap(self):
        """Test that empty rows inside the bounding box render as dead."""
        state = GridState([(0, 0), (2, 1)])
        assert state.to_rows() == ["O", ".", ".O"]
        assert state.to_rows(live="*", dead="-") == ["*", "-", "-*"]
