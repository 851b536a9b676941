"""Tests for src.vectorspray.spray — spray events and schedules."""

import numpy as np
import pytest

from src.vectorspray.errors import EventOutOfRangeError, InvalidParameterError
from src.vectorspray.spray import SprayProgram, apply_spray


class TestApplySpray:
    def test_kills_fraction_of_both_vector_classes(self):
        state = np.array([0.3, 0.5, 0.2, 0.8])
        after = apply_spray(state, 0.9)
        assert after[1] == pytest.approx(0.1 * 0.5, rel=1e-12)
        assert after[2] == pytest.approx(0.1 * 0.2, rel=1e-12)

    def test_disease_and_yield_unchanged(self):
        state = np.array([0.3, 0.5, 0.2, 0.8])
        after = apply_spray(state, 0.5)
        assert after[0] == state[0]
        assert after[3] == state[3]

    def test_strictly_decreases_positive_densities(self):
        state = np.array([0.0, 1e-6, 1e-8, 1.0])
        after = apply_spray(state, 0.01)
        assert after[1] < state[1]
        assert after[2] < state[2]

    def test_input_not_mutated(self):
        state = np.array([0.3, 0.5, 0.2, 0.8])
        before = state.copy()
        apply_spray(state, 0.9)
        np.testing.assert_array_equal(state, before)

    def test_accepts_plain_sequence(self):
        after = apply_spray([0.0, 1.0, 1.0, 1.0], 0.25)
        assert isinstance(after, np.ndarray)
        assert after[1] == pytest.approx(0.75)

    @pytest.mark.parametrize("m", [0.0, 1.0, -0.1, 1.5, float("nan")])
    def test_rejects_mortality_outside_unit_interval(self, m):
        with pytest.raises(InvalidParameterError) as excinfo:
            apply_spray([0.0, 1.0, 1.0, 1.0], m)
        assert excinfo.value.name == "mortality"


class TestSprayProgram:
    def test_days_stored_as_floats(self):
        program = SprayProgram(days=(14, 21, 28), mortality=0.9)
        assert program.days == (14.0, 21.0, 28.0)
        assert program.n_sprays == 3

    def test_none_is_empty(self):
        program = SprayProgram.none()
        assert program.days == ()
        assert program.n_sprays == 0

    def test_from_days_accepts_list(self):
        program = SprayProgram.from_days([7, 14], mortality=0.5)
        assert program.days == (7.0, 14.0)
        assert program.mortality == 0.5

    def test_rejects_unsorted_days(self):
        with pytest.raises(EventOutOfRangeError) as excinfo:
            SprayProgram(days=(21.0, 14.0))
        assert excinfo.value.day == 14.0

    def test_rejects_duplicate_days(self):
        with pytest.raises(EventOutOfRangeError):
            SprayProgram(days=(14.0, 14.0))

    def test_rejects_bad_mortality(self):
        with pytest.raises(InvalidParameterError):
            SprayProgram(days=(14.0,), mortality=1.0)

    @pytest.mark.parametrize("day", [0.0, 150.0, 200.0, -3.0])
    def test_validate_rejects_days_outside_season(self, day):
        program = SprayProgram(days=(day,))
        with pytest.raises(EventOutOfRangeError):
            program.validate(0.0, 150.0)

    def test_validate_accepts_days_inside_season(self):
        SprayProgram(days=(0.5, 14.0, 149.5)).validate(0.0, 150.0)

    def test_out_of_range_is_invalid_parameter(self):
        assert issubclass(EventOutOfRangeError, InvalidParameterError)

    def test_apply_uses_program_mortality(self):
        program = SprayProgram(days=(14.0,), mortality=0.5)
        after = program.apply([0.1, 0.4, 0.2, 1.0])
        np.testing.assert_allclose(after, [0.1, 0.2, 0.1, 1.0])
