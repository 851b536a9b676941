"""Tests for src.vectorspray.scenario — treated vs untreated runs."""

import numpy as np
import pytest

from src.vectorspray.errors import EventOutOfRangeError
from src.vectorspray.scenario import ScenarioResult, compare_yields, run_scenarios
from src.vectorspray.spray import SprayProgram


class TestReferenceScenario:
    def test_spraying_improves_yield(self, reference_result):
        assert reference_result.yield_treated > reference_result.yield_untreated
        assert reference_result.yield_gain > 0

    def test_yields_in_unit_interval(self, reference_result):
        assert 0.0 < reference_result.yield_treated <= 1.0
        assert 0.0 < reference_result.yield_untreated <= 1.0

    def test_yields_taken_from_final_samples(self, reference_result):
        assert reference_result.yield_treated == reference_result.treated.Y[-1]
        assert reference_result.yield_untreated == reference_result.untreated.Y[-1]

    def test_untreated_run_has_no_sprays(self, reference_result, program):
        assert reference_result.program == program
        assert reference_result.treated.spray_days == program.days
        assert reference_result.untreated.spray_days == ()

    def test_result_type(self, reference_result):
        assert isinstance(reference_result, ScenarioResult)


class TestRunScenarios:
    def test_compare_yields_matches_result(self, params, curve, initial_state, times, program, reference_result):
        y_treated, y_untreated = compare_yields(params, initial_state, times, program, curve=curve)
        assert y_treated == reference_result.yield_treated
        assert y_untreated == reference_result.yield_untreated

    def test_parallel_matches_serial(self, params, curve, initial_state, times, program, reference_result):
        result = run_scenarios(params, initial_state, times, program, curve=curve, parallel=True)
        np.testing.assert_array_equal(result.treated.states, reference_result.treated.states)
        np.testing.assert_array_equal(result.untreated.states, reference_result.untreated.states)

    def test_parallel_surfaces_validation_errors(self, params, curve, initial_state, times):
        with pytest.raises(EventOutOfRangeError):
            run_scenarios(
                params, initial_state, times, SprayProgram(days=(200.0,)), curve=curve, parallel=True
            )

    def test_empty_program_gives_equal_yields(self, params, curve, initial_state, times):
        result = run_scenarios(params, initial_state, times, SprayProgram.none(), curve=curve)
        assert result.yield_gain == 0.0

    def test_solver_kwargs_forwarded(self, params, curve, initial_state, times, program):
        result = run_scenarios(params, initial_state, times, program, curve=curve, method="Radau")
        assert result.treated.method == "Radau"
        assert result.untreated.method == "Radau"

    def test_stronger_spray_saves_more_yield(self, params, curve, initial_state, times):
        weak = run_scenarios(params, initial_state, times, SprayProgram((14.0, 21.0, 28.0), 0.3), curve=curve)
        strong = run_scenarios(params, initial_state, times, SprayProgram((14.0, 21.0, 28.0), 0.9), curve=curve)
        assert strong.yield_treated > weak.yield_treated
