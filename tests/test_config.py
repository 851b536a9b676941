"""Tests for src.vectorspray.config — parameter structures and validation."""

import dataclasses

import numpy as np
import pytest

from src.vectorspray.config import (
    DEFAULTS,
    EconomicParams,
    InitialState,
    VectorParams,
    YieldCurveParams,
    time_grid,
)
from src.vectorspray.errors import InvalidParameterError


class TestVectorParams:
    def test_reference_defaults(self):
        p = VectorParams()
        assert p.as_dict() == {
            "a": 0.2, "delta": 0.003, "lam": 0.2, "rho_plus": 1.0,
            "rho_minus": 1.0, "b": 0.1015, "b_i": 0.07, "IM": 0.01,
        }

    @pytest.mark.parametrize("name", ["a", "delta", "lam", "rho_plus", "rho_minus", "b", "b_i", "IM"])
    @pytest.mark.parametrize("value", [0.0, -1.0, float("nan"), float("inf")])
    def test_rejects_non_positive(self, name, value):
        with pytest.raises(InvalidParameterError) as excinfo:
            VectorParams(**{name: value})
        assert excinfo.value.name == name

    def test_frozen(self):
        p = VectorParams()
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.a = 1.0

    def test_replace_returns_new_validated_copy(self):
        p = VectorParams()
        q = p.replace(rho_plus=2.0)
        assert q.rho_plus == 2.0 and p.rho_plus == 1.0
        with pytest.raises(InvalidParameterError):
            p.replace(rho_minus=0.0)


class TestYieldCurveParams:
    def test_defaults(self):
        assert YieldCurveParams() == YieldCurveParams(alpha=511.15, k=1.68453)

    @pytest.mark.parametrize("kwargs", [{"alpha": 0.0}, {"k": -1.0}])
    def test_rejects_non_positive(self, kwargs):
        with pytest.raises(InvalidParameterError):
            YieldCurveParams(**kwargs)


class TestInitialState:
    def test_as_array(self):
        np.testing.assert_array_equal(InitialState().as_array(), [0.0, 0.01, 0.0001, 1.0])

    @pytest.mark.parametrize("kwargs,name", [
        ({"D0": -0.1}, "D0"),
        ({"D0": 1.1}, "D0"),
        ({"S0": -1e-3}, "S0"),
        ({"I0": -1e-3}, "I0"),
        ({"Y0": -1.0}, "Y0"),
    ])
    def test_rejects_out_of_range(self, kwargs, name):
        with pytest.raises(InvalidParameterError) as excinfo:
            InitialState(**kwargs)
        assert excinfo.value.name == name

    def test_error_message_names_value(self):
        with pytest.raises(InvalidParameterError, match="D0=1.5"):
            InitialState(D0=1.5)


class TestEconomicParams:
    def test_rejects_negative(self):
        with pytest.raises(InvalidParameterError):
            EconomicParams(spray_cost=-1.0)


class TestTimeGrid:
    def test_daily_season(self):
        grid = time_grid(150.0, 1.0)
        assert grid.size == 151
        assert grid[0] == 0.0 and grid[-1] == 150.0

    def test_appends_endpoint_when_step_does_not_divide(self):
        grid = time_grid(10.0, 3.0)
        np.testing.assert_array_equal(grid, [0.0, 3.0, 6.0, 9.0, 10.0])

    def test_defaults(self):
        grid = time_grid()
        assert grid[-1] == DEFAULTS.season_length

    @pytest.mark.parametrize("t1,dt", [(10.0, 0.0), (10.0, -1.0), (0.0, 1.0)])
    def test_rejects_bad_arguments(self, t1, dt):
        with pytest.raises(InvalidParameterError):
            time_grid(t1, dt)
