"""Shared fixtures: the reference vector/virus scenario."""

import pytest

from src.vectorspray.config import InitialState, VectorParams, YieldCurveParams, time_grid
from src.vectorspray.scenario import run_scenarios
from src.vectorspray.spray import SprayProgram


@pytest.fixture(scope="session")
def params():
    return VectorParams(
        a=0.2, delta=0.003, lam=0.2, rho_plus=1.0, rho_minus=1.0,
        b=0.1015, b_i=0.07, IM=0.01,
    )


@pytest.fixture(scope="session")
def curve():
    return YieldCurveParams(alpha=511.15, k=1.68453)


@pytest.fixture(scope="session")
def initial_state():
    return InitialState(D0=0.0, S0=0.01, I0=0.0001, Y0=1.0)


@pytest.fixture(scope="session")
def times():
    return time_grid(150.0, 1.0)


@pytest.fixture(scope="session")
def program():
    return SprayProgram(days=(14.0, 21.0, 28.0), mortality=0.9)


@pytest.fixture(scope="session")
def reference_result(params, curve, initial_state, times, program):
    return run_scenarios(params, initial_state, times, program, curve=curve)
