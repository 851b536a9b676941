"""Season simulation with spray breakpoints, using scipy's solve_ivp.

Integrates the vector/disease/yield system from day 0 to day L. Spray days
split the season into segments: each segment is integrated up to the spray
day exactly, the spray is applied to the end state, and a fresh solver is
started from the post-spray state. The returned Trajectory is sampled on
the requested grid plus every spray day.
"""


from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
from scipy.integrate import solve_ivp

from .config import DEFAULTS, InitialState, VectorParams, YieldCurveParams
from .dynamics import STATE_NAMES, Y_IDX, vector_disease_rhs
from .errors import InvalidParameterError, SolverDivergenceError
from .spray import SprayProgram


logger = logging.getLogger(__name__)

# Integrators accepted by solve_ivp; LSODA switches between stiff and non-stiff.
SOLVER_METHODS = ("LSODA", "RK45", "RK23", "DOP853", "Radau", "BDF")

# Sample times closer than this are treated as the same day.
SAMPLE_ATOL = 1e-9


class RunState(Enum):
    READY = "ready"
    INTEGRATING = "integrating"
    EVENT_HIT = "event_hit"
    DONE = "done"


@dataclass(frozen=True, eq=False)
class Trajectory:
    """Samples (t, D, S, I, Y) of one simulated season.

    At a spray day the stored sample is the post-spray state; the state just
    before the spray is kept in ``pre_spray_states`` (one row per spray).
    """

    times: np.ndarray
    states: np.ndarray
    spray_days: Tuple[float, ...] = ()
    pre_spray_states: Optional[np.ndarray] = None
    method: str = DEFAULTS.method

    @property
    def D(self) -> np.ndarray:
        return self.states[:, 0]

    @property
    def S(self) -> np.ndarray:
        return self.states[:, 1]

    @property
    def I(self) -> np.ndarray:
        return self.states[:, 2]

    @property
    def Y(self) -> np.ndarray:
        return self.states[:, 3]

    @property
    def final_state(self) -> np.ndarray:
        return self.states[-1].copy()

    @property
    def final_yield(self) -> float:
        return float(self.states[-1, Y_IDX])

    def at(self, t: float) -> np.ndarray:
        """Return the sampled state at time t (must be a sample time)."""
        idx = int(np.searchsorted(self.times, t))
        if idx >= self.times.size or not np.isclose(self.times[idx], t, rtol=0.0, atol=SAMPLE_ATOL):
            raise KeyError(f"t={t} is not a sample time of this trajectory")
        return self.states[idx].copy()

    def to_rows(self) -> List[Dict[str, float]]:
        """Flatten to one dict per sample (t, D, S, I, Y) for CSV export."""
        rows = []
        for t, state in zip(self.times, self.states):
            row = {"t": float(t)}
            row.update({name: float(v) for name, v in zip(STATE_NAMES, state)})
            rows.append(row)
        return rows


class _RhsBudget:
    """Counts right-hand-side evaluations and aborts runaway solves."""

    def __init__(self, limit: int, method: str) -> None:
        self.limit = limit
        self.method = method
        self.count = 0

    def tick(self, t: float) -> None:
        self.count += 1
        if self.count > self.limit:
            raise SolverDivergenceError(
                t, f"exceeded budget of {self.limit} right-hand-side evaluations", self.method
            )


def _validate_time_grid(times: Sequence[float]) -> np.ndarray:
    grid = np.asarray(times, dtype=float)
    if grid.ndim != 1 or grid.size < 2:
        raise InvalidParameterError("times", grid.shape, "must be a 1-D grid with at least 2 points")
    if not np.all(np.isfinite(grid)):
        raise InvalidParameterError("times", "non-finite", "grid values must be finite")
    if grid[0] != 0.0:
        raise InvalidParameterError("times[0]", float(grid[0]), "season must start at day 0")
    if np.any(np.diff(grid) <= 0):
        raise InvalidParameterError("times", "unsorted", "grid must be strictly increasing")
    return grid


def _validate_initial_state(initial_state: Union[InitialState, Sequence[float]]) -> np.ndarray:
    if isinstance(initial_state, InitialState):
        return initial_state.as_array()
    values = np.asarray(initial_state, dtype=float)
    if values.shape != (4,):
        raise InvalidParameterError("initial_state", values.shape, "must hold (D0, S0, I0, Y0)")
    # Reuse InitialState validation for the range checks.
    return InitialState(*(float(v) for v in values)).as_array()


def _merge_spray_days(grid: np.ndarray, days: Sequence[float]) -> np.ndarray:
    """Union of grid and spray days; grid points within SAMPLE_ATOL of a spray day collapse onto it."""
    days_arr = np.asarray(days, dtype=float)
    if days_arr.size == 0:
        return grid.copy()
    near = np.any(np.abs(grid[:, None] - days_arr[None, :]) <= SAMPLE_ATOL, axis=1)
    # Season start and end are always sampled exactly.
    near[0] = near[-1] = False
    return np.union1d(grid[~near], days_arr)


def _check_finite(sol, method: str) -> None:
    finite = np.all(np.isfinite(sol.y), axis=0)
    if not np.all(finite):
        bad_t = float(sol.t[np.argmin(finite)])
        raise SolverDivergenceError(bad_t, "non-finite state values", method)


def simulate_vector_disease(
    initial_state: Union[InitialState, Sequence[float]],
    params: VectorParams,
    times: Sequence[float],
    program: Optional[SprayProgram] = None,
    curve: Optional[YieldCurveParams] = None,
    method: str = DEFAULTS.method,
    rtol: float = DEFAULTS.rtol,
    atol: float = DEFAULTS.atol,
    max_rhs_evals: int = DEFAULTS.max_rhs_evals,
) -> Trajectory:
    """Simulate one season and return its trajectory.

    Spray days are mandatory breakpoints: integration stops exactly on each
    of them, the spray is applied, and the solver restarts from the new state.
    Raises InvalidParameterError / EventOutOfRangeError for bad inputs and
    SolverDivergenceError when the integration fails.
    """
    run_state = RunState.READY
    if method not in SOLVER_METHODS:
        raise InvalidParameterError("method", method, f"must be one of {SOLVER_METHODS}")
    if max_rhs_evals <= 0:
        raise InvalidParameterError("max_rhs_evals", max_rhs_evals, "must be positive")
    y0 = _validate_initial_state(initial_state)
    grid = _validate_time_grid(times)
    program = program or SprayProgram.none()
    program.validate(float(grid[0]), float(grid[-1]))
    curve = curve or YieldCurveParams()

    sample_times = _merge_spray_days(grid, program.days)
    breakpoints = list(program.days) + [float(grid[-1])]
    spray_set = set(program.days)
    budget = _RhsBudget(max_rhs_evals, method)

    def rhs(t, y):
        budget.tick(t)
        return vector_disease_rhs(t, y, params, curve)

    out_times = [sample_times[0]]
    out_states = [y0]
    pre_spray = []
    current_t = float(sample_times[0])
    current_y = y0

    for seg_end in breakpoints:
        run_state = RunState.INTEGRATING
        t_eval = sample_times[(sample_times > current_t) & (sample_times <= seg_end)]
        logger.debug("%s: [%g, %g] with %d samples", run_state.value, current_t, seg_end, t_eval.size)
        sol = solve_ivp(
            rhs,
            (current_t, seg_end),
            current_y,
            method=method,
            t_eval=t_eval,
            rtol=rtol,
            atol=atol,
        )
        if not sol.success:
            failed_at = float(sol.t[-1]) if sol.t.size else current_t
            raise SolverDivergenceError(failed_at, sol.message, method)
        _check_finite(sol, method)

        segment = sol.y.T.copy()
        current_y = segment[-1].copy()
        if seg_end in spray_set:
            run_state = RunState.EVENT_HIT
            pre_spray.append(current_y)
            current_y = program.apply(current_y)
            segment[-1] = current_y
            logger.debug(
                "%s: spray at day %g, S %.4g -> %.4g, I %.4g -> %.4g",
                run_state.value,
                seg_end,
                pre_spray[-1][1],
                current_y[1],
                pre_spray[-1][2],
                current_y[2],
            )

        out_times.extend(sol.t)
        out_states.extend(segment)
        current_t = seg_end

    run_state = RunState.DONE
    states = np.vstack(out_states)
    logger.debug(
        "%s: %d samples, %d sprays, %d rhs evaluations, Y(L)=%.6f",
        run_state.value,
        states.shape[0],
        program.n_sprays,
        budget.count,
        states[-1, Y_IDX],
    )
    return Trajectory(
        times=np.asarray(out_times, dtype=float),
        states=states,
        spray_days=program.days,
        pre_spray_states=np.vstack(pre_spray) if pre_spray else np.zeros((0, 4)),
        method=method,
    )
