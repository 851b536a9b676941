"""Central defaults for vector/spray scenarios.

Defines immutable parameter structures (vector rates, yield curve shape,
initial state, economics) and the Defaults dataclass with the shared season
settings (season length, time grid step, reference spray schedule, solver
tolerances, output paths). Every structure validates itself on
construction so malformed scenarios are rejected before integration.
"""


from dataclasses import asdict, dataclass, fields, replace as _replace
import math
from pathlib import Path
from typing import Dict, Tuple

import numpy as np

from .errors import InvalidParameterError


def _require_positive(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise InvalidParameterError(name, value, "must be a positive finite number")


def _require_non_negative(name: str, value: float) -> None:
    if not math.isfinite(value) or value < 0:
        raise InvalidParameterError(name, value, "must be a non-negative finite number")


@dataclass(frozen=True)
class VectorParams:
    """Rates of the vector/disease system.

    Attributes
    ----------
    a:
        Transmission rate from infected vectors to healthy hosts.
    delta:
        Vector death rate.
    lam:
        Acquisition rate of virus by feeding vectors (``lambda``).
    rho_plus:
        Relative vector preference for infected hosts (1.0 = no preference).
    rho_minus:
        Relative vector preference for uninfected hosts (1.0 = no preference).
    b:
        Vector birth rate on healthy hosts.
    b_i:
        Vector birth rate on diseased hosts.
    IM:
        Vector immigration rate.
    """

    a: float = 0.2
    delta: float = 0.003
    lam: float = 0.2
    rho_plus: float = 1.0
    rho_minus: float = 1.0
    b: float = 0.1015
    b_i: float = 0.07
    IM: float = 0.01

    def __post_init__(self) -> None:
        # Preferences must stay > 0 so that 1 - D + D*rho never vanishes.
        for f in fields(self):
            _require_positive(f.name, float(getattr(self, f.name)))

    def replace(self, **changes: float) -> "VectorParams":
        """Return a validated copy with some rates changed."""
        return _replace(self, **changes)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class YieldCurveParams:
    """Shape of the per-plant relative yield curve X(t) = t^k / (t^k + alpha)."""

    alpha: float = 511.15
    k: float = 1.68453

    def __post_init__(self) -> None:
        _require_positive("alpha", float(self.alpha))
        _require_positive("k", float(self.k))

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class InitialState:
    """Season-start state; S0 and I0 are fractions of carrying capacity."""

    D0: float = 0.0
    S0: float = 0.01
    I0: float = 0.0001
    Y0: float = 1.0

    def __post_init__(self) -> None:
        if not math.isfinite(self.D0) or not 0.0 <= self.D0 <= 1.0:
            raise InvalidParameterError("D0", self.D0, "must lie in [0, 1]")
        _require_non_negative("S0", float(self.S0))
        _require_non_negative("I0", float(self.I0))
        _require_non_negative("Y0", float(self.Y0))

    def as_array(self) -> np.ndarray:
        return np.array([self.D0, self.S0, self.I0, self.Y0], dtype=float)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class EconomicParams:
    """Dollar constants used by the reporting layer (per hectare)."""

    market_value: float = 2500.0
    spray_cost: float = 40.0
    fixed_cost: float = 1000.0

    def __post_init__(self) -> None:
        _require_non_negative("market_value", float(self.market_value))
        _require_non_negative("spray_cost", float(self.spray_cost))
        _require_non_negative("fixed_cost", float(self.fixed_cost))

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


# Central defaults for reproducible scenario runs.
@dataclass(frozen=True)
class Defaults:
    t0: float = 0.0
    season_length: float = 150.0
    dt: float = 1.0
    spray_days: Tuple[float, ...] = (14.0, 21.0, 28.0)
    mortality: float = 0.9
    method: str = "LSODA"
    rtol: float = 1e-8
    atol: float = 1e-8
    max_rhs_evals: int = 1_000_000
    runs_dir: Path = Path("runs")


# Shared defaults instance used across scripts.
DEFAULTS = Defaults()


def time_grid(
    t1: float = DEFAULTS.season_length,
    dt: float = DEFAULTS.dt,
    t0: float = DEFAULTS.t0,
) -> np.ndarray:
    """Build an evenly spaced grid from t0 to t1 that always ends exactly at t1."""
    if dt <= 0:
        raise InvalidParameterError("dt", dt, "must be positive")
    if t1 <= t0:
        raise InvalidParameterError("t1", t1, "must be greater than t0")
    n_steps = int(math.floor((t1 - t0) / dt + 1e-9))
    grid = t0 + dt * np.arange(n_steps + 1, dtype=float)
    if not np.isclose(grid[-1], t1):
        grid = np.append(grid, t1)
    # Pin the endpoint so the final sample is evaluated at exactly L.
    grid[-1] = t1
    return grid
