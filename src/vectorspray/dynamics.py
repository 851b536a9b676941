"""Right-hand side of the vector/disease/yield ODE system.

State layout is (D, S, I, Y):
- D: proportion of hosts diseased.
- S: virus-free vector density (fraction of disease-free carrying capacity).
- I: infected vector density (same scaling).
- Y: cumulative relative yield integral.

The right-hand side is a pure function of (t, state, params, curve) so any
scipy integrator can drive it.
"""


from typing import Optional, Sequence

import numpy as np

from .config import VectorParams, YieldCurveParams
from .yield_curve import relative_yield


# Column indices of the state vector.
D_IDX, S_IDX, I_IDX, Y_IDX = 0, 1, 2, 3
STATE_NAMES = ("D", "S", "I", "Y")


def infection_rate(D: float, I: float, a: float, rho_plus: float) -> float:
    """Rate of new host infections, dD/dt.

    At D = 0 the preference term vanishes and the rate is exactly a * I.
    """
    return a * (1.0 - D) * I / (1.0 - D + D * rho_plus)


def acquisition_pressure(D: float, rho_minus: float) -> float:
    """Fraction of vector feeding on diseased hosts, weighted by preference."""
    return D * rho_minus / (1.0 - D + D * rho_minus)


def vector_disease_rhs(
    t: float,
    state: Sequence[float],
    params: VectorParams,
    curve: Optional[YieldCurveParams] = None,
) -> np.ndarray:
    """Return (dD/dt, dS/dt, dI/dt, dY/dt) for the current state."""
    curve = curve or YieldCurveParams()
    D, S, I, _ = state

    dD = infection_rate(D, I, params.a, params.rho_plus)

    # Density-dependent births blended between healthy and diseased hosts.
    # T(1-T) is left unclamped, so births turn negative above carrying capacity.
    T = S + I
    births = (params.b * (1.0 - D) + params.b_i * D) * T * (1.0 - T)
    acquired = params.lam * acquisition_pressure(D, params.rho_minus) * S

    dS = births - params.delta * S - acquired + params.IM
    dI = acquired - params.delta * I + params.IM

    # Yield is lost in proportion to new infections, weighted by the
    # shortfall of a plant infected at time t.
    dY = (relative_yield(max(t, 0.0), curve.alpha, curve.k) - 1.0) * dD

    return np.array([dD, dS, dI, dY], dtype=float)
