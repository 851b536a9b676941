"""Per-plant relative yield as a function of infection time.

A plant infected at day t keeps the fraction X(t) = t^k / (t^k + alpha) of
its disease-free yield: late infections cost little, early ones cost most.
"""


from typing import Union

import numpy as np

from .errors import InvalidParameterError


ArrayLike = Union[float, np.ndarray]


def relative_yield(t: ArrayLike, alpha: float, k: float) -> ArrayLike:
    """Return X(t) in [0, 1) for infection time t >= 0.

    Scalars return a float; arrays are evaluated element-wise.
    """
    if alpha <= 0:
        raise InvalidParameterError("alpha", alpha, "must be positive")
    if k <= 0:
        raise InvalidParameterError("k", k, "must be positive")
    t_arr = np.asarray(t, dtype=float)
    if np.any(t_arr < 0):
        raise InvalidParameterError("t", t, "yield curve is only defined for t >= 0")
    tk = np.power(t_arr, k)
    x = tk / (tk + alpha)
    if x.ndim == 0:
        return float(x)
    return x


def half_yield_time(alpha: float, k: float) -> float:
    """Infection day at which a plant keeps exactly half of its yield."""
    if alpha <= 0:
        raise InvalidParameterError("alpha", alpha, "must be positive")
    if k <= 0:
        raise InvalidParameterError("k", k, "must be positive")
    return float(alpha ** (1.0 / k))
