"""Insecticide sprays as instantaneous state resets.

A spray kills the fraction m of both vector classes at once; disease
prevalence and the yield integral are untouched.
"""


from dataclasses import dataclass
import math
from typing import Iterable, Sequence, Tuple

import numpy as np

from .config import DEFAULTS
from .dynamics import I_IDX, S_IDX
from .errors import EventOutOfRangeError, InvalidParameterError


def _check_mortality(mortality: float) -> None:
    if not math.isfinite(mortality) or not 0.0 < mortality < 1.0:
        raise InvalidParameterError("mortality", mortality, "must lie in (0, 1)")


def apply_spray(state: Sequence[float], mortality: float) -> np.ndarray:
    """Return the post-spray state (D, (1-m) S, (1-m) I, Y) as a new array."""
    _check_mortality(mortality)
    out = np.array(state, dtype=float, copy=True)
    survival = 1.0 - mortality
    out[S_IDX] *= survival
    out[I_IDX] *= survival
    return out


@dataclass(frozen=True)
class SprayProgram:
    """Ordered spray days plus the mortality applied on each of them."""

    days: Tuple[float, ...] = ()
    mortality: float = DEFAULTS.mortality

    def __post_init__(self) -> None:
        days = tuple(float(d) for d in self.days)
        object.__setattr__(self, "days", days)
        _check_mortality(float(self.mortality))
        for day in days:
            if not math.isfinite(day):
                raise EventOutOfRangeError(day, "must be finite")
        for prev, cur in zip(days, days[1:]):
            if cur <= prev:
                raise EventOutOfRangeError(cur, f"days must be strictly increasing (follows {prev})")

    @classmethod
    def none(cls) -> "SprayProgram":
        """The untreated schedule."""
        return cls(days=())

    @classmethod
    def from_days(cls, days: Iterable[float], mortality: float = DEFAULTS.mortality) -> "SprayProgram":
        return cls(days=tuple(days), mortality=mortality)

    @property
    def n_sprays(self) -> int:
        return len(self.days)

    def validate(self, t0: float, t1: float) -> None:
        """Check every spray day lies strictly inside the season (t0, t1)."""
        for day in self.days:
            if not t0 < day < t1:
                raise EventOutOfRangeError(day, f"must lie inside ({t0:g}, {t1:g})")

    def apply(self, state: Sequence[float]) -> np.ndarray:
        return apply_spray(state, self.mortality)
