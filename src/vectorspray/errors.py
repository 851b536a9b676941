"""Exceptions raised by the vector/spray simulation.

Input problems are reported before any integration starts; solver failures
are reported with the time at which the run broke down.
"""

from __future__ import annotations

from typing import Optional


class VectorSprayError(Exception):
    """Base class for all errors raised by this package."""


class InvalidParameterError(VectorSprayError, ValueError):
    """A parameter, initial state or time grid violates its constraints."""

    def __init__(self, name: str, value: object, reason: str) -> None:
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"invalid {name}={value!r}: {reason}")

    def __reduce__(self):
        # Keep the structured fields when errors cross a process boundary.
        return (type(self), (self.name, self.value, self.reason))


class EventOutOfRangeError(InvalidParameterError):
    """A spray day lies outside the season or breaks the schedule ordering."""

    def __init__(self, day: float, reason: str) -> None:
        super().__init__("spray day", day, reason)
        self.day = day

    def __reduce__(self):
        return (type(self), (self.day, self.reason))


class SolverDivergenceError(VectorSprayError, RuntimeError):
    """Numerical integration failed or produced non-finite values."""

    def __init__(self, time: float, message: str, method: Optional[str] = None) -> None:
        self.time = time
        self.message = message
        self.method = method
        solver = f" ({method})" if method else ""
        super().__init__(f"solver{solver} failed at t={time:.6g}: {message}")

    def __reduce__(self):
        return (type(self), (self.time, self.message, self.method))
