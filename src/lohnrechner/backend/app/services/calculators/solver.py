"""Bounded bisection for inverting payroll functions."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

_LOGGER = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 0.01
DEFAULT_MAX_ITERATIONS = 50


@dataclass(frozen=True, slots=True)
class BisectionOutcome:
    argument: float
    value: float
    iterations: int
    converged: bool
    tolerance: float


def bisect_increasing(
    func: Callable[[float], float],
    target: float,
    lower: float,
    upper: float,
    *,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> BisectionOutcome:
    """Search ``[lower, upper]`` for an argument where ``func`` hits ``target``.

    The interval keeps a value below ``target`` at its lower end and one at or
    above it at its upper end, so ``func`` only needs to rise through the
    target somewhere inside; downward jumps elsewhere are harmless. The search
    stops once the value is within ``tolerance`` of the target, once the
    interval is narrower than ``tolerance``, or after ``max_iterations``
    evaluations, whichever comes first; it therefore always terminates.
    """

    low, high = (lower, upper) if lower <= upper else (upper, lower)
    limit = max(max_iterations, 1)
    iterations = 0

    while True:
        argument = (low + high) / 2
        value = func(argument)
        iterations += 1
        if abs(value - target) <= tolerance:
            return BisectionOutcome(argument, value, iterations, True, tolerance)
        if iterations >= limit:
            break
        if value < target:
            low = argument
        else:
            high = argument
        if high - low < tolerance:
            break

    converged = abs(value - target) <= tolerance
    _LOGGER.debug(
        "Bisection stopped after %d iterations (converged=%s, gap=%.4f)",
        iterations,
        converged,
        value - target,
    )
    return BisectionOutcome(argument, value, iterations, converged, tolerance)


__all__ = [
    "BisectionOutcome",
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_TOLERANCE",
    "bisect_increasing",
]
