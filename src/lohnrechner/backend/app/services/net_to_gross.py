"""Find the gross salary that yields a desired net salary."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from lohnrechner.backend.app.models import (
    TaxCalculationParams,
    TaxCalculationResult,
    coerce_amount,
)
from lohnrechner.backend.config.year_config import YearConfiguration, resolve_configuration

from .calculators import bisect_increasing
from .calculators.solver import DEFAULT_MAX_ITERATIONS, DEFAULT_TOLERANCE
from .tax_service import complete_tax

_LOGGER = logging.getLogger(__name__)

UPPER_BOUND_FACTOR = 3
CENT = 0.01
MAX_SNAP_STEPS = 200


@dataclass(frozen=True, slots=True)
class NetToGrossResult:
    target_net: float
    required_gross: float
    actual_net: float
    difference: float
    iterations: int
    tolerance: float
    calculation: TaxCalculationResult


def _snap_to_cent(
    gross: float,
    target: float,
    net_for: Callable[[float], TaxCalculationResult],
) -> tuple[float, TaxCalculationResult]:
    """Return the whole-cent gross whose net is closest to ``target``.

    Starts from the best of the cents around ``gross`` and walks cent by cent
    while the net keeps getting closer. Net pay drops where the gross crosses
    a wage-tax row bound, so the walk never steps over such a drop.
    """

    def miss(candidate: tuple[float, TaxCalculationResult]) -> float:
        return abs(candidate[1].net_monthly - target)

    centre = round(gross, 2)
    cents = sorted({max(0.0, round(centre + offset * CENT, 2)) for offset in (-1, 0, 1)})
    best = min(((amount, net_for(amount)) for amount in cents), key=miss)

    step = -CENT if best[1].net_monthly > target else CENT
    for _ in range(MAX_SNAP_STEPS):
        amount = round(best[0] + step, 2)
        if amount < 0:
            break
        candidate = (amount, net_for(amount))
        if miss(candidate) >= miss(best):
            break
        best = candidate
    return best


def gross_from_net(
    target_net_monthly: float,
    params: TaxCalculationParams,
    config: YearConfiguration | None = None,
    *,
    tolerance: float = DEFAULT_TOLERANCE,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> NetToGrossResult:
    """Return the monthly gross whose net pay matches ``target_net_monthly``.

    Net pay never exceeds gross and stays above a third of it, so the search
    brackets the answer between the target and three times the target. Net
    pay rises within each wage-tax bracket and drops where the next bracket
    starts, so several grosses can share one net; the bisection settles on one
    of them. The result is then snapped to the whole cent with the closest net.
    """

    config = resolve_configuration(config)
    target = coerce_amount(target_net_monthly)

    def net_for(gross_monthly: float) -> TaxCalculationResult:
        return complete_tax(params.with_gross_monthly(gross_monthly), config)

    outcome = bisect_increasing(
        lambda gross: net_for(gross).net_monthly,
        target,
        target,
        target * UPPER_BOUND_FACTOR,
        tolerance=tolerance,
        max_iterations=max_iterations,
    )

    required_gross, best = _snap_to_cent(outcome.argument, target, net_for)

    _LOGGER.debug(
        "Net %.2f requires gross %.2f after %d iterations",
        target,
        required_gross,
        outcome.iterations,
    )
    return NetToGrossResult(
        target_net=target,
        required_gross=required_gross,
        actual_net=best.net_monthly,
        difference=best.net_monthly - target,
        iterations=outcome.iterations,
        tolerance=tolerance,
        calculation=best,
    )


__all__ = ["NetToGrossResult", "gross_from_net"]
