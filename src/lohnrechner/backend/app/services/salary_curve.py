"""Salary curves, marginal burden and pay-rise analysis."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from lohnrechner.backend.app.models import TaxCalculationParams, TaxCalculationResult
from lohnrechner.backend.config.year_config import YearConfiguration, resolve_configuration

from .calculators.utils import safe_divide
from .tax_service import complete_tax


@dataclass(frozen=True, slots=True)
class SalaryCurvePoint:
    gross: float
    net: float
    taxes: float
    social_contributions: float
    employer_costs: float
    net_percentage: float
    marginal_rate: float | None


@dataclass(frozen=True, slots=True)
class RaiseAnalysis:
    current_gross: float
    new_gross: float
    gross_increase: float
    net_increase: float
    deductions_on_raise: float
    kept_percentage: float
    marginal_rate: float


def marginal_rate(previous: TaxCalculationResult, current: TaxCalculationResult) -> float | None:
    """Share of an extra euro of gross lost to taxes and contributions, in percent."""

    gross_delta = current.gross_monthly - previous.gross_monthly
    if gross_delta == 0:
        return None
    net_delta = current.net_monthly - previous.net_monthly
    return (1 - net_delta / gross_delta) * 100


def iter_salary_curve(
    params: TaxCalculationParams,
    from_gross: float,
    to_gross: float,
    steps: int = 20,
    config: YearConfiguration | None = None,
) -> Iterator[SalaryCurvePoint]:
    """Yield ``steps + 1`` evenly spaced monthly gross points with their net outcome."""

    config = resolve_configuration(config)
    steps = max(int(steps), 1)
    step_size = (to_gross - from_gross) / steps

    previous: TaxCalculationResult | None = None
    for index in range(steps + 1):
        gross = max(from_gross + step_size * index, 0.0)
        result = complete_tax(params.with_gross_monthly(gross), config)
        yield SalaryCurvePoint(
            gross=result.gross_monthly,
            net=result.net_monthly,
            taxes=result.total_taxes / 12,
            social_contributions=result.total_social_contributions / 12,
            employer_costs=result.employer_costs / 12,
            net_percentage=safe_divide(result.net_monthly, result.gross_monthly) * 100,
            marginal_rate=None if previous is None else marginal_rate(previous, result),
        )
        previous = result


def salary_curve(
    params: TaxCalculationParams,
    from_gross: float,
    to_gross: float,
    steps: int = 20,
    config: YearConfiguration | None = None,
) -> list[SalaryCurvePoint]:
    return list(iter_salary_curve(params, from_gross, to_gross, steps, config))


def analyze_raise(
    current_gross: float,
    raise_amount: float,
    params: TaxCalculationParams,
    config: YearConfiguration | None = None,
) -> RaiseAnalysis:
    """Show how much of a monthly raise is kept after taxes and contributions."""

    config = resolve_configuration(config)
    before = complete_tax(params.with_gross_monthly(current_gross), config)
    after = complete_tax(params.with_gross_monthly(current_gross + raise_amount), config)

    gross_increase = after.gross_monthly - before.gross_monthly
    net_increase = after.net_monthly - before.net_monthly
    rate = marginal_rate(before, after)
    return RaiseAnalysis(
        current_gross=before.gross_monthly,
        new_gross=after.gross_monthly,
        gross_increase=gross_increase,
        net_increase=net_increase,
        deductions_on_raise=gross_increase - net_increase,
        kept_percentage=safe_divide(net_increase, gross_increase) * 100,
        marginal_rate=rate if rate is not None else 0.0,
    )


__all__ = [
    "RaiseAnalysis",
    "SalaryCurvePoint",
    "analyze_raise",
    "iter_salary_curve",
    "marginal_rate",
    "salary_curve",
]
