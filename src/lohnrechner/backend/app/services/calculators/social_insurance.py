"""Statutory social-insurance contributions (pension, unemployment, health, care)."""

from __future__ import annotations

from typing import NamedTuple

from typing_extensions import assert_never

from lohnrechner.backend.app.models import (
    ContributionRegime,
    SocialContributions,
    TaxCalculationParams,
)
from lohnrechner.backend.config.schema import CareInsuranceRates, SocialInsuranceConfig

from .utils import percent_of


class _BranchRates(NamedTuple):
    employee: float
    employer: float
    employee_surcharge: float = 0.0


class _Branches(NamedTuple):
    pension: _BranchRates
    unemployment: _BranchRates
    health: _BranchRates
    care: _BranchRates


def determine_regime(gross_monthly: float, config: SocialInsuranceConfig) -> ContributionRegime:
    """Classify a monthly gross as minijob, midijob or regular employment."""

    if gross_monthly <= config.minijob.monthly_ceiling:
        return ContributionRegime.MINIJOB
    if gross_monthly <= config.midijob.upper_bound:
        return ContributionRegime.MIDIJOB
    return ContributionRegime.REGULAR


def care_surcharge(care: CareInsuranceRates, is_childless: bool, age: int) -> float:
    """Return the childless surcharge due from the employee, if any."""

    if is_childless and age > care.childless_exempt_until_age:
        return care.childless_surcharge
    return 0.0


def _branch_rates(params: TaxCalculationParams, config: SocialInsuranceConfig) -> _Branches:
    half_additional = params.health_insurance_additional_rate / 2
    return _Branches(
        pension=_BranchRates(config.pension.employee_rate, config.pension.employer_rate),
        unemployment=_BranchRates(
            config.unemployment.employee_rate, config.unemployment.employer_rate
        ),
        health=_BranchRates(
            config.health.employee_rate + half_additional,
            config.health.employer_rate + half_additional,
        ),
        care=_BranchRates(
            config.care.employee_rate,
            config.care.employer_rate,
            care_surcharge(config.care, bool(params.is_childless), params.age),
        ),
    )


def _minijob(gross_monthly: float, config: SocialInsuranceConfig) -> SocialContributions:
    minijob = config.minijob
    return SocialContributions(
        regime=ContributionRegime.MINIJOB,
        employer_pension=percent_of(gross_monthly, minijob.employer_pension_rate),
        employer_health=percent_of(gross_monthly, minijob.employer_health_rate),
        employer_flat_tax=percent_of(gross_monthly, minijob.flat_tax_rate),
    )


def midijob_assessment_bases(
    gross_monthly: float, config: SocialInsuranceConfig
) -> tuple[float, float]:
    """Return the reduced (total, employee) assessment bases in the transition zone."""

    lower = config.minijob.monthly_ceiling
    upper = config.midijob.upper_bound
    factor = config.midijob.factor
    span = upper - lower
    above_lower = gross_monthly - lower

    total_base = factor * lower + (upper / span - lower / span * factor) * above_lower
    employee_base = upper / span * above_lower
    return total_base, employee_base


def _midijob(
    gross_monthly: float, branches: _Branches, config: SocialInsuranceConfig
) -> SocialContributions:
    total_base, employee_base = midijob_assessment_bases(gross_monthly, config)

    def split(rates: _BranchRates) -> tuple[float, float]:
        employee = percent_of(employee_base, rates.employee + rates.employee_surcharge)
        employer = percent_of(total_base, rates.employee + rates.employer) - percent_of(
            employee_base, rates.employee
        )
        return employee, employer

    pension, employer_pension = split(branches.pension)
    unemployment, employer_unemployment = split(branches.unemployment)
    health, employer_health = split(branches.health)
    care, employer_care = split(branches.care)

    return SocialContributions(
        regime=ContributionRegime.MIDIJOB,
        pension=pension,
        unemployment=unemployment,
        health=health,
        care=care,
        employer_pension=employer_pension,
        employer_unemployment=employer_unemployment,
        employer_health=employer_health,
        employer_care=employer_care,
    )


def _regular(
    gross_monthly: float,
    branches: _Branches,
    params: TaxCalculationParams,
    config: SocialInsuranceConfig,
) -> SocialContributions:
    is_east = params.is_east_germany
    pension_base = min(gross_monthly, config.ceilings.pension_unemployment.for_region(is_east))
    health_base = min(gross_monthly, config.ceilings.health_care.for_region(is_east))

    care = branches.care
    return SocialContributions(
        regime=ContributionRegime.REGULAR,
        pension=percent_of(pension_base, branches.pension.employee),
        unemployment=percent_of(pension_base, branches.unemployment.employee),
        health=percent_of(health_base, branches.health.employee),
        care=percent_of(health_base, care.employee + care.employee_surcharge),
        employer_pension=percent_of(pension_base, branches.pension.employer),
        employer_unemployment=percent_of(pension_base, branches.unemployment.employer),
        employer_health=percent_of(health_base, branches.health.employer),
        employer_care=percent_of(health_base, care.employer),
    )


def calculate_contributions(
    gross_monthly: float, params: TaxCalculationParams, config: SocialInsuranceConfig
) -> SocialContributions:
    """Return monthly employee and employer contributions for ``gross_monthly``."""

    if gross_monthly <= 0:
        return SocialContributions(regime=ContributionRegime.MINIJOB)

    regime = determine_regime(gross_monthly, config)
    match regime:
        case ContributionRegime.MINIJOB:
            return _minijob(gross_monthly, config)
        case ContributionRegime.MIDIJOB:
            return _midijob(gross_monthly, _branch_rates(params, config), config)
        case ContributionRegime.REGULAR:
            return _regular(gross_monthly, _branch_rates(params, config), params, config)
        case _:
            assert_never(regime)


__all__ = [
    "calculate_contributions",
    "care_surcharge",
    "determine_regime",
    "midijob_assessment_bases",
]
