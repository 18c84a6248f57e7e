"""Hospitality payroll: meal benefits in kind, tips and SFN premiums."""

from __future__ import annotations

from lohnrechner.backend.app.models import (
    GastronomyPayrollParams,
    GastronomyPayrollResult,
    MealBenefit,
    MealType,
    MinijobCheck,
    SfnBonuses,
    TipsTreatment,
)
from lohnrechner.backend.config.schema import GastronomyConfig

from .utils import percent_of, safe_divide


def meal_benefits(
    breakfasts: int, lunches: int, dinners: int, config: GastronomyConfig
) -> MealBenefit:
    """Value meals provided by the employer at the official benefit-in-kind rates."""

    values = config.meal_values
    return MealBenefit(
        breakfasts=max(breakfasts, 0),
        lunches=max(lunches, 0),
        dinners=max(dinners, 0),
        breakfast_value=values[MealType.BREAKFAST.value],
        lunch_value=values[MealType.LUNCH.value],
        dinner_value=values[MealType.DINNER.value],
    )


def tips_treatment(amount: float, from_employer: bool) -> TipsTreatment:
    """Tips paid by the employer are taxable; tips from guests are tax-free."""

    amount = max(amount, 0.0)
    if from_employer:
        return TipsTreatment(amount=amount, from_employer=True, tax_free=0.0, taxable=amount)
    return TipsTreatment(amount=amount, from_employer=False, tax_free=amount, taxable=0.0)


def sfn_bonuses(
    hourly_rate: float,
    night_hours: float,
    sunday_hours: float,
    holiday_hours: float,
    config: GastronomyConfig,
    *,
    deep_night_hours: float = 0.0,
    special_holiday_hours: float = 0.0,
) -> SfnBonuses:
    """Compute Sunday, holiday and night premiums.

    Night work between 20:00 and 24:00 earns the night rate, work between
    00:00 and 04:00 the higher deep-night rate. Premiums are based on the hourly
    rate capped at ``sfn_base_rate_cap``; when the actual rate exceeds the cap
    the premiums are flagged as partially taxable.
    """

    rate = max(hourly_rate, 0.0)
    base = min(rate, config.sfn_base_rate_cap)
    return SfnBonuses(
        hourly_rate=rate,
        base_rate=base,
        night=percent_of(max(night_hours, 0.0) * base, config.night_rate),
        deep_night=percent_of(max(deep_night_hours, 0.0) * base, config.deep_night_rate),
        sunday=percent_of(max(sunday_hours, 0.0) * base, config.sunday_rate),
        holiday=percent_of(max(holiday_hours, 0.0) * base, config.holiday_rate),
        special_holiday=percent_of(
            max(special_holiday_hours, 0.0) * base, config.special_holiday_rate
        ),
        partially_taxable=rate > config.sfn_base_rate_cap,
    )


def minijob_check(
    hours: float,
    hourly_rate: float,
    meals: int,
    config: GastronomyConfig,
    minijob_ceiling: float,
) -> MinijobCheck:
    """Check whether wage plus meals (valued as lunches) stays within the minijob limit."""

    wage = max(hours, 0.0) * max(hourly_rate, 0.0)
    meal_value = max(meals, 0) * config.meal_values[MealType.LUNCH.value]
    total = wage + meal_value
    return MinijobCheck(
        wage=wage,
        meal_value=meal_value,
        total=total,
        limit=minijob_ceiling,
        within_limit=total <= minijob_ceiling,
        remaining=max(minijob_ceiling - total, 0.0),
    )


def calculate_gastronomy_payroll(
    params: GastronomyPayrollParams, config: GastronomyConfig
) -> GastronomyPayrollResult:
    hourly_rate = safe_divide(params.gross_salary, params.hours_worked)
    meals = meal_benefits(params.breakfasts, params.lunches, params.dinners, config)
    employer_tips = tips_treatment(params.tips_from_employer, from_employer=True)
    guest_tips = tips_treatment(params.tips_from_guests, from_employer=False)
    bonuses = sfn_bonuses(
        hourly_rate,
        params.night_hours,
        params.sunday_hours,
        params.holiday_hours,
        config,
        deep_night_hours=params.deep_night_hours,
        special_holiday_hours=params.special_holiday_hours,
    )

    total_gross = params.gross_salary + meals.total + employer_tips.taxable + bonuses.total
    return GastronomyPayrollResult(
        base_gross=params.gross_salary,
        hourly_rate=hourly_rate,
        meal_benefit=meals.total,
        tips_taxable=employer_tips.taxable,
        tips_tax_free=guest_tips.tax_free,
        night_bonus=bonuses.night,
        deep_night_bonus=bonuses.deep_night,
        sunday_bonus=bonuses.sunday,
        holiday_bonus=bonuses.holiday,
        special_holiday_bonus=bonuses.special_holiday,
        total_gross=total_gross,
        tax_free_amount=bonuses.tax_free,
        taxable_amount=total_gross - bonuses.tax_free,
        sfn_partially_taxable=bonuses.partially_taxable,
    )


__all__ = [
    "calculate_gastronomy_payroll",
    "meal_benefits",
    "minijob_check",
    "sfn_bonuses",
    "tips_treatment",
]
