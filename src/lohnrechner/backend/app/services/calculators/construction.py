"""Construction industry payroll: SOKA-BAU, vacation fund, winter and hazard pay."""

from __future__ import annotations

from datetime import date

from lohnrechner.backend.app.models import (
    ConstructionPayrollParams,
    ConstructionPayrollResult,
    HazardBonuses,
    HazardCategory,
    Region,
    SokaContributions,
    TradeGroup,
    VacationAccount,
    WinterAllowance,
)
from lohnrechner.backend.config.schema import ConstructionConfig

from .utils import percent_of, safe_divide


def soka_contributions(
    gross: float, region: Region, config: ConstructionConfig
) -> SokaContributions:
    """Return the SOKA-BAU fund contribution, paid by the employer alone."""

    amount = max(gross, 0.0)
    return SokaContributions(
        gross=amount,
        region=region,
        rate=config.soka_employer_rate,
        employer=percent_of(amount, config.soka_employer_rate),
    )


def vacation_account(
    gross: float,
    days_taken: float,
    days_carried: float,
    config: ConstructionConfig,
    *,
    as_of: date | None = None,
) -> VacationAccount:
    """Return the remaining vacation entitlement and its monetary value.

    Remaining days are valued at the daily rate (gross divided by the average
    working days per month) plus the vacation bonus. Entitlements expire on
    31 March of the year after ``as_of``.
    """

    reference = as_of or date.today()
    remaining = max(config.vacation_days + days_carried - days_taken, 0.0)
    daily_rate = safe_divide(max(gross, 0.0), config.working_days_per_month)
    vacation_pay = remaining * daily_rate
    vacation_bonus = percent_of(vacation_pay, config.vacation_bonus_rate)

    return VacationAccount(
        entitlement_days=float(config.vacation_days),
        carried_days=days_carried,
        taken_days=days_taken,
        remaining_days=remaining,
        daily_rate=daily_rate,
        vacation_pay=vacation_pay,
        vacation_bonus=vacation_bonus,
        monetary_value=vacation_pay + vacation_bonus,
        expiry_date=date(reference.year + 1, 3, 31),
    )


def is_winter_period(day: date, config: ConstructionConfig) -> bool:
    return day.month in config.winter_months


def winter_allowance(
    hours_worked: float, winter_period: bool, config: ConstructionConfig
) -> WinterAllowance:
    """Return the per-hour winter allowance, paid only during the winter period."""

    hours = max(hours_worked, 0.0)
    amount = hours * config.winter_allowance_per_hour if winter_period else 0.0
    return WinterAllowance(
        hours=hours,
        rate=config.winter_allowance_per_hour,
        amount=amount,
        applies=winter_period,
    )


def hazard_bonuses(
    dirt_hours: float,
    height_hours: float,
    danger_hours: float,
    config: ConstructionConfig,
) -> HazardBonuses:
    rates = config.hazard_rates
    return HazardBonuses(
        dirt=max(dirt_hours, 0.0) * rates[HazardCategory.DIRT.value],
        height=max(height_hours, 0.0) * rates[HazardCategory.HEIGHT.value],
        danger=max(danger_hours, 0.0) * rates[HazardCategory.DANGER.value],
    )


def tariff_hourly_rate(
    region: Region, trade_group: TradeGroup, config: ConstructionConfig
) -> float:
    return config.tariff_wages[region.value][trade_group.value]


def calculate_construction_payroll(
    params: ConstructionPayrollParams,
    config: ConstructionConfig,
    *,
    as_of: date | None = None,
) -> ConstructionPayrollResult:
    """Combine base pay, hazard bonuses and winter allowance for one month.

    When no monthly gross is given but a trade group is, the base pay is the
    tariff wage for the hours worked. The winter allowance is the tax-free part.
    """

    tariff_rate: float | None = None
    tariff_wage: float | None = None
    if params.trade_group is not None:
        tariff_rate = tariff_hourly_rate(params.region, params.trade_group, config)
        tariff_wage = tariff_rate * params.hours_worked

    base_gross = params.gross_salary
    if base_gross <= 0 and tariff_wage is not None:
        base_gross = tariff_wage

    hazards = hazard_bonuses(params.dirt_hours, params.height_hours, params.danger_hours, config)
    winter = winter_allowance(params.hours_worked, params.is_winter_period, config)
    total_gross = base_gross + hazards.total + winter.amount

    return ConstructionPayrollResult(
        base_gross=base_gross,
        tariff_hourly_rate=tariff_rate,
        tariff_wage=tariff_wage,
        dirt_bonus=hazards.dirt,
        height_bonus=hazards.height,
        danger_bonus=hazards.danger,
        winter_allowance=winter.amount,
        total_gross=total_gross,
        tax_free_amount=winter.amount,
        taxable_amount=total_gross - winter.amount,
        soka=soka_contributions(base_gross, params.region, config),
        vacation=vacation_account(
            base_gross,
            params.vacation_days_taken,
            params.vacation_days_carried,
            config,
            as_of=as_of,
        ),
    )


__all__ = [
    "calculate_construction_payroll",
    "hazard_bonuses",
    "is_winter_period",
    "soka_contributions",
    "tariff_hourly_rate",
    "vacation_account",
    "winter_allowance",
]
