"""Care and nursing payroll: tiered wages, shift premiums and on-call pay."""

from __future__ import annotations

import calendar
from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import date

from lohnrechner.backend.app.models import (
    CareLevel,
    NursingPayrollParams,
    NursingPayrollResult,
    SfnBonuses,
    ShiftAllowances,
    ShiftEntry,
    ShiftSummary,
    ShiftType,
)
from lohnrechner.backend.config.schema import NursingConfig

from .utils import percent_of, safe_divide

SUNDAY = 6


def care_level_hourly_rate(level: CareLevel, config: NursingConfig) -> float:
    return config.care_level_rates[level.value]


def sfn_bonuses(
    hourly_rate: float,
    night_hours: float,
    sunday_hours: float,
    holiday_hours: float,
    config: NursingConfig,
    *,
    christmas_hours: float = 0.0,
) -> SfnBonuses:
    """Premiums with a single blended night rate; Christmas counts as a special holiday."""

    rate = max(hourly_rate, 0.0)
    base = min(rate, config.sfn_base_rate_cap)
    return SfnBonuses(
        hourly_rate=rate,
        base_rate=base,
        night=percent_of(max(night_hours, 0.0) * base, config.night_rate),
        sunday=percent_of(max(sunday_hours, 0.0) * base, config.sunday_rate),
        holiday=percent_of(max(holiday_hours, 0.0) * base, config.holiday_rate),
        special_holiday=percent_of(max(christmas_hours, 0.0) * base, config.christmas_rate),
        partially_taxable=rate > config.sfn_base_rate_cap,
    )


def shift_allowances(shifts: Iterable[ShiftEntry], config: NursingConfig) -> ShiftAllowances:
    """Sum the per-hour shift premiums by shift type."""

    by_type: dict[ShiftType, float] = {}
    for shift in shifts:
        rate = config.shift_allowances.get(shift.shift_type.value, 0.0)
        by_type[shift.shift_type] = by_type.get(shift.shift_type, 0.0) + shift.hours * rate
    return ShiftAllowances(by_type=by_type)


def on_call_pay(hourly_rate: float, hours: float, percent: float) -> float:
    return percent_of(max(hourly_rate, 0.0) * max(hours, 0.0), max(percent, 0.0))


def summarize_shifts(shifts: Iterable[ShiftEntry]) -> ShiftSummary:
    entries = list(shifts)
    counts = Counter(shift.shift_type for shift in entries)
    return ShiftSummary(
        total_shifts=len(entries),
        shift_counts={shift_type: counts.get(shift_type, 0) for shift_type in ShiftType},
        total_hours=sum(shift.hours for shift in entries),
        night_hours=sum(shift.night_hours for shift in entries),
        sunday_hours=sum(shift.sunday_hours for shift in entries),
        holiday_hours=sum(shift.holiday_hours for shift in entries),
    )


def generate_shift_plan(
    year: int,
    month: int,
    pattern: Sequence[ShiftType | None],
    config: NursingConfig,
) -> list[ShiftEntry]:
    """Lay ``pattern`` over every day of the month, repeating it as needed.

    ``None`` entries in the pattern are days off. Night shifts count fully as
    night hours and Sunday hours follow the calendar. Public holidays are not
    detected, so generated shifts never carry holiday hours.
    """

    if not pattern:
        return []

    _, days_in_month = calendar.monthrange(year, month)
    hours = config.shift_hours
    plan: list[ShiftEntry] = []
    for day in range(1, days_in_month + 1):
        shift_type = pattern[(day - 1) % len(pattern)]
        if shift_type is None:
            continue
        current = date(year, month, day)
        plan.append(
            ShiftEntry(
                shift_date=current,
                shift_type=shift_type,
                hours=hours,
                night_hours=hours if shift_type is ShiftType.NIGHT else 0.0,
                sunday_hours=hours if current.weekday() == SUNDAY else 0.0,
            )
        )
    return plan


def calculate_nursing_payroll(
    params: NursingPayrollParams, config: NursingConfig
) -> NursingPayrollResult:
    if params.care_level is not None:
        hourly_rate = care_level_hourly_rate(params.care_level, config)
    else:
        hourly_rate = safe_divide(params.gross_salary, params.hours_worked)

    base_gross = params.gross_salary
    if base_gross <= 0:
        base_gross = hourly_rate * params.hours_worked

    summary = summarize_shifts(params.shifts)
    bonuses = sfn_bonuses(
        hourly_rate,
        summary.night_hours,
        summary.sunday_hours,
        summary.holiday_hours,
        config,
        christmas_hours=params.christmas_hours,
    )
    allowances = shift_allowances(params.shifts, config)
    percent = config.on_call_rate if params.on_call_percent is None else params.on_call_percent
    on_call = on_call_pay(hourly_rate, params.on_call_hours, percent)

    total_gross = base_gross + bonuses.total + allowances.total + on_call
    return NursingPayrollResult(
        base_gross=base_gross,
        hourly_rate=hourly_rate,
        night_bonus=bonuses.night,
        sunday_bonus=bonuses.sunday,
        holiday_bonus=bonuses.holiday,
        christmas_bonus=bonuses.special_holiday,
        shift_allowance=allowances.total,
        on_call_pay=on_call,
        total_gross=total_gross,
        tax_free_amount=bonuses.tax_free,
        taxable_amount=total_gross - bonuses.tax_free,
        sfn_partially_taxable=bonuses.partially_taxable,
        shift_summary=summary,
    )


__all__ = [
    "calculate_nursing_payroll",
    "care_level_hourly_rate",
    "generate_shift_plan",
    "on_call_pay",
    "sfn_bonuses",
    "shift_allowances",
    "summarize_shifts",
]
