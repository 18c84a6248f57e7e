"""Overtime and unsocial-hours premiums on top of an hourly wage."""

from __future__ import annotations

from lohnrechner.backend.app.models import OvertimePay
from lohnrechner.backend.config.schema import OvertimeConfig

from .utils import percent_of


def overtime_and_bonuses(
    hourly_rate: float,
    regular_hours: float,
    config: OvertimeConfig,
    *,
    overtime_hours: float = 0.0,
    night_hours: float = 0.0,
    sunday_hours: float = 0.0,
    holiday_hours: float = 0.0,
) -> OvertimePay:
    """Return regular pay, overtime pay and premiums for one month.

    Overtime hours are paid at the hourly rate plus the overtime premium.
    Night, Sunday and holiday hours are already part of the worked hours and
    only add their premium. Unlike the industry SFN rules the premiums use the
    full hourly rate and are all taxable.
    """

    rate = max(hourly_rate, 0.0)
    overtime_hours = max(overtime_hours, 0.0)

    regular_pay = max(regular_hours, 0.0) * rate
    overtime_base = overtime_hours * rate
    overtime_premium = percent_of(overtime_base, config.overtime_rate)
    night = percent_of(max(night_hours, 0.0) * rate, config.night_rate)
    sunday = percent_of(max(sunday_hours, 0.0) * rate, config.sunday_rate)
    holiday = percent_of(max(holiday_hours, 0.0) * rate, config.holiday_rate)

    overtime_pay = overtime_base + overtime_premium
    return OvertimePay(
        hourly_rate=rate,
        regular_pay=regular_pay,
        overtime_pay=overtime_pay,
        night_bonus=night,
        sunday_bonus=sunday,
        holiday_bonus=holiday,
        total_bonuses=overtime_premium + night + sunday + holiday,
        total_gross=regular_pay + overtime_pay + night + sunday + holiday,
    )


__all__ = ["overtime_and_bonuses"]
