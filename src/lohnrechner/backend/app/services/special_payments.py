"""Sick pay, maternity benefits and short-time work allowance.

All three reuse the tax calculator for their net-pay inputs. Day counts are
inclusive of both the first and the last day of a period; monthly amounts are
spread over a fixed 30-day month.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta

from typing_extensions import assert_never

from lohnrechner.backend.app.models import (
    MaternityBenefitRecord,
    MaternityBenefitType,
    PaymentStatus,
    ShortTimeWorkRecord,
    SickPayRecord,
    TaxCalculationParams,
)
from lohnrechner.backend.config.schema import ShortTimeWorkConfig, SickPayConfig
from lohnrechner.backend.config.year_config import YearConfiguration, resolve_configuration

from .calculators.utils import add_months, add_weeks, inclusive_days, percent_of, safe_divide
from .tax_service import complete_tax

_LOGGER = logging.getLogger(__name__)


def _status(end_date: date, as_of: date | None) -> PaymentStatus:
    if as_of is not None and end_date < as_of:
        return PaymentStatus.COMPLETED
    return PaymentStatus.ACTIVE


def max_sick_pay_end(start_date: date, config: SickPayConfig) -> date:
    """Return the date sick pay runs out for an illness starting on ``start_date``."""

    return add_weeks(start_date, config.max_weeks)


def calculate_sick_pay(
    params: TaxCalculationParams,
    start_date: date,
    end_date: date,
    config: YearConfiguration | None = None,
    *,
    as_of: date | None = None,
) -> SickPayRecord:
    """Return the sick pay (Krankengeld) for the period.

    Each day pays the lower of a share of the daily gross and a share of the
    daily net. Days beyond the maximum entitlement are not paid.
    """

    config = resolve_configuration(config)
    rules = config.special_payments.sick_pay

    daily_gross = params.gross_monthly / rules.days_per_month
    daily_net = complete_tax(params, config).net_monthly / rules.days_per_month
    pay_per_day = min(
        percent_of(daily_gross, rules.gross_rate),
        percent_of(daily_net, rules.net_cap_rate),
    )
    pay_per_day = max(pay_per_day, 0.0)

    latest_end = max_sick_pay_end(start_date, rules)
    if end_date > latest_end:
        _LOGGER.debug("Sick pay period truncated to %s", latest_end.isoformat())
    days = inclusive_days(start_date, min(end_date, latest_end))

    return SickPayRecord(
        start_date=start_date,
        end_date=end_date,
        days=days,
        daily_gross=daily_gross,
        daily_net=daily_net,
        pay_per_day=pay_per_day,
        total_amount=pay_per_day * days,
        max_end_date=latest_end,
        status=_status(end_date, as_of),
    )


def maternity_protection_period(
    expected_birth: date, config: YearConfiguration | None = None
) -> tuple[date, date]:
    """Return the first and last day of the statutory protection period."""

    rules = resolve_configuration(config).special_payments.maternity
    start = expected_birth - timedelta(weeks=rules.protection_weeks_before_birth)
    end = expected_birth + timedelta(weeks=rules.protection_weeks_after_birth)
    return start, end


def calculate_maternity_benefit(
    params: TaxCalculationParams,
    start_date: date,
    end_date: date,
    benefit_type: MaternityBenefitType = MaternityBenefitType.PROTECTION_PERIOD,
    config: YearConfiguration | None = None,
    *,
    as_of: date | None = None,
) -> MaternityBenefitRecord:
    """Return maternity pay for the protection period or parental allowance.

    During the protection period the health insurer pays a capped daily amount
    and the employer tops it up to the full daily gross. Parental allowance is a
    share of the monthly net and is paid entirely by the state.
    """

    config = resolve_configuration(config)
    rules = config.special_payments.maternity
    days = inclusive_days(start_date, end_date)

    match benefit_type:
        case MaternityBenefitType.PROTECTION_PERIOD:
            daily_benefit = params.gross_monthly / rules.days_per_month
            insurance_daily = min(rules.insurance_daily_cap, daily_benefit)
            employer_daily = max(daily_benefit - insurance_daily, 0.0)
        case MaternityBenefitType.PARENTAL_LEAVE:
            net_monthly = complete_tax(params, config).net_monthly
            daily_benefit = (
                percent_of(net_monthly, rules.parental_leave_rate) / rules.days_per_month
            )
            insurance_daily = daily_benefit
            employer_daily = 0.0
        case _:
            assert_never(benefit_type)

    return MaternityBenefitRecord(
        benefit_type=benefit_type,
        start_date=start_date,
        end_date=end_date,
        days=days,
        daily_benefit=daily_benefit,
        insurance_daily=insurance_daily,
        employer_daily=employer_daily,
        total_amount=daily_benefit * days,
        insurance_total=insurance_daily * days,
        employer_total=employer_daily * days,
        status=_status(end_date, as_of),
    )


def reduction_percent(original_hours: float, reduced_hours: float) -> float:
    lost = max(original_hours - max(reduced_hours, 0.0), 0.0)
    return safe_divide(lost, original_hours) * 100


def validate_short_time_work(reduction: float, config: ShortTimeWorkConfig) -> bool:
    """Return ``True`` when the working-time reduction qualifies for the allowance."""

    return reduction >= config.min_reduction


def calculate_short_time_work(
    params: TaxCalculationParams,
    start_date: date,
    end_date: date,
    original_hours: float,
    reduced_hours: float,
    has_children: bool = False,
    config: YearConfiguration | None = None,
    *,
    as_of: date | None = None,
) -> ShortTimeWorkRecord:
    """Return the monthly short-time work allowance (Kurzarbeitergeld).

    The net loss is the difference between the net pay on the full gross and
    the net pay on the reduced gross.
    """

    config = resolve_configuration(config)
    rules = config.special_payments.short_time_work

    reduction = reduction_percent(original_hours, reduced_hours)
    gross = params.gross_monthly
    gross_loss = percent_of(gross, reduction)

    full_net = complete_tax(params, config).net_monthly
    reduced_net = complete_tax(params.with_gross_monthly(gross - gross_loss), config).net_monthly
    net_loss = max(full_net - reduced_net, 0.0)

    rate = rules.benefit_rate_with_children if has_children else rules.benefit_rate
    qualifies = validate_short_time_work(reduction, rules)
    if not qualifies:
        _LOGGER.debug(
            "Working-time reduction of %.1f%% is below the %.1f%% minimum",
            reduction,
            rules.min_reduction,
        )

    return ShortTimeWorkRecord(
        start_date=start_date,
        end_date=end_date,
        original_hours=original_hours,
        reduced_hours=reduced_hours,
        reduction_percent=reduction,
        gross_loss=gross_loss,
        net_loss=net_loss,
        benefit_rate=rate,
        benefit_amount=percent_of(net_loss, rate),
        latest_end_date=add_months(start_date, rules.max_months),
        qualifies=qualifies,
        status=_status(end_date, as_of),
    )


__all__ = [
    "calculate_maternity_benefit",
    "calculate_short_time_work",
    "calculate_sick_pay",
    "maternity_protection_period",
    "max_sick_pay_end",
    "reduction_percent",
    "validate_short_time_work",
]
