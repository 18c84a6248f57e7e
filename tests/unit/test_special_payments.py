"""Unit tests for sick pay, maternity benefits and short-time work allowance."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from lohnrechner.backend.app.models import MaternityBenefitType, PaymentStatus
from lohnrechner.backend.app.services.params_factory import build_quick_tax_params
from lohnrechner.backend.app.services.special_payments import (
    calculate_maternity_benefit,
    calculate_short_time_work,
    calculate_sick_pay,
    maternity_protection_period,
    max_sick_pay_end,
    reduction_percent,
    validate_short_time_work,
)
from lohnrechner.backend.app.services.tax_service import net_from_gross
from lohnrechner.backend.config.year_config import YearConfiguration

NET_FOR_3000 = 3000 - 305 - 3000 * 0.2155


@pytest.fixture()
def params(config_2025: YearConfiguration):
    return build_quick_tax_params(3000, config=config_2025)


def test_sick_pay_is_capped_by_net(params, config_2025: YearConfiguration) -> None:
    record = calculate_sick_pay(params, date(2025, 1, 1), date(2025, 1, 30), config_2025)

    assert record.days == 30
    assert record.daily_gross == pytest.approx(100)
    assert record.daily_net == pytest.approx(NET_FOR_3000 / 30)
    assert record.pay_per_day == pytest.approx(0.9 * NET_FOR_3000 / 30)
    assert record.total_amount == pytest.approx(record.pay_per_day * 30)


@pytest.mark.parametrize("gross", [600, 1500, 3000, 6000, 12000])
def test_sick_pay_never_exceeds_either_limit(config_2025: YearConfiguration, gross: float) -> None:
    params = build_quick_tax_params(gross, config=config_2025)
    record = calculate_sick_pay(params, date(2025, 3, 1), date(2025, 3, 10), config_2025)

    assert record.pay_per_day <= 0.70 * record.daily_gross + 1e-9
    assert record.pay_per_day <= 0.90 * record.daily_net + 1e-9


def test_sick_pay_stops_after_maximum_duration(params, config_2025: YearConfiguration) -> None:
    record = calculate_sick_pay(params, date(2025, 1, 1), date(2027, 1, 1), config_2025)

    assert record.max_end_date == date(2026, 7, 1)
    assert record.days == 78 * 7 + 1


def test_max_sick_pay_end(config_2025: YearConfiguration) -> None:
    rules = config_2025.special_payments.sick_pay

    assert max_sick_pay_end(date(2025, 1, 1), rules) == date(2026, 7, 1)
    assert max_sick_pay_end(date(2025, 3, 15), rules) - date(2025, 3, 15) == timedelta(weeks=78)


def test_payment_status_follows_reference_date(params, config_2025: YearConfiguration) -> None:
    start, end = date(2025, 1, 1), date(2025, 1, 14)

    finished = calculate_sick_pay(params, start, end, config_2025, as_of=date(2025, 2, 1))
    running = calculate_sick_pay(params, start, end, config_2025, as_of=date(2025, 1, 10))

    assert finished.status is PaymentStatus.COMPLETED
    assert running.status is PaymentStatus.ACTIVE
    assert finished.record_id != running.record_id


def test_payment_without_reference_date_is_active(params, config_2025: YearConfiguration) -> None:
    record = calculate_sick_pay(params, date(2020, 1, 1), date(2020, 1, 14), config_2025)

    assert record.status is PaymentStatus.ACTIVE


def test_maternity_protection_period_dates(config_2025: YearConfiguration) -> None:
    start, end = maternity_protection_period(date(2025, 9, 1), config_2025)

    assert start == date(2025, 7, 21)
    assert end == date(2025, 10, 27)


def test_maternity_protection_split(params, config_2025: YearConfiguration) -> None:
    record = calculate_maternity_benefit(
        params, date(2025, 7, 1), date(2025, 7, 14), config=config_2025
    )

    assert record.benefit_type is MaternityBenefitType.PROTECTION_PERIOD
    assert record.days == 14
    assert record.insurance_daily == pytest.approx(13)
    assert record.employer_daily == pytest.approx(87)
    assert record.total_amount == pytest.approx(1400)
    assert record.insurance_total == pytest.approx(182)
    assert record.employer_total == pytest.approx(1218)


def test_maternity_low_income_has_no_employer_top_up(config_2025: YearConfiguration) -> None:
    params = build_quick_tax_params(300, config=config_2025)
    record = calculate_maternity_benefit(
        params, date(2025, 7, 1), date(2025, 7, 10), config=config_2025
    )

    assert record.insurance_daily == pytest.approx(10)
    assert record.employer_daily == 0.0


def test_parental_leave_uses_net_share(params, config_2025: YearConfiguration) -> None:
    record = calculate_maternity_benefit(
        params,
        date(2025, 8, 1),
        date(2025, 8, 30),
        MaternityBenefitType.PARENTAL_LEAVE,
        config_2025,
    )

    assert record.daily_benefit == pytest.approx(NET_FOR_3000 * 0.65 / 30)
    assert record.employer_total == 0.0
    assert record.total_amount == pytest.approx(NET_FOR_3000 * 0.65)


def test_reduction_percent() -> None:
    assert reduction_percent(40, 20) == pytest.approx(50)
    assert reduction_percent(40, 50) == 0.0
    assert reduction_percent(0, 0) == 0.0


def test_short_time_work_minimum_reduction(config_2025: YearConfiguration) -> None:
    rules = config_2025.special_payments.short_time_work

    assert validate_short_time_work(10, rules) is True
    assert validate_short_time_work(9.9, rules) is False


def test_short_time_work_uses_net_difference(params, config_2025: YearConfiguration) -> None:
    record = calculate_short_time_work(
        params, date(2025, 4, 1), date(2025, 6, 30), 40, 20, config=config_2025
    )

    expected_loss = NET_FOR_3000 - net_from_gross(1500, params, config_2025)
    assert record.reduction_percent == pytest.approx(50)
    assert record.gross_loss == pytest.approx(1500)
    assert record.net_loss == pytest.approx(expected_loss)
    assert record.benefit_rate == 60
    assert record.benefit_amount == pytest.approx(expected_loss * 0.6)
    assert record.latest_end_date == date(2027, 4, 1)
    assert record.qualifies is True


def test_short_time_work_with_children(params, config_2025: YearConfiguration) -> None:
    record = calculate_short_time_work(
        params,
        date(2025, 4, 1),
        date(2025, 4, 30),
        40,
        30,
        has_children=True,
        config=config_2025,
    )

    assert record.benefit_rate == 67
    assert record.benefit_amount == pytest.approx(record.net_loss * 0.67)


def test_short_time_work_flags_small_reduction(params, config_2025: YearConfiguration) -> None:
    record = calculate_short_time_work(
        params, date(2025, 4, 1), date(2025, 4, 30), 40, 38, config=config_2025
    )

    assert record.qualifies is False
    assert record.benefit_amount > 0
