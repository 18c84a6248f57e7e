"""Unit tests for overtime and unsocial-hours premiums."""

from __future__ import annotations

import pytest

from lohnrechner.backend.app.services.calculation_service import calculate_overtime_pay
from lohnrechner.backend.app.services.calculators import overtime_and_bonuses
from lohnrechner.backend.config.year_config import YearConfiguration


def test_overtime_and_premiums(config_2025: YearConfiguration) -> None:
    pay = overtime_and_bonuses(
        20,
        160,
        config_2025.overtime,
        overtime_hours=10,
        night_hours=8,
        sunday_hours=8,
        holiday_hours=8,
    )

    assert pay.regular_pay == pytest.approx(3200)
    assert pay.overtime_pay == pytest.approx(250)
    assert pay.night_bonus == pytest.approx(40)
    assert pay.sunday_bonus == pytest.approx(80)
    assert pay.holiday_bonus == pytest.approx(160)
    assert pay.total_bonuses == pytest.approx(330)
    assert pay.total_gross == pytest.approx(3730)


def test_regular_hours_only(config_2025: YearConfiguration) -> None:
    pay = overtime_and_bonuses(18.5, 100, config_2025.overtime)

    assert pay.total_gross == pytest.approx(1850)
    assert pay.total_bonuses == 0.0


def test_negative_inputs_pay_nothing(config_2025: YearConfiguration) -> None:
    pay = overtime_and_bonuses(-20, -5, config_2025.overtime, overtime_hours=-3, night_hours=-1)

    assert pay.hourly_rate == 0.0
    assert pay.total_gross == 0.0


def test_premium_rates_come_from_year(config_2025: YearConfiguration) -> None:
    rates = config_2025.overtime.model_copy(update={"overtime_rate": 50})

    pay = overtime_and_bonuses(20, 0, rates, overtime_hours=10)

    assert pay.overtime_pay == pytest.approx(300)
    assert pay.total_bonuses == pytest.approx(100)


def test_overtime_payload_includes_net_of_total() -> None:
    response = calculate_overtime_pay({"hourly_rate": 25, "regular_hours": 160})

    assert response["year"] == 2025
    assert response["overtime"]["total_gross"] == 4000.0
    assert response["result"]["gross_monthly"] == 4000.0
    assert response["result"]["net_monthly"] == 2592.0


def test_overtime_payload_rejects_negative_hours() -> None:
    with pytest.raises(ValueError, match="overtime_hours: value cannot be negative"):
        calculate_overtime_pay({"hourly_rate": 25, "regular_hours": 160, "overtime_hours": -1})
