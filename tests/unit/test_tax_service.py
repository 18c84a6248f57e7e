"""Unit tests for the gross-to-net orchestration."""

from __future__ import annotations

import math

import pytest

from lohnrechner.backend.app.models import ContributionRegime, TaxCalculationParams, TaxClass
from lohnrechner.backend.app.services.calculators import solidarity_tax
from lohnrechner.backend.app.services.tax_service import (
    complete_tax,
    industry_net,
    net_from_gross,
)
from lohnrechner.backend.config.year_config import YearConfiguration


def _params(gross_yearly: float, **overrides) -> TaxCalculationParams:
    values = {
        "gross_salary_yearly": gross_yearly,
        "tax_class": TaxClass.I,
        "health_insurance_additional_rate": 2.5,
        "age": 30,
    }
    values.update(overrides)
    return TaxCalculationParams(**values)


def test_single_childless_employee_scenario(config_2025: YearConfiguration) -> None:
    result = complete_tax(_params(48_000), config_2025)

    assert result.regime is ContributionRegime.REGULAR
    assert result.gross_monthly == pytest.approx(4000)
    assert result.income_tax == pytest.approx(6552)
    assert result.solidarity_tax == 0.0
    assert result.church_tax == 0.0
    assert result.taxable_income == pytest.approx(36_390)
    assert result.total_social_contributions == pytest.approx(10_344)
    assert result.net_yearly == pytest.approx(31_104)
    assert result.net_monthly == pytest.approx(2_592)
    assert result.employer_contributions == pytest.approx(10_056)
    assert result.employer_costs == pytest.approx(58_056)

    assert result.net_yearly < 48_000
    assert result.employer_costs > 48_000
    for branch in (
        result.pension_insurance,
        result.unemployment_insurance,
        result.health_insurance,
        result.care_insurance,
    ):
        assert branch > 0


def test_minijob_net_equals_gross(config_2025: YearConfiguration) -> None:
    result = complete_tax(_params(556 * 12), config_2025)

    assert result.regime is ContributionRegime.MINIJOB
    assert result.net_monthly == pytest.approx(556)
    assert result.total_taxes == 0.0
    assert result.taxable_income == 0.0
    assert result.pension_insurance == 0.0
    assert result.unemployment_insurance == 0.0
    assert result.health_insurance == 0.0
    assert result.care_insurance == 0.0
    assert result.employer_contributions > 0


def test_minijob_ceiling_follows_year(
    config_2024: YearConfiguration, config_2025: YearConfiguration
) -> None:
    params = _params(550 * 12)

    assert complete_tax(params, config_2024).regime is ContributionRegime.MIDIJOB
    assert complete_tax(params, config_2025).regime is ContributionRegime.MINIJOB


def test_year_keyword_loads_configuration() -> None:
    result = complete_tax(_params(48_000), year=2024)

    assert result.income_tax == pytest.approx(557 * 12)


@pytest.mark.parametrize("gross_yearly", [0, 4_800, 12_000, 30_000, 48_000, 90_000, 180_000])
@pytest.mark.parametrize("tax_class", list(TaxClass))
def test_deductions_and_net_add_up_to_gross(
    config_2025: YearConfiguration, gross_yearly: float, tax_class: TaxClass
) -> None:
    result = complete_tax(
        _params(gross_yearly, tax_class=tax_class, church_tax=True, church_tax_rate=9),
        config_2025,
    )

    assert result.total_deductions + result.net_yearly == pytest.approx(gross_yearly)
    assert result.total_taxes == pytest.approx(
        result.income_tax + result.solidarity_tax + result.church_tax
    )


def test_church_tax_uses_income_tax_basis(config_2025: YearConfiguration) -> None:
    result = complete_tax(_params(48_000, church_tax=True, church_tax_rate=9), config_2025)

    assert result.church_tax == 589.0


def test_church_tax_ignored_without_membership(config_2025: YearConfiguration) -> None:
    result = complete_tax(_params(48_000, church_tax=False, church_tax_rate=9), config_2025)

    assert result.church_tax == 0.0


def test_surcharges_use_reported_income_tax_with_children(
    config_2025: YearConfiguration,
) -> None:
    result = complete_tax(
        _params(60_000, child_allowances=1, church_tax=True, church_tax_rate=9),
        config_2025,
    )
    childless = complete_tax(_params(60_000, church_tax=True, church_tax_rate=9), config_2025)

    assert result.income_tax == pytest.approx(817 * 12)
    assert result.church_tax == math.floor(result.income_tax * 9 / 100) == 882
    assert result.solidarity_tax == solidarity_tax(result.income_tax, config_2025.solidarity)
    assert result.taxable_income < childless.taxable_income


@pytest.mark.parametrize("child_allowances", [0.5, 1, 2.5])
def test_child_allowances_leave_surcharges_unchanged(
    config_2025: YearConfiguration, child_allowances: float
) -> None:
    with_children = complete_tax(
        _params(
            144_000, child_allowances=child_allowances, church_tax=True, church_tax_rate=8
        ),
        config_2025,
    )
    childless = complete_tax(_params(144_000, church_tax=True, church_tax_rate=8), config_2025)

    assert with_children.income_tax == childless.income_tax
    assert with_children.solidarity_tax == childless.solidarity_tax
    assert with_children.church_tax == childless.church_tax


def test_solidarity_tax_for_high_earners(config_2025: YearConfiguration) -> None:
    result = complete_tax(_params(144_000), config_2025)

    assert result.income_tax == pytest.approx(38_976)
    assert result.solidarity_tax == 2_143.0


def test_net_from_gross_matches_complete_tax(config_2025: YearConfiguration) -> None:
    params = _params(0)

    assert net_from_gross(4000, params, config_2025) == pytest.approx(2592)


def test_industry_net_adds_tax_free_part(config_2025: YearConfiguration) -> None:
    params = _params(0)
    net = industry_net(4000, 150, params, config_2025)

    assert net.calculation.net_monthly == pytest.approx(2592)
    assert net.tax_free_amount == 150
    assert net.net_monthly == pytest.approx(2742)


def test_industry_net_ignores_negative_tax_free_amount(config_2025: YearConfiguration) -> None:
    net = industry_net(4000, -50, _params(0), config_2025)

    assert net.tax_free_amount == 0.0
