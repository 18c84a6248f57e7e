"""Gross-to-net orchestration on top of the tax and contribution calculators."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lohnrechner.backend.app.models import (
    ContributionRegime,
    TaxCalculationParams,
    TaxCalculationResult,
)
from lohnrechner.backend.config.year_config import YearConfiguration, resolve_configuration

from .calculators import (
    calculate_contributions,
    church_tax,
    income_tax,
    solidarity_tax,
    taxable_income,
)

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IndustryNet:
    """Net pay for an industry result: taxed part after deductions plus tax-free part."""

    calculation: TaxCalculationResult
    tax_free_amount: float

    @property
    def net_monthly(self) -> float:
        return self.calculation.net_monthly + self.tax_free_amount


def complete_tax(
    params: TaxCalculationParams,
    config: YearConfiguration | None = None,
    *,
    year: int | None = None,
) -> TaxCalculationResult:
    """Compute yearly taxes, contributions and net pay for ``params``."""

    config = resolve_configuration(config, year)
    gross_yearly = params.gross_salary_yearly
    gross_monthly = params.gross_monthly

    contributions = calculate_contributions(gross_monthly, params, config.social_insurance)
    social_yearly = contributions.employee_total * 12
    employer_yearly = contributions.employer_total * 12
    _LOGGER.debug(
        "Monthly gross %.2f falls into the %s regime", gross_monthly, contributions.regime.value
    )

    if contributions.regime is ContributionRegime.MINIJOB:
        taxable = annual_income_tax = solidarity = church = 0.0
    else:
        taxable = taxable_income(
            gross_yearly, params.child_allowances, social_yearly, config.allowances
        )
        annual_income_tax = (
            income_tax(gross_monthly, params.tax_class, config.income_tax) * 12
        )
        solidarity = solidarity_tax(annual_income_tax, config.solidarity)
        church = (
            church_tax(annual_income_tax, params.church_tax_rate) if params.church_tax else 0.0
        )

    total_taxes = annual_income_tax + solidarity + church
    total_deductions = total_taxes + social_yearly
    net_yearly = gross_yearly - total_deductions

    return TaxCalculationResult(
        gross_yearly=gross_yearly,
        gross_monthly=gross_monthly,
        taxable_income=taxable,
        income_tax=annual_income_tax,
        solidarity_tax=solidarity,
        church_tax=church,
        pension_insurance=contributions.pension * 12,
        unemployment_insurance=contributions.unemployment * 12,
        health_insurance=contributions.health * 12,
        care_insurance=contributions.care * 12,
        total_taxes=total_taxes,
        total_social_contributions=social_yearly,
        total_deductions=total_deductions,
        net_yearly=net_yearly,
        net_monthly=net_yearly / 12,
        employer_contributions=employer_yearly,
        employer_costs=gross_yearly + employer_yearly,
        regime=contributions.regime,
    )


def net_from_gross(
    gross_monthly: float,
    params: TaxCalculationParams,
    config: YearConfiguration | None = None,
) -> float:
    """Return the monthly net pay for ``gross_monthly`` under ``params``."""

    return complete_tax(params.with_gross_monthly(gross_monthly), config).net_monthly


def industry_net(
    taxable_amount: float,
    tax_free_amount: float,
    params: TaxCalculationParams,
    config: YearConfiguration | None = None,
) -> IndustryNet:
    """Run the tax calculator on the taxable part of an industry payroll result."""

    calculation = complete_tax(params.with_gross_monthly(taxable_amount), config)
    return IndustryNet(calculation=calculation, tax_free_amount=max(tax_free_amount, 0.0))


__all__ = ["IndustryNet", "complete_tax", "industry_net", "net_from_gross"]
