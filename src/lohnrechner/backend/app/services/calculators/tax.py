"""Wage tax, solidarity surcharge, church tax and taxable income.

Each function works on plain numbers plus the relevant slice of the year
configuration so that it can be tested in isolation.
"""

from __future__ import annotations

import math

from lohnrechner.backend.app.models import TaxClass
from lohnrechner.backend.config.schema import (
    SolidarityConfig,
    TaxAllowances,
    WageTaxTable,
)

from .utils import percent_of


def income_tax(gross_monthly: float, tax_class: TaxClass | str, table: WageTaxTable) -> float:
    """Look up the monthly wage tax for ``gross_monthly`` in ``table``.

    The first row whose bound is at least the gross supplies the amount, so
    the tax is a step function that never decreases with gross. Tables that
    opt into ``interpolate`` blend between that row and its predecessor
    instead. Beyond the final row the last slope is extended.
    """

    if gross_monthly <= 0:
        return 0.0

    column = table.column_for(TaxClass.parse(tax_class).value)
    rows = table.rows

    for index, row in enumerate(rows):
        if row.bound < gross_monthly:
            continue
        if index == 0 or not table.interpolate:
            return row.amounts[column]
        previous = rows[index - 1]
        share = (gross_monthly - previous.bound) / (row.bound - previous.bound)
        lower = previous.amounts[column]
        return lower + (row.amounts[column] - lower) * share

    last, before_last = rows[-1], rows[-2]
    slope = (last.amounts[column] - before_last.amounts[column]) / (
        last.bound - before_last.bound
    )
    return last.amounts[column] + (gross_monthly - last.bound) * slope


def solidarity_tax(annual_income_tax: float, config: SolidarityConfig) -> float:
    """Return the yearly solidarity surcharge for ``annual_income_tax``.

    Nothing is due up to the free threshold. Above it the full surcharge is
    capped by the mitigation zone so the amount grows smoothly from zero.
    """

    if annual_income_tax <= config.free_threshold:
        return 0.0

    full = math.floor(percent_of(annual_income_tax, config.rate))
    if config.mitigation_rate is None:
        return float(full)

    mitigated = math.floor(
        percent_of(annual_income_tax - config.free_threshold, config.mitigation_rate)
    )
    return float(min(full, mitigated))


def church_tax(annual_income_tax: float, rate: float) -> float:
    """Return church tax as ``rate`` percent of the income tax, rounded down."""

    if annual_income_tax <= 0 or rate <= 0:
        return 0.0
    return float(math.floor(percent_of(annual_income_tax, rate)))


def taxable_income(
    gross_yearly: float,
    child_allowances: float,
    social_contributions_yearly: float,
    allowances: TaxAllowances,
) -> float:
    """Return the truncated yearly taxable income, never below zero."""

    remaining = (
        gross_yearly
        - allowances.work_expenses
        - allowances.special_expenses
        - social_contributions_yearly
        - max(child_allowances, 0.0) * allowances.child_allowance
    )
    if remaining <= 0:
        return 0.0
    return float(math.floor(remaining))


__all__ = ["church_tax", "income_tax", "solidarity_tax", "taxable_income"]
