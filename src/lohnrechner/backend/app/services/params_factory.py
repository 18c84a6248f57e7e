"""Build calculator parameters from employee records and request profiles."""

from __future__ import annotations

from datetime import date
from typing import Any

from lohnrechner.backend.app.models import (
    DEFAULT_AGE,
    Employee,
    TaxCalculationParams,
    TaxClass,
    TaxProfileInput,
)
from lohnrechner.backend.config.schema import ChurchTaxConfig
from lohnrechner.backend.config.year_config import YearConfiguration, resolve_configuration

from .calculators.utils import safe_divide

WEEKS_PER_MONTH = 52 / 12

STATE_CODES: dict[str, str] = {
    "bw": "baden-wuerttemberg",
    "by": "bayern",
    "be": "berlin",
    "bb": "brandenburg",
    "hb": "bremen",
    "hh": "hamburg",
    "he": "hessen",
    "mv": "mecklenburg-vorpommern",
    "ni": "niedersachsen",
    "nw": "nordrhein-westfalen",
    "rp": "rheinland-pfalz",
    "sl": "saarland",
    "sn": "sachsen",
    "st": "sachsen-anhalt",
    "sh": "schleswig-holstein",
    "th": "thueringen",
    "bavaria": "bayern",
    "saxony": "sachsen",
    "saxony-anhalt": "sachsen-anhalt",
    "thuringia": "thueringen",
    "hesse": "hessen",
    "lower-saxony": "niedersachsen",
    "north-rhine-westphalia": "nordrhein-westfalen",
    "rhineland-palatinate": "rheinland-pfalz",
}

# Berlin is treated as west for contribution purposes.
EAST_STATES = frozenset(
    {
        "brandenburg",
        "mecklenburg-vorpommern",
        "sachsen",
        "sachsen-anhalt",
        "thueringen",
    }
)

_UMLAUTS = str.maketrans({"ä": "ae", "ö": "oe", "ü": "ue", "ß": "ss", " ": "-", "_": "-"})


def normalise_state(state: str | None) -> str | None:
    """Return the canonical lowercase state key for a name or two-letter code."""

    if state is None:
        return None
    key = state.strip().lower().translate(_UMLAUTS)
    if not key:
        return None
    return STATE_CODES.get(key, key)


def is_east_german_state(state: str | None) -> bool:
    return normalise_state(state) in EAST_STATES


def church_tax_rate_for(state: str | None, church_tax: bool, config: ChurchTaxConfig) -> float:
    """Return the church-tax percentage for ``state`` (0 when not liable)."""

    if not church_tax:
        return 0.0
    return config.rate_for_state(normalise_state(state))


def calculate_age(birth_date: date, as_of: date | None = None) -> int:
    """Return the completed years of age on ``as_of`` (today by default)."""

    reference = as_of or date.today()
    age = reference.year - birth_date.year
    if (reference.month, reference.day) < (birth_date.month, birth_date.day):
        age -= 1
    return max(age, 0)


def monthly_hourly_rate(employee: Employee) -> float:
    """Return the hourly wage, deriving it from the monthly gross if needed."""

    if employee.salary.hourly_wage is not None:
        return employee.salary.hourly_wage
    monthly_hours = employee.employment.weekly_hours * WEEKS_PER_MONTH
    return safe_divide(employee.salary.gross_salary, monthly_hours)


def build_tax_params(
    employee: Employee,
    config: YearConfiguration | None = None,
    *,
    as_of: date | None = None,
    **overrides: Any,
) -> TaxCalculationParams:
    """Derive calculator parameters from an employee's master data."""

    config = resolve_configuration(config)
    personal = employee.personal

    additional_rate = personal.health_insurance_additional_rate
    if additional_rate is None:
        additional_rate = config.social_insurance.health.average_additional_rate

    age = DEFAULT_AGE
    if personal.date_of_birth is not None:
        age = calculate_age(personal.date_of_birth, as_of)

    values: dict[str, Any] = {
        "gross_salary_yearly": employee.salary.gross_salary * 12,
        "tax_class": personal.tax_class,
        "child_allowances": personal.child_allowances,
        "church_tax": personal.church_tax,
        "church_tax_rate": church_tax_rate_for(
            personal.state, personal.church_tax, config.church_tax
        ),
        "health_insurance_additional_rate": additional_rate,
        "is_east_germany": is_east_german_state(personal.state),
        "is_childless": personal.child_allowances == 0,
        "age": age,
    }
    values.update(overrides)
    return TaxCalculationParams.model_validate(values)


def build_quick_tax_params(
    gross_monthly: float,
    tax_class: TaxClass | str | int = TaxClass.I,
    *,
    child_allowances: float = 0.0,
    church_tax: bool = False,
    church_tax_rate: float | None = None,
    state: str | None = None,
    is_east_germany: bool | None = None,
    health_insurance_additional_rate: float | None = None,
    is_childless: bool | None = None,
    age: int | None = None,
    config: YearConfiguration | None = None,
) -> TaxCalculationParams:
    """Build parameters from a handful of values, filling the rest with defaults."""

    config = resolve_configuration(config)
    if church_tax_rate is None:
        church_tax_rate = church_tax_rate_for(state, church_tax, config.church_tax)
    if is_east_germany is None:
        is_east_germany = is_east_german_state(state)
    if health_insurance_additional_rate is None:
        health_insurance_additional_rate = config.social_insurance.health.average_additional_rate

    return TaxCalculationParams(
        gross_salary_yearly=gross_monthly * 12,
        tax_class=tax_class,
        child_allowances=child_allowances,
        church_tax=church_tax,
        church_tax_rate=church_tax_rate,
        health_insurance_additional_rate=health_insurance_additional_rate,
        is_east_germany=is_east_germany,
        is_childless=is_childless,
        age=DEFAULT_AGE if age is None else age,
    )


def build_params_from_profile(
    profile: TaxProfileInput,
    gross_monthly: float,
    config: YearConfiguration,
) -> TaxCalculationParams:
    """Translate a validated API profile into calculator parameters."""

    return build_quick_tax_params(
        gross_monthly,
        profile.tax_class,
        child_allowances=profile.child_allowances,
        church_tax=profile.church_tax,
        church_tax_rate=profile.church_tax_rate,
        state=profile.state,
        is_east_germany=profile.east_germany,
        health_insurance_additional_rate=profile.health_insurance_additional_rate,
        is_childless=profile.childless,
        age=profile.age,
        config=config,
    )


__all__ = [
    "EAST_STATES",
    "STATE_CODES",
    "build_params_from_profile",
    "build_quick_tax_params",
    "build_tax_params",
    "calculate_age",
    "church_tax_rate_for",
    "is_east_german_state",
    "monthly_hourly_rate",
    "normalise_state",
]
