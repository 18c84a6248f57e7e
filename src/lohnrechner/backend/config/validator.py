"""Utilities for validating year configuration data and surfacing issues."""

from __future__ import annotations

import argparse
from typing import Mapping, Sequence

from .schema import (
    AssessmentCeilings,
    ConfigurationError,
    ContributionRates,
    SocialInsuranceConfig,
    SpecialPaymentsConfig,
    WageTaxTable,
)
from .year_config import (
    YearConfiguration,
    available_years,
    load_year_configuration,
)


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_percentages(scope: str, values: Mapping[str, float]) -> list[str]:
    errors: list[str] = []
    for label, value in values.items():
        if value < 0 or value > 100:
            errors.append(
                _format_scope(
                    scope,
                    f"{label} percentage must be between 0 and 100 (found {value})",
                )
            )
    return errors


def _validate_contributions(scope: str, contributions: ContributionRates) -> list[str]:
    return _validate_percentages(
        scope,
        {
            "employee": contributions.employee_rate,
            "employer": contributions.employer_rate,
        },
    )


def _validate_wage_table(table: WageTaxTable) -> list[str]:
    scope = "income_tax"
    errors: list[str] = []

    first = table.rows[0]
    if first.bound != 0 or any(amount != 0 for amount in first.amounts.values()):
        errors.append(_format_scope(scope, "first row must start at 0 with zero tax"))

    reference = table.column_for("I")
    for tax_class in ("V", "VI"):
        column = table.column_for(tax_class)
        below = [
            row.bound for row in table.rows if row.amounts[column] < row.amounts[reference]
        ]
        if below:
            errors.append(
                _format_scope(
                    scope,
                    f"class {tax_class} must not be taxed below class I"
                    f" (bounds {', '.join(f'{bound:g}' for bound in below)})",
                )
            )

    for previous, current in zip(table.rows, table.rows[1:]):
        width = current.bound - previous.bound
        for column in table.columns:
            slope = (current.amounts[column] - previous.amounts[column]) / width
            if slope >= 1:
                errors.append(
                    _format_scope(
                        scope,
                        f"column '{column}' rises faster than gross between"
                        f" {previous.bound:g} and {current.bound:g}",
                    )
                )
    return errors


def _validate_ceilings(ceilings: AssessmentCeilings) -> list[str]:
    scope = "social_insurance.ceilings"
    errors: list[str] = []
    for label, ceiling in {
        "pension_unemployment": ceilings.pension_unemployment,
        "health_care": ceilings.health_care,
    }.items():
        if ceiling.east > ceiling.west:
            errors.append(_format_scope(scope, f"{label} east ceiling exceeds west"))
    for region in ("west", "east"):
        health = getattr(ceilings.health_care, region)
        pension = getattr(ceilings.pension_unemployment, region)
        if health > pension:
            errors.append(
                _format_scope(
                    scope, f"{region} health ceiling should not exceed the pension ceiling"
                )
            )
    return errors


def _validate_social_insurance(config: SocialInsuranceConfig) -> list[str]:
    errors: list[str] = []
    errors.extend(_validate_contributions("social_insurance.pension", config.pension))
    errors.extend(
        _validate_contributions("social_insurance.unemployment", config.unemployment)
    )
    errors.extend(_validate_contributions("social_insurance.health", config.health))
    errors.extend(_validate_contributions("social_insurance.care", config.care))
    errors.extend(
        _validate_percentages(
            "social_insurance.health",
            {"average_additional": config.health.average_additional_rate},
        )
    )
    errors.extend(
        _validate_percentages(
            "social_insurance.minijob",
            {
                "employer_health": config.minijob.employer_health_rate,
                "employer_pension": config.minijob.employer_pension_rate,
                "flat_tax": config.minijob.flat_tax_rate,
            },
        )
    )
    errors.extend(_validate_ceilings(config.ceilings))

    lowest_ceiling = min(
        config.ceilings.health_care.west,
        config.ceilings.health_care.east,
    )
    if config.midijob.upper_bound >= lowest_ceiling:
        errors.append(
            _format_scope(
                "social_insurance.midijob",
                "upper bound must stay below the assessment ceilings",
            )
        )
    return errors


def _validate_special_payments(config: SpecialPaymentsConfig) -> list[str]:
    errors: list[str] = []
    errors.extend(
        _validate_percentages(
            "special_payments.sick_pay",
            {
                "gross_rate": config.sick_pay.gross_rate,
                "net_cap_rate": config.sick_pay.net_cap_rate,
            },
        )
    )
    errors.extend(
        _validate_percentages(
            "special_payments.maternity",
            {"parental_leave_rate": config.maternity.parental_leave_rate},
        )
    )
    short_time = config.short_time_work
    errors.extend(
        _validate_percentages(
            "special_payments.short_time_work",
            {
                "benefit_rate": short_time.benefit_rate,
                "benefit_rate_with_children": short_time.benefit_rate_with_children,
                "min_reduction": short_time.min_reduction,
            },
        )
    )
    if short_time.benefit_rate_with_children < short_time.benefit_rate:
        errors.append(
            _format_scope(
                "special_payments.short_time_work",
                "the rate with children must not be lower than the base rate",
            )
        )
    for label, value in {
        "sick_pay.max_weeks": config.sick_pay.max_weeks,
        "short_time_work.max_months": short_time.max_months,
        "maternity.protection_weeks_after_birth": config.maternity.protection_weeks_after_birth,
    }.items():
        if value <= 0:
            errors.append(_format_scope(f"special_payments.{label}", "must be positive"))
    return errors


def validate_year_configuration(config: YearConfiguration) -> list[str]:
    """Return human-readable issues detected for ``config``."""

    errors: list[str] = []

    errors.extend(_validate_wage_table(config.income_tax))
    errors.extend(
        _validate_percentages(
            "solidarity",
            {"rate": config.solidarity.rate, "mitigation": config.solidarity.mitigation_rate or 0},
        )
    )
    errors.extend(
        _validate_percentages(
            "church_tax",
            {"default": config.church_tax.default_rate, **config.church_tax.state_rates},
        )
    )
    errors.extend(_validate_social_insurance(config.social_insurance))
    errors.extend(
        _validate_percentages(
            "construction",
            {
                "soka_employer": config.construction.soka_employer_rate,
                "vacation_bonus": config.construction.vacation_bonus_rate,
            },
        )
    )

    gastronomy = config.gastronomy
    if gastronomy.deep_night_rate < gastronomy.night_rate:
        errors.append(
            _format_scope("gastronomy", "deep-night rate must not be lower than the night rate")
        )
    if gastronomy.special_holiday_rate < gastronomy.holiday_rate:
        errors.append(
            _format_scope(
                "gastronomy", "special holiday rate must not be lower than the holiday rate"
            )
        )

    nursing = config.nursing
    if nursing.christmas_rate < nursing.holiday_rate:
        errors.append(
            _format_scope("nursing", "christmas rate must not be lower than the holiday rate")
        )

    overtime = config.overtime
    if overtime.holiday_rate < overtime.sunday_rate:
        errors.append(
            _format_scope("overtime", "holiday premium must not be lower than the Sunday premium")
        )

    errors.extend(_validate_special_payments(config.special_payments))

    return errors


def validate_all_years(years: Sequence[int] | None = None) -> dict[int, list[str]]:
    """Return the semantic issues of each requested year (all years by default)."""

    return {
        int(year): validate_year_configuration(load_year_configuration(year))
        for year in years or available_years()
    }


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate configured payroll years and report data issues."
    )
    parser.add_argument(
        "years",
        nargs="*",
        type=int,
        help="Specific years to validate (defaults to all configured years)",
    )
    return parser


def _report(year: int) -> bool:
    """Print the validation outcome for ``year``; return ``True`` when clean."""

    try:
        config = load_year_configuration(year)
    except (FileNotFoundError, ConfigurationError) as error:
        print(f"[{year}] failed to load configuration: {error}")
        return False

    issues = validate_year_configuration(config)
    if not issues:
        print(f"[{year}] OK")
        return True

    print(f"[{year}] {len(issues)} issue(s) detected:")
    print("\n".join(f"  - {issue}" for issue in issues))
    return False


def main(argv: Sequence[str] | None = None) -> int:
    """Validate the requested years (all by default); exit status 1 on any issue."""

    args = _build_argument_parser().parse_args(argv)
    outcomes = [_report(year) for year in args.years or available_years()]
    return 0 if all(outcomes) else 1


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
