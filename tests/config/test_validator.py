from lohnrechner.backend.config.schema import WageTaxRow
from lohnrechner.backend.config.validator import (
    main,
    validate_all_years,
    validate_year_configuration,
)
from lohnrechner.backend.config.year_config import load_year_configuration


def test_current_configurations_are_valid() -> None:
    results = validate_all_years()
    assert set(results) == {2024, 2025}
    assert all(not issues for issues in results.values()), results


def test_validator_flags_invalid_contribution_rate() -> None:
    config = load_year_configuration(2025)
    social = config.social_insurance.model_copy(
        update={
            "pension": config.social_insurance.pension.model_copy(
                update={"employee_rate": 150}
            )
        }
    )
    broken = config.model_copy(update={"social_insurance": social})

    errors = validate_year_configuration(broken)

    assert any(
        "social_insurance.pension" in error and "between 0 and 100" in error for error in errors
    )


def test_validator_flags_class_five_below_class_one() -> None:
    config = load_year_configuration(2025)
    table = config.income_tax
    rows = [
        WageTaxRow(bound=row.bound, amounts={**row.amounts, "V": 0.0})
        if row.bound == 3000
        else row
        for row in table.rows
    ]
    broken = config.model_copy(update={"income_tax": table.model_copy(update={"rows": rows})})

    errors = validate_year_configuration(broken)

    assert any("class V must not be taxed below class I" in error for error in errors)


def test_validator_flags_east_ceiling_above_west() -> None:
    config = load_year_configuration(2024)
    ceilings = config.social_insurance.ceilings
    pension = ceilings.pension_unemployment.model_copy(update={"east": 9000})
    social = config.social_insurance.model_copy(
        update={"ceilings": ceilings.model_copy(update={"pension_unemployment": pension})}
    )
    broken = config.model_copy(update={"social_insurance": social})

    errors = validate_year_configuration(broken)

    assert any("pension_unemployment east ceiling exceeds west" in error for error in errors)


def test_validator_flags_premium_ordering() -> None:
    config = load_year_configuration(2025)
    gastronomy = config.gastronomy.model_copy(update={"deep_night_rate": 10})
    nursing = config.nursing.model_copy(update={"christmas_rate": 100})
    broken = config.model_copy(update={"gastronomy": gastronomy, "nursing": nursing})

    errors = validate_year_configuration(broken)

    assert any(error.startswith("gastronomy: deep-night rate") for error in errors)
    assert any(error.startswith("nursing: christmas rate") for error in errors)


def test_validator_flags_holiday_premium_below_sunday() -> None:
    config = load_year_configuration(2025)
    overtime = config.overtime.model_copy(update={"holiday_rate": 40})

    errors = validate_year_configuration(config.model_copy(update={"overtime": overtime}))

    assert errors == ["overtime: holiday premium must not be lower than the Sunday premium"]


def test_validator_flags_short_time_work_rates() -> None:
    config = load_year_configuration(2025)
    special = config.special_payments
    short_time = special.short_time_work.model_copy(update={"benefit_rate_with_children": 50})
    broken = config.model_copy(
        update={
            "special_payments": special.model_copy(update={"short_time_work": short_time})
        }
    )

    errors = validate_year_configuration(broken)

    assert any("rate with children" in error for error in errors)


def test_main_reports_success(capsys) -> None:
    exit_code = main(["2025"])

    assert exit_code == 0
    assert "[2025] OK" in capsys.readouterr().out


def test_main_reports_unknown_year(capsys) -> None:
    exit_code = main(["2031"])

    assert exit_code == 1
    assert "[2031] failed to load configuration" in capsys.readouterr().out
