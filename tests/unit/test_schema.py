"""Ordering rules enforced on the industry sections of a year bundle."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from lohnrechner.backend.config.schema import (
    ConfigurationError,
    ConstructionConfig,
    NursingConfig,
)
from lohnrechner.backend.config.year_config import YearConfiguration


def _raised_configuration_error(excinfo: pytest.ExceptionInfo[ValidationError]) -> Exception:
    (error,) = excinfo.value.errors()
    return error["ctx"]["error"]


@pytest.fixture()
def construction_data(config_2025: YearConfiguration) -> dict[str, Any]:
    return config_2025.construction.model_dump()


@pytest.fixture()
def nursing_data(config_2025: YearConfiguration) -> dict[str, Any]:
    return config_2025.nursing.model_dump()


def test_bundled_industry_sections_are_valid(
    construction_data: dict[str, Any], nursing_data: dict[str, Any]
) -> None:
    construction = ConstructionConfig.model_validate(construction_data)
    nursing = NursingConfig.model_validate(nursing_data)

    assert construction.tariff_wages["east"]["master"] == 24
    assert nursing.care_level_rates["lead"] == 25


@pytest.mark.parametrize(
    ("region", "group", "wage"),
    [("west", "foreman", 19.5), ("west", "master", 20.0), ("east", "skilled", 15.5)],
)
def test_tariff_wages_must_rise_with_trade_group(
    construction_data: dict[str, Any], region: str, group: str, wage: float
) -> None:
    construction_data["tariff_wages"][region][group] = wage

    with pytest.raises(ValidationError, match="must increase strictly by trade group") as excinfo:
        ConstructionConfig.model_validate(construction_data)

    assert isinstance(_raised_configuration_error(excinfo), ConfigurationError)


@pytest.mark.parametrize("east_wage", [19.5, 19.75])
def test_west_tariff_must_exceed_east(construction_data: dict[str, Any], east_wage: float) -> None:
    construction_data["tariff_wages"]["east"]["skilled"] = east_wage

    with pytest.raises(ValidationError, match="West tariff for 'skilled'") as excinfo:
        ConstructionConfig.model_validate(construction_data)

    assert isinstance(_raised_configuration_error(excinfo), ConfigurationError)


def test_missing_trade_group_is_reported(construction_data: dict[str, Any]) -> None:
    del construction_data["tariff_wages"]["east"]["master"]

    with pytest.raises(ValidationError, match="lack trade group"):
        ConstructionConfig.model_validate(construction_data)


@pytest.mark.parametrize(
    ("level", "rate"), [("specialist", 19.5), ("lead", 21.0), ("nurse", 15.0)]
)
def test_care_level_rates_must_rise_by_tier(
    nursing_data: dict[str, Any], level: str, rate: float
) -> None:
    nursing_data["care_level_rates"][level] = rate

    with pytest.raises(ValidationError, match="must increase strictly by tier") as excinfo:
        NursingConfig.model_validate(nursing_data)

    assert isinstance(_raised_configuration_error(excinfo), ConfigurationError)
