"""Inputs and results for the industry-specific payroll modules."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from .coercion import coerce_amount
from .enums import CareLevel, Region, ShiftType, TradeGroup

__all__ = [
    "ConstructionPayrollParams",
    "ConstructionPayrollResult",
    "GastronomyPayrollParams",
    "GastronomyPayrollResult",
    "HazardBonuses",
    "MealBenefit",
    "MinijobCheck",
    "NursingPayrollParams",
    "NursingPayrollResult",
    "SfnBonuses",
    "ShiftAllowances",
    "ShiftEntry",
    "ShiftSummary",
    "SokaContributions",
    "TipsTreatment",
    "VacationAccount",
    "WinterAllowance",
]


class _PayrollParams(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class ConstructionPayrollParams(_PayrollParams):
    """Monthly inputs for a construction worker."""

    gross_salary: float = 0.0
    region: Region = Region.WEST
    trade_group: TradeGroup | None = None
    hours_worked: float = 0.0
    dirt_hours: float = 0.0
    height_hours: float = 0.0
    danger_hours: float = 0.0
    is_winter_period: bool = False
    vacation_days_taken: float = 0.0
    vacation_days_carried: float = 0.0

    @field_validator(
        "gross_salary",
        "hours_worked",
        "dirt_hours",
        "height_hours",
        "danger_hours",
        "vacation_days_taken",
        "vacation_days_carried",
        mode="before",
    )
    @classmethod
    def _coerce_amounts(cls, value: Any) -> float:
        return coerce_amount(value)


class GastronomyPayrollParams(_PayrollParams):
    """Monthly inputs for hospitality staff."""

    gross_salary: float = 0.0
    hours_worked: float = 0.0
    breakfasts: int = 0
    lunches: int = 0
    dinners: int = 0
    tips_from_employer: float = 0.0
    tips_from_guests: float = 0.0
    night_hours: float = 0.0
    deep_night_hours: float = 0.0
    sunday_hours: float = 0.0
    holiday_hours: float = 0.0
    special_holiday_hours: float = 0.0

    @field_validator(
        "gross_salary",
        "hours_worked",
        "tips_from_employer",
        "tips_from_guests",
        "night_hours",
        "deep_night_hours",
        "sunday_hours",
        "holiday_hours",
        "special_holiday_hours",
        mode="before",
    )
    @classmethod
    def _coerce_amounts(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("breakfasts", "lunches", "dinners", mode="before")
    @classmethod
    def _coerce_counts(cls, value: Any) -> int:
        return int(coerce_amount(value))


class ShiftEntry(_PayrollParams):
    """One worked shift with its hour split."""

    shift_date: date
    shift_type: ShiftType
    hours: float = 8.0
    night_hours: float = 0.0
    sunday_hours: float = 0.0
    holiday_hours: float = 0.0
    is_holiday: bool = False

    @field_validator("hours", "night_hours", "sunday_hours", "holiday_hours", mode="before")
    @classmethod
    def _coerce_hours(cls, value: Any) -> float:
        return coerce_amount(value)


class NursingPayrollParams(_PayrollParams):
    """Monthly inputs for care and nursing staff."""

    gross_salary: float = 0.0
    care_level: CareLevel | None = None
    hours_worked: float = 0.0
    shifts: tuple[ShiftEntry, ...] = ()
    christmas_hours: float = 0.0
    on_call_hours: float = 0.0
    on_call_percent: float | None = None

    @field_validator(
        "gross_salary", "hours_worked", "christmas_hours", "on_call_hours", mode="before"
    )
    @classmethod
    def _coerce_amounts(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("on_call_percent", mode="before")
    @classmethod
    def _coerce_percent(cls, value: Any) -> float | None:
        if value is None:
            return None
        return coerce_amount(value)


@dataclass(frozen=True, slots=True)
class SokaContributions:
    gross: float
    region: Region
    rate: float
    employer: float
    employee: float = 0.0


@dataclass(frozen=True, slots=True)
class VacationAccount:
    """Construction vacation entitlement and its monetary value."""

    entitlement_days: float
    carried_days: float
    taken_days: float
    remaining_days: float
    daily_rate: float
    vacation_pay: float
    vacation_bonus: float
    monetary_value: float
    expiry_date: date


@dataclass(frozen=True, slots=True)
class WinterAllowance:
    hours: float
    rate: float
    amount: float
    applies: bool


@dataclass(frozen=True, slots=True)
class HazardBonuses:
    dirt: float
    height: float
    danger: float

    @property
    def total(self) -> float:
        return self.dirt + self.height + self.danger


@dataclass(frozen=True, slots=True)
class ConstructionPayrollResult:
    base_gross: float
    tariff_hourly_rate: float | None
    tariff_wage: float | None
    dirt_bonus: float
    height_bonus: float
    danger_bonus: float
    winter_allowance: float
    total_gross: float
    tax_free_amount: float
    taxable_amount: float
    soka: SokaContributions
    vacation: VacationAccount


@dataclass(frozen=True, slots=True)
class MealBenefit:
    breakfasts: int
    lunches: int
    dinners: int
    breakfast_value: float
    lunch_value: float
    dinner_value: float

    @property
    def total(self) -> float:
        return (
            self.breakfasts * self.breakfast_value
            + self.lunches * self.lunch_value
            + self.dinners * self.dinner_value
        )


@dataclass(frozen=True, slots=True)
class TipsTreatment:
    amount: float
    from_employer: bool
    tax_free: float
    taxable: float


@dataclass(frozen=True, slots=True)
class SfnBonuses:
    """Sunday, holiday and night premiums computed on a capped base rate."""

    hourly_rate: float
    base_rate: float
    night: float = 0.0
    deep_night: float = 0.0
    sunday: float = 0.0
    holiday: float = 0.0
    special_holiday: float = 0.0
    partially_taxable: bool = False

    @property
    def total(self) -> float:
        return self.night + self.deep_night + self.sunday + self.holiday + self.special_holiday

    @property
    def tax_free(self) -> float:
        return 0.0 if self.partially_taxable else self.total


@dataclass(frozen=True, slots=True)
class MinijobCheck:
    wage: float
    meal_value: float
    total: float
    limit: float
    within_limit: bool
    remaining: float


@dataclass(frozen=True, slots=True)
class GastronomyPayrollResult:
    base_gross: float
    hourly_rate: float
    meal_benefit: float
    tips_taxable: float
    tips_tax_free: float
    night_bonus: float
    deep_night_bonus: float
    sunday_bonus: float
    holiday_bonus: float
    special_holiday_bonus: float
    total_gross: float
    tax_free_amount: float
    taxable_amount: float
    sfn_partially_taxable: bool

    @property
    def tax_free_income(self) -> float:
        """Tax-free bonuses plus guest tips, which are paid outside gross."""

        return self.tax_free_amount + self.tips_tax_free


@dataclass(frozen=True, slots=True)
class ShiftSummary:
    total_shifts: int
    shift_counts: Mapping[ShiftType, int]
    total_hours: float
    night_hours: float
    sunday_hours: float
    holiday_hours: float


@dataclass(frozen=True, slots=True)
class ShiftAllowances:
    by_type: Mapping[ShiftType, float] = field(default_factory=dict)

    @property
    def total(self) -> float:
        return sum(self.by_type.values())


@dataclass(frozen=True, slots=True)
class NursingPayrollResult:
    base_gross: float
    hourly_rate: float
    night_bonus: float
    sunday_bonus: float
    holiday_bonus: float
    christmas_bonus: float
    shift_allowance: float
    on_call_pay: float
    total_gross: float
    tax_free_amount: float
    taxable_amount: float
    sfn_partially_taxable: bool
    shift_summary: ShiftSummary
