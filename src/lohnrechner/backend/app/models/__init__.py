"""Typed inputs and results shared across the payroll services.

Inputs are frozen Pydantic models that normalise whatever they are given
instead of rejecting it: the calculators must never fail on numeric input, so
negative or missing amounts collapse to zero and unknown tax classes fall back
to class I. Results are frozen dataclasses holding unrounded floats; rounding
to cents happens only when a response is serialised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .api import (
    ConstructionRequest,
    GastronomyRequest,
    GrossToNetRequest,
    MaternityRequest,
    NetToGrossRequest,
    NursingRequest,
    OvertimeRequest,
    SalaryCurveRequest,
    ShortTimeWorkRequest,
    SickPayRequest,
    TaxProfileInput,
    format_validation_error,
)
from .coercion import coerce_amount
from .employee import Employee, EmploymentData, PersonalData, SalaryData
from .enums import (
    CareLevel,
    ContributionRegime,
    EmploymentType,
    HazardCategory,
    Industry,
    MaternityBenefitType,
    MealType,
    PaymentStatus,
    Region,
    ShiftType,
    TaxClass,
    TradeGroup,
)
from .industry import (
    ConstructionPayrollParams,
    ConstructionPayrollResult,
    GastronomyPayrollParams,
    GastronomyPayrollResult,
    HazardBonuses,
    MealBenefit,
    MinijobCheck,
    NursingPayrollParams,
    NursingPayrollResult,
    SfnBonuses,
    ShiftAllowances,
    ShiftEntry,
    ShiftSummary,
    SokaContributions,
    TipsTreatment,
    VacationAccount,
    WinterAllowance,
)
from .special_payments import MaternityBenefitRecord, ShortTimeWorkRecord, SickPayRecord

__all__ = [
    "CareLevel",
    "ConstructionPayrollParams",
    "ConstructionPayrollResult",
    "ConstructionRequest",
    "ContributionRegime",
    "DEFAULT_AGE",
    "Employee",
    "EmploymentData",
    "EmploymentType",
    "GastronomyPayrollParams",
    "GastronomyPayrollResult",
    "GastronomyRequest",
    "GrossToNetRequest",
    "HazardBonuses",
    "HazardCategory",
    "Industry",
    "MaternityBenefitRecord",
    "MaternityBenefitType",
    "MaternityRequest",
    "MealBenefit",
    "MealType",
    "MinijobCheck",
    "NetToGrossRequest",
    "NursingPayrollParams",
    "NursingPayrollResult",
    "NursingRequest",
    "OvertimePay",
    "OvertimeRequest",
    "PaymentStatus",
    "PersonalData",
    "Region",
    "SalaryCurveRequest",
    "SalaryData",
    "SfnBonuses",
    "ShiftAllowances",
    "ShiftEntry",
    "ShiftSummary",
    "ShiftType",
    "ShortTimeWorkRecord",
    "ShortTimeWorkRequest",
    "SickPayRecord",
    "SickPayRequest",
    "SocialContributions",
    "SokaContributions",
    "TaxCalculationParams",
    "TaxCalculationResult",
    "TaxClass",
    "TaxProfileInput",
    "TipsTreatment",
    "TradeGroup",
    "VacationAccount",
    "WinterAllowance",
    "coerce_amount",
    "format_validation_error",
]

DEFAULT_AGE = 30
DEFAULT_ADDITIONAL_HEALTH_RATE = 2.5


class TaxCalculationParams(BaseModel):
    """Everything the tax calculator needs to know about one employee."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_salary_yearly: float = 0.0
    tax_class: TaxClass = TaxClass.I
    child_allowances: float = 0.0
    church_tax: bool = False
    church_tax_rate: float = 0.0
    health_insurance_additional_rate: float = DEFAULT_ADDITIONAL_HEALTH_RATE
    is_east_germany: bool = False
    is_childless: bool | None = None
    age: int = DEFAULT_AGE

    @field_validator(
        "gross_salary_yearly",
        "child_allowances",
        "church_tax_rate",
        "health_insurance_additional_rate",
        mode="before",
    )
    @classmethod
    def _coerce_amounts(cls, value: Any) -> float:
        return coerce_amount(value)

    @field_validator("tax_class", mode="before")
    @classmethod
    def _coerce_tax_class(cls, value: Any) -> TaxClass:
        return TaxClass.parse(value)

    @field_validator("age", mode="before")
    @classmethod
    def _coerce_age(cls, value: Any) -> int:
        if value is None:
            return DEFAULT_AGE
        return int(coerce_amount(value))

    @field_validator("church_tax", "is_east_germany", mode="before")
    @classmethod
    def _coerce_flags(cls, value: Any) -> Any:
        return False if value is None else value

    @model_validator(mode="after")
    def _derive_flags(self) -> TaxCalculationParams:
        if self.is_childless is None:
            object.__setattr__(self, "is_childless", self.child_allowances == 0)
        if not self.church_tax:
            object.__setattr__(self, "church_tax_rate", 0.0)
        return self

    @property
    def gross_monthly(self) -> float:
        return self.gross_salary_yearly / 12

    @property
    def region(self) -> Region:
        return Region.EAST if self.is_east_germany else Region.WEST

    def with_gross_monthly(self, gross_monthly: float) -> TaxCalculationParams:
        """Return a copy of these parameters earning ``gross_monthly`` per month."""

        return self.model_copy(
            update={"gross_salary_yearly": coerce_amount(gross_monthly) * 12}
        )


@dataclass(frozen=True, slots=True)
class SocialContributions:
    """Monthly social-insurance contributions for one regime evaluation."""

    regime: ContributionRegime
    pension: float = 0.0
    unemployment: float = 0.0
    health: float = 0.0
    care: float = 0.0
    employer_pension: float = 0.0
    employer_unemployment: float = 0.0
    employer_health: float = 0.0
    employer_care: float = 0.0
    employer_flat_tax: float = 0.0

    @property
    def employee_total(self) -> float:
        return self.pension + self.unemployment + self.health + self.care

    @property
    def employer_total(self) -> float:
        return (
            self.employer_pension
            + self.employer_unemployment
            + self.employer_health
            + self.employer_care
            + self.employer_flat_tax
        )


@dataclass(frozen=True, slots=True)
class TaxCalculationResult:
    """Yearly tax and contribution breakdown with monthly convenience values."""

    gross_yearly: float
    gross_monthly: float
    taxable_income: float
    income_tax: float
    solidarity_tax: float
    church_tax: float
    pension_insurance: float
    unemployment_insurance: float
    health_insurance: float
    care_insurance: float
    total_taxes: float
    total_social_contributions: float
    total_deductions: float
    net_yearly: float
    net_monthly: float
    employer_contributions: float
    employer_costs: float
    regime: ContributionRegime


@dataclass(frozen=True, slots=True)
class OvertimePay:
    """Monthly pay for contracted hours plus overtime and unsocial-hours premiums.

    ``overtime_pay`` includes the base wage for the extra hours;
    ``total_bonuses`` counts only the premium share of it.
    """

    hourly_rate: float
    regular_pay: float
    overtime_pay: float
    night_bonus: float
    sunday_bonus: float
    holiday_bonus: float
    total_bonuses: float
    total_gross: float
