"""Pydantic models describing the public API surface."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .enums import MaternityBenefitType, TaxClass
from .industry import (
    ConstructionPayrollParams,
    GastronomyPayrollParams,
    NursingPayrollParams,
)

__all__ = [
    "ConstructionRequest",
    "GastronomyRequest",
    "GrossToNetRequest",
    "MaternityRequest",
    "NetToGrossRequest",
    "NursingRequest",
    "OvertimeRequest",
    "SalaryCurveRequest",
    "ShortTimeWorkRequest",
    "SickPayRequest",
    "TaxProfileInput",
    "format_validation_error",
]


class TaxProfileInput(BaseModel):
    """Tax-relevant employee attributes shared by every calculation request."""

    model_config = ConfigDict(extra="forbid")

    year: int | None = Field(default=None, ge=2000, le=2100)
    tax_class: TaxClass = TaxClass.I
    child_allowances: float = Field(default=0.0, ge=0, le=20)
    church_tax: bool = False
    church_tax_rate: float | None = Field(default=None, ge=0, le=100)
    state: str | None = None
    health_insurance_additional_rate: float | None = Field(default=None, ge=0, le=10)
    east_germany: bool | None = None
    childless: bool | None = None
    age: int | None = Field(default=None, ge=0, le=130)

    @field_validator("tax_class", mode="before")
    @classmethod
    def _coerce_tax_class(cls, value: Any) -> TaxClass:
        return TaxClass.parse(value)


class GrossToNetRequest(TaxProfileInput):
    gross_monthly: float | None = Field(default=None, ge=0)
    gross_yearly: float | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _require_single_gross(self) -> "GrossToNetRequest":
        if self.gross_monthly is None and self.gross_yearly is None:
            raise ValueError("Provide either gross_monthly or gross_yearly")
        if self.gross_monthly is not None and self.gross_yearly is not None:
            raise ValueError("gross_monthly and gross_yearly are mutually exclusive")
        return self

    @property
    def resolved_gross_monthly(self) -> float:
        if self.gross_monthly is not None:
            return self.gross_monthly
        return (self.gross_yearly or 0.0) / 12


class NetToGrossRequest(TaxProfileInput):
    target_net_monthly: float = Field(..., ge=0)


class SalaryCurveRequest(TaxProfileInput):
    from_gross: float = Field(..., ge=0)
    to_gross: float = Field(..., ge=0)
    steps: int = Field(default=20, ge=1, le=500)

    @model_validator(mode="after")
    def _validate_range(self) -> "SalaryCurveRequest":
        if self.to_gross < self.from_gross:
            raise ValueError("to_gross must not be lower than from_gross")
        return self


class ConstructionRequest(TaxProfileInput):
    payroll: ConstructionPayrollParams = Field(default_factory=ConstructionPayrollParams)


class GastronomyRequest(TaxProfileInput):
    payroll: GastronomyPayrollParams = Field(default_factory=GastronomyPayrollParams)


class NursingRequest(TaxProfileInput):
    payroll: NursingPayrollParams = Field(default_factory=NursingPayrollParams)


class OvertimeRequest(TaxProfileInput):
    hourly_rate: float = Field(..., ge=0)
    regular_hours: float = Field(..., ge=0)
    overtime_hours: float = Field(default=0.0, ge=0)
    night_hours: float = Field(default=0.0, ge=0)
    sunday_hours: float = Field(default=0.0, ge=0)
    holiday_hours: float = Field(default=0.0, ge=0)


class _PeriodRequest(TaxProfileInput):
    gross_monthly: float = Field(..., ge=0)
    start_date: date
    end_date: date
    as_of: date | None = None

    @model_validator(mode="after")
    def _validate_period(self) -> "_PeriodRequest":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class SickPayRequest(_PeriodRequest):
    pass


class MaternityRequest(_PeriodRequest):
    benefit_type: MaternityBenefitType = MaternityBenefitType.PROTECTION_PERIOD


class ShortTimeWorkRequest(_PeriodRequest):
    original_hours: float = Field(..., ge=0)
    reduced_hours: float = Field(..., ge=0)
    has_children: bool = False


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if "greater than or equal to 0" in message.lower():
            message = "value cannot be negative"
        if message.startswith("Value error, "):
            message = message.removeprefix("Value error, ")
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid calculation payload: {details}"
