"""Employee master data consumed by the parameter factory."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import EmploymentType, TaxClass

__all__ = ["EmploymentData", "Employee", "PersonalData", "SalaryData"]


class PersonalData(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    first_name: str = ""
    last_name: str = ""
    date_of_birth: date | None = None
    state: str | None = Field(default=None, description="Federal state (name or code)")
    tax_class: TaxClass = TaxClass.I
    church_tax: bool = False
    health_insurance_additional_rate: float | None = Field(default=None, ge=0)
    child_allowances: float = Field(default=0.0, ge=0)

    @field_validator("tax_class", mode="before")
    @classmethod
    def _coerce_tax_class(cls, value: Any) -> TaxClass:
        return TaxClass.parse(value)


class EmploymentData(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    employment_type: EmploymentType = EmploymentType.FULLTIME
    weekly_hours: float = Field(default=40.0, ge=0)
    start_date: date | None = None


class SalaryData(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_salary: float = Field(default=0.0, ge=0, description="Monthly gross salary")
    hourly_wage: float | None = Field(default=None, ge=0)


class Employee(BaseModel):
    """Aggregate of personal, employment and salary data for one employee."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    personal: PersonalData = Field(default_factory=PersonalData)
    employment: EmploymentData = Field(default_factory=EmploymentData)
    salary: SalaryData = Field(default_factory=SalaryData)

    @property
    def full_name(self) -> str:
        return f"{self.personal.first_name} {self.personal.last_name}".strip()
