"""Records produced by the special payment calculators."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID, uuid4

from .enums import MaternityBenefitType, PaymentStatus

__all__ = ["MaternityBenefitRecord", "ShortTimeWorkRecord", "SickPayRecord"]


@dataclass(frozen=True, slots=True)
class SickPayRecord:
    start_date: date
    end_date: date
    days: int
    daily_gross: float
    daily_net: float
    pay_per_day: float
    total_amount: float
    max_end_date: date
    status: PaymentStatus = PaymentStatus.ACTIVE
    record_id: UUID = field(default_factory=uuid4)


@dataclass(frozen=True, slots=True)
class MaternityBenefitRecord:
    benefit_type: MaternityBenefitType
    start_date: date
    end_date: date
    days: int
    daily_benefit: float
    insurance_daily: float
    employer_daily: float
    total_amount: float
    insurance_total: float
    employer_total: float
    status: PaymentStatus = PaymentStatus.ACTIVE
    record_id: UUID = field(default_factory=uuid4)


@dataclass(frozen=True, slots=True)
class ShortTimeWorkRecord:
    start_date: date
    end_date: date
    original_hours: float
    reduced_hours: float
    reduction_percent: float
    gross_loss: float
    net_loss: float
    benefit_rate: float
    benefit_amount: float
    latest_end_date: date
    qualifies: bool = True
    status: PaymentStatus = PaymentStatus.ACTIVE
    record_id: UUID = field(default_factory=uuid4)
