"""Closed sets of variants used throughout the payroll engine."""

from __future__ import annotations

from enum import Enum
from typing import Any

__all__ = [
    "CareLevel",
    "ContributionRegime",
    "EmploymentType",
    "HazardCategory",
    "Industry",
    "MaternityBenefitType",
    "MealType",
    "PaymentStatus",
    "Region",
    "ShiftType",
    "TaxClass",
    "TradeGroup",
]

_ROMAN_BY_NUMBER = {1: "I", 2: "II", 3: "III", 4: "IV", 5: "V", 6: "VI"}


class TaxClass(str, Enum):
    """German wage-tax class (Steuerklasse)."""

    I = "I"
    II = "II"
    III = "III"
    IV = "IV"
    V = "V"
    VI = "VI"

    @classmethod
    def parse(cls, value: Any) -> TaxClass:
        """Interpret ``value`` leniently; anything unrecognised maps to class I."""

        if isinstance(value, cls):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            number = int(value)
            if number == value and number in _ROMAN_BY_NUMBER:
                return cls(_ROMAN_BY_NUMBER[number])
            return cls.I
        if isinstance(value, str):
            text = value.strip().upper()
            if text.startswith("STKL") or text.startswith("KLASSE"):
                text = text.removeprefix("STKL").removeprefix("KLASSE").strip(" .")
            if text.isdigit() and int(text) in _ROMAN_BY_NUMBER:
                return cls(_ROMAN_BY_NUMBER[int(text)])
            try:
                return cls(text)
            except ValueError:
                return cls.I
        return cls.I


class Region(str, Enum):
    WEST = "west"
    EAST = "east"


class EmploymentType(str, Enum):
    MINIJOB = "minijob"
    MIDIJOB = "midijob"
    FULLTIME = "fulltime"
    PARTTIME = "parttime"


class ContributionRegime(str, Enum):
    """Social-insurance regime selected from the monthly gross."""

    MINIJOB = "minijob"
    MIDIJOB = "midijob"
    REGULAR = "regular"


class Industry(str, Enum):
    CONSTRUCTION = "construction"
    GASTRONOMY = "gastronomy"
    NURSING = "nursing"


class TradeGroup(str, Enum):
    WORKER = "worker"
    SKILLED = "skilled"
    FOREMAN = "foreman"
    MASTER = "master"


class HazardCategory(str, Enum):
    DIRT = "dirt"
    HEIGHT = "height"
    DANGER = "danger"


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class CareLevel(str, Enum):
    """Qualification tier in nursing, ordered from lowest to highest pay."""

    ASSISTANT = "assistant"
    NURSE = "nurse"
    SPECIALIST = "specialist"
    LEAD = "lead"


class ShiftType(str, Enum):
    EARLY = "early"
    LATE = "late"
    NIGHT = "night"
    SPLIT = "split"


class MaternityBenefitType(str, Enum):
    PROTECTION_PERIOD = "protection_period"
    PARENTAL_LEAVE = "parental_leave"


class PaymentStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
