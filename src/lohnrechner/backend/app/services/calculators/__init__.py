"""Calculator helpers for the payroll engine."""

from .construction import calculate_construction_payroll
from .gastronomy import calculate_gastronomy_payroll
from .nursing import calculate_nursing_payroll
from .overtime import overtime_and_bonuses
from .social_insurance import calculate_contributions, determine_regime
from .solver import BisectionOutcome, bisect_increasing
from .tax import church_tax, income_tax, solidarity_tax, taxable_income
from .utils import round_currency, round_rate

__all__ = [
    "BisectionOutcome",
    "bisect_increasing",
    "calculate_construction_payroll",
    "calculate_contributions",
    "calculate_gastronomy_payroll",
    "calculate_nursing_payroll",
    "church_tax",
    "determine_regime",
    "income_tax",
    "overtime_and_bonuses",
    "round_currency",
    "round_rate",
    "solidarity_tax",
    "taxable_income",
]
