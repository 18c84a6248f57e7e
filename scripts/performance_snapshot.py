#!/usr/bin/env python3
"""Collect baseline timings for the payroll calculations."""

from __future__ import annotations

import json
import os
import sys
from collections.abc import Callable, Mapping
from pathlib import Path
from time import perf_counter
from typing import Any

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from lohnrechner.backend.app.services.calculation_service import (  # noqa: E402
    calculate_gross_to_net,
    calculate_industry_payroll,
    calculate_net_to_gross,
    calculate_salary_curve,
)

PROFILE = {"year": 2025, "tax_class": "I", "church_tax": True, "state": "nordrhein-westfalen"}

SCENARIOS: Mapping[str, tuple[Callable[[Mapping[str, Any]], Any], dict[str, Any]]] = {
    "gross_to_net": (calculate_gross_to_net, {**PROFILE, "gross_monthly": 4000}),
    "net_to_gross": (calculate_net_to_gross, {**PROFILE, "target_net_monthly": 2500}),
    "salary_curve": (
        calculate_salary_curve,
        {**PROFILE, "from_gross": 1000, "to_gross": 8000, "steps": 50},
    ),
    "construction": (
        lambda payload: calculate_industry_payroll("construction", payload),
        {**PROFILE, "payroll": {"trade_group": "skilled", "hours_worked": 170}},
    ),
}


def measure(
    func: Callable[[Mapping[str, Any]], Any], payload: Mapping[str, Any], iterations: int
) -> dict[str, float]:
    """Return timing statistics for repeated calls of ``func``."""

    func(payload)  # Warm cache
    start = perf_counter()
    for _ in range(iterations):
        func(payload)
    elapsed = perf_counter() - start
    return {
        "iterations": iterations,
        "total_ms": elapsed * 1000,
        "average_ms": (elapsed / iterations) * 1000,
    }


def main() -> None:
    iterations = int(os.getenv("LOHNRECHNER_PROFILE_ITERATIONS", "50"))
    report = {name: measure(func, payload, iterations) for name, (func, payload) in SCENARIOS.items()}
    print(json.dumps(report, indent=2, sort_keys=True))


if __name__ == "__main__":
    main()
