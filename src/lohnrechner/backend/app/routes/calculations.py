"""REST endpoints for payroll calculations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from lohnrechner.backend.app.http import not_found
from lohnrechner.backend.app.models import Industry
from lohnrechner.backend.app.services.calculation_service import (
    SPECIAL_PAYMENT_HANDLERS,
    calculate_gross_to_net,
    calculate_industry_payroll,
    calculate_net_to_gross,
    calculate_overtime_pay,
    calculate_salary_curve,
)
from lohnrechner.backend.services import (
    build_calculation_response,
    parse_calculation_payload,
)

blueprint = Blueprint("calculations", __name__, url_prefix="/api/v1/calculations")

_INDUSTRIES = {industry.value for industry in Industry}


@blueprint.post("/gross-to-net")
def gross_to_net() -> tuple[Any, int]:
    """Calculate taxes, contributions and net pay for a gross salary."""

    payload = parse_calculation_payload(request)
    return build_calculation_response(calculate_gross_to_net(payload))


@blueprint.post("/net-to-gross")
def net_to_gross() -> tuple[Any, int]:
    """Find the gross salary that produces the requested net salary."""

    payload = parse_calculation_payload(request)
    return build_calculation_response(calculate_net_to_gross(payload))


@blueprint.post("/salary-curve")
def salary_curve() -> tuple[Any, int]:
    payload = parse_calculation_payload(request)
    return build_calculation_response(calculate_salary_curve(payload))


@blueprint.post("/overtime")
def overtime() -> tuple[Any, int]:
    payload = parse_calculation_payload(request)
    return build_calculation_response(calculate_overtime_pay(payload))


@blueprint.post("/industry/<industry>")
def industry_payroll(industry: str) -> tuple[Any, int]:
    """Apply construction, gastronomy or nursing payroll rules."""

    if industry not in _INDUSTRIES:
        return not_found(
            f"Unknown industry '{industry}'", supported=sorted(_INDUSTRIES)
        )
    payload = parse_calculation_payload(request)
    return build_calculation_response(calculate_industry_payroll(industry, payload))


@blueprint.post("/special-payments/<kind>")
def special_payment(kind: str) -> tuple[Any, int]:
    """Calculate sick pay, maternity benefits or short-time work allowance."""

    handler = SPECIAL_PAYMENT_HANDLERS.get(kind)
    if handler is None:
        return not_found(
            f"Unknown special payment '{kind}'",
            supported=sorted(SPECIAL_PAYMENT_HANDLERS),
        )
    payload = parse_calculation_payload(request)
    return build_calculation_response(handler(payload))
