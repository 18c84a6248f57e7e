"""Orchestrate request validation, year configuration and payroll calculations.

Each public function accepts a raw JSON mapping (or an already validated
request model), resolves the configuration bundle for the requested year, runs
the calculators and returns a JSON-ready dictionary. Profiling hooks live here
so that the calculators stay free of timing concerns; set
``LOHNRECHNER_PROFILE_CALCULATIONS`` to log per-section durations.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from contextlib import contextmanager
from time import perf_counter
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from typing_extensions import assert_never

from lohnrechner.backend.app.models import (
    ConstructionRequest,
    GastronomyRequest,
    GrossToNetRequest,
    Industry,
    MaternityRequest,
    NetToGrossRequest,
    NursingRequest,
    OvertimeRequest,
    SalaryCurveRequest,
    ShortTimeWorkRequest,
    SickPayRequest,
    TaxCalculationResult,
    TaxProfileInput,
    format_validation_error,
)
from lohnrechner.backend.config.year_config import (
    YearConfiguration,
    default_year,
    load_year_configuration,
)

from .calculators import (
    calculate_construction_payroll,
    calculate_gastronomy_payroll,
    calculate_nursing_payroll,
    overtime_and_bonuses,
    round_currency,
    round_rate,
)
from .calculators.gastronomy import minijob_check
from .calculators.utils import safe_divide
from .net_to_gross import gross_from_net
from .params_factory import build_params_from_profile
from .salary_curve import salary_curve
from .serialization import to_payload
from .special_payments import (
    calculate_maternity_benefit,
    calculate_short_time_work,
    calculate_sick_pay,
)
from .tax_service import complete_tax, industry_net

_LOGGER = logging.getLogger(__name__)

_RequestT = TypeVar("_RequestT", bound=BaseModel)


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv("LOHNRECHNER_PROFILE_CALCULATIONS", "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def _log_timings(operation: str, timings: dict[str, float] | None) -> None:
    if timings is None:
        return
    _LOGGER.debug(
        "%s timings (ms): %s",
        operation,
        {name: round(duration * 1000, 3) for name, duration in timings.items()},
    )


def _validate(model: type[_RequestT], payload: Mapping[str, Any] | BaseModel) -> _RequestT:
    if isinstance(payload, BaseModel):
        payload = payload.model_dump(mode="python")
    if not isinstance(payload, Mapping):
        raise ValueError("Payload must be a mapping")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(format_validation_error(exc)) from exc


def _configuration(request: TaxProfileInput) -> YearConfiguration:
    year = request.year if request.year is not None else default_year()
    return load_year_configuration(year)


def _calculation_payload(result: TaxCalculationResult) -> dict[str, Any]:
    payload: dict[str, Any] = to_payload(result)
    payload["employee_contributions_monthly"] = round_currency(
        result.total_social_contributions / 12
    )
    payload["taxes_monthly"] = round_currency(result.total_taxes / 12)
    payload["employer_costs_monthly"] = round_currency(result.employer_costs / 12)
    payload["deduction_rate"] = round_rate(
        safe_divide(result.total_deductions, result.gross_yearly)
    )
    return payload


def calculate_gross_to_net(payload: Mapping[str, Any] | GrossToNetRequest) -> dict[str, Any]:
    """Return taxes, contributions and net pay for a monthly or yearly gross."""

    request = _validate(GrossToNetRequest, payload)
    timings: dict[str, float] | None = {} if _profiling_enabled() else None

    with _profile_section("configuration", timings):
        config = _configuration(request)
    params = build_params_from_profile(request, request.resolved_gross_monthly, config)

    with _profile_section("complete_tax", timings):
        result = complete_tax(params, config)
    _log_timings("calculate_gross_to_net", timings)

    return {
        "year": config.year,
        "tax_class": params.tax_class.value,
        "region": params.region.value,
        "result": _calculation_payload(result),
    }


def calculate_net_to_gross(payload: Mapping[str, Any] | NetToGrossRequest) -> dict[str, Any]:
    """Return the monthly gross needed for a target monthly net."""

    request = _validate(NetToGrossRequest, payload)
    timings: dict[str, float] | None = {} if _profiling_enabled() else None

    with _profile_section("configuration", timings):
        config = _configuration(request)
    params = build_params_from_profile(request, request.target_net_monthly, config)

    with _profile_section("solver", timings):
        outcome = gross_from_net(request.target_net_monthly, params, config)
    _log_timings("calculate_net_to_gross", timings)

    return {
        "year": config.year,
        "target_net": round_currency(outcome.target_net),
        "required_gross": round_currency(outcome.required_gross),
        "actual_net": round_currency(outcome.actual_net),
        "difference": round_currency(outcome.difference),
        "iterations": outcome.iterations,
        "tolerance": outcome.tolerance,
        "result": _calculation_payload(outcome.calculation),
    }


def calculate_salary_curve(
    payload: Mapping[str, Any] | SalaryCurveRequest,
) -> dict[str, Any]:
    """Return evenly spaced gross/net points between two monthly salaries."""

    request = _validate(SalaryCurveRequest, payload)
    timings: dict[str, float] | None = {} if _profiling_enabled() else None

    config = _configuration(request)
    params = build_params_from_profile(request, request.from_gross, config)

    with _profile_section("curve", timings):
        points = salary_curve(params, request.from_gross, request.to_gross, request.steps, config)
    _log_timings("calculate_salary_curve", timings)

    return {
        "year": config.year,
        "from_gross": round_currency(request.from_gross),
        "to_gross": round_currency(request.to_gross),
        "steps": request.steps,
        "points": to_payload(points),
    }


def _industry_net_payload(
    request: TaxProfileInput,
    taxable_amount: float,
    tax_free_amount: float,
    config: YearConfiguration,
) -> dict[str, Any]:
    params = build_params_from_profile(request, taxable_amount, config)
    net = industry_net(taxable_amount, tax_free_amount, params, config)
    return {
        "taxable_amount": round_currency(taxable_amount),
        "tax_free_amount": round_currency(net.tax_free_amount),
        "net_monthly": round_currency(net.net_monthly),
        "result": _calculation_payload(net.calculation),
    }


def calculate_industry_payroll(
    industry: Industry | str, payload: Mapping[str, Any] | BaseModel
) -> dict[str, Any]:
    """Run the industry payroll rules and the tax calculator on their taxable part."""

    industry = Industry(industry)
    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    response: dict[str, Any] = {"industry": industry.value}

    match industry:
        case Industry.CONSTRUCTION:
            construction = _validate(ConstructionRequest, payload)
            config = _configuration(construction)
            with _profile_section("payroll", timings):
                result = calculate_construction_payroll(
                    construction.payroll, config.construction
                )
            request: TaxProfileInput = construction
            tax_free = result.tax_free_amount
        case Industry.GASTRONOMY:
            gastronomy = _validate(GastronomyRequest, payload)
            config = _configuration(gastronomy)
            with _profile_section("payroll", timings):
                result = calculate_gastronomy_payroll(gastronomy.payroll, config.gastronomy)
            request = gastronomy
            tax_free = result.tax_free_income
            meals = (
                gastronomy.payroll.breakfasts
                + gastronomy.payroll.lunches
                + gastronomy.payroll.dinners
            )
            response["minijob_check"] = to_payload(
                minijob_check(
                    gastronomy.payroll.hours_worked,
                    result.hourly_rate,
                    meals,
                    config.gastronomy,
                    config.social_insurance.minijob.monthly_ceiling,
                )
            )
        case Industry.NURSING:
            nursing = _validate(NursingRequest, payload)
            config = _configuration(nursing)
            with _profile_section("payroll", timings):
                result = calculate_nursing_payroll(nursing.payroll, config.nursing)
            request = nursing
            tax_free = result.tax_free_amount
        case _:
            assert_never(industry)

    with _profile_section("net", timings):
        response["net"] = _industry_net_payload(request, result.taxable_amount, tax_free, config)
    _log_timings(f"calculate_industry_payroll[{industry.value}]", timings)

    response["year"] = config.year
    response["payroll"] = to_payload(result)
    return response


def calculate_overtime_pay(payload: Mapping[str, Any] | OvertimeRequest) -> dict[str, Any]:
    """Return overtime and premium pay for a month with the net pay on the total."""

    request = _validate(OvertimeRequest, payload)
    config = _configuration(request)
    pay = overtime_and_bonuses(
        request.hourly_rate,
        request.regular_hours,
        config.overtime,
        overtime_hours=request.overtime_hours,
        night_hours=request.night_hours,
        sunday_hours=request.sunday_hours,
        holiday_hours=request.holiday_hours,
    )
    params = build_params_from_profile(request, pay.total_gross, config)

    return {
        "year": config.year,
        "overtime": to_payload(pay),
        "result": _calculation_payload(complete_tax(params, config)),
    }


def calculate_sick_pay_payment(payload: Mapping[str, Any] | SickPayRequest) -> dict[str, Any]:
    request = _validate(SickPayRequest, payload)
    config = _configuration(request)
    params = build_params_from_profile(request, request.gross_monthly, config)
    record = calculate_sick_pay(
        params, request.start_date, request.end_date, config, as_of=request.as_of
    )
    return {"year": config.year, "sick_pay": to_payload(record)}


def calculate_maternity_payment(payload: Mapping[str, Any] | MaternityRequest) -> dict[str, Any]:
    request = _validate(MaternityRequest, payload)
    config = _configuration(request)
    params = build_params_from_profile(request, request.gross_monthly, config)
    record = calculate_maternity_benefit(
        params,
        request.start_date,
        request.end_date,
        request.benefit_type,
        config,
        as_of=request.as_of,
    )
    return {"year": config.year, "maternity": to_payload(record)}


def calculate_short_time_work_payment(
    payload: Mapping[str, Any] | ShortTimeWorkRequest,
) -> dict[str, Any]:
    request = _validate(ShortTimeWorkRequest, payload)
    config = _configuration(request)
    params = build_params_from_profile(request, request.gross_monthly, config)
    record = calculate_short_time_work(
        params,
        request.start_date,
        request.end_date,
        request.original_hours,
        request.reduced_hours,
        request.has_children,
        config,
        as_of=request.as_of,
    )
    return {"year": config.year, "short_time_work": to_payload(record)}


SPECIAL_PAYMENT_HANDLERS: Mapping[str, Callable[[Mapping[str, Any]], dict[str, Any]]] = {
    "sick-pay": calculate_sick_pay_payment,
    "maternity": calculate_maternity_payment,
    "short-time-work": calculate_short_time_work_payment,
}


__all__ = [
    "SPECIAL_PAYMENT_HANDLERS",
    "calculate_gross_to_net",
    "calculate_industry_payroll",
    "calculate_maternity_payment",
    "calculate_net_to_gross",
    "calculate_overtime_pay",
    "calculate_salary_curve",
    "calculate_short_time_work_payment",
    "calculate_sick_pay_payment",
]
