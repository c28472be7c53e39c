"""Orchestrate request validation, table lookup, and wage calculations.

The service validates JSON-like payloads with the shared request models,
resolves the tax year tables and translator, and hands plain decimals to the
pure calculator. Profiling hooks live here so the calculator stays free of
side effects.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from contextlib import contextmanager
from decimal import Decimal
from time import perf_counter
from typing import Any

from pydantic import BaseModel, ValidationError

from wagecalc.backend.app.localization import Translator, get_translator
from wagecalc.backend.app.models import (
    PayrollBatchRequest,
    PayrollBatchResponse,
    WageCalculationRequest,
    WageCalculationResponse,
    WageResult,
    format_validation_error,
)
from wagecalc.backend.config.year_config import (
    YearConfiguration,
    default_year,
    load_year_configuration,
)

from .calculators import (
    compute_wage,
    dependent_offset,
    format_money,
    format_percentage,
    irrf_counter,
    round_currency,
)

_LOGGER = logging.getLogger(__name__)

_SUMMARY_FIELDS = (
    "gross_wage",
    "inss_deduction",
    "irrf_deduction",
    "total_deductions",
    "net_wage",
)


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv("WAGECALC_PROFILE_CALCULATIONS", "")
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


def _log_timings(label: str, timings: dict[str, float] | None) -> None:
    if timings is None:
        return
    _LOGGER.debug(
        "%s timings (ms): %s",
        label,
        {name: round(duration * 1000, 3) for name, duration in timings.items()},
    )


def _parse(model: type[BaseModel], payload: Mapping[str, Any] | BaseModel) -> Any:
    if isinstance(payload, model):
        data: Any = payload.model_dump(mode="python")
    elif isinstance(payload, Mapping):
        data = payload
    else:
        raise ValueError("Payload must be a mapping")

    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise ValueError(format_validation_error(exc)) from exc


def _resolve_configuration(year: int | None) -> YearConfiguration:
    return load_year_configuration(year if year is not None else default_year())


def _money(value: Decimal) -> str:
    return f"{round_currency(value):f}"


def _amounts(result: WageResult) -> dict[str, Decimal]:
    return {
        "gross_wage": round_currency(result.gross_wage),
        "inss_deduction": result.inss_deduction,
        "irrf_deduction": result.irrf_deduction,
        "total_deductions": result.total_deductions,
        "net_wage": result.net_wage,
    }


def _build_summary(result: WageResult, translator: Translator) -> dict[str, Any]:
    amounts = _amounts(result)
    return {
        **amounts,
        "dependents": result.dependents,
        "labels": {field: translator(f"summary.{field}") for field in _SUMMARY_FIELDS},
        "formatted": {field: format_money(value) for field, value in amounts.items()},
    }


def _build_details(
    result: WageResult, config: YearConfiguration, translator: Translator
) -> list[dict[str, Any]]:
    ceiling_applied = result.inss_aliquot == 0
    offset = dependent_offset(result.gross_wage, result.dependents, config)

    inss_notes: list[str] = []
    if ceiling_applied:
        inss_notes.append(translator("detail.inss.ceiling_note"))
    if offset:
        inss_notes.append(translator("detail.inss.dependent_note"))

    inss_detail: dict[str, Any] = {
        "category": "inss",
        "label": translator("detail.inss.label"),
        "aliquot": f"{result.inss_aliquot:f}",
        "aliquot_label": format_percentage(result.inss_aliquot),
        "ceiling_applied": ceiling_applied,
        "dependent_offset": _money(offset),
        "amount": _money(result.inss_deduction),
    }
    if inss_notes:
        inss_detail["notes"] = inss_notes

    irrf_detail: dict[str, Any] = {
        "category": "irrf",
        "label": translator("detail.irrf.label"),
        "aliquot": f"{result.irrf_aliquot:f}",
        "aliquot_label": format_percentage(result.irrf_aliquot),
        "base": _money(result.gross_wage - result.inss_deduction),
        "counter": _money(irrf_counter(result.irrf_aliquot, config)),
        "amount": _money(result.irrf_deduction),
    }
    if result.irrf_aliquot == 0:
        irrf_detail["notes"] = [translator("detail.irrf.exempt_note")]

    return [inss_detail, irrf_detail]


def _meta(config: YearConfiguration, translator: Translator) -> dict[str, Any]:
    return {"year": config.year, "locale": translator.locale, "currency": config.currency}


def calculate_wage(
    payload: Mapping[str, Any] | WageCalculationRequest,
) -> dict[str, Any]:
    """Compute deductions and net wage for a single payload."""

    request_model: WageCalculationRequest = _parse(WageCalculationRequest, payload)

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    with _profile_section("load_configuration", timings):
        config = _resolve_configuration(request_model.year)
    translator = get_translator(request_model.locale)

    with _profile_section("compute_wage", timings):
        result = compute_wage(
            request_model.gross_wage, request_model.dependents, tables=config
        )

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
    _log_timings("calculate_wage", timings)

    response_model = WageCalculationResponse.model_validate(
        {
            "summary": _build_summary(result, translator),
            "details": _build_details(result, config, translator),
            "meta": _meta(config, translator),
        }
    )

    return response_model.model_dump(mode="json", exclude_none=True)


def calculate_payroll(
    payload: Mapping[str, Any] | PayrollBatchRequest,
) -> dict[str, Any]:
    """Compute deductions for several employees and aggregate the totals."""

    request_model: PayrollBatchRequest = _parse(PayrollBatchRequest, payload)

    timings: dict[str, float] | None = {} if _profiling_enabled() else None

    config = _resolve_configuration(request_model.year)
    translator = get_translator(request_model.locale)

    employees: list[dict[str, Any]] = []
    totals = {field: Decimal("0") for field in _SUMMARY_FIELDS}

    with _profile_section("employees", timings):
        for employee in request_model.employees:
            result = compute_wage(
                employee.gross_wage, employee.dependents, tables=config
            )
            for field, value in _amounts(result).items():
                totals[field] += value
            employees.append(
                {
                    "id": employee.id,
                    "name": employee.name,
                    "summary": _build_summary(result, translator),
                    "details": _build_details(result, config, translator),
                }
            )

    _log_timings("calculate_payroll", timings)
    _LOGGER.debug(
        "Calculated payroll for %d employee(s) with %s tables",
        len(employees),
        config.year,
    )

    response_model = PayrollBatchResponse.model_validate(
        {
            "employees": employees,
            "totals": {
                "employees": len(employees),
                **totals,
                "formatted": {field: format_money(value) for field, value in totals.items()},
            },
            "meta": _meta(config, translator),
        }
    )

    return response_model.model_dump(mode="json", exclude_none=True)


__all__ = ["calculate_payroll", "calculate_wage"]
