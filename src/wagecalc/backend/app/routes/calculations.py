"""REST endpoints for wage calculations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from wagecalc.backend.app.services.calculation_service import (
    calculate_payroll,
    calculate_wage,
)
from wagecalc.backend.services.request_parser import parse_calculation_payload
from wagecalc.backend.services.response_builder import build_calculation_response

blueprint = Blueprint("calculations", __name__, url_prefix="/api/v1")


@blueprint.post("/calculations")
def create_calculation() -> tuple[Any, int]:
    """Calculate INSS, IRRF and net wage for the submitted JSON payload."""

    payload = parse_calculation_payload(request)
    result = calculate_wage(payload)

    return build_calculation_response(result)


@blueprint.post("/calculations/batch")
def create_batch_calculation() -> tuple[Any, int]:
    """Calculate deductions for a list of employee records."""

    payload = parse_calculation_payload(request)
    result = calculate_payroll(payload)

    return build_calculation_response(result)
