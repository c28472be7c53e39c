"""Service-layer helpers for the WageCalc backend."""

from wagecalc.backend.app.services.calculation_service import (
    calculate_payroll,
    calculate_wage,
)

from .request_parser import parse_calculation_payload
from .response_builder import build_calculation_response

__all__ = [
    "build_calculation_response",
    "calculate_payroll",
    "calculate_wage",
    "parse_calculation_payload",
]
