"""Typed inputs and results shared across the calculation services.

Requests arrive as Pydantic models (see :mod:`.api`) and are reduced to a
small frozen :class:`WageInput` before reaching the calculator, which answers
with an equally small :class:`WageResult`. Neither carries identity or
lifecycle; both are built fresh per calculation.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from numbers import Integral
from typing import Any

from .api import (
    MAX_GROSS_WAGE,
    DetailEntry,
    EmployeeInput,
    EmployeeResult,
    FormattedAmounts,
    PayrollBatchRequest,
    PayrollBatchResponse,
    PayrollTotals,
    ResponseMeta,
    Summary,
    SummaryLabels,
    WageCalculationRequest,
    WageCalculationResponse,
    format_validation_error,
)

__all__ = [
    "InvalidArgument",
    "WageInput",
    "WageResult",
    "to_decimal",
    "MAX_GROSS_WAGE",
    "DetailEntry",
    "EmployeeInput",
    "EmployeeResult",
    "FormattedAmounts",
    "PayrollBatchRequest",
    "PayrollBatchResponse",
    "PayrollTotals",
    "ResponseMeta",
    "Summary",
    "SummaryLabels",
    "WageCalculationRequest",
    "WageCalculationResponse",
    "format_validation_error",
]


class InvalidArgument(ValueError):
    """Raised when a wage or dependent count cannot be calculated."""


def to_decimal(value: Any, field_name: str = "gross_wage") -> Decimal:
    """Coerce ``value`` into a finite :class:`~decimal.Decimal`.

    Floats go through ``str`` so table-like literals such as ``1693.72`` keep
    their decimal value instead of the nearest binary fraction.
    """

    if isinstance(value, bool):
        raise InvalidArgument(f"Field '{field_name}' must be a number")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        try:
            amount = Decimal(value.strip())
        except InvalidOperation as exc:
            raise InvalidArgument(f"Field '{field_name}' must be a number") from exc
    else:
        raise InvalidArgument(f"Field '{field_name}' must be a number")

    if not amount.is_finite():
        raise InvalidArgument(f"Field '{field_name}' must be a finite number")
    return amount


@dataclass(frozen=True)
class WageInput:
    """Gross monthly wage and the number of declared dependents."""

    gross_wage: Decimal
    dependents: int = 0

    def __post_init__(self) -> None:
        wage = to_decimal(self.gross_wage)
        if wage < 0:
            raise InvalidArgument("Field 'gross_wage' cannot be negative")
        if wage > MAX_GROSS_WAGE:
            raise InvalidArgument(
                f"Field 'gross_wage' cannot exceed {MAX_GROSS_WAGE}"
            )
        if wage.is_zero():
            wage = abs(wage)

        dependents = self.dependents
        if isinstance(dependents, bool) or not isinstance(dependents, Integral):
            raise InvalidArgument("Field 'dependents' must be an integer")
        if dependents < 0:
            raise InvalidArgument("Field 'dependents' cannot be negative")

        object.__setattr__(self, "gross_wage", wage)
        object.__setattr__(self, "dependents", int(dependents))


@dataclass(frozen=True)
class WageResult:
    """Deductions withheld from a gross wage and the resulting net wage."""

    gross_wage: Decimal
    dependents: int
    inss_aliquot: Decimal
    inss_deduction: Decimal
    irrf_aliquot: Decimal
    irrf_deduction: Decimal
    net_wage: Decimal

    @property
    def total_deductions(self) -> Decimal:
        return self.inss_deduction + self.irrf_deduction

    def as_dict(self) -> dict[str, Decimal]:
        return {
            "inss_deduction": self.inss_deduction,
            "irrf_deduction": self.irrf_deduction,
            "net_wage": self.net_wage,
        }
