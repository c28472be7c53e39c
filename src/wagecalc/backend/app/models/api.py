"""Pydantic models describing the public API surface."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

MAX_GROSS_WAGE = Decimal("999999999999999.99")

__all__ = [
    "MAX_GROSS_WAGE",
    "EmployeeInput",
    "WageCalculationRequest",
    "PayrollBatchRequest",
    "SummaryLabels",
    "Summary",
    "FormattedAmounts",
    "DetailEntry",
    "ResponseMeta",
    "WageCalculationResponse",
    "EmployeeResult",
    "PayrollTotals",
    "PayrollBatchResponse",
    "format_validation_error",
]


def _coerce_decimal_comma(value: Any) -> Any:
    """Accept ``"1234,56"`` style inputs alongside plain numbers."""

    if isinstance(value, str):
        cleaned = value.strip()
        if "," in cleaned and "." not in cleaned:
            return cleaned.replace(",", ".")
        return cleaned
    return value


class EmployeeInput(BaseModel):
    """Wage inputs for a single employee record supplied by the caller."""

    model_config = ConfigDict(extra="forbid")

    id: str | int | None = None
    name: str | None = None
    gross_wage: Decimal = Field(..., ge=0, le=MAX_GROSS_WAGE, allow_inf_nan=False)
    dependents: int = Field(default=0, ge=0)

    @field_validator("gross_wage", mode="before")
    @classmethod
    def _normalise_wage(cls, value: Any) -> Any:
        return _coerce_decimal_comma(value)


class WageCalculationRequest(BaseModel):
    """Single wage calculation submitted through the API."""

    model_config = ConfigDict(extra="forbid")

    year: int | None = None
    locale: str | None = None
    gross_wage: Decimal = Field(..., ge=0, le=MAX_GROSS_WAGE, allow_inf_nan=False)
    dependents: int = Field(default=0, ge=0)

    @field_validator("gross_wage", mode="before")
    @classmethod
    def _normalise_wage(cls, value: Any) -> Any:
        return _coerce_decimal_comma(value)


class PayrollBatchRequest(BaseModel):
    """Several employee records calculated against the same tables."""

    model_config = ConfigDict(extra="forbid")

    year: int | None = None
    locale: str | None = None
    employees: list[EmployeeInput] = Field(..., min_length=1)


class SummaryLabels(BaseModel):
    """Localised labels for the summary amounts."""

    model_config = ConfigDict(extra="forbid")

    gross_wage: str
    inss_deduction: str
    irrf_deduction: str
    total_deductions: str
    net_wage: str


class FormattedAmounts(BaseModel):
    """Currency strings ready for display."""

    model_config = ConfigDict(extra="forbid")

    gross_wage: str
    inss_deduction: str
    irrf_deduction: str
    total_deductions: str
    net_wage: str


class Summary(BaseModel):
    """Headline figures of a wage calculation."""

    model_config = ConfigDict(extra="forbid")

    gross_wage: Decimal
    dependents: int
    inss_deduction: Decimal
    irrf_deduction: Decimal
    total_deductions: Decimal
    net_wage: Decimal
    labels: SummaryLabels
    formatted: FormattedAmounts


class DetailEntry(BaseModel):
    """Flexible structure for detailed line items in the response."""

    model_config = ConfigDict(extra="allow")

    category: str
    label: str


class ResponseMeta(BaseModel):
    """Metadata returned alongside the calculation output."""

    model_config = ConfigDict(extra="forbid")

    year: int
    locale: str
    currency: str


class WageCalculationResponse(BaseModel):
    """Full response payload produced by the calculation service."""

    model_config = ConfigDict(extra="forbid")

    summary: Summary
    details: list[DetailEntry]
    meta: ResponseMeta


class EmployeeResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str | int | None = None
    name: str | None = None
    summary: Summary
    details: list[DetailEntry]


class PayrollTotals(BaseModel):
    model_config = ConfigDict(extra="forbid")

    employees: int
    gross_wage: Decimal
    inss_deduction: Decimal
    irrf_deduction: Decimal
    total_deductions: Decimal
    net_wage: Decimal
    formatted: FormattedAmounts


class PayrollBatchResponse(BaseModel):
    """Per-employee results with aggregated totals."""

    model_config = ConfigDict(extra="forbid")

    employees: list[EmployeeResult]
    totals: PayrollTotals
    meta: ResponseMeta


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if "greater than or equal to 0" in message.lower():
            message = "value cannot be negative"
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid calculation payload: {details}"
