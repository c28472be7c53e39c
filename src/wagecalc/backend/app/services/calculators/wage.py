"""INSS and IRRF withholding for a monthly wage.

Every function is pure: the dependent count is passed explicitly and the
bracket tables come from an immutable :class:`YearConfiguration`. When no
tables are supplied, the most recent configured year is used.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from wagecalc.backend.app.models import WageInput, WageResult
from wagecalc.backend.config.year_config import (
    YearConfiguration,
    load_default_configuration,
)

from .utils import first_match, round_currency

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def _tables(tables: YearConfiguration | None) -> YearConfiguration:
    return tables if tables is not None else load_default_configuration()


def _validated(wage: Any, dependents: Any = 0) -> WageInput:
    return WageInput(gross_wage=wage, dependents=dependents)


def inss_aliquot(wage: Any, tables: YearConfiguration | None = None) -> Decimal:
    """Return the INSS rate (percent) for ``wage``; ``0`` means the ceiling applies."""

    amount = _validated(wage).gross_wage
    bracket = first_match(amount, _tables(tables).inss.brackets, lambda b: b.upper_bound)
    return bracket.rate if bracket is not None else _ZERO


def dependent_offset(
    wage: Any, dependents: Any = 0, tables: YearConfiguration | None = None
) -> Decimal:
    """Return the amount subtracted from the INSS contribution for dependents."""

    request = _validated(wage, dependents)
    if request.dependents == 0:
        return _ZERO

    offset = first_match(
        request.gross_wage,
        _tables(tables).inss.dependent_offsets,
        lambda o: o.below,
        inclusive=False,
    )
    return offset.amount if offset is not None else _ZERO


def inss_deduction(
    wage: Any, dependents: Any = 0, tables: YearConfiguration | None = None
) -> Decimal:
    """Return the INSS contribution withheld from ``wage``.

    The result is not floored at zero: the dependent offset can exceed the
    contribution of a very small wage.
    """

    request = _validated(wage, dependents)
    config = _tables(tables).inss
    amount = request.gross_wage

    rate = inss_aliquot(amount, tables)
    if rate == 0:
        deduction = config.ceiling_deduction
    else:
        deduction = rate / _HUNDRED * amount

    deduction -= dependent_offset(amount, request.dependents, tables)

    return round_currency(deduction)


def irrf_aliquot(wage: Any, tables: YearConfiguration | None = None) -> Decimal:
    """Return the IRRF rate (percent) for the gross ``wage``."""

    amount = _validated(wage).gross_wage
    bracket = first_match(amount, _tables(tables).irrf.brackets, lambda b: b.upper_bound)
    return bracket.rate if bracket is not None else _ZERO


def irrf_counter(rate: Decimal, tables: YearConfiguration | None = None) -> Decimal:
    """Return the parcel deducted from the IRRF base for aliquot ``rate``."""

    tier = first_match(rate, _tables(tables).irrf.counters, lambda t: t.max_rate)
    return tier.counter if tier is not None else _ZERO


def irrf_deduction(
    wage: Any, dependents: Any = 0, tables: YearConfiguration | None = None
) -> Decimal:
    """Return the income tax withheld from ``wage`` after the INSS contribution."""

    request = _validated(wage, dependents)
    amount = request.gross_wage

    rate = irrf_aliquot(amount, tables)
    counter = irrf_counter(rate, tables)
    base = amount - inss_deduction(amount, request.dependents, tables)
    deduction = base * rate / _HUNDRED - counter

    return round_currency(max(deduction, _ZERO))


def net_wage(
    gross_wage: Any, dependents: Any = 0, tables: YearConfiguration | None = None
) -> Decimal:
    """Return the gross wage minus INSS and IRRF, never below zero."""

    return compute_wage(gross_wage, dependents, tables=tables).net_wage


def compute_wage(
    gross_wage: Any, dependents: Any = 0, *, tables: YearConfiguration | None = None
) -> WageResult:
    """Calculate every deduction for ``gross_wage`` and ``dependents``."""

    request = _validated(gross_wage, dependents)
    config = _tables(tables)
    amount = request.gross_wage

    inss = inss_deduction(amount, request.dependents, config)
    irrf = irrf_deduction(amount, request.dependents, config)
    net = round_currency(max(amount - inss - irrf, _ZERO))

    return WageResult(
        gross_wage=amount,
        dependents=request.dependents,
        inss_aliquot=inss_aliquot(amount, config),
        inss_deduction=inss,
        irrf_aliquot=irrf_aliquot(amount, config),
        irrf_deduction=irrf,
        net_wage=net,
    )


__all__ = [
    "compute_wage",
    "dependent_offset",
    "inss_aliquot",
    "inss_deduction",
    "irrf_aliquot",
    "irrf_counter",
    "irrf_deduction",
    "net_wage",
]
