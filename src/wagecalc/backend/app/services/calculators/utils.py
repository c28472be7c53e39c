"""Utility helpers for calculator modules."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import TypeVar

_CENTS = Decimal("0.01")

_Entry = TypeVar("_Entry")


def round_currency(value: Decimal) -> Decimal:
    """Round monetary amounts half-up to two decimals."""

    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


def first_match(
    value: Decimal,
    entries: Sequence[_Entry],
    bound: Callable[[_Entry], Decimal | None],
    *,
    inclusive: bool = True,
) -> _Entry | None:
    """Return the first entry whose bound admits ``value``.

    An entry without a bound admits every value. ``inclusive`` selects
    ``value <= bound`` over ``value < bound``.
    """

    for entry in entries:
        limit = bound(entry)
        if limit is None:
            return entry
        if value <= limit if inclusive else value < limit:
            return entry
    return None


def format_percentage(value: Decimal) -> str:
    """Return a human-readable label for a percentage ``value`` (``7.5`` -> ``7.5%``)."""

    normalised = value.normalize()
    if normalised == normalised.to_integral_value():
        return f"{int(normalised)}%"
    return f"{normalised:f}%"


def format_money(value: Decimal, symbol: str = "R$") -> str:
    """Format ``value`` as Brazilian currency, e.g. ``R$ 1.234,56``."""

    amount = round_currency(value)
    sign = "-" if amount < 0 else ""
    grouped = f"{abs(amount):,.2f}"
    localised = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}{symbol} {localised}"
