"""Domain-specific calculation helpers."""

from .utils import first_match, format_money, format_percentage, round_currency
from .wage import (
    compute_wage,
    dependent_offset,
    inss_aliquot,
    inss_deduction,
    irrf_aliquot,
    irrf_counter,
    irrf_deduction,
    net_wage,
)

__all__ = [
    "compute_wage",
    "dependent_offset",
    "first_match",
    "format_money",
    "format_percentage",
    "inss_aliquot",
    "inss_deduction",
    "irrf_aliquot",
    "irrf_counter",
    "irrf_deduction",
    "net_wage",
    "round_currency",
]
