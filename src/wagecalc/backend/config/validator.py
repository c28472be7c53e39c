"""Utilities for validating deduction tables and surfacing issues."""

from __future__ import annotations

import argparse
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from .year_config import (
    INSSConfig,
    ConfigurationError,
    IRRFConfig,
    RateBracket,
    YearConfiguration,
    available_years,
    load_year_configuration,
)


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _non_decreasing(values: Sequence[Decimal]) -> bool:
    return all(earlier <= later for earlier, later in zip(values, values[1:]))


def _bounded(brackets: Sequence[RateBracket]) -> list[RateBracket]:
    return [bracket for bracket in brackets if bracket.upper_bound is not None]


def _validate_inss(inss: INSSConfig) -> list[str]:
    errors: list[str] = []
    bounded = _bounded(inss.brackets)

    if any(bracket.rate == 0 for bracket in bounded):
        errors.append(
            _format_scope(
                "inss.brackets",
                "a zero rate is reserved for the open ceiling bracket",
            )
        )

    if not _non_decreasing([bracket.rate for bracket in bounded]):
        errors.append(_format_scope("inss.brackets", "rates should not decrease"))

    if inss.brackets[-1].rate != 0:
        errors.append(
            _format_scope(
                "inss.ceiling_deduction",
                "ceiling is unused because the open bracket has a non-zero rate",
            )
        )
    elif bounded:
        last = bounded[-1]
        capped = (last.rate / 100 * last.upper_bound).quantize(
            Decimal("0.01"), rounding=ROUND_HALF_UP
        )
        if inss.ceiling_deduction < capped:
            errors.append(
                _format_scope(
                    "inss.ceiling_deduction",
                    f"ceiling {inss.ceiling_deduction} is below the top bracket "
                    f"contribution {capped}",
                )
            )

    amounts = [offset.amount for offset in inss.dependent_offsets]
    if not _non_decreasing(list(reversed(amounts))):
        errors.append(
            _format_scope(
                "inss.dependent_offsets",
                "offset amounts should not grow with the wage threshold",
            )
        )

    return errors


def _validate_irrf(irrf: IRRFConfig) -> list[str]:
    errors: list[str] = []

    rates = [bracket.rate for bracket in irrf.brackets]
    if not _non_decreasing(rates):
        errors.append(_format_scope("irrf.brackets", "rates should not decrease"))

    counters = [tier.counter for tier in irrf.counters]
    if not _non_decreasing(counters):
        errors.append(_format_scope("irrf.counters", "counters should not decrease"))

    tier_rates = {tier.max_rate for tier in irrf.counters if tier.max_rate is not None}
    highest_tier = max(tier_rates) if tier_rates else None
    for rate in rates:
        if rate == 0 or rate in tier_rates:
            continue
        if highest_tier is not None and rate <= highest_tier:
            errors.append(
                _format_scope(
                    "irrf.counters",
                    f"aliquot {rate} falls between counter tiers",
                )
            )

    return errors


def validate_year_configuration(config: YearConfiguration) -> list[str]:
    """Return a list of validation issues for the provided configuration."""

    errors: list[str] = []
    errors.extend(_validate_inss(config.inss))
    errors.extend(_validate_irrf(config.irrf))
    return errors


def validate_all_years(years: Sequence[int] | None = None) -> dict[int, list[str]]:
    """Validate all configured years and return issues keyed by year."""

    targets = years or available_years()
    results: dict[int, list[str]] = {}

    for year in targets:
        config = load_year_configuration(year)
        results[int(year)] = validate_year_configuration(config)

    return results


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate configured deduction tables and report inconsistencies."
    )
    parser.add_argument(
        "years",
        nargs="*",
        type=int,
        help="Specific years to validate (defaults to all configured years)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    years = args.years or available_years()

    if not years:
        parser.print_help()
        return 1

    exit_code = 0

    for year in years:
        try:
            config = load_year_configuration(year)
        except (FileNotFoundError, ConfigurationError) as error:
            print(f"[{year}] failed to load configuration: {error}")
            exit_code = 1
            continue

        issues = validate_year_configuration(config)
        if issues:
            exit_code = 1
            print(f"[{year}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{year}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
