"""Pydantic models describing the wage deduction table schema."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class RateBracket(ImmutableModel):
    """A wage bracket mapping an inclusive upper bound to a percentage rate."""

    upper_bound: Decimal | None = Field(default=None, alias="upper")
    rate: Decimal

    @model_validator(mode="after")
    def _validate_values(self) -> RateBracket:
        if self.rate < 0:
            raise ConfigurationError("Bracket rates must be non-negative")
        if self.rate > 100:
            raise ConfigurationError("Bracket rates are percentages and cannot exceed 100")
        if self.upper_bound is not None and self.upper_bound <= 0:
            raise ConfigurationError("Upper bounds must be positive values")
        return self


class DependentOffset(ImmutableModel):
    """Fixed amount subtracted from INSS when the wage is below ``below``."""

    below: Decimal
    amount: Decimal

    @model_validator(mode="after")
    def _validate_values(self) -> DependentOffset:
        if self.below <= 0:
            raise ConfigurationError("Dependent offset thresholds must be positive")
        if self.amount < 0:
            raise ConfigurationError("Dependent offset amounts must be non-negative")
        return self


class CounterTier(ImmutableModel):
    """IRRF parcel to deduct, selected by the applied aliquot."""

    max_rate: Decimal | None = None
    counter: Decimal

    @model_validator(mode="after")
    def _validate_values(self) -> CounterTier:
        if self.counter < 0:
            raise ConfigurationError("IRRF counters must be non-negative")
        if self.max_rate is not None and self.max_rate < 0:
            raise ConfigurationError("IRRF counter tiers must reference non-negative rates")
        return self


def _require_ascending(bounds: Sequence[Decimal | None], label: str) -> None:
    last: Decimal | None = None
    for bound in bounds:
        if bound is None:
            continue
        if last is not None and bound <= last:
            raise ConfigurationError(f"{label} must be in ascending order")
        last = bound


def _require_open_tail(bounds: Sequence[Decimal | None], label: str) -> None:
    if not bounds:
        raise ConfigurationError(f"At least one entry must be defined for {label}")
    if any(bound is None for bound in bounds[:-1]):
        raise ConfigurationError(f"Only the final entry of {label} may be open ended")
    if bounds[-1] is not None:
        raise ConfigurationError(f"Final entry of {label} must have an open upper bound")


class INSSConfig(ImmutableModel):
    """Social security contribution table.

    A final bracket with a zero rate marks wages above the table, which pay
    the fixed ``ceiling_deduction`` instead of a percentage.
    """

    brackets: tuple[RateBracket, ...]
    ceiling_deduction: Decimal
    dependent_offsets: tuple[DependentOffset, ...] = ()

    @model_validator(mode="after")
    def _validate_tables(self) -> INSSConfig:
        bounds = [bracket.upper_bound for bracket in self.brackets]
        _require_open_tail(bounds, "INSS brackets")
        _require_ascending(bounds, "INSS brackets")
        _require_ascending(
            [offset.below for offset in self.dependent_offsets],
            "INSS dependent offsets",
        )
        if self.ceiling_deduction < 0:
            raise ConfigurationError("INSS ceiling deduction must be non-negative")
        return self


class IRRFConfig(ImmutableModel):
    """Withheld income tax brackets and the parcel deducted per aliquot."""

    brackets: tuple[RateBracket, ...]
    counters: tuple[CounterTier, ...]

    @model_validator(mode="after")
    def _validate_tables(self) -> IRRFConfig:
        bounds = [bracket.upper_bound for bracket in self.brackets]
        _require_open_tail(bounds, "IRRF brackets")
        _require_ascending(bounds, "IRRF brackets")

        tiers = [tier.max_rate for tier in self.counters]
        _require_open_tail(tiers, "IRRF counters")
        _require_ascending(tiers, "IRRF counters")
        return self


class YearConfiguration(ImmutableModel):
    """Complete set of deduction tables for a single tax year."""

    year: int
    inss: INSSConfig
    irrf: IRRFConfig
    meta: Mapping[str, Any] = Field(default_factory=dict)

    @field_validator("meta", mode="before")
    @classmethod
    def _coerce_meta(cls, value: Any) -> Mapping[str, Any]:
        if value is None:
            return {}
        if isinstance(value, Mapping):
            return dict(value)
        raise ConfigurationError("Configuration 'meta' section must be a mapping")

    @property
    def currency(self) -> str:
        return str(self.meta.get("currency", "BRL"))


class TaxYearManifestEntry(ImmutableModel):
    """Entry describing a supported tax year in the manifest."""

    year: int
    filename: str | None = None
    status: str = "active"
    notes_url: str | None = None

    @computed_field
    @property
    def resolved_filename(self) -> str:
        return self.filename or f"{self.year}.yaml"


class TaxYearManifest(ImmutableModel):
    """Manifest describing the available tax year configuration files."""

    years: Sequence[TaxYearManifestEntry]

    @model_validator(mode="after")
    def _validate_years(self) -> TaxYearManifest:
        seen: set[int] = set()
        for entry in self.years:
            if entry.year in seen:
                raise ConfigurationError(
                    f"Duplicate year {entry.year} declared in the configuration manifest"
                )
            seen.add(entry.year)
        return self

    def get_entry(self, year: int) -> TaxYearManifestEntry:
        for entry in self.years:
            if entry.year == year:
                return entry
        raise KeyError(year)

    @computed_field
    @property
    def supported_years(self) -> tuple[int, ...]:
        return tuple(sorted(entry.year for entry in self.years))

    @property
    def default_year(self) -> int | None:
        years = self.supported_years
        return years[-1] if years else None


__all__ = [
    "ConfigurationError",
    "CounterTier",
    "DependentOffset",
    "IRRFConfig",
    "INSSConfig",
    "ImmutableModel",
    "RateBracket",
    "TaxYearManifest",
    "TaxYearManifestEntry",
    "ValidationError",
    "YearConfiguration",
]
