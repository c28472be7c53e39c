"""Unit tests for the calculation service."""

from __future__ import annotations

import logging

import pytest

from wagecalc.backend.app.models import WageCalculationRequest
from wagecalc.backend.app.services.calculation_service import (
    calculate_payroll,
    calculate_wage,
)


def test_calculate_wage_builds_summary_details_and_meta() -> None:
    result = calculate_wage({"gross_wage": "3000.00", "dependents": 0})

    summary = result["summary"]
    assert summary["gross_wage"] == "3000.00"
    assert summary["inss_deduction"] == "330.00"
    assert summary["irrf_deduction"] == "45.70"
    assert summary["total_deductions"] == "375.70"
    assert summary["net_wage"] == "2624.30"
    assert summary["dependents"] == 0
    assert summary["formatted"]["net_wage"] == "R$ 2.624,30"
    assert summary["labels"]["net_wage"] == "Net wage"

    categories = [detail["category"] for detail in result["details"]]
    assert categories == ["inss", "irrf"]

    assert result["meta"] == {"year": 2016, "locale": "en", "currency": "BRL"}


def test_calculate_wage_localises_labels() -> None:
    result = calculate_wage({"gross_wage": 1000, "locale": "pt-BR"})

    assert result["meta"]["locale"] == "pt"
    assert result["summary"]["labels"]["net_wage"] == "Salário líquido"


def test_calculate_wage_flags_ceiling_and_exemption_notes() -> None:
    high = calculate_wage({"gross_wage": 10_000})
    low = calculate_wage({"gross_wage": 1_000})

    high_inss = next(item for item in high["details"] if item["category"] == "inss")
    low_irrf = next(item for item in low["details"] if item["category"] == "irrf")

    assert high_inss["ceiling_applied"] is True
    assert high_inss["aliquot_label"] == "0%"
    assert high_inss["notes"]
    assert low_irrf["notes"] == ["Wage within the exempt bracket"]


def test_calculate_wage_accepts_request_models() -> None:
    request = WageCalculationRequest(gross_wage="800.00", dependents=1)

    result = calculate_wage(request)

    assert result["summary"]["net_wage"] == "781.00"


def test_calculate_wage_rejects_negative_wage() -> None:
    with pytest.raises(ValueError, match="cannot be negative"):
        calculate_wage({"gross_wage": -1})


def test_calculate_wage_rejects_non_mapping_payload() -> None:
    with pytest.raises(ValueError, match="mapping"):
        calculate_wage(["gross_wage", 1000])  # type: ignore[arg-type]


def test_calculate_wage_unknown_year_raises() -> None:
    with pytest.raises(FileNotFoundError):
        calculate_wage({"gross_wage": 1000, "year": 1999})


def test_calculate_payroll_aggregates_totals() -> None:
    result = calculate_payroll(
        {
            "employees": [
                {"id": "a", "name": "Ana", "gross_wage": "1000.00"},
                {"id": "b", "gross_wage": "3000.00"},
                {"id": "c", "gross_wage": "800.00", "dependents": 1},
            ]
        }
    )

    totals = result["totals"]
    assert totals["employees"] == 3
    assert totals["gross_wage"] == "4800.00"
    assert totals["inss_deduction"] == "429.00"
    assert totals["irrf_deduction"] == "45.70"
    assert totals["net_wage"] == "4325.30"
    assert totals["formatted"]["net_wage"] == "R$ 4.325,30"

    ids = [employee["id"] for employee in result["employees"]]
    assert ids == ["a", "b", "c"]
    assert result["employees"][0]["name"] == "Ana"
    assert "name" not in result["employees"][1]


def test_profiling_logs_timings(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setenv("WAGECALC_PROFILE_CALCULATIONS", "yes")

    with caplog.at_level(
        logging.DEBUG, logger="wagecalc.backend.app.services.calculation_service"
    ):
        calculate_wage({"gross_wage": 1000})

    assert any("calculate_wage timings" in record.getMessage() for record in caplog.records)


def test_displayed_dependent_offset_matches_applied_offset() -> None:
    result = calculate_wage({"gross_wage": "877.675", "dependents": 1})

    inss = next(detail for detail in result["details"] if detail["category"] == "inss")
    assert inss["dependent_offset"] == "45.00"
    assert inss["amount"] == "25.21"
    assert result["summary"]["inss_deduction"] == "25.21"
