#!/usr/bin/env python3
"""Time repeated wage calculations to spot performance regressions."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from time import perf_counter

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from wagecalc.backend.app.services.calculation_service import (  # noqa: E402
    calculate_payroll,
    calculate_wage,
)

SAMPLE_PAYLOAD = {"locale": "pt", "gross_wage": "3000.00", "dependents": 1}

SAMPLE_BATCH = {
    "locale": "pt",
    "employees": [
        {"id": index, "gross_wage": str(800 + index * 97), "dependents": index % 3}
        for index in range(100)
    ],
}


def _measure(label: str, func, payload: dict, iterations: int) -> dict[str, object]:
    func(payload)  # Warm the table cache
    start = perf_counter()
    for _ in range(iterations):
        func(payload)
    elapsed = perf_counter() - start
    return {
        "label": label,
        "iterations": iterations,
        "total_ms": elapsed * 1000,
        "average_ms": (elapsed / iterations) * 1000,
    }


def main() -> None:
    iterations = int(os.getenv("WAGECALC_PROFILE_ITERATIONS", "200"))
    report = [
        _measure("single", calculate_wage, SAMPLE_PAYLOAD, iterations),
        _measure("batch_100", calculate_payroll, SAMPLE_BATCH, max(iterations // 10, 1)),
    ]
    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    main()
