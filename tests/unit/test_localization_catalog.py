"""Tests for the localisation catalogue helpers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from wagecalc.backend.app.localization import (
    get_translator,
    load_translations,
    normalise_locale,
)

TRANSLATIONS_ROOT = Path(__file__).resolve().parents[2] / "src" / "wagecalc" / "translations"


def _read_message(locale: str, key: str) -> str:
    payload = json.loads(TRANSLATIONS_ROOT.joinpath(f"{locale}.json").read_text(encoding="utf-8"))
    return str(payload["messages"][key])


def test_catalogues_share_the_same_keys() -> None:
    keys = {
        path.stem: set(json.loads(path.read_text(encoding="utf-8"))["messages"])
        for path in TRANSLATIONS_ROOT.glob("*.json")
    }

    assert set(keys) == {"en", "pt"}
    assert keys["en"] == keys["pt"]


@pytest.mark.parametrize(
    ("requested", "expected"),
    [(None, "en"), ("", "en"), ("pt", "pt"), ("pt-BR", "pt"), ("PT_br", "pt"), ("fr", "en")],
)
def test_normalise_locale(requested: str | None, expected: str) -> None:
    assert normalise_locale(requested) == expected


def test_get_translator_loads_portuguese_catalogue() -> None:
    translator = get_translator("pt")

    assert translator.locale == "pt"
    assert translator("summary.net_wage") == _read_message("pt", "summary.net_wage")


def test_get_translator_returns_key_for_unknown_messages() -> None:
    translator = get_translator("en")

    assert translator("summary.missing") == "summary.missing"


def test_load_translations_exposes_catalogue_payload() -> None:
    payload = load_translations("pt")

    assert payload["locale"] == "pt"
    assert payload["available_locales"] == ["en", "pt"]
    assert payload["messages"]["summary.inss_deduction"] == _read_message(
        "pt", "summary.inss_deduction"
    )
    assert payload["fallback"]["locale"] == "en"
