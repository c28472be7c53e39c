"""Expose the loaded deduction tables and manifest metadata.

Clients that render the bracket tables next to a calculation read them from
here instead of duplicating the legal constants.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from wagecalc.backend.app.http import problem_response
from wagecalc.backend.app.services.calculators import format_percentage
from wagecalc.backend.config.year_config import (
    YearConfiguration,
    load_manifest,
    load_year_configuration,
)
from wagecalc.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata derived from the configuration manifest."""

    manifest = load_manifest()
    return {
        "version": get_project_version(),
        "supported_years": list(manifest.supported_years),
        "default_year": manifest.default_year,
    }


def _serialise_tables(configuration: YearConfiguration) -> dict[str, Any]:
    payload = configuration.model_dump(mode="json")
    for section in ("inss", "irrf"):
        for bracket, model in zip(
            payload[section]["brackets"], getattr(configuration, section).brackets
        ):
            bracket["rate_label"] = format_percentage(model.rate)
    return payload


@blueprint.get("/years")
def list_years():
    """Return the tax years declared in the manifest."""

    manifest = load_manifest()
    return (
        jsonify(
            {
                "years": [entry.model_dump(mode="json") for entry in manifest.years],
                "default_year": manifest.default_year,
            }
        ),
        200,
    )


@blueprint.get("/<int:year>/tables")
def get_year_tables(year: int):
    """Return the INSS and IRRF tables configured for ``year``."""

    try:
        configuration = load_year_configuration(year)
    except FileNotFoundError as exc:
        return problem_response("not_found", status=404, message=str(exc)).to_response()

    return jsonify(_serialise_tables(configuration)), 200
