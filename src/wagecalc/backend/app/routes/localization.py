"""Serve the label catalogues used in calculation responses."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request

from wagecalc.backend.app.localization import load_translations
from wagecalc.backend.services.request_parser import resolve_locale

blueprint = Blueprint("translations", __name__, url_prefix="/api/v1/translations")


@blueprint.get("/", defaults={"locale": None})
@blueprint.get("/<locale>")
def get_translations(locale: str | None) -> tuple[Any, int]:
    """Return the catalogue for ``locale`` or the negotiated request locale."""

    payload = load_translations(resolve_locale(request, locale))
    return jsonify(payload), 200
