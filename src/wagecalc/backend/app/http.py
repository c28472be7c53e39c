"""Problem responses shared by the blueprints and error handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from flask import jsonify


@dataclass(frozen=True)
class ProblemResponse:
    """Error payload of the form ``{"error": ..., "message": ...}``."""

    error: str
    status: int
    message: str | None = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error, **self.extra}
        if self.message:
            payload["message"] = self.message
        return payload

    def to_response(self) -> tuple[Any, int]:
        return jsonify(self.as_dict()), self.status


def problem_response(
    error: str,
    *,
    status: int,
    message: str | None = None,
    **extra: Any,
) -> ProblemResponse:
    """Build a :class:`ProblemResponse` with optional extra fields."""

    return ProblemResponse(error=error, status=status, message=message, extra=extra)


__all__ = ["ProblemResponse", "problem_response"]
