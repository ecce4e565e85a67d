# This file builds the response bodies written by every student endpoint.
# Success bodies carry the operation result directly; error bodies use the {status, error} envelope.
# The error field is either a message string or, for validation failures, a field-to-reason mapping.
# write_json is the single place that turns a result into an application/json response.

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

STATUS_ERROR: Final[str] = "ERROR"


def general_error(message: str) -> dict[str, Any]:
    """Build an error envelope carrying a single free-text message."""

    return {"status": STATUS_ERROR, "error": message}


def validation_error(violations: Mapping[str, str]) -> dict[str, Any]:
    """Build an error envelope carrying field-level validation reasons."""

    return {"status": STATUS_ERROR, "error": dict(violations)}


def write_json(status_code: int, data: Any) -> JSONResponse:
    """Serialize a result or envelope onto a JSON response."""

    return JSONResponse(status_code=status_code, content=jsonable_encoder(data))
