# This file turns raw request input into typed values for the student handlers.
# Body decoding distinguishes an empty body from a malformed one; path ids must be positive integers.
# Missing fields are left for the validator so they are reported per field, not as a parse error.
# Nothing here touches storage.

from __future__ import annotations

import re

from pydantic import ValidationError

from student_service.api.error_handlers import Operation, RequestFailure
from student_service.api.schemas.student_schemas import MAX_INT64, StudentPayload

_ID_RE = re.compile(r"^[0-9]+$")


def _describe_decode_error(exc: ValidationError) -> str:
    messages: list[str] = []
    for error in exc.errors(include_url=False):
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = str(error.get("msg", "invalid value"))
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "invalid JSON document"


def decode_student_body(body: bytes, *, operation: Operation) -> StudentPayload:
    """Decode a create/update body into a candidate payload."""

    if not body.strip():
        raise RequestFailure.empty_body(operation)

    try:
        return StudentPayload.model_validate_json(body)
    except ValidationError as exc:
        raise RequestFailure.malformed_payload(operation, _describe_decode_error(exc)) from exc


def parse_student_id(raw_id: str | None, *, operation: Operation) -> int:
    """Parse a path id, rejecting anything that is not a positive integer."""

    if raw_id is None or raw_id == "":
        raise RequestFailure.invalid_id(operation, "missing student id")
    if not _ID_RE.match(raw_id) or int(raw_id) <= 0:
        raise RequestFailure.invalid_id(operation, f"{raw_id!r} is not a positive integer")
    if int(raw_id) > MAX_INT64:
        raise RequestFailure.invalid_id(operation, f"{raw_id!r} is out of range")
    return int(raw_id)
