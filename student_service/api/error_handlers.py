# This file classifies request failures into HTTP status codes and error envelopes.
# Failures carry an explicit kind from a closed set, so classification never inspects foreign error types.
# The registered handlers write every failure exactly once, including framework and unexpected errors.
# Unexpected exceptions are logged with traceback but only a generic message reaches the client.

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from student_service.api.response_envelope import general_error, validation_error, write_json

LOGGER = logging.getLogger(__name__)


class Operation(str, Enum):
    CREATE = "create"
    GET = "get"
    GET_LIST = "get_list"
    UPDATE = "update"
    DELETE = "delete"


class FailureKind(str, Enum):
    EMPTY_BODY = "EMPTY_BODY"
    MALFORMED_PAYLOAD = "MALFORMED_PAYLOAD"
    INVALID_ID = "INVALID_ID"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    STORAGE_FAILURE = "STORAGE_FAILURE"

    @property
    def is_client_error(self) -> bool:
        return self is not FailureKind.STORAGE_FAILURE


class RequestFailure(Exception):
    """A failure raised inside a student operation, tagged with its kind."""

    def __init__(
        self,
        *,
        kind: FailureKind,
        operation: Operation,
        message: str,
        details: Mapping[str, str] | None = None,
    ) -> None:
        self.kind = kind
        self.operation = operation
        self.message = message
        self.details = dict(details) if details is not None else None
        super().__init__(message)

    @classmethod
    def empty_body(cls, operation: Operation) -> RequestFailure:
        return cls(kind=FailureKind.EMPTY_BODY, operation=operation, message="empty body")

    @classmethod
    def malformed_payload(cls, operation: Operation, detail: str) -> RequestFailure:
        return cls(
            kind=FailureKind.MALFORMED_PAYLOAD,
            operation=operation,
            message=f"invalid request payload: {detail}",
        )

    @classmethod
    def invalid_id(cls, operation: Operation, detail: str) -> RequestFailure:
        return cls(
            kind=FailureKind.INVALID_ID,
            operation=operation,
            message=f"invalid id format: {detail}",
        )

    @classmethod
    def validation_failed(cls, operation: Operation, violations: Mapping[str, str]) -> RequestFailure:
        return cls(
            kind=FailureKind.VALIDATION_FAILED,
            operation=operation,
            message="validation failed",
            details=violations,
        )

    @classmethod
    def storage_failure(cls, operation: Operation, error: Exception) -> RequestFailure:
        return cls(kind=FailureKind.STORAGE_FAILURE, operation=operation, message=str(error))


@dataclass(frozen=True)
class ClassifiedFailure:
    status_code: int
    body: dict[str, Any]


class ErrorClassifier:
    """Maps a tagged failure to an HTTP status and envelope body."""

    def __init__(self, *, create_malformed_status: int = 502) -> None:
        self.create_malformed_status = create_malformed_status

    def classify(self, failure: RequestFailure) -> ClassifiedFailure:
        kind = failure.kind
        if kind is FailureKind.VALIDATION_FAILED:
            return ClassifiedFailure(status_code=400, body=validation_error(failure.details or {}))
        if kind is FailureKind.MALFORMED_PAYLOAD:
            status_code = self.create_malformed_status if failure.operation is Operation.CREATE else 400
            return ClassifiedFailure(status_code=status_code, body=general_error(failure.message))
        if kind is FailureKind.STORAGE_FAILURE:
            return ClassifiedFailure(status_code=500, body=general_error(failure.message))
        return ClassifiedFailure(status_code=400, body=general_error(failure.message))


def _classifier(request: Request) -> ErrorClassifier:
    classifier = getattr(request.app.state, "error_classifier", None)
    return classifier if isinstance(classifier, ErrorClassifier) else ErrorClassifier()


def _request_id(request: Request) -> str:
    return str(getattr(request.state, "request_id", "unknown"))


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(RequestFailure)
    async def request_failure_handler(request: Request, exc: RequestFailure) -> JSONResponse:
        classified = _classifier(request).classify(exc)
        LOGGER.log(
            logging.INFO if exc.kind.is_client_error else logging.ERROR,
            "request failed request_id=%s operation=%s kind=%s status=%s",
            _request_id(request),
            exc.operation.value,
            exc.kind.value,
            classified.status_code,
        )
        return write_json(classified.status_code, classified.body)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return write_json(422, general_error("invalid request parameters"))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        response = write_json(exc.status_code, general_error(str(exc.detail)))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.exception("unhandled error request_id=%s path=%s", _request_id(request), request.url.path)
        return write_json(500, general_error("the server encountered an unexpected error"))
