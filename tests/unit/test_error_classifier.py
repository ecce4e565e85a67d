"""
Unit tests for the error classifier and response envelope.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

import json

import pytest

from student_service.api.error_handlers import ErrorClassifier, FailureKind, Operation, RequestFailure
from student_service.api.response_envelope import general_error, validation_error, write_json
from student_service.storage.base import StudentNotFoundError


@pytest.mark.parametrize(
    ("failure", "status_code", "error"),
    [
        (RequestFailure.empty_body(Operation.CREATE), 400, "empty body"),
        (RequestFailure.malformed_payload(Operation.CREATE, "bad"), 502, "invalid request payload: bad"),
        (RequestFailure.malformed_payload(Operation.UPDATE, "bad"), 400, "invalid request payload: bad"),
        (RequestFailure.invalid_id(Operation.GET, "'x'"), 400, "invalid id format: 'x'"),
        (RequestFailure.storage_failure(Operation.DELETE, StudentNotFoundError(3)), 500, "no student found with id 3"),
    ],
)
def test_classifies_message_failures(failure: RequestFailure, status_code: int, error: str) -> None:
    classified = ErrorClassifier().classify(failure)

    assert classified.status_code == status_code
    assert classified.body == {"status": "ERROR", "error": error}


def test_classifies_validation_failure_as_field_mapping() -> None:
    failure = RequestFailure.validation_failed(Operation.UPDATE, {"age": "age must be a positive integer"})

    classified = ErrorClassifier().classify(failure)

    assert classified.status_code == 400
    assert classified.body == {"status": "ERROR", "error": {"age": "age must be a positive integer"}}


def test_create_malformed_status_follows_configuration() -> None:
    classifier = ErrorClassifier(create_malformed_status=400)

    classified = classifier.classify(RequestFailure.malformed_payload(Operation.CREATE, "bad"))

    assert classified.status_code == 400


def test_only_storage_failures_are_server_side() -> None:
    assert [kind for kind in FailureKind if not kind.is_client_error] == [FailureKind.STORAGE_FAILURE]


def test_envelope_builders() -> None:
    assert general_error("boom") == {"status": "ERROR", "error": "boom"}
    assert validation_error({"name": "required"}) == {"status": "ERROR", "error": {"name": "required"}}


def test_write_json_sets_status_and_content_type() -> None:
    response = write_json(201, {"id": 7})

    assert response.status_code == 201
    assert response.media_type == "application/json"
    assert json.loads(response.body) == {"id": 7}
