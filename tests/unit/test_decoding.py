"""
Unit tests for request decoding.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

import pytest

from student_service.api.decoding import decode_student_body, parse_student_id
from student_service.api.error_handlers import FailureKind, Operation, RequestFailure


def test_decodes_complete_body() -> None:
    payload = decode_student_body(b'{"name": "Ada", "email": "ada@x.com", "age": 30}', operation=Operation.CREATE)

    assert (payload.name, payload.email, payload.age) == ("Ada", "ada@x.com", 30)


def test_missing_keys_decode_to_none() -> None:
    payload = decode_student_body(b'{"name": "Ada"}', operation=Operation.UPDATE)

    assert payload.email is None
    assert payload.age is None


@pytest.mark.parametrize("body", [b"", b"   ", b"\n\t"])
def test_empty_body(body: bytes) -> None:
    with pytest.raises(RequestFailure) as exc_info:
        decode_student_body(body, operation=Operation.CREATE)

    assert exc_info.value.kind is FailureKind.EMPTY_BODY
    assert exc_info.value.message == "empty body"


@pytest.mark.parametrize(
    "body",
    [
        b"{not json",
        b"[1, 2]",
        b'"just a string"',
        b'{"name": "Ada", "email": "ada@x.com", "age": "30"}',
        b'{"name": "Ada", "email": "ada@x.com", "age": true}',
        b'{"name": ["Ada"], "email": "ada@x.com", "age": 30}',
        b'{"name": "Ada", "email": "ada@x.com", "age": 100000000000000000000}',
        b'{"name": "Ada", "email": "ada@x.com", "age": -9223372036854775809}',
    ],
)
def test_malformed_body(body: bytes) -> None:
    with pytest.raises(RequestFailure) as exc_info:
        decode_student_body(body, operation=Operation.UPDATE)

    failure = exc_info.value
    assert failure.kind is FailureKind.MALFORMED_PAYLOAD
    assert failure.operation is Operation.UPDATE
    assert failure.message.startswith("invalid request payload: ")


@pytest.mark.parametrize(("raw", "expected"), [("1", 1), ("42", 42), ("007", 7), ("9223372036854775807", 2**63 - 1)])
def test_parses_positive_ids(raw: str, expected: int) -> None:
    assert parse_student_id(raw, operation=Operation.GET) == expected


@pytest.mark.parametrize("raw", [None, "", "abc", "0", "-1", "1.5", " 1", "+3", "1_000", "9223372036854775808", "99999999999999999999"])
def test_rejects_invalid_ids(raw: str | None) -> None:
    with pytest.raises(RequestFailure) as exc_info:
        parse_student_id(raw, operation=Operation.DELETE)

    assert exc_info.value.kind is FailureKind.INVALID_ID
    assert exc_info.value.message.startswith("invalid id format: ")
