# This file holds the field rules applied to every create and update body.
# A single StudentValidator is built at startup and shared by all requests; it keeps no per-call state.
# Validation returns an explicit result instead of raising so callers decide how to report violations.
# Rules run in field declaration order and only the first failing rule per field is reported.

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from pydantic import EmailStr, TypeAdapter, ValidationError

from student_service.api.schemas.student_schemas import StudentPayload

_EMAIL_ADAPTER: TypeAdapter[EmailStr] = TypeAdapter(EmailStr)

FieldRule = Callable[[object], str | None]


@dataclass(frozen=True)
class ValidatedStudent:
    name: str
    email: str
    age: int


@dataclass(frozen=True)
class ValidationResult:
    student: ValidatedStudent | None = None
    violations: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.violations


def _required(field_name: str) -> FieldRule:
    def rule(value: object) -> str | None:
        if value is None or value == "":
            return f"{field_name} is a required field"
        return None

    return rule


def _email_syntax(value: object) -> str | None:
    try:
        _EMAIL_ADAPTER.validate_python(value)
    except ValidationError:
        return "email must be a valid email address"
    return None


def _positive_int(value: object) -> str | None:
    if not isinstance(value, int) or value <= 0:
        return "age must be a positive integer"
    return None


class StudentValidator:
    """Full-document validator for student payloads."""

    def __init__(self) -> None:
        self._rules: dict[str, tuple[FieldRule, ...]] = {
            "name": (_required("name"),),
            "email": (_required("email"), _email_syntax),
            "age": (_required("age"), _positive_int),
        }

    def validate(self, payload: StudentPayload) -> ValidationResult:
        violations: dict[str, str] = {}
        for field_name, rules in self._rules.items():
            value = getattr(payload, field_name)
            for rule in rules:
                reason = rule(value)
                if reason is not None:
                    violations[field_name] = reason
                    break

        if violations:
            return ValidationResult(violations=violations)

        return ValidationResult(
            student=ValidatedStudent(
                name=str(payload.name),
                email=str(payload.email),
                age=int(payload.age or 0),
            )
        )
