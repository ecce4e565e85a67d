# This file provides shared helpers for API endpoint tests.
# It exists so tests can swap the storage gateway without touching a real database.
# The helpers build consistent config objects and scoped TestClient contexts.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from fastapi.testclient import TestClient

from student_service.api.api_config import ApiConfig
from student_service.api.app import create_app
from student_service.api.dependencies import get_student_storage
from student_service.api.schemas.student_schemas import Student
from student_service.storage.base import StorageError, StudentStorage
from student_service.storage.memory_storage import InMemoryStudentStorage


def build_test_config(*, create_malformed_status: int = 502) -> ApiConfig:
    """Create deterministic API config for tests."""

    return ApiConfig(
        api_name="Test Student API",
        host="127.0.0.1",
        port=8082,
        environment="test",
        database_url="sqlite://",
        storage_backend="memory",
        students_table_name="students",
        create_malformed_status=create_malformed_status,
        allowed_origins=[],
        app_version="0.1.0",
    )


class FailingStorage(StudentStorage):
    """Gateway whose every operation fails, as a broken database would."""

    def __init__(self, message: str = "database is locked") -> None:
        self.message = message

    def create_student(self, name: str, email: str, age: int) -> int:
        raise StorageError(self.message)

    def get_student_by_id(self, student_id: int) -> Student:
        raise StorageError(self.message)

    def get_list(self) -> list[Student]:
        raise StorageError(self.message)

    def update_by_id(self, student_id: int, name: str, email: str, age: int) -> Student:
        raise StorageError(self.message)

    def delete_by_id(self, student_id: int) -> int:
        raise StorageError(self.message)

    def ping(self) -> bool:
        return False


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    storage: StudentStorage | None = None,
    raise_server_exceptions: bool = True,
) -> Iterator[TestClient]:
    """Yield a TestClient for a fresh app with scoped dependency overrides."""

    resolved_config = config or build_test_config()
    resolved_storage = storage if storage is not None else InMemoryStudentStorage()

    app = create_app(resolved_config)
    app.dependency_overrides[get_student_storage] = lambda: resolved_storage

    try:
        with TestClient(app, raise_server_exceptions=raise_server_exceptions) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
