# This file provides dependency factories for FastAPI routes.
# The storage gateway and validator are built once per app and shared by every request.
# Tests swap any of them through `app.dependency_overrides`.

from __future__ import annotations

from fastapi import Request

from student_service.api.api_config import ApiConfig
from student_service.api.validation import StudentValidator
from student_service.storage import InMemoryStudentStorage, SqlStudentStorage, StudentStorage


def build_student_storage(config: ApiConfig) -> StudentStorage:
    if config.storage_backend == "memory":
        return InMemoryStudentStorage()
    return SqlStudentStorage(
        database_url=config.database_url,
        table_name=config.students_table_name,
    )


def get_student_storage(request: Request) -> StudentStorage:
    return request.app.state.student_storage


def get_student_validator(request: Request) -> StudentValidator:
    return request.app.state.student_validator


def get_config(request: Request) -> ApiConfig:
    return request.app.state.api_config
