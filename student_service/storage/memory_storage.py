"""In-memory student storage, used for local runs and tests."""

from __future__ import annotations

import threading

from student_service.api.schemas.student_schemas import Student
from student_service.storage.base import StudentNotFoundError, StudentStorage


class InMemoryStudentStorage(StudentStorage):
    """
    Dict-backed gateway.

    Ids start at 1 and are never reused, even after a delete.
    Records are lost when the process exits.
    """

    def __init__(self) -> None:
        self._students: dict[int, Student] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def create_student(self, name: str, email: str, age: int) -> int:
        with self._lock:
            student_id = self._next_id
            self._next_id += 1
            self._students[student_id] = Student(id=student_id, name=name, email=email, age=age)
        return student_id

    def get_student_by_id(self, student_id: int) -> Student:
        with self._lock:
            student = self._students.get(student_id)
        if student is None:
            raise StudentNotFoundError(student_id)
        return student

    def get_list(self) -> list[Student]:
        with self._lock:
            return [self._students[key] for key in sorted(self._students)]

    def update_by_id(self, student_id: int, name: str, email: str, age: int) -> Student:
        with self._lock:
            if student_id not in self._students:
                raise StudentNotFoundError(student_id)
            updated = Student(id=student_id, name=name, email=email, age=age)
            self._students[student_id] = updated
        return updated

    def delete_by_id(self, student_id: int) -> int:
        with self._lock:
            if self._students.pop(student_id, None) is None:
                raise StudentNotFoundError(student_id)
        return student_id
