"""
Storage gateway contract consumed by the request handlers.
Implementations may be backed by a database, memory, or a remote call; callers only see this interface.
Every failure surfaces as a `StorageError` so handlers can classify it without knowing the backend.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from student_service.api.schemas.student_schemas import Student


class StorageError(Exception):
    """Opaque storage failure raised by any gateway operation."""


class StudentNotFoundError(StorageError):
    """Raised when no record exists for the requested id.

    Handlers currently treat this like any other storage failure.
    """

    def __init__(self, student_id: int) -> None:
        self.student_id = student_id
        super().__init__(f"no student found with id {student_id}")


class StudentStorage(ABC):
    """
    Persistence capability for student records.

    Each call is atomic from the caller's point of view and implementations
    must be safe for concurrent use from many request threads.
    """

    @abstractmethod
    def create_student(self, name: str, email: str, age: int) -> int:
        """Insert a record and return its newly assigned id."""

    @abstractmethod
    def get_student_by_id(self, student_id: int) -> Student:
        """Return the record with the given id."""

    @abstractmethod
    def get_list(self) -> list[Student]:
        """Return every stored record."""

    @abstractmethod
    def update_by_id(self, student_id: int, name: str, email: str, age: int) -> Student:
        """Overwrite all mutable fields and return the updated record."""

    @abstractmethod
    def delete_by_id(self, student_id: int) -> int:
        """Remove the record and return the deleted id."""

    def ping(self) -> bool:
        """Return True when the backend is reachable."""

        return True
