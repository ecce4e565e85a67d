"""
Storage gateways for student records.
The API depends only on `StudentStorage`; concrete backends are chosen by configuration.
"""

from student_service.storage.base import StorageError, StudentNotFoundError, StudentStorage
from student_service.storage.memory_storage import InMemoryStudentStorage
from student_service.storage.sql_storage import SqlStudentStorage

__all__ = [
    "InMemoryStudentStorage",
    "SqlStudentStorage",
    "StorageError",
    "StudentNotFoundError",
    "StudentStorage",
]
