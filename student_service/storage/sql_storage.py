# This file implements the student storage gateway on top of SQLAlchemy.
# SQLite is the default backend, but any SQLAlchemy URL with RETURNING support works.
# Queries are parameterized and the table name is checked against a safe identifier pattern.
# Driver errors are wrapped in StorageError so handlers never see backend-specific exceptions.

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from sqlalchemy import Column, Integer, MetaData, String, Table, create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from student_service.api.schemas.student_schemas import Student
from student_service.storage.base import StorageError, StudentNotFoundError, StudentStorage

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


def _validate_identifier(identifier: str) -> str:
    if not _IDENTIFIER_RE.match(identifier):
        raise ValueError(f"Unsafe SQL identifier: {identifier!r}")
    return identifier


def _build_engine(database_url: str) -> Engine:
    url = make_url(database_url)
    if not url.drivername.startswith("sqlite"):
        return create_engine(database_url, pool_pre_ping=True, future=True)

    connect_args = {"check_same_thread": False}
    if url.database in (None, "", ":memory:"):
        # an in-memory database lives on one connection, so every checkout must reuse it
        return create_engine(
            database_url,
            connect_args=connect_args,
            poolclass=StaticPool,
            future=True,
        )

    Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(database_url, connect_args=connect_args, future=True)


class SqlStudentStorage(StudentStorage):
    """SQLAlchemy-backed student gateway."""

    def __init__(self, *, database_url: str, table_name: str = "students") -> None:
        self._table_name = _validate_identifier(table_name)
        self._engine: Engine = _build_engine(database_url)
        self._table = Table(
            self._table_name,
            MetaData(),
            Column("id", Integer, primary_key=True, autoincrement=True),
            Column("name", String(255), nullable=False),
            Column("email", String(255), nullable=False),
            Column("age", Integer, nullable=False),
            sqlite_autoincrement=True,
        )
        self._ensure_schema()

    def ping(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    def create_student(self, name: str, email: str, age: int) -> int:
        query = f"""
        INSERT INTO {self._table_name} (name, email, age)
        VALUES (:name, :email, :age)
        RETURNING id
        """
        row = self._write_one(query, {"name": name, "email": email, "age": age})
        if row is None:
            raise StorageError("insert did not return a student id")
        return int(row["id"])

    def get_student_by_id(self, student_id: int) -> Student:
        query = f"""
        SELECT id, name, email, age
        FROM {self._table_name}
        WHERE id = :id
        """
        row = self._fetch_one(query, {"id": student_id})
        if row is None:
            raise StudentNotFoundError(student_id)
        return Student.model_validate(row)

    def get_list(self) -> list[Student]:
        query = f"""
        SELECT id, name, email, age
        FROM {self._table_name}
        ORDER BY id ASC
        """
        return [Student.model_validate(row) for row in self._fetch_all(query)]

    def update_by_id(self, student_id: int, name: str, email: str, age: int) -> Student:
        query = f"""
        UPDATE {self._table_name}
        SET name = :name, email = :email, age = :age
        WHERE id = :id
        RETURNING id, name, email, age
        """
        row = self._write_one(query, {"id": student_id, "name": name, "email": email, "age": age})
        if row is None:
            raise StudentNotFoundError(student_id)
        return Student.model_validate(row)

    def delete_by_id(self, student_id: int) -> int:
        query = f"""
        DELETE FROM {self._table_name}
        WHERE id = :id
        RETURNING id
        """
        row = self._write_one(query, {"id": student_id})
        if row is None:
            raise StudentNotFoundError(student_id)
        return int(row["id"])

    def _ensure_schema(self) -> None:
        try:
            self._table.create(self._engine, checkfirst=True)
        except SQLAlchemyError as exc:
            raise StorageError(f"failed to prepare table {self._table_name}: {exc}") from exc

    def _fetch_all(self, query: str, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        try:
            with self._engine.connect() as connection:
                rows = connection.execute(text(query), dict(params or {})).mappings().all()
        except (SQLAlchemyError, OverflowError) as exc:
            raise StorageError(str(exc)) from exc
        return [dict(row) for row in rows]

    def _fetch_one(self, query: str, params: Mapping[str, Any] | None = None) -> dict[str, Any] | None:
        try:
            with self._engine.connect() as connection:
                row = connection.execute(text(query), dict(params or {})).mappings().first()
        except (SQLAlchemyError, OverflowError) as exc:
            raise StorageError(str(exc)) from exc
        return dict(row) if row is not None else None

    def _write_one(self, query: str, params: Mapping[str, Any]) -> dict[str, Any] | None:
        try:
            with self._engine.begin() as connection:
                row = connection.execute(text(query), dict(params)).mappings().first()
        except (SQLAlchemyError, OverflowError) as exc:
            raise StorageError(str(exc)) from exc
        return dict(row) if row is not None else None
