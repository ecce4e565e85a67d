# This file defines the CRUD endpoints for student records.
# Each operation decodes its input, validates it, calls the storage gateway once, and writes one response.
# Failures are raised as tagged RequestFailure values and written by the registered error handlers.
# The gateway is synchronous, so calls run in the threadpool while the handler awaits the single result.

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Annotated, TypeVar

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from student_service.api.decoding import decode_student_body, parse_student_id
from student_service.api.dependencies import get_student_storage, get_student_validator
from student_service.api.error_handlers import Operation, RequestFailure
from student_service.api.response_envelope import write_json
from student_service.api.schemas.student_schemas import (
    Student,
    StudentCreatedResponse,
    StudentDeletedResponse,
)
from student_service.api.validation import StudentValidator, ValidatedStudent
from student_service.storage.base import StorageError, StudentStorage

LOGGER = logging.getLogger(__name__)

router = APIRouter(prefix="/students", tags=["students"])
StorageDep = Annotated[StudentStorage, Depends(get_student_storage)]
ValidatorDep = Annotated[StudentValidator, Depends(get_student_validator)]

T = TypeVar("T")


async def _call_storage(operation: Operation, func: Callable[..., T], *args: object) -> T:
    try:
        return await run_in_threadpool(func, *args)
    except StorageError as exc:
        LOGGER.error("storage %s failed: %s", operation.value, exc)
        raise RequestFailure.storage_failure(operation, exc) from exc


async def _read_valid_student(
    request: Request,
    validator: StudentValidator,
    operation: Operation,
) -> ValidatedStudent:
    payload = decode_student_body(await request.body(), operation=operation)
    result = validator.validate(payload)
    if result.student is None:
        raise RequestFailure.validation_failed(operation, result.violations)
    return result.student


@router.post("", status_code=201, response_model=StudentCreatedResponse)
async def create_student(
    request: Request,
    storage: StorageDep,
    validator: ValidatorDep,
) -> JSONResponse:
    LOGGER.info("creating student")
    student = await _read_valid_student(request, validator, Operation.CREATE)

    student_id = await _call_storage(
        Operation.CREATE,
        storage.create_student,
        student.name,
        student.email,
        student.age,
    )
    LOGGER.info("student created id=%s", student_id)
    return write_json(201, StudentCreatedResponse(id=student_id))


@router.get("", response_model=list[Student])
async def get_student_list(storage: StorageDep) -> JSONResponse:
    LOGGER.info("getting all students")
    students = await _call_storage(Operation.GET_LIST, storage.get_list)
    return write_json(200, students)


@router.get("/{student_id}", response_model=Student)
async def get_student(student_id: str, storage: StorageDep) -> JSONResponse:
    LOGGER.info("getting student id=%s", student_id)
    parsed_id = parse_student_id(student_id, operation=Operation.GET)

    student = await _call_storage(Operation.GET, storage.get_student_by_id, parsed_id)
    return write_json(200, student)


@router.put("/{student_id}", response_model=Student)
async def update_student(
    student_id: str,
    request: Request,
    storage: StorageDep,
    validator: ValidatorDep,
) -> JSONResponse:
    LOGGER.info("updating student id=%s", student_id)
    parsed_id = parse_student_id(student_id, operation=Operation.UPDATE)
    student = await _read_valid_student(request, validator, Operation.UPDATE)

    updated = await _call_storage(
        Operation.UPDATE,
        storage.update_by_id,
        parsed_id,
        student.name,
        student.email,
        student.age,
    )
    return write_json(200, updated)


@router.delete("/{student_id}", response_model=StudentDeletedResponse)
async def delete_student(student_id: str, storage: StorageDep) -> JSONResponse:
    LOGGER.info("deleting student id=%s", student_id)
    parsed_id = parse_student_id(student_id, operation=Operation.DELETE)

    deleted_id = await _call_storage(Operation.DELETE, storage.delete_by_id, parsed_id)
    return write_json(200, StudentDeletedResponse(deleted_id=deleted_id))
