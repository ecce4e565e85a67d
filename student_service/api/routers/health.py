# This file defines liveness and readiness endpoints for API operations.
# Readiness asks the storage gateway whether its backend is reachable.

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from student_service.api.api_config import ApiConfig
from student_service.api.dependencies import get_config, get_student_storage
from student_service.api.schemas.health_schemas import HealthResponse, ReadinessResponse
from student_service.storage.base import StudentStorage

router = APIRouter(tags=["health"])
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
StorageDep = Annotated[StudentStorage, Depends(get_student_storage)]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@router.get("/health", response_model=HealthResponse)
def health(request: Request, config: ConfigDep) -> dict[str, object]:
    return {
        "request_id": request.state.request_id,
        "status": "ok",
        "environment": config.environment,
        "service_name": config.api_name,
        "app_version": config.app_version,
        "timestamp": _utc_now(),
    }


@router.get("/ready", response_model=ReadinessResponse)
async def ready(request: Request, storage: StorageDep) -> dict[str, object]:
    storage_ready = await run_in_threadpool(storage.ping)
    return {
        "request_id": request.state.request_id,
        "ready": storage_ready,
        "storage": "reachable" if storage_ready else "unreachable",
        "timestamp": _utc_now(),
    }
