# This file defines response schemas for health and readiness endpoints.
# It exists to keep operational status contracts explicit for platform consumers.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    request_id: str
    status: str
    environment: str
    service_name: str
    app_version: str
    timestamp: datetime


class ReadinessResponse(BaseModel):
    request_id: str
    ready: bool
    storage: str
    timestamp: datetime
