# This file builds the FastAPI application and registers all API routers.
# It exists so startup behavior, middleware, and error handling are configured in one place.
# The app adds request IDs, timing headers, and Prometheus request metrics for operations visibility.
# Config, validator, storage, and error classifier live on app state and are shared by every request.

from __future__ import annotations

import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import RequestResponseEndpoint

from student_service.api.api_config import ApiConfig, get_api_config
from student_service.api.dependencies import build_student_storage
from student_service.api.error_handlers import ErrorClassifier, register_error_handlers
from student_service.api.routers.health import router as health_router
from student_service.api.routers.students import router as students_router
from student_service.api.validation import StudentValidator
from student_service.common.logging import configure_logging

API_HTTP_REQUESTS_TOTAL = Counter(
    "api_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "api_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "api_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method"],
)


def _route_label(request: Request) -> str:
    # templated path keeps label cardinality bounded (/students/{student_id}, not one per id)
    route = request.scope.get("route")
    return str(getattr(route, "path", "unmatched"))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    app.state.student_storage = build_student_storage(app.state.api_config)
    yield


def create_app(config: ApiConfig | None = None) -> FastAPI:
    """Create configured FastAPI application instance."""

    configure_logging()
    resolved_config = config or get_api_config()

    app = FastAPI(
        title=resolved_config.api_name,
        description="CRUD API for student records with a uniform JSON error envelope.",
        version=resolved_config.app_version,
        openapi_tags=[
            {"name": "health", "description": "Service liveness and readiness."},
            {"name": "students", "description": "Create, read, update, and delete student records."},
        ],
        lifespan=lifespan,
    )
    app.state.api_config = resolved_config
    app.state.student_validator = StudentValidator()
    app.state.error_classifier = ErrorClassifier(
        create_malformed_status=resolved_config.create_malformed_status,
    )

    if resolved_config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=resolved_config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"
            return response
        finally:
            duration_s = time.perf_counter() - started
            path_label = _route_label(request)
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(students_router)

    return app


app = create_app()
