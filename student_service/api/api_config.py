# This file defines runtime settings for the API layer in one place.
# It exists so the storage backend, network binding, and error-status policy can change without code edits.
# The config loader reads environment variables and applies defaults suited to local development.
# It also validates the table name so it is safe to interpolate into SQL.

from __future__ import annotations

import os
import re
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

StorageBackend = Literal["sql", "memory"]


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    api_name: str = "Student Records API"
    host: str = "127.0.0.1"
    port: int = 8082
    environment: str = "local"
    database_url: str = "sqlite:///storage/storage.db"
    storage_backend: StorageBackend = "sql"
    students_table_name: str = "students"
    create_malformed_status: int = 502
    allowed_origins: list[str] = Field(default_factory=list)
    app_version: str = "0.1.0"

    @field_validator("students_table_name")
    @classmethod
    def validate_identifier(cls, value: str) -> str:
        if not _IDENTIFIER_RE.match(value):
            raise ValueError(f"Unsafe SQL identifier: {value!r}")
        return value

    @field_validator("port")
    @classmethod
    def validate_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError("port must be between 1 and 65535.")
        return value

    @field_validator("create_malformed_status")
    @classmethod
    def validate_error_status(cls, value: int) -> int:
        if not 400 <= value <= 599:
            raise ValueError("create_malformed_status must be an HTTP error status (400-599).")
        return value


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and process environment."""

    if load_env:
        load_dotenv()

    config_values: dict[str, object] = {
        "api_name": os.getenv("API_NAME", "Student Records API"),
        "host": os.getenv("API_HOST", "127.0.0.1"),
        "port": _env_int("API_PORT", 8082),
        "environment": os.getenv("ENV", "local"),
        "database_url": os.getenv("DATABASE_URL", "sqlite:///storage/storage.db"),
        "storage_backend": os.getenv("API_STORAGE_BACKEND", "sql").strip().lower(),
        "students_table_name": os.getenv("API_STUDENTS_TABLE_NAME", "students"),
        "create_malformed_status": _env_int("API_CREATE_MALFORMED_STATUS", 502),
        "allowed_origins": _env_list("API_ALLOWED_ORIGINS", []),
        "app_version": os.getenv("APP_VERSION", "0.1.0"),
    }
    if config_values["storage_backend"] == "sql" and not config_values["database_url"]:
        raise RuntimeError("DATABASE_URL is required when API_STORAGE_BACKEND=sql.")

    return ApiConfig.model_validate(config_values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Cached accessor for API config."""

    return load_api_config()
