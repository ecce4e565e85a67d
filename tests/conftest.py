"""
Shared test configuration.
It asserts expected behavior and guards against regressions in the corresponding component.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

DEFAULT_TEST_ENV = {
    "PROJECT_NAME": "student-records-test",
    "ENV": "test",
    "LOG_LEVEL": "INFO",
    "API_STORAGE_BACKEND": "memory",
    "DATABASE_URL": "sqlite://",
}

# `student_service.api.app` builds its app at import time, before fixtures run
for _key, _value in DEFAULT_TEST_ENV.items():
    os.environ.setdefault(_key, _value)


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure required environment variables are present during tests."""

    for key, value in DEFAULT_TEST_ENV.items():
        if os.getenv(key) is None:
            monkeypatch.setenv(key, value)
