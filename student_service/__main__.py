"""Run the student records API with uvicorn.

Usage:
    python -m student_service
    python -m student_service --port 9000 --reload
"""

from __future__ import annotations

import argparse

import uvicorn

from student_service.api.api_config import get_api_config


def main() -> None:
    config = get_api_config()

    parser = argparse.ArgumentParser(description="Run the student records API")
    parser.add_argument("--host", default=config.host, help=f"Bind host (default: {config.host})")
    parser.add_argument("--port", type=int, default=config.port, help=f"Bind port (default: {config.port})")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    uvicorn.run("student_service.api.app:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
