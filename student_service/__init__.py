"""
Package marker for the student records service.
It groups related modules under a stable import path and keeps package boundaries explicit.
Most functionality lives in the `api`, `storage`, and `common` subpackages.
"""
