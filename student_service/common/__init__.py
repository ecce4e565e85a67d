"""
Shared runtime helpers for settings and logging.
They are used by the API layer and the command-line entrypoint alike.
"""
