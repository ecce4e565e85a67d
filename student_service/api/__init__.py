# This file marks the API package for the HTTP layer of the student service.
# The application object itself lives in `student_service.api.app`.
