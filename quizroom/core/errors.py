"""
Error taxonomy shared by repositories, services and routes.

Each error carries the HTTP status and error type it is rendered with; the
application factory registers a single handler for ``QuizroomError``.
"""
from fastapi import status


class QuizroomError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type: str = "internal_error"
    default_message: str = "An internal error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(QuizroomError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error_type = "unauthorized"
    default_message = "Unauthorized"


class Forbidden(QuizroomError):
    status_code = status.HTTP_403_FORBIDDEN
    error_type = "forbidden"
    default_message = "Forbidden"


class NotFound(QuizroomError):
    status_code = status.HTTP_404_NOT_FOUND
    error_type = "not_found"
    default_message = "Not found"


class Conflict(QuizroomError):
    status_code = status.HTTP_409_CONFLICT
    error_type = "conflict"
    default_message = "Already exists"


class ValidationError(QuizroomError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_type = "validation_error"
    default_message = "Invalid request"


class Unavailable(QuizroomError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_type = "unavailable"
    default_message = "Storage is unavailable"


class StatisticsUnavailable(Unavailable):
    default_message = "Failed to fetch statistics"
