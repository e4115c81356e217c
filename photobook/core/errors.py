"""Domain errors raised by the scheduling services.

Each error carries the HTTP status the API layer answers with; services never
build HTTP responses themselves.
"""

from fastapi import status


class SchedulingError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(SchedulingError):
    status_code = status.HTTP_400_BAD_REQUEST


class SchedulingConflictError(SchedulingError):
    status_code = status.HTTP_409_CONFLICT

    def __init__(
        self,
        message: str = "The photographer is already booked for this time slot.",
    ) -> None:
        super().__init__(message)


class NotFoundError(SchedulingError):
    status_code = status.HTTP_404_NOT_FOUND


class ForbiddenError(SchedulingError):
    status_code = status.HTTP_403_FORBIDDEN


class InvalidTransitionError(SchedulingError):
    status_code = status.HTTP_409_CONFLICT
