# app/services/exceptions.py
"""
Domain errors raised by the time accounting services.

Routers translate these into HTTP responses; each carries a stable ``code`` so
clients can tell bad input from a conflicting interval from a missing entity.
"""

from fastapi import HTTPException, status


class TimeTrackingError(Exception):
    code = "time_tracking_error"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid time log request"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_detail(self) -> dict:
        return {"code": self.code, "message": self.message}

    def to_http(self) -> HTTPException:
        return HTTPException(status_code=self.status_code, detail=self.to_detail())


class MissingTimeInputError(TimeTrackingError):
    code = "missing_time_input"
    default_message = "Either duration or both start/end time must be provided"


class InvalidIntervalError(TimeTrackingError):
    code = "invalid_interval"
    default_message = "End time must be after start time"


class InvalidDurationError(TimeTrackingError):
    code = "invalid_duration"
    default_message = "Duration must be greater than 0 minutes"


class NotFoundError(TimeTrackingError):
    """Entity missing or not owned by the caller; ownership mismatches land here too"""

    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"{entity} not found")


class GoalDeletionFailedError(TimeTrackingError):
    code = "goal_deletion_failed"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Failed to delete goal and related data"
