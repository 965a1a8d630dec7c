"""
Task generation error taxonomy.

Every failure the regeneration coordinator reports derives from
TaskGenerationError and carries the HTTP status the API surfaces it with.
None of these are retried.
"""
from typing import Optional


class TaskGenerationError(Exception):
    status_code: int = 500
    code: str = "task_generation_error"
    default_message: str = "Task generation failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(TaskGenerationError):
    status_code = 401
    code = "unauthenticated"
    default_message = "Could not validate credentials"


class NotFound(TaskGenerationError):
    status_code = 404
    code = "not_found"
    default_message = "Not found"


class MissingFrostDate(TaskGenerationError):
    status_code = 400
    code = "missing_frost_date"
    default_message = (
        "Last frost date not set for this season. "
        "Please set it in garden settings or your profile."
    )


class InvalidFrostDate(TaskGenerationError):
    status_code = 400
    code = "invalid_frost_date"
    default_message = "Last frost date is not a valid calendar date"


class UnexpectedFailure(TaskGenerationError):
    status_code = 500
    code = "unexpected_failure"
    default_message = "Task generation failed unexpectedly. Please try again."
