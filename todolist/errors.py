"""Error taxonomy shared by the store and the HTTP layer."""

from fastapi.exceptions import RequestValidationError


class TaskError(Exception):
    """Base class for task store failures."""


class TaskValidationError(TaskError):
    """A required field is missing or blank."""


class TaskNotFoundError(TaskError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class StoreConnectionError(TaskError):
    """The database could not be reached."""


_STATUS_BY_ERROR = (
    (TaskValidationError, 400),
    (RequestValidationError, 400),
    (TaskNotFoundError, 404),
    (StoreConnectionError, 500),
)


def status_for(exc: BaseException) -> int:
    """Map an exception to the HTTP status code it is reported with."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500
