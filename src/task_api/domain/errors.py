"""Error hierarchy for the task API.

Every error carries a client-safe message and the HTTP status it maps to.
The global handlers in app/error_handlers.py render them as {"error": message}.
"""


class TaskApiError(Exception):
    """Base exception for all task API failures."""

    def __init__(self, message: str, http_status: int = 500):
        super().__init__(message)
        self.message = message
        self.http_status = http_status

    def to_response(self) -> dict:
        return {"error": self.message}


class ValidationError(TaskApiError):
    """Input failed validation before reaching storage."""

    def __init__(self, message: str):
        super().__init__(message, 400)


class NotFoundError(TaskApiError):
    """Referenced task id does not exist."""

    def __init__(self, message: str = "Task not found"):
        super().__init__(message, 404)


class StorageError(TaskApiError):
    """Storage engine operation failed."""

    def __init__(self, message: str, operation: str, http_status: int = 500):
        super().__init__(message, http_status)
        self.operation = operation
