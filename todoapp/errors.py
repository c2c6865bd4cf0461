"""Error types raised by the task store and mapped to HTTP responses."""

from fastapi import status


class TaskError(Exception):
    """Base class for errors reported to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        """Use the class default detail unless a specific one is given."""
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class InvalidTaskId(TaskError):
    """The path identifier is not a well-formed ObjectId."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid task ID format"


class EmptyTaskText(TaskError):
    """Create request without usable task text."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Task text cannot be empty"


class NoUpdateFields(TaskError):
    """Update request that supplies neither text nor completed."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "No update fields provided"


class TaskNotFound(TaskError):
    """A well-formed identifier that matches no stored task."""

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Task not found"


class StoreNotReady(TaskError):
    """No store connection has been attached to the application yet."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    detail = "Database not initialized"


class StoreFailure(TaskError):
    """An operation against an established store connection failed.

    The detail is a generic message; the driver error is only logged.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Database error"
