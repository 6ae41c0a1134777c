# taskexchange/core/exceptions.py


class TaskExchangeError(Exception):
    """Base class for business-rule failures; carries the HTTP status to answer with."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TaskExchangeError):
    status_code = 404


class ForbiddenError(TaskExchangeError):
    status_code = 403


class ValidationError(TaskExchangeError):
    status_code = 400


class ConflictError(TaskExchangeError):
    status_code = 400


class InvalidStateError(ConflictError):
    """A lifecycle precondition does not hold for the task's current state."""
