from abc import ABC


class TaskNestError(ABC, Exception):
    """Failure whose message is written for the person using the app.

    The facade turns these into error notifications verbatim, so messages
    name the problem in plain words and never echo passwords or hashes.
    """


class NotFoundError(TaskNestError):
    """No task with the given id is visible to the current user."""

    def __init__(self, message: str = "Task not found") -> None:
        super().__init__(message)


class AuthenticationError(TaskNestError):
    """A task page was opened while nobody is logged in."""

    def __init__(self, message: str = "Please log in to continue") -> None:
        super().__init__(message)


class ValidationError(TaskNestError):
    """Task input was rejected, e.g. a title shorter than three characters."""
