"""
Error taxonomy - every failure the API reports maps to one of these.
Handlers in main.py render them as the failure envelope {success: false, message, errors?}.
"""


class ApiError(Exception):
    """Base for errors that carry their own HTTP status and client message."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationFailed(ApiError):
    """One or more field rules violated. Carries the full list, never just the first."""

    status_code = 400

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = list(errors or [])


class NotFound(ApiError):
    status_code = 404


class Conflict(ApiError):
    status_code = 409


class MalformedBody(ApiError):
    """Body is not valid JSON."""

    status_code = 400


class PayloadTooLarge(ApiError):
    status_code = 413


# Repository-level conditions. Services translate these into ApiErrors.


class DuplicateEmailError(Exception):
    """Unique constraint on users.email was violated."""


class NoFieldsToUpdateError(Exception):
    """Task update called with an empty change set."""
