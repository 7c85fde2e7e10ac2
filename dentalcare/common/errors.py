# dentalcare/common/errors.py
"""Domain error taxonomy shared by every lifecycle manager.

Each error carries a machine-readable ``kind`` and the HTTP status the API layer
renders it with. Only ``StoreUnavailable`` is safe for a caller to retry.
"""

from typing import Optional


class ClinicError(Exception):
    kind = "error"
    status_code = 500
    retryable = False
    default_message = "Something went wrong."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(ClinicError):
    kind = "validation_failed"
    status_code = 422
    default_message = "The request contains invalid data."


class InvalidReference(ClinicError):
    kind = "invalid_reference"
    status_code = 400
    default_message = "A referenced record does not exist or is inactive."


class InvalidSchedule(ClinicError):
    kind = "invalid_schedule"
    status_code = 400
    default_message = "The requested time is outside working hours."


class Conflict(ClinicError):
    kind = "conflict"
    status_code = 409
    default_message = "The record conflicts with an existing one."


class Forbidden(ClinicError):
    kind = "forbidden"
    status_code = 403
    default_message = "Not authorized to perform this action."


class NotFound(ClinicError):
    kind = "not_found"
    status_code = 404
    default_message = "Record not found."


class StoreUnavailable(ClinicError):
    kind = "store_unavailable"
    status_code = 503
    retryable = True
    default_message = "The database is currently unavailable."
