"""Error taxonomy shared by services and routes.

Each error is an ``HTTPException`` so services can raise them directly and the
global handler renders them as ``{"error": <message>}`` with the right status.
"""

from fastapi import HTTPException


class AppError(HTTPException):
    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        super().__init__(status_code=self.status_code, detail=message or self.default_message)

    @property
    def message(self) -> str:
        return self.detail


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request."


class Unauthorized(AppError):
    status_code = 401
    default_message = "Authentication required."


class Forbidden(AppError):
    status_code = 403
    default_message = "Admin privileges required."


class NotFound(AppError):
    status_code = 404
    default_message = "Not found."


class Conflict(AppError):
    status_code = 409
    default_message = "Resource already exists."


class PayloadTooLarge(AppError):
    status_code = 413
    default_message = "Payload too large."


class MalformedData(AppError):
    status_code = 500
    default_message = "Stored data could not be parsed."
