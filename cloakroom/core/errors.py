"""Application errors and their HTTP status codes.

Services raise these; ``cloakroom.main`` renders them as JSON.
"""


class AppError(Exception):
    """Base class for application errors."""

    status_code = 400
    code = "error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        super().__init__(message or self.__class__.__doc__)
        if status_code is not None:
            self.status_code = status_code

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(AppError):
    """Invalid input."""

    status_code = 422
    code = "validation_error"


class NotFoundError(AppError):
    """Resource not found."""

    status_code = 404
    code = "not_found"


class AlreadyClosedError(AppError):
    """Ticket already closed."""

    status_code = 409
    code = "already_closed"


class GenerationExhaustedError(AppError):
    """Could not issue a unique ticket token."""

    status_code = 500
    code = "generation_exhausted"


def to_payload(error: AppError) -> dict:
    return {"detail": error.message, "code": error.code}


__all__ = [
    "AppError",
    "ValidationError",
    "NotFoundError",
    "AlreadyClosedError",
    "GenerationExhaustedError",
    "to_payload",
]
