class AppError(Exception):
    """Base error carrying the HTTP status the API layer should answer with."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(AppError):
    status_code = 404


class ForbiddenError(AppError):
    status_code = 403


class InvalidArgumentError(AppError):
    status_code = 400


class ConflictError(AppError):
    status_code = 409
