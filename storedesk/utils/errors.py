"""
Application errors.

Every error the API reports to clients derives from AppError and carries
the HTTP status code it maps to. Anything else reaching the HTTP layer is
treated as an unexpected failure (500).
"""


class AppError(Exception):
    """Base error with an HTTP status and a client-safe message."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    def __init__(self, message: str):
        super().__init__(400, message)


class NotFoundError(AppError):
    def __init__(self, message: str):
        super().__init__(404, message)


class DatabaseError(AppError):
    def __init__(self, message: str):
        super().__init__(500, message)
