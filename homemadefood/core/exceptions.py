"""Application error taxonomy.

Services raise these; ``main.py`` renders them as ``{statusCode, message, error}``.
"""


class AppError(Exception):
    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400
    error = "Bad Request"


class UnauthorizedError(AppError):
    status_code = 401
    error = "Unauthorized"


class ForbiddenError(AppError):
    status_code = 403
    error = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    error = "Not Found"


class ConflictError(AppError):
    status_code = 409
    error = "Conflict"


class PersistenceError(AppError):
    """A write failed at the storage layer and was rolled back."""
    status_code = 500
    error = "Internal Server Error"


class ExternalProviderError(AppError):
    """An outbound AI/recipe call failed. Recovered by the fallback chain."""
    status_code = 502
    error = "Bad Gateway"

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
