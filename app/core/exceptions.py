"""Application error taxonomy.

Raised by the core and the API layer; rendered by the AppError handler in
app.main as ``{"error": message}`` with the error's status code.
"""


class AppError(Exception):
    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InputError(AppError):
    """A required request field is missing or empty."""

    status_code = 400


class ConfigError(AppError):
    """The operator has not configured something the operation needs."""

    status_code = 400
