"""
Application errors for clean API error handling.

Services raise these; the API layer maps them to HTTP status codes so services
stay free of FastAPI/HTTP types.
"""


class ServiceUnavailableError(Exception):
    """Raised when a required service (e.g. the chat LLM provider) is unavailable or misconfigured."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class QuotaExceededError(Exception):
    """Raised when the LLM provider rejects a call for quota or rate-limit reasons."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidUploadError(Exception):
    """Raised when an uploaded file is missing, not an image, or too large."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InvalidRequestError(Exception):
    """Raised when a request is well-formed but its values are rejected (unknown state, missing relation)."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PermissionDeniedError(Exception):
    """Raised when the session's role may not perform the operation."""

    def __init__(self, message: str = "No autorizado") -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(Exception):
    """Raised when the addressed record does not exist."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConflictError(Exception):
    """Raised when a write clashes with existing data (duplicate email, assignment already reported)."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
