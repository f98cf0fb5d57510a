"""
Error taxonomy shared by the API layer.

Each ``AppError`` carries the HTTP status it maps to; the handler registered
in ``app.main`` renders it as ``{"message": ...}``.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that terminate a request with a known status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, headers: dict[str, str] | None = None):
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or invalid input, or a duplicate identity."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthenticationError(AppError):
    """Bad credentials or no credentials at all."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class AuthorizationError(AppError):
    """Credential present but not acceptable for this route."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class UpstreamError(Exception):
    """
    An external labor-market service failed.

    Never reaches a client: the service layer logs it and substitutes an
    estimate with the same shape as a successful response.
    """

    def __init__(self, service: str, detail: str):
        self.service = service
        self.detail = detail
        super().__init__(f"{service}: {detail}")
