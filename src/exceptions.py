"""
Domain exceptions shared by the compliance, porting and forwarding services.

Each exception carries the HTTP status it is rendered with by the
application-level handler in ``src.main``.
"""

from http import HTTPStatus


class ServiceError(Exception):
    """Base exception for caller-visible service errors."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    default_error_code: str = "SERVICE_ERROR"

    def __init__(self, message: str, error_code: str | None = None):
        """
        Initialize service error.

        Args:
            message: User-facing error message
            error_code: Optional machine-readable code (defaults per subclass)
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"


class InvalidInputError(ServiceError):
    """Request shape or content the caller can correct."""

    status_code = HTTPStatus.BAD_REQUEST
    default_error_code = "INVALID_INPUT"


class NotAuthorizedError(ServiceError):
    """Forwarding destination is not on the organization's approved list."""

    status_code = HTTPStatus.FORBIDDEN
    default_error_code = "NOT_AUTHORIZED"


class NotFoundError(ServiceError):
    """Tenant-scoped record does not exist."""

    status_code = HTTPStatus.NOT_FOUND
    default_error_code = "NOT_FOUND"


class ConflictError(ServiceError):
    """A concurrent write won a uniqueness race."""

    status_code = HTTPStatus.CONFLICT
    default_error_code = "CONFLICT"


class BrandNotRegisteredError(ServiceError):
    """Campaign registration attempted before any brand was registered."""

    status_code = HTTPStatus.BAD_REQUEST
    default_error_code = "BRAND_NOT_REGISTERED"

    def __init__(self, message: str = "Register your brand first"):
        super().__init__(message)


class BrandNotApprovedError(ServiceError):
    """Campaign registration attempted while the brand is not yet approved."""

    status_code = HTTPStatus.BAD_REQUEST
    default_error_code = "BRAND_NOT_APPROVED"

    def __init__(
        self,
        message: str = (
            "Your brand registration is still pending. "
            "Campaign creation requires an approved brand."
        ),
    ):
        super().__init__(message)


class MissingRequestIdError(ServiceError):
    """Provider webhook payload did not identify the port request."""

    status_code = HTTPStatus.BAD_REQUEST
    default_error_code = "MISSING_REQUEST_ID"

    def __init__(self, message: str = "Missing PortRequestSid"):
        super().__init__(message)
