"""Exceptions raised at the provider gateway boundary."""

from http import HTTPStatus

from src.exceptions import ServiceError


class ProviderError(ServiceError):
    """Base exception for provider-side failures."""

    status_code = HTTPStatus.BAD_GATEWAY
    default_error_code = "PROVIDER_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        operation: str | None = None,
        provider_status: int | None = None,
        provider_code: int | None = None,
    ):
        """
        Initialize provider error.

        Args:
            message: Error message
            error_code: Optional machine-readable code
            operation: Gateway operation that failed (e.g. "create_brand_registration")
            provider_status: HTTP status returned by the provider, if any
            provider_code: Provider-specific error code (Twilio "code"), if any
        """
        super().__init__(message, error_code)
        self.operation = operation
        self.provider_status = provider_status
        self.provider_code = provider_code


class ProviderUnavailableError(ProviderError):
    """The gateway is not configured (e.g. missing credentials)."""

    status_code = HTTPStatus.SERVICE_UNAVAILABLE
    default_error_code = "PROVIDER_UNAVAILABLE"

    def __init__(self, message: str = "Twilio not configured.", operation: str | None = None):
        super().__init__(message, operation=operation)


class RemoteCallFailedError(ProviderError):
    """A call to the provider was attempted and did not succeed."""

    default_error_code = "REMOTE_CALL_FAILED"


class ProviderNotFoundError(RemoteCallFailedError):
    """The provider reported the resource as not found or unsupported."""

    default_error_code = "PROVIDER_NOT_FOUND"


class ProviderTimeoutError(RemoteCallFailedError):
    """The provider did not answer within the configured timeout."""

    default_error_code = "PROVIDER_TIMEOUT"

    def __init__(
        self,
        message: str = "Provider request timed out",
        operation: str | None = None,
        timeout_duration: float | None = None,
    ):
        super().__init__(message, operation=operation)
        self.timeout_duration = timeout_duration
