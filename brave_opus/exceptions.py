"""Custom exception classes for the Anthropic and Brave API clients."""

from typing import Any, Optional


class ClientError(Exception):
    """Base exception class for all client errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause


class ConfigurationError(ClientError):
    """Raised when there are configuration-related errors."""

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        field: Optional[str] = None,
    ):
        super().__init__(message)
        self.config_file = config_file
        self.field = field


class ApiError(ClientError):
    """Raised when a remote API answers with an error."""

    def __init__(
        self,
        provider: str,
        message: str,
        status: Optional[int] = None,
        body: Optional[Any] = None,
        cause: Optional[Exception] = None,
    ):
        prefix = f"[{provider}] HTTP {status}: " if status else f"[{provider}] "
        super().__init__(f"{prefix}{message}", cause)
        self.provider = provider
        self.status = status
        self.body = body


class AuthenticationError(ApiError):
    """Raised when the API key or subscription token is rejected."""


class NotFoundError(ApiError):
    """Raised when the requested resource or model does not exist."""


class RateLimitError(ApiError):
    """Raised when rate limits are exceeded."""

    def __init__(
        self,
        provider: str,
        message: str = "Rate limit exceeded",
        status: Optional[int] = 429,
        body: Optional[Any] = None,
        retry_after: Optional[int] = None,
    ):
        super().__init__(provider, message, status, body)
        self.retry_after = retry_after


class ServerError(ApiError):
    """Raised for 5xx answers."""


class StreamApiError(ApiError):
    """Raised when the server sends an ``error`` event in the middle of a stream."""

    def __init__(self, provider: str, error_type: str, message: str):
        super().__init__(provider, f"{error_type}: {message}")
        self.error_type = error_type


class TransportError(ClientError):
    """Raised when the connection fails or breaks mid-response."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(f"Transport error: {message}", cause)


class RequestTimeoutError(TransportError):
    """Raised when requests timeout."""

    def __init__(
        self,
        message: str = "Request timed out",
        timeout_seconds: Optional[float] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause)
        self.timeout_seconds = timeout_seconds


class ResponseValidationError(ClientError):
    """Raised when a response body does not have the expected shape."""

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        response_data: Optional[Any] = None,
        field_errors: Optional[dict[str, str]] = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.response_data = response_data
        self.field_errors = field_errors or {}

    def add_field_error(self, field_name: str, error_message: str) -> None:
        """Add a field-specific validation error."""
        self.field_errors[field_name] = error_message

    def get_detailed_message(self) -> str:
        """Get the error message followed by one line per failed field.

        Returns:
          Detailed error message
        """
        details = [str(self)]

        if self.provider:
            details.append(f"Provider: {self.provider}")

        if self.field_errors:
            details.append("Field validation errors:")
            for field, error in self.field_errors.items():
                details.append(f"  - {field}: {error}")

        return "\n".join(details)


class StreamError(ClientError):
    """Base exception class for failures while decoding an event stream."""


class FramingError(StreamError):
    """Raised when buffered stream bytes are not valid UTF-8 text."""

    def __init__(self, message: str, raw: bytes = b"", cause: Optional[Exception] = None):
        super().__init__(message, cause)
        self.raw = raw


class PacketDecodeError(StreamError):
    """Raised when the payload of a known event does not match its schema."""

    def __init__(
        self,
        message: str,
        event_name: str,
        raw_data: str,
        field_errors: Optional[dict[str, str]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(f"Cannot decode '{event_name}' event: {message}", cause)
        self.event_name = event_name
        self.raw_data = raw_data
        self.field_errors = field_errors or {}


class UnexpectedEndOfStreamError(StreamError):
    """Raised when the byte stream closes before the terminal event."""

    def __init__(self, message: str = "Stream closed before message_stop"):
        super().__init__(message)
