"""Async clients for the Brave Search API and Anthropic's streamed Messages API."""

from .anthropic import AnthropicClient, MessageBody, TextDelta
from .brave import BraveClient, SuggestSearchParams, WebSearchParams
from .exceptions import (
    ApiError,
    ClientError,
    ConfigurationError,
    ResponseValidationError,
    StreamError,
    TransportError,
)

__version__ = "0.1.0"

__all__ = [
    "AnthropicClient",
    "MessageBody",
    "TextDelta",
    "BraveClient",
    "WebSearchParams",
    "SuggestSearchParams",
    "ClientError",
    "ConfigurationError",
    "ApiError",
    "TransportError",
    "ResponseValidationError",
    "StreamError",
]
