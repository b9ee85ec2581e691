"""Client for the Anthropic Messages API."""

from .client import AnthropicClient, Auth
from .models import Content, Message, MessageBody, MessageResponse, Role
from .streaming import StreamEvent, TextDelta

__all__ = [
    "AnthropicClient",
    "Auth",
    "Content",
    "Message",
    "MessageBody",
    "MessageResponse",
    "Role",
    "StreamEvent",
    "TextDelta",
]
