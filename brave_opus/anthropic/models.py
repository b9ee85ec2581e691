"""Request and response models for the Anthropic Messages API."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..exceptions import ResponseValidationError
from .streaming.events import Usage


class Role(str, Enum):
    """Conversational role of a message."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class Message:
    """One turn of the conversation."""

    role: Role
    content: str

    def __post_init__(self):
        self.role = Role(self.role)

    def to_dict(self) -> dict[str, Any]:
        return {"role": self.role.value, "content": self.content}


@dataclass
class MessageBody:
    """Request body of ``POST /messages``."""

    model: str
    messages: list[Message]
    max_tokens: int
    metadata: Optional[dict[str, str]] = None
    stop_sequences: Optional[list[str]] = None
    stream: Optional[bool] = None
    system: Optional[str] = None
    temperature: Optional[float] = None
    top_k: Optional[int] = None
    top_p: Optional[float] = None

    def __post_init__(self):
        """Validate request parameters after initialization."""
        if not self.model:
            raise ValueError("Model cannot be empty")

        if not self.messages:
            raise ValueError("At least one message is required")

        if self.max_tokens <= 0:
            raise ValueError("Max tokens must be positive")

        if self.temperature is not None and not (0.0 <= self.temperature <= 1.0):
            raise ValueError("Temperature must be between 0.0 and 1.0")

        if self.top_p is not None and not (0.0 <= self.top_p <= 1.0):
            raise ValueError("Top p must be between 0.0 and 1.0")

        if self.top_k is not None and self.top_k <= 0:
            raise ValueError("Top k must be positive")

        if self.stop_sequences is not None and not isinstance(
            self.stop_sequences, list
        ):
            raise ValueError("Stop sequences must be a list")

        self.messages = [
            m if isinstance(m, Message) else Message(**m) for m in self.messages
        ]

    @classmethod
    def from_prompt(cls, prompt: str, model: str, max_tokens: int, **kwargs: Any) -> "MessageBody":
        """Build a single-turn body asking ``prompt`` as the user."""
        return cls(
            model=model,
            messages=[Message(Role.USER, prompt)],
            max_tokens=max_tokens,
            **kwargs,
        )

    def to_payload(self) -> dict[str, Any]:
        """Convert to the JSON payload, omitting unset optional fields."""
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [m.to_dict() for m in self.messages],
            "max_tokens": self.max_tokens,
        }
        optional = {
            "metadata": self.metadata,
            "stop_sequences": self.stop_sequences,
            "stream": self.stream,
            "system": self.system,
            "temperature": self.temperature,
            "top_k": self.top_k,
            "top_p": self.top_p,
        }
        payload.update({k: v for k, v in optional.items() if v is not None})
        return payload


@dataclass
class Content:
    """A content block of a response."""

    type: str
    text: Optional[str] = None


@dataclass
class MessageResponse:
    """Response of a non-streamed ``POST /messages``."""

    id: str
    type: str
    role: str
    content: list[Content]
    model: str
    stop_reason: Optional[str] = None
    stop_sequence: Optional[str] = None
    usage: Usage = field(default_factory=Usage)

    @property
    def text(self) -> str:
        """Concatenated text of every text block."""
        return "".join(c.text or "" for c in self.content if c.type == "text")

    @classmethod
    def from_dict(cls, data: Any) -> "MessageResponse":
        """Build a response from the decoded JSON body.

        Raises:
          ResponseValidationError: If required fields are missing or mistyped
        """
        if not isinstance(data, dict):
            raise ResponseValidationError(
                "Response must be a JSON object", provider="anthropic", response_data=data
            )

        error = ResponseValidationError(
            "Invalid Anthropic message response", provider="anthropic", response_data=data
        )
        for key in ("id", "type", "role", "model"):
            if not isinstance(data.get(key), str):
                error.add_field_error(key, "missing or not a string")

        content = data.get("content")
        if not isinstance(content, list):
            error.add_field_error("content", "missing or not a list")
            content = []
        for i, block in enumerate(content):
            if not isinstance(block, dict) or not isinstance(block.get("type"), str):
                error.add_field_error(f"content[{i}].type", "missing or not a string")

        usage = data.get("usage")
        if not isinstance(usage, dict):
            error.add_field_error("usage", "missing or not an object")
            usage = {}

        if error.field_errors:
            raise error

        return cls(
            id=data["id"],
            type=data["type"],
            role=data["role"],
            content=[Content(type=b["type"], text=b.get("text")) for b in content],
            model=data["model"],
            stop_reason=data.get("stop_reason"),
            stop_sequence=data.get("stop_sequence"),
            usage=Usage(
                input_tokens=usage.get("input_tokens"),
                output_tokens=usage.get("output_tokens"),
            ),
        )
