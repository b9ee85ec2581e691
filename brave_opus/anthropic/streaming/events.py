"""Typed Messages API stream events and the packet classifier."""

import json
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional, Type

from brave_opus.exceptions import PacketDecodeError

from .assembler import DEFAULT_EVENT_NAME, SsePacket


class _FieldReader:
  """Reads typed fields out of a JSON payload, collecting every mismatch."""

  def __init__(self):
    self.errors: Dict[str, str] = {}

  def get(
    self,
    obj: Any,
    key: str,
    expected: type,
    path: str,
    required: bool = True,
  ) -> Any:
    value = obj.get(key) if isinstance(obj, dict) else None
    if value is None:
      if required:
        self.errors[path] = "missing required field"
      return None

    # bool is an int subclass, but never a valid index or counter
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
      self.errors[path] = f"expected {expected.__name__}, got {type(value).__name__}"
      return None
    return value


@dataclass
class Usage:
  """Token counters reported by ``message_start`` and ``message_delta``."""

  input_tokens: Optional[int] = None
  output_tokens: Optional[int] = None

  @classmethod
  def read(cls, reader: _FieldReader, obj: Any, path: str) -> "Usage":
    usage = reader.get(obj, "usage", dict, path)
    return cls(
      input_tokens=reader.get(usage, "input_tokens", int, f"{path}.input_tokens", required=False),
      output_tokens=reader.get(usage, "output_tokens", int, f"{path}.output_tokens", required=False),
    )


class StreamEvent:
  """Base class of every decoded stream event."""

  event_type: ClassVar[str] = ""

  @property
  def name(self) -> str:
    return self.event_type

  @classmethod
  def from_payload(cls, payload: Dict[str, Any], reader: _FieldReader) -> "StreamEvent":
    return cls()


@dataclass
class MessageStart(StreamEvent):
  event_type: ClassVar[str] = "message_start"

  id: str
  role: str
  model: str
  usage: Usage = field(default_factory=Usage)

  @classmethod
  def from_payload(cls, payload: Dict[str, Any], reader: _FieldReader) -> "MessageStart":
    message = reader.get(payload, "message", dict, "message")
    return cls(
      id=reader.get(message, "id", str, "message.id"),
      role=reader.get(message, "role", str, "message.role"),
      model=reader.get(message, "model", str, "message.model"),
      usage=Usage.read(reader, message, "message.usage"),
    )


@dataclass
class ContentBlockStart(StreamEvent):
  event_type: ClassVar[str] = "content_block_start"

  index: int
  block_type: str
  content_block: Dict[str, Any] = field(default_factory=dict)

  @classmethod
  def from_payload(cls, payload: Dict[str, Any], reader: _FieldReader) -> "ContentBlockStart":
    block = reader.get(payload, "content_block", dict, "content_block")
    return cls(
      index=reader.get(payload, "index", int, "index"),
      block_type=reader.get(block, "type", str, "content_block.type"),
      content_block=block or {},
    )


@dataclass
class ContentBlockDelta(StreamEvent):
  event_type: ClassVar[str] = "content_block_delta"

  index: int
  text: Optional[str] = None
  delta_type: Optional[str] = None
  partial_json: Optional[str] = None

  @classmethod
  def from_payload(cls, payload: Dict[str, Any], reader: _FieldReader) -> "ContentBlockDelta":
    delta = reader.get(payload, "delta", dict, "delta")
    delta_type = reader.get(delta, "type", str, "delta.type", required=False)
    # Tool input deltas carry partial_json instead of text
    text_required = delta_type in (None, "text_delta")
    return cls(
      index=reader.get(payload, "index", int, "index"),
      text=reader.get(delta, "text", str, "delta.text", required=text_required),
      delta_type=delta_type,
      partial_json=reader.get(delta, "partial_json", str, "delta.partial_json", required=False),
    )


@dataclass
class ContentBlockStop(StreamEvent):
  event_type: ClassVar[str] = "content_block_stop"

  index: int

  @classmethod
  def from_payload(cls, payload: Dict[str, Any], reader: _FieldReader) -> "ContentBlockStop":
    return cls(index=reader.get(payload, "index", int, "index"))


@dataclass
class MessageDelta(StreamEvent):
  event_type: ClassVar[str] = "message_delta"

  stop_reason: Optional[str] = None
  stop_sequence: Optional[str] = None
  usage: Usage = field(default_factory=Usage)

  @classmethod
  def from_payload(cls, payload: Dict[str, Any], reader: _FieldReader) -> "MessageDelta":
    delta = reader.get(payload, "delta", dict, "delta")
    return cls(
      stop_reason=reader.get(delta, "stop_reason", str, "delta.stop_reason", required=False),
      stop_sequence=reader.get(delta, "stop_sequence", str, "delta.stop_sequence", required=False),
      usage=Usage.read(reader, payload, "usage"),
    )


@dataclass
class MessageStop(StreamEvent):
  event_type: ClassVar[str] = "message_stop"


@dataclass
class Ping(StreamEvent):
  event_type: ClassVar[str] = "ping"


@dataclass
class ErrorEvent(StreamEvent):
  event_type: ClassVar[str] = "error"

  error_type: str = "error"
  message: str = ""

  @classmethod
  def from_payload(cls, payload: Dict[str, Any], reader: _FieldReader) -> "ErrorEvent":
    error = reader.get(payload, "error", dict, "error")
    return cls(
      error_type=reader.get(error, "type", str, "error.type", required=False) or "error",
      message=reader.get(error, "message", str, "error.message", required=False) or "",
    )


@dataclass
class UnknownEvent(StreamEvent):
  """An event this client does not know; kept so newer servers don't break it."""

  event_name: str
  payload: Any = None
  raw_data: str = ""

  @property
  def name(self) -> str:
    return self.event_name


KNOWN_EVENTS: Dict[str, Type[StreamEvent]] = {
  cls.event_type: cls
  for cls in (
    MessageStart,
    ContentBlockStart,
    ContentBlockDelta,
    ContentBlockStop,
    MessageDelta,
    MessageStop,
    Ping,
    ErrorEvent,
  )
}


def _loads_or_none(raw: str) -> Any:
  try:
    return json.loads(raw)
  except json.JSONDecodeError:
    return None


def _load_object(event_name: str, raw: str) -> Dict[str, Any]:
  if not raw.strip():
    return {}

  try:
    payload = json.loads(raw)
  except json.JSONDecodeError as e:
    raise PacketDecodeError(f"malformed JSON ({e})", event_name, raw, cause=e)

  if not isinstance(payload, dict):
    raise PacketDecodeError(
      f"expected a JSON object, got {type(payload).__name__}", event_name, raw
    )
  return payload


def decode_packet(packet: SsePacket) -> StreamEvent:
  """Classify ``packet`` by event name and decode its payload.

  Packets without an ``event:`` line are classified by the ``type`` field of
  their payload. Unknown names become :class:`UnknownEvent`.

  Raises:
    PacketDecodeError: If the payload of a known event is malformed
  """
  name = packet.event_name
  raw = packet.joined_data

  if name == DEFAULT_EVENT_NAME:
    payload = _loads_or_none(raw)
    inner_type = payload.get("type") if isinstance(payload, dict) else None
    if not (isinstance(inner_type, str) and inner_type in KNOWN_EVENTS):
      return UnknownEvent(event_name=name, payload=payload, raw_data=raw)
    name = inner_type

  event_cls = KNOWN_EVENTS.get(name)
  if event_cls is None:
    return UnknownEvent(event_name=name, payload=_loads_or_none(raw), raw_data=raw)

  payload = _load_object(name, raw)
  reader = _FieldReader()
  event = event_cls.from_payload(payload, reader)
  if reader.errors:
    fields = ", ".join(f"{path} ({error})" for path, error in reader.errors.items())
    raise PacketDecodeError(
      f"unexpected payload shape: {fields}", name, raw, field_errors=reader.errors
    )
  return event
