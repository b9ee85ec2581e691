"""Server-Sent Events decoding for streamed Messages API responses."""

from .assembler import EventAssembler, SsePacket
from .decoder import SseDecoder, iter_events, iter_text_deltas
from .events import (
    ContentBlockDelta,
    ContentBlockStart,
    ContentBlockStop,
    ErrorEvent,
    MessageDelta,
    MessageStart,
    MessageStop,
    Ping,
    StreamEvent,
    UnknownEvent,
    Usage,
    decode_packet,
)
from .framer import LineFramer
from .reducer import DeltaReducer, TextDelta

__all__ = [
    "LineFramer",
    "EventAssembler",
    "SsePacket",
    "SseDecoder",
    "iter_events",
    "iter_text_deltas",
    "decode_packet",
    "StreamEvent",
    "MessageStart",
    "ContentBlockStart",
    "ContentBlockDelta",
    "ContentBlockStop",
    "MessageDelta",
    "MessageStop",
    "Ping",
    "ErrorEvent",
    "UnknownEvent",
    "Usage",
    "DeltaReducer",
    "TextDelta",
]
