"""Group SSE field lines into complete event packets."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_EVENT_NAME = "message"


@dataclass
class SsePacket:
  """One complete Server-Sent Event, as accumulated between blank lines."""

  event: Optional[str] = None
  data: List[str] = field(default_factory=list)
  id: Optional[str] = None
  retry: Optional[int] = None

  @property
  def event_name(self) -> str:
    """The ``event:`` value, or ``message`` when the packet had none."""
    return self.event if self.event is not None else DEFAULT_EVENT_NAME

  @property
  def joined_data(self) -> str:
    """All ``data:`` values joined with newlines."""
    return "\n".join(self.data)


class EventAssembler:
  """Line-driven SSE packet state machine.

  Idle until a field line arrives, then accumulating until a blank line
  emits the packet and returns to idle.
  """

  def __init__(self):
    self._packet: Optional[SsePacket] = None

  @property
  def accumulating(self) -> bool:
    return self._packet is not None

  def feed_line(self, line: str) -> Optional[SsePacket]:
    """Consume one line; return a packet when ``line`` terminates one."""
    if line == "":
      packet, self._packet = self._packet, None
      return packet

    if line.startswith(":"):
      return None

    name, sep, value = line.partition(":")
    if sep and value.startswith(" "):
      value = value[1:]

    if name == "event":
      # An empty event type means the default type
      self._current().event = value or None
    elif name == "data":
      self._current().data.append(value)
    elif name == "id":
      # Per SSE, ids containing NUL are ignored
      if "\0" not in value:
        self._current().id = value
    elif name == "retry":
      if value.isdigit():
        self._current().retry = int(value)
    else:
      logger.debug("Ignoring unknown SSE field %r", name)

    return None

  def finish(self) -> None:
    """Signal end of input, dropping any packet that never got its blank line."""
    if self._packet is not None:
      logger.debug("Discarding unterminated SSE packet: %r", self._packet)
    self._packet = None

  def _current(self) -> SsePacket:
    if self._packet is None:
      self._packet = SsePacket()
    return self._packet
