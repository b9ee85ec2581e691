"""Project decoded stream events onto the text the model is generating."""

from dataclasses import dataclass
from typing import Optional

from brave_opus.exceptions import StreamApiError

from .events import ContentBlockDelta, ErrorEvent, MessageStop, StreamEvent


@dataclass(frozen=True)
class TextDelta:
  """A fragment of generated text, or the end-of-stream marker."""

  text: str
  is_final: bool = False

  @classmethod
  def end(cls) -> "TextDelta":
    return cls(text="", is_final=True)


class DeltaReducer:
  """Turns events into :class:`TextDelta` items.

  Text deltas map one to one; ``message_stop`` produces the end marker, after
  which the reducer refuses further events. ``error`` events raise.
  """

  def __init__(self, provider: str = "anthropic"):
    self.provider = provider
    self.finished = False

  def reduce(self, event: StreamEvent) -> Optional[TextDelta]:
    if self.finished:
      raise RuntimeError("DeltaReducer already produced the end-of-stream marker")

    if isinstance(event, ContentBlockDelta):
      if event.text is None:
        return None
      return TextDelta(event.text)

    if isinstance(event, MessageStop):
      return self.finish()

    if isinstance(event, ErrorEvent):
      self.finished = True
      raise StreamApiError(self.provider, event.error_type, event.message)

    return None

  def finish(self) -> TextDelta:
    """Mark the stream finished and return the end marker."""
    self.finished = True
    return TextDelta.end()
