"""Incremental decoding of a Messages API event stream.

The byte stream flows through three stages owned by one :class:`SseDecoder`:
the line framer, the packet assembler and the event classifier. The async
generators at the bottom pull chunks from the transport only when the
consumer asks for the next item, so abandoning the iteration is enough to
stop reading.
"""

from contextlib import aclosing
from typing import AsyncIterable, AsyncIterator, Iterable, Iterator, List

from brave_opus.exceptions import UnexpectedEndOfStreamError
from brave_opus.logging import get_client_logger

from .assembler import EventAssembler
from .events import MessageStop, StreamEvent, UnknownEvent, decode_packet
from .framer import LineFramer
from .reducer import DeltaReducer, TextDelta

logger = get_client_logger(__name__, provider="anthropic")


class SseDecoder:
  """Push-style decoder: feed body chunks, get stream events back."""

  def __init__(self):
    self.framer = LineFramer()
    self.assembler = EventAssembler()

  def feed(self, chunk: bytes) -> Iterator[StreamEvent]:
    """Buffer ``chunk`` and iterate over the events it completes."""
    return self._decode_lines(self.framer.feed(chunk))

  def close(self) -> List[StreamEvent]:
    """Flush the trailing line at end of input and return its events."""
    events = list(self._decode_lines(self.framer.flush()))
    self.assembler.finish()
    return events

  def _decode_lines(self, lines: Iterable[str]) -> Iterator[StreamEvent]:
    for line in lines:
      packet = self.assembler.feed_line(line)
      if packet is None:
        continue

      event = decode_packet(packet)
      if isinstance(event, UnknownEvent):
        logger.debug("Ignoring unknown stream event", event_name=event.name)
      else:
        logger.log_stream_event(event.name)
      yield event


async def iter_events(chunks: AsyncIterable[bytes]) -> AsyncIterator[StreamEvent]:
  """Decode ``chunks`` into stream events, stopping after ``message_stop``.

  Raises:
    FramingError: If the body is not valid UTF-8
    PacketDecodeError: If a known event carries a malformed payload
    TransportError: Whatever the chunk source raises, unchanged
  """
  decoder = SseDecoder()
  try:
    async for chunk in chunks:
      for event in decoder.feed(chunk):
        yield event
        if isinstance(event, MessageStop):
          return

    for event in decoder.close():
      yield event
      if isinstance(event, MessageStop):
        return
  finally:
    # Release the response body even when the consumer stops early
    aclose = getattr(chunks, "aclose", None)
    if aclose is not None:
      await aclose()


async def iter_text_deltas(
  chunks: AsyncIterable[bytes],
  require_stop: bool = True,
  provider: str = "anthropic",
) -> AsyncIterator[TextDelta]:
  """Decode ``chunks`` into text fragments followed by one end marker.

  Args:
    chunks: Raw response body chunks
    require_stop: Treat a body that ends before ``message_stop`` as an error
    provider: Service name used in errors

  Raises:
    UnexpectedEndOfStreamError: If the body ends early and ``require_stop`` is set
    StreamApiError: If the server sends an ``error`` event
  """
  reducer = DeltaReducer(provider)
  async with aclosing(iter_events(chunks)) as events:
    async for event in events:
      delta = reducer.reduce(event)
      if delta is None:
        continue
      yield delta
      if delta.is_final:
        return

  if require_stop:
    raise UnexpectedEndOfStreamError()
  yield reducer.finish()

