"""Split an HTTP body delivered in arbitrary chunks into text lines."""

from typing import Iterator, List

from brave_opus.exceptions import FramingError


class LineFramer:
  """Incremental ``\\n`` line splitter with an owned byte buffer.

  Lines are decoded only once complete, so chunks may cut through a line or
  a multi-byte UTF-8 sequence. A ``\\r`` right before the terminator is
  dropped.
  """

  def __init__(self, encoding: str = "utf-8"):
    self.encoding = encoding
    self._buffer = bytearray()

  @property
  def pending(self) -> int:
    """Number of buffered bytes, including lines not drained yet."""
    return len(self._buffer)

  def feed(self, chunk: bytes) -> Iterator[str]:
    """Buffer ``chunk`` and iterate over the complete lines now available.

    The chunk is buffered immediately; lines are decoded as the returned
    iterator advances, so a bad line surfaces only after every line before
    it. Lines left undrained stay buffered for the next call.
    """
    self._buffer.extend(chunk)
    return self._drain()

  def _drain(self) -> Iterator[str]:
    while True:
      end = self._buffer.find(b"\n")
      if end == -1:
        return
      raw = bytes(self._buffer[:end])
      del self._buffer[:end + 1]
      yield self._decode(raw)

  def flush(self) -> List[str]:
    """Return the unterminated remainder as a final line and reset the buffer."""
    lines = list(self._drain())
    if self._buffer:
      raw = bytes(self._buffer)
      self._buffer.clear()
      lines.append(self._decode(raw))
    return lines

  def _decode(self, raw: bytes) -> str:
    if raw.endswith(b"\r"):
      raw = raw[:-1]
    try:
      return raw.decode(self.encoding)
    except UnicodeDecodeError as e:
      raise FramingError(f"Invalid {self.encoding} in stream line: {e}", raw, e)
