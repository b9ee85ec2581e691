"""Unit tests for the byte stream line framer."""

import pytest

from brave_opus.anthropic.streaming.framer import LineFramer
from brave_opus.exceptions import FramingError


class TestLineFramer:
  """Test cases for LineFramer."""

  def test_single_chunk_with_several_lines(self):
    """Test that every terminated line is returned in order."""
    framer = LineFramer()

    lines = list(framer.feed(b"event: ping\ndata: {}\n\n"))

    assert lines == ["event: ping", "data: {}", ""]
    assert framer.pending == 0

  def test_incomplete_line_is_buffered(self):
    """Test that a line split across chunks is only returned once complete."""
    framer = LineFramer()

    assert list(framer.feed(b"event: mess")) == []
    assert framer.pending == len(b"event: mess")
    assert list(framer.feed(b"age_stop\n")) == ["event: message_stop"]
    assert framer.pending == 0

  def test_carriage_return_is_stripped(self):
    """Test that CRLF terminated lines lose their trailing CR."""
    framer = LineFramer()

    assert list(framer.feed(b"data: x\r\n\r\n")) == ["data: x", ""]

  def test_carriage_return_split_from_newline(self):
    """Test that a CR at the end of one chunk and LF in the next still frame one line."""
    framer = LineFramer()

    assert list(framer.feed(b"data: x\r")) == []
    assert list(framer.feed(b"\n")) == ["data: x"]

  def test_multibyte_character_split_across_chunks(self):
    """Test that UTF-8 sequences cut by chunk boundaries decode correctly."""
    encoded = "data: café \U0001F600\n".encode("utf-8")
    framer = LineFramer()

    lines = []
    for i in range(len(encoded)):
      lines.extend(framer.feed(encoded[i:i + 1]))

    assert lines == ["data: café \U0001F600"]

  def test_flush_returns_unterminated_remainder(self):
    """Test that end of input yields the trailing partial line."""
    framer = LineFramer()
    list(framer.feed(b"data: a\ndata: tail"))

    assert framer.flush() == ["data: tail"]
    assert framer.pending == 0
    assert framer.flush() == []

  def test_flush_drains_lines_not_yet_consumed(self):
    """Test that lines left in the buffer by an unconsumed feed are not lost."""
    framer = LineFramer()
    framer.feed(b"data: a\ndata: b")

    assert framer.flush() == ["data: a", "data: b"]

  def test_invalid_utf8_raises_framing_error(self):
    """Test that undecodable bytes surface as FramingError."""
    framer = LineFramer()

    with pytest.raises(FramingError) as exc_info:
      list(framer.feed(b"data: \xff\xfe\n"))

    assert exc_info.value.raw == b"data: \xff\xfe"

  def test_invalid_utf8_in_trailing_buffer_raises_on_flush(self):
    """Test that a bad unterminated remainder fails at flush time."""
    framer = LineFramer()
    list(framer.feed(b"data: \xc3"))

    with pytest.raises(FramingError):
      framer.flush()

  def test_lines_before_bad_line_are_delivered(self):
    """Test that a bad line does not hide the valid lines before it."""
    framer = LineFramer()
    lines = framer.feed(b"data: ok\ndata: \xff\n")

    assert next(lines) == "data: ok"
    with pytest.raises(FramingError):
      next(lines)
