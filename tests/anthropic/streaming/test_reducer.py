"""Unit tests for the text delta reducer."""

import pytest

from brave_opus.anthropic.streaming.events import (
  ContentBlockDelta,
  ContentBlockStart,
  ErrorEvent,
  MessageDelta,
  MessageStop,
  Ping,
  UnknownEvent,
)
from brave_opus.anthropic.streaming.reducer import DeltaReducer, TextDelta
from brave_opus.exceptions import StreamApiError


class TestDeltaReducer:
  """Test cases for DeltaReducer."""

  def test_text_delta_maps_one_to_one(self):
    reducer = DeltaReducer()

    assert reducer.reduce(ContentBlockDelta(index=0, text="Hi")) == TextDelta("Hi")

  def test_non_text_events_are_discarded(self):
    """Test that metadata events produce nothing."""
    reducer = DeltaReducer()

    for event in (
      ContentBlockStart(index=0, block_type="text"),
      ContentBlockDelta(index=1, delta_type="input_json_delta", partial_json="{"),
      MessageDelta(stop_reason="end_turn"),
      Ping(),
      UnknownEvent(event_name="future_event", payload={}),
    ):
      assert reducer.reduce(event) is None

    assert not reducer.finished

  def test_empty_text_is_still_a_delta(self):
    assert DeltaReducer().reduce(ContentBlockDelta(index=0, text="")) == TextDelta("")

  def test_message_stop_emits_end_marker(self):
    reducer = DeltaReducer()

    end = reducer.reduce(MessageStop())

    assert end == TextDelta.end()
    assert end.is_final
    assert reducer.finished

  def test_no_events_accepted_after_end(self):
    """Test that nothing follows the end marker."""
    reducer = DeltaReducer()
    reducer.reduce(MessageStop())

    with pytest.raises(RuntimeError):
      reducer.reduce(ContentBlockDelta(index=0, text="late"))

  def test_error_event_raises(self):
    """Test that a server error event ends the stream with an exception."""
    reducer = DeltaReducer()

    with pytest.raises(StreamApiError) as exc_info:
      reducer.reduce(ErrorEvent(error_type="overloaded_error", message="Overloaded"))

    assert exc_info.value.error_type == "overloaded_error"
    assert exc_info.value.provider == "anthropic"
    assert "Overloaded" in str(exc_info.value)
    assert reducer.finished
