"""Unit tests for Messages API request and response models."""

import pytest

from brave_opus.anthropic.models import Message, MessageBody, MessageResponse, Role
from brave_opus.exceptions import ResponseValidationError


class TestMessageBody:
  """Test cases for MessageBody."""

  def test_from_prompt(self):
    body = MessageBody.from_prompt("Hi", model="claude-3-haiku-20240307", max_tokens=10)

    assert body.messages == [Message(Role.USER, "Hi")]

  def test_payload_omits_unset_fields(self):
    body = MessageBody.from_prompt(
      "Hi", model="claude-3-haiku-20240307", max_tokens=10, system="Be brief", temperature=0.0
    )

    assert body.to_payload() == {
      "model": "claude-3-haiku-20240307",
      "messages": [{"role": "user", "content": "Hi"}],
      "max_tokens": 10,
      "system": "Be brief",
      "temperature": 0.0,
    }

  def test_dict_messages_are_coerced(self):
    body = MessageBody(
      model="m",
      messages=[{"role": "user", "content": "a"}, {"role": "assistant", "content": "b"}],
      max_tokens=5,
    )

    assert body.messages[1].role is Role.ASSISTANT

  @pytest.mark.parametrize("kwargs,match", [
    ({"model": ""}, "Model"),
    ({"messages": []}, "message"),
    ({"max_tokens": 0}, "Max tokens"),
    ({"temperature": 1.5}, "Temperature"),
    ({"top_p": -0.1}, "Top p"),
    ({"top_k": 0}, "Top k"),
    ({"stop_sequences": "END"}, "Stop sequences"),
  ])
  def test_validation(self, kwargs, match):
    params = {"model": "m", "messages": [Message("user", "hi")], "max_tokens": 5}
    params.update(kwargs)

    with pytest.raises(ValueError, match=match):
      MessageBody(**params)

  def test_invalid_role(self):
    with pytest.raises(ValueError):
      Message("system", "nope")


class TestMessageResponse:
  """Test cases for MessageResponse.from_dict."""

  def test_text_joins_text_blocks(self):
    response = MessageResponse.from_dict({
      "id": "msg_01",
      "type": "message",
      "role": "assistant",
      "model": "m",
      "content": [
        {"type": "text", "text": "Hello"},
        {"type": "tool_use", "id": "t1", "name": "search", "input": {}},
        {"type": "text", "text": " there"},
      ],
      "usage": {"input_tokens": 1, "output_tokens": 2},
    })

    assert response.text == "Hello there"
    assert response.stop_reason is None

  def test_missing_fields_reported(self):
    with pytest.raises(ResponseValidationError) as exc_info:
      MessageResponse.from_dict({"id": "msg_01", "content": [{}]})

    errors = exc_info.value.field_errors
    assert set(errors) == {"type", "role", "model", "content[0].type", "usage"}
    assert "content[0].type" in exc_info.value.get_detailed_message()

  def test_non_object_rejected(self):
    with pytest.raises(ResponseValidationError):
      MessageResponse.from_dict(["not", "a", "message"])
