"""Unit tests for the shared HTTP client."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, Mock, patch

import pytest
from aiohttp import ClientError, ClientPayloadError

from brave_opus.exceptions import (
  ApiError,
  AuthenticationError,
  NotFoundError,
  RateLimitError,
  RequestTimeoutError,
  ResponseValidationError,
  ServerError,
  TransportError,
)
from brave_opus.http.client import HTTPClient, map_status_error


class FakeContent:
  """Stand-in for aiohttp's StreamReader."""

  def __init__(self, chunks, error=None):
    self.chunks = chunks
    self.error = error

  async def iter_any(self):
    for chunk in self.chunks:
      yield chunk
    if self.error is not None:
      raise self.error


def fake_response(status=200, text="{}", headers=None, chunks=(), error=None):
  response = Mock()
  response.status = status
  response.headers = headers or {}
  response.text = AsyncMock(return_value=text)
  response.content = FakeContent(list(chunks), error)
  return response


def fake_session(response=None, error=None):
  """Session whose request() is an async context manager yielding ``response``."""
  context = MagicMock()
  if error is not None:
    context.__aenter__ = AsyncMock(side_effect=error)
  else:
    context.__aenter__ = AsyncMock(return_value=response)
  context.__aexit__ = AsyncMock(return_value=False)
  session = Mock()
  session.request = Mock(return_value=context)
  return session


class TestMapStatusError:
  """Test cases for map_status_error."""

  def test_authentication(self):
    error = map_status_error("anthropic", 401, {"error": {"type": "authentication_error", "message": "invalid x-api-key"}})

    assert isinstance(error, AuthenticationError)
    assert error.status == 401
    assert str(error) == "[anthropic] HTTP 401: invalid x-api-key"

  def test_forbidden_is_authentication(self):
    assert isinstance(map_status_error("brave", 403, None), AuthenticationError)

  def test_not_found(self):
    assert isinstance(map_status_error("anthropic", 404, {"error": {"message": "model"}}), NotFoundError)

  def test_rate_limit_with_retry_after(self):
    error = map_status_error("brave", 429, {"error": {"detail": "Too many"}}, {"retry-after": "7"})

    assert isinstance(error, RateLimitError)
    assert error.retry_after == 7
    assert "Too many" in str(error)

  def test_rate_limit_with_invalid_retry_after(self):
    assert map_status_error("brave", 429, None, {"retry-after": "soon"}).retry_after is None

  def test_server_error(self):
    error = map_status_error("anthropic", 529, {"error": {"type": "overloaded_error"}})

    assert isinstance(error, ServerError)
    assert "overloaded_error" in str(error)

  def test_other_client_error(self):
    error = map_status_error("brave", 422, "plain text body")

    assert type(error) is ApiError
    assert str(error) == "[brave] HTTP 422: plain text body"

  def test_unknown_body(self):
    assert "Unknown error" in str(map_status_error("brave", 400, None))


class TestHTTPClient:
  """Test cases for HTTPClient."""

  @pytest.fixture
  def http_client(self):
    """Create HTTPClient instance for testing."""
    return HTTPClient(max_connections=10, timeout=30)

  def test_initialization(self):
    client = HTTPClient()
    assert client.max_connections == 100
    assert client.timeout == 30
    assert client.session is None

  @pytest.mark.asyncio
  async def test_session_created_lazily_and_reused(self, http_client):
    with patch("aiohttp.ClientSession") as mock_session_class:
      mock_session = Mock()
      mock_session.closed = False
      mock_session_class.return_value = mock_session

      session1 = await http_client._get_session()
      session2 = await http_client._get_session()

      assert session1 is session2
      mock_session_class.assert_called_once()

  @pytest.mark.asyncio
  async def test_get_json(self, http_client):
    session = fake_session(fake_response(text='{"type": "search"}'))

    with patch.object(http_client, "_get_session", AsyncMock(return_value=session)):
      data = await http_client.get_json(
        "https://api.example.com/search",
        headers={"X-Subscription-Token": "t"},
        params=[("q", "x")],
        provider="brave",
      )

    assert data == {"type": "search"}
    session.request.assert_called_once_with(
      "GET",
      "https://api.example.com/search",
      headers={"X-Subscription-Token": "t"},
      params=[("q", "x")],
    )

  @pytest.mark.asyncio
  async def test_post_json(self, http_client):
    session = fake_session(fake_response(text='{"id": "msg_01"}'))

    with patch.object(http_client, "_get_session", AsyncMock(return_value=session)):
      data = await http_client.post_json("https://api.example.com/messages", json={"a": 1})

    assert data == {"id": "msg_01"}
    session.request.assert_called_once_with(
      "POST", "https://api.example.com/messages", json={"a": 1}, headers=None
    )

  @pytest.mark.asyncio
  async def test_error_status_is_mapped(self, http_client):
    response = fake_response(status=401, text='{"error": {"message": "bad key"}}')

    with patch.object(http_client, "_get_session", AsyncMock(return_value=fake_session(response))):
      with pytest.raises(AuthenticationError, match="bad key"):
        await http_client.get_json("https://api.example.com", provider="brave")

  @pytest.mark.asyncio
  async def test_non_json_body(self, http_client):
    response = fake_response(text="<html>oops</html>")

    with patch.object(http_client, "_get_session", AsyncMock(return_value=fake_session(response))):
      with pytest.raises(ResponseValidationError) as exc_info:
        await http_client.get_json("https://api.example.com", provider="brave")

    assert exc_info.value.response_data == "<html>oops</html>"

  @pytest.mark.asyncio
  async def test_timeout(self, http_client):
    session = fake_session(error=asyncio.TimeoutError())

    with patch.object(http_client, "_get_session", AsyncMock(return_value=session)):
      with pytest.raises(RequestTimeoutError) as exc_info:
        await http_client.get_json("https://api.example.com")

    assert exc_info.value.timeout_seconds == 30
    assert isinstance(exc_info.value, TransportError)

  @pytest.mark.asyncio
  async def test_connection_error(self, http_client):
    session = fake_session(error=ClientError("connection refused"))

    with patch.object(http_client, "_get_session", AsyncMock(return_value=session)):
      with pytest.raises(TransportError, match="connection refused"):
        await http_client.post_json("https://api.example.com")

  @pytest.mark.asyncio
  async def test_stream_yields_chunks(self, http_client):
    """Test that body chunks are passed through untouched."""
    response = fake_response(chunks=[b"event: ping\n", b"data: {}\n\n"])
    session = fake_session(response)

    with patch.object(http_client, "_get_session", AsyncMock(return_value=session)):
      chunks = [c async for c in http_client.stream("POST", "https://api.example.com", json={})]

    assert chunks == [b"event: ping\n", b"data: {}\n\n"]
    timeout = session.request.call_args.kwargs["timeout"]
    assert timeout.total is None
    assert timeout.sock_read == 30

  @pytest.mark.asyncio
  async def test_stream_error_status(self, http_client):
    response = fake_response(status=529, text='{"error": {"type": "overloaded_error", "message": "Overloaded"}}')

    with patch.object(http_client, "_get_session", AsyncMock(return_value=fake_session(response))):
      with pytest.raises(ServerError, match="Overloaded"):
        [c async for c in http_client.stream("POST", "https://api.example.com", provider="anthropic")]

  @pytest.mark.asyncio
  async def test_stream_interrupted(self, http_client):
    """Test that a broken body surfaces as TransportError after the chunks read so far."""
    response = fake_response(chunks=[b"data: x\n"], error=ClientPayloadError("connection reset"))

    received = []
    with patch.object(http_client, "_get_session", AsyncMock(return_value=fake_session(response))):
      with pytest.raises(TransportError, match="connection reset"):
        async for chunk in http_client.stream("GET", "https://api.example.com"):
          received.append(chunk)

    assert received == [b"data: x\n"]

  @pytest.mark.asyncio
  async def test_close(self, http_client):
    session = AsyncMock()
    http_client.session = session

    await http_client.close()

    session.close.assert_called_once()
    assert http_client.session is None

  @pytest.mark.asyncio
  async def test_context_manager_closes(self):
    async with HTTPClient() as client:
      client.session = AsyncMock()
      session = client.session

    session.close.assert_called_once()
