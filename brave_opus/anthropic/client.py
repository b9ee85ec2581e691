"""Anthropic Messages API client with streamed response support."""

import os
from dataclasses import dataclass, replace
from typing import Any, AsyncIterator, Dict, Optional

from brave_opus.config.models import ServiceConfig
from brave_opus.exceptions import ConfigurationError
from brave_opus.http.client import HTTPClient
from brave_opus.logging import get_client_logger

from .models import MessageBody, MessageResponse
from .streaming.decoder import iter_events, iter_text_deltas
from .streaming.events import StreamEvent
from .streaming.reducer import TextDelta

logger = get_client_logger(__name__, provider="anthropic")

DEFAULT_API_URL = "https://api.anthropic.com/v1"
DEFAULT_API_VERSION = "2023-06-01"
MESSAGES_CREATE = "messages"


@dataclass
class Auth:
  """Credentials for the Anthropic API."""

  api_key: str
  version: Optional[str] = None

  def __post_init__(self):
    if not self.api_key:
      raise ConfigurationError("Anthropic API key cannot be empty", field="api_key")

  @classmethod
  def from_env(cls) -> "Auth":
    """Read ``ANTHROPIC_API_KEY`` and the optional ``ANTHROPIC_API_VERSION``.

    Raises:
      ConfigurationError: If ``ANTHROPIC_API_KEY`` is not set
    """
    api_key = os.getenv("ANTHROPIC_API_KEY")
    if not api_key:
      raise ConfigurationError("Missing ANTHROPIC_API_KEY", field="ANTHROPIC_API_KEY")
    return cls(api_key=api_key, version=os.getenv("ANTHROPIC_API_VERSION"))

  def __repr__(self) -> str:
    return f"Auth(api_key='***', version={self.version!r})"


class AnthropicClient:
  """Client for the Messages API.

  ``message_create`` returns the whole message at once. ``message_stream`` and
  ``message_delta_stream`` send ``stream: true`` and decode the Server-Sent
  Events body incrementally as the consumer iterates.
  """

  provider = "anthropic"

  def __init__(
    self,
    auth: Auth,
    api_url: str = DEFAULT_API_URL,
    http_client: Optional[HTTPClient] = None,
    timeout: float = 60,
  ):
    """Initialize the client.

    Args:
      auth: API key and optional API version
      api_url: Base URL, without the endpoint path
      http_client: Shared HTTP client; one is created and owned when omitted
      timeout: Timeout of an owned HTTP client, in seconds
    """
    self.auth = auth
    self.api_url = api_url.rstrip("/")
    self._owns_http_client = http_client is None
    self.http_client = http_client or HTTPClient(timeout=timeout)

  @classmethod
  def from_config(cls, config: ServiceConfig, http_client: Optional[HTTPClient] = None) -> "AnthropicClient":
    """Create a client from the ``anthropic`` service configuration."""
    return cls(
      Auth(api_key=config.api_key, version=config.api_version),
      api_url=config.base_url or DEFAULT_API_URL,
      http_client=http_client,
      timeout=config.timeout,
    )

  def _headers(self) -> Dict[str, str]:
    return {
      "x-api-key": self.auth.api_key,
      "anthropic-version": self.auth.version or DEFAULT_API_VERSION,
      "content-type": "application/json",
    }

  def _url(self, sub_url: str) -> str:
    return f"{self.api_url}/{sub_url}"

  async def message_create(self, body: MessageBody) -> MessageResponse:
    """Create a message and wait for the complete answer.

    Raises:
      ApiError: For error answers from the API
      TransportError: For network-related errors
      ResponseValidationError: If the answer has an unexpected shape
    """
    payload = self._payload(body, stream=False)
    data = await self.http_client.post_json(
      self._url(MESSAGES_CREATE),
      json=payload,
      headers=self._headers(),
      provider=self.provider,
    )
    response = MessageResponse.from_dict(data)
    logger.debug(
      "Message created",
      message_id=response.id,
      model=response.model,
      stop_reason=response.stop_reason,
    )
    return response

  def message_stream(self, body: MessageBody) -> AsyncIterator[StreamEvent]:
    """Create a message and iterate over its decoded stream events.

    The iteration ends after ``message_stop`` or when the body ends.

    Raises:
      ApiError: For error answers from the API (on first iteration)
      StreamError: If the event stream cannot be decoded
      TransportError: If the connection breaks
    """
    return iter_events(self._open_stream(body))

  def message_delta_stream(
    self,
    body: MessageBody,
    require_stop: bool = True,
  ) -> AsyncIterator[TextDelta]:
    """Create a message and iterate over the generated text fragments.

    The last item is the end marker (``TextDelta.is_final``).

    Args:
      body: Message request
      require_stop: Raise if the body ends without ``message_stop``
    """
    return iter_text_deltas(self._open_stream(body), require_stop, self.provider)

  def _open_stream(self, body: MessageBody) -> AsyncIterator[bytes]:
    return self.http_client.stream(
      "POST",
      self._url(MESSAGES_CREATE),
      json=self._payload(body, stream=True),
      headers={**self._headers(), "accept": "text/event-stream"},
      provider=self.provider,
    )

  def _payload(self, body: MessageBody, stream: bool) -> Dict[str, Any]:
    payload = replace(body, stream=True if stream else None).to_payload()
    logger.debug("Prepared message payload", model=body.model, stream=stream)
    return payload

  async def close(self) -> None:
    """Close the HTTP client if this client created it."""
    if self._owns_http_client:
      await self.http_client.close()

  async def __aenter__(self) -> "AnthropicClient":
    return self

  async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
    await self.close()
