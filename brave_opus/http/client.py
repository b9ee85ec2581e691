"""Async HTTP client shared by the Anthropic and Brave clients."""

import asyncio
import json
import time
from typing import Any, AsyncIterator, Dict, Mapping, Optional

import aiohttp
from aiohttp import ClientTimeout, TCPConnector

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
from brave_opus.logging import get_client_logger

logger = get_client_logger(__name__)


def _extract_error_message(body: Any) -> str:
  """Pull a human readable message out of an error body.

  Anthropic answers ``{"error": {"type": ..., "message": ...}}`` while Brave
  answers ``{"error": {"code": ..., "detail": ...}}``.
  """
  if isinstance(body, dict):
    error_info = body.get("error", body)
    if isinstance(error_info, dict):
      for key in ("message", "detail"):
        if error_info.get(key):
          return str(error_info[key])
      if error_info.get("type"):
        return str(error_info["type"])
    elif isinstance(error_info, str):
      return error_info
  elif isinstance(body, str) and body:
    return body
  return "Unknown error"


def map_status_error(
  provider: str,
  status: int,
  body: Any = None,
  headers: Optional[Mapping[str, str]] = None,
) -> ApiError:
  """Map an HTTP error status to the matching exception.

  Args:
    provider: Name of the service that answered
    status: HTTP status code
    body: Decoded JSON body, raw text, or None
    headers: Response headers (used for ``retry-after``)

  Returns:
    Exception instance to raise
  """
  message = _extract_error_message(body)

  if status in (401, 403):
    return AuthenticationError(provider, message, status, body)

  if status == 404:
    return NotFoundError(provider, message, status, body)

  if status == 429:
    retry_after = None
    if headers and "retry-after" in headers:
      try:
        retry_after = int(headers["retry-after"])
      except (ValueError, TypeError):
        retry_after = None
    return RateLimitError(provider, message, status, body, retry_after)

  if status >= 500:
    return ServerError(provider, message, status, body)

  return ApiError(provider, message, status, body)


class HTTPClient:
  """Async HTTP client over a lazily created aiohttp session."""

  def __init__(
    self,
    max_connections: int = 100,
    timeout: float = 30
  ):
    """Initialize HTTP client.

    Args:
      max_connections: Maximum number of connections in the pool
      timeout: Request timeout in seconds; for streams, the maximum wait between two chunks
    """
    self.max_connections = max_connections
    self.timeout = timeout
    self.session: Optional[aiohttp.ClientSession] = None

  async def _get_session(self) -> aiohttp.ClientSession:
    """Get or create the aiohttp session."""
    if self.session is None or self.session.closed:
      connector = TCPConnector(limit=self.max_connections)
      timeout = ClientTimeout(total=self.timeout)

      self.session = aiohttp.ClientSession(
        connector=connector,
        timeout=timeout
      )

    return self.session

  async def get_json(
    self,
    url: str,
    headers: Optional[Dict[str, str]] = None,
    params: Optional[Any] = None,
    provider: str = "http",
  ) -> Any:
    """Make GET request and decode the JSON answer.

    Args:
      url: Request URL
      headers: HTTP headers
      params: Query parameters (mapping or list of pairs)
      provider: Service name used in errors and logs

    Returns:
      Decoded JSON body

    Raises:
      ApiError: For non-2xx answers
      TransportError: For network-related errors
      ResponseValidationError: If the body is not JSON
    """
    return await self._request_json("GET", url, provider, headers=headers, params=params)

  async def post_json(
    self,
    url: str,
    json: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    provider: str = "http",
  ) -> Any:
    """Make POST request with a JSON body and decode the JSON answer.

    Args:
      url: Request URL
      json: JSON data to send in request body
      headers: HTTP headers
      provider: Service name used in errors and logs

    Returns:
      Decoded JSON body

    Raises:
      ApiError: For non-2xx answers
      TransportError: For network-related errors
      ResponseValidationError: If the body is not JSON
    """
    return await self._request_json("POST", url, provider, json=json, headers=headers)

  async def stream(
    self,
    method: str,
    url: str,
    json: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    params: Optional[Any] = None,
    provider: str = "http",
  ) -> AsyncIterator[bytes]:
    """Make a request and yield the response body chunks as they arrive.

    Chunk boundaries are whatever the transport delivers; they may split
    lines or UTF-8 sequences.

    Raises:
      ApiError: For non-2xx answers (raised before the first chunk)
      TransportError: If the connection fails or breaks while reading
    """
    session = await self._get_session()
    request_log = logger.bind(provider=provider)
    request_log.log_request(method, url, json or params, stream=True)
    start_time = time.time()

    try:
      async with session.request(
        method,
        url,
        json=json,
        headers=headers,
        params=params,
        timeout=ClientTimeout(total=None, sock_read=self.timeout),
      ) as response:
        if response.status >= 400:
          body = await self._read_error_body(response)
          request_log.log_response(response.status, url, self._latency_ms(start_time), body)
          raise map_status_error(provider, response.status, body, response.headers)

        request_log.log_response(response.status, url, self._latency_ms(start_time), stream=True)
        async for chunk in response.content.iter_any():
          yield chunk
    except asyncio.TimeoutError as e:
      raise RequestTimeoutError(f"Stream read timeout: {e}", self.timeout, e)
    except aiohttp.ClientError as e:
      raise TransportError(f"Stream interrupted: {e}", e)

  async def _request_json(
    self,
    method: str,
    url: str,
    provider: str,
    **kwargs: Any
  ) -> Any:
    session = await self._get_session()
    request_log = logger.bind(provider=provider)
    request_log.log_request(method, url, kwargs.get("json") or kwargs.get("params"))
    start_time = time.time()

    try:
      async with session.request(method, url, **kwargs) as response:
        if response.status >= 400:
          body = await self._read_error_body(response)
          request_log.log_response(response.status, url, self._latency_ms(start_time), body)
          raise map_status_error(provider, response.status, body, response.headers)

        text = await response.text()
        status = response.status
    except asyncio.TimeoutError as e:
      raise RequestTimeoutError(f"Request timeout: {e}", self.timeout, e)
    except aiohttp.ClientConnectorError as e:
      raise TransportError(f"Connection failed: {e}", e)
    except aiohttp.ClientError as e:
      raise TransportError(f"HTTP request failed: {e}", e)

    try:
      data = json.loads(text)
    except json.JSONDecodeError as e:
      raise ResponseValidationError(
        f"Response from {provider} is not valid JSON: {e}",
        provider=provider,
        response_data=text,
      )

    request_log.log_response(status, url, self._latency_ms(start_time), data)
    return data

  @staticmethod
  async def _read_error_body(response: aiohttp.ClientResponse) -> Any:
    text = await response.text()
    try:
      return json.loads(text)
    except json.JSONDecodeError:
      return text

  @staticmethod
  def _latency_ms(start_time: float) -> int:
    return int((time.time() - start_time) * 1000)

  async def close(self) -> None:
    """Close the HTTP session and clean up resources."""
    if self.session is not None:
      await self.session.close()
      self.session = None

  async def __aenter__(self) -> "HTTPClient":
    return self

  async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
    await self.close()
