"""Structured logging support for the API clients."""

import logging
import os
import sys
from typing import Any, Dict, Optional

import structlog


class SensitiveDataFilter:
  """Filter to prevent credentials from being logged."""

  SENSITIVE_KEYS = {
    "authorization", "bearer", "password", "secret", "token", "credential",
  }
  SENSITIVE_SUFFIXES = ("_key", "_token", "_secret", "_password")

  @classmethod
  def filter_sensitive_data(cls, data: Any) -> Any:
    """Recursively filter sensitive data from dictionaries and other structures.

    Args:
      data: Data structure to filter

    Returns:
      Filtered data structure with sensitive values replaced
    """
    if isinstance(data, dict):
      filtered = {}
      for key, value in data.items():
        if isinstance(key, str) and cls._is_sensitive_key(key):
          filtered[key] = cls._mask_sensitive_value(value)
        else:
          filtered[key] = cls.filter_sensitive_data(value)
      return filtered
    elif isinstance(data, list):
      return [cls.filter_sensitive_data(item) for item in data]
    elif isinstance(data, tuple):
      return tuple(cls.filter_sensitive_data(item) for item in data)
    else:
      return data

  @classmethod
  def _is_sensitive_key(cls, key: str) -> bool:
    key_lower = key.lower().replace("-", "_").replace(" ", "_")
    return key_lower in cls.SENSITIVE_KEYS or key_lower.endswith(cls.SENSITIVE_SUFFIXES)

  @classmethod
  def _mask_sensitive_value(cls, value: Any) -> str:
    """Mask a sensitive value, keeping the first and last four characters of long values."""
    if value is None:
      return "[NONE]"

    value_str = str(value)
    if len(value_str) <= 8:
      return "[REDACTED]"
    return f"{value_str[:4]}...{value_str[-4:]}"


def configure_logging(
  debug_mode: bool = False,
  log_level: Optional[str] = None,
  log_file: Optional[str] = None,
  structured: bool = True,
) -> None:
  """Configure structured logging for the clients.

  Args:
    debug_mode: Enable debug mode with detailed logging
    log_level: Override log level (DEBUG, INFO, WARNING, ERROR)
    log_file: Optional file path for log output
    structured: Use structured JSON logging format
  """
  if log_level:
    level = getattr(logging, log_level.upper(), logging.INFO)
  elif debug_mode:
    level = logging.DEBUG
  else:
    level = logging.INFO

  processors = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    _add_process_context,
    _filter_sensitive_processor,
  ]

  if structured:
    processors.append(structlog.processors.JSONRenderer())
  else:
    processors.append(structlog.dev.ConsoleRenderer())

  structlog.configure(
    processors=processors,
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
  )

  # Logs go to stderr so that streamed answers on stdout stay clean
  handlers = []

  console_handler = logging.StreamHandler(sys.stderr)
  console_handler.setLevel(level)
  handlers.append(console_handler)

  if log_file:
    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(level)
    handlers.append(file_handler)

  logging.basicConfig(
    level=level,
    handlers=handlers,
    format="%(message)s" if structured else "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    force=True,
  )

  logging.getLogger("aiohttp").setLevel(logging.WARNING)


def _add_process_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
  event_dict["process_id"] = os.getpid()
  return event_dict


def _filter_sensitive_processor(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
  return SensitiveDataFilter.filter_sensitive_data(event_dict)


class ClientLogger:
  """Logger for API calls with bound context (provider, model, endpoint)."""

  def __init__(self, name: str, provider: Optional[str] = None):
    """Initialize client logger with context.

    Args:
      name: Logger name
      provider: Optional provider name for context
    """
    self.name = name
    self.context: Dict[str, Any] = {}

    if provider:
      self.context["provider"] = provider

    # Lazy proxy, resolved against the config active at first use
    self.logger = structlog.get_logger(name, **self.context)

  def bind(self, **kwargs: Any) -> "ClientLogger":
    """Return a new logger carrying the current context plus ``kwargs``."""
    new_logger = ClientLogger(self.name)
    new_logger.context = {**self.context, **kwargs}
    new_logger.logger = self.logger.bind(**new_logger.context)
    return new_logger

  def is_debug_enabled(self) -> bool:
    return logging.getLogger(self.name).isEnabledFor(logging.DEBUG)

  def debug(self, message: str, **kwargs: Any) -> None:
    self.logger.debug(message, **SensitiveDataFilter.filter_sensitive_data(kwargs))

  def info(self, message: str, **kwargs: Any) -> None:
    self.logger.info(message, **SensitiveDataFilter.filter_sensitive_data(kwargs))

  def warning(self, message: str, **kwargs: Any) -> None:
    self.logger.warning(message, **SensitiveDataFilter.filter_sensitive_data(kwargs))

  def error(self, message: str, **kwargs: Any) -> None:
    self.logger.error(message, **SensitiveDataFilter.filter_sensitive_data(kwargs))

  def log_request(
    self,
    method: str,
    url: str,
    request_data: Optional[Any] = None,
    **kwargs: Any
  ) -> None:
    """Log an outgoing API request.

    Args:
      method: HTTP method
      url: Request URL
      request_data: JSON payload, or query parameters as a mapping or pairs
      **kwargs: Additional context
    """
    context = {
      "event_type": "api_request",
      "method": method,
      "url": url,
      **kwargs
    }

    if request_data:
      if isinstance(request_data, dict):
        context["request_keys"] = list(request_data.keys())
      else:
        context["request_keys"] = [key for key, _ in request_data]

      # Only include request data in debug mode
      if self.is_debug_enabled():
        context["request_data"] = request_data

    self.info("API request initiated", **context)

  def log_response(
    self,
    status_code: int,
    url: str,
    latency_ms: int,
    response_data: Optional[Any] = None,
    **kwargs: Any
  ) -> None:
    """Log an API response; 4xx and 5xx answers are logged as errors.

    Args:
      status_code: HTTP status code
      url: Request URL
      latency_ms: Response latency in milliseconds
      response_data: Decoded response body
      **kwargs: Additional context
    """
    context = {
      "event_type": "api_response",
      "status_code": status_code,
      "url": url,
      "latency_ms": latency_ms,
      **kwargs
    }

    if response_data is not None and self.is_debug_enabled():
      context["response_data"] = response_data

    if status_code >= 400:
      self.error("API request failed", **context)
    else:
      self.info("API request completed", **context)

  def log_stream_event(self, event_name: str, **kwargs: Any) -> None:
    """Log a decoded stream event at debug level."""
    self.debug("Stream event decoded", event_type="stream_event", event_name=event_name, **kwargs)


def get_client_logger(name: str, provider: Optional[str] = None) -> ClientLogger:
  """Get a client logger instance with optional provider context."""
  return ClientLogger(name, provider)
