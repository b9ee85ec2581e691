"""Brave Search API client: web search, suggestions and summaries."""

import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from brave_opus.config.models import ServiceConfig
from brave_opus.exceptions import ApiError, ConfigurationError, ResponseValidationError
from brave_opus.http.client import HTTPClient
from brave_opus.logging import get_client_logger

from .models import SuggestSearchApiResponse, SummarizerSearchApiResponse, WebSearchApiResponse
from .params import QueryParams, SuggestSearchParams, WebSearchParams

logger = get_client_logger(__name__, provider="brave")

DEFAULT_API_URL = "https://api.search.brave.com/res/v1"
WEB_SEARCH = "web/search"
SUGGEST = "suggest/search"
SUMMARIZER = "summarizer/search"

# Per-plan keys, checked after the generic subscription token
PLAN_TOKEN_VARIABLES = {
  "web": "BRAVE_WEB_SEARCH_DATA_FOR_AI_API_KEY",
  "suggest": "BRAVE_SUGGEST_API_KEY",
}


@dataclass
class Auth:
  """Subscription token of a Brave Search API plan."""

  subscription_token: str

  def __post_init__(self):
    if not self.subscription_token:
      raise ConfigurationError("Brave subscription token cannot be empty", field="subscription_token")

  @classmethod
  def from_env(cls, subscription: str = "web") -> "Auth":
    """Read the token from ``BRAVE_SUBSCRIPTION_TOKEN`` or the plan specific variable.

    Args:
      subscription: ``web`` (also used by the summarizer) or ``suggest``

    Raises:
      ConfigurationError: If no variable is set
    """
    names = ["BRAVE_SUBSCRIPTION_TOKEN"]
    if subscription in PLAN_TOKEN_VARIABLES:
      names.append(PLAN_TOKEN_VARIABLES[subscription])

    for name in names:
      token = os.getenv(name)
      if token:
        return cls(subscription_token=token)

    raise ConfigurationError(f"Missing {' or '.join(names)}", field=names[0])

  def __repr__(self) -> str:
    return "Auth(subscription_token='***')"


class BraveClient:
  """Client for the Brave Search REST APIs.

  Each call accepts an optional ``version`` (``YYYY-MM-DD``) sent as the
  ``Api-Version`` header; the latest version is used when omitted.
  """

  provider = "brave"

  def __init__(
    self,
    auth: Auth,
    api_url: str = DEFAULT_API_URL,
    http_client: Optional[HTTPClient] = None,
    timeout: float = 30,
  ):
    self.auth = auth
    self.api_url = api_url.rstrip("/")
    self._owns_http_client = http_client is None
    self.http_client = http_client or HTTPClient(timeout=timeout)

  @classmethod
  def from_config(cls, config: ServiceConfig, http_client: Optional[HTTPClient] = None) -> "BraveClient":
    """Create a client from the ``brave`` service configuration."""
    return cls(
      Auth(subscription_token=config.api_key),
      api_url=config.base_url or DEFAULT_API_URL,
      http_client=http_client,
      timeout=config.timeout,
    )

  def _headers(self, version: Optional[str] = None) -> Dict[str, str]:
    headers = {
      "Accept": "application/json",
      "Accept-Encoding": "gzip",
      "X-Subscription-Token": self.auth.subscription_token,
    }
    if version:
      headers["Api-Version"] = version
    return headers

  async def _query(self, sub_url: str, params: QueryParams, version: Optional[str]) -> Dict[str, Any]:
    data = await self.http_client.get_json(
      f"{self.api_url}/{sub_url}",
      headers=self._headers(version),
      params=params,
      provider=self.provider,
    )
    if not isinstance(data, dict):
      raise ResponseValidationError(
        f"Expected a JSON object from {sub_url}",
        provider=self.provider,
        response_data=data,
      )
    return data

  async def search(self, params: WebSearchParams, version: Optional[str] = None) -> WebSearchApiResponse:
    """Run a web search.

    Raises:
      ApiError: For error answers from the API
      TransportError: For network-related errors
    """
    data = await self._query(WEB_SEARCH, params.to_query_params(), version)
    response = WebSearchApiResponse.from_dict(data)
    logger.debug("Web search done", query=params.q, results=len(response.web_results))
    return response

  async def suggest(self, params: SuggestSearchParams, version: Optional[str] = None) -> SuggestSearchApiResponse:
    """Get query suggestions for a partial search term."""
    data = await self._query(SUGGEST, params.to_query_params(), version)
    response = SuggestSearchApiResponse.from_dict(data)
    logger.debug("Suggest done", query=params.q, results=len(response.results))
    return response

  async def summarize(self, params: WebSearchParams, version: Optional[str] = None) -> SummarizerSearchApiResponse:
    """Search with ``summary=1`` and fetch the summary the search points to.

    Raises:
      ApiError: If the search has no summarizer key, or for error answers
    """
    search = await self.search(replace(params, summary=True), version)
    if search.summarizer is None or not search.summarizer.key:
      raise ApiError(self.provider, "No summarizer found")

    logger.info("Fetching summary", query=params.q)
    data = await self._query(
      SUMMARIZER,
      [("key", search.summarizer.key), ("entity_info", "1")],
      version,
    )
    return SummarizerSearchApiResponse.from_dict(data)

  async def close(self) -> None:
    """Close the HTTP client if this client created it."""
    if self._owns_http_client:
      await self.http_client.close()

  async def __aenter__(self) -> "BraveClient":
    return self

  async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
    await self.close()
