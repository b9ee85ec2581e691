"""Client for the Brave Search APIs."""

from .client import Auth, BraveClient
from .models import (
    SearchResult,
    SuggestSearchApiResponse,
    SummarizerSearchApiResponse,
    WebSearchApiResponse,
)
from .params import SuggestSearchParams, WebSearchParams

__all__ = [
    "Auth",
    "BraveClient",
    "SearchResult",
    "SuggestSearchApiResponse",
    "SuggestSearchParams",
    "SummarizerSearchApiResponse",
    "WebSearchApiResponse",
    "WebSearchParams",
]
