"""HTTP client infrastructure for the API clients."""

from brave_opus.http.client import HTTPClient, map_status_error

__all__ = [
    "HTTPClient",
    "map_status_error",
]
