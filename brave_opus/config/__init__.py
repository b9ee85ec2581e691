"""Configuration management for the API clients."""

from .loader import ConfigLoader
from .models import AppConfig, ServiceConfig

__all__ = [
    "ConfigLoader",
    "ServiceConfig",
    "AppConfig",
]
