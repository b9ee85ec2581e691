"""Configuration data models for the API clients."""

from dataclasses import dataclass, field
from typing import Any, Optional

from ..exceptions import ConfigurationError

KNOWN_SERVICES = ("anthropic", "brave")


@dataclass
class ServiceConfig:
    """Configuration for a single remote service."""

    name: str
    api_key: str
    base_url: Optional[str] = None
    timeout: float = 30
    api_version: Optional[str] = None
    options: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate service configuration after initialization."""
        if not self.name:
            raise ConfigurationError("Service name cannot be empty")

        if not self.api_key:
            raise ConfigurationError(f"API key is required for service '{self.name}'")

        if self.timeout <= 0:
            raise ConfigurationError(
                f"Timeout must be positive for service '{self.name}'"
            )

        if self.base_url and not self.base_url.startswith(("https://", "http://")):
            raise ConfigurationError(
                f"Base URL for service '{self.name}' must be an http(s) URL",
                field=f"services.{self.name}.base_url",
            )


@dataclass
class AppConfig:
    """Complete configuration with all services."""

    defaults: dict[str, Any]
    services: dict[str, ServiceConfig]

    def get(self, name: str) -> ServiceConfig:
        """Return the configuration of service ``name``.

        Raises:
          ConfigurationError: If the service is not configured
        """
        if name not in self.services:
            raise ConfigurationError(
                f"Service '{name}' is not configured", field=f"services.{name}"
            )
        return self.services[name]

    @classmethod
    def from_dict(
        cls, config_dict: dict[str, Any], config_file: str = ""
    ) -> "AppConfig":
        """Create AppConfig from dictionary.

        Args:
          config_dict: Configuration dictionary
          config_file: Source file path for error reporting

        Returns:
          AppConfig instance

        Raises:
          ConfigurationError: If configuration is invalid
        """
        defaults = config_dict.get("defaults", {})
        if not isinstance(defaults, dict):
            raise ConfigurationError(
                "Defaults section must be a dictionary",
                config_file=config_file,
                field="defaults",
            )

        services_dict = config_dict.get("services", {})
        if not isinstance(services_dict, dict):
            raise ConfigurationError(
                "Services section must be a dictionary",
                config_file=config_file,
                field="services",
            )

        if not services_dict:
            raise ConfigurationError(
                "At least one service must be configured",
                config_file=config_file,
                field="services",
            )

        services = {}
        for service_name, service_config in services_dict.items():
            if service_name not in KNOWN_SERVICES:
                raise ConfigurationError(
                    f"Unknown service '{service_name}', expected one of {', '.join(KNOWN_SERVICES)}",
                    config_file=config_file,
                    field=f"services.{service_name}",
                )

            if not isinstance(service_config, dict):
                raise ConfigurationError(
                    f"Service '{service_name}' configuration must be a dictionary",
                    config_file=config_file,
                    field=f"services.{service_name}",
                )

            try:
                merged_config = {**defaults, **service_config}
                merged_config["name"] = service_name

                services[service_name] = ServiceConfig(**merged_config)
            except TypeError as e:
                raise ConfigurationError(
                    f"Invalid configuration for service '{service_name}': {e}",
                    config_file=config_file,
                    field=f"services.{service_name}",
                )

        return cls(defaults=defaults, services=services)
