"""
Base settings class for component configuration.

Uses Pydantic Settings for automatic environment variable loading.
Extend this class for application-specific settings.

Example:
    from service_components.config import ComponentSettings

    class Settings(ComponentSettings):
        STRIPE_API_KEY: str = ""

    settings = Settings()
    print(settings.CONSUL_URL)
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from service_components.consul.models import ConsulConfiguration
from service_components.request_logging.log_level import LOG_LEVELS


class ComponentSettings(BaseSettings):
    """
    Settings shared by every component.

    Automatically loads values from environment variables.
    """

    # ==========================================================================
    # Application Settings
    # ==========================================================================
    APP_NAME: Optional[str] = None
    APP_VERSION_FILE: str = "version"
    WORKING_DIRECTORY: str = "."
    ENVIRONMENT: str = "development"  # development, staging, production
    LOG_LEVEL: str = "info"

    # ==========================================================================
    # Consul Settings
    # ==========================================================================
    CONSUL_URL: str = "http://127.0.0.1:8500"
    CONSUL_USERNAME: Optional[str] = None
    CONSUL_PASSWORD: Optional[str] = None

    # ==========================================================================
    # Allow-list Settings
    # ==========================================================================
    ALLOWED_HOSTS: str = ""  # Comma-separated IP addresses
    TRUST_FORWARDED_HEADERS: bool = False

    # ==========================================================================
    # Dependency Settings
    # ==========================================================================
    REDIS_URL: Optional[str] = None
    POSTGRES_URL: Optional[str] = None
    MONGODB_URI: Optional[str] = None
    MONGODB_DATABASE: Optional[str] = None
    PING_INTERVAL_SECONDS: int = 30

    # ==========================================================================
    # Error Responses
    # ==========================================================================
    ERROR_DOCUMENTATION_URI: str = "https://example.com/doc/errors"

    # ==========================================================================
    # Pydantic Settings Configuration
    # ==========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",  # Allow app-specific settings
        case_sensitive=True,
    )

    def get_allowed_hosts(self) -> List[str]:
        """Parse ALLOWED_HOSTS into a list."""
        return [host.strip() for host in self.ALLOWED_HOSTS.split(",") if host.strip()]

    def get_consul_configuration(self) -> ConsulConfiguration:
        """Build the Consul connection configuration."""
        return ConsulConfiguration(
            url=self.CONSUL_URL,
            username=self.CONSUL_USERNAME,
            password=self.CONSUL_PASSWORD,
        )

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT.lower() == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT.lower() == "development"

    def validate_required(self) -> None:
        """
        Validate that settings are consistent.

        Raises:
            ValueError: If any setting is misconfigured
        """
        errors = []

        if self.LOG_LEVEL.lower() not in LOG_LEVELS:
            errors.append(
                f"LOG_LEVEL must be one of: {', '.join(LOG_LEVELS)}"
            )

        if self.PING_INTERVAL_SECONDS <= 0:
            errors.append("PING_INTERVAL_SECONDS must be positive")

        if self.MONGODB_URI and not self.MONGODB_DATABASE:
            errors.append("MONGODB_DATABASE is required when MONGODB_URI is set")

        if bool(self.CONSUL_USERNAME) != bool(self.CONSUL_PASSWORD):
            errors.append("CONSUL_USERNAME and CONSUL_PASSWORD must be set together")

        if errors:
            raise ValueError("Configuration errors:\n- " + "\n- ".join(errors))


@lru_cache
def get_settings() -> ComponentSettings:
    """Return the process-wide settings instance."""
    return ComponentSettings()
