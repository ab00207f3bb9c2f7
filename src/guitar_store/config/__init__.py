"""Configuration module."""

from guitar_store.config.configuration import (
    AppConfig,
    ConfigurationError,
    DatabaseConfig,
    FAQConfig,
    LoggingConfig,
    ServerConfig,
    StorefrontConfig,
    configure_logging,
    get_config,
    load_config,
    reset_config,
)

__all__ = [
    "AppConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "FAQConfig",
    "LoggingConfig",
    "ServerConfig",
    "StorefrontConfig",
    "configure_logging",
    "get_config",
    "load_config",
    "reset_config",
]
