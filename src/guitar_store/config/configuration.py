"""Configuration module for the BF Guitars store.

Loads settings from environment-specific config files:
- APP_ENV=dev  → config_dev.yaml
- APP_ENV=test → config_test.yaml
- Default      → config.yaml

Deployment overrides (PORT, GUITAR_DB_PATH, FAQ_PATH) are read from the
environment, with a .env file loaded first.
Fails fast with clear error messages if configuration is invalid.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


def _get_project_root() -> Path:
    """Get the project root directory (where config.yaml lives)."""
    # Navigate from src/guitar_store/config/ up to project root
    return Path(__file__).parent.parent.parent.parent


def _get_config_filename() -> str:
    """Get config filename based on APP_ENV environment variable.

    Returns:
        Config filename:
        - APP_ENV=dev  → config_dev.yaml
        - APP_ENV=test → config_test.yaml
        - Default      → config.yaml
    """
    app_env = os.environ.get("APP_ENV", "").lower()

    if app_env == "dev":
        return "config_dev.yaml"
    elif app_env == "test":
        return "config_test.yaml"
    else:
        return "config.yaml"


def _load_yaml_config() -> dict:
    """Load configuration from environment-specific config file."""
    config_filename = _get_config_filename()
    config_path = _get_project_root() / config_filename

    if not config_path.exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}. "
            f"Set APP_ENV to 'dev' or 'test', or create {config_filename}."
        )

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def _get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Get optional environment variable with default."""
    return os.environ.get(key, default)


def _as_int(value, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"'{name}' must be an integer, got {value!r}")


def _as_float(value, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"'{name}' must be a number, got {value!r}")


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server configuration."""
    host: str
    port: int
    api_base: str  # shared prefix of every API route, e.g. "/guitar/"


@dataclass(frozen=True)
class DatabaseConfig:
    """Database configuration."""
    path: str
    create_schema: bool


@dataclass(frozen=True)
class FAQConfig:
    """FAQ text source configuration."""
    path: str


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""
    level: str


@dataclass(frozen=True)
class StorefrontConfig:
    """Storefront client configuration."""
    base_url: str
    items_per_row: int
    loading_time: float  # seconds before notices and forms reset


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration container."""
    server: ServerConfig
    database: DatabaseConfig
    faq: FAQConfig
    logging: LoggingConfig
    storefront: StorefrontConfig


def load_config() -> AppConfig:
    """
    Load and validate all application configuration.

    Loads from the YAML config file for settings and the environment for
    deployment overrides. Fails fast if configuration is invalid.

    Returns:
        AppConfig: Validated application configuration.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    # Load environment variables from .env file
    load_dotenv()

    yaml_config = _load_yaml_config()

    # Build Server config
    server_section = yaml_config.get("server", {})
    api_base = server_section.get("api_base", "/guitar/")
    if not (api_base.startswith("/") and api_base.endswith("/")):
        raise ConfigurationError(f"'server.api_base' must start and end with '/', got {api_base!r}")

    server_config = ServerConfig(
        host=server_section.get("host", "0.0.0.0"),
        port=_as_int(_get_optional_env("PORT", server_section.get("port", 8000)), "server.port"),
        api_base=api_base,
    )

    # Build Database config
    db_section = yaml_config.get("database", {})

    database_config = DatabaseConfig(
        path=_get_optional_env("GUITAR_DB_PATH", db_section.get("path", "bf_guitars.db")),
        create_schema=bool(db_section.get("create_schema", True)),
    )

    # Build FAQ config
    faq_section = yaml_config.get("faq", {})

    faq_config = FAQConfig(
        path=_get_optional_env("FAQ_PATH", faq_section.get("path", "info/faq.txt")),
    )

    # Build Logging config
    logging_section = yaml_config.get("logging", {})
    level = str(logging_section.get("level", "INFO")).upper()
    if level not in logging.getLevelNamesMapping():
        raise ConfigurationError(f"Unknown logging level: {level!r}")

    logging_config = LoggingConfig(level=level)

    # Build Storefront config
    storefront_section = yaml_config.get("storefront", {})
    items_per_row = _as_int(storefront_section.get("items_per_row", 3), "storefront.items_per_row")
    loading_time = _as_float(storefront_section.get("loading_time", 3.0), "storefront.loading_time")
    if items_per_row < 1:
        raise ConfigurationError("'storefront.items_per_row' must be at least 1")
    if loading_time < 0:
        raise ConfigurationError("'storefront.loading_time' must not be negative")

    storefront_config = StorefrontConfig(
        base_url=storefront_section.get("base_url", f"http://localhost:{server_config.port}"),
        items_per_row=items_per_row,
        loading_time=loading_time,
    )

    return AppConfig(
        server=server_config,
        database=database_config,
        faq=faq_config,
        logging=logging_config,
        storefront=storefront_config,
    )


# Module-level singleton for convenience
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the application configuration singleton.

    Lazy-loads configuration on first access.
    Config file is selected based on APP_ENV environment variable.

    Returns:
        AppConfig: Application configuration.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the config singleton. Useful for testing."""
    global _config
    _config = None


def configure_logging(logging_config: LoggingConfig) -> None:
    """Configure root logging from the logging section."""
    logging.basicConfig(
        level=logging_config.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
