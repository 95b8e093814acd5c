"""Configuration models and loaders."""

from .config import (
    DEFAULT_SECRET_KEY,
    AuthConfig,
    Config,
    FetcherConfig,
    MonitoringConfig,
    WebConfig,
    find_config_file,
    load_config,
)

__all__ = [
    "DEFAULT_SECRET_KEY",
    "AuthConfig",
    "Config",
    "FetcherConfig",
    "MonitoringConfig",
    "WebConfig",
    "find_config_file",
    "load_config",
]
