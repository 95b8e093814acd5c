"""
Configuration management for Extractly using Pydantic.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Literal

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

DEFAULT_SECRET_KEY = "change-me-in-production"

# --- Nested Configuration Models ---


class AuthConfig(BaseModel):
    """JWT signing and verification settings."""

    secret_key: str = Field(default=DEFAULT_SECRET_KEY, description="Shared HMAC secret for signing tokens.")
    algorithm: Literal["HS256", "HS384", "HS512"] = Field(default="HS256", description="JWT signing algorithm.")
    default_expires_in: str = Field(default="7d", description="Default token lifetime, e.g. 7d, 12h, 30m.")
    bypass: bool = Field(default=False, description="Skip token verification on protected routes.")

    @field_validator("secret_key")
    @classmethod
    def validate_secret(cls, v: str) -> str:
        if not v:
            raise ValueError("secret_key must not be empty")
        return v


class FetcherConfig(BaseModel):
    """Outbound HTTP settings for fetching target pages."""

    timeout: float = Field(default=30.0, gt=0, description="Total request timeout in seconds.")
    max_redirects: int = Field(default=5, ge=0, description="Maximum redirects followed per request.")
    user_agent: str = Field(
        default=(
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
        ),
        description="User-Agent string for HTTP requests.",
    )
    accept: str = Field(default="text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8")
    accept_language: str = Field(default="zh-CN,zh;q=0.9,en;q=0.8")


class WebConfig(BaseModel):
    """Configuration for the HTTP API server."""

    host: str = Field(default="0.0.0.0", description="Host for the web server.")
    port: int = Field(default=3000, description="Port for the web server.")
    cors_origins: List[str] = Field(
        default_factory=list,
        description="Allowed CORS origins. Empty reflects any origin.",
    )
    cors_max_age: int = Field(default=86400, description="Preflight cache lifetime in seconds.")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, v: object) -> object:
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


class MonitoringConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(default=None, description="Path to log file. If None, logs to console.")
    json_logs: bool = Field(default=False, description="Render console logs as JSON.")

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "Extractly"
    version: str = "0.1.0"
    environment: Literal["development", "production", "test"] = "production"
    auth: AuthConfig = Field(default_factory=AuthConfig)
    fetcher: FetcherConfig = Field(default_factory=FetcherConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(
        env_prefix="EXTRACTLY_",
        env_nested_delimiter="__",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def auth_bypassed(self) -> bool:
        """Protected routes skip verification in development or when explicitly configured."""
        return self.auth.bypass or self.environment == "development"

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls()
        # File values take priority; the environment and .env fill in the rest.
        return cls(**yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    for path in (current_dir / "config.yaml", current_dir / "config.yml"):
        if path.exists():
            return path
    return None


def load_config(path: Path | None = None) -> Config:
    """Load from an explicit file, a discovered file, or the environment alone."""
    config_path = path or find_config_file()
    if config_path:
        log.info("Loading configuration from: %s", config_path)
        return Config.from_yaml(config_path)
    return Config()
