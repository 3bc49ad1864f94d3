"""
Versioned User API: Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.

Design Decision:
    API versioning behaviour (default version, reporting, deprecation) lives
    here rather than in the routers so the same build can be deployed with a
    version deprecated or the default changed, without a code change.
"""

import re

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator
from typing import List


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Attributes are grouped by concern for readability.
    """

    # ── Environment ───────────────────────────────────────────────────────
    # What: Deployment environment name
    # Effect: "development" mounts the per-version Swagger documentation
    environment: str = Field(default="development")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    # ── API Versioning ────────────────────────────────────────────────────
    # What: Version used when the request does not name one
    default_api_version: str = Field(default="1")

    @field_validator("default_api_version")
    @classmethod
    def validate_default_api_version(cls, v: str) -> str:
        """Ensures the default version is major[.minor], e.g. "1" or "2.0"."""
        v = v.strip()
        if not re.fullmatch(r"[0-9]+(\.[0-9]+)?", v):
            raise ValueError(f"Invalid default_api_version '{v}'. Expected major[.minor]")
        return v

    # What: Whether an unversioned request falls back to default_api_version
    # When False: unversioned requests to versioned paths are rejected with 400
    assume_default_version_when_unspecified: bool = Field(default=True)

    # What: Emit api-supported-versions / api-deprecated-versions headers
    report_api_versions: bool = Field(default=True)

    # What: Versions still served but advertised as deprecated
    # Format: Comma-separated versions, e.g. "1" or "1, 1.5"
    deprecated_api_versions: str = Field(default="")

    # What: Optional request header read in addition to the api-version query param
    # Empty: header versioning disabled (query string only)
    api_version_header: str = Field(default="")

    @property
    def deprecated_api_versions_list(self) -> List[str]:
        return [v.strip() for v in self.deprecated_api_versions.split(",") if v.strip()]

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs (parsed by property below)
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """
        What: Splits comma-separated CORS origins into a list.
        Why property: CORS middleware expects a list, but env vars are strings.
        """
        return [origin.strip() for origin in self.cors_origins.split(",")]

    # What: Redirect plain HTTP requests to HTTPS
    # Why off by default: TLS is usually terminated by the reverse proxy
    https_redirect: bool = Field(default=False)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # What: Controls verbosity of application logging
    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # LOG_LEVEL and log_level both work
    }


# Singleton instance, imported throughout the application
settings = Settings()
