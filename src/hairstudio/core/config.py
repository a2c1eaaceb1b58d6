"""Configuration management for Hair Studio.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the HAIRSTUDIO_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (HAIRSTUDIO_* prefix, then the bare legacy names)
2. .env file in the project root
3. Default values defined in HairStudioConfig

The three deployment variables of the original Node server (``PORT``,
``ACCESS_KEY`` and ``GEMINI_API_KEY``) are still honoured as aliases so an
existing ``.env`` keeps working.

Example .env file:
    HAIRSTUDIO_ACCESS_KEY=let-me-in
    GEMINI_API_KEY=AIza...
    HAIRSTUDIO_SERVER_PORT=3000
    HAIRSTUDIO_LOG_FILE=logs/server.log

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from hairstudio.core.config import config

    print(config.server_port)
    print(config.gemini_model)

Access Gate
-----------
``access_key`` has no default.  When it is unset (or empty) the access gate
fails closed: every ``POST /api/verify-access`` is answered with 401.

Provider Credentials
--------------------
``gemini_api_key`` also has no default.  The server still starts without it,
but every generation request fails at call time with a provider error.
"""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Prebuilt client bundle shipped inside the package.
DEFAULT_STATIC_DIR = Path(__file__).resolve().parents[1] / "static"


class HairStudioConfig(BaseSettings):
    """Main configuration for Hair Studio.

    Attributes
    ----------
    Server Settings:
        server_host : str
            Bind address for uvicorn (0.0.0.0 for local network)
        server_port : int
            Port to listen on (``PORT`` is accepted as an alias)

    Access Gate:
        access_key : str | None
            Shared secret required by ``/api/verify-access``.  Unset means
            nobody is let in.

    Generation Provider:
        gemini_api_key : str | None
            API key for the Google Gemini API
        gemini_model : str
            Gemini model used for image generation

    Paths:
        static_dir : Path
            Directory holding the client bundle (``index.html`` and assets)

    Logging:
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
            Level for the application logger
        log_to_stdout : bool
            Write log lines to standard output
        log_file : Path | None
            Append log lines to this file as well

    Examples
    --------
    Create a custom configuration:

        >>> custom_config = HairStudioConfig(
        ...     access_key="let-me-in",
        ...     log_to_stdout=False,
        ...     log_file="server.log",
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="HAIRSTUDIO_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=3000,
        description="Server port",
        ge=1,
        le=65535,
        validation_alias=AliasChoices("HAIRSTUDIO_SERVER_PORT", "PORT"),
    )

    # Access gate
    access_key: str | None = Field(
        default=None,
        description="Shared access secret (unset = gate closed)",
        validation_alias=AliasChoices("HAIRSTUDIO_ACCESS_KEY", "ACCESS_KEY"),
    )

    # Generation provider
    gemini_api_key: str | None = Field(
        default=None,
        description="Google Gemini API key",
        validation_alias=AliasChoices("HAIRSTUDIO_GEMINI_API_KEY", "GEMINI_API_KEY"),
    )
    gemini_model: str = Field(
        default="gemini-3-pro-image-preview",
        description="Gemini model ID used for image generation",
    )

    # Paths
    static_dir: Path = Field(
        default=DEFAULT_STATIC_DIR,
        description="Directory containing the prebuilt client bundle",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Application log level",
    )
    log_to_stdout: bool = Field(
        default=True,
        description="Write log lines to standard output",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional file that log lines are appended to",
    )

    @property
    def access_gate_enabled(self) -> bool:
        """True when a non-empty access key is configured."""
        return bool(self.access_key)


# Global configuration instance
# Loaded from environment variables (HAIRSTUDIO_* prefix or legacy names) and .env.
config = HairStudioConfig()
