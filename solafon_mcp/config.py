"""
Connector configuration.

Settings are parsed from the environment once at startup and are frozen
afterwards. The resulting object is passed explicitly to the API client,
the search index and the MCP server; nothing below reads the environment
on its own.

Environment variables (all optional with defaults):
    SOLAFON_API_URL                 Base URL of the Solafon REST API.
                                    Default: https://api.solafon.com/api/v1
    SOLAFON_BOT_TOKEN               Default bearer token for proxy calls.
                                    Default: empty (calls go out unauthenticated)
    SOLAFON_HTTP_TIMEOUT            Seconds per outbound request. Default: unset
                                    (no timeout, so long-polling calls may block)
    SOLAFON_LOG_LEVEL               Root log level. Default: INFO
    SOLAFON_SEARCH_CONTEXT_BEFORE   Lines kept above a search match. Default: 1
    SOLAFON_SEARCH_CONTEXT_AFTER    Lines kept below a search match. Default: 2
    SOLAFON_SEARCH_MAX_WINDOWS      Context windows reported per document. Default: 3
"""

from functools import lru_cache
from typing import Annotated, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_API_URL = "https://api.solafon.com/api/v1"

# First occurrence stripped from the API URL to reach the service root (/health).
API_PREFIX = "/api/v1"


class ConnectorSettings(BaseSettings):
    """
    Process-wide connector settings.

    Fails fast at startup if a value is malformed. The bot token is kept
    as a SecretStr so it never shows up in reprs or log lines.
    """

    # ---------------------------------------------------------------------
    # Remote service
    # ---------------------------------------------------------------------

    api_url: Annotated[
        str,
        Field(
            default=DEFAULT_API_URL,
            min_length=1,
            description=(
                "Base URL of the Solafon REST API. Tool paths are appended "
                "to it verbatim."
            ),
        ),
    ]

    bot_token: Annotated[
        SecretStr,
        Field(
            default=SecretStr(""),
            description="Default bearer token, redacted from logs",
        ),
    ]

    http_timeout: Annotated[
        Optional[float],
        Field(
            default=None,
            gt=0,
            description="Per-request timeout in seconds; unset waits indefinitely",
        ),
    ]

    # ---------------------------------------------------------------------
    # Logging
    # ---------------------------------------------------------------------

    log_level: Annotated[
        str,
        Field(default="INFO", description="Root logger level"),
    ]

    # ---------------------------------------------------------------------
    # Documentation search
    # ---------------------------------------------------------------------

    search_context_before: Annotated[
        int,
        Field(default=1, ge=0, description="Lines shown above a matching line"),
    ]

    search_context_after: Annotated[
        int,
        Field(default=2, ge=0, description="Lines shown below a matching line"),
    ]

    search_max_windows: Annotated[
        int,
        Field(default=3, ge=1, description="Context windows reported per document"),
    ]

    model_config = SettingsConfigDict(
        env_prefix="SOLAFON_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                f"SOLAFON_API_URL must be an http(s) URL, got '{v}'"
            )
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if level not in allowed:
            raise ValueError(
                f"Unsupported SOLAFON_LOG_LEVEL '{v}'. "
                f"Allowed values: {sorted(allowed)}"
            )
        return level

    @property
    def default_token(self) -> str:
        return self.bot_token.get_secret_value()

    @property
    def health_url(self) -> str:
        """Service health endpoint, which lives outside the versioned API prefix."""
        return self.api_url.replace(API_PREFIX, "", 1) + "/health"


@lru_cache(maxsize=1)
def get_settings() -> ConnectorSettings:
    """
    Settings provider for the connector entry point.

    Tests construct ConnectorSettings directly instead of going through
    this cache.
    """
    return ConnectorSettings()
