"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (SEARCHTABLE_ prefix)
  3. Default values
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

_KEEP_ALIVE_PATTERN = re.compile(r"^\d+(nanos|micros|ms|s|m|h|d)$")


class ConnectionSettings(BaseModel):
    """Search store connection configuration."""

    client: str = Field(default="http", description="Registered store client name: http, opensearch")
    metadata_uri: str | None = Field(default=None, description="Table description source for the metadata layer")
    host_address: str = Field(default="localhost", description="Store host")
    port: int = Field(default=9200, ge=1, le=65535, description="Store HTTP port")
    scheme: str = Field(default="http", description="URL scheme: http or https")
    schema_name: str = Field(default="default", description="Schema exposed to the query engine")
    username: str | None = Field(default=None, description="Authentication username")
    password: str | None = Field(default=None, description="Authentication password")
    verify_certs: bool = Field(default=True, description="Verify TLS certificates")
    timeout: float = Field(default=30.0, gt=0, description="Per-request timeout in seconds")

    @field_validator("host_address", "schema_name")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("scheme")
    @classmethod
    def _check_scheme(cls, v: str) -> str:
        v = v.lower()
        if v not in ("http", "https"):
            raise ValueError(f"unsupported scheme '{v}'")
        return v

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host_address}:{self.port}"

    def client_kwargs(self) -> dict[str, Any]:
        """Constructor arguments for the configured store client."""
        kwargs: dict[str, Any] = {
            "username": self.username,
            "password": self.password,
            "verify_certs": self.verify_certs,
            "timeout": self.timeout,
        }
        if self.client == "opensearch":
            kwargs["hosts"] = [self.base_url]
        else:
            kwargs["base_url"] = self.base_url
        return kwargs


class ScrollSettings(BaseModel):
    """Scroll paging configuration."""

    page_size: int = Field(default=1000, ge=1, le=10000, description="Hits per scroll page")
    keep_alive: str = Field(default="1m", description="Scroll context expiry, e.g. 30s, 1m, 5m")
    materialize: bool = Field(
        default=True,
        description="Drain the whole partition before exposing the first row",
    )

    @field_validator("keep_alive")
    @classmethod
    def _check_keep_alive(cls, v: str) -> str:
        if not _KEEP_ALIVE_PATTERN.match(v):
            raise ValueError(f"invalid time value '{v}', expected e.g. 30s or 1m")
        return v


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root settings.

    Configuration is loaded from environment variables with the SEARCHTABLE_ prefix.
    Nested settings use double underscores: SEARCHTABLE_CONNECTION__PORT=9201

    Example:
        SEARCHTABLE_CONNECTION__HOST_ADDRESS=es.internal
        SEARCHTABLE_CONNECTION__CLIENT=opensearch
        SEARCHTABLE_SCROLL__PAGE_SIZE=500
    """

    model_config = {
        "env_prefix": "SEARCHTABLE_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    connection: ConnectionSettings = Field(default_factory=ConnectionSettings)
    scroll: ScrollSettings = Field(default_factory=ScrollSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file override environment variables.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
