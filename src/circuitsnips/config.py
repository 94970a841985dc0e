"""Configuration management using Pydantic Settings."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class TransportType(str, Enum):
    STDIO = "stdio"
    SSE = "sse"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class CircuitSnipsConfig(BaseSettings):
    """Server configuration, loaded from ``CIRCUITSNIPS_*`` environment variables."""

    model_config = {"env_prefix": "CIRCUITSNIPS_", "env_file": ".env", "extra": "ignore"}

    transport: TransportType = Field(
        default=TransportType.STDIO,
        description="MCP transport: stdio or sse",
    )
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Path to log file. Defaults to ~/.config/.circuitsnips/logs/server.log",
    )
    sse_host: str = Field(default="127.0.0.1", description="SSE server host")
    sse_port: int = Field(default=8765, description="SSE server port")
    max_document_bytes: int = Field(
        default=5 * 1024 * 1024,
        description="Largest schematic text a tool accepts, in UTF-8 bytes",
    )
    max_document_lines: int = Field(
        default=200_000,
        description="Most lines a tool accepts in one schematic text",
    )
    preview_ttl_seconds: int = Field(
        default=3600,
        description="How long a preview stays retrievable",
    )
    preview_max_entries: int = Field(
        default=256,
        description="Previews kept before the oldest is evicted",
    )
    serve_cache_seconds: int = Field(
        default=3600,
        description="Cache-Control max-age for served schematics; 0 disables caching",
    )

    @field_validator("max_document_bytes", "max_document_lines", "preview_max_entries")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @field_validator("preview_ttl_seconds", "serve_cache_seconds")
    @classmethod
    def _not_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must not be negative")
        return value

    def get_data_dir(self) -> Path:
        """Get the platform-appropriate data directory."""
        if os.name == "nt":
            base = Path(os.environ.get("USERPROFILE", Path.home()))
        else:
            base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
        data_dir = base / ".circuitsnips"
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_log_dir(self) -> Path:
        log_dir = self.get_data_dir() / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir

    def get_log_file_path(self) -> Path:
        """Resolve the log file path."""
        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            return self.log_file
        return self.get_log_dir() / "server.log"
