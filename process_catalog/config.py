"""
Service Configuration — Settings for the process catalog.

The settings cover:
  - Service-level settings (port, environment, log level)
  - Where process definitions are loaded from
  - The response contract of the listing endpoint
  - Description extraction defaults
"""

import logging
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from process_catalog.models import ResponseMode


class CatalogSettings(BaseSettings):
    """Service-wide settings, read from PROCESS_CATALOG_* env vars and .env files."""

    model_config = SettingsConfigDict(
        env_prefix="PROCESS_CATALOG_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Service ──────────────────────────────────────────────────────
    service_name: str = "process-catalog"
    environment: Literal["development", "staging", "production"] = "development"
    port: int = 8080
    log_level: str = "INFO"
    json_logs: bool = False
    cors_origins: str = ""

    # ── Process definitions ──────────────────────────────────────────
    processes_dir: str = "processes"

    # ── Listing contract ─────────────────────────────────────────────
    response_mode: ResponseMode = ResponseMode.METADATA
    sort_views: bool = False

    # ── Descriptions ─────────────────────────────────────────────────
    description_key: str = "Description"
    default_description: str = "default description"

    # ── Observability ────────────────────────────────────────────────
    otel_console_export: bool = False

    @property
    def log_level_value(self) -> int:
        """Numeric level for structlog's filtering logger (unknown names map to INFO)."""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO

    @property
    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> CatalogSettings:
    """Singleton accessor — parsed once, cached forever."""
    return CatalogSettings()
