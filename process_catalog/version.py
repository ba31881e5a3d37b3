"""
Single source of truth for the service version.

Reads from pyproject.toml at import time and caches.
All other files import VERSION from here instead of hardcoding.
"""

from __future__ import annotations

from pathlib import Path

__all__ = ["VERSION", "APP_NAME"]

APP_NAME = "ProcessCatalog"

_FALLBACK_VERSION = "1.0.0"


def _read_version() -> str:
    """Read version directly from pyproject.toml (avoids stale pip cache)."""
    toml_path = Path(__file__).resolve().parent.parent / "pyproject.toml"
    if not toml_path.exists():
        return _FALLBACK_VERSION
    for line in toml_path.read_text().splitlines():
        if line.strip().startswith("version"):
            # Parse: version = "1.0.0"
            return line.split("=", 1)[1].strip().strip('"').strip("'")
    return _FALLBACK_VERSION


VERSION = _read_version()
