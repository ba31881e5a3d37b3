"""
Structured Error Taxonomy — Typed exceptions for the process catalog.

Design principles:
  - Every error carries `retryable` + `error_code` for automated decisions
  - HTTP-safe: each class maps to a recommended status code
  - Structured logging friendly: all errors serialize cleanly to JSON
"""

from __future__ import annotations

__all__ = [
    "ProcessCatalogError",
    "ProcessNotFoundError",
    "AggregationError",
    "InvalidDescriptorError",
]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  Base
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class ProcessCatalogError(Exception):
    """Root exception for the process catalog.

    Attributes:
        retryable: If True, the caller should consider retrying the operation.
        error_code: Machine-readable code for dashboards and alerting.
        http_status: Suggested HTTP status code for API responses.
    """

    retryable: bool = False
    error_code: str = "PROCESS_CATALOG_ERROR"
    http_status: int = 500

    def __init__(self, message: str, *, detail: str | None = None):
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict:
        """Serialize for structured logging and API responses."""
        return {
            "error_code": self.error_code,
            "message": str(self),
            "detail": self.detail,
            "retryable": self.retryable,
            "http_status": self.http_status,
        }


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  Registry Layer — Lookups against the process engine
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class ProcessNotFoundError(ProcessCatalogError):
    """The engine does not (or no longer) know the requested process id."""

    error_code = "PROCESS_NOT_FOUND"
    http_status = 404

    def __init__(self, message: str, *, process_id: str = "", **kwargs):
        self.process_id = process_id
        super().__init__(message, **kwargs)

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["process_id"] = self.process_id
        return d


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#  Aggregation Layer — Building the client-facing listing
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class AggregationError(ProcessCatalogError):
    """Listing could not be built; no partial result is returned."""

    error_code = "AGGREGATION_ERROR"
    http_status = 500


class InvalidDescriptorError(AggregationError):
    """The engine returned a process whose metadata is malformed."""

    error_code = "INVALID_DESCRIPTOR"

    def __init__(self, message: str, *, process_id: str = "", **kwargs):
        self.process_id = process_id
        super().__init__(message, **kwargs)

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["process_id"] = self.process_id
        return d
