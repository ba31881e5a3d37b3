"""
ProcessRegistryAdapter — Wraps the host process engine.

Hides the engine's handle types behind three calls:
  - list_process_ids():        ids currently registered
  - get_process_metadata(id):  engine handle → ProcessDescriptor
  - extract_description(d):    description text with a configured fallback
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping

import structlog

from process_catalog.engine import ProcessEngine
from process_catalog.errors import InvalidDescriptorError, ProcessNotFoundError
from process_catalog.models import ProcessDescriptor

logger = structlog.get_logger(__name__)

DESCRIPTION_KEY = "Description"
DEFAULT_DESCRIPTION = "default description"

# Non-string scalars that render unambiguously with str() (YAML dates included)
_TEXT_SCALARS = (int, float, bool, datetime.date)


class ProcessRegistryAdapter:
    """Read-only access to the process definitions of a `ProcessEngine`."""

    def __init__(
        self,
        engine: ProcessEngine,
        *,
        description_key: str = DESCRIPTION_KEY,
        default_description: str = DEFAULT_DESCRIPTION,
    ):
        self._engine = engine
        self.description_key = description_key
        self.default_description = default_description

    def list_process_ids(self) -> list[str]:
        """Every registered id, in the engine's iteration order, without duplicates."""
        return list(dict.fromkeys(self._engine.process_ids()))

    def get_process_metadata(self, process_id: str) -> ProcessDescriptor:
        """
        Fetch the descriptor of a registered process.

        Raises:
            ProcessNotFoundError: The engine does not know `process_id`.
            InvalidDescriptorError: The engine's metadata is not a mapping.
        """
        try:
            handle = self._engine.process_by_id(process_id)
        except KeyError as e:
            raise ProcessNotFoundError(
                f"Process '{process_id}' not found",
                process_id=process_id,
            ) from e

        metadata = handle.meta_data
        if metadata is None:
            metadata = {}
        if not isinstance(metadata, Mapping):
            raise InvalidDescriptorError(
                f"Process '{process_id}' has malformed metadata",
                process_id=process_id,
                detail=f"expected a mapping, got {type(metadata).__name__}",
            )

        return ProcessDescriptor(id=handle.id, name=handle.name, metadata=dict(metadata))

    def extract_description(self, descriptor: ProcessDescriptor) -> str:
        """Description text from the metadata, or the default when absent or not text."""
        value = descriptor.metadata.get(self.description_key)
        if value is None:
            return self.default_description
        if isinstance(value, str):
            return value
        if isinstance(value, bytes):
            try:
                return value.decode("utf-8")
            except UnicodeDecodeError:
                logger.warning("process_description_undecodable", process_id=descriptor.id)
                return self.default_description
        if isinstance(value, _TEXT_SCALARS):
            return str(value)

        logger.warning(
            "process_description_not_text",
            process_id=descriptor.id,
            value_type=type(value).__name__,
        )
        return self.default_description
