"""
Catalog Models — Pydantic models for process metadata.

Defines the data structures that flow from the engine to the client:
  - ProcessDescriptor: Read-only record of a registered process definition
  - ProcessSummary: Reduced view ({id, name})
  - ProcessMetadataView: Full view ({id, name, description})
  - ResponseMode: Which shape the listing endpoint returns
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ResponseMode(str, enum.Enum):
    """Shapes the listing endpoint can return."""

    IDS = "ids"  # Bare ids, sorted
    SUMMARY = "summary"  # {id, name}
    METADATA = "metadata"  # {id, name, description}


# ── Engine-side record ───────────────────────────────────────────────


class ProcessDescriptor(BaseModel):
    """
    Engine-held record of a process definition.

    Built by the registry adapter from an engine handle. The metadata
    mapping is the free-form annotation set written by the process author;
    it is copied at construction and exposed read-only.

    Hashes by (id, name) since metadata values may be unhashable.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    metadata: Mapping[str, Any] = Field(default_factory=dict, validate_default=True)

    @field_validator("metadata", mode="after")
    @classmethod
    def _freeze_metadata(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    def __hash__(self) -> int:
        return hash((self.__class__, self.id, self.name))


# ── Client-facing views ──────────────────────────────────────────────


class ProcessSummary(BaseModel):
    """Reduced view of a process: identifier and display name.

    Frozen, so instances compare and hash by value.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)


class ProcessMetadataView(ProcessSummary):
    """Full view of a process, including its description."""

    description: str
