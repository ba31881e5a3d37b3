"""
Process Catalog — Read-only listing of process definitions.

Exposes the registry adapter, the metadata aggregator, and the in-memory
process engine used to run the service standalone.
"""

from process_catalog.adapter import ProcessRegistryAdapter
from process_catalog.aggregator import MetadataAggregator
from process_catalog.engine import (
    InMemoryProcessEngine,
    ProcessDefinition,
    ProcessEngine,
    ProcessHandle,
)
from process_catalog.errors import (
    AggregationError,
    InvalidDescriptorError,
    ProcessCatalogError,
    ProcessNotFoundError,
)
from process_catalog.models import (
    ProcessDescriptor,
    ProcessMetadataView,
    ProcessSummary,
    ResponseMode,
)

__all__ = [
    # Engine collaborator
    "ProcessEngine",
    "ProcessHandle",
    "InMemoryProcessEngine",
    "ProcessDefinition",
    # Core
    "ProcessRegistryAdapter",
    "MetadataAggregator",
    # Models
    "ProcessDescriptor",
    "ProcessSummary",
    "ProcessMetadataView",
    "ResponseMode",
    # Errors
    "ProcessCatalogError",
    "ProcessNotFoundError",
    "AggregationError",
    "InvalidDescriptorError",
]
