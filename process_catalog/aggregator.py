"""
MetadataAggregator — Turns the current registry state into a client listing.

Algorithm:
  1. Fetch the id sequence from the adapter
  2. Fetch each descriptor; ids that vanish in between are skipped
  3. IDS mode → ids sorted by codepoint
     SUMMARY / METADATA mode → one view per surviving descriptor, in
     registry order (or sorted by id when `sort_views` is set)

Any failure other than a vanished id becomes an AggregationError and no
partial listing is returned.
"""

from __future__ import annotations

import structlog

from process_catalog.adapter import ProcessRegistryAdapter
from process_catalog.errors import AggregationError, ProcessCatalogError, ProcessNotFoundError
from process_catalog.models import (
    ProcessDescriptor,
    ProcessMetadataView,
    ProcessSummary,
    ResponseMode,
)
from process_catalog.observability import PROCESSES_SKIPPED, trace_aggregation

logger = structlog.get_logger(__name__)


class MetadataAggregator:
    """
    Builds process listings from a `ProcessRegistryAdapter`.

    Usage:
        aggregator = MetadataAggregator(adapter, mode=ResponseMode.METADATA)
        views = aggregator.collect()
    """

    def __init__(
        self,
        adapter: ProcessRegistryAdapter,
        *,
        mode: ResponseMode = ResponseMode.METADATA,
        sort_views: bool = False,
    ):
        self._adapter = adapter
        self.mode = ResponseMode(mode)
        self.sort_views = sort_views

    # ── Listing ──────────────────────────────────────────────────────

    def collect(self) -> list[str] | list[ProcessSummary] | list[ProcessMetadataView]:
        """Build the listing in the configured mode."""
        with trace_aggregation(self.mode.value) as span:
            try:
                if self.mode is ResponseMode.IDS:
                    result = self.list_ids()
                else:
                    result = self.list_views()
            except AggregationError:
                raise
            except Exception as e:
                raise AggregationError("Failed to build process listing", detail=str(e)) from e

            span.set_attribute("catalog.count", len(result))

        logger.info("process_listing_completed", mode=self.mode.value, count=len(result))
        return result

    def list_ids(self) -> list[str]:
        """Ids of every live process, sorted by codepoint."""
        return sorted(d.id for d in self._fetch_descriptors())

    def list_views(self) -> list[ProcessSummary] | list[ProcessMetadataView]:
        """One view per live process, in registry order unless `sort_views` is set."""
        views = [self._build_view(d) for d in self._fetch_descriptors()]
        if self.sort_views:
            views.sort(key=lambda v: v.id)
        return views

    # ── Single process ───────────────────────────────────────────────

    def describe(self, process_id: str) -> ProcessMetadataView:
        """
        Full view of a single process.

        Raises:
            ProcessNotFoundError: `process_id` is not registered.
            AggregationError: Any other failure reading the process.
        """
        try:
            descriptor = self._adapter.get_process_metadata(process_id)
            return ProcessMetadataView(
                id=descriptor.id,
                name=descriptor.name,
                description=self._adapter.extract_description(descriptor),
            )
        except ProcessCatalogError:
            raise
        except Exception as e:
            raise AggregationError(
                f"Failed to describe process '{process_id}'", detail=str(e)
            ) from e

    # ── Internals ────────────────────────────────────────────────────

    def _fetch_descriptors(self) -> list[ProcessDescriptor]:
        descriptors = []
        for process_id in self._adapter.list_process_ids():
            try:
                descriptors.append(self._adapter.get_process_metadata(process_id))
            except ProcessNotFoundError:
                # Unregistered between listing and lookup
                PROCESSES_SKIPPED.inc()
                logger.debug("process_vanished_during_listing", process_id=process_id)
        return descriptors

    def _build_view(self, descriptor: ProcessDescriptor) -> ProcessSummary | ProcessMetadataView:
        if self.mode is ResponseMode.SUMMARY:
            return ProcessSummary(id=descriptor.id, name=descriptor.name)
        return ProcessMetadataView(
            id=descriptor.id,
            name=descriptor.name,
            description=self._adapter.extract_description(descriptor),
        )
