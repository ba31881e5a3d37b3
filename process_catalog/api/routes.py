"""
Management Routes — Read-only view of the registered process definitions.

Endpoint summary:
  GET /management/processes/               — All processes (ids, summaries or metadata)
  GET /management/processes/{process_id}   — One process with its description

The listing shape is chosen by the `response_mode` setting. Failures are
rendered by the global ProcessCatalogError handler.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends

from process_catalog.aggregator import MetadataAggregator
from process_catalog.api.dependencies import get_aggregator
from process_catalog.models import ProcessMetadataView

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/management/processes", tags=["Processes"])


@router.get("/", response_model=None)
async def list_processes(aggregator: MetadataAggregator = Depends(get_aggregator)):
    """
    List every registered process.

    Returns a JSON array: sorted ids in `ids` mode, `{id, name}` objects in
    `summary` mode, `{id, name, description}` objects in `metadata` mode.
    """
    return aggregator.collect()


@router.get("/{process_id}", response_model=ProcessMetadataView)
async def get_process(process_id: str, aggregator: MetadataAggregator = Depends(get_aggregator)):
    """Full metadata of a single process. Unknown ids return 404."""
    return aggregator.describe(process_id)
