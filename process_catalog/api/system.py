from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel

from process_catalog.api.dependencies import get_aggregator, get_engine
from process_catalog.aggregator import MetadataAggregator
from process_catalog.engine import ProcessEngine
from process_catalog.observability import get_metrics, get_metrics_content_type
from process_catalog.version import APP_NAME, VERSION

router = APIRouter(tags=["System"])


class HealthResponse(BaseModel):
    status: str
    version: str
    service: str
    response_mode: str
    processes_registered: int


@router.get("/health", response_model=HealthResponse)
async def health(
    engine: ProcessEngine = Depends(get_engine),
    aggregator: MetadataAggregator = Depends(get_aggregator),
):
    return HealthResponse(
        status="healthy",
        version=VERSION,
        service=APP_NAME,
        response_mode=aggregator.mode.value,
        processes_registered=len(list(engine.process_ids())),
    )


@router.get("/")
async def root():
    return {
        "api": "Process Catalog API",
        "version": VERSION,
        "status": "online"
    }


@router.get("/metrics")
async def metrics():
    return Response(content=get_metrics(), media_type=get_metrics_content_type())
