"""
Process Catalog — Read-only listing of registered process definitions.

Single entry point for the service. The app factory wires the components
explicitly:

  InMemoryProcessEngine (seeded from processes/*.yaml)
    → ProcessRegistryAdapter
      → MetadataAggregator
        → GET /management/processes/

Run with:
  uvicorn app:app --reload --port 8080
"""

from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from process_catalog.adapter import ProcessRegistryAdapter
from process_catalog.aggregator import MetadataAggregator
from process_catalog.api.errors import catalog_error_handler
from process_catalog.api.middleware import otel_tracing_middleware
from process_catalog.api.routes import router as processes_router
from process_catalog.api.system import router as system_router
from process_catalog.config import CatalogSettings, get_settings
from process_catalog.engine import InMemoryProcessEngine, ProcessEngine
from process_catalog.errors import ProcessCatalogError
from process_catalog.logging import setup_logging
from process_catalog.observability import setup_tracing
from process_catalog.version import VERSION

logger = structlog.get_logger(__name__)


# ── Lifespan ─────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "service_ready",
        response_mode=app.state.aggregator.mode.value,
    )
    yield
    logger.info("service_shutdown_complete")


# ── OpenAPI Tag Metadata ─────────────────────────────────────────────
OPENAPI_TAGS = [
    {
        "name": "Processes",
        "description": "Read-only listing of the process definitions registered "
        "in the engine.",
    },
    {
        "name": "System",
        "description": "Health checks, Prometheus metrics, and service info.",
    },
]


def create_app(
    settings: CatalogSettings | None = None,
    engine: ProcessEngine | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Service settings. Defaults to the cached environment settings.
        engine: Process engine to read from. Defaults to an in-memory engine
                seeded from `settings.processes_dir`.
    """
    settings = settings or get_settings()

    setup_logging(
        level=settings.log_level_value,
        json_output=settings.json_logs,
        service_name=settings.service_name,
    )
    setup_tracing(service_name=settings.service_name, console_export=settings.otel_console_export)

    if engine is None:
        engine = InMemoryProcessEngine.from_directory(settings.processes_dir)

    adapter = ProcessRegistryAdapter(
        engine,
        description_key=settings.description_key,
        default_description=settings.default_description,
    )
    aggregator = MetadataAggregator(
        adapter,
        mode=settings.response_mode,
        sort_views=settings.sort_views,
    )

    app = FastAPI(
        title="Process Catalog",
        description="Read-only listing of workflow process definitions.",
        version=VERSION,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.aggregator = aggregator

    # ── CORS ─────────────────────────────────────────────────────────
    # Disabled unless PROCESS_CATALOG_CORS_ORIGINS lists origins.
    if settings.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.allowed_origins,
            allow_credentials=True,
            allow_methods=["GET"],
            allow_headers=["*"],
        )

    app.add_exception_handler(ProcessCatalogError, catalog_error_handler)

    app.include_router(system_router)
    app.include_router(processes_router)

    app.add_middleware(BaseHTTPMiddleware, dispatch=otel_tracing_middleware)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("app:app", host="0.0.0.0", port=get_settings().port, reload=True)
