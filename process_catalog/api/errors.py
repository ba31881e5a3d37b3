"""
Error rendering — turns ProcessCatalogError into the JSON error envelope:

  {"error": {"error_code", "message", "detail", "retryable", "http_status", ...}}

4xx errors log at warning level, 5xx at error level.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
import structlog

from process_catalog.errors import ProcessCatalogError

logger = structlog.get_logger(__name__)


async def catalog_error_handler(request: Request, exc: ProcessCatalogError) -> JSONResponse:
    """
    Global exception handler for the process catalog.
    Converts internal, structured exceptions into standard JSON API responses.
    """
    error_data = exc.to_dict()

    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        "api_error_handled",
        path=request.url.path,
        error_code=error_data.get("error_code"),
        message=error_data.get("message"),
        status_code=exc.http_status,
        detail=error_data.get("detail"),
    )

    return JSONResponse(
        status_code=exc.http_status,
        content={"error": error_data}
    )
